"""
Submission Preparator

Top-level dispatcher for the eight pipeline operations. Every call returns an
OperationResult; nothing raises out of execute(). Messages name the operation
and, on failure, carry the underlying error text.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from paperforge.contexts.submission.checklist import SubmissionChecklist
from paperforge.contexts.submission.compiler import LatexCompiler, PdfLatexCompiler
from paperforge.contexts.submission.exceptions import InvalidRequestError
from paperforge.contexts.submission.journals import JournalDirectory, YamlJournalDirectory
from paperforge.contexts.submission.logger import _log_error, _log_info, _log_success
from paperforge.contexts.submission.packager import clean_project, create_submission_package
from paperforge.contexts.submission.validator import SubmissionValidator
from paperforge.contexts.templating.paper_extractor import PaperSourceExtractor
from paperforge.contexts.templating.paper_repository import PaperRepository, SimulatedPaperRepository
from paperforge.contexts.templating.project_initializer import (
    AuthorInfo,
    ProjectInitializer,
    ProjectMetadata,
)
from paperforge.contexts.templating.remote_catalog import SimulatedTemplateCatalog, TemplateCatalog
from paperforge.contexts.templating.resolver import TemplateResolver
from paperforge.contexts.templating.template_cache import TemplateCache
from paperforge.contexts.templating.template_data_structure import SearchOptions, TemplateRecord

TEMPLATE_SEARCH_LIMIT = 10


class Operation(str, Enum):
    INIT = "init"
    TEMPLATE = "template"
    EXTRACT = "extract"
    VALIDATE = "validate"
    PREPARE = "prepare"
    PACKAGE = "package"
    CHECKLIST = "checklist"
    CLEAN = "clean"


PROJECT_PATH_OPERATIONS = {
    Operation.VALIDATE,
    Operation.PREPARE,
    Operation.PACKAGE,
    Operation.CHECKLIST,
    Operation.CLEAN,
}


@dataclass
class SubmissionRequest:
    """
    One dispatcher call.

    Which fields are needed depends on the operation: init needs
    project_name, extract needs arxiv_id, and validate/prepare/package/
    checklist/clean need project_path.
    """

    operation: Union[str, Operation, None]
    project_path: Optional[Path] = None
    project_name: Optional[str] = None
    template_id: Optional[str] = None
    template_source: Optional[str] = None
    arxiv_id: Optional[str] = None
    journal_name: Optional[str] = None
    output_dir: Optional[Path] = None
    author_info: Optional[AuthorInfo] = None
    project_metadata: Optional[ProjectMetadata] = None


@dataclass
class OperationResult:
    success: bool
    message: str
    data: Dict[str, Any] = field(default_factory=dict)
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "message": self.message,
            "data": self.data,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
        }


def template_summary(template: TemplateRecord) -> Dict[str, Any]:
    """Template fields worth showing to a caller, without file contents."""
    return {
        "id": template.id,
        "name": template.name,
        "source": template.source.value,
        "journal_name": template.journal_name,
        "publisher": template.publisher,
        "files": [f.path for f in template.files],
        "rating": template.metadata.rating,
    }


def validate_request(request: SubmissionRequest) -> Operation:
    """
    Check that request names a known operation and carries the fields it needs.

    Raises:
        InvalidRequestError: If the operation is missing or unknown, or a required field is missing
    """
    if not request.operation:
        raise InvalidRequestError("Operation is required", field_name="operation")

    try:
        operation = Operation(request.operation)
    except ValueError as e:
        valid = ", ".join(op.value for op in Operation)
        raise InvalidRequestError(
            f"Invalid operation: {request.operation}. Must be one of: {valid}",
            operation=str(request.operation),
            field_name="operation",
        ) from e

    if operation == Operation.INIT and not request.project_name:
        raise InvalidRequestError(
            "Project name is required for init operation", operation.value, "project_name"
        )
    if operation == Operation.EXTRACT and not request.arxiv_id:
        raise InvalidRequestError(
            "arXiv ID is required for extract operation", operation.value, "arxiv_id"
        )
    if operation in PROJECT_PATH_OPERATIONS and not request.project_path:
        raise InvalidRequestError(
            f"Project path is required for {operation.value} operation",
            operation.value,
            "project_path",
        )
    return operation


class SubmissionPreparator:
    """
    Routes requests to the resolver, initializer, validator, packager and checklist.

    Build one with create_preparator() unless the collaborators need replacing.
    """

    def __init__(
        self,
        resolver: TemplateResolver,
        initializer: ProjectInitializer,
        validator: SubmissionValidator,
        checklist: SubmissionChecklist,
    ):
        self.resolver = resolver
        self.initializer = initializer
        self.validator = validator
        self.checklist = checklist
        self._handlers: Dict[Operation, Callable[[SubmissionRequest], OperationResult]] = {
            Operation.INIT: self.initialize_project,
            Operation.TEMPLATE: self.manage_templates,
            Operation.EXTRACT: self.extract_template,
            Operation.VALIDATE: self.validate_project,
            Operation.PREPARE: self.prepare_submission,
            Operation.PACKAGE: self.package_project,
            Operation.CHECKLIST: self.build_checklist,
            Operation.CLEAN: self.clean_project,
        }

    def execute(self, request: SubmissionRequest) -> OperationResult:
        """Run one operation. Never raises."""
        operation_name = getattr(request.operation, "value", request.operation) or "operation"
        try:
            operation = validate_request(request)
            _log_info(f"Running {operation.value}")
            result = self._handlers[operation](request)
        except Exception as e:
            _log_error(f"{operation_name} failed: {e}")
            return OperationResult(
                success=False,
                message=f"{operation_name} failed: {e}",
                errors=[str(e)],
            )

        if result.success:
            _log_success(result.message)
        else:
            _log_error(result.message)
        return result

    def initialize_project(self, request: SubmissionRequest) -> OperationResult:
        if request.template_id:
            template = self.resolver.fetch(request.template_id, request.template_source)
        else:
            templates = self.resolver.search(SearchOptions(journal=request.journal_name, limit=1))
            if not templates:
                raise LookupError("No suitable template found")
            template = templates[0]

        parent = Path(request.output_dir) if request.output_dir else Path.cwd()
        project_path = parent / request.project_name

        project = self.initializer.initialize(
            request.project_name,
            project_path,
            template,
            journal_target=request.journal_name,
            author_info=request.author_info,
            project_metadata=request.project_metadata,
        )

        if project.success:
            message = f'init: project "{request.project_name}" initialized at {project_path}'
        else:
            message = f'init failed: {"; ".join(project.errors)}'
        return OperationResult(
            success=project.success,
            message=message,
            data={
                "project_path": str(project_path),
                "template": template_summary(template),
                "files_created": list(project.files_created),
                "manifest_written": project.manifest_written,
            },
            errors=list(project.errors),
            warnings=list(project.warnings),
        )

    def manage_templates(self, request: SubmissionRequest) -> OperationResult:
        if request.template_id:
            template = self.resolver.fetch(request.template_id, request.template_source)
            return OperationResult(
                success=True,
                message=f'template: "{template.name}" fetched successfully',
                data={"template": template_summary(template)},
            )

        templates = self.resolver.search(
            SearchOptions(journal=request.journal_name, limit=TEMPLATE_SEARCH_LIMIT)
        )
        journal = f' for journal "{request.journal_name}"' if request.journal_name else ""
        return OperationResult(
            success=True,
            message=f"template: found {len(templates)} templates{journal}",
            data={"templates": [template_summary(t) for t in templates]},
        )

    def extract_template(self, request: SubmissionRequest) -> OperationResult:
        template = self.resolver.extract_from_paper(request.arxiv_id)
        return OperationResult(
            success=True,
            message=f'extract: template extracted from arXiv:{request.arxiv_id} - "{template.name}"',
            data={"template": template_summary(template)},
        )

    def validate_project(self, request: SubmissionRequest) -> OperationResult:
        report = self.validator.validate(Path(request.project_path), request.journal_name)
        passed, total = report.checks_passed()
        failed = [name for name, ok in report.check_results().items() if not ok]

        message = f"Validation completed: {passed}/{total} checks passed"
        if failed:
            message += f" (failed: {', '.join(failed)})"
        return OperationResult(
            success=report.passed,
            message=message,
            data={"report": report.to_dict()},
            errors=list(report.compilation.errors),
            warnings=list(report.compilation.warnings) + list(report.compliance.issues),
        )

    def prepare_submission(self, request: SubmissionRequest) -> OperationResult:
        report = self.validator.validate(Path(request.project_path), request.journal_name)

        if not report.compilation.success:
            cause = report.compilation.errors[0] if report.compilation.errors else "unknown error"
            return OperationResult(
                success=False,
                message=f"prepare failed: LaTeX compilation failed ({cause}). "
                "Please fix errors before preparing submission.",
                data={"report": report.to_dict()},
                errors=list(report.compilation.errors) or ["LaTeX compilation failed"],
            )

        package = create_submission_package(Path(request.project_path), request.output_dir)
        return OperationResult(
            success=True,
            message=f"prepare: submission package prepared successfully at {package.path}",
            data={
                "package_path": str(package.path),
                "files": package.files,
                "report": report.to_dict(),
            },
            warnings=list(report.compilation.warnings),
        )

    def package_project(self, request: SubmissionRequest) -> OperationResult:
        package = create_submission_package(Path(request.project_path), request.output_dir)
        return OperationResult(
            success=True,
            message=f"package: created successfully at {package.path}",
            data={"package_path": str(package.path), "files": package.files},
        )

    def build_checklist(self, request: SubmissionRequest) -> OperationResult:
        items = self.checklist.build(Path(request.project_path), request.journal_name)
        return OperationResult(
            success=True,
            message=f"checklist: generated with {len(items)} items",
            data={"checklist": [item.to_dict() for item in items]},
        )

    def clean_project(self, request: SubmissionRequest) -> OperationResult:
        removed = clean_project(Path(request.project_path))
        return OperationResult(
            success=True,
            message=f"clean: cleaned {len(removed)} temporary files",
            data={"removed": removed},
        )


def create_preparator(
    cache_dir: Optional[Path] = None,
    paper_repository: Optional[PaperRepository] = None,
    compiler: Optional[LatexCompiler] = None,
    journal_directory: Optional[JournalDirectory] = None,
    catalog: Optional[TemplateCatalog] = None,
) -> SubmissionPreparator:
    """
    Wire a SubmissionPreparator with default collaborators.

    Args:
        cache_dir: Template cache directory (default: TEMPLATE_CACHE_PATH)
        paper_repository: Paper source provider (default: SimulatedPaperRepository)
        compiler: LaTeX compiler (default: PdfLatexCompiler)
        journal_directory: Journal requirements (default: packaged YAML catalog)
        catalog: Remote template catalog (default: SimulatedTemplateCatalog)
    """
    journal_directory = journal_directory or YamlJournalDirectory()
    resolver = TemplateResolver(
        catalog=catalog or SimulatedTemplateCatalog(),
        extractor=PaperSourceExtractor(paper_repository or SimulatedPaperRepository()),
        cache=TemplateCache(cache_dir),
    )
    return SubmissionPreparator(
        resolver=resolver,
        initializer=ProjectInitializer(),
        validator=SubmissionValidator(compiler or PdfLatexCompiler(), journal_directory),
        checklist=SubmissionChecklist(journal_directory=journal_directory),
    )
