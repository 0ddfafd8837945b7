"""
Submission Validation Pipeline

Runs four independent checks against a project directory and collects them
into a ValidationReport:
- Compilation: delegated to a LatexCompiler
- Compliance: journal requirements lookup
- File structure: main document, bibliography, figures directory
- Supplementary materials: not implemented, returns fixed defaults

A check that raises is recorded as a failure inside its own sub-report; the
other checks still run. Nothing is persisted.
"""

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple, TypeVar

from paperforge.contexts.submission.compiler import CompilationResult, LatexCompiler
from paperforge.contexts.submission.journals import JournalDirectory, JournalRequirements
from paperforge.contexts.submission.logger import _log_error, _log_info, log_validation_summary
from paperforge.contexts.submission.project_files import FIGURES_DIR, find_main_document, root_files

SUPPLEMENTARY_DIR = "supplementary"
PLACEHOLDER_ORGANIZATION_SCORE = 0.5

T = TypeVar("T")


@dataclass
class ComplianceCheck:
    """
    Journal compliance flags.

    Flags default to passing: without a journal there is nothing to fail,
    and a failed lookup is reported in issues only.
    """

    page_limit: bool = True
    word_limit: bool = True
    figure_limit: bool = True
    reference_style: bool = True
    font_requirements: bool = True
    margin_requirements: bool = True
    issues: List[str] = field(default_factory=list)
    journal: Optional[JournalRequirements] = None


@dataclass
class FileStructureCheck:
    main_document: bool = False
    figures_present: bool = False
    bibliography_present: bool = False
    supplementary_organized: bool = False
    missing_files: List[str] = field(default_factory=list)


@dataclass
class SupplementaryCheck:
    """
    Supplementary materials assessment.

    No inspection is performed yet: every instance carries the fixed defaults
    below and implemented=False. Never counted toward the aggregate result.
    """

    data_files: bool = False
    code_files: bool = False
    additional_figures: bool = False
    video_files: bool = False
    organization_score: float = PLACEHOLDER_ORGANIZATION_SCORE
    implemented: bool = False


@dataclass
class ValidationReport:
    compilation: CompilationResult
    compliance: ComplianceCheck
    file_structure: FileStructureCheck
    supplementary: SupplementaryCheck

    def check_results(self) -> Dict[str, bool]:
        """Checks that decide the aggregate result, by name."""
        return {
            "compilation": self.compilation.success,
            "page_limit": self.compliance.page_limit,
            "word_limit": self.compliance.word_limit,
            "reference_style": self.compliance.reference_style,
            "main_document": self.file_structure.main_document,
            "bibliography": self.file_structure.bibliography_present,
        }

    def checks_passed(self) -> Tuple[int, int]:
        """(passed, total) over check_results()."""
        results = self.check_results()
        return sum(results.values()), len(results)

    @property
    def passed(self) -> bool:
        return all(self.check_results().values())

    def issues(self) -> List[str]:
        """Human-readable problems across every sub-report."""
        issues = [f"Compilation: {e}" for e in self.compilation.errors]
        issues += [f"Compliance: {i}" for i in self.compliance.issues]
        issues += [f"Missing: {m}" for m in self.file_structure.missing_files]
        return issues

    def to_dict(self) -> Dict[str, Any]:
        compilation = asdict(self.compilation)
        for key in ("log_path", "pdf_path"):
            if compilation[key] is not None:
                compilation[key] = str(compilation[key])

        compliance = asdict(self.compliance)
        compliance["journal"] = self.compliance.journal.name if self.compliance.journal else None

        return {
            "passed": self.passed,
            "compilation": compilation,
            "compliance": compliance,
            "file_structure": asdict(self.file_structure),
            "supplementary": asdict(self.supplementary),
        }


def _isolated(check_name: str, run: Callable[[], T], on_error: Callable[[str], T]) -> T:
    try:
        return run()
    except Exception as e:
        _log_error(f"{check_name} check raised: {e}")
        return on_error(f"{check_name} check failed: {e}")


class SubmissionValidator:
    """
    Validates a project for submission.

    Args:
        compiler: LaTeX compilation collaborator
        journal_directory: Journal requirements collaborator
    """

    def __init__(self, compiler: LatexCompiler, journal_directory: JournalDirectory):
        self.compiler = compiler
        self.journal_directory = journal_directory

    def validate(self, project_path: Path, journal_name: Optional[str] = None) -> ValidationReport:
        project_path = Path(project_path)
        _log_info(f"Validating {project_path}" + (f" for {journal_name}" if journal_name else ""))

        report = ValidationReport(
            compilation=_isolated(
                "Compilation",
                lambda: self.compiler.compile(project_path),
                lambda message: CompilationResult(success=False, errors=[message]),
            ),
            compliance=_isolated(
                "Compliance",
                lambda: self.check_compliance(journal_name),
                lambda message: ComplianceCheck(issues=[message]),
            ),
            file_structure=_isolated(
                "File structure",
                lambda: self.check_file_structure(project_path),
                lambda message: FileStructureCheck(missing_files=[message]),
            ),
            supplementary=self.check_supplementary(project_path),
        )

        log_validation_summary(project_path, report)
        return report

    def check_compliance(self, journal_name: Optional[str]) -> ComplianceCheck:
        check = ComplianceCheck()
        if not journal_name:
            return check

        try:
            check.journal = self.journal_directory.find_journal(journal_name)
        except Exception as e:
            check.issues.append(f"Could not load requirements for {journal_name}: {e}")
        return check

    def check_file_structure(self, project_path: Path) -> FileStructureCheck:
        check = FileStructureCheck()
        try:
            check.main_document = find_main_document(project_path) is not None
            check.bibliography_present = bool(root_files(project_path, ".bib"))
        except OSError as e:
            check.missing_files.append(f"{project_path} (cannot read project directory: {e})")
            return check

        check.figures_present = (project_path / FIGURES_DIR).is_dir()
        check.supplementary_organized = (project_path / SUPPLEMENTARY_DIR).is_dir()

        if not check.main_document:
            check.missing_files.append("main document (.tex)")
        if not check.bibliography_present:
            check.missing_files.append("bibliography (.bib)")
        if not check.figures_present:
            check.missing_files.append(f"{FIGURES_DIR}/")
        return check

    def check_supplementary(self, project_path: Path) -> SupplementaryCheck:
        return SupplementaryCheck()
