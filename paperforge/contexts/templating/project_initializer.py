"""
Project Initializer

Materializes a resolved template into a working project directory:
fixed subdirectories, template files with author/paper metadata filled in,
the project manifest, and a generated README guide.

The operation is not transactional. A failed call leaves whatever it already
wrote in place; calling again with the same arguments overwrites it.
"""

import re
from dataclasses import asdict, dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from paperforge.contexts.templating.guide_registry import GuideRegistry
from paperforge.contexts.templating.latex_patterns import Placeholders, StructureRegex
from paperforge.contexts.templating.logger import _log_debug, _log_info, log_project_result
from paperforge.contexts.templating.project_manifest import (
    MANIFEST_FILENAME,
    ProjectManifest,
    write_manifest,
)
from paperforge.contexts.templating.template_data_structure import FileKind, TemplateRecord
from paperforge.utils.latex_tools import extract_command_argument, replace_command_argument

PROJECT_SUBDIRECTORIES = ("figures", "data", "sections")
GUIDE_FILENAME = "README.md"

# Commands that carry an affiliation of their own; \thanks is the fallback
AFFILIATION_COMMANDS = ("affiliation", "institute", "IEEEauthorblockA")


@dataclass
class AuthorInfo:
    name: str
    email: Optional[str] = None
    affiliation: Optional[str] = None
    orcid: Optional[str] = None


@dataclass
class ProjectMetadata:
    title: Optional[str] = None
    abstract: Optional[str] = None
    keywords: List[str] = field(default_factory=list)
    discipline: Optional[str] = None


@dataclass
class ProjectResult:
    """
    Outcome of ProjectInitializer.initialize().

    Attributes:
        success: True if no step recorded an error
        project_path: Project root
        files_created: Paths written, relative to project_path, in write order
        manifest_written: Whether the manifest reached disk
        errors: Failures that stopped initialization
        warnings: Non-fatal problems with the template
    """

    success: bool
    project_path: Path
    files_created: List[str] = field(default_factory=list)
    manifest_written: bool = False
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


def has_affiliation_command(content: str) -> bool:
    return any(extract_command_argument(content, c) is not None for c in AFFILIATION_COMMANDS)


def _affiliation_replacement(affiliation: str):
    # Keep an email placeholder that shared the block so the email step can fill it
    def replace(old: str) -> str:
        if Placeholders.EMAIL in old:
            return f"{affiliation} \\\\\n{Placeholders.EMAIL}"
        return affiliation

    return replace


def substitute_placeholders(
    content: str,
    author_info: Optional[AuthorInfo] = None,
    project_metadata: Optional[ProjectMetadata] = None,
) -> str:
    """
    Fill a LaTeX document with author and paper metadata.

    Substitution order: title, author, affiliation, email, abstract, keywords.
    The affiliation fills ``\\affiliation``, ``\\institute`` or
    ``\\IEEEauthorblockA`` when the document has one, and is appended to the
    author as ``\\thanks`` otherwise. IEEE author blocks inside ``\\author``
    are filled in place. Fields that are not supplied leave the template text
    untouched.

    Example:
        >>> substitute_placeholders(r"\\title{{{PROJECT_NAME}}}", None, ProjectMetadata(title="My Paper"))
        '\\\\title{My Paper}'
    """
    if project_metadata and project_metadata.title:
        content = replace_command_argument(content, "title", project_metadata.title)

    if author_info and author_info.name:
        if extract_command_argument(content, "IEEEauthorblockN") is not None:
            content = replace_command_argument(content, "IEEEauthorblockN", author_info.name)
        else:
            author = author_info.name
            if author_info.affiliation and not has_affiliation_command(content):
                author += f"\\thanks{{{author_info.affiliation}}}"
            content = replace_command_argument(content, "author", author)

    if author_info and author_info.affiliation:
        for command in AFFILIATION_COMMANDS:
            content = replace_command_argument(
                content, command, _affiliation_replacement(author_info.affiliation)
            )

    if author_info and author_info.email:
        content = content.replace(Placeholders.EMAIL, author_info.email)

    if project_metadata and project_metadata.abstract:
        abstract_block = f"\\begin{{abstract}}\n{project_metadata.abstract}\n\\end{{abstract}}"
        content = re.sub(StructureRegex.ABSTRACT, lambda _: abstract_block, content, count=1)

    if project_metadata and project_metadata.keywords:
        content = content.replace(Placeholders.KEYWORDS, ", ".join(project_metadata.keywords))

    return content


class ProjectInitializer:
    """
    Creates project directories from templates.

    Args:
        guides: Registry for the README guide template (default: packaged guides)
    """

    def __init__(self, guides: Optional[GuideRegistry] = None):
        self.guides = guides or GuideRegistry()

    def initialize(
        self,
        name: str,
        path: Path,
        template: TemplateRecord,
        journal_target: Optional[str] = None,
        author_info: Optional[AuthorInfo] = None,
        project_metadata: Optional[ProjectMetadata] = None,
    ) -> ProjectResult:
        """
        Materialize template as project name at path.

        Never raises; failures are reported in the result's errors and success
        is False. Files written before a failure stay listed in files_created.
        """
        project_path = Path(path)
        result = ProjectResult(success=False, project_path=project_path)

        if template.entry_point is None:
            result.warnings.append(
                f"Template {template.id} has no single required document; "
                "compilation will need a main file chosen by hand"
            )

        try:
            _log_info(f"Initializing project {name} from {template.id}")
            for subdirectory in PROJECT_SUBDIRECTORIES:
                (project_path / subdirectory).mkdir(parents=True, exist_ok=True)

            self._write_template_files(project_path, template, author_info, project_metadata, result)

            created = datetime.now()
            manifest = ProjectManifest(
                name=name,
                template_id=template.id,
                template_source=template.source.value,
                journal_target=journal_target,
                created_at=created,
                last_modified=created,
                metadata=self._manifest_metadata(author_info, project_metadata),
            )
            write_manifest(project_path, manifest)
            result.manifest_written = True
            self._record(result, MANIFEST_FILENAME)

            guide = self._render_guide(
                name, project_path, template, journal_target, author_info, project_metadata, created
            )
            (project_path / GUIDE_FILENAME).write_text(guide, encoding="utf-8")
            self._record(result, GUIDE_FILENAME)

        except Exception as e:
            result.errors.append(f"Failed to initialize project {name}: {e}")

        result.success = not result.errors
        log_project_result(name, result)
        return result

    def _write_template_files(
        self,
        project_path: Path,
        template: TemplateRecord,
        author_info: Optional[AuthorInfo],
        project_metadata: Optional[ProjectMetadata],
        result: ProjectResult,
    ) -> None:
        root = project_path.resolve()
        for template_file in template.files:
            target = (project_path / template_file.path).resolve()
            try:
                target.relative_to(root)
            except ValueError:
                result.warnings.append(f"Skipped {template_file.path}: outside the project directory")
                continue

            content = template_file.content
            if template_file.kind == FileKind.DOCUMENT:
                content = substitute_placeholders(content, author_info, project_metadata)

            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
            self._record(result, template_file.path)
            _log_debug(f"  Wrote {template_file.path}")

    @staticmethod
    def _record(result: ProjectResult, relative_path: str) -> None:
        if relative_path not in result.files_created:
            result.files_created.append(relative_path)

    @staticmethod
    def _manifest_metadata(
        author_info: Optional[AuthorInfo], project_metadata: Optional[ProjectMetadata]
    ) -> dict:
        metadata = {}
        if author_info:
            metadata["author"] = asdict(author_info)
        if project_metadata:
            metadata["project"] = asdict(project_metadata)
        return metadata

    def _render_guide(
        self,
        name: str,
        project_path: Path,
        template: TemplateRecord,
        journal_target: Optional[str],
        author_info: Optional[AuthorInfo],
        project_metadata: Optional[ProjectMetadata],
        created: datetime,
    ) -> str:
        entry_point = template.entry_point
        main_file = entry_point.path if entry_point else "main.tex"
        support_files = [f.path for f in template.files if f.path != main_file]
        keywords = project_metadata.keywords if project_metadata else []

        return self.guides.render(
            GUIDE_FILENAME,
            title=(project_metadata.title if project_metadata and project_metadata.title else name),
            author=author_info.name if author_info else "Not specified",
            journal=journal_target or "Not specified",
            template_source=template.source.value,
            template_id=template.id,
            created=created.strftime("%Y-%m-%d"),
            abstract=(
                project_metadata.abstract
                if project_metadata and project_metadata.abstract
                else "Project description goes here."
            ),
            main_file=main_file,
            main_stem=Path(main_file).stem,
            support_files=support_files,
            keywords=", ".join(keywords) if keywords else "Not specified",
            project_dir=str(project_path),
        )
