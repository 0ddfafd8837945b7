"""
Submission checklist: a fixed catalog of items, each completed by a predicate.

Predicates are plain callables keyed by item id and can be replaced per
SubmissionChecklist instance. A predicate that raises leaves its item
incomplete.
"""

import re
from dataclasses import asdict, dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, List, Optional

from paperforge.contexts.submission.journals import (
    DEFAULT_ABSTRACT_WORD_LIMIT,
    JournalDirectory,
    JournalRequirements,
)
from paperforge.contexts.submission.logger import _log_debug, _log_info, _log_warning
from paperforge.contexts.submission.project_files import (
    find_main_document,
    read_main_document,
    root_files,
)
from paperforge.contexts.templating.latex_patterns import Placeholders, StructureRegex
from paperforge.contexts.templating.project_manifest import load_manifest

GRAPHIC_EXTENSIONS = ("", ".pdf", ".png", ".jpg", ".jpeg", ".eps")
KEYWORDS_PATTERNS = (
    r"\\begin\{(?:IEEE)?keywords\}([\s\S]*?)\\end\{(?:IEEE)?keywords\}",
    r"\\keywords\{([^}]*)\}",
)
COVER_LETTER_NAME = re.compile(r"cover[-_ ]?letter", re.IGNORECASE)


class ChecklistCategory(str, Enum):
    CONTENT = "content"
    FORMATTING = "formatting"
    FILES = "files"
    SUBMISSION = "submission"


@dataclass
class ChecklistItem:
    id: str
    title: str
    description: str
    completed: bool
    required: bool
    category: ChecklistCategory

    def to_dict(self) -> dict:
        data = asdict(self)
        data["category"] = self.category.value
        return data


CHECKLIST_ITEMS = (
    ChecklistItem("compilation", "LaTeX Compilation", "Document compiles without errors",
                  False, True, ChecklistCategory.CONTENT),
    ChecklistItem("bibliography", "Bibliography Format", "References follow journal style",
                  False, True, ChecklistCategory.FORMATTING),
    ChecklistItem("figures", "Figure Quality", "All figures are high resolution and properly labeled",
                  False, True, ChecklistCategory.CONTENT),
    ChecklistItem("abstract", "Abstract Length", "Abstract meets word limit requirements",
                  False, True, ChecklistCategory.CONTENT),
    ChecklistItem("keywords", "Keywords", "Appropriate keywords provided",
                  False, True, ChecklistCategory.CONTENT),
    ChecklistItem("cover-letter", "Cover Letter", "Cover letter prepared",
                  False, False, ChecklistCategory.SUBMISSION),
)


@dataclass
class ChecklistContext:
    """What a predicate may look at."""

    project_path: Path
    main_source: str
    journal: Optional[JournalRequirements] = None


Predicate = Callable[[ChecklistContext], bool]


def compiled_pdf_present(ctx: ChecklistContext) -> bool:
    main_file = find_main_document(ctx.project_path)
    return main_file is not None and main_file.with_suffix(".pdf").is_file()


def bibliography_declared(ctx: ChecklistContext) -> bool:
    has_bib = bool(root_files(ctx.project_path, ".bib"))
    return has_bib and re.search(StructureRegex.BIBLIOGRAPHY_STYLE, ctx.main_source) is not None


def figures_resolved(ctx: ChecklistContext) -> bool:
    """
    At least one figure is included and every \\includegraphics target exists.

    Targets without an extension are tried with the usual graphic extensions.
    """
    references = re.findall(StructureRegex.INCLUDEGRAPHICS, ctx.main_source)
    if not references:
        return False

    for reference in references:
        base = ctx.project_path / reference.strip()
        if not any(Path(f"{base}{ext}").is_file() for ext in GRAPHIC_EXTENSIONS):
            _log_debug(f"Unresolved graphic: {reference}")
            return False
    return True


def abstract_within_limit(ctx: ChecklistContext) -> bool:
    match = re.search(StructureRegex.ABSTRACT, ctx.main_source)
    if match is None:
        return False
    words = len(match.group(1).split())
    limit = (ctx.journal.abstract_word_limit if ctx.journal else None) or DEFAULT_ABSTRACT_WORD_LIMIT
    return 0 < words <= limit


def keywords_provided(ctx: ChecklistContext) -> bool:
    for pattern in KEYWORDS_PATTERNS:
        match = re.search(pattern, ctx.main_source)
        if match:
            keywords = match.group(1).strip()
            return bool(keywords) and keywords != Placeholders.KEYWORDS
    return False


def cover_letter_present(ctx: ChecklistContext) -> bool:
    return any(COVER_LETTER_NAME.search(p.stem) for p in root_files(ctx.project_path))


DEFAULT_PREDICATES: Dict[str, Predicate] = {
    "compilation": compiled_pdf_present,
    "bibliography": bibliography_declared,
    "figures": figures_resolved,
    "abstract": abstract_within_limit,
    "keywords": keywords_provided,
    "cover-letter": cover_letter_present,
}


class SubmissionChecklist:
    """
    Builds the checklist for a project.

    Args:
        predicates: Overrides for DEFAULT_PREDICATES, by item id
        journal_directory: Used to resolve the journal name (optional)
    """

    def __init__(
        self,
        predicates: Optional[Dict[str, Predicate]] = None,
        journal_directory: Optional[JournalDirectory] = None,
    ):
        self.predicates = {**DEFAULT_PREDICATES, **(predicates or {})}
        self.journal_directory = journal_directory

    def build(self, project_path: Path, journal_name: Optional[str] = None) -> List[ChecklistItem]:
        """
        Evaluate every checklist item against the project.

        The journal defaults to the manifest's journal target. A journal that
        requires a cover letter makes that item required.

        Raises:
            FileNotFoundError: If project_path does not exist
        """
        project_path = Path(project_path)
        if not project_path.is_dir():
            raise FileNotFoundError(f"Project directory not found: {project_path}")

        journal = self._resolve_journal(project_path, journal_name)
        ctx = ChecklistContext(
            project_path=project_path,
            main_source=read_main_document(project_path),
            journal=journal,
        )

        items = []
        for template in CHECKLIST_ITEMS:
            item = replace(template, completed=self._evaluate(template.id, ctx))
            if item.id == "cover-letter" and journal is not None:
                item.required = journal.cover_letter_required
            items.append(item)

        done = sum(item.completed for item in items)
        _log_info(f"Checklist for {project_path.name}: {done}/{len(items)} items complete")
        return items

    def _evaluate(self, item_id: str, ctx: ChecklistContext) -> bool:
        predicate = self.predicates.get(item_id)
        if predicate is None:
            return False
        try:
            return bool(predicate(ctx))
        except Exception as e:
            _log_warning(f"Checklist item {item_id} could not be evaluated: {e}")
            return False

    def _resolve_journal(
        self, project_path: Path, journal_name: Optional[str]
    ) -> Optional[JournalRequirements]:
        if journal_name is None:
            try:
                journal_name = load_manifest(project_path).journal_target
            except (OSError, ValueError, KeyError):
                journal_name = None

        if not journal_name or self.journal_directory is None:
            return None

        try:
            return self.journal_directory.find_journal(journal_name)
        except Exception as e:
            _log_warning(f"Using default checklist limits: {e}")
            return None
