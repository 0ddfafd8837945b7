"""
Submission Context

Responsibilities:
- Compiles projects through a LaTeX compilation collaborator
- Checks journal compliance against the journal requirements catalog
- Validates project file structure
- Packages submittable files and cleans build artifacts
- Produces the submission checklist
- Dispatches the top-level pipeline operations

Owns: Validation reports, submission packages, checklist catalog, operation dispatch
Never: Modifies template content or the project manifest
"""

from paperforge.contexts.submission.checklist import ChecklistItem, SubmissionChecklist
from paperforge.contexts.submission.compiler import (
    CompilationResult,
    LatexCompiler,
    PdfLatexCompiler,
    StaticCompiler,
)
from paperforge.contexts.submission.exceptions import InvalidRequestError, JournalNotFoundError
from paperforge.contexts.submission.journals import (
    InMemoryJournalDirectory,
    JournalDirectory,
    JournalRequirements,
    YamlJournalDirectory,
)
from paperforge.contexts.submission.packager import clean_project, create_submission_package
from paperforge.contexts.submission.preparator import (
    Operation,
    OperationResult,
    SubmissionPreparator,
    SubmissionRequest,
    create_preparator,
)
from paperforge.contexts.submission.validator import SubmissionValidator, ValidationReport

__all__ = [
    # Dispatcher
    "create_preparator",
    "SubmissionPreparator",
    "SubmissionRequest",
    "OperationResult",
    "Operation",
    # Pipeline stages
    "SubmissionValidator",
    "ValidationReport",
    "SubmissionChecklist",
    "ChecklistItem",
    "create_submission_package",
    "clean_project",
    # Collaborators
    "LatexCompiler",
    "PdfLatexCompiler",
    "StaticCompiler",
    "CompilationResult",
    "JournalDirectory",
    "YamlJournalDirectory",
    "InMemoryJournalDirectory",
    "JournalRequirements",
    # Errors
    "JournalNotFoundError",
    "InvalidRequestError",
]
