"""
Templating Context

Responsibilities:
- Models templates and their files (TemplateRecord)
- Searches and fetches templates across the remote catalog, extracted papers and the local cache
- Extracts and sanitizes templates from published paper sources
- Persists resolved templates in the template cache with time-based eviction
- Materializes templates into project directories with metadata filled in

Owns: Template data model, template cache, source adapters, project manifest
Never: Compiles documents or judges journal compliance
"""

from paperforge.contexts.templating.exceptions import (
    ExtractionError,
    NoMainFileError,
    NotFoundError,
    SearchError,
    TemplateError,
)
from paperforge.contexts.templating.paper_extractor import PaperSourceExtractor
from paperforge.contexts.templating.paper_repository import (
    InMemoryPaperRepository,
    PaperRepository,
    SimulatedPaperRepository,
)
from paperforge.contexts.templating.project_initializer import (
    AuthorInfo,
    ProjectInitializer,
    ProjectMetadata,
    ProjectResult,
)
from paperforge.contexts.templating.project_manifest import ProjectManifest, load_manifest
from paperforge.contexts.templating.remote_catalog import SimulatedTemplateCatalog, TemplateCatalog
from paperforge.contexts.templating.resolver import TemplateResolver, detect_source
from paperforge.contexts.templating.template_cache import TemplateCache
from paperforge.contexts.templating.template_data_structure import (
    FileKind,
    SearchOptions,
    SortKey,
    TemplateFile,
    TemplateMetadata,
    TemplateRecord,
    TemplateSource,
)

__all__ = [
    # Resolution
    "TemplateResolver",
    "TemplateCache",
    "TemplateCatalog",
    "SimulatedTemplateCatalog",
    "PaperSourceExtractor",
    "PaperRepository",
    "InMemoryPaperRepository",
    "SimulatedPaperRepository",
    "detect_source",
    # Project setup
    "ProjectInitializer",
    "ProjectResult",
    "AuthorInfo",
    "ProjectMetadata",
    "ProjectManifest",
    "load_manifest",
    # Data structures
    "TemplateRecord",
    "TemplateFile",
    "TemplateMetadata",
    "TemplateSource",
    "FileKind",
    "SearchOptions",
    "SortKey",
    # Errors
    "TemplateError",
    "NotFoundError",
    "SearchError",
    "ExtractionError",
    "NoMainFileError",
]
