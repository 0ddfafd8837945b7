"""
Paper Source Extractor

Turns the LaTeX source of a published paper into a reusable template:
download the bundle, pick the primary document, read its structure, and
sanitize every file.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from paperforge.contexts.templating.exceptions import ExtractionError, NoMainFileError
from paperforge.contexts.templating.latex_patterns import DocumentRegex
from paperforge.contexts.templating.logger import _log_debug, _log_info, _log_success
from paperforge.contexts.templating.paper_repository import PaperMetadata, PaperRepository
from paperforge.contexts.templating.sanitizer import generalize_paths, remove_personal_info
from paperforge.contexts.templating.structure_parser import (
    DocumentStructure,
    categorize,
    extract_dependencies,
    extract_document_structure,
    tags_from_structure,
)
from paperforge.contexts.templating.template_data_structure import (
    FileKind,
    TemplateFile,
    TemplateMetadata,
    TemplateRecord,
    TemplateSource,
    file_kind_for_path,
)

EXTRACTED_ID_PREFIX = "arxiv-"
EXTRACTED_LICENSE = "arXiv Non-exclusive License"
DESCRIPTION_ABSTRACT_CHARS = 200


@dataclass
class LatexSource:
    """
    Downloaded paper source before it becomes a template.

    Attributes:
        paper_id: Repository identifier
        main_file: Relative path of the primary document
        files: Relative path -> raw content
        structure: Outline of the primary document
        dependencies: Packages used across all files
        metadata: Template metadata derived from the paper
        paper: Repository metadata (None if the repository has none)
    """

    paper_id: str
    main_file: str
    files: Dict[str, str]
    structure: DocumentStructure
    dependencies: List[str] = field(default_factory=list)
    metadata: TemplateMetadata = field(default_factory=TemplateMetadata)
    paper: Optional[PaperMetadata] = None


def extracted_template_id(paper_id: str) -> str:
    """Cache id of the template extracted from paper_id."""
    return f"{EXTRACTED_ID_PREFIX}{paper_id}"


def find_main_file(files: Dict[str, str]) -> Optional[str]:
    """
    Pick the primary document of a bundle.

    First document file declaring a document class, else the first document
    file, else None.
    """
    documents = [path for path in files if file_kind_for_path(path) == FileKind.DOCUMENT]
    for path in documents:
        if DocumentRegex.DOCUMENT_CLASS_MARKER in files[path]:
            return path
    return documents[0] if documents else None


class PaperSourceExtractor:
    """Extracts templates from papers held by a PaperRepository."""

    def __init__(self, repository: PaperRepository):
        self.repository = repository

    def extract_latex_source(self, paper_id: str) -> LatexSource:
        """
        Download and analyze the source bundle of a paper.

        Raises:
            ExtractionError: If the repository reports a failed download
            NoMainFileError: If the bundle contains no LaTeX document
        """
        _log_info(f"Downloading source for paper {paper_id}")
        download = self.repository.download_source(paper_id)
        if not download.ok:
            raise ExtractionError(
                f"Failed to download paper {paper_id}: {download.error or 'unknown error'}",
                paper_id=paper_id,
            )

        main_file = find_main_file(download.files)
        if main_file is None:
            raise NoMainFileError(
                f"No main LaTeX file found in the source of paper {paper_id}",
                paper_id=paper_id,
            )
        _log_debug(f"  Main file: {main_file} ({len(download.files)} files in bundle)")

        hits = self.repository.search_metadata(f"id:{paper_id}", max_results=1)
        paper = hits[0] if hits else None

        structure = extract_document_structure(download.files[main_file])

        return LatexSource(
            paper_id=paper_id,
            main_file=main_file,
            files=download.files,
            structure=structure,
            dependencies=extract_dependencies(download.files),
            metadata=TemplateMetadata(
                version="1.0",
                authors=list(paper.authors) if paper and paper.authors else ["Unknown"],
                license=EXTRACTED_LICENSE,
                tags=tags_from_structure(structure),
                last_modified=datetime.now(),
                download_count=1,
                rating=4.0,
            ),
            paper=paper,
        )

    def extract(
        self,
        paper_id: str,
        remove_personal: bool = True,
        relative_paths: bool = True,
    ) -> TemplateRecord:
        """
        Convert a paper into a template.

        Args:
            paper_id: Repository identifier (e.g., "2301.00001")
            remove_personal: Replace names, emails, affiliations and title with placeholders
            relative_paths: Rewrite graphics/include paths to project-relative ones

        Returns:
            TemplateRecord with id ``arxiv-<paper_id>``
        """
        source = self.extract_latex_source(paper_id)

        files = []
        for path, content in source.files.items():
            if remove_personal:
                content = remove_personal_info(content)
            if relative_paths:
                content = generalize_paths(content)
            files.append(
                TemplateFile(
                    path=path,
                    content=content,
                    kind=file_kind_for_path(path),
                    required=path == source.main_file,
                )
            )

        paper = source.paper
        name = f"Template from: {paper.title}" if paper and paper.title else f"arXiv Template {paper_id}"
        description = f"LaTeX template extracted from arXiv paper {paper_id}"
        if paper and paper.abstract:
            description += f". Abstract: {paper.abstract[:DESCRIPTION_ABSTRACT_CHARS]}..."

        metadata = source.metadata
        metadata.tags = [*metadata.tags, "arxiv", "extracted", paper_id]

        template = TemplateRecord(
            id=extracted_template_id(paper_id),
            name=name,
            source=TemplateSource.PAPER_EXTRACTED,
            files=files,
            metadata=metadata,
            last_updated=datetime.now(),
            description=description,
            category=categorize(source.structure, paper.subjects if paper else ()),
        )
        _log_success(f"Extracted {template.id}: {len(files)} files, main file {source.main_file}")
        return template
