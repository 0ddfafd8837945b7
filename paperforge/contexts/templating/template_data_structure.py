"""
Template data structures for the Templating context.

TemplateRecord is the unit every source resolves to and the unit the cache
persists (one JSON file per record).
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import PurePosixPath
from typing import Any, Dict, List, Optional

from paperforge.utils.timestamp import parse_timestamp


class TemplateSource(str, Enum):
    """Origin of a template."""

    REMOTE_CATALOG = "remote-catalog"
    PAPER_EXTRACTED = "paper-extracted"
    LOCAL_CACHE = "local-cache"


class FileKind(str, Enum):
    """Role of a file inside a template."""

    DOCUMENT = "document"
    DOCUMENT_CLASS = "documentclass"
    STYLE = "style"
    BIBLIOGRAPHY = "bibliography"
    ASSET = "asset"
    OTHER = "other"


class SortKey(str, Enum):
    """Search result orderings."""

    RELEVANCE = "relevance"
    DATE = "date"
    POPULARITY = "popularity"


FILE_KIND_BY_EXTENSION = {
    ".tex": FileKind.DOCUMENT,
    ".cls": FileKind.DOCUMENT_CLASS,
    ".sty": FileKind.STYLE,
    ".bib": FileKind.BIBLIOGRAPHY,
    ".png": FileKind.ASSET,
    ".jpg": FileKind.ASSET,
    ".jpeg": FileKind.ASSET,
    ".pdf": FileKind.ASSET,
    ".eps": FileKind.ASSET,
}


def file_kind_for_path(path: str) -> FileKind:
    """Classify a template file by extension (unknown extensions are OTHER)."""
    return FILE_KIND_BY_EXTENSION.get(PurePosixPath(path).suffix.lower(), FileKind.OTHER)


@dataclass
class TemplateFile:
    """One file of a template, addressed relative to the project root."""

    path: str
    content: str
    kind: FileKind = FileKind.OTHER
    required: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "content": self.content,
            "kind": self.kind.value,
            "required": self.required,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TemplateFile":
        return cls(
            path=data["path"],
            content=data["content"],
            kind=FileKind(data.get("kind", FileKind.OTHER.value)),
            required=bool(data.get("required", False)),
        )


@dataclass
class TemplateMetadata:
    """
    Descriptive metadata for a template.

    download_count and rating only break ties when sorting search results.
    """

    version: Optional[str] = None
    authors: List[str] = field(default_factory=list)
    license: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    last_modified: Optional[datetime] = None
    download_count: int = 0
    rating: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "authors": list(self.authors),
            "license": self.license,
            "tags": list(self.tags),
            "last_modified": self.last_modified.isoformat() if self.last_modified else None,
            "download_count": self.download_count,
            "rating": self.rating,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TemplateMetadata":
        last_modified = data.get("last_modified")
        return cls(
            version=data.get("version"),
            authors=list(data.get("authors") or []),
            license=data.get("license"),
            tags=list(data.get("tags") or []),
            last_modified=parse_timestamp(last_modified) if last_modified else None,
            download_count=int(data.get("download_count") or 0),
            rating=float(data.get("rating") or 0.0),
        )


@dataclass
class TemplateRecord:
    """
    A resolved, reusable document template.

    Invariant: exactly one file is both required and a DOCUMENT; it is the
    entry point for compilation (see ``entry_point``).

    Attributes:
        id: Identifier, unique within its source namespace
        name: Display name
        source: Where the template came from
        files: Ordered template files
        metadata: Version, authors, license, tags, popularity numbers
        last_updated: Timestamp the cache eviction policy compares against
        description: Free-form description
        journal_name: Journal the template targets, if any
        publisher: Publisher name, if any
        category: Subject categories
    """

    id: str
    name: str
    source: TemplateSource
    files: List[TemplateFile]
    metadata: TemplateMetadata = field(default_factory=TemplateMetadata)
    last_updated: datetime = field(default_factory=datetime.now)
    description: str = ""
    journal_name: Optional[str] = None
    publisher: Optional[str] = None
    category: List[str] = field(default_factory=list)

    @property
    def entry_point(self) -> Optional[TemplateFile]:
        """The single required document file, or None if the invariant is broken."""
        candidates = [f for f in self.files if f.required and f.kind == FileKind.DOCUMENT]
        return candidates[0] if len(candidates) == 1 else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "source": self.source.value,
            "description": self.description,
            "journal_name": self.journal_name,
            "publisher": self.publisher,
            "category": list(self.category),
            "files": [f.to_dict() for f in self.files],
            "metadata": self.metadata.to_dict(),
            "last_updated": self.last_updated.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TemplateRecord":
        """
        Rebuild a record from its JSON form.

        Raises:
            KeyError: If a mandatory field is missing
            ValueError: If the source, a file kind, or a timestamp is invalid
        """
        return cls(
            id=data["id"],
            name=data["name"],
            source=TemplateSource(data["source"]),
            files=[TemplateFile.from_dict(f) for f in data["files"]],
            metadata=TemplateMetadata.from_dict(data.get("metadata") or {}),
            last_updated=parse_timestamp(data["last_updated"]),
            description=data.get("description") or "",
            journal_name=data.get("journal_name"),
            publisher=data.get("publisher"),
            category=list(data.get("category") or []),
        )


@dataclass
class SearchOptions:
    """
    Filters and ordering for template searches.

    Text filters are case-insensitive substring matches; category and keywords
    match if any listed value matches.
    """

    journal: Optional[str] = None
    publisher: Optional[str] = None
    category: List[str] = field(default_factory=list)
    keywords: List[str] = field(default_factory=list)
    limit: Optional[int] = None
    sort_by: Optional[SortKey] = None
    descending: bool = True
