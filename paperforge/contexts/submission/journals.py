"""
Journal Requirements

Collaborator that maps a journal name to its submission requirements.
YamlJournalDirectory reads the packaged catalog (or JOURNAL_REQUIREMENTS_PATH);
InMemoryJournalDirectory holds requirements built in code.
"""

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf

from paperforge.contexts.submission.exceptions import JournalNotFoundError
from paperforge.contexts.submission.logger import _log_debug

load_dotenv()

DEFAULT_REQUIREMENTS_PATH = Path(__file__).parent / "data" / "journal_requirements.yaml"
JOURNAL_REQUIREMENTS_PATH = Path(
    os.getenv("JOURNAL_REQUIREMENTS_PATH", str(DEFAULT_REQUIREMENTS_PATH))
)

DEFAULT_ABSTRACT_WORD_LIMIT = 250


@dataclass
class JournalRequirements:
    """
    Formatting, file and process requirements of one journal.

    Limits set to None mean the journal imposes none.
    """

    name: str
    publisher: str = ""
    aliases: List[str] = field(default_factory=list)
    page_limit: Optional[int] = None
    word_limit: Optional[int] = None
    abstract_word_limit: Optional[int] = None
    figure_limit: Optional[int] = None
    reference_style: str = "plain"
    main_document_formats: List[str] = field(default_factory=list)
    figure_formats: List[str] = field(default_factory=list)
    blind_review: bool = False
    platform: Optional[str] = None
    cover_letter_required: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "JournalRequirements":
        formatting = data.get("formatting") or {}
        files = data.get("file_requirements") or {}
        process = data.get("submission_process") or {}
        return cls(
            name=data["name"],
            publisher=data.get("publisher") or "",
            aliases=list(data.get("aliases") or []),
            page_limit=formatting.get("page_limit") or None,
            word_limit=formatting.get("word_limit") or None,
            abstract_word_limit=formatting.get("abstract_word_limit") or None,
            figure_limit=formatting.get("figure_limit") or None,
            reference_style=formatting.get("reference_style") or "plain",
            main_document_formats=list(files.get("main_document") or []),
            figure_formats=list(files.get("figures") or []),
            blind_review=bool(files.get("blind_review", False)),
            platform=process.get("platform"),
            cover_letter_required=bool(process.get("cover_letter_required", False)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "publisher": self.publisher,
            "aliases": list(self.aliases),
            "formatting": {
                "page_limit": self.page_limit,
                "word_limit": self.word_limit,
                "abstract_word_limit": self.abstract_word_limit,
                "figure_limit": self.figure_limit,
                "reference_style": self.reference_style,
            },
            "file_requirements": {
                "main_document": list(self.main_document_formats),
                "figures": list(self.figure_formats),
                "blind_review": self.blind_review,
            },
            "submission_process": {
                "platform": self.platform,
                "cover_letter_required": self.cover_letter_required,
            },
        }


class JournalDirectory(ABC):
    """Abstract journal requirements lookup."""

    @abstractmethod
    def journals(self) -> List[JournalRequirements]:
        """All known journals, in lookup priority order."""

    def find_journal(self, name: str) -> JournalRequirements:
        """
        Requirements for the journal called name.

        Matching is case-insensitive: an exact name or alias match wins,
        otherwise the first journal whose name contains name.

        Raises:
            JournalNotFoundError: If nothing matches
        """
        query = name.strip().lower()
        known = self.journals()

        for journal in known:
            if query == journal.name.lower() or query in (a.lower() for a in journal.aliases):
                return journal

        if query:
            for journal in known:
                if query in journal.name.lower():
                    _log_debug(f"Journal '{name}' matched '{journal.name}' by substring")
                    return journal

        raise JournalNotFoundError(name, [j.name for j in known])


class InMemoryJournalDirectory(JournalDirectory):
    def __init__(self, journals: Iterable[JournalRequirements] = ()):
        self._journals = list(journals)

    def journals(self) -> List[JournalRequirements]:
        return list(self._journals)


class YamlJournalDirectory(JournalDirectory):
    """
    Journal catalog loaded from YAML with OmegaConf.

    The file has a top-level ``journals`` list; see
    paperforge/contexts/submission/data/journal_requirements.yaml.

    Args:
        path: Catalog file (default: JOURNAL_REQUIREMENTS_PATH)
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else JOURNAL_REQUIREMENTS_PATH
        self._journals: Optional[List[JournalRequirements]] = None

    def journals(self) -> List[JournalRequirements]:
        if self._journals is None:
            data = OmegaConf.to_container(OmegaConf.load(self.path), resolve=True)
            self._journals = [JournalRequirements.from_dict(j) for j in data.get("journals") or []]
            _log_debug(f"Loaded {len(self._journals)} journals from {self.path}")
        return list(self._journals)
