"""
Paper repository collaborator.

The extractor only talks to a PaperRepository. Two implementations ship:
InMemoryPaperRepository (explicitly seeded, counts calls, used by tests) and
SimulatedPaperRepository (generates a deterministic sample paper for any
arXiv-shaped id, used when no real repository client is configured).
"""

from abc import ABC, abstractmethod
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class DownloadStatus(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"


@dataclass
class DownloadResult:
    """
    Outcome of a source download.

    Attributes:
        status: SUCCESS or FAILED
        files: Relative path -> text content of the source bundle
        error: Failure reason reported by the repository
    """

    status: DownloadStatus
    files: Dict[str, str] = field(default_factory=dict)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == DownloadStatus.SUCCESS


@dataclass
class PaperMetadata:
    id: str
    title: str
    authors: List[str] = field(default_factory=list)
    abstract: str = ""
    subjects: List[str] = field(default_factory=list)


class PaperRepository(ABC):
    """Abstract source of paper bundles and paper metadata."""

    @abstractmethod
    def download_source(self, paper_id: str) -> DownloadResult:
        """Fetch the LaTeX source bundle for a paper."""

    @abstractmethod
    def search_metadata(self, query: str, max_results: int = 10) -> List[PaperMetadata]:
        """Search paper metadata; ``id:<paper_id>`` queries look up one paper."""


class InMemoryPaperRepository(PaperRepository):
    """
    Repository backed by a dict, with per-paper download counters.

    Example:
        >>> repo = InMemoryPaperRepository()
        >>> repo.add_paper("2301.00001", {"main.tex": "\\\\documentclass{article}"})
        >>> repo.download_source("2301.00001").ok
        True
    """

    def __init__(self):
        self._sources: Dict[str, Dict[str, str]] = {}
        self._metadata: Dict[str, PaperMetadata] = {}
        self._failures: Dict[str, str] = {}
        self.download_calls: Counter = Counter()

    def add_paper(
        self,
        paper_id: str,
        files: Dict[str, str],
        metadata: Optional[PaperMetadata] = None,
    ) -> None:
        self._sources[paper_id] = dict(files)
        if metadata is not None:
            self._metadata[paper_id] = metadata

    def fail_download(self, paper_id: str, error: str) -> None:
        """Make every download of paper_id report FAILED with error."""
        self._failures[paper_id] = error

    def download_source(self, paper_id: str) -> DownloadResult:
        self.download_calls[paper_id] += 1
        if paper_id in self._failures:
            return DownloadResult(status=DownloadStatus.FAILED, error=self._failures[paper_id])
        if paper_id not in self._sources:
            return DownloadResult(
                status=DownloadStatus.FAILED, error=f"Paper {paper_id} not found"
            )
        return DownloadResult(status=DownloadStatus.SUCCESS, files=dict(self._sources[paper_id]))

    def search_metadata(self, query: str, max_results: int = 10) -> List[PaperMetadata]:
        if query.startswith("id:"):
            paper_id = query[len("id:"):]
            found = self._metadata.get(paper_id)
            return [found] if found else []

        query = query.lower()
        hits = [
            m
            for m in self._metadata.values()
            if query in m.title.lower() or query in m.abstract.lower()
        ]
        return hits[:max_results]


class SimulatedPaperRepository(InMemoryPaperRepository):
    """
    Generates a sample paper bundle for any id not explicitly added.

    Generated content depends only on the paper id, so repeated downloads are
    identical.
    """

    def download_source(self, paper_id: str) -> DownloadResult:
        if paper_id not in self._sources and paper_id not in self._failures:
            self.add_paper(
                paper_id,
                {
                    "main.tex": sample_paper_latex(paper_id),
                    "references.bib": SAMPLE_BIBLIOGRAPHY,
                },
                PaperMetadata(
                    id=paper_id,
                    title=f"Sample Paper from arXiv:{paper_id}",
                    authors=["John Doe", "Jane Smith"],
                    abstract=(
                        f"This is a sample abstract extracted from arXiv paper {paper_id}."
                    ),
                    subjects=["Computer Science"],
                ),
            )
        return super().download_source(paper_id)


def sample_paper_latex(paper_id: str) -> str:
    return rf"""\documentclass[11pt]{{article}}
\usepackage{{amsmath}}
\usepackage{{amsfonts}}
\usepackage{{amssymb}}
\usepackage{{graphicx}}
\usepackage{{cite}}
\usepackage{{url}}

\title{{Sample Paper from arXiv:{paper_id}}}
\author{{John Doe\thanks{{Department of Computer Science, Example University, john.doe@example.edu}} \and Jane Smith\thanks{{Department of Mathematics, Example University}}}}
\date{{\today}}

\begin{{document}}

\maketitle

\begin{{abstract}}
This is a sample abstract extracted from arXiv paper {paper_id}. The abstract provides a brief overview of the research presented in this paper.
\end{{abstract}}

\section{{Introduction}}

This is the introduction section where the problem is introduced and motivated.

\section{{Related Work}}

This section discusses previous work related to the current research.

\section{{Methodology}}

\subsection{{Data Collection}}

Details about data collection methods.

\subsection{{Analysis}}

Details about analysis methods.

\section{{Results}}

\begin{{figure}}[htbp]
\centering
\includegraphics[width=0.8\textwidth]{{/home/jdoe/paper/plots/results_plot.png}}
\caption{{Results visualization}}
\label{{fig:results}}
\end{{figure}}

\section{{Conclusion}}

Concluding remarks and future work.

\bibliographystyle{{plain}}
\bibliography{{references}}

\end{{document}}
"""


SAMPLE_BIBLIOGRAPHY = """@article{smith2023example,
  title={An Example Research Paper},
  author={Smith, John and Doe, Jane},
  journal={Journal of Example Research},
  volume={15},
  number={3},
  pages={123--145},
  year={2023},
  publisher={Example Publisher}
}

@book{johnson2021book,
  title={Example Textbook},
  author={Johnson, Carol},
  year={2021},
  publisher={Example Press}
}
"""
