"""Shared fixtures: template factories and isolated collaborators."""

from datetime import datetime

import pytest

from paperforge.contexts.templating import (
    FileKind,
    InMemoryPaperRepository,
    PaperSourceExtractor,
    SimulatedTemplateCatalog,
    TemplateCache,
    TemplateFile,
    TemplateMetadata,
    TemplateRecord,
    TemplateResolver,
    TemplateSource,
)

SAMPLE_MAIN = r"""\documentclass{article}
\usepackage{amsmath}
\usepackage{graphicx}
\title{{{PROJECT_NAME}}}
\author{Your Name}
\begin{document}
\maketitle
\begin{abstract}
Your abstract goes here.
\end{abstract}
\begin{IEEEkeywords}
keyword1, keyword2, keyword3
\end{IEEEkeywords}
Contact: your.email@university.edu
\section{Introduction}
\bibliographystyle{plain}
\bibliography{references}
\end{document}
"""


def build_template(
    template_id="local-article",
    source=TemplateSource.LOCAL_CACHE,
    last_updated=None,
    rating=4.0,
    main_content=SAMPLE_MAIN,
    **kwargs,
):
    return TemplateRecord(
        id=template_id,
        name=kwargs.pop("name", f"Template {template_id}"),
        source=source,
        files=[
            TemplateFile("main.tex", main_content, FileKind.DOCUMENT, required=True),
            TemplateFile("references.bib", "@article{a, title={A}}", FileKind.BIBLIOGRAPHY),
        ],
        metadata=TemplateMetadata(version="1.0", authors=["Tester"], tags=["test"], rating=rating),
        last_updated=last_updated or datetime.now(),
        **kwargs,
    )


@pytest.fixture
def make_template():
    """Factory for TemplateRecords with a required main.tex and a bibliography."""
    return build_template


@pytest.fixture
def cache(tmp_path):
    return TemplateCache(tmp_path / "cache")


@pytest.fixture
def paper_repository():
    return InMemoryPaperRepository()


@pytest.fixture
def resolver(cache, paper_repository):
    return TemplateResolver(
        catalog=SimulatedTemplateCatalog(),
        extractor=PaperSourceExtractor(paper_repository),
        cache=cache,
    )
