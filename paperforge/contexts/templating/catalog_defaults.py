"""
Seed content for the remote template catalog.

Provides the fixed journal templates the catalog starts with and the generic
article used when a remote id is not in the catalog.
"""

from datetime import datetime
from typing import List

from paperforge.contexts.templating.template_data_structure import (
    FileKind,
    TemplateFile,
    TemplateMetadata,
    TemplateRecord,
    TemplateSource,
)

GENERIC_ARTICLE = r"""\documentclass[12pt]{article}
\usepackage[utf8]{inputenc}
\usepackage{amsmath}
\usepackage{amsfonts}
\usepackage{amssymb}
\usepackage{graphicx}
\usepackage{cite}

\title{Your Paper Title}
\author{Your Name}
\date{\today}

\begin{document}

\maketitle

\begin{abstract}
Your abstract goes here.
\end{abstract}

\section{Introduction}

Your introduction goes here.

\section{Methods}

Your methods section goes here.

\section{Results}

Your results section goes here.

\section{Discussion}

Your discussion goes here.

\section{Conclusion}

Your conclusion goes here.

\bibliographystyle{plain}
\bibliography{references}

\end{document}
"""

GENERIC_BIBLIOGRAPHY = """@article{example2024,
  title={An Example Research Paper},
  author={Smith, John and Doe, Jane},
  journal={Journal of Example Research},
  volume={1},
  number={1},
  pages={1--10},
  year={2024},
  publisher={Example Publisher}
}
"""

NATURE_ARTICLE = r"""\documentclass{article}
\usepackage{nature}
\usepackage[utf8]{inputenc}
\usepackage{graphicx}
\usepackage{cite}

\title{Your Nature Paper Title}
\author{Author One\thanks{Corresponding author, your.email@university.edu} \and Author Two}

\begin{document}

\maketitle

\begin{abstract}
Your abstract for Nature (150 words maximum).
\end{abstract}

\section*{Introduction}

Your introduction following Nature guidelines.

\section*{Results}

Your results section.

\section*{Discussion}

Your discussion section.

\section*{Methods}

Your methods section.

\bibliographystyle{naturemag}
\bibliography{references}

\end{document}
"""

IEEE_CONFERENCE = r"""\documentclass[conference]{IEEEtran}
\usepackage{cite}
\usepackage{amsmath,amssymb,amsfonts}
\usepackage{algorithmic}
\usepackage{graphicx}
\usepackage{textcomp}
\usepackage{xcolor}

\begin{document}

\title{Your IEEE Conference Paper Title}

\author{\IEEEauthorblockN{First Author}
\IEEEauthorblockA{\textit{Department} \\
\textit{University}\\
City, Country \\
your.email@university.edu}
}

\maketitle

\begin{abstract}
Your abstract goes here.
\end{abstract}

\begin{IEEEkeywords}
keyword1, keyword2, keyword3
\end{IEEEkeywords}

\section{Introduction}

Your introduction.

\section{Related Work}

Your related work section.

\section{Methodology}

Your methodology.

\section{Results}

Your results.

\section{Conclusion}

Your conclusion.

\bibliographystyle{IEEEtran}
\bibliography{references}

\end{document}
"""

ACS_ARTICLE = r"""\documentclass[journal=jacsat,manuscript=article]{achemso}
\usepackage[version=3]{mhchem}
\usepackage{graphicx}

\author{First Author}
\affiliation{Department of Chemistry, University}
\email{your.email@university.edu}

\title{Your ACS Paper Title}

\begin{document}

\begin{abstract}
Your abstract for ACS journal.
\end{abstract}

\section{Introduction}

Your introduction following ACS guidelines.

\section{Experimental Section}

Your experimental procedures.

\section{Results and Discussion}

Your results and discussion.

\section{Conclusion}

Your conclusion.

\bibliography{references}

\end{document}
"""


def _main(content: str) -> TemplateFile:
    return TemplateFile(path="main.tex", content=content, kind=FileKind.DOCUMENT, required=True)


def default_catalog() -> List[TemplateRecord]:
    """Fresh copies of the seeded journal templates."""
    return [
        TemplateRecord(
            id="nature-template",
            name="Nature Journal Template",
            description="Official template for Nature journal submissions",
            source=TemplateSource.REMOTE_CATALOG,
            journal_name="Nature",
            publisher="Nature Publishing Group",
            category=["academic", "biology", "multidisciplinary"],
            files=[
                _main(NATURE_ARTICLE),
                TemplateFile("naturemag.bst", "% Nature bibliography style", FileKind.OTHER),
                TemplateFile("references.bib", GENERIC_BIBLIOGRAPHY, FileKind.BIBLIOGRAPHY),
            ],
            metadata=TemplateMetadata(
                version="2.0",
                authors=["Nature Editorial"],
                license="Custom",
                tags=["nature", "biology", "multidisciplinary", "high-impact"],
                download_count=15000,
                rating=4.8,
            ),
            last_updated=datetime(2024, 1, 15),
        ),
        TemplateRecord(
            id="ieee-template",
            name="IEEE Conference Template",
            description="Standard template for IEEE conference papers",
            source=TemplateSource.REMOTE_CATALOG,
            publisher="IEEE",
            category=["academic", "engineering", "computer-science"],
            files=[
                _main(IEEE_CONFERENCE),
                TemplateFile("IEEEtran.cls", "% IEEE document class", FileKind.DOCUMENT_CLASS),
                TemplateFile("references.bib", GENERIC_BIBLIOGRAPHY, FileKind.BIBLIOGRAPHY),
            ],
            metadata=TemplateMetadata(
                version="1.8",
                authors=["IEEE"],
                license="LPPL",
                tags=["ieee", "conference", "engineering", "computer-science"],
                download_count=25000,
                rating=4.6,
            ),
            last_updated=datetime(2024, 2, 1),
        ),
        TemplateRecord(
            id="acs-template",
            name="ACS Journal Template",
            description="American Chemical Society journal template",
            source=TemplateSource.REMOTE_CATALOG,
            journal_name="Journal of the American Chemical Society",
            publisher="American Chemical Society",
            category=["academic", "chemistry"],
            files=[
                _main(ACS_ARTICLE),
                TemplateFile("references.bib", GENERIC_BIBLIOGRAPHY, FileKind.BIBLIOGRAPHY),
            ],
            metadata=TemplateMetadata(
                version="3.1",
                authors=["ACS Publications"],
                license="Custom",
                tags=["acs", "chemistry", "organic", "inorganic"],
                download_count=8000,
                rating=4.4,
            ),
            last_updated=datetime(2024, 1, 20),
        ),
    ]


def placeholder_template(template_id: str) -> TemplateRecord:
    """
    Generic article standing in for a remote template that is not in the catalog.

    Everything except last_updated depends only on template_id.
    """
    return TemplateRecord(
        id=template_id,
        name=f"Template {template_id}",
        description=f"A LaTeX template fetched from the remote catalog (ID: {template_id})",
        source=TemplateSource.REMOTE_CATALOG,
        category=["academic", "article"],
        files=[
            _main(GENERIC_ARTICLE),
            TemplateFile("references.bib", GENERIC_BIBLIOGRAPHY, FileKind.BIBLIOGRAPHY),
        ],
        metadata=TemplateMetadata(
            version="1.0",
            authors=["Template Catalog"],
            license="MIT",
            tags=["academic", "article", "research"],
            last_modified=datetime.now(),
            download_count=0,
            rating=4.0,
        ),
        last_updated=datetime.now(),
    )
