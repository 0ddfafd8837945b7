"""
LaTeX Pattern Constants

Regex strings used to read the structure of extracted papers and to sanitize
them into templates. Organized into frozen dataclasses by category.

These are best-effort heuristics: arguments containing nested braces are not
matched by the structure patterns.
"""

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class DocumentRegex:
    """Preamble-level patterns."""
    DOCUMENT_CLASS_MARKER: str = r'\documentclass'
    DOCUMENT_CLASS: str = r'\\documentclass(?:\[[^\]]*\])?\{([^}]+)\}'
    USEPACKAGE: str = r'\\usepackage(?:\[[^\]]*\])?\{([^}]+)\}'


@dataclass(frozen=True)
class StructureRegex:
    """Body patterns for sections, floats and bibliography."""
    SECTION: str = r'\\(chapter|section|subsection|subsubsection)\*?\{([^}]+)\}'
    FIGURE: str = (
        r'\\begin\{figure\*?\}[\s\S]*?\\includegraphics(?:\[[^\]]*\])?\{([^}]+)\}'
        r'[\s\S]*?\\caption\{([^}]+)\}[\s\S]*?\\label\{([^}]+)\}[\s\S]*?\\end\{figure\*?\}'
    )
    TABLE: str = (
        r'\\begin\{table\*?\}[\s\S]*?\\caption\{([^}]+)\}[\s\S]*?\\label\{([^}]+)\}'
        r'[\s\S]*?\\begin\{tabular\}\{([^}]+)\}[\s\S]*?\\end\{tabular\}[\s\S]*?\\end\{table\*?\}'
    )
    TABULAR_COLUMN_TYPES: str = r'[^clr]'
    BIBLIOGRAPHY_STYLE: str = r'\\bibliographystyle\{([^}]+)\}'
    BIBLIOGRAPHY: str = r'\\bibliography\{([^}]+)\}'
    INCLUDEGRAPHICS: str = r'\\includegraphics(?:\[[^\]]*\])?\{([^}]+)\}'
    ABSTRACT: str = r'\\begin\{abstract\}([\s\S]*?)\\end\{abstract\}'


@dataclass(frozen=True)
class SanitizeRegex:
    """Patterns for stripping personal details and absolute paths."""
    EMAIL: str = r'[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}'
    INCLUDEGRAPHICS_PATH: str = r'\\includegraphics(\[[^\]]*\])?\{[^}]*/([^}/]+)\}'
    INPUT_PATH: str = r'\\input\{[^}]*/([^}/]+)\}'
    INCLUDE_PATH: str = r'\\include\{[^}]*/([^}/]+)\}'


@dataclass(frozen=True)
class Placeholders:
    """Fixed placeholder text substituted for personal details."""
    AUTHOR: str = 'Your Name'
    EMAIL: str = 'your.email@university.edu'
    AFFILIATION: str = 'Your Institution'
    ADDRESS: str = 'Your Address'
    TITLE: str = 'Your Paper Title'
    THANKS: str = 'Corresponding author'
    KEYWORDS: str = 'keyword1, keyword2, keyword3'
    FIGURES_DIR: str = 'figures'


# Command name -> placeholder used by the personal-info sanitizer
PERSONAL_INFO_COMMANDS: Dict[str, str] = {
    'author': Placeholders.AUTHOR,
    'affiliation': Placeholders.AFFILIATION,
    'address': Placeholders.ADDRESS,
    'institute': Placeholders.AFFILIATION,
    'IEEEauthorblockN': Placeholders.AUTHOR,
    'IEEEauthorblockA': Placeholders.AFFILIATION,
    'email': Placeholders.EMAIL,
    'title': Placeholders.TITLE,
    'thanks': Placeholders.THANKS,
}

# Section command -> nesting level
SECTION_LEVELS: Dict[str, int] = {
    'chapter': 0,
    'section': 1,
    'subsection': 2,
    'subsubsection': 3,
}

# \documentclass name -> tag
DOCUMENT_CLASS_TAGS: Dict[str, str] = {
    'article': 'article',
    'book': 'book',
    'report': 'report',
    'beamer': 'presentation',
}

# \usepackage name -> tag
PACKAGE_TAGS: Dict[str, str] = {
    'amsmath': 'mathematics',
    'graphicx': 'figures',
    'algorithm': 'algorithms',
}
