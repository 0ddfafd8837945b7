"""
Regex-based document structure extraction for imported papers.

This is an import aid, not a LaTeX parser: it reports what the patterns in
latex_patterns.py can see (document class, packages, headings, floats,
bibliography) and silently skips constructs with nested braces.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from paperforge.contexts.templating.latex_patterns import (
    DOCUMENT_CLASS_TAGS,
    PACKAGE_TAGS,
    SECTION_LEVELS,
    DocumentRegex,
    StructureRegex,
)

DEFAULT_DOCUMENT_CLASS = "article"
DEFAULT_BIBLIOGRAPHY_STYLE = "plain"


@dataclass
class SectionInfo:
    level: int
    title: str
    start_line: int


@dataclass
class FigureInfo:
    file_name: str
    caption: str
    label: str


@dataclass
class TableInfo:
    caption: str
    label: str
    columns: int


@dataclass
class BibliographyInfo:
    style: str = DEFAULT_BIBLIOGRAPHY_STYLE
    file: Optional[str] = None


@dataclass
class DocumentStructure:
    """Approximate outline of a LaTeX document."""

    document_class: str = DEFAULT_DOCUMENT_CLASS
    packages: List[str] = field(default_factory=list)
    sections: List[SectionInfo] = field(default_factory=list)
    figures: List[FigureInfo] = field(default_factory=list)
    tables: List[TableInfo] = field(default_factory=list)
    bibliography: BibliographyInfo = field(default_factory=BibliographyInfo)


def extract_packages(latex: str) -> List[str]:
    """
    List \\usepackage names in order of appearance.

    Comma-separated lists (``\\usepackage{amsmath,amssymb}``) yield one entry per package.
    """
    packages = []
    for match in re.finditer(DocumentRegex.USEPACKAGE, latex):
        for name in match.group(1).split(","):
            name = name.strip()
            if name and name not in packages:
                packages.append(name)
    return packages


def extract_sections(latex: str) -> List[SectionInfo]:
    """Headings with nesting level (chapter=0 .. subsubsection=3) and 1-based line."""
    sections = []
    pattern = re.compile(StructureRegex.SECTION)
    for line_number, line in enumerate(latex.split("\n"), start=1):
        match = pattern.search(line)
        if match:
            sections.append(
                SectionInfo(
                    level=SECTION_LEVELS.get(match.group(1), 1),
                    title=match.group(2),
                    start_line=line_number,
                )
            )
    return sections


def extract_figures(latex: str) -> List[FigureInfo]:
    """Figure environments that have an image, a caption and a label, in that order."""
    return [
        FigureInfo(file_name=m.group(1), caption=m.group(2), label=m.group(3))
        for m in re.finditer(StructureRegex.FIGURE, latex)
    ]


def extract_tables(latex: str) -> List[TableInfo]:
    """Table environments with caption, label and a tabular column spec."""
    tables = []
    for match in re.finditer(StructureRegex.TABLE, latex):
        column_spec = match.group(3)
        tables.append(
            TableInfo(
                caption=match.group(1),
                label=match.group(2),
                columns=len(re.sub(StructureRegex.TABULAR_COLUMN_TYPES, "", column_spec)),
            )
        )
    return tables


def extract_bibliography_info(latex: str) -> BibliographyInfo:
    style_match = re.search(StructureRegex.BIBLIOGRAPHY_STYLE, latex)
    file_match = re.search(StructureRegex.BIBLIOGRAPHY, latex)
    return BibliographyInfo(
        style=style_match.group(1) if style_match else DEFAULT_BIBLIOGRAPHY_STYLE,
        file=f"{file_match.group(1)}.bib" if file_match else None,
    )


def extract_document_structure(latex: str) -> DocumentStructure:
    """
    Extract the outline of a LaTeX document.

    Args:
        latex: Full source of the primary document

    Returns:
        DocumentStructure (defaults to an article with plain bibliography style)
    """
    class_match = re.search(DocumentRegex.DOCUMENT_CLASS, latex)
    return DocumentStructure(
        document_class=class_match.group(1) if class_match else DEFAULT_DOCUMENT_CLASS,
        packages=extract_packages(latex),
        sections=extract_sections(latex),
        figures=extract_figures(latex),
        tables=extract_tables(latex),
        bibliography=extract_bibliography_info(latex),
    )


def extract_dependencies(files: Dict[str, str]) -> List[str]:
    """Union of packages used across all files, in first-seen order."""
    dependencies = []
    for content in files.values():
        for package in extract_packages(content):
            if package not in dependencies:
                dependencies.append(package)
    return dependencies


def tags_from_structure(structure: DocumentStructure) -> List[str]:
    """
    Derive the fixed tag set for a document.

    Always ``latex`` and ``academic``; plus a document-class tag and one tag per
    recognized package (math, figures, algorithms).
    """
    tags = ["latex", "academic"]

    class_tag = DOCUMENT_CLASS_TAGS.get(structure.document_class)
    if class_tag:
        tags.append(class_tag)

    for package, tag in PACKAGE_TAGS.items():
        if package in structure.packages:
            tags.append(tag)

    return tags


def categorize(structure: DocumentStructure, subjects: Iterable[str] = ()) -> List[str]:
    """
    Categories for an extracted paper from repository subjects and structure.

    Args:
        structure: Parsed primary document
        subjects: Subject strings reported by the paper repository
    """
    categories = ["academic"]

    subject_text = " ".join(subjects).lower()
    for needle, category in (
        ("computer science", "computer-science"),
        ("mathematics", "mathematics"),
        ("physics", "physics"),
        ("biology", "biology"),
    ):
        if needle in subject_text:
            categories.append(category)

    if len(structure.figures) > 5:
        categories.append("experimental")
    if "algorithm" in structure.packages:
        categories.append("computational")

    return categories
