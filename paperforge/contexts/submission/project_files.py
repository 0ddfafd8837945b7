"""
Read-only lookups on a project directory shared by validation, packaging and checklists.

Only files directly in the project root count; subdirectories other than
figures/ are never inspected.
"""

from pathlib import Path
from typing import List, Optional

DOCUMENT_CLASS_MARKER = r"\documentclass"
PREFERRED_MAIN_FILE = "main.tex"
FIGURES_DIR = "figures"

# Root files copied into a submission package
PACKAGE_EXTENSIONS = (".tex", ".bib", ".pdf", ".cls", ".sty")

# Build artifacts removed by clean
TEMPORARY_EXTENSIONS = (".aux", ".log", ".bbl", ".blg", ".toc", ".out", ".fls", ".fdb_latexmk")


def root_files(project_path: Path, suffix: Optional[str] = None) -> List[Path]:
    """Regular files in the project root, sorted by name, optionally filtered by suffix."""
    files = sorted(p for p in Path(project_path).iterdir() if p.is_file())
    if suffix is not None:
        files = [p for p in files if p.suffix.lower() == suffix]
    return files


def find_main_document(project_path: Path) -> Optional[Path]:
    """
    Primary .tex file of a project.

    main.tex wins if present; otherwise the first .tex file declaring a
    document class; otherwise the first .tex file. None if there is none.
    """
    tex_files = root_files(project_path, ".tex")
    if not tex_files:
        return None

    for tex_file in tex_files:
        if tex_file.name == PREFERRED_MAIN_FILE:
            return tex_file

    for tex_file in tex_files:
        if DOCUMENT_CLASS_MARKER in tex_file.read_text(encoding="utf-8", errors="replace"):
            return tex_file

    return tex_files[0]


def read_main_document(project_path: Path) -> str:
    """Contents of the primary document, or an empty string if there is none."""
    main_file = find_main_document(project_path)
    if main_file is None:
        return ""
    return main_file.read_text(encoding="utf-8", errors="replace")
