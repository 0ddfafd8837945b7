"""
Submission packaging and build-artifact cleanup.
"""

import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from paperforge.contexts.submission.logger import _log_debug, _log_info, log_package_result
from paperforge.contexts.submission.project_files import (
    FIGURES_DIR,
    PACKAGE_EXTENSIONS,
    TEMPORARY_EXTENSIONS,
    root_files,
)
from paperforge.utils.timestamp import now

DEFAULT_PACKAGE_DIR = "submission-package"
PACKAGE_PREFIX = "submission-"


@dataclass
class SubmissionPackage:
    """
    A created package directory.

    Attributes:
        path: Package directory
        files: Copied paths, relative to the package directory
    """

    path: Path
    files: List[str] = field(default_factory=list)


def _fresh_directory(parent: Path) -> Path:
    base = parent / f"{PACKAGE_PREFIX}{now()}"
    candidate = base
    suffix = 1
    while candidate.exists():
        candidate = base.with_name(f"{base.name}-{suffix}")
        suffix += 1
    candidate.mkdir(parents=True)
    return candidate


def create_submission_package(
    project_path: Path, output_dir: Optional[Path] = None
) -> SubmissionPackage:
    """
    Copy the submittable subset of a project into a new timestamped directory.

    Root files with a .tex, .bib, .pdf, .cls or .sty extension are copied;
    figures/ is mirrored recursively when present.

    Args:
        project_path: Project directory
        output_dir: Parent of the package directory
            (default: <project_path>/submission-package)

    Raises:
        FileNotFoundError: If project_path does not exist
    """
    project_path = Path(project_path)
    if not project_path.is_dir():
        raise FileNotFoundError(f"Project directory not found: {project_path}")

    parent = Path(output_dir) if output_dir is not None else project_path / DEFAULT_PACKAGE_DIR
    package_path = _fresh_directory(parent)
    package = SubmissionPackage(path=package_path)

    for source in root_files(project_path):
        if source.suffix.lower() in PACKAGE_EXTENSIONS:
            shutil.copy2(source, package_path / source.name)
            package.files.append(source.name)

    figures = project_path / FIGURES_DIR
    if figures.is_dir():
        shutil.copytree(figures, package_path / FIGURES_DIR)
        package.files.extend(
            sorted(
                str(p.relative_to(package_path).as_posix())
                for p in (package_path / FIGURES_DIR).rglob("*")
                if p.is_file()
            )
        )
    else:
        _log_debug(f"No {FIGURES_DIR}/ directory in {project_path}")

    log_package_result(package_path, package.files)
    return package


def clean_project(project_path: Path) -> List[str]:
    """
    Delete LaTeX build artifacts from the project root.

    Returns:
        Sorted names of the removed files

    Raises:
        FileNotFoundError: If project_path does not exist
    """
    project_path = Path(project_path)
    if not project_path.is_dir():
        raise FileNotFoundError(f"Project directory not found: {project_path}")

    removed = []
    for path in root_files(project_path):
        if path.suffix.lower() in TEMPORARY_EXTENSIONS:
            path.unlink()
            removed.append(path.name)

    _log_info(f"Removed {len(removed)} temporary files from {project_path}")
    return sorted(removed)
