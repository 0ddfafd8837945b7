"""
LaTeX Compilation

Collaborator that turns a project directory into a PDF. PdfLatexCompiler
runs the configured TeX engine; StaticCompiler returns a fixed result for
tests and dry runs.
"""

import os
import re
import shutil
import subprocess
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import List, Optional, Tuple

from dotenv import load_dotenv

from paperforge.contexts.submission.logger import (
    _log_debug,
    log_compilation_result,
    log_compilation_start,
)
from paperforge.contexts.submission.project_files import find_main_document

load_dotenv()

LATEX_COMPILER = os.getenv("LATEX_COMPILER", "pdflatex")


@dataclass
class CompilationResult:
    """
    Result of compiling a project.

    Attributes:
        success: Whether compilation succeeded
        pdf_generated: Whether a PDF was written
        errors: Parsed LaTeX errors
        warnings: Parsed LaTeX warnings
        log_path: Path to the engine's .log file (None if none was written)
        pdf_path: Path to the generated PDF (None if failed)
    """

    success: bool
    pdf_generated: bool = False
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    log_path: Optional[Path] = None
    pdf_path: Optional[Path] = None


def _parse_latex_log(log_content: str) -> Tuple[List[str], List[str]]:
    """
    Parse LaTeX log file for errors and warnings.

    Args:
        log_content: Content of the .log file

    Returns:
        Tuple of (errors, warnings)
    """
    errors = []
    warnings = []

    # LaTeX error pattern: "! Error message"
    for match in re.finditer(r"^! (.+)$", log_content, re.MULTILINE):
        errors.append(match.group(1).strip())

    # -file-line-error style: "./main.tex:12: Undefined control sequence."
    for match in re.finditer(r"^[^\s:]+\.tex:\d+: (.+)$", log_content, re.MULTILINE):
        message = match.group(1).strip()
        if message not in errors:
            errors.append(message)

    warning_patterns = [
        r"LaTeX Warning: (.+)",
        r"Package \w+ Warning: (.+)",
        r"Overfull \\hbox \((.+)\)",
        r"Underfull \\hbox \((.+)\)",
    ]
    for pattern in warning_patterns:
        for match in re.finditer(pattern, log_content, re.MULTILINE):
            warnings.append(match.group(1).strip())

    return errors, warnings


class LatexCompiler(ABC):
    """Abstract LaTeX compilation collaborator."""

    @abstractmethod
    def compile(self, project_path: Path) -> CompilationResult:
        """Compile the project's primary document."""


class PdfLatexCompiler(LatexCompiler):
    """
    Runs a TeX engine in the project directory.

    Outputs (.pdf, .aux, .log, ...) are left next to the sources; clean
    removes the intermediates afterwards.

    Args:
        compiler: Engine executable (default: LATEX_COMPILER env, pdflatex)
        num_passes: Engine passes (2 resolves cross-references)
    """

    def __init__(self, compiler: str = LATEX_COMPILER, num_passes: int = 2):
        self.compiler = compiler
        self.num_passes = num_passes

    def is_available(self) -> bool:
        return shutil.which(self.compiler) is not None

    def compile(self, project_path: Path) -> CompilationResult:
        project_path = Path(project_path)
        if not project_path.is_dir():
            return CompilationResult(success=False, errors=[f"Project directory not found: {project_path}"])

        tex_file = find_main_document(project_path)
        if tex_file is None:
            return CompilationResult(success=False, errors=[f"No .tex file in {project_path}"])

        if not self.is_available():
            return CompilationResult(
                success=False, errors=[f"LaTeX compiler '{self.compiler}' not found on PATH"]
            )

        log_compilation_start(tex_file, self.num_passes)
        start_time = time.time()

        # Stale outputs would make a failed run look successful
        pdf_path = project_path / f"{tex_file.stem}.pdf"
        log_file = project_path / f"{tex_file.stem}.log"
        for stale in (pdf_path, log_file):
            if stale.exists():
                stale.unlink()

        success = True
        for _ in range(self.num_passes):
            cmd = [self.compiler, "-interaction=nonstopmode", "-file-line-error", tex_file.name]
            completed = subprocess.run(
                cmd,
                cwd=project_path,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
            if completed.returncode != 0:
                _log_debug(f"{self.compiler} exited with {completed.returncode}")
                success = False
                break

        errors: List[str] = []
        warnings: List[str] = []
        if log_file.exists():
            # pdflatex writes its log in latin-1
            errors, warnings = _parse_latex_log(log_file.read_text(encoding="latin-1"))

        pdf_generated = pdf_path.exists()
        if not pdf_generated:
            success = False
            if not errors:
                errors.append("PDF file was not generated")
        elif not errors:
            # A PDF with no logged errors counts even if the engine exited non-zero
            success = True

        result = CompilationResult(
            success=success,
            pdf_generated=pdf_generated,
            errors=errors,
            warnings=warnings,
            log_path=log_file if log_file.exists() else None,
            pdf_path=pdf_path if pdf_generated else None,
        )
        log_compilation_result(result, time.time() - start_time)
        return result


class StaticCompiler(LatexCompiler):
    """
    Returns the same result for every project without running anything.

    Args:
        result: Result to return (default: a successful compilation)
    """

    def __init__(self, result: Optional[CompilationResult] = None):
        self.result = result or CompilationResult(success=True, pdf_generated=True)
        self.compiled: List[Path] = []

    def compile(self, project_path: Path) -> CompilationResult:
        self.compiled.append(Path(project_path))
        return replace(self.result, errors=list(self.result.errors), warnings=list(self.result.warnings))
