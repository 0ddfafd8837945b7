"""
Submission context logger.

Provides logging interface for submission context with automatic [submit] prefix.
All submission modules should import from this module, not from utils.logger directly.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

from paperforge.utils.logger import setup_logger as _setup_logger

load_dotenv()

CONTEXT_PREFIX = "[submit]"


def setup_submission_logger(log_dir: Path, console_level: str = "INFO") -> Path:
    """
    Setup logger for submission context.

    Args:
        log_dir: Directory for this submission session
        console_level: Minimum level echoed to stdout

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="submit",
        log_dir=log_dir,
        extra_provenance={"LaTeX compiler": os.getenv("LATEX_COMPILER", "pdflatex")},
        console_level=console_level,
    )


# Wrapper functions with automatic [submit] prefix


def _log_info(message: str) -> None:
    """Log info message with [submit] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [submit] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [submit] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [submit] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [submit] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level submission-specific logging helpers


def log_compilation_start(tex_file: Path, num_passes: int) -> None:
    """Log start of compilation with context."""
    _log_info(f"Compiling {tex_file.name} in {tex_file.parent}")
    _log_debug(f"  Passes: {num_passes}")


def log_compilation_result(result, elapsed_time: float, error_limit: int = 5) -> None:
    """
    Log compilation result with diagnostics.

    Args:
        result: CompilationResult from a LatexCompiler
        elapsed_time: Time taken to compile
        error_limit: Number of errors to list individually
    """
    if result.success:
        _log_success(f"Compilation succeeded: {len(result.warnings)} warnings ({elapsed_time:.2f}s)")
    else:
        _log_error(f"Compilation failed: {len(result.errors)} errors ({elapsed_time:.2f}s)")
        for i, err in enumerate(result.errors[:error_limit], 1):
            _log_error(f"  Error {i}: {err}")
        if len(result.errors) > error_limit:
            _log_error(f"  ... and {len(result.errors) - error_limit} more errors")

    for i, warn in enumerate(result.warnings[:3], 1):
        _log_debug(f"  Warning {i}: {warn}")


def log_validation_summary(project_path: Path, report) -> None:
    """
    Log a validation report as one summary line plus one line per failed check.

    Args:
        project_path: Validated project
        report: ValidationReport from SubmissionValidator.validate()
    """
    passed, total = report.checks_passed()
    if report.passed:
        _log_success(f"{project_path.name}: {passed}/{total} checks passed")
    else:
        _log_warning(f"{project_path.name}: {passed}/{total} checks passed")

    for issue in report.issues():
        _log_warning(f"  {issue}")


def log_package_result(package_path: Path, copied: list) -> None:
    """Log the files copied into a submission package."""
    _log_success(f"Packaged {len(copied)} files into {package_path}")
    for name in copied:
        _log_debug(f"  Copied: {name}")
