"""
Templating context logger.

Provides logging interface for templating context with automatic [template] prefix.
All templating modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from paperforge.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[template]"


def setup_templating_logger(log_dir: Path, cache_dir: Path = None) -> Path:
    """
    Setup logger for templating context.

    Args:
        log_dir: Directory for this templating session
        cache_dir: Template cache directory, recorded in the provenance header

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="template",
        log_dir=log_dir,
        extra_provenance={"Template cache": cache_dir} if cache_dir else None,
    )


# Wrapper functions with automatic [template] prefix


def _log_info(message: str) -> None:
    """Log info message with [template] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [template] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [template] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [template] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [template] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level templating-specific logging helpers


def log_fetch_start(template_id: str, source: str) -> None:
    """Log start of a template fetch."""
    _log_info(f"Fetching template {template_id} from {source}")


def log_fetch_result(template_id: str, source: str, from_cache: bool, elapsed_time: float) -> None:
    """Log where a fetched template was served from."""
    origin = "cache" if from_cache else source
    _log_success(f"{template_id}: resolved from {origin} ({elapsed_time:.2f}s)")


def log_search_result(num_remote: int, num_cached: int, num_unique: int) -> None:
    """Log the fan-out search summary."""
    _log_info(
        f"Search returned {num_unique} templates "
        f"(remote: {num_remote}, cached: {num_cached}, after de-duplication: {num_unique})"
    )


def log_sweep_result(evicted: list, remaining: int) -> None:
    """Log which cache entries a sweep evicted."""
    if evicted:
        _log_info(f"Evicted {len(evicted)} expired templates, {remaining} remain")
        for template_id in evicted:
            _log_debug(f"  Evicted: {template_id}")
    else:
        _log_debug(f"No expired templates ({remaining} cached)")


def log_project_result(project_name: str, result) -> None:
    """
    Log the outcome of a project initialization.

    Args:
        project_name: Project name
        result: ProjectResult from ProjectInitializer.initialize()
    """
    if result.success:
        _log_success(
            f"{project_name}: created {len(result.files_created)} files at {result.project_path}"
        )
    else:
        _log_error(f"Failed to initialize {project_name} at {result.project_path}")
        for error in result.errors:
            _log_error(f"  Error: {error}")
    for warning in result.warnings:
        _log_warning(f"  Warning: {warning}")
