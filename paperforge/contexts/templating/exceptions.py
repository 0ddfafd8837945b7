"""Exceptions for template resolution with source references."""

from typing import Optional


class TemplateError(Exception):
    """
    Base class for template resolution failures.

    Attributes:
        message: Error description
        template_id: Identifier being resolved, when known
        source: Template source involved ("remote-catalog", "paper-extracted", "local-cache")
    """

    def __init__(
        self,
        message: str,
        template_id: Optional[str] = None,
        source: Optional[str] = None,
    ):
        self.message = message
        self.template_id = template_id
        self.source = source

        parts = [message]
        if template_id:
            parts.append(f"Template: {template_id}")
        if source:
            parts.append(f"Source: {source}")

        super().__init__(" | ".join(parts))


class NotFoundError(TemplateError):
    """Raised when a template id cannot be resolved (e.g., absent from the local cache)."""


class SearchError(TemplateError):
    """Raised when one of the sources fails during a fan-out search."""


class ExtractionError(TemplateError):
    """
    Raised when the paper repository reports a failed source download.

    Attributes:
        paper_id: Paper identifier that failed
    """

    def __init__(self, message: str, paper_id: Optional[str] = None):
        self.paper_id = paper_id
        super().__init__(message, source="paper-extracted")


class NoMainFileError(ExtractionError):
    """Raised when a downloaded source bundle contains no LaTeX document."""
