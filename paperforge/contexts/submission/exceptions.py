"""Exceptions for the submission context."""

from typing import List, Optional


class JournalNotFoundError(LookupError):
    """
    Raised when a journal name matches no entry in the journal directory.

    Attributes:
        journal_name: Name that was looked up
        known_journals: Names the directory does know, for the error message
    """

    def __init__(self, journal_name: str, known_journals: Optional[List[str]] = None):
        self.journal_name = journal_name
        self.known_journals = known_journals or []

        message = f"Journal not found: {journal_name}"
        if self.known_journals:
            message += f" | Known journals: {', '.join(self.known_journals)}"

        super().__init__(message)


class InvalidRequestError(ValueError):
    """
    Raised when a dispatcher request is missing a field its operation needs.

    Attributes:
        operation: Requested operation name
        field_name: Missing or invalid field
    """

    def __init__(self, message: str, operation: Optional[str] = None, field_name: Optional[str] = None):
        self.operation = operation
        self.field_name = field_name
        super().__init__(message)
