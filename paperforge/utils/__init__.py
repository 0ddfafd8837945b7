"""
Shared utilities for PAPERFORGE.

Common functionality used across contexts:
- Logger configuration
- LaTeX brace helpers
- Timestamps
"""

from paperforge.utils.timestamp import now, parse_timestamp

__all__ = ["now", "parse_timestamp"]
