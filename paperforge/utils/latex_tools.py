"""
Balanced-brace helpers for LaTeX command arguments.

Regex alone cannot match ``\\author{A\\thanks{B}}`` correctly, so commands whose
arguments may nest are located with a brace counter instead.
"""

import re
from typing import Callable, Iterator, Optional, Tuple, Union


def extract_balanced_delimiters(
    text: str,
    start_pos: int,
    open_char: str = "{",
    close_char: str = "}",
    escape_char: str = "\\",
) -> Tuple[str, int]:
    """
    Extract content between balanced delimiters, handling escaped characters.

    Assumes start_pos is just AFTER an opening delimiter.

    Args:
        text: Text containing delimited content
        start_pos: Position right after the opening delimiter
        open_char: Opening delimiter character
        close_char: Closing delimiter character
        escape_char: Character used for escaping

    Returns:
        (content, end_pos) where end_pos is the position after the closing delimiter

    Raises:
        ValueError: If delimiters are unmatched

    Example:
        >>> extract_balanced_delimiters("foo {bar {nested} baz} qux", 5)
        ('bar {nested} baz', 22)
    """
    depth = 1
    pos = start_pos

    while pos < len(text) and depth > 0:
        char = text[pos]
        if char == escape_char:
            pos += 2
            continue
        if char == open_char:
            depth += 1
        elif char == close_char:
            depth -= 1
        pos += 1

    if depth != 0:
        raise ValueError(
            f"Unmatched {open_char}{close_char} delimiters starting at position {start_pos}"
        )

    return text[start_pos : pos - 1], pos


def _command_regex(command: str) -> re.Pattern:
    # Optional [..] argument, then the mandatory brace; the name must end there
    # so \title does not match \titlepage.
    return re.compile(rf"\\{re.escape(command)}(?![A-Za-z@])\s*(\[[^\]]*\])?\s*\{{")


def iter_command_arguments(text: str, command: str) -> Iterator[Tuple[int, int, str, str]]:
    """
    Yield every ``\\command[opt]{arg}`` occurrence with balanced-brace arguments.

    Yields:
        (start, end, optional_arg, argument) where start/end span the whole
        command and optional_arg includes its brackets (empty if absent)

    Example:
        >>> list(iter_command_arguments(r"\\title{A {B}}", "title"))
        [(0, 13, '', 'A {B}')]
    """
    pattern = _command_regex(command)
    pos = 0
    while True:
        match = pattern.search(text, pos)
        if match is None:
            return
        try:
            argument, end = extract_balanced_delimiters(text, match.end())
        except ValueError:
            return
        yield match.start(), end, match.group(1) or "", argument
        pos = end


def replace_command_argument(
    text: str,
    command: str,
    replacement: Union[str, Callable[[str], str]],
    count: Optional[int] = None,
    keep_optional: bool = True,
) -> str:
    """
    Replace the brace argument of ``\\command{...}`` occurrences.

    Args:
        text: LaTeX source
        command: Command name without backslash (e.g., "author")
        replacement: New argument text, or a callable mapping old argument to new
        count: Maximum number of occurrences to replace (None for all)
        keep_optional: Keep a ``[...]`` optional argument in front of the braces

    Returns:
        Text with arguments replaced

    Example:
        >>> replace_command_argument(r"\\title{{{PROJECT_NAME}}}", "title", "My Paper")
        '\\\\title{My Paper}'
    """
    pieces = []
    last = 0
    for replaced, (start, end, optional, argument) in enumerate(
        iter_command_arguments(text, command)
    ):
        if count is not None and replaced >= count:
            break
        new_argument = replacement(argument) if callable(replacement) else replacement
        prefix = optional if keep_optional else ""
        pieces.append(text[last:start])
        pieces.append(f"\\{command}{prefix}{{{new_argument}}}")
        last = end
    pieces.append(text[last:])
    return "".join(pieces)


def extract_command_argument(text: str, command: str) -> Optional[str]:
    """Return the first ``\\command{...}`` argument, or None if absent."""
    for _, _, _, argument in iter_command_arguments(text, command):
        return argument
    return None
