"""
Sanitization of extracted paper sources into reusable templates.

Both transformations are deterministic and idempotent: running them on
already-sanitized content returns it unchanged.
"""

import re

from paperforge.contexts.templating.latex_patterns import (
    PERSONAL_INFO_COMMANDS,
    Placeholders,
    SanitizeRegex,
)
from paperforge.utils.latex_tools import replace_command_argument


def remove_personal_info(latex: str) -> str:
    """
    Replace author names, emails, affiliations, titles and acknowledgements with placeholders.

    Commands are rewritten with balanced-brace matching, so a ``\\thanks{...}``
    nested in ``\\author{...}`` disappears together with the author.

    Args:
        latex: LaTeX source

    Returns:
        LaTeX source with personal details replaced by fixed placeholders

    Example:
        >>> remove_personal_info(r"\\author{Ada\\thanks{ada@lab.org}}")
        '\\\\author{Your Name}'
    """
    cleaned = latex
    for command, placeholder in PERSONAL_INFO_COMMANDS.items():
        cleaned = replace_command_argument(cleaned, command, placeholder, keep_optional=False)

    # Emails outside of \email{} (author blocks, footnotes, comments)
    cleaned = re.sub(SanitizeRegex.EMAIL, lambda _: Placeholders.EMAIL, cleaned)

    return cleaned


def generalize_paths(latex: str) -> str:
    """
    Make graphics and include paths relative to the project.

    Graphics keep their options and move under ``figures/``; ``\\input`` and
    ``\\include`` targets keep only their final path component.

    Example:
        >>> generalize_paths(r"\\includegraphics[width=3in]{/home/ada/plots/fig1.png}")
        '\\\\includegraphics[width=3in]{figures/fig1.png}'
    """
    generalized = re.sub(
        SanitizeRegex.INCLUDEGRAPHICS_PATH,
        lambda m: f"\\includegraphics{m.group(1) or ''}{{{Placeholders.FIGURES_DIR}/{m.group(2)}}}",
        latex,
    )
    generalized = re.sub(
        SanitizeRegex.INPUT_PATH, lambda m: f"\\input{{{m.group(1)}}}", generalized
    )
    generalized = re.sub(
        SanitizeRegex.INCLUDE_PATH, lambda m: f"\\include{{{m.group(1)}}}", generalized
    )
    return generalized
