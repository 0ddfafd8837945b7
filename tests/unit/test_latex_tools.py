"""
Unit tests for balanced-brace LaTeX helpers.

Tests core utilities in paperforge.utils.latex_tools.
"""

import pytest

from paperforge.utils.latex_tools import (
    extract_balanced_delimiters,
    extract_command_argument,
    iter_command_arguments,
    replace_command_argument,
)


class TestExtractBalancedDelimiters:
    """Tests for extract_balanced_delimiters function."""

    @pytest.mark.unit
    def test_nested(self):
        content, end = extract_balanced_delimiters("foo {bar {nested} baz} qux", 5)
        assert content == "bar {nested} baz"
        assert end == 22

    @pytest.mark.unit
    def test_escaped_braces_ignored(self):
        content, _ = extract_balanced_delimiters(r"{a \} b}", 1)
        assert content == r"a \} b"

    @pytest.mark.unit
    def test_unmatched_raises(self):
        with pytest.raises(ValueError, match="Unmatched"):
            extract_balanced_delimiters("{never closed", 1)


class TestReplaceCommandArgument:
    """Tests for replace_command_argument function."""

    @pytest.mark.unit
    def test_double_braced_placeholder(self):
        assert replace_command_argument(r"\title{{{PROJECT_NAME}}}", "title", "My Paper") == (
            r"\title{My Paper}"
        )

    @pytest.mark.unit
    def test_optional_argument_kept_or_dropped(self):
        latex = r"\title[Short]{Long}"
        assert replace_command_argument(latex, "title", "X") == r"\title[Short]{X}"
        assert replace_command_argument(latex, "title", "X", keep_optional=False) == r"\title{X}"

    @pytest.mark.unit
    def test_callable_replacement(self):
        result = replace_command_argument(r"\emph{a} and \emph{b}", "emph", str.upper)
        assert result == r"\emph{A} and \emph{B}"

    @pytest.mark.unit
    def test_count_limits_replacements(self):
        result = replace_command_argument(r"\emph{a}\emph{b}", "emph", "x", count=1)
        assert result == r"\emph{x}\emph{b}"

    @pytest.mark.unit
    def test_unbalanced_occurrence_left_alone(self):
        latex = r"\title{unclosed"
        assert replace_command_argument(latex, "title", "X") == latex


@pytest.mark.unit
def test_iter_command_arguments_positions():
    text = r"x \author{A {B}} y"
    assert list(iter_command_arguments(text, "author")) == [(2, 16, "", "A {B}")]


@pytest.mark.unit
def test_extract_command_argument():
    assert extract_command_argument(r"\title{One}\title{Two}", "title") == "One"
    assert extract_command_argument("no title", "title") is None
