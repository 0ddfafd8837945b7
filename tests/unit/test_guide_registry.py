"""Unit tests for GuideRegistry."""

import pytest
from jinja2 import TemplateNotFound

from paperforge.contexts.templating.guide_registry import GuideRegistry


@pytest.mark.unit
def test_custom_delimiters(tmp_path):
    (tmp_path / "note.txt.jinja").write_text(
        "<# hidden #>Hello <<< name >>><%% if braces %%> {braces}<%% endif %%>\n"
    )

    rendered = GuideRegistry(tmp_path).render("note.txt", name="Ada", braces=True)

    assert rendered == "Hello Ada {braces}\n"


@pytest.mark.unit
def test_templates_cached(tmp_path):
    (tmp_path / "note.txt.jinja").write_text("x")
    registry = GuideRegistry(tmp_path)

    assert registry.get_template("note.txt") is registry.get_template("note.txt")


@pytest.mark.unit
def test_missing_guide(tmp_path):
    with pytest.raises(TemplateNotFound, match="Guide not found"):
        GuideRegistry(tmp_path).get_template("absent")


@pytest.mark.unit
def test_packaged_readme_guide_exists():
    assert GuideRegistry().get_template("README.md") is not None


@pytest.mark.unit
def test_context_keys_do_not_clash_with_guide_argument(tmp_path):
    (tmp_path / "note.txt.jinja").write_text("<<< guide_name >>> by <<< name >>>")

    rendered = GuideRegistry(tmp_path).render("note.txt", guide_name="Setup", name="Ada")

    assert rendered == "Setup by Ada"
