"""Unit tests for the simulated remote catalog."""

import pytest

from paperforge.contexts.templating import SearchOptions, SimulatedTemplateCatalog, SortKey
from paperforge.contexts.templating.remote_catalog import normalize_template_id


@pytest.mark.unit
@pytest.mark.parametrize(
    "raw_id",
    [
        "ieee-template",
        "overleaf:ieee-template",
        "https://www.overleaf.com/latex/templates/ieee-template/pqrstuvw",
        "https://www.overleaf.com/latex/templates/ieee-template?ref=search",
    ],
)
def test_normalize_template_id(raw_id):
    assert normalize_template_id(raw_id) == "ieee-template"


@pytest.mark.unit
class TestSearch:
    def test_seeded_templates(self):
        ids = {t.id for t in SimulatedTemplateCatalog().list_templates()}
        assert ids == {"nature-template", "ieee-template", "acs-template"}

    def test_journal_filter_is_case_insensitive_substring(self):
        results = SimulatedTemplateCatalog().search(SearchOptions(journal="american chemical"))
        assert [t.id for t in results] == ["acs-template"]

    def test_journal_filter_also_matches_name(self):
        results = SimulatedTemplateCatalog().search(SearchOptions(journal="conference"))
        assert [t.id for t in results] == ["ieee-template"]

    def test_category_any_of(self):
        results = SimulatedTemplateCatalog().search(SearchOptions(category=["chemistry", "biology"]))
        assert {t.id for t in results} == {"acs-template", "nature-template"}

    def test_sort_by_date_descending(self):
        results = SimulatedTemplateCatalog().search(SearchOptions(sort_by=SortKey.DATE))
        assert [t.id for t in results] == ["ieee-template", "acs-template", "nature-template"]

    def test_no_match(self):
        assert SimulatedTemplateCatalog().search(SearchOptions(publisher="Elsevier")) == []


@pytest.mark.unit
class TestFetch:
    def test_seeded_template_has_required_main_document(self):
        template = SimulatedTemplateCatalog().fetch("overleaf:nature-template")

        assert template.entry_point is not None
        assert template.entry_point.path == "main.tex"

    def test_placeholder_is_deterministic(self):
        first = SimulatedTemplateCatalog().fetch("brand-new")
        second = SimulatedTemplateCatalog().fetch("brand-new")

        assert first.id == second.id == "brand-new"
        assert [f.content for f in first.files] == [f.content for f in second.files]

    def test_placeholder_is_remembered_until_reset(self):
        catalog = SimulatedTemplateCatalog()
        catalog.fetch("brand-new")
        assert "brand-new" in {t.id for t in catalog.list_templates()}

        catalog.reset()

        assert "brand-new" not in {t.id for t in catalog.list_templates()}
        assert len(catalog.list_templates()) == 3
