"""Unit tests for TemplateResolver search and fetch."""

import pytest

from paperforge.contexts.templating import (
    NotFoundError,
    PaperSourceExtractor,
    SearchError,
    SearchOptions,
    SimulatedTemplateCatalog,
    SortKey,
    TemplateCatalog,
    TemplateResolver,
    TemplateSource,
    detect_source,
)
from paperforge.contexts.templating.resolver import parse_source

PAPER_MAIN = r"""\documentclass{article}
\title{A Study}
\author{Ada Lovelace\thanks{ada@lab.org}}
\begin{document}
\section{Intro}
\end{document}
"""


class FailingCatalog(TemplateCatalog):
    def search(self, options):
        raise ConnectionError("catalog unreachable")

    def fetch(self, template_id):
        raise ConnectionError("catalog unreachable")


@pytest.mark.unit
class TestDetectSource:
    @pytest.mark.parametrize(
        "template_id, expected",
        [
            ("overleaf:foo", TemplateSource.REMOTE_CATALOG),
            ("https://www.overleaf.com/latex/templates/foo/abc", TemplateSource.REMOTE_CATALOG),
            ("arxiv:2301.00001", TemplateSource.PAPER_EXTRACTED),
            ("2301.00001", TemplateSource.PAPER_EXTRACTED),
            ("2301.12345v2", TemplateSource.PAPER_EXTRACTED),
            ("my-local-id", TemplateSource.LOCAL_CACHE),
            ("arxiv-2301.00001", TemplateSource.LOCAL_CACHE),
        ],
    )
    def test_detect(self, template_id, expected):
        assert detect_source(template_id) == expected

    def test_parse_source_aliases(self):
        assert parse_source("overleaf") == TemplateSource.REMOTE_CATALOG
        assert parse_source("arxiv") == TemplateSource.PAPER_EXTRACTED
        assert parse_source("local") == TemplateSource.LOCAL_CACHE
        assert parse_source("remote-catalog") == TemplateSource.REMOTE_CATALOG

    def test_parse_source_unknown(self):
        with pytest.raises(ValueError):
            parse_source("dropbox")


@pytest.mark.unit
class TestSearch:
    def test_remote_and_cached_are_combined(self, resolver, cache, make_template):
        cache.put(make_template("my-nature-draft", journal_name="Nature", rating=3.0))

        results = resolver.search(SearchOptions(journal="Nature"))

        ids = [t.id for t in results]
        assert "nature-template" in ids
        assert "my-nature-draft" in ids

    def test_no_duplicate_ids(self, resolver, cache):
        # Same id in the cache and the remote catalog
        cache.put(resolver.catalog.fetch("ieee-template"))

        results = resolver.search()

        ids = [t.id for t in results]
        assert len(ids) == len(set(ids))
        assert ids.count("ieee-template") == 1

    def test_remote_version_wins_over_cached(self, resolver, cache, make_template):
        cache.put(
            make_template(
                "ieee-template", source=TemplateSource.LOCAL_CACHE, name="Stale copy", publisher="IEEE"
            )
        )

        results = resolver.search(SearchOptions(publisher="IEEE"))

        assert [t.name for t in results] == ["IEEE Conference Template"]

    def test_default_order_is_rating_descending(self, resolver):
        ratings = [t.metadata.rating for t in resolver.search()]
        assert ratings == sorted(ratings, reverse=True)

    def test_sort_by_popularity_ascending(self, resolver):
        results = resolver.search(SearchOptions(sort_by=SortKey.POPULARITY, descending=False))
        counts = [t.metadata.download_count for t in results]
        assert counts == sorted(counts)

    def test_limit(self, resolver):
        assert len(resolver.search(SearchOptions(limit=2))) == 2

    def test_limit_applies_after_sorting(self, resolver):
        lowest = resolver.search(SearchOptions(limit=1, descending=False))
        highest = resolver.search(SearchOptions(limit=1))

        assert [t.id for t in lowest] == ["acs-template"]
        assert [t.id for t in highest] == ["nature-template"]

    def test_keyword_filter(self, resolver):
        results = resolver.search(SearchOptions(keywords=["chemistry"]))
        assert [t.id for t in results] == ["acs-template"]

    def test_catalog_failure_raises_search_error(self, cache, paper_repository, make_template):
        cache.put(make_template("cached-only"))
        resolver = TemplateResolver(FailingCatalog(), PaperSourceExtractor(paper_repository), cache)

        with pytest.raises(SearchError, match="catalog unreachable") as exc_info:
            resolver.search()

        assert isinstance(exc_info.value.__cause__, ConnectionError)


@pytest.mark.unit
class TestFetch:
    def test_remote_fetch_is_written_through(self, resolver, cache):
        template = resolver.fetch("overleaf:ieee-template")

        assert template.id == "ieee-template"
        assert cache.get("ieee-template") == template
        assert (cache.cache_dir / "ieee-template.json").exists()

    def test_remote_url_id(self, resolver):
        template = resolver.fetch("https://www.overleaf.com/latex/templates/nature-template/xyz")
        assert template.id == "nature-template"

    def test_unknown_remote_id_gets_placeholder(self, resolver):
        template = resolver.fetch("overleaf:some-new-template")

        assert template.id == "some-new-template"
        assert template.entry_point is not None
        assert template.entry_point.path == "main.tex"

    def test_explicit_source_overrides_detection(self, resolver):
        template = resolver.fetch("acs-template", source="overleaf")
        assert template.source == TemplateSource.REMOTE_CATALOG

    def test_local_hit(self, resolver, cache, make_template):
        cache.put(make_template("my-template"))
        assert resolver.fetch("my-template").id == "my-template"

    def test_local_miss_raises_not_found(self, resolver):
        with pytest.raises(NotFoundError) as exc_info:
            resolver.fetch("my-local-id")

        assert exc_info.value.template_id == "my-local-id"
        assert exc_info.value.source == TemplateSource.LOCAL_CACHE.value

    def test_paper_fetch_is_written_through(self, resolver, cache, paper_repository):
        paper_repository.add_paper("2301.00001", {"main.tex": PAPER_MAIN})

        template = resolver.fetch("arxiv:2301.00001")

        assert template.id == "arxiv-2301.00001"
        assert cache.get("arxiv-2301.00001") == template

    def test_repeated_paper_fetch_served_from_cache(self, resolver, paper_repository):
        paper_repository.add_paper("2301.00001", {"main.tex": PAPER_MAIN})

        first = resolver.fetch("arxiv:2301.00001")
        second = resolver.fetch("arxiv:2301.00001")

        assert second == first
        assert paper_repository.download_calls["2301.00001"] == 1

    def test_bare_and_prefixed_paper_ids_share_cache_entry(self, resolver, paper_repository):
        paper_repository.add_paper("2301.00001", {"main.tex": PAPER_MAIN})

        resolver.fetch("2301.00001")
        resolver.fetch("arxiv:2301.00001")

        assert paper_repository.download_calls["2301.00001"] == 1

    def test_extracted_template_is_then_a_local_id(self, resolver, paper_repository):
        paper_repository.add_paper("2301.00001", {"main.tex": PAPER_MAIN})
        resolver.fetch("arxiv:2301.00001")

        assert resolver.fetch("arxiv-2301.00001").source == TemplateSource.PAPER_EXTRACTED


@pytest.mark.unit
class TestExtractFromPaper:
    def test_always_contacts_repository(self, resolver, paper_repository):
        paper_repository.add_paper("2301.00001", {"main.tex": PAPER_MAIN})

        resolver.extract_from_paper("2301.00001")
        resolver.extract_from_paper("arxiv:2301.00001")

        assert paper_repository.download_calls["2301.00001"] == 2

    def test_result_is_cached(self, resolver, cache, paper_repository):
        paper_repository.add_paper("2301.00001", {"main.tex": PAPER_MAIN})

        template = resolver.extract_from_paper("2301.00001")

        assert cache.get(template.id) == template


@pytest.mark.unit
def test_refresh_cache_resets_catalog(cache, paper_repository):
    catalog = SimulatedTemplateCatalog()
    resolver = TemplateResolver(catalog, PaperSourceExtractor(paper_repository), cache)
    resolver.fetch("overleaf:generated-one")
    assert "generated-one" in [t.id for t in catalog.list_templates()]

    resolver.refresh_cache()

    assert "generated-one" not in [t.id for t in catalog.list_templates()]
    # Freshly generated entry is within the retention window
    assert cache.get("generated-one") is not None


@pytest.mark.unit
def test_list_cached(resolver, cache, make_template):
    cache.put(make_template("a"))
    assert [t.id for t in resolver.list_cached()] == ["a"]
