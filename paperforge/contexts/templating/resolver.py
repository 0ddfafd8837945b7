"""
Template Resolver

Single entry point for finding and fetching templates across the remote
catalog, the paper extractor and the local cache.

Search is fail-closed: if the remote catalog raises, the whole search raises
SearchError instead of returning cache-only results. Fetches from non-cache
sources are written through to the cache before they are returned.
"""

import re
import time
from dataclasses import replace
from typing import List, Optional, Union

from paperforge.contexts.templating.exceptions import NotFoundError, SearchError
from paperforge.contexts.templating.logger import (
    _log_debug,
    _log_error,
    log_fetch_result,
    log_fetch_start,
    log_search_result,
)
from paperforge.contexts.templating.paper_extractor import (
    PaperSourceExtractor,
    extracted_template_id,
)
from paperforge.contexts.templating.remote_catalog import (
    CATALOG_HOST,
    CATALOG_PREFIX,
    TemplateCatalog,
    normalize_template_id,
)
from paperforge.contexts.templating.template_cache import TemplateCache
from paperforge.contexts.templating.template_data_structure import (
    SearchOptions,
    SortKey,
    TemplateRecord,
    TemplateSource,
)
from paperforge.contexts.templating.template_search import (
    deduplicate_templates,
    filter_templates,
    sort_templates,
)

PAPER_PREFIX = "arxiv:"
PAPER_ID_SHAPE = re.compile(r"^\d{4}\.\d{4,5}")

# Short names accepted wherever a source is given as a string
SOURCE_ALIASES = {
    "overleaf": TemplateSource.REMOTE_CATALOG,
    "remote": TemplateSource.REMOTE_CATALOG,
    "arxiv": TemplateSource.PAPER_EXTRACTED,
    "paper": TemplateSource.PAPER_EXTRACTED,
    "local": TemplateSource.LOCAL_CACHE,
    "cache": TemplateSource.LOCAL_CACHE,
}


def detect_source(template_id: str) -> TemplateSource:
    """
    Infer the source of a template id from its syntax.

    Examples:
        >>> detect_source("overleaf:foo")
        <TemplateSource.REMOTE_CATALOG: 'remote-catalog'>
        >>> detect_source("2301.00001")
        <TemplateSource.PAPER_EXTRACTED: 'paper-extracted'>
        >>> detect_source("my-local-id")
        <TemplateSource.LOCAL_CACHE: 'local-cache'>
    """
    if template_id.startswith(CATALOG_PREFIX) or CATALOG_HOST in template_id:
        return TemplateSource.REMOTE_CATALOG
    if template_id.startswith(PAPER_PREFIX) or PAPER_ID_SHAPE.match(template_id):
        return TemplateSource.PAPER_EXTRACTED
    return TemplateSource.LOCAL_CACHE


def parse_source(source: Union[str, TemplateSource]) -> TemplateSource:
    """
    Accept a TemplateSource, its value, or a short alias ("overleaf", "arxiv", "local").

    Raises:
        ValueError: If the name is not a known source
    """
    if isinstance(source, TemplateSource):
        return source
    if source in SOURCE_ALIASES:
        return SOURCE_ALIASES[source]
    return TemplateSource(source)


def paper_id_from_template_id(template_id: str) -> str:
    if template_id.startswith(PAPER_PREFIX):
        return template_id[len(PAPER_PREFIX):]
    return template_id


class TemplateResolver:
    """
    Coordinates template search and fetch across all sources.

    Args:
        catalog: Remote template catalog
        extractor: Paper source extractor
        cache: Template cache shared by every fetch
    """

    def __init__(
        self,
        catalog: TemplateCatalog,
        extractor: PaperSourceExtractor,
        cache: TemplateCache,
    ):
        self.catalog = catalog
        self.extractor = extractor
        self.cache = cache

    def search(self, options: Optional[SearchOptions] = None) -> List[TemplateRecord]:
        """
        Search the remote catalog and the cache, de-duplicated by id and sorted.

        Remote results come first, so a template present in both sources is
        returned in its remote form. Results are ordered by options.sort_by
        (relevance when unset) and truncated to options.limit.

        Raises:
            SearchError: If the remote catalog fails
        """
        options = options or SearchOptions()

        # The limit applies to the merged, sorted list, not to each source
        try:
            remote = self.catalog.search(replace(options, limit=None))
        except Exception as e:
            _log_error(f"Remote catalog search failed: {e}")
            raise SearchError(
                f"Failed to search templates: {e}", source=TemplateSource.REMOTE_CATALOG.value
            ) from e

        cached = filter_templates(self.cache.list_templates(), options)
        unique = deduplicate_templates([*remote, *cached])
        results = sort_templates(unique, options.sort_by or SortKey.RELEVANCE, options.descending)
        if options.limit:
            results = results[: options.limit]

        log_search_result(len(remote), len(cached), len(unique))
        return results

    def fetch(
        self,
        template_id: str,
        source: Optional[Union[str, TemplateSource]] = None,
    ) -> TemplateRecord:
        """
        Fetch one template, auto-detecting its source from the id when not given.

        Remote and paper templates already in the cache are served from it;
        otherwise they are fetched and written through to the cache.

        Raises:
            NotFoundError: If a local-cache id is not cached
            ExtractionError: If the paper repository cannot provide the source
            NoMainFileError: If the paper source has no LaTeX document
        """
        source = parse_source(source) if source is not None else detect_source(template_id)
        log_fetch_start(template_id, source.value)
        start_time = time.time()

        if source == TemplateSource.REMOTE_CATALOG:
            cache_id = normalize_template_id(template_id)
        elif source == TemplateSource.PAPER_EXTRACTED:
            cache_id = extracted_template_id(paper_id_from_template_id(template_id))
        else:
            cache_id = template_id

        cached = self.cache.get(cache_id)
        if cached is not None:
            log_fetch_result(cache_id, source.value, True, time.time() - start_time)
            return cached

        if source == TemplateSource.LOCAL_CACHE:
            raise NotFoundError(
                f"Local template {template_id} not found", template_id, source.value
            )

        if source == TemplateSource.REMOTE_CATALOG:
            template = self.catalog.fetch(cache_id)
            self.cache.put(template)
        else:
            template = self.extract_from_paper(paper_id_from_template_id(template_id))

        log_fetch_result(template.id, source.value, False, time.time() - start_time)
        return template

    def extract_from_paper(
        self,
        paper_id: str,
        remove_personal: bool = True,
        relative_paths: bool = True,
    ) -> TemplateRecord:
        """
        Extract a template from a paper and cache it.

        Always contacts the paper repository; use fetch() for cache-first lookup.
        """
        paper_id = paper_id_from_template_id(paper_id)
        template = self.extractor.extract(
            paper_id, remove_personal=remove_personal, relative_paths=relative_paths
        )
        self.cache.put(template)
        return template

    def list_cached(self) -> List[TemplateRecord]:
        return self.cache.list_templates()

    def refresh_cache(self) -> List[str]:
        """Evict expired cache entries and reset the catalog client. Returns evicted ids."""
        evicted = self.cache.sweep()
        self.catalog.reset()
        _log_debug("Remote catalog reset")
        return evicted
