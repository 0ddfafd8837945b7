"""
Filtering, ordering and de-duplication shared by every template source.
"""

from typing import Iterable, List, Optional

from paperforge.contexts.templating.template_data_structure import (
    SearchOptions,
    SortKey,
    TemplateRecord,
)


SORT_KEYS = {
    SortKey.DATE: lambda t: t.last_updated,
    SortKey.POPULARITY: lambda t: t.metadata.download_count,
    SortKey.RELEVANCE: lambda t: t.metadata.rating,
}


def _contains(haystack: Optional[str], needle: str) -> bool:
    return bool(haystack) and needle.lower() in haystack.lower()


def search_text(template: TemplateRecord) -> str:
    """Combined lowercase text that keyword filters match against."""
    tags = " ".join(template.metadata.tags)
    return f"{template.name} {template.description} {tags}".lower()


def matches(template: TemplateRecord, options: SearchOptions) -> bool:
    """Check a template against every filter set in options."""
    if options.journal and not (
        _contains(template.journal_name, options.journal)
        or _contains(template.name, options.journal)
    ):
        return False

    if options.publisher and not _contains(template.publisher, options.publisher):
        return False

    if options.category and not any(cat in template.category for cat in options.category):
        return False

    if options.keywords:
        text = search_text(template)
        if not any(keyword.lower() in text for keyword in options.keywords):
            return False

    return True


def filter_templates(
    templates: Iterable[TemplateRecord], options: SearchOptions
) -> List[TemplateRecord]:
    """Keep the templates that match options, preserving order."""
    return [t for t in templates if matches(t, options)]


def sort_templates(
    templates: Iterable[TemplateRecord],
    sort_by: Optional[SortKey] = SortKey.RELEVANCE,
    descending: bool = True,
) -> List[TemplateRecord]:
    """
    Order templates by date, popularity or relevance (rating).

    The sort is stable, so templates with equal keys keep their input order.
    A sort_by of None returns the input order unchanged.
    """
    templates = list(templates)
    if sort_by is None:
        return templates

    return sorted(templates, key=SORT_KEYS[SortKey(sort_by)], reverse=descending)


def deduplicate_templates(templates: Iterable[TemplateRecord]) -> List[TemplateRecord]:
    """Drop repeated ids; the first occurrence wins."""
    seen = set()
    unique = []
    for template in templates:
        if template.id in seen:
            continue
        seen.add(template.id)
        unique.append(template)
    return unique


def apply_search(templates: Iterable[TemplateRecord], options: SearchOptions) -> List[TemplateRecord]:
    """Filter, order (only when sort_by is set) and truncate to options.limit."""
    results = sort_templates(
        filter_templates(templates, options), options.sort_by, options.descending
    )
    if options.limit:
        results = results[: options.limit]
    return results
