"""
Remote Catalog Adapter

Stands in for an external template service. SimulatedTemplateCatalog serves
a fixed, seeded catalog from memory; a real client would subclass
TemplateCatalog and keep the same contract (canonical id in, record with a
required main document out).
"""

import re
import time
from abc import ABC, abstractmethod
from typing import Dict, List

from paperforge.contexts.templating.catalog_defaults import default_catalog, placeholder_template
from paperforge.contexts.templating.logger import _log_debug
from paperforge.contexts.templating.template_data_structure import SearchOptions, TemplateRecord
from paperforge.contexts.templating.template_search import apply_search

CATALOG_PREFIX = "overleaf:"
CATALOG_HOST = "overleaf.com"
CATALOG_BASE_URL = "https://www.overleaf.com"
CATALOG_URL_ID = re.compile(r"/latex/templates/([^/?#]+)")


def normalize_template_id(template_id: str) -> str:
    """
    Canonical catalog id from a bare id, a prefixed id, or a catalog URL.

    Examples:
        >>> normalize_template_id("overleaf:ieee-template")
        'ieee-template'
        >>> normalize_template_id("https://www.overleaf.com/latex/templates/ieee-template/xyz")
        'ieee-template'
    """
    if CATALOG_HOST in template_id:
        match = CATALOG_URL_ID.search(template_id)
        return match.group(1) if match else template_id
    if template_id.startswith(CATALOG_PREFIX):
        return template_id[len(CATALOG_PREFIX):]
    return template_id


class TemplateCatalog(ABC):
    """Abstract remote template catalog."""

    @abstractmethod
    def search(self, options: SearchOptions) -> List[TemplateRecord]:
        """Templates matching options."""

    @abstractmethod
    def fetch(self, template_id: str) -> TemplateRecord:
        """Template by bare, prefixed, or URL id."""

    def reset(self) -> None:
        """Drop any client-side state. Nothing to drop by default."""


class SimulatedTemplateCatalog(TemplateCatalog):
    """
    In-process catalog seeded with journal templates.

    Ids that are not in the catalog resolve to a generated generic article,
    which is remembered until reset().

    Args:
        latency_s: Delay applied to fetches of unknown ids, imitating a remote call
    """

    def __init__(self, latency_s: float = 0.0):
        self.latency_s = latency_s
        self._templates: Dict[str, TemplateRecord] = {}
        self.reset()

    def reset(self) -> None:
        """Forget generated templates and restore the seeded catalog."""
        self._templates = {t.id: t for t in default_catalog()}

    def search(self, options: SearchOptions) -> List[TemplateRecord]:
        return apply_search(self._templates.values(), options)

    def fetch(self, template_id: str) -> TemplateRecord:
        canonical_id = normalize_template_id(template_id)
        if canonical_id in self._templates:
            return self._templates[canonical_id]

        _log_debug(f"Template {canonical_id} not in catalog, requesting from {CATALOG_BASE_URL}")
        if self.latency_s:
            time.sleep(self.latency_s)

        template = placeholder_template(canonical_id)
        self._templates[canonical_id] = template
        return template

    def list_templates(self) -> List[TemplateRecord]:
        return list(self._templates.values())
