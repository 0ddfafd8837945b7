"""
Two-tier template cache: in-memory index backed by one JSON file per template.

The index is rebuilt from the cache directory on construction. Corrupt files
are skipped with a warning rather than failing the load.
"""

import json
import os
import shutil
import tempfile
from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable, Dict, List, Optional
from urllib.parse import quote

from dotenv import load_dotenv

from paperforge.contexts.templating.logger import _log_debug, _log_warning, log_sweep_result
from paperforge.contexts.templating.template_data_structure import TemplateRecord

load_dotenv()
TEMPLATE_CACHE_PATH = Path(os.getenv("TEMPLATE_CACHE_PATH", ".template-cache"))

# Entries whose last_updated is older than this are evicted by sweep()
RETENTION_WINDOW = timedelta(days=30)


class TemplateCache:
    """
    Persistent cache of resolved templates, keyed by template id.

    Side effects are confined to cache_dir. Writes replace the entry file
    atomically, so a reader never sees a half-written entry.

    Args:
        cache_dir: Directory holding ``<id>.json`` entries (default: TEMPLATE_CACHE_PATH)
        retention: Age after which sweep() evicts an entry
        clock: Source of "now" for eviction decisions
    """

    def __init__(
        self,
        cache_dir: Optional[Path] = None,
        retention: timedelta = RETENTION_WINDOW,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.cache_dir = Path(cache_dir) if cache_dir is not None else TEMPLATE_CACHE_PATH
        self.retention = retention
        self.clock = clock
        self._index: Dict[str, TemplateRecord] = {}
        self._load()

    def _entry_path(self, template_id: str) -> Path:
        # Percent-encoding keeps distinct ids in distinct files ("a:b" -> a%3Ab.json)
        return self.cache_dir / f"{quote(template_id, safe='')}.json"

    def _load(self) -> None:
        if not self.cache_dir.is_dir():
            return

        for entry_file in sorted(self.cache_dir.glob("*.json")):
            try:
                data = json.loads(entry_file.read_text(encoding="utf-8"))
                template = TemplateRecord.from_dict(data)
            except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
                _log_warning(f"Skipping corrupt cache entry {entry_file.name}: {e}")
                continue
            self._index[template.id] = template

        _log_debug(f"Loaded {len(self._index)} cached templates from {self.cache_dir}")

    def get(self, template_id: str) -> Optional[TemplateRecord]:
        """Cached template for template_id, or None."""
        return self._index.get(template_id)

    def put(self, template: TemplateRecord) -> Path:
        """
        Cache a template, overwriting any entry with the same id.

        Returns:
            Path of the entry file

        Raises:
            OSError: If the entry cannot be written
        """
        self._index[template.id] = template

        self.cache_dir.mkdir(parents=True, exist_ok=True)
        entry_path = self._entry_path(template.id)

        temp_fd, temp_path = tempfile.mkstemp(suffix=".tmp", dir=self.cache_dir, text=True)
        try:
            with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
                json.dump(template.to_dict(), f, indent=2)
            shutil.move(temp_path, entry_path)
        except Exception:
            if os.path.exists(temp_path):
                os.unlink(temp_path)
            raise

        _log_debug(f"Cached {template.id} at {entry_path}")
        return entry_path

    def remove(self, template_id: str) -> bool:
        """
        Drop one entry from the index and from disk.

        Returns:
            True if the id was cached
        """
        was_cached = self._index.pop(template_id, None) is not None
        try:
            self._entry_path(template_id).unlink()
        except FileNotFoundError:
            pass
        return was_cached

    def sweep(self) -> List[str]:
        """
        Evict every entry whose last_updated is older than the retention window.

        Returns:
            Ids that were evicted
        """
        cutoff = self.clock() - self.retention
        expired = [t.id for t in self._index.values() if t.last_updated < cutoff]

        for template_id in expired:
            self.remove(template_id)

        log_sweep_result(expired, len(self._index))
        return expired

    def clear(self) -> List[str]:
        """Evict every entry. Returns the ids that were cached."""
        cleared = list(self._index)
        for template_id in cleared:
            self.remove(template_id)
        return cleared

    def list_templates(self) -> List[TemplateRecord]:
        return list(self._index.values())

    def __contains__(self, template_id: str) -> bool:
        return template_id in self._index

    def __len__(self) -> int:
        return len(self._index)
