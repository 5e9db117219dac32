"""
Conference catalog loading.

The catalog lives in:

    conftrip/data/conferences.json

It is a JSON object keyed by slug. A Catalog object reads it exactly once,
on first access, and serves the parsed entries from memory afterwards.
Reloading the data requires a new Catalog (or a process restart).

Failure rules:
- missing file / broken JSON / invalid records -> CatalogError on first access
- there is no partial catalog: one bad record fails the whole load
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional, Tuple

from conftrip.model import CatalogEntry, CatalogError


logger = logging.getLogger(__name__)


def default_catalog_path() -> Path:
    """
    Return the path of the conference catalog shipped inside the package.
    """
    base_dir = Path(__file__).resolve().parent
    return base_dir / "data" / "conferences.json"


def _parse_catalog(text: str, source: Path) -> Dict[str, CatalogEntry]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise CatalogError(f"Catalog {source} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise CatalogError(f"Catalog {source} must be a JSON object keyed by slug")

    entries: Dict[str, CatalogEntry] = {}
    for key, raw in data.items():
        entry = CatalogEntry.from_dict(str(key), raw)
        if entry.slug in entries:
            raise CatalogError(f"Duplicate slug in catalog {source}: {entry.slug!r}")
        entries[entry.slug] = entry

    return entries


class Catalog:
    """
    Read-only, load-once collection of CatalogEntry records.

    The object is created explicitly by the caller and handed to whatever
    needs it. load() is safe to call from several threads: the first call
    parses the file under a lock, every later call returns the cached mapping.
    """

    def __init__(self, path: str | Path | None = None) -> None:
        self.path = Path(path) if path is not None else default_catalog_path()
        self.load_count = 0
        self._entries: Optional[Mapping[str, CatalogEntry]] = None
        self._lock = threading.Lock()

    def load(self) -> Mapping[str, CatalogEntry]:
        """
        Return the slug -> CatalogEntry mapping, reading the file on first call only.

        Raises CatalogError if the file is missing or malformed. A failed load
        is not cached, so the next call tries again.
        """
        entries = self._entries
        if entries is not None:
            return entries

        with self._lock:
            if self._entries is None:
                self.load_count += 1
                try:
                    text = self.path.read_text(encoding="utf-8")
                except (OSError, UnicodeDecodeError) as e:
                    raise CatalogError(f"Cannot read catalog {self.path}: {e}") from e

                parsed = _parse_catalog(text, self.path)
                self._entries = MappingProxyType(parsed)
                logger.debug("Loaded %d conferences from %s", len(parsed), self.path)

            return self._entries

    def entries(self) -> Tuple[CatalogEntry, ...]:
        """
        All entries in catalog (file) order.
        """
        return tuple(self.load().values())

    def get(self, slug: str) -> Optional[CatalogEntry]:
        return self.load().get(slug.strip().lower())

    def __contains__(self, slug: object) -> bool:
        return isinstance(slug, str) and slug.strip().lower() in self.load()

    def __iter__(self) -> Iterator[CatalogEntry]:
        return iter(self.load().values())

    def __len__(self) -> int:
        return len(self.load())


def load_catalog(path: str | Path | None = None) -> Catalog:
    """
    Create a Catalog and load it immediately, so broken data fails at startup.
    """
    catalog = Catalog(path)
    catalog.load()
    return catalog
