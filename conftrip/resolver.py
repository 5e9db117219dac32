"""
Conference resolver.

Bundles a loaded Catalog with the matching and date helpers, so request
handlers can share one object:

    resolver = ConferenceResolver(load_catalog())
    entry = resolver.lookup("token2049 singapore")
    status = resolver.status(entry)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Iterable, List, Optional, Tuple

from conftrip import matching
from conftrip.catalog import Catalog
from conftrip.dates import classify, is_tentative
from conftrip.live import LiveConferenceInfo, search_conference_info
from conftrip.model import CatalogEntry, TemporalStatus


logger = logging.getLogger(__name__)

LiveSearch = Callable[[str], Optional[LiveConferenceInfo]]


@dataclass(frozen=True)
class Resolution:
    """
    Outcome of resolving one conference name, catalog first, web second.
    """

    query: str
    entry: Optional[CatalogEntry]
    live: Optional[LiveConferenceInfo] = None

    @property
    def found(self) -> bool:
        return self.entry is not None or self.live is not None


class ConferenceResolver:
    def __init__(self, catalog: Catalog, live_search: Optional[LiveSearch] = None) -> None:
        self.catalog = catalog
        self._live_search = live_search or search_conference_info

    def lookup(self, query: Optional[str]) -> Optional[CatalogEntry]:
        return matching.lookup(self.catalog, query)

    def lookup_many(
        self, queries: Iterable[str], limit: int = matching.MAX_BATCH_QUERIES
    ) -> List[Tuple[str, Optional[CatalogEntry]]]:
        return matching.resolve_many(self.catalog, queries, limit=limit)

    def detect(self, text: Optional[str]) -> Optional[CatalogEntry]:
        return matching.detect_mention(self.catalog, text)

    def status(self, entry: CatalogEntry, now: Optional[datetime] = None) -> TemporalStatus:
        return classify(entry, now)

    def resolve(self, query: str) -> Resolution:
        """
        Catalog lookup with a live web search when the conference is unknown
        or its dates are still TBC. A failed live search keeps the catalog entry.
        """
        entry = self.lookup(query)
        if entry is not None and not is_tentative(entry):
            return Resolution(query=query, entry=entry)

        logger.info("Conference %r not in catalog or TBC, searching web", query)
        live = self._live_search(query)
        if live is not None:
            logger.info("Web search found %s @ %s, %s", live.name, live.city, live.dates)
        return Resolution(query=query, entry=entry, live=live)
