"""
conftrip - conference catalog, matching and date classification for travel-planning agents.
"""

from conftrip.catalog import Catalog, load_catalog
from conftrip.matching import lookup
from conftrip.dates import classify, parse_date_range
from conftrip.model import CatalogEntry, CatalogError, TemporalStatus
from conftrip.resolver import ConferenceResolver

__all__ = [
    "Catalog",
    "CatalogEntry",
    "CatalogError",
    "ConferenceResolver",
    "TemporalStatus",
    "classify",
    "load_catalog",
    "lookup",
    "parse_date_range",
]
