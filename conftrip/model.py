"""
Central data model definitions used across the project.

This module defines the canonical structure of catalog entries so that:
- the catalog loader, the matchers and the date helpers share the same field names
- entries stay read-only once loaded (frozen dataclasses, tuples instead of lists)
- JSON records are validated in exactly one place
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Tuple


REQUIRED_FIELDS = ("name", "dates", "city", "country", "airport")


class CatalogError(Exception):
    """
    Raised when the conference catalog cannot be loaded or is malformed.
    """


class TemporalStatus(str, Enum):
    UPCOMING = "upcoming"
    ONGOING = "ongoing"
    PAST = "past"


@dataclass(frozen=True)
class Location:
    """
    Where a conference takes place and which airports serve it.
    """

    city: str
    country: str
    airport: str
    state: Optional[str] = None
    airport_alt: Optional[str] = None
    venue: str = ""


@dataclass(frozen=True)
class DateRange:
    """
    Coarse start/end of an event: start at 00:00, end at 23:59 of the last day.
    """

    start: datetime
    end: datetime


@dataclass(frozen=True)
class CatalogEntry:
    """
    Represents one conference as stored in data/conferences.json.

    Only slug, name, location, dates and tags take part in matching.
    The remaining fields are display data carried through unchanged.
    """

    slug: str
    name: str
    location: Location
    dates: str
    tags: Tuple[str, ...] = ()
    aliases: Tuple[str, ...] = ()
    side_events_dates: str = ""
    recommended_arrival: str = ""
    recommended_departure: str = ""
    recommended_hotel_areas: Tuple[str, ...] = ()
    notable_side_events: Tuple[str, ...] = ()
    visa_notes: str = ""
    website: str = ""

    @property
    def city(self) -> str:
        return self.location.city

    @property
    def country(self) -> str:
        return self.location.country

    @property
    def airport(self) -> str:
        return self.location.airport

    def searchable_text(self) -> str:
        """
        Lowercase haystack used by the fuzzy matcher:
        name, slug, city, country and all tags joined with spaces.
        """
        parts = [self.name, self.slug, self.location.city, self.location.country, *self.tags]
        return " ".join(parts).lower()

    @classmethod
    def from_dict(cls, slug: str, raw: Dict[str, Any]) -> "CatalogEntry":
        """
        Build an entry from one JSON record keyed by its slug.

        Raises CatalogError if the record is not an object, misses a required
        field, or carries a "slug" value that disagrees with its key.
        """
        if not isinstance(raw, dict):
            raise CatalogError(f"Catalog record {slug!r} is not an object")

        missing = [f for f in REQUIRED_FIELDS if not str(raw.get(f) or "").strip()]
        if missing:
            raise CatalogError(f"Catalog record {slug!r} is missing fields: {', '.join(missing)}")

        key = slug.strip().lower()
        record_slug = str(raw.get("slug") or key).strip().lower()
        if record_slug != key:
            raise CatalogError(f"Catalog key {slug!r} does not match record slug {raw.get('slug')!r}")

        location = Location(
            city=str(raw["city"]),
            country=str(raw["country"]),
            airport=str(raw["airport"]),
            state=raw.get("state"),
            airport_alt=raw.get("airport_alt"),
            venue=str(raw.get("venue") or ""),
        )

        return cls(
            slug=key,
            name=str(raw["name"]),
            location=location,
            dates=str(raw["dates"]),
            tags=_str_tuple(raw.get("tags")),
            aliases=_str_tuple(raw.get("aliases")),
            side_events_dates=str(raw.get("side_events_dates") or ""),
            recommended_arrival=str(raw.get("recommended_arrival") or ""),
            recommended_departure=str(raw.get("recommended_departure") or ""),
            recommended_hotel_areas=_str_tuple(raw.get("recommended_hotel_areas")),
            notable_side_events=_str_tuple(raw.get("notable_side_events")),
            visa_notes=str(raw.get("visa_notes") or ""),
            website=str(raw.get("website") or ""),
        )


def _str_tuple(value: Any) -> Tuple[str, ...]:
    # JSON lists become tuples so entries stay immutable
    if not isinstance(value, list):
        return ()
    return tuple(str(x) for x in value if isinstance(x, str))
