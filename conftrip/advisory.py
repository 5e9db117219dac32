"""
Caller-side formatting on top of the resolver.

The matcher and classifier only return values (entries, TemporalStatus).
Turning those into user-visible warnings, summaries and structured trip
facts happens here.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from conftrip.catalog import Catalog
from conftrip.dates import classify
from conftrip.live import LiveConferenceInfo
from conftrip.model import CatalogEntry, TemporalStatus


def conference_warning(entry: CatalogEntry, now: Optional[datetime] = None) -> Optional[str]:
    """
    Return a warning if the conference is past or currently running, else None.
    """
    status = classify(entry, now)
    if status is TemporalStatus.PAST:
        return (
            f"**{entry.name} has already ended** ({entry.dates}). "
            "This report is for future planning reference only."
        )
    if status is TemporalStatus.ONGOING:
        return (
            f"**{entry.name} is happening right now** ({entry.dates}). "
            "Flight planning for this conference may be too late - consider planning for next year."
        )
    return None


def catalog_summary(catalog: Catalog) -> str:
    """
    One line per conference, used as context for report generation.
    """
    return "\n".join(
        f"- {e.name} ({e.dates}) - {e.city}, {e.country} [{e.slug}]"
        for e in catalog
    )


def visa_required(notes: Optional[str]) -> Optional[bool]:
    """
    Interpret a visa note for US passport holders.

    None = unknown (no note), False = "no visa needed", True otherwise.
    """
    text = (notes or "").strip().lower()
    if not text:
        return None
    return "no visa" not in text


def trip_facts(
    query: str,
    entry: Optional[CatalogEntry],
    live: Optional[LiveConferenceInfo] = None,
) -> Dict[str, Any]:
    """
    Structured fields returned next to a generated trip report.

    Catalog values win over live web data, which wins over the raw query.
    The exception is conference_name: a live result carries this year's
    official name, so it is preferred over the catalog name.
    """
    if entry is None and live is None:
        return {"conference_name": query, "data_source": "not-announced"}

    def pick(catalog_value: Optional[str], live_value: Optional[str]) -> str:
        return catalog_value or live_value or "See report"

    notes = entry.visa_notes if entry is not None and entry.visa_notes else (live.visa_notes if live else "")

    return {
        "conference_name": (live.name if live else None) or (entry.name if entry else query),
        "destination": pick(entry.city if entry else None, live.city if live else None),
        "airport": pick(entry.airport if entry else None, live.airport if live else None),
        "dates": pick(entry.dates if entry else None, live.dates if live else None),
        "data_source": "web-search" if live else "static-db",
        "visa_required": visa_required(notes),
    }
