"""
Date-range parsing and temporal classification.

Catalog dates are human-written strings, for example:

    "Feb 27 - Mar 8, 2026"   (cross-month range)
    "Oct 7-8, 2026"          (same-month range)
    "May 5, 2026"            (single day)
    "Dec 2026 (TBC)"         (no day -> unparsable)

Parsing never raises. An unparsable string yields None and the classifier
then reports the conference as upcoming.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Optional

from conftrip.model import CatalogEntry, DateRange, TemporalStatus


MONTHS = {
    "jan": 1,
    "feb": 2,
    "mar": 3,
    "apr": 4,
    "may": 5,
    "jun": 6,
    "jul": 7,
    "aug": 8,
    "sep": 9,
    "oct": 10,
    "nov": 11,
    "dec": 12,
}

# short or full month spellings only, so "Marathon 5" is not March 5
_MONTH = (
    r"(?:jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?|aug(?:ust)?"
    r"|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?)\.?"
)

# Month Day [- [Month] Day]; day is 1-2 digits so "Dec 2026" is not a day
_RANGE_RE = re.compile(
    rf"\b({_MONTH})\s+(\d{{1,2}})(?!\d)(?:\s*[-–]\s*(?:({_MONTH})\s+)?(\d{{1,2}})(?!\d))?",
    re.IGNORECASE,
)
_YEAR_RE = re.compile(r"\b(\d{4})\b")
_MONTH_DAY_RE = re.compile(rf"\b({_MONTH})\s+(\d{{1,2}})(?!\d)", re.IGNORECASE)


def _month_index(name: str) -> int:
    return MONTHS[name[:3].lower()]


def parse_date_range(text: Optional[str], today: Optional[date] = None) -> Optional[DateRange]:
    """
    Extract a coarse start/end from a loosely formatted date range.

    Returns None when no "Month Day" pattern is found or the date is impossible.
    A missing year defaults to the current year.
    """
    if not text:
        return None

    today = today or date.today()

    year_match = _YEAR_RE.search(text)
    year = int(year_match.group(1)) if year_match else today.year

    m = _RANGE_RE.search(text)
    if not m:
        return None

    start_month = _month_index(m.group(1))
    start_day = int(m.group(2))
    end_month = _month_index(m.group(3)) if m.group(3) else start_month
    end_day = int(m.group(4)) if m.group(4) else start_day

    try:
        start = datetime(year, start_month, start_day)
        end = datetime(year, end_month, end_day, 23, 59)
        # "Dec 30 - Jan 2, 2027": the year belongs to the end date
        if end < start:
            start = datetime(year - 1, start_month, start_day)
    except ValueError:
        return None

    return DateRange(start=start, end=end)


def _local_naive(now: Optional[datetime]) -> datetime:
    if now is None:
        return datetime.now()
    if now.tzinfo is not None:
        return now.astimezone().replace(tzinfo=None)
    return now


def classify(entry: CatalogEntry, now: Optional[datetime] = None) -> TemporalStatus:
    """
    Label a conference as upcoming, ongoing or past relative to `now`.

    Unparsable dates (mostly TBC placeholders) count as upcoming.
    """
    current = _local_naive(now)
    rng = parse_date_range(entry.dates, today=current.date())
    if rng is None:
        return TemporalStatus.UPCOMING
    if current < rng.start:
        return TemporalStatus.UPCOMING
    if current > rng.end:
        return TemporalStatus.PAST
    return TemporalStatus.ONGOING


def is_tentative(entry: CatalogEntry) -> bool:
    """
    True if the dates are a TBC placeholder or cannot be parsed.
    Such entries are worth a live lookup before planning a trip.
    """
    if "tbc" in entry.dates.lower():
        return True
    return parse_date_range(entry.dates) is None


def arrival_date(entry: CatalogEntry, today: Optional[date] = None) -> Optional[date]:
    """
    Turn recommended_arrival (e.g. "Mar 28") into a calendar date.

    The year is taken from the conference dates. Values like "1 day before"
    give None.
    """
    m = _MONTH_DAY_RE.search(entry.recommended_arrival or "")
    if not m:
        return None

    today = today or date.today()
    year_match = _YEAR_RE.search(entry.dates)
    year = int(year_match.group(1)) if year_match else today.year

    rng = parse_date_range(entry.dates, today=today)
    try:
        arrival = date(year, _month_index(m.group(1)), int(m.group(2)))
        # arrival in December for a January conference
        if rng is not None and arrival > rng.start.date():
            arrival = arrival.replace(year=year - 1)
    except ValueError:
        return None
    return arrival
