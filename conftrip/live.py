"""
Live conference search.

Fallback for conferences that are missing from the catalog or only listed
as "TBC": asks the generative language API (with web search grounding) for
the confirmed details of this year's edition.

The API is treated as a black box. Every failure (no key, HTTP error,
network error, unusable answer) yields None.
"""

from __future__ import annotations

import json
import logging
import re
import time
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional

import requests

from conftrip.config import Settings, get_settings


logger = logging.getLogger(__name__)

_JSON_OBJECT_RE = re.compile(r"\{.*\}", re.DOTALL)


@dataclass(frozen=True)
class LiveConferenceInfo:
    name: str
    dates: str
    city: str
    country: str
    venue: str = ""
    airport: str = ""
    side_events: str = ""
    visa_notes: str = ""
    source: str = "web-search"


def post_with_retry(
    session: requests.Session,
    url: str,
    *,
    json_body: Dict[str, Any],
    params: Optional[Dict[str, str]] = None,
    timeout: float = 20,
    retries: int = 2,
    backoff: float = 1.0,
) -> requests.Response:
    """
    POST with a small retry loop.

    Retries on HTTP 5xx and on connection errors / timeouts, sleeping
    backoff * attempt seconds in between. Other responses (2xx, 4xx) are
    returned as-is. The last error is re-raised once retries are used up.
    """
    attempt = 0
    while True:
        try:
            resp = session.post(url, params=params, json=json_body, timeout=timeout)
        except (requests.ConnectionError, requests.Timeout) as e:
            if attempt >= retries:
                raise
            logger.warning("POST %s failed (%s), retrying", url, e)
        else:
            if resp.status_code < 500 or attempt >= retries:
                return resp
            logger.warning("POST %s returned %d, retrying", url, resp.status_code)

        attempt += 1
        time.sleep(backoff * attempt)


def _build_prompt(name: str, year: int) -> str:
    return (
        f'Search the web for the OFFICIAL, CONFIRMED details for "{name} {year}".\n'
        f"Only use data confirmed for {year}; data from {year - 1} or earlier does not count.\n"
        "Do not guess. If the dates are TBD or not announced, return exactly: null\n"
        "Otherwise return ONLY this JSON (no markdown):\n"
        '{"name": "...", "dates": "e.g. May 5-7, ' + str(year) + '", "city": "...", '
        '"country": "...", "venue": "...", "airport": "nearest IATA code", '
        '"side_events": "...", "visa_notes": "US passport visa situation (1 sentence)"}'
    )


def _extract_text(payload: Any) -> str:
    try:
        return payload["candidates"][0]["content"]["parts"][0]["text"] or ""
    except (KeyError, IndexError, TypeError):
        return ""


def parse_live_answer(text: str) -> Optional[LiveConferenceInfo]:
    """
    Pull the first JSON object out of the model answer.

    Returns None for "null", prose without JSON, broken JSON, or an object
    lacking name/dates/city/country.
    """
    m = _JSON_OBJECT_RE.search(text or "")
    if not m:
        return None

    try:
        data = json.loads(m.group(0))
    except json.JSONDecodeError:
        return None

    if not isinstance(data, dict):
        return None

    fields = {k: str(data.get(k) or "").strip() for k in ("name", "dates", "city", "country")}
    if not all(fields.values()):
        return None

    return LiveConferenceInfo(
        venue=str(data.get("venue") or ""),
        airport=str(data.get("airport") or ""),
        side_events=str(data.get("side_events") or ""),
        visa_notes=str(data.get("visa_notes") or ""),
        **fields,
    )


def search_conference_info(
    name: str,
    settings: Optional[Settings] = None,
    session: Optional[requests.Session] = None,
    year: Optional[int] = None,
) -> Optional[LiveConferenceInfo]:
    """
    Look up a conference's confirmed date/location/venue on the web.

    Returns None without an API key or when nothing confirmed is found.
    """
    settings = settings or get_settings()
    if not settings.GEMINI_API_KEY or not (name or "").strip():
        return None

    year = year or date.today().year
    body = {
        "contents": [{"parts": [{"text": _build_prompt(name.strip(), year)}]}],
        "tools": [{"google_search": {}}],
        "generationConfig": {"maxOutputTokens": 512, "temperature": 0.1},
    }

    http = session or requests.Session()
    try:
        resp = post_with_retry(
            http,
            settings.generate_url,
            json_body=body,
            params={"key": settings.GEMINI_API_KEY},
            timeout=settings.HTTP_TIMEOUT,
            retries=settings.HTTP_RETRIES,
            backoff=settings.HTTP_BACKOFF,
        )
        resp.raise_for_status()
        payload = resp.json()
    except requests.RequestException as e:
        logger.warning("Live conference search failed for %r: %s", name, e)
        return None
    except ValueError as e:
        logger.warning("Live conference search returned invalid JSON for %r: %s", name, e)
        return None
    finally:
        if session is None:
            http.close()

    info = parse_live_answer(_extract_text(payload))
    if info is None:
        logger.info("No confirmed %d data found for %r", year, name)
    return info


def format_live_context(info: LiveConferenceInfo) -> str:
    """
    Short context block describing live conference data.
    """
    return "\n".join(
        [
            "CONFERENCE (live web data):",
            f"- Name: {info.name} | Dates: {info.dates}",
            f"- Venue: {info.venue}",
            f"- City: {info.city}, {info.country} (Airport: {info.airport})",
            f"- Side events: {info.side_events}",
            f"- Visa (US passport): {info.visa_notes}",
        ]
    )
