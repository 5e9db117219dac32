"""
Conference matching.

Resolves free text (slug, name, city, loose phrase) to one catalog entry.

Rules:
- an exact slug (after lowercase + trim) always wins
- otherwise every query word with >= 3 characters that appears as a substring
  of an entry's searchable text adds len(word) to that entry's score
- the strictly highest score wins; ties go to the entry listed first in the catalog
- a top score of 0 means "no match" (None), never an exception
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple

from conftrip.catalog import Catalog
from conftrip.model import CatalogEntry


logger = logging.getLogger(__name__)

MIN_WORD_LENGTH = 3
MIN_MENTION_SCORE = 6
MAX_BATCH_QUERIES = 4


def _normalize(query: Optional[str]) -> str:
    if not isinstance(query, str):
        return ""
    return query.strip().lower()


def exact_lookup(catalog: Catalog, query: Optional[str]) -> Optional[CatalogEntry]:
    """
    Return the entry whose slug equals the normalized query, else None.
    """
    q = _normalize(query)
    if not q:
        return None
    return catalog.load().get(q)


def score_entry(entry: CatalogEntry, words: Iterable[str]) -> int:
    """
    Sum the lengths of all query words (>= 3 chars) found in the entry's searchable text.
    """
    searchable = entry.searchable_text()
    score = 0
    for word in words:
        if len(word) < MIN_WORD_LENGTH:
            continue
        if word in searchable:
            score += len(word)
    return score


def fuzzy_lookup(catalog: Catalog, query: Optional[str]) -> Optional[CatalogEntry]:
    """
    Best-scoring entry for a free-text query, or None if nothing scored.
    """
    words = _normalize(query).split()
    if not words:
        return None

    best: Optional[CatalogEntry] = None
    best_score = 0
    for entry in catalog:
        score = score_entry(entry, words)
        # strict ">" keeps the first entry on ties
        if score > best_score:
            best, best_score = entry, score

    if best is not None:
        logger.debug("Fuzzy match %r -> %s (score %d)", query, best.slug, best_score)
    return best


def lookup(catalog: Catalog, query: Optional[str]) -> Optional[CatalogEntry]:
    """
    Resolve a query to one conference: exact slug first, fuzzy keywords second.
    """
    entry = exact_lookup(catalog, query)
    if entry is not None:
        return entry
    return fuzzy_lookup(catalog, query)


def resolve_many(
    catalog: Catalog,
    queries: Iterable[str],
    limit: int = MAX_BATCH_QUERIES,
) -> List[Tuple[str, Optional[CatalogEntry]]]:
    """
    Resolve several conference queries in order (at most `limit` of them).

    Used for multi-conference routing; unresolved queries keep a None entry
    so the caller can still mention them.
    """
    out: List[Tuple[str, Optional[CatalogEntry]]] = []
    for q in queries:
        if len(out) >= limit:
            break
        out.append((q, lookup(catalog, q)))
    return out


def detect_mention(
    catalog: Catalog,
    text: Optional[str],
    min_score: int = MIN_MENTION_SCORE,
) -> Optional[CatalogEntry]:
    """
    Detect which conference a social media post talks about.

    Every alias found in the text adds its length to the entry's score
    (longer phrases = more confidence). Entries without aliases never match.
    """
    hay = _normalize(text)
    if not hay:
        return None

    best: Optional[CatalogEntry] = None
    best_score = 0
    for entry in catalog:
        score = sum(len(a) for a in entry.aliases if a.strip() and a.lower() in hay)
        if score > best_score:
            best, best_score = entry, score

    return best if best_score >= min_score else None
