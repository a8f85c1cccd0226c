"""
Asset Tracker — Price Extractor

Two-phase heuristic scan over a price page whose markup we do not control:

1. Row scan (PRIMARY): every <tr> containing one of the profile's phrases
   offers the digits of its price cell as a candidate.
2. Free-text scan (FALLBACK): only when the row scan ends at zero. Short
   div/span/p elements containing the primary phrase offer the first
   dot-grouped number found in their parent's text.

Within each phase the LAST match in document order wins. Each phase is a
left fold over the ordered candidates, where None keeps the accumulator.

extract() is pure: no I/O and no shared state.
"""

from __future__ import annotations

from functools import reduce
from typing import Iterable, Iterator

import structlog

from asset_tracker.extractor import Found, NotFound
from asset_tracker.extractor.dom import HtmlDocument, SoupDocument, normalize_text
from asset_tracker.extractor.normalize import find_dotted_number, parse_digits
from asset_tracker.extractor.profiles import SourceProfile

logger = structlog.get_logger(__name__)

# Elements with this much text or more are page containers, not price labels.
MAX_FALLBACK_TEXT_LENGTH = 100


def extract(html: str, profile: SourceProfile) -> Found | NotFound:
    """
    Locate the buy price for `profile` in `html`.

    Args:
        html: Raw page body.
        profile: Source profile describing the page shape.

    Returns:
        Found(price) when a positive price was located, NotFound otherwise.
    """
    return extract_from_document(SoupDocument(html), profile)


def extract_from_document(document: HtmlDocument, profile: SourceProfile) -> Found | NotFound:
    """extract() over an already-parsed document."""
    candidate = last_wins(_row_candidates(document, profile))
    method = "row_scan"

    # A zero row-scan result is indistinguishable from "no row matched".
    if candidate == 0:
        candidate = last_wins(_text_candidates(document, profile))
        method = "text_scan"

    raw = candidate
    if profile.unit_rule is not None:
        candidate = profile.unit_rule.apply(candidate)

    if candidate > 0:
        logger.info(
            "price_extracted",
            profile=profile.name,
            method=method,
            raw_price=raw,
            price=candidate,
        )
        return Found(price=candidate)

    logger.warning("price_not_found", profile=profile.name)
    return NotFound()


def last_wins(candidates: Iterable[int | None], initial: int = 0) -> int:
    """Fold candidates left to right; each non-None candidate replaces the accumulator."""
    return reduce(
        lambda acc, candidate: acc if candidate is None else candidate,
        candidates,
        initial,
    )


def matching_phrase(text: str, phrases: Iterable[str]) -> str | None:
    """Return the first phrase contained in `text` (case-insensitive), or None."""
    haystack = text.lower()
    for phrase in phrases:
        if normalize_text(phrase).lower() in haystack:
            return phrase
    return None


# ---------------------------------------------------------------------------
# Phase 1: row scan
# ---------------------------------------------------------------------------


def _row_candidates(document: HtmlDocument, profile: SourceProfile) -> Iterator[int | None]:
    for row in document.rows():
        if matching_phrase(document.text(row), profile.match_phrases) is None:
            continue

        cells = document.cells(row, include_headers=profile.include_header_cells)
        if len(cells) < profile.min_cell_count or len(cells) <= profile.price_column_index:
            logger.debug(
                "price_row_too_short",
                profile=profile.name,
                cell_count=len(cells),
                min_cell_count=profile.min_cell_count,
            )
            continue

        price_text = document.text(cells[profile.price_column_index])
        candidate = parse_digits(price_text)
        logger.debug(
            "price_row_matched",
            profile=profile.name,
            name=document.text(cells[0]).strip(),
            raw_text=price_text.strip(),
            candidate=candidate,
        )
        yield candidate


# ---------------------------------------------------------------------------
# Phase 2: free-text fallback
# ---------------------------------------------------------------------------


def _text_candidates(document: HtmlDocument, profile: SourceProfile) -> Iterator[int | None]:
    # Only the primary phrase is checked here.
    phrase = (profile.primary_phrase,)
    for element in document.text_elements():
        text = document.text(element).lower()
        if len(text) >= MAX_FALLBACK_TEXT_LENGTH:
            continue
        if matching_phrase(text, phrase) is None:
            continue

        candidate = find_dotted_number(document.parent_text(element))
        if candidate is not None:
            logger.debug("price_text_matched", profile=profile.name, candidate=candidate)
        yield candidate
