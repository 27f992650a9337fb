"""Heuristic filter deciding which search results look like events."""
import logging
from typing import List

from processor.models import RawResult
from processor.patterns import (
    contains_date_pattern,
    contains_event_keyword,
    contains_venue_pattern,
)

logger = logging.getLogger(__name__)


def build_extraction_input(result: RawResult) -> str:
    """
    Join the textual fields of a result into one string for rule matching.

    Args:
        result: Raw search result

    Returns:
        Space-separated title, snippet, link and question
    """
    parts = (result.title, result.snippet, result.link, result.question)
    return ' '.join(part or '' for part in parts)


def is_event_like(result: RawResult) -> bool:
    """
    Decide whether a result plausibly describes an event.

    A keyword, a date or a venue on its own is enough. Weak matches are
    kept here and ranked down by the scorer.
    """
    text = build_extraction_input(result)
    return (
        contains_event_keyword(text)
        or contains_date_pattern(text)
        or contains_venue_pattern(text)
    )


def filter_event_results(results: List[RawResult]) -> List[RawResult]:
    """Keep event-like results, preserving their original order."""
    event_results = [result for result in results if is_event_like(result)]
    logger.debug(
        f"Classified {len(event_results)} of {len(results)} results as event-like"
    )
    return event_results
