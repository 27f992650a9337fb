"""Confidence scoring for event-like search results."""
from processor.classifier import build_extraction_input
from processor.models import RawResult
from processor.patterns import contains_date_pattern, contains_event_keyword

BASE_CONFIDENCE = 0.6
MAX_CONFIDENCE = 1.0

EVENT_PLATFORM_DOMAINS = (
    'eventbrite.com',
    'meetup.com',
    'facebook.com/events',
    'lu.ma'
)

CORE_EVENT_KEYWORDS = ('event', 'festival', 'concert', 'conference', 'workshop')

PLATFORM_BOOST = 0.2
CATEGORY_BOOST = 0.1
KEYWORD_BOOST = 0.1
DATE_BOOST = 0.05


def calculate_confidence(result: RawResult, category: str) -> float:
    """
    Score how much a result can be trusted as an event.

    Starts from a base score and adds a fixed boost for each signal
    present: an event platform domain, the category name, a core event
    keyword and a date mention. Nothing is ever subtracted.

    Args:
        result: Raw search result
        category: Query category

    Returns:
        Score in [0.0, 1.0], rounded to two decimals
    """
    text = build_extraction_input(result)
    lowered = text.lower()
    confidence = BASE_CONFIDENCE

    if any(domain in lowered for domain in EVENT_PLATFORM_DOMAINS):
        confidence += PLATFORM_BOOST

    category = (category or '').strip().lower()
    if category and category in lowered:
        confidence += CATEGORY_BOOST

    if contains_event_keyword(text, CORE_EVENT_KEYWORDS):
        confidence += KEYWORD_BOOST

    if contains_date_pattern(text):
        confidence += DATE_BOOST

    return round(min(confidence, MAX_CONFIDENCE), 2)
