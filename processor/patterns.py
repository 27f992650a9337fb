"""Keyword, date and venue rules used to recognise event mentions.

Rules are evaluated in list order and the first matching rule wins. Date
rules optionally carry an interpreter that turns a match into a
(year, month, day) triple; rules without one only signal that a date is
mentioned.
"""
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional, Tuple

MONTHS = (
    'january', 'february', 'march', 'april', 'may', 'june', 'july',
    'august', 'september', 'october', 'november', 'december'
)

_MONTH_NAMES = '|'.join(MONTHS)

EVENT_KEYWORDS = (
    'event', 'festival', 'concert', 'conference', 'workshop', 'meetup',
    'seminar', 'exhibition', 'show', 'performance', 'gathering', 'summit',
    'fair', 'expo', 'convention', 'symposium', 'webinar', 'class',
    'eventbrite', 'meetup.com', 'facebook.com/events', 'tickets',
    'registration', 'rsvp', 'calendar'
)

YearMonthDay = Tuple[int, int, int]


@dataclass(frozen=True)
class DateRule:
    """A date regex and the function reading a date out of its match."""
    name: str
    pattern: re.Pattern
    interpret: Optional[Callable[[re.Match, datetime], YearMonthDay]] = None


@dataclass(frozen=True)
class VenueRule:
    """A venue regex whose first group is the venue name."""
    name: str
    pattern: re.Pattern


def _month_number(name: str) -> int:
    return MONTHS.index(name.lower()) + 1


def _read_month_name(match: re.Match, now: datetime) -> YearMonthDay:
    # "March 15, 2025" / "March 15"
    year = int(match.group(3)) if match.group(3) else now.year
    return year, _month_number(match.group(1)), int(match.group(2))


def _read_slash(match: re.Match, now: datetime) -> YearMonthDay:
    # MM/DD/YY or MM/DD/YYYY
    year = match.group(3)
    if len(year) == 2:
        year = f"20{year}"
    return int(year), int(match.group(1)), int(match.group(2))


def _read_ordinal(match: re.Match, now: datetime) -> YearMonthDay:
    # "3rd of March"; the year is never captured
    return now.year, _month_number(match.group(3)), int(match.group(1))


DATE_RULES = (
    DateRule(
        'month_name',
        re.compile(
            rf'\b({_MONTH_NAMES})\s+(\d{{1,2}})(?!\d),?\s*(\d{{4}})?',
            re.IGNORECASE
        ),
        _read_month_name
    ),
    DateRule(
        'slash',
        re.compile(r'\b(\d{1,2})/(\d{1,2})/(\d{4}|\d{2})\b'),
        _read_slash
    ),
    DateRule(
        'weekday_month',
        re.compile(
            r'\b(mon|tue|wed|thu|fri|sat|sun)[a-z]*\s*,?\s*'
            r'(jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)',
            re.IGNORECASE
        )
    ),
    DateRule(
        'relative',
        re.compile(
            r'\b(today|tomorrow|tonight|this\s+(week|weekend|month))\b',
            re.IGNORECASE
        )
    ),
    DateRule(
        'ordinal',
        re.compile(
            rf'\b(\d{{1,2}})(st|nd|rd|th)\s+(?:of\s+)?({_MONTH_NAMES})',
            re.IGNORECASE
        ),
        _read_ordinal
    ),
)

# A capitalized word such as "Blue", "O'Malley's" or "Arts-Center"
_CAP_WORD = r"[A-Z][A-Za-z&'-]*"
# Words that start a new phrase rather than continue a venue name
_PHRASE_STARTERS = (
    'Tickets|Ticket|Tonight|Today|Tomorrow|This|Buy|Get|Join|Register|'
    'Free|Doors|Book|Visit|Call|Learn|See|More|On|In|From|And|The'
)
# At most four words, stopping before a phrase starter
_CAP_WORDS = rf'{_CAP_WORD}(?:[ \t]+(?!(?:{_PHRASE_STARTERS})\b){_CAP_WORD}){{0,3}}'

_AT_VENUE_NOUNS = (
    'Center|Centre|Hall|Theatre|Theater|Auditorium|Stadium|Arena|'
    'Club|Bar|Restaurant|Hotel|Museum|Gallery|Park'
)
_VENUE_NOUNS = 'Center|Centre|Hall|Theatre|Theater|Auditorium|Stadium|Arena'

VENUE_RULES = (
    VenueRule(
        'at_venue_noun',
        re.compile(
            rf'(?:\b(?i:at)|@)\s+((?:{_CAP_WORD}[ \t]+)*(?:{_AT_VENUE_NOUNS}))\b'
        )
    ),
    VenueRule(
        'venue_noun',
        re.compile(rf'\b((?:{_CAP_WORD}[ \t]+)+(?:{_VENUE_NOUNS}))\b')
    ),
    VenueRule(
        'label',
        re.compile(r"\b(?i:venue|location):\s*([A-Z][A-Za-z \t&'-]+)")
    ),
    VenueRule(
        'at_capitalized',
        re.compile(rf'(?:\b(?i:at)|@)\s+({_CAP_WORDS})')
    ),
)


def contains_event_keyword(text: str, keywords=EVENT_KEYWORDS) -> bool:
    """Return True if any keyword is a case-insensitive substring of text."""
    lowered = text.lower()
    return any(keyword in lowered for keyword in keywords)


def match_date(text: str) -> Optional[DateRule]:
    """Return the first date rule that matches text, or None."""
    for rule in DATE_RULES:
        if rule.pattern.search(text):
            return rule
    return None


def contains_date_pattern(text: str) -> bool:
    return match_date(text) is not None


def match_venue(text: str) -> Optional[str]:
    """
    Return the venue captured by the first matching venue rule.

    Args:
        text: Text to search

    Returns:
        Trimmed venue string, or None if no rule matches
    """
    for rule in VENUE_RULES:
        match = rule.pattern.search(text)
        if match and match.group(1).strip():
            return match.group(1).strip()
    return None


def contains_venue_pattern(text: str) -> bool:
    return match_venue(text) is not None
