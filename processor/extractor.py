"""Best-effort extraction of dates, venues and ticket links."""
import logging
import re
from datetime import datetime, timezone
from typing import Optional
from urllib.parse import urlparse

from processor.models import VENUE_UNRESOLVED, DateSpan
from processor.patterns import DATE_RULES, match_venue

logger = logging.getLogger(__name__)

TICKET_DOMAINS = (
    'eventbrite.com',
    'ticketmaster.com',
    'universe.com',
    'brownpapertickets.com'
)

URL_PATTERN = re.compile(r'https?://[^\s]+')


def extract_date_info(text: str, now: Optional[datetime] = None) -> DateSpan:
    """
    Extract a start/end date from text.

    Date rules are tried in order; the first one whose match reads as a
    valid calendar date wins. Rules that only recognise a date mention
    (weekdays, "this weekend") are skipped. End date always equals start
    date.

    Args:
        text: Text to search
        now: Extraction time, defaults to the current UTC time

    Returns:
        DateSpan with ISO 8601 timestamps; both equal to now if nothing
        parses
    """
    if now is None:
        now = datetime.now(timezone.utc)

    for rule in DATE_RULES:
        if rule.interpret is None:
            continue

        match = rule.pattern.search(text)
        if not match:
            continue

        year, month, day = rule.interpret(match, now)
        try:
            parsed = datetime(year, month, day, tzinfo=timezone.utc)
        except ValueError:
            logger.debug(
                f"Discarding invalid {rule.name} date '{match.group(0)}'"
            )
            continue

        start_date = parsed.isoformat()
        return DateSpan(start_date=start_date, end_date=start_date)

    fallback = now.isoformat()
    return DateSpan(start_date=fallback, end_date=fallback)


def extract_venue(text: str) -> str:
    """Return the first venue found in text, or the unresolved placeholder."""
    return match_venue(text) or VENUE_UNRESOLVED


def is_ticket_url(url: Optional[str]) -> bool:
    """
    Check whether a URL points at a known ticketing platform.

    Args:
        url: URL to check

    Returns:
        True if the host is a ticketing domain or one of its subdomains
    """
    if not url:
        return False

    try:
        host = (urlparse(url).hostname or '').lower()
    except ValueError:
        return False

    return any(
        host == domain or host.endswith(f'.{domain}')
        for domain in TICKET_DOMAINS
    )


def extract_ticket_url(event_url: Optional[str], snippet: Optional[str]) -> Optional[str]:
    """
    Find a ticketing link for a result.

    The event URL itself is preferred; otherwise the first ticketing URL
    mentioned in the snippet is returned.

    Args:
        event_url: The result's own link
        snippet: The result's snippet text

    Returns:
        Ticket URL or None
    """
    if is_ticket_url(event_url):
        return event_url

    for url in URL_PATTERN.findall(snippet or ''):
        url = url.rstrip('.,;:!?)')
        if is_ticket_url(url):
            return url

    return None
