"""Unit tests for date, venue and ticket URL extraction."""
from datetime import datetime, timezone

import pytest

from processor.extractor import (
    extract_date_info,
    extract_ticket_url,
    extract_venue,
    is_ticket_url,
)
from processor.models import VENUE_UNRESOLVED


@pytest.fixture
def now():
    """Fixed extraction time."""
    return datetime(2026, 10, 18, 12, 30, tzinfo=timezone.utc)


class TestExtractDateInfo:
    """Test cases for extract_date_info."""

    def test_month_name_with_year(self, now):
        """Test "Month Day, Year" dates."""
        span = extract_date_info(
            "Jazz Festival at Blue Note on March 15, 2025 Tickets available",
            now=now
        )

        assert span.start_date == "2025-03-15T00:00:00+00:00"
        assert span.end_date == span.start_date

    def test_month_name_defaults_to_current_year(self, now):
        """Test that a missing year falls back to the extraction year."""
        span = extract_date_info("Parade on July 4", now=now)
        assert span.start_date == "2026-07-04T00:00:00+00:00"

    def test_slash_date_with_two_digit_year(self, now):
        """Test MM/DD/YY dates."""
        span = extract_date_info("Fireworks 7/4/25 at dusk", now=now)
        assert span.start_date == "2025-07-04T00:00:00+00:00"

    def test_slash_date_with_four_digit_year(self, now):
        """Test MM/DD/YYYY dates."""
        span = extract_date_info("Doors 12/31/2026", now=now)
        assert span.start_date == "2026-12-31T00:00:00+00:00"

    def test_ordinal_date(self, now):
        """Test "3rd of March" dates."""
        span = extract_date_info("Closing night on the 3rd of March", now=now)
        assert span.start_date == "2026-03-03T00:00:00+00:00"

    def test_invalid_date_falls_through_to_next_rule(self, now):
        """Test that an impossible date is skipped in favour of the next rule."""
        span = extract_date_info("Moved from February 30 to 04/12/2026", now=now)
        assert span.start_date == "2026-04-12T00:00:00+00:00"

    def test_no_date_defaults_to_now(self, now):
        """Test that text without a date resolves to the extraction time."""
        span = extract_date_info("A guide to sourdough baking", now=now)

        assert span.start_date == now.isoformat()
        assert span.end_date == now.isoformat()

    def test_match_only_rules_default_to_now(self, now):
        """Test that weekday and relative mentions are not turned into dates."""
        span = extract_date_info("Open mic this weekend, Friday, Oct", now=now)
        assert span.start_date == now.isoformat()

    def test_invalid_only_date_defaults_to_now(self, now):
        """Test that a lone impossible date resolves to the extraction time."""
        span = extract_date_info("Sale ends 13/45/2026", now=now)
        assert span.start_date == span.end_date == now.isoformat()

    def test_default_now_is_utc(self):
        """Test that the fallback timestamp is timezone aware."""
        span = extract_date_info("no date here")
        assert span.start_date.endswith("+00:00")


class TestExtractVenue:
    """Test cases for extract_venue."""

    def test_example_venue(self):
        """Test venue extraction from the festival example."""
        venue = extract_venue(
            "Jazz Festival at Blue Note on March 15, 2025 "
            "Tickets available on eventbrite.com"
        )
        assert "Blue Note" in venue

    def test_venue_is_trimmed(self):
        """Test that surrounding whitespace is removed."""
        assert extract_venue("Venue:   Harbor Point   ") == "Harbor Point"

    def test_unresolved_venue(self):
        """Test the placeholder for text without a venue."""
        assert extract_venue("a guide to sourdough baking") == VENUE_UNRESOLVED
        assert extract_venue("") == "See Event Page"


class TestExtractTicketUrl:
    """Test cases for extract_ticket_url."""

    def test_event_url_on_ticket_platform(self):
        """Test that a ticketing event URL is returned unchanged."""
        url = "https://eventbrite.com/jazz"
        assert extract_ticket_url(url, "Tickets available on eventbrite.com") == url

    def test_subdomain_of_ticket_platform(self):
        """Test that subdomains of ticketing platforms qualify."""
        url = "https://www.eventbrite.com/e/jazz-night-123"
        assert extract_ticket_url(url, None) == url

    def test_event_url_preferred_over_snippet(self):
        """Test that the event URL wins over URLs in the snippet."""
        url = "https://www.ticketmaster.com/event/1"
        snippet = "Also on https://www.eventbrite.com/e/2"
        assert extract_ticket_url(url, snippet) == url

    def test_ticket_url_in_snippet(self):
        """Test finding a ticket link inside the snippet."""
        snippet = (
            "Details at https://example.com/jazz and tickets at "
            "https://www.universe.com/events/jazz-456."
        )
        assert extract_ticket_url("https://example.com/jazz", snippet) == (
            "https://www.universe.com/events/jazz-456"
        )

    def test_no_ticket_url(self):
        """Test results without any ticketing link."""
        assert extract_ticket_url("https://example.com/jazz", "No links here") is None
        assert extract_ticket_url(None, None) is None

    def test_lookalike_domain_is_rejected(self):
        """Test that a domain merely containing a platform name is rejected."""
        assert not is_ticket_url("https://noteventbrite.com/jazz")
        assert is_ticket_url("https://brownpapertickets.com/event/9")
