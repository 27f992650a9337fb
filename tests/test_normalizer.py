"""Unit tests for EventNormalizer."""
from datetime import datetime, timezone

import pytest

from processor.models import RawResult
from processor.normalizer import EventNormalizer


@pytest.fixture
def now():
    return datetime(2026, 10, 18, 12, 30, tzinfo=timezone.utc)


class TestEventNormalizer:
    """Test cases for EventNormalizer class."""

    def test_normalize_example_result(self, now):
        """Test normalizing the jazz festival example."""
        normalizer = EventNormalizer()
        result = RawResult(
            title="Jazz Festival at Blue Note on March 15, 2025",
            snippet="Tickets available on eventbrite.com",
            link="https://eventbrite.com/jazz"
        )

        event = normalizer.normalize(result, "music", now=now)

        assert event.id == "serper_jazz_festival_at_blue_note_on_march_15__2025"
        assert event.title == "Jazz Festival at Blue Note on March 15, 2025"
        assert event.description == "Tickets available on eventbrite.com"
        assert event.category == "music"
        assert "Blue Note" in event.venue
        assert event.location == event.venue
        assert event.start_date == "2025-03-15T00:00:00+00:00"
        assert event.end_date == event.start_date
        assert event.event_url == "https://eventbrite.com/jazz"
        assert event.ticket_url == "https://eventbrite.com/jazz"
        assert event.source == "serper_api"
        assert event.confidence >= 0.95
        assert event.thumbnail is None

    def test_question_used_as_title(self, now):
        """Test that "people also ask" entries use the question as title."""
        normalizer = EventNormalizer()
        result = RawResult(question="What concerts are on this weekend?")

        event = normalizer.normalize(result, "music", now=now)

        assert event.title == "What concerts are on this weekend?"
        assert event.description == EventNormalizer.DEFAULT_DESCRIPTION
        assert event.venue == "See Event Page"
        assert event.start_date == now.isoformat()
        assert event.event_url is None
        assert event.ticket_url is None

    def test_missing_title_and_question_is_dropped(self, now):
        """Test that results without title or question yield no event."""
        normalizer = EventNormalizer()
        result = RawResult(snippet="Festival on June 7", link="https://example.com")

        assert normalizer.normalize(result, "music", now=now) is None

    def test_generate_event_id_consistency(self):
        """Test that event_id generation is consistent for same inputs."""
        normalizer = EventNormalizer()

        assert normalizer.generate_event_id("Jazz Night: Live!") == "serper_jazz_night__live_"
        assert normalizer.generate_event_id("Jazz Night: Live!") == (
            normalizer.generate_event_id("Jazz Night: Live!")
        )

    def test_same_title_produces_same_id(self, now):
        """Test that distinct results sharing a title share an ID."""
        normalizer = EventNormalizer()
        first = normalizer.normalize(
            RawResult(title="Open Mic Night", link="https://a.example.com"), "music", now=now
        )
        second = normalizer.normalize(
            RawResult(title="Open Mic Night", link="https://b.example.com"), "music", now=now
        )

        assert first.id == second.id
        assert first.event_url != second.event_url

    def test_process_results_skips_bad_items(self, now):
        """Test that unusable items are dropped without aborting the batch."""
        normalizer = EventNormalizer()
        raw_results = [
            {'title': 'Spring concert series', 'link': 'https://example.com/spring'},
            'not a result',
            {'snippet': 'Festival without a title'},
            RawResult(title='Dinner at Riverside Hall'),
        ]

        events = normalizer.process_results(raw_results, "music", now=now)

        assert [e.title for e in events] == [
            'Spring concert series',
            'Dinner at Riverside Hall',
        ]
        assert events[1].venue == 'Riverside Hall'

    def test_process_results_respects_limit(self, now):
        """Test that no more than limit results are normalized."""
        normalizer = EventNormalizer()
        raw_results = [RawResult(title=f"Concert {i}") for i in range(5)]

        events = normalizer.process_results(raw_results, "music", limit=2, now=now)

        assert [e.title for e in events] == ["Concert 0", "Concert 1"]

    def test_to_dict_uses_wire_names(self, now):
        """Test serialized field names."""
        normalizer = EventNormalizer()
        event = normalizer.normalize(RawResult(title="Concert"), "music", now=now)

        data = event.to_dict()

        assert set(data) == {
            'id', 'title', 'description', 'category', 'venue', 'location',
            'startDate', 'endDate', 'eventUrl', 'ticketUrl', 'source',
            'confidence', 'thumbnail'
        }
