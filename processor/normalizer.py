"""Event normalizer assembling output records from search results."""
import logging
import re
from datetime import datetime, timezone
from typing import Any, List, Optional

from processor.extractor import extract_date_info, extract_ticket_url, extract_venue
from processor.models import DateSpan, Event, RawResult
from processor.scorer import calculate_confidence

logger = logging.getLogger(__name__)


class EventNormalizer:
    """Builds Event records from event-like search results."""

    ID_PREFIX = 'serper'
    SOURCE = 'serper_api'
    DEFAULT_DESCRIPTION = 'Event details available on the event page.'

    def process_results(
        self,
        raw_results: List[Any],
        category: str,
        limit: Optional[int] = None,
        now: Optional[datetime] = None
    ) -> List[Event]:
        """
        Normalize a batch of event-like results.

        Items that cannot be normalized are skipped; the batch continues.

        Args:
            raw_results: Provider result dicts or RawResult objects, in order
            category: Query category copied onto each event
            limit: Maximum number of results to normalize
            now: Extraction time used as the date fallback

        Returns:
            List of Event objects, at most limit long
        """
        if now is None:
            now = datetime.now(timezone.utc)
        if limit is not None:
            raw_results = raw_results[:limit]

        events = []

        for item in raw_results:
            try:
                result = item if isinstance(item, RawResult) else RawResult.from_dict(item)
                event = self.normalize(result, category, now=now)
                if event:
                    events.append(event)
            except Exception as e:
                logger.warning(f"Failed to normalize search result: {e}")
                continue

        logger.info(
            f"Normalized {len(events)} events out of "
            f"{len(raw_results)} candidate results"
        )
        return events

    def normalize(
        self,
        result: RawResult,
        category: str,
        now: Optional[datetime] = None
    ) -> Optional[Event]:
        """
        Normalize a single result.

        Args:
            result: Raw search result
            category: Query category
            now: Extraction time used as the date fallback

        Returns:
            Event object or None if the result has neither title nor question
        """
        title = result.title or result.question
        if not title:
            logger.debug("Dropping search result without title or question")
            return None

        snippet = result.snippet or ''
        text = f"{title} {snippet}"

        return self.build_event(
            result=result,
            title=title,
            category=category,
            date_span=extract_date_info(text, now=now),
            venue=extract_venue(text),
            ticket_url=extract_ticket_url(result.link, snippet),
            confidence=calculate_confidence(result, category)
        )

    def build_event(
        self,
        result: RawResult,
        title: str,
        category: str,
        date_span: DateSpan,
        venue: str,
        ticket_url: Optional[str],
        confidence: float
    ) -> Event:
        """Assemble an Event from a result and its extracted fields."""
        return Event(
            id=self.generate_event_id(title),
            title=title,
            description=result.snippet or self.DEFAULT_DESCRIPTION,
            category=category,
            venue=venue,
            location=venue,
            start_date=date_span.start_date,
            end_date=date_span.end_date,
            event_url=result.link,
            ticket_url=ticket_url,
            source=self.SOURCE,
            confidence=confidence,
            thumbnail=None
        )

    def generate_event_id(self, title: str) -> str:
        """
        Generate an event identifier from its title.

        Identical titles produce identical IDs.

        Args:
            title: Event title

        Returns:
            Source-prefixed lowercase slug of the title
        """
        slug = re.sub(r'[^a-zA-Z0-9]', '_', title).lower()
        return f"{self.ID_PREFIX}_{slug}"
