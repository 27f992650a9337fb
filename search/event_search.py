"""Event search pipeline: query, classify, extract, score, normalize."""
import logging
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import requests

from client.serper_client import SerperAPIError, SerperClient
from processor.classifier import filter_event_results
from processor.models import HealthStatus, RawResult, ResponseEnvelope
from processor.normalizer import EventNormalizer

logger = logging.getLogger(__name__)

SOURCE = 'serper'
MAX_RESULTS = 20
RELATED_SEARCH_LIMIT = 5


def build_query(category: str, location: str, recency: str) -> str:
    """Build the provider query text, e.g. "jazz events in Austin 2026"."""
    return f"{category} events in {location} {recency}"


def _elapsed_ms(start_time: float) -> int:
    return int((time.monotonic() - start_time) * 1000)


class EventSearchPipeline:
    """
    Turns a (category, location) query into ranked event records.

    The pipeline keeps no state between calls; one instance can serve
    concurrent searches.
    """

    def __init__(
        self,
        client: SerperClient,
        normalizer: Optional[EventNormalizer] = None,
        recency: Optional[str] = None
    ):
        """
        Initialize the pipeline.

        Args:
            client: Search provider client
            normalizer: Event normalizer (default: EventNormalizer())
            recency: Recency qualifier appended to queries (default: current year)
        """
        self.client = client
        self.normalizer = normalizer or EventNormalizer()
        self.recency = recency

    def search_events(self, category: str, location: str, limit: int = 10) -> ResponseEnvelope:
        """
        Search for events and return them wrapped in a response envelope.

        Provider failures never raise; they produce an envelope with
        success=False and an error message.

        Args:
            category: Event category, e.g. "music"
            location: Place to search in
            limit: Maximum number of events to return (>= 1)

        Returns:
            ResponseEnvelope
        """
        start_time = time.monotonic()
        now = datetime.now(timezone.utc)

        error = self._validate(category, location, limit)
        if error:
            logger.warning(f"Rejected search request: {error}")
            return self._failure(error, start_time)

        query = build_query(category, location, self.recency or str(now.year))
        payload = {
            'q': query,
            'gl': 'us',
            'hl': 'en',
            'num': min(limit * 2, MAX_RESULTS),
            'type': 'search'
        }

        logger.info("Searching for events", extra={'query': query})

        try:
            data = self.client.search(payload)
        except (requests.RequestException, SerperAPIError, ValueError) as e:
            processing_time = _elapsed_ms(start_time)
            logger.error(
                f"Search provider request failed: {e}",
                extra={
                    'query': query,
                    'error_type': type(e).__name__,
                    'processing_time_ms': processing_time
                }
            )
            return self._failure(str(e) or type(e).__name__, start_time)

        organic = self._as_list(data.get('organic'))
        people_also_ask = self._as_list(data.get('peopleAlsoAsk'))
        related_searches = self._as_list(data.get('relatedSearches'))

        candidates = self._to_raw_results(organic + people_also_ask)
        event_results = filter_event_results(candidates)
        events = self.normalizer.process_results(
            event_results, category, limit=limit, now=now
        )

        processing_time = _elapsed_ms(start_time)
        logger.info(
            f"Search successful, found {len(events)} events",
            extra={
                'processing_time_ms': processing_time,
                'total_results': len(organic)
            }
        )

        return ResponseEnvelope(
            success=True,
            events=events,
            count=len(events),
            processing_time=processing_time,
            source=SOURCE,
            metadata={
                'totalOrganic': len(organic),
                'totalPeopleAlsoAsk': len(people_also_ask),
                'candidates': len(event_results),
                'relatedSearches': self._related_terms(related_searches)
            }
        )

    def get_health_status(self) -> HealthStatus:
        """
        Probe the provider with a one-result query.

        Returns:
            HealthStatus with status "healthy" or "unhealthy"
        """
        start_time = time.monotonic()
        try:
            response = self.client.probe()
        except requests.RequestException as e:
            logger.warning(f"Search provider health probe failed: {e}")
            return HealthStatus(status='unhealthy', latency=None, message=str(e))

        latency = _elapsed_ms(start_time)

        if not response.ok:
            return HealthStatus(
                status='unhealthy',
                latency=latency,
                message=f"HTTP {response.status_code}: {response.text}"
            )

        try:
            data = response.json()
        except ValueError:
            data = {}

        credits = data.get('credits') if isinstance(data, dict) else None
        return HealthStatus(
            status='healthy',
            latency=latency,
            message='Serper API responding.',
            credits=credits if credits is not None else 'unknown'
        )

    def _validate(self, category: str, location: str, limit: int) -> Optional[str]:
        if not isinstance(category, str) or not category.strip():
            return "category is required"
        if not isinstance(location, str) or not location.strip():
            return "location is required"
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
            return "limit must be an integer >= 1"
        return None

    def _failure(self, message: str, start_time: float) -> ResponseEnvelope:
        return ResponseEnvelope(
            success=False,
            events=[],
            count=0,
            processing_time=_elapsed_ms(start_time),
            source=SOURCE,
            error=message
        )

    def _to_raw_results(self, items: List[Any]) -> List[RawResult]:
        results = []
        for item in items:
            try:
                results.append(RawResult.from_dict(item))
            except ValueError as e:
                logger.warning(f"Skipping search result: {e}")
        return results

    @staticmethod
    def _as_list(value: Any) -> List[Any]:
        return value if isinstance(value, list) else []

    @staticmethod
    def _related_terms(related_searches: List[Any]) -> List[Any]:
        terms = []
        for item in related_searches[:RELATED_SEARCH_LIMIT]:
            if isinstance(item, dict):
                terms.append(item.get('query', item))
            else:
                terms.append(item)
        return terms
