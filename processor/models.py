"""Data models for search result processing."""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


VENUE_UNRESOLVED = 'See Event Page'


@dataclass(frozen=True)
class RawResult:
    """One organic result or "people also ask" entry from the provider."""
    title: Optional[str] = None
    snippet: Optional[str] = None
    link: Optional[str] = None
    question: Optional[str] = None

    @classmethod
    def from_dict(cls, item: Dict[str, Any]) -> 'RawResult':
        """
        Build a RawResult from a provider result dict.

        Args:
            item: Raw result dict from the provider response

        Returns:
            RawResult with non-string fields dropped

        Raises:
            ValueError: If item is not a dict
        """
        if not isinstance(item, dict):
            raise ValueError(f"Unexpected result shape: {type(item).__name__}")

        def text(key: str) -> Optional[str]:
            value = item.get(key)
            return value if isinstance(value, str) else None

        return cls(
            title=text('title'),
            snippet=text('snippet'),
            link=text('link'),
            question=text('question')
        )


@dataclass(frozen=True)
class DateSpan:
    """Start and end timestamps (ISO 8601)."""
    start_date: str
    end_date: str


@dataclass(frozen=True)
class Event:
    """Normalized event record."""
    id: str
    title: str
    description: str
    category: str
    venue: str
    location: str
    start_date: str
    end_date: str
    event_url: Optional[str]
    ticket_url: Optional[str]
    source: str
    confidence: float
    thumbnail: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the wire field names."""
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'category': self.category,
            'venue': self.venue,
            'location': self.location,
            'startDate': self.start_date,
            'endDate': self.end_date,
            'eventUrl': self.event_url,
            'ticketUrl': self.ticket_url,
            'source': self.source,
            'confidence': self.confidence,
            'thumbnail': self.thumbnail
        }


@dataclass(frozen=True)
class ResponseEnvelope:
    """Result of one search invocation."""
    success: bool
    events: List[Event]
    count: int
    processing_time: int
    source: str
    error: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'success': self.success,
            'events': [event.to_dict() for event in self.events],
            'count': self.count,
            'processingTime': self.processing_time,
            'source': self.source
        }
        if self.error is not None:
            data['error'] = self.error
        if self.metadata is not None:
            data['metadata'] = self.metadata
        return data


@dataclass(frozen=True)
class HealthStatus:
    """Reachability of the search provider."""
    status: str
    latency: Optional[int]
    message: str
    credits: Any = field(default=None)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'status': self.status,
            'latency': self.latency,
            'message': self.message
        }
        if self.credits is not None:
            data['credits'] = self.credits
        return data
