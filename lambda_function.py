"""AWS Lambda handler for the event search API."""
import json
import logging
import os
import time
from typing import Any, Dict

from client.serper_client import SerperClient
from search.event_search import EventSearchPipeline


# Configure JSON logging
class JsonFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            'timestamp': self.formatTime(record),
            'level': record.levelname,
            'message': record.getMessage(),
            'logger': record.name
        }

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data)


def setup_logging(log_level: str = 'INFO') -> None:
    """
    Configure logging with JSON formatter.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    root_logger = logging.getLogger()

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    root_logger.addHandler(handler)

    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))


def load_config() -> Dict[str, Any]:
    """
    Read handler configuration from environment variables.

    Returns:
        Dict with api_key, log_level, timeout_seconds, default_limit, recency
    """
    return {
        'api_key': os.environ.get('SERPER_API_KEY', ''),
        'log_level': os.environ.get('LOG_LEVEL', 'INFO'),
        'timeout_seconds': float(os.environ.get('TIMEOUT_SECONDS', '15')),
        'default_limit': int(os.environ.get('DEFAULT_LIMIT', '10')),
        'recency': os.environ.get('SEARCH_RECENCY') or None
    }


def _response(status_code: int, body: Dict[str, Any]) -> Dict[str, Any]:
    return {
        'statusCode': status_code,
        'headers': {'Content-Type': 'application/json'},
        'body': json.dumps(body)
    }


def _request_params(event: Dict[str, Any]) -> Dict[str, Any]:
    """Merge direct invocation keys with API Gateway query parameters."""
    params = dict(event.get('queryStringParameters') or {})
    for key in ('action', 'category', 'location', 'limit'):
        if key in event:
            params[key] = event[key]
    return params


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Main Lambda handler function for event search.

    Args:
        event: {"action": "search"|"health", "category", "location", "limit"}
               or an API Gateway proxy event carrying the same keys as
               query string parameters
        context: Lambda context object

    Returns:
        Response dict with statusCode and JSON body
    """
    config = load_config()

    setup_logging(config['log_level'])
    logger = logging.getLogger(__name__)

    start_time = time.time()
    params = _request_params(event or {})
    action = params.get('action') or 'search'

    logger.info(
        "Lambda execution started",
        extra={'action': action, 'timeout_seconds': config['timeout_seconds']}
    )

    try:
        if not config['api_key']:
            logger.error("SERPER_API_KEY is not configured")
            return _response(500, {
                'message': 'Search provider is not configured',
                'error': 'SERPER_API_KEY is not set'
            })

        client = SerperClient(
            api_key=config['api_key'],
            timeout=config['timeout_seconds']
        )
        pipeline = EventSearchPipeline(client=client, recency=config['recency'])

        if action == 'health':
            health = pipeline.get_health_status()
            logger.info(
                f"Health check completed: {health.status}",
                extra={'latency_ms': health.latency}
            )
            return _response(200, health.to_dict())

        if action != 'search':
            return _response(400, {
                'message': 'Unknown action',
                'error': f"Unsupported action '{action}'"
            })

        raw_limit = params.get('limit')
        if raw_limit is None or raw_limit == '':
            raw_limit = config['default_limit']
        try:
            limit = int(raw_limit)
        except (TypeError, ValueError):
            limit = 0

        category = str(params.get('category') or '').strip()
        location = str(params.get('location') or '').strip()
        if not category or not location or limit < 1:
            return _response(400, {
                'message': 'Invalid request',
                'error': 'category, location and a positive integer limit are required'
            })

        envelope = pipeline.search_events(
            category=category,
            location=location,
            limit=limit
        )

        duration = time.time() - start_time
        logger.info(
            "Lambda execution completed",
            extra={
                'duration_seconds': round(duration, 2),
                'success': envelope.success,
                'count': envelope.count
            }
        )

        return _response(200 if envelope.success else 502, envelope.to_dict())

    except Exception as e:
        duration = time.time() - start_time

        logger.error(
            f"Lambda execution failed: {str(e)}",
            extra={
                'duration_seconds': round(duration, 2),
                'error_type': type(e).__name__
            },
            exc_info=True
        )

        return _response(500, {
            'message': 'Event search failed',
            'error': str(e),
            'error_type': type(e).__name__,
            'duration_seconds': round(duration, 2)
        })
