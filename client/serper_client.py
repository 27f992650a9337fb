"""HTTP client for the Serper.dev Google search API."""
import logging
from typing import Any, Dict

import requests

logger = logging.getLogger(__name__)


class SerperAPIError(Exception):
    """Raised when the provider answers with an error."""


class SerperClient:
    """Client posting search queries to Serper."""

    BASE_URL = "https://google.serper.dev/search"

    def __init__(self, api_key: str, timeout: float = 15, base_url: str = None):
        """
        Initialize the search client.

        Args:
            api_key: Serper API key sent in the X-API-KEY header
            timeout: HTTP request timeout in seconds (default: 15)
            base_url: Override for the search endpoint
        """
        self.api_key = api_key
        self.timeout = timeout
        self.base_url = base_url or self.BASE_URL

    def search(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Run a search query. A single attempt is made; timeouts are not retried.

        Args:
            payload: JSON body with q, gl, hl, num and type

        Returns:
            Decoded response body

        Raises:
            requests.RequestException: On network failure or timeout
            SerperAPIError: On a non-2xx status or a provider-reported error
            ValueError: If the body is not a JSON object
        """
        response = self._post(payload)

        if not response.ok:
            raise SerperAPIError(f"HTTP {response.status_code}: {response.text}")

        data = response.json()
        if not isinstance(data, dict):
            raise ValueError("Malformed response from search provider")

        if data.get('error'):
            raise SerperAPIError(str(data['error']))

        return data

    def probe(self) -> requests.Response:
        """
        Send a minimal one-result query.

        Returns:
            Raw HTTP response, whatever its status

        Raises:
            requests.RequestException: On network failure or timeout
        """
        return self._post({'q': 'test', 'num': 1})

    def _post(self, payload: Dict[str, Any]) -> requests.Response:
        headers = {
            'X-API-KEY': self.api_key,
            'Content-Type': 'application/json'
        }
        logger.debug(f"POST {self.base_url} (num={payload.get('num')})")
        return requests.post(
            self.base_url,
            json=payload,
            headers=headers,
            timeout=self.timeout
        )
