import json
import logging
from typing import Dict, Optional

import httpx

from pivotal_tracker.core.config import API_URL
from pivotal_tracker.core.exceptions import RemoteRequestError

logger = logging.getLogger(__name__)

# Request timeout in seconds
HTTP_TIMEOUT = 30.0

TOKEN_HEADER = "X-TrackerToken"


def _mask_token(token: str, visible_chars: int = 4) -> str:
    """Mask a token for logging, keeping only the first few characters"""
    if not token or len(token) <= visible_chars:
        return "***"
    return f"{token[:visible_chars]}***"


def _extract_error_message(response: httpx.Response) -> str:
    """
    Build a readable message from a failed Tracker response.

    Tracker answers errors with {"kind": "error", "code": ..., "error": ...};
    anything else falls back to the raw text.
    """
    try:
        data = response.json()
    except ValueError:
        data = None

    if isinstance(data, dict) and data.get("error"):
        return f"HTTP {response.status_code}: {data['error']}"
    return f"HTTP {response.status_code}: {response.text[:200]}"


class TrackerTransport:
    """
    Pivotal Tracker HTTP transport.

    Sends already-encoded JSON bodies to the API and hands back the raw
    response text. Every request carries Content-Type and X-TrackerToken.
    Failures (network errors, non-2xx statuses) surface as RemoteRequestError
    and are never retried.
    """

    def __init__(
        self,
        api_token: str,
        base_url: str = API_URL,
        timeout: float = HTTP_TIMEOUT,
        http_client: Optional[httpx.Client] = None,
    ):
        self.base_url = base_url
        self._owns_client = http_client is None
        logger.info(
            "Initializing TrackerTransport with base_url=%s, token=%s",
            self.base_url,
            _mask_token(api_token),
        )
        if http_client is None:
            http_client = httpx.Client(
                base_url=self.base_url,
                timeout=httpx.Timeout(timeout),
                trust_env=False,
            )
        # Per-request headers; an injected client is left untouched
        self._headers = httpx.Headers(
            {"Content-Type": "application/json", TOKEN_HEADER: api_token}
        )
        self.client = http_client
        logger.debug("TrackerTransport initialized successfully")

    @property
    def headers(self) -> httpx.Headers:
        return self._headers

    def _request(
        self,
        method: str,
        path: str,
        body: Optional[str] = None,
        params: Optional[Dict[str, str]] = None,
    ) -> str:
        """
        Send a single request.

        Args:
            method: HTTP method (GET, POST, PUT)
            path: API path relative to the base URL
            body: JSON-encoded request body (optional)
            params: query parameters (optional)

        Returns:
            Raw response body

        Raises:
            RemoteRequestError: network failure or non-2xx status
        """
        logger.debug("Making %s request to %s", method, path)
        if body is not None:
            logger.debug("%s payload: %s", method, body)

        try:
            response = self.client.request(
                method, path, content=body, params=params, headers=self._headers
            )
        except httpx.RequestError as e:
            logger.error("%s %s failed (network error): %s", method, path, e)
            raise RemoteRequestError(
                f"Request to {path} failed: {e}", method=method, path=path
            ) from e

        logger.debug("Response status: %d from %s", response.status_code, path)

        if not response.is_success:
            logger.error(
                "HTTP error %d from %s: %s",
                response.status_code,
                path,
                response.text[:200],
            )
            raise RemoteRequestError(
                _extract_error_message(response),
                method=method,
                path=path,
                status_code=response.status_code,
                body=response.text[:200],
            )

        logger.info(
            "Request successful: %s %s -> %d", method, path, response.status_code
        )
        return response.text

    def get(self, path: str, params: Optional[Dict[str, str]] = None) -> str:
        """GET request"""
        return self._request("GET", path, params=params)

    def post(self, path: str, body: Optional[str] = None) -> str:
        """POST request"""
        return self._request("POST", path, body=body)

    def put(self, path: str, body: Optional[str] = None) -> str:
        """PUT request"""
        return self._request("PUT", path, body=body)

    def close(self):
        """Close the underlying connection pool if this transport created it"""
        if self._owns_client:
            logger.info("Closing TrackerTransport connection")
            self.client.close()
            logger.debug("TrackerTransport connection closed")


def encode_body(payload) -> str:
    """Encode a request payload as compact JSON"""
    return json.dumps(payload, separators=(",", ":"))
