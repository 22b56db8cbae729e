"""Async HTTP client for the Notion REST API."""

import asyncio
import logging
import random
import uuid
from typing import Any, Optional

import httpx

from .exceptions import (
    InvalidIdentifierError,
    NotionAPIError,
    NotionAuthError,
    NotionNetworkError,
    NotionRateLimitError,
)
from .notion_models import PageList, UserList

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.notion.com/v1"
DEFAULT_API_VERSION = "2022-06-28"

# Backoff calculation constants
MAX_BACKOFF_SECONDS = 30.0
JITTER_MIN_FACTOR = 0.1
JITTER_MAX_FACTOR = 0.3

RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})


def parse_notion_id(value: str) -> str:
    """Validate a Notion identifier and return its hyphenated form.

    Accepts both the 32-hex-digit form found in Notion URLs and the
    hyphenated UUID form returned by the API.

    Raises:
        InvalidIdentifierError: If the value is not a UUID
    """
    try:
        return str(uuid.UUID(value.strip()))
    except (AttributeError, ValueError) as e:
        raise InvalidIdentifierError(f"Invalid Notion identifier: {value!r}", value) from e


class NotionClient:
    """Minimal Notion API client covering database queries and user listing."""

    def __init__(
        self,
        api_token: str,
        base_url: str = DEFAULT_BASE_URL,
        api_version: str = DEFAULT_API_VERSION,
        timeout: float = 30.0,
        max_retries: int = 3,
        retry_backoff_factor: float = 1.5,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize Notion client.

        Args:
            api_token: Integration token sent as a bearer token
            base_url: API root URL
            api_version: Value of the Notion-Version header
            timeout: HTTP read timeout in seconds
            max_retries: Retries for timeouts, network errors, 429 and 5xx
            retry_backoff_factor: Base of the exponential backoff
            client: Optional externally managed httpx client
        """
        self.base_url = base_url.rstrip("/")
        self.max_retries = max_retries
        self.retry_backoff_factor = retry_backoff_factor
        self._headers = {
            "Authorization": f"Bearer {api_token}",
            "Notion-Version": api_version,
            "Content-Type": "application/json",
        }
        self._timeout = httpx.Timeout(connect=10.0, read=timeout, write=10.0, pool=30.0)
        self.client = client
        self._owns_client = client is None

        logger.debug("Notion client initialized for %s", self.base_url)

    async def __aenter__(self) -> "NotionClient":
        await self._ensure_client()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.aclose()

    async def _ensure_client(self) -> httpx.AsyncClient:
        if self.client is None or self.client.is_closed:
            self.client = httpx.AsyncClient(timeout=self._timeout, follow_redirects=True)
            self._owns_client = True
        return self.client

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client and self.client is not None and not self.client.is_closed:
            await self.client.aclose()

    def _calculate_backoff(self, attempt: int, retry_after: Optional[str] = None) -> float:
        """Seconds to wait before the next attempt.

        A numeric Retry-After header wins over the exponential schedule.
        """
        if retry_after:
            try:
                return min(float(retry_after), MAX_BACKOFF_SECONDS)
            except ValueError:
                logger.debug("Ignoring non-numeric Retry-After header %r", retry_after)

        base_backoff = min(self.retry_backoff_factor**attempt, MAX_BACKOFF_SECONDS)
        jitter = random.uniform(JITTER_MIN_FACTOR, JITTER_MAX_FACTOR) * base_backoff  # nosec B311 - jitter not cryptographic
        return base_backoff + jitter

    async def _request(
        self,
        method: str,
        path: str,
        json: Optional[dict[str, Any]] = None,
        params: Optional[dict[str, Any]] = None,
    ) -> dict[str, Any]:
        """Send a request with retries and return the decoded JSON body."""
        client = await self._ensure_client()
        url = f"{self.base_url}{path}"
        attempt = 0

        while True:
            try:
                response = await client.request(
                    method, url, json=json, params=params, headers=self._headers
                )
            except (httpx.TimeoutException, httpx.NetworkError) as e:
                if attempt >= self.max_retries:
                    logger.exception("All retry attempts failed for %s %s", method, path)
                    raise NotionNetworkError(f"Network error: {e}") from e
                backoff = self._calculate_backoff(attempt)
                logger.warning(
                    "Request failed (attempt %s/%s), retrying in %.1fs: %s",
                    attempt + 1,
                    self.max_retries + 1,
                    backoff,
                    e,
                )
                await asyncio.sleep(backoff)
                attempt += 1
                continue

            if response.status_code in RETRYABLE_STATUS_CODES and attempt < self.max_retries:
                backoff = self._calculate_backoff(attempt, response.headers.get("Retry-After"))
                logger.warning(
                    "Notion returned %d for %s %s (attempt %s/%s), retrying in %.1fs",
                    response.status_code,
                    method,
                    path,
                    attempt + 1,
                    self.max_retries + 1,
                    backoff,
                )
                await asyncio.sleep(backoff)
                attempt += 1
                continue

            self._raise_for_status(response)
            logger.debug("%s %s -> %d (attempt %d)", method, path, response.status_code, attempt + 1)
            try:
                return response.json()
            except ValueError as e:
                raise NotionAPIError(
                    f"Invalid JSON in Notion response for {path}", response.status_code
                ) from e

    @staticmethod
    def _raise_for_status(response: httpx.Response) -> None:
        """Map an error response onto the exception hierarchy."""
        if response.is_success:
            return

        code = None
        message = response.reason_phrase or "Notion API error"
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            code = body.get("code")
            message = body.get("message") or message

        status = response.status_code
        error_msg = f"Notion API error {status}: {message}"
        logger.error(error_msg)
        if status in (401, 403):
            raise NotionAuthError(error_msg, status, code)
        if status == 429:
            raise NotionRateLimitError(error_msg, status, code)
        raise NotionAPIError(error_msg, status, code)

    async def query_database(
        self,
        database_id: str,
        filter: Optional[dict[str, Any]] = None,
        start_cursor: Optional[str] = None,
        page_size: Optional[int] = None,
    ) -> PageList:
        """Fetch one page of query results from a database."""
        body: dict[str, Any] = {}
        if filter is not None:
            body["filter"] = filter
        if start_cursor is not None:
            body["start_cursor"] = start_cursor
        if page_size is not None:
            body["page_size"] = page_size

        data = await self._request(
            "POST", f"/databases/{parse_notion_id(database_id)}/query", json=body
        )
        return PageList.model_validate(data)

    async def list_users(
        self, start_cursor: Optional[str] = None, page_size: Optional[int] = None
    ) -> UserList:
        """Fetch one page of workspace users."""
        params: dict[str, Any] = {}
        if start_cursor is not None:
            params["start_cursor"] = start_cursor
        if page_size is not None:
            params["page_size"] = page_size

        data = await self._request("GET", "/users", params=params or None)
        return UserList.model_validate(data)
