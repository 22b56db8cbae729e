"""Notion calendar exceptions for error handling."""

from typing import Optional


class NotionCalendarError(Exception):
    """Base exception for all notion_calendar errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingTimePropertyError(NotionCalendarError):
    """Exception raised when a page has no usable event time."""

    def __init__(self, message: str, page_id: Optional[str] = None):
        super().__init__(message)
        self.page_id = page_id


class InvalidTemporalValueError(NotionCalendarError):
    """Exception raised when a Notion date string cannot be parsed."""

    def __init__(self, message: str, value: Optional[str] = None):
        super().__init__(message)
        self.value = value


class InvalidIdentifierError(NotionCalendarError):
    """Exception raised for malformed database or user identifiers."""

    def __init__(self, message: str, value: Optional[str] = None):
        super().__init__(message)
        self.value = value


class InvalidConfigurationError(NotionCalendarError):
    """Exception raised when settings are missing or invalid."""


class NotionAPIError(NotionCalendarError):
    """Exception raised when the Notion API returns an error response."""

    def __init__(
        self, message: str, status_code: Optional[int] = None, code: Optional[str] = None
    ):
        super().__init__(message)
        self.status_code = status_code
        self.code = code


class NotionAuthError(NotionAPIError):
    """Exception raised when the API token is rejected."""


class NotionRateLimitError(NotionAPIError):
    """Exception raised when rate limiting persists after all retries."""


class NotionNetworkError(NotionAPIError):
    """Exception raised for timeouts and connection failures."""
