"""Error taxonomy for the Notion adapter and diagnostic classification."""

from __future__ import annotations

from enum import Enum

import httpx
from fastmcp.exceptions import ToolError


class NotionMCPError(Exception):
    """Base class for failures surfaced by the retrieval and search layers."""

    prefix = "Notion request failed"

    def __init__(self, cause: object) -> None:
        super().__init__(f"{self.prefix}: {cause}")


class RetrievalError(NotionMCPError):
    """Page metadata or block listing could not be retrieved."""

    prefix = "Failed to get page content"


class SearchError(NotionMCPError):
    """The search call failed."""

    prefix = "Failed to search Notion"


class NotionAPIError(Exception):
    """Non-2xx response from the Notion REST API.

    The string form is the API's own ``message`` so that wrapping layers
    can re-prefix it without losing the upstream wording.
    """

    def __init__(self, message: str, status_code: int = 0, code: str = "") -> None:
        self.message = message
        self.status_code = status_code
        self.code = code
        super().__init__(message)


class ErrorCategory(str, Enum):
    """Categories of errors for diagnostics."""

    OBJECT_NOT_FOUND = "OBJECT_NOT_FOUND"
    UNAUTHORIZED = "UNAUTHORIZED"
    RESTRICTED_RESOURCE = "RESTRICTED_RESOURCE"
    RATE_LIMITED = "RATE_LIMITED"
    INVALID_REQUEST = "INVALID_REQUEST"
    NETWORK_ERROR = "NETWORK_ERROR"
    UNKNOWN = "UNKNOWN"


_HINTS: dict[ErrorCategory, str] = {
    ErrorCategory.OBJECT_NOT_FOUND: (
        "Page not found or not shared with the integration — add the integration via the page's Connections menu"
    ),
    ErrorCategory.UNAUTHORIZED: "Token rejected — check NOTION_API_KEY",
    ErrorCategory.RESTRICTED_RESOURCE: "Integration lacks the capability to read this resource",
    ErrorCategory.RATE_LIMITED: "Notion rate limit hit — wait before calling again",
    ErrorCategory.INVALID_REQUEST: "Request rejected — check the page ID format",
    ErrorCategory.NETWORK_ERROR: "Could not reach api.notion.com — check connectivity",
}

# Notion error ``code`` values, then HTTP statuses, checked before any text matching.
_CODE_CATEGORIES: dict[str, ErrorCategory] = {
    "object_not_found": ErrorCategory.OBJECT_NOT_FOUND,
    "unauthorized": ErrorCategory.UNAUTHORIZED,
    "restricted_resource": ErrorCategory.RESTRICTED_RESOURCE,
    "rate_limited": ErrorCategory.RATE_LIMITED,
    "validation_error": ErrorCategory.INVALID_REQUEST,
    "invalid_json": ErrorCategory.INVALID_REQUEST,
    "invalid_request": ErrorCategory.INVALID_REQUEST,
    "invalid_request_url": ErrorCategory.INVALID_REQUEST,
}
_STATUS_CATEGORIES: dict[int, ErrorCategory] = {
    400: ErrorCategory.INVALID_REQUEST,
    401: ErrorCategory.UNAUTHORIZED,
    403: ErrorCategory.RESTRICTED_RESOURCE,
    404: ErrorCategory.OBJECT_NOT_FOUND,
    429: ErrorCategory.RATE_LIMITED,
}


def _api_error(error: BaseException | None) -> NotionAPIError | None:
    """First NotionAPIError in *error*'s ``__cause__`` chain, if any."""
    while error is not None:
        if isinstance(error, NotionAPIError):
            return error
        error = error.__cause__
    return None


def _categorize(error: Exception) -> ErrorCategory | None:
    if isinstance(error, (httpx.TimeoutException, httpx.NetworkError, TimeoutError)):
        return ErrorCategory.NETWORK_ERROR

    api_error = _api_error(error)
    if api_error is not None:
        category = _CODE_CATEGORIES.get(api_error.code) or _STATUS_CATEGORIES.get(
            api_error.status_code
        )
        if category is not None:
            return category

    s = str(error).lower()
    if "could not find" in s or "object_not_found" in s:
        return ErrorCategory.OBJECT_NOT_FOUND
    if "api token is invalid" in s or "unauthorized" in s:
        return ErrorCategory.UNAUTHORIZED
    if "restricted" in s:
        return ErrorCategory.RESTRICTED_RESOURCE
    if "rate limit" in s or "rate_limited" in s:
        return ErrorCategory.RATE_LIMITED
    if "validation" in s or "invalid" in s:
        return ErrorCategory.INVALID_REQUEST
    if "timeout" in s or "timed out" in s or "connect" in s:
        return ErrorCategory.NETWORK_ERROR
    return None


def categorize_error(error: Exception) -> tuple[ErrorCategory, str]:
    """Map an exception to an ErrorCategory + human-readable hint.

    The API's ``code`` and HTTP status decide when the error (or its
    ``__cause__``) is a :class:`NotionAPIError`. Otherwise the message text
    is inspected, so wrapped errors classify the same as the originals.
    Bare status numbers are never matched in text; page IDs contain them.
    """
    category = _categorize(error)
    if category is None:
        return (ErrorCategory.UNKNOWN, str(error))
    return (category, _HINTS[category])


def make_tool_error(prefix: str, error: Exception) -> ToolError:
    """Build the terminal error outcome for one tool invocation.

    *prefix* is not repeated when the message already starts with it.
    """
    message = str(error)
    if not message.startswith(f"{prefix}:"):
        message = f"{prefix}: {message}"
    return ToolError(message)
