"""Shared HTTP utilities for the search provider and summarizer clients."""

from typing import Any

import httpx

from ai_search.config import settings
from ai_search.utils.logging import setup_logger

logger = setup_logger(__name__)


class QuotaExceededError(Exception):
    """Raised when an upstream API rejects a request for quota reasons (HTTP 403/429)."""

    pass


def _check_quota(response: httpx.Response, quota_statuses: tuple[int, ...]) -> None:
    if response.status_code not in quota_statuses:
        return
    try:
        error_detail = response.json().get("error", {})
        error_message = error_detail.get("message", "Quota exceeded")
    except (ValueError, AttributeError):
        error_message = "Quota exceeded"
    raise QuotaExceededError(
        f"API quota exceeded: {error_message} (status: {response.status_code})"
    )


def make_api_request(
    url: str,
    params: dict[str, Any],
    timeout: int | None = None,
    quota_statuses: tuple[int, ...] = (403, 429),
) -> dict[str, Any]:
    """Make HTTP GET request with standardized quota error handling.

    Args:
        url: API endpoint URL
        params: Query parameters for the GET request
        timeout: Request timeout in seconds. If None, uses settings.search_timeout
        quota_statuses: HTTP status codes that indicate quota exceeded (default: 403, 429)

    Returns:
        Parsed JSON response as dictionary

    Raises:
        QuotaExceededError: If response status code is in quota_statuses
        httpx.TimeoutException: If request times out
        httpx.HTTPError: For other HTTP errors
        ValueError: If the body is not valid JSON
    """
    timeout = timeout or settings.search_timeout

    try:
        with httpx.Client(timeout=timeout) as client:
            response = client.get(url, params=params)
            _check_quota(response, quota_statuses)
            response.raise_for_status()
            return response.json()

    except httpx.TimeoutException:
        logger.error(f"Request timeout for URL: {url}")
        raise
    except httpx.HTTPError as e:
        logger.error(
            "HTTP error during API request",
            extra={"url": url, "error": str(e)},
        )
        raise


def post_json(
    url: str,
    payload: dict[str, Any],
    params: dict[str, Any] | None = None,
    timeout: int | None = None,
    quota_statuses: tuple[int, ...] = (429,),
) -> dict[str, Any]:
    """Make HTTP POST request with a JSON body and return the parsed JSON response.

    Query parameters are kept out of the log since they may carry an API key.

    Raises:
        QuotaExceededError: If response status code is in quota_statuses
        httpx.TimeoutException: If request times out
        httpx.HTTPError: For other HTTP errors
        ValueError: If the body is not valid JSON
    """
    timeout = timeout or settings.summarizer_timeout

    try:
        with httpx.Client(timeout=timeout) as client:
            response = client.post(
                url,
                params=params,
                json=payload,
                headers={"Content-Type": "application/json"},
            )
            _check_quota(response, quota_statuses)
            response.raise_for_status()
            return response.json()

    except httpx.TimeoutException:
        logger.error(f"Request timeout for URL: {url}")
        raise
    except httpx.HTTPStatusError as e:
        logger.error(
            "HTTP error during API request",
            extra={"url": url, "status": e.response.status_code},
        )
        raise
    except httpx.HTTPError as e:
        logger.error(
            "HTTP error during API request",
            extra={"url": url, "error": type(e).__name__},
        )
        raise
