"""
Response utilities for parsing and validating HTTP responses.

This module turns raw API responses into typed models, raising
GitHubAPIError for error statuses and MalformedResponseError for bodies
that do not match the expected shape.
"""

import logging
from typing import Any, Iterable, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from ..exceptions import GitHubAPIError, MalformedResponseError
from .constants import MAX_DETAIL_LENGTH, SENSITIVE_HEADERS

ModelT = TypeVar("ModelT", bound=BaseModel)


def truncate(text: str, limit: int = MAX_DETAIL_LENGTH) -> str:
    """Shorten text for logging."""
    return text if len(text) <= limit else f"{text[:limit]}..."


def redact_headers(headers: Iterable[tuple]) -> dict:
    """Copy headers with credentials replaced by a placeholder."""
    safe = {}
    for key, value in headers:
        safe[key] = "[REDACTED]" if key.lower() in SENSITIVE_HEADERS else value
    return safe


def check_response(response: httpx.Response, operation: str) -> None:
    """
    Raise GitHubAPIError if the response is not successful.

    Args:
        response: HTTP response to check
        operation: Description of operation for error messages

    Raises:
        GitHubAPIError: If the status is not 2xx
    """
    if response.is_success:
        return

    detail = truncate(response.text)
    if response.status_code >= 500:
        logging.error("Server error during %s: %s - %s", operation, response.status_code, detail)
        if response.request is not None:
            logging.debug("  Request: %s %s", response.request.method, response.request.url)
            logging.debug("  Request Headers: %s", redact_headers(response.request.headers.items()))
    else:
        # Client errors are expected for per-file skips, keep them at debug level
        logging.debug("Client error during %s: %s - %s", operation, response.status_code, detail)

    raise GitHubAPIError(
        f"Failed to {operation}: {response.status_code} - {detail}",
        status_code=response.status_code,
        detail=detail,
    )


def parse_json_response(response: httpx.Response, operation: str) -> Any:
    """
    Parse JSON response with error handling.

    Args:
        response: HTTP response to parse
        operation: Description of operation for error messages

    Returns:
        Parsed JSON data

    Raises:
        GitHubAPIError: If the response is not successful
        MalformedResponseError: If the body is not JSON
    """
    check_response(response, operation)
    try:
        return response.json()
    except ValueError as e:
        logging.error("Failed to parse JSON response for %s: %s", operation, e)
        logging.debug("Response content: %s", truncate(response.text))
        raise MalformedResponseError(f"Invalid JSON response during {operation}: {e}", operation=operation) from e


def parse_model(response: httpx.Response, model: Type[ModelT], operation: str) -> ModelT:
    """
    Parse a response body into a typed model.

    Args:
        response: HTTP response to parse
        model: Pydantic model describing the expected body
        operation: Description of operation for error messages

    Returns:
        Validated model instance

    Raises:
        GitHubAPIError: If the response is not successful
        MalformedResponseError: If the body is not JSON or fails validation
    """
    data = parse_json_response(response, operation)
    try:
        return model.model_validate(data)
    except ValidationError as e:
        logging.error("Unexpected response shape for %s: %s", operation, e)
        raise MalformedResponseError(
            f"Unexpected response during {operation}: {e.error_count()} invalid field(s)", operation=operation
        ) from e


__all__ = [
    "truncate",
    "redact_headers",
    "check_response",
    "parse_json_response",
    "parse_model",
]
