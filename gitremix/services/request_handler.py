"""
Inbound request handling for the remix endpoint.

Turns a decoded JSON body into a remix run and the run's outcome into an
HTTP status and response body. Transport concerns (routing, CORS) live in
the server package.
"""

import logging
from typing import Any, Dict, Optional, Tuple

from pydantic import ValidationError

from ..models.context import RemixContext
from ..models.repository import RepositoryRef
from ..models.request import RemixRequest
from .remix_service import RemixService

MISSING_FIELDS_MESSAGE = "missing required fields"
BAD_REQUEST_STATUS = 400


def _missing_fields_response() -> Tuple[int, Dict[str, Any]]:
    return BAD_REQUEST_STATUS, {"success": False, "error": MISSING_FIELDS_MESSAGE, "logs": []}


def build_context(request: RemixRequest, **options: Any) -> RemixContext:
    """
    Build the run context for a complete request.

    Args:
        request: Validated inbound request (``is_complete`` must hold)
        **options: Extra RemixContext fields (api_url, max_workers, ...)

    Returns:
        RemixContext for the run
    """
    return RemixContext(
        source=RepositoryRef(owner=request.source_owner, name=request.source_repo),
        destination=RepositoryRef(owner=request.dest_owner, name=request.dest_repo),
        source_token=request.effective_source_token,
        dest_token=request.effective_dest_token,
        force=request.force,
        **options,
    )


def handle_remix_request(
    payload: Any,
    service: Optional[RemixService] = None,
    **options: Any,
) -> Tuple[int, Dict[str, Any]]:
    """
    Run a remix for one inbound request.

    Args:
        payload: Decoded JSON body
        service: RemixService to run with (a default one is created if None)
        **options: Server-side RemixContext settings applied to every run

    Returns:
        Tuple of (status_code, body) where body is ``{success, logs, error?}``
    """
    if not isinstance(payload, dict):
        logging.warning("Rejected remix request: body is not a JSON object")
        return _missing_fields_response()

    try:
        request = RemixRequest.model_validate(payload)
    except ValidationError as e:
        logging.warning("Rejected remix request: %d invalid field(s)", e.error_count())
        return _missing_fields_response()

    if not request.is_complete:
        logging.warning("Rejected remix request: missing required fields")
        return _missing_fields_response()

    context = build_context(request, **options)
    result = (service or RemixService()).remix(context)
    return result.status_code, result.to_response()


__all__ = ["handle_remix_request", "build_context", "MISSING_FIELDS_MESSAGE"]
