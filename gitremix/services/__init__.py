"""
Service layer for remix operations.

This package provides the high-level remix service and the handler that
maps inbound requests onto it.
"""

from .remix_service import RemixService
from .request_handler import build_context, handle_remix_request

__all__ = [
    "RemixService",
    "build_context",
    "handle_remix_request",
]
