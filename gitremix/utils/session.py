"""
Session utilities for GitHub API access.

This module provides utilities for creating and configuring HTTP clients
with retry strategies and connection pooling.
"""

from typing import Dict, Optional
import logging
import httpx
from httpx import HTTPTransport

from .constants import DEFAULT_CONNECT_TIMEOUT, DEFAULT_TIMEOUT, GITHUB_MEDIA_TYPE

# ============================================================================
# HTTP Configuration Constants
# ============================================================================

# Connection-level retries performed by the transport
MAX_RETRIES = 3


def create_session_with_retry(
    base_url: str = "",
    auth: Optional[httpx.Auth] = None,
    timeout: float = DEFAULT_TIMEOUT,
    max_connections: int = 100,
    headers: Optional[Dict[str, str]] = None,
) -> httpx.Client:
    """
    Create an httpx client with retry strategy and connection pooling.

    Args:
        base_url: Base URL every relative request path is resolved against
        auth: Authentication applied to every request sent by this client
        timeout: Total timeout in seconds (default: 30.0)
        max_connections: Maximum number of connections in the pool (default: 100)
        headers: Extra default headers

    Returns:
        Configured httpx.Client object with:
        - Transport-level connection retries
        - HTTP/2 support when the h2 package is installed
        - Compression support (gzip, deflate, br)
        - The GitHub v3 JSON media type in the Accept header

    Example:
        >>> client = create_session_with_retry("https://api.github.com")
        >>> response = client.get("/repos/acme/widgets")
    """
    limits = httpx.Limits(
        max_connections=max_connections,
        max_keepalive_connections=max(20, max_connections // 5),
    )

    timeout_config = httpx.Timeout(timeout, connect=min(DEFAULT_CONNECT_TIMEOUT, timeout))

    # httpx only retries connection failures; HTTP error statuses are reported to the caller
    transport = HTTPTransport(
        limits=limits,
        retries=MAX_RETRIES,
    )

    default_headers = {
        "Accept": GITHUB_MEDIA_TYPE,
        "Accept-Encoding": "gzip, deflate, br",
    }
    if headers:
        default_headers.update(headers)

    try:
        import importlib.util  # pylint: disable=import-outside-toplevel

        use_http2 = importlib.util.find_spec("h2") is not None
    except (ImportError, AttributeError):
        use_http2 = False

    if not use_http2:
        logging.debug("HTTP/2 support not available (h2 package not installed)")

    client_kwargs: Dict[str, object] = {
        "base_url": base_url,
        "transport": transport,
        "timeout": timeout_config,
        "follow_redirects": True,
        "headers": default_headers,
        "http2": use_http2,
    }
    if auth is not None:
        client_kwargs["auth"] = auth

    return httpx.Client(**client_kwargs)  # type: ignore[arg-type]


__all__ = ["create_session_with_retry"]
