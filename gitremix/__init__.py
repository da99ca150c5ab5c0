"""
git-remix - Replicate the content of one GitHub repository onto another.

This package copies every file of a source repository into a destination
repository through the GitHub Git Data API, using separate credentials for
reading and writing, and commits the result on top of the destination's
default branch.
"""

from ._version import __version__

__author__ = "git-remix maintainers"

# Import main classes and functions for easy access
from .api import BearerTokenAuth, GitHubClient, SessionPair
from .models import RemixContext, RemixResult, RepositoryRef
from .services import RemixService, handle_remix_request
from .utils import (
    CancellationToken,
    create_session_with_retry,
    get_logger,
    parse_github_url,
    setup_logging,
    TokenRedactingFilter,
)
from .cli import main as cli_main, cli as cli_group

__all__ = [
    "__version__",
    "BearerTokenAuth",
    "GitHubClient",
    "SessionPair",
    "RemixContext",
    "RemixResult",
    "RepositoryRef",
    "RemixService",
    "handle_remix_request",
    "CancellationToken",
    "create_session_with_retry",
    "get_logger",
    "parse_github_url",
    "setup_logging",
    "TokenRedactingFilter",
    "cli_main",
    "cli_group",
]
