"""
Utility modules for git-remix operations.
"""

from .logger import setup_logging, TokenRedactingFilter, get_logger
from .session import create_session_with_retry
from .url import parse_github_url
from .config_manager import ConfigManager, load_remix_settings
from .cancellation import CancellationToken

from . import constants
from . import error_handling
from . import response_utils

__all__ = [
    "setup_logging",
    "TokenRedactingFilter",
    "get_logger",
    "create_session_with_retry",
    "parse_github_url",
    "ConfigManager",
    "load_remix_settings",
    "CancellationToken",
    "constants",
    "error_handling",
    "response_utils",
]
