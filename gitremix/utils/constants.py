"""
Central constants for the git-remix package.

This module consolidates all constants used throughout the codebase
to eliminate magic numbers and strings.
"""

# ============================================================================
# API and Network Constants
# ============================================================================

# Base URL of the GitHub REST API
DEFAULT_API_URL = "https://api.github.com"

# Media type selecting the v3 JSON representation
GITHUB_MEDIA_TYPE = "application/vnd.github.v3+json"

# Default timeout for HTTP requests (seconds)
DEFAULT_TIMEOUT = 30.0

# Connect timeout (seconds), never larger than the request timeout
DEFAULT_CONNECT_TIMEOUT = 10.0

# Default number of files duplicated concurrently
DEFAULT_MAX_WORKERS = 4

# Headers never written to logs
SENSITIVE_HEADERS = ["authorization", "cookie", "x-api-key"]

# ============================================================================
# Git Object Constants
# ============================================================================

# Tree entry type that carries file content
BLOB_TYPE = "blob"

# Prefix of branch refs
HEADS_PREFIX = "heads/"

# Commit message template for remix commits
COMMIT_MESSAGE_TEMPLATE = "remix: content cloned from {source}"

# ============================================================================
# Configuration Constants
# ============================================================================

# Default configuration file location
DEFAULT_CONFIG_PATH = "~/.config/gitremix/config.toml"

# Section of the configuration file holding remix settings
CONFIG_SECTION = "remix"

# Environment variables read by the CLI for credentials
SOURCE_TOKEN_ENV = "GITREMIX_SOURCE_TOKEN"
DEST_TOKEN_ENV = "GITREMIX_DEST_TOKEN"

# ============================================================================
# Logging and Display Constants
# ============================================================================

# Maximum characters of a response body kept in logs
MAX_DETAIL_LENGTH = 500

# Width for separator lines in console output
SEPARATOR_WIDTH = 80
