"""
URL utilities for repository references.

This module turns repository URLs as users paste them into RepositoryRef
values.
"""

import re
from typing import Optional

from ..models.repository import RepositoryRef

# "github.com" followed by "/" (https, ssh://) or ":" (scp-style git@github.com:owner/repo),
# then the owner segment and a repo segment that stops at "/", whitespace, "?" or "#"
_GITHUB_URL_PATTERN = re.compile(r"github\.com(?:/|:(?!\d))([^/\s:]+)/([^/\s?#]+)")


def parse_github_url(url: str) -> Optional[RepositoryRef]:
    """
    Extract owner and repository name from a GitHub URL.

    Dots are part of the repository name (``acme/widgets.js``); only a
    trailing ``.git`` suffix is dropped. Anything without a recognisable
    ``github.com/<owner>/<repo>`` segment yields None.

    Args:
        url: Repository URL (https, ``ssh://git@github.com/`` or ``git@github.com:``)

    Returns:
        RepositoryRef, or None if the URL is not recognised

    Example:
        >>> parse_github_url("git@github.com:acme/widgets.js.git").full_name
        'acme/widgets.js'
    """
    if not url:
        return None

    match = _GITHUB_URL_PATTERN.search(url)
    if not match:
        return None

    owner = match.group(1)
    name = re.sub(r"\.git$", "", match.group(2))
    if not owner.strip() or name in ("", ".", ".."):
        return None
    return RepositoryRef(owner=owner, name=name)


__all__ = ["parse_github_url"]
