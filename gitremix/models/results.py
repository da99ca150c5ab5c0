"""Result models for remix runs."""

from typing import Any, Dict, List, Literal, Optional

from pydantic import ConfigDict, Field

from .base import RemixBaseModel
from .github_api import NewTreeEntry

LogType = Literal["info", "success", "error", "warning"]


class LogEntry(RemixBaseModel):
    """
    One narrated step of a remix run.

    Attributes:
        message: Human-readable progress, warning or error text
        type: Severity shown to the caller (info, success, error, warning)
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    message: str
    type: LogType = "info"


class DuplicationResult(RemixBaseModel):
    """
    Result of copying source blobs into the destination store.

    Attributes:
        entries: Tree entries referencing the newly created destination blobs
        skipped: Paths that could not be read or written
    """

    entries: List[NewTreeEntry] = Field(default_factory=list)
    skipped: List[str] = Field(default_factory=list)

    @property
    def transferred(self) -> int:
        """Number of blobs created in the destination."""
        return len(self.entries)

    @property
    def has_skips(self) -> bool:
        """Check if any file was left out of the new tree."""
        return bool(self.skipped)


class RemixResult(RemixBaseModel):
    """
    Outcome of a remix run.

    Only ``success``, ``logs`` and ``error`` are part of the response sent to
    callers; the remaining fields are diagnostics for the CLI and tests.

    Attributes:
        success: True when the destination branch now points at the new commit
        logs: Ordered run log, complete up to the point the run stopped
        error: User-facing reason for a failed run
        status_code: HTTP-style status class of the outcome (200, 400 or 500)
        files_found: Number of blob entries in the source tree
        blobs_transferred: Number of blobs created in the destination
        skipped_paths: Files left out of the new tree
        commit_sha: Sha of the created commit, when one was created
    """

    success: bool
    logs: List[LogEntry] = Field(default_factory=list)
    error: Optional[str] = None
    status_code: int = 200
    files_found: int = 0
    blobs_transferred: int = 0
    skipped_paths: List[str] = Field(default_factory=list)
    commit_sha: Optional[str] = None

    def to_response(self) -> Dict[str, Any]:
        """Build the JSON body returned to callers."""
        body: Dict[str, Any] = {
            "success": self.success,
            "logs": [entry.model_dump() for entry in self.logs],
        }
        if self.error is not None:
            body["error"] = self.error
        return body


__all__ = ["LogType", "LogEntry", "DuplicationResult", "RemixResult"]
