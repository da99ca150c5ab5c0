"""Tests for the git-remix Pydantic models."""

import pytest
from pydantic import SecretStr, ValidationError

from gitremix.models import (
    DuplicationResult,
    LogEntry,
    NewTreeEntry,
    RemixContext,
    RemixRequest,
    RemixResult,
    RepositoryRef,
    RepositoryResponse,
    TreeResponse,
)
from gitremix.models.github_api import TreeEntry
from gitremix.utils.constants import BLOB_TYPE


class TestRepositoryRef:
    """Test RepositoryRef model."""

    def test_full_name(self):
        """Test owner/name rendering."""
        ref = RepositoryRef(owner="acme", name="widgets")
        assert ref.full_name == "acme/widgets"
        assert str(ref) == "acme/widgets"

    def test_strips_whitespace(self):
        """Test identifiers are stripped."""
        ref = RepositoryRef(owner=" acme ", name="widgets\n")
        assert ref.full_name == "acme/widgets"

    @pytest.mark.parametrize("owner,name", [("", "widgets"), ("acme", "   ")])
    def test_rejects_blank(self, owner, name):
        """Test blank identifiers are rejected."""
        with pytest.raises(ValidationError):
            RepositoryRef(owner=owner, name=name)

    def test_frozen(self):
        """Test references cannot be changed after creation."""
        ref = RepositoryRef(owner="acme", name="widgets")
        with pytest.raises(ValidationError):
            ref.owner = "other"


class TestRemixContext:
    """Test RemixContext model."""

    def test_defaults(self, source_repo, dest_repo):
        """Test default run options."""
        context = RemixContext(source=source_repo, destination=dest_repo, source_token="a", dest_token="b")

        assert context.api_url == "https://api.github.com"
        assert context.max_workers == 4
        assert context.timeout == 30.0
        assert context.force is True
        assert context.verify_tip is True
        assert context.deadline_seconds is None
        assert not context.same_credential

    def test_tokens_are_secret(self, source_repo, dest_repo):
        """Test tokens never render in the model repr."""
        context = RemixContext(source=source_repo, destination=dest_repo, source_token="ghp_x", dest_token="ghp_x")

        assert isinstance(context.source_token, SecretStr)
        assert "ghp_x" not in repr(context)
        assert context.same_credential

    def test_blank_token_rejected(self, source_repo, dest_repo):
        """Test a whitespace token is rejected."""
        with pytest.raises(ValidationError):
            RemixContext(source=source_repo, destination=dest_repo, source_token="  ", dest_token="b")

    @pytest.mark.parametrize("workers", [0, 101])
    def test_max_workers_bounds(self, source_repo, dest_repo, workers):
        """Test the worker count is bounded."""
        with pytest.raises(ValidationError):
            RemixContext(
                source=source_repo, destination=dest_repo, source_token="a", dest_token="b", max_workers=workers
            )

    def test_api_url_trailing_slash(self, source_repo, dest_repo):
        """Test trailing slashes are dropped from the API URL."""
        context = RemixContext(
            source=source_repo,
            destination=dest_repo,
            source_token="a",
            dest_token="b",
            api_url="https://ghe.example.com/api/v3/",
        )
        assert context.api_url == "https://ghe.example.com/api/v3"

    def test_extra_fields_forbidden(self, source_repo, dest_repo):
        """Test unknown settings are rejected."""
        with pytest.raises(ValidationError):
            RemixContext(source=source_repo, destination=dest_repo, source_token="a", dest_token="b", colour="red")


class TestRemixRequest:
    """Test RemixRequest model."""

    def test_wire_names(self):
        """Test camelCase body fields."""
        request = RemixRequest.model_validate(
            {
                "sourceOwner": "acme",
                "sourceRepo": "widgets",
                "destOwner": "octo",
                "destRepo": "remixed",
                "sourceToken": "s",
                "destToken": "d",
            }
        )

        assert request.is_complete
        assert request.effective_source_token == "s"
        assert request.effective_dest_token == "d"
        assert request.force is True

    def test_legacy_token_fills_missing(self):
        """Test a legacy token applies to whichever token is absent."""
        request = RemixRequest.model_validate(
            {"sourceOwner": "a", "sourceRepo": "b", "destOwner": "c", "destRepo": "d", "token": "t", "destToken": "x"}
        )

        assert request.effective_source_token == "t"
        assert request.effective_dest_token == "x"
        assert request.is_complete

    def test_incomplete(self):
        """Test a missing or blank field makes the request incomplete."""
        request = RemixRequest.model_validate(
            {"sourceOwner": "a", "sourceRepo": " ", "destOwner": "c", "destRepo": "d", "token": "t"}
        )
        assert not request.is_complete
        assert not RemixRequest.model_validate({}).is_complete


class TestApiModels:
    """Test GitHub API response models."""

    def test_tree_blobs(self):
        """Test only blob entries are kept, in listing order."""
        tree = TreeResponse.model_validate(
            {
                "sha": "t",
                "tree": [
                    {"path": "b.txt", "mode": "100644", "type": "blob", "sha": "1"},
                    {"path": "lib", "mode": "040000", "type": "tree", "sha": "2"},
                    {"path": "ext", "mode": "160000", "type": "commit", "sha": "3"},
                    {"path": "a.txt", "mode": "100644", "type": "blob", "sha": "4"},
                ],
            }
        )

        assert [entry.path for entry in tree.blobs] == ["b.txt", "a.txt"]
        assert tree.truncated is False

    @pytest.mark.parametrize("entry_type,expected", [(BLOB_TYPE, True), ("tree", False), ("commit", False)])
    def test_entry_is_blob(self, entry_type, expected):
        """Test only file content entries count as blobs."""
        entry = TreeEntry(path="x", mode="100644", type=entry_type, sha="1")

        assert entry.is_blob is expected

    def test_repository_empty_default_branch(self):
        """Test an empty default branch is invalid."""
        with pytest.raises(ValidationError):
            RepositoryResponse.model_validate({"default_branch": ""})

    def test_new_tree_entry_type(self):
        """Test new tree entries are always blobs."""
        entry = NewTreeEntry(path="a", mode="100644", sha="1")
        assert entry.model_dump() == {"path": "a", "mode": "100644", "type": "blob", "sha": "1"}
        with pytest.raises(ValidationError):
            NewTreeEntry(path="a", mode="040000", type="tree", sha="1")


class TestResults:
    """Test result models."""

    def test_log_entry_immutable(self):
        """Test log entries cannot be changed once written."""
        entry = LogEntry(message="hello", type="success")
        with pytest.raises(ValidationError):
            entry.message = "changed"

    def test_log_entry_type_checked(self):
        """Test unknown entry types are rejected."""
        with pytest.raises(ValidationError):
            LogEntry(message="x", type="debug")

    def test_duplication_result(self):
        """Test transfer counters."""
        result = DuplicationResult(entries=[NewTreeEntry(path="a", mode="100644", sha="1")], skipped=["b"])
        assert result.transferred == 1
        assert result.has_skips

    def test_to_response_success(self):
        """Test a successful body carries no error key."""
        result = RemixResult(success=True, logs=[LogEntry(message="done", type="success")], commit_sha="abc")

        assert result.to_response() == {"success": True, "logs": [{"message": "done", "type": "success"}]}

    def test_to_response_failure(self):
        """Test a failed body carries the error and no diagnostics."""
        result = RemixResult(success=False, error="could not create tree", status_code=500, files_found=3)

        body = result.to_response()
        assert body == {"success": False, "logs": [], "error": "could not create tree"}
