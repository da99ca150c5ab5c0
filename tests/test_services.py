"""
Tests for RemixService.

Runs go through real GitHubClient sessions against the mocked API from
conftest, so request paths, bodies and credentials are all checked.
"""

import httpx
import pytest

from conftest import DEST_PATH, DEST_TIP, NEW_COMMIT_SHA, NEW_TREE_SHA, SOURCE_PATH, request_json
from gitremix.exceptions import RemixCancelledError
from gitremix.services import RemixService
from gitremix.utils import CancellationToken


def _messages(result, entry_type=None):
    return [entry.message for entry in result.logs if entry_type is None or entry.type == entry_type]


class TestRemixSuccess:
    """Test complete runs."""

    def test_full_success(self, github_api, remix_context):
        """Test the tree holds exactly the source blobs and the commit sits on the old tip."""
        result = RemixService().remix(remix_context)

        assert result.success is True
        assert result.status_code == 200
        assert result.error is None
        assert result.files_found == 3
        assert result.blobs_transferred == 3
        assert result.skipped_paths == []
        assert result.commit_sha == NEW_COMMIT_SHA

        tree_body = request_json(github_api["create_tree"])
        assert "base_tree" not in tree_body
        assert tree_body["tree"] == [
            {"path": "README.md", "mode": "100644", "type": "blob", "sha": "d1"},
            {"path": "bin/run.sh", "mode": "100755", "type": "blob", "sha": "d3"},
            {"path": "src/app.py", "mode": "100644", "type": "blob", "sha": "d2"},
        ]

        commit_body = request_json(github_api["create_commit"])
        assert commit_body == {
            "message": "remix: content cloned from acme/widgets",
            "tree": NEW_TREE_SHA,
            "parents": [DEST_TIP],
        }

        assert request_json(github_api["update_ref"]) == {"sha": NEW_COMMIT_SHA, "force": True}

    def test_log_narrative(self, github_api, remix_context):
        """Test the run log narrates every step in order."""
        result = RemixService().remix(remix_context)

        assert _messages(result) == [
            "Fetching source repository information...",
            "Source branch: trunk",
            "Downloading source file tree...",
            "3 files found",
            "Fetching destination repository information...",
            "Destination branch: main",
            "Fetching destination branch reference...",
            "Transferring file blobs...",
            "3 blobs transferred",
            "Creating new file tree...",
            "Tree created!",
            "Creating commit...",
            f"Commit created: {NEW_COMMIT_SHA[:7]}",
            "Checking that the destination branch has not moved...",
            "Updating branch...",
            "Branch updated with force push!",
            "Remix complete!",
        ]
        assert result.logs[-1].type == "success"

    def test_credentials_never_mixed(self, github_api, remix_context):
        """Test reads carry the source token and destination calls the destination token."""
        RemixService().remix(remix_context)

        source_routes = ["source_repo", "source_tree", "blob_s1", "blob_s2", "blob_s3"]
        dest_routes = ["dest_repo", "dest_ref", "create_blob", "create_tree", "create_commit", "update_ref"]

        for name in source_routes:
            for call in github_api[name].calls:
                assert call.request.headers["Authorization"] == "Bearer ghp_source_token", name
        for name in dest_routes:
            for call in github_api[name].calls:
                assert call.request.headers["Authorization"] == "Bearer ghp_dest_token", name

    def test_same_token_for_both(self, github_api, remix_context):
        """Test a single token serves both sides."""
        remix_context.dest_token = "ghp_source_token"

        result = RemixService().remix(remix_context)

        assert result.success
        assert github_api["update_ref"].calls.last.request.headers["Authorization"] == "Bearer ghp_source_token"

    def test_sequential_workers(self, github_api, remix_context):
        """Test max_workers=1 gives the same tree."""
        remix_context.max_workers = 1

        result = RemixService().remix(remix_context)

        assert result.success
        assert [item["path"] for item in request_json(github_api["create_tree"])["tree"]] == [
            "README.md",
            "bin/run.sh",
            "src/app.py",
        ]

    def test_idempotent(self, github_api, remix_context):
        """Test two runs over an unchanged source produce identical trees."""
        service = RemixService()

        assert service.remix(remix_context).success
        assert service.remix(remix_context).success

        assert request_json(github_api["create_tree"], 0) == request_json(github_api["create_tree"], 1)

    def test_no_force(self, github_api, remix_context):
        """Test a fast-forward-only update when force is off."""
        remix_context.force = False

        result = RemixService().remix(remix_context)

        assert result.success
        assert request_json(github_api["update_ref"])["force"] is False
        assert "Branch updated (fast-forward)" in _messages(result)

    def test_empty_source(self, github_api, remix_context):
        """Test a source tree without blobs yields an empty destination tree."""
        github_api["source_tree"].mock(return_value=httpx.Response(200, json={"sha": "t", "tree": []}))

        result = RemixService().remix(remix_context)

        assert result.success
        assert request_json(github_api["create_tree"]) == {"tree": []}

    def test_truncated_tree_warns(self, github_api, remix_context):
        """Test a truncated listing is reported but the run completes."""
        github_api["source_tree"].mock(
            return_value=httpx.Response(
                200,
                json={
                    "sha": "t",
                    "truncated": True,
                    "tree": [{"path": "README.md", "mode": "100644", "type": "blob", "sha": "s1"}],
                },
            )
        )

        result = RemixService().remix(remix_context)

        assert result.success
        assert any("truncated" in message for message in _messages(result, "warning"))


class TestPerFileSkips:
    """Test per-file failures."""

    def test_blob_read_failure(self, github_api, remix_context):
        """Test an unreadable blob is skipped and only its path is omitted."""
        github_api["blob_s2"].mock(return_value=httpx.Response(404, json={"message": "Not Found"}))

        result = RemixService().remix(remix_context)

        assert result.success is True
        assert result.status_code == 200
        assert result.skipped_paths == ["src/app.py"]
        assert _messages(result, "warning") == ["Warning: could not read src/app.py"]
        assert "2 blobs transferred" in _messages(result)
        assert [item["path"] for item in request_json(github_api["create_tree"])["tree"]] == [
            "README.md",
            "bin/run.sh",
        ]

    def test_blob_create_failure(self, github_api, remix_context):
        """Test a blob the destination rejects is skipped."""

        def _create_blob(request):
            if "IyEv" in request.content.decode():
                return httpx.Response(422, json={"message": "too large"})
            return httpx.Response(201, json={"sha": "dx"})

        github_api["create_blob"].mock(side_effect=_create_blob)

        result = RemixService().remix(remix_context)

        assert result.success is True
        assert _messages(result, "warning") == ["Warning: could not create blob for bin/run.sh"]
        assert "bin/run.sh" not in [item["path"] for item in request_json(github_api["create_tree"])["tree"]]


class TestFatalFailures:
    """Test each fatal step stops the run before the ref update."""

    @pytest.mark.parametrize(
        "route,response,error,status",
        [
            ("source_repo", httpx.Response(404), "source repository unreachable", 400),
            ("source_tree", httpx.Response(409, text="Git Repository is empty."), "could not enumerate tree", 400),
            ("dest_repo", httpx.Response(403), "destination repository unreachable", 400),
            ("dest_ref", httpx.Response(404), "could not resolve destination ref", 400),
            ("create_tree", httpx.Response(422, text="bad tree"), "could not create tree", 500),
            ("create_commit", httpx.Response(500), "could not create commit", 500),
        ],
    )
    def test_fatal_step(self, github_api, remix_context, route, response, error, status):
        """Test the failure message, status and the missing ref update."""
        github_api[route].mock(return_value=response)

        result = RemixService().remix(remix_context)

        assert result.success is False
        assert result.error == error
        assert result.status_code == status
        assert result.logs[-1].type == "error"
        assert not github_api["update_ref"].called

    def test_source_failure_logs_raw_status(self, github_api, remix_context):
        """Test the raw HTTP status is in the log."""
        github_api["source_repo"].mock(return_value=httpx.Response(401))

        result = RemixService().remix(remix_context)

        assert "Error accessing source repository: 401" in _messages(result, "error")
        assert not github_api["source_tree"].called

    def test_update_failure(self, github_api, remix_context):
        """Test a rejected ref update is a 500-class failure."""
        github_api["update_ref"].mock(return_value=httpx.Response(422, json={"message": "Update is not a fast forward"}))

        result = RemixService().remix(remix_context)

        assert result.success is False
        assert result.error == "could not update branch"
        assert result.status_code == 500

    def test_malformed_response(self, github_api, remix_context):
        """Test a 2xx response missing required fields is fatal."""
        github_api["create_commit"].mock(return_value=httpx.Response(201, json={"message": "no sha"}))

        result = RemixService().remix(remix_context)

        assert result.success is False
        assert result.error == "could not create commit"
        assert not github_api["update_ref"].called


class TestTipVerification:
    """Test destination tip re-validation."""

    def test_tip_moved(self, github_api, remix_context):
        """Test the run refuses to overwrite a branch that moved."""
        github_api["dest_ref"].mock(
            side_effect=[
                httpx.Response(200, json={"ref": "refs/heads/main", "object": {"sha": DEST_TIP}}),
                httpx.Response(200, json={"ref": "refs/heads/main", "object": {"sha": "f" * 40}}),
            ]
        )

        result = RemixService().remix(remix_context)

        assert result.success is False
        assert result.error == "destination branch changed during remix"
        assert result.status_code == 409
        assert not github_api["update_ref"].called

    def test_verification_disabled(self, github_api, remix_context):
        """Test verify_tip=False reads the ref once and overwrites."""
        remix_context.verify_tip = False

        result = RemixService().remix(remix_context)

        assert result.success
        assert github_api["dest_ref"].call_count == 1


class TestCancellationAndErrors:
    """Test cancellation and unexpected errors."""

    def test_cancelled_before_start(self, github_api, remix_context):
        """Test a cancelled token stops the run before any request."""
        token = CancellationToken()
        token.cancel()

        result = RemixService().remix(remix_context, cancel=token)

        assert result.success is False
        assert result.error == "remix cancelled"
        assert result.status_code == 500
        assert not github_api["source_repo"].called

    def test_cancelled_during_blobs(self, github_api, remix_context):
        """Test cancelling during duplication aborts before the tree is created."""
        token = CancellationToken()

        def _read_and_cancel(request):
            token.cancel()
            return httpx.Response(200, json={"sha": "s1", "content": "IyBXaWRnZXRzCg==\n"})

        github_api["blob_s1"].mock(side_effect=_read_and_cancel)
        remix_context.max_workers = 1

        result = RemixService().remix(remix_context, cancel=token)

        assert result.error == "remix cancelled"
        assert not github_api["create_tree"].called
        assert not github_api["update_ref"].called

    def test_unexpected_error(self, remix_context):
        """Test an unexpected exception becomes a 500 with its message."""

        def _broken_factory(context):
            raise RuntimeError("session setup exploded")

        result = RemixService(sessions_factory=_broken_factory).remix(remix_context)

        assert result.success is False
        assert result.status_code == 500
        assert result.error == "session setup exploded"
        assert _messages(result, "error") == ["Internal error: session setup exploded"]

    def test_sessions_closed(self, github_api, remix_context, mocker):
        """Test both sessions are closed after a run."""
        from gitremix.api import SessionPair

        close_spy = mocker.spy(SessionPair, "close")

        RemixService().remix(remix_context)

        assert close_spy.call_count == 1

    def test_deadline_from_context(self, github_api, remix_context, mocker):
        """Test the context deadline builds the token when none is passed."""
        remix_context.deadline_seconds = 60
        token_cls = mocker.patch("gitremix.services.remix_service.CancellationToken", wraps=CancellationToken)

        assert RemixService().remix(remix_context).success
        token_cls.assert_called_once_with(deadline_seconds=60)


def test_cancelled_error_type():
    """Test cancellation errors are runtime errors, not HTTP errors."""
    assert issubclass(RemixCancelledError, RuntimeError)
    assert not issubclass(RemixCancelledError, httpx.HTTPError)


def test_paths_are_consistent():
    """Test the mocked API paths match the repositories in the context fixture."""
    assert SOURCE_PATH.endswith("/repos/acme/widgets")
    assert DEST_PATH.endswith("/repos/octo/remixed")
