"""
Test fixtures and mock data for git-remix tests.

This module provides common fixtures, mock API payloads and a fully
mocked GitHub API for exercising remix runs end to end.
"""

import json
from typing import Any, Dict

import httpx
import pytest
import respx

from gitremix.models import RemixContext, RepositoryRef

API = "https://api.github.com"

SOURCE_TOKEN = "ghp_source_token"
DEST_TOKEN = "ghp_dest_token"

SOURCE_PATH = f"{API}/repos/acme/widgets"
DEST_PATH = f"{API}/repos/octo/remixed"

DEST_TIP = "tip0000000000000000000000000000000000000"
NEW_TREE_SHA = "tree000000000000000000000000000000000000"
NEW_COMMIT_SHA = "c0ffee00000000000000000000000000000000aa"

# Source blob sha -> base64 content, as served by GET /git/blobs/{sha}
SOURCE_BLOBS = {
    "s1": "IyBXaWRnZXRzCg==\n",
    "s2": "cHJpbnQoJ2hpJykK\n",
    "s3": "IyEvYmluL3NoCmVjaG8gcnVuCg==\n",
}

# Content -> sha assigned by the destination when the blob is created
DEST_BLOB_SHAS = {
    "IyBXaWRnZXRzCg==\n": "d1",
    "cHJpbnQoJ2hpJykK\n": "d2",
    "IyEvYmluL3NoCmVjaG8gcnVuCg==\n": "d3",
}

SOURCE_TREE = {
    "sha": "srctree",
    "truncated": False,
    "tree": [
        {"path": "README.md", "mode": "100644", "type": "blob", "sha": "s1", "size": 10},
        {"path": "src", "mode": "040000", "type": "tree", "sha": "t1"},
        {"path": "src/app.py", "mode": "100644", "type": "blob", "sha": "s2", "size": 12},
        {"path": "vendor/lib", "mode": "160000", "type": "commit", "sha": "sub1"},
        {"path": "bin/run.sh", "mode": "100755", "type": "blob", "sha": "s3", "size": 20},
    ],
}


def _create_blob(request: httpx.Request) -> httpx.Response:
    body = json.loads(request.content)
    return httpx.Response(201, json={"sha": DEST_BLOB_SHAS[body["content"]], "url": "https://example.invalid"})


def _update_ref(request: httpx.Request) -> httpx.Response:
    body = json.loads(request.content)
    return httpx.Response(200, json={"ref": "refs/heads/main", "object": {"sha": body["sha"], "type": "commit"}})


@pytest.fixture
def httpx_mock():
    """Provide respx mock for HTTP mocking; failing runs leave routes unused."""
    with respx.mock(assert_all_called=False) as respx_mock:
        yield respx_mock


@pytest.fixture
def source_repo() -> RepositoryRef:
    return RepositoryRef(owner="acme", name="widgets")


@pytest.fixture
def dest_repo() -> RepositoryRef:
    return RepositoryRef(owner="octo", name="remixed")


@pytest.fixture
def remix_context(source_repo, dest_repo) -> RemixContext:
    """Context for a run between the mocked repositories with distinct tokens."""
    return RemixContext(
        source=source_repo,
        destination=dest_repo,
        source_token=SOURCE_TOKEN,
        dest_token=DEST_TOKEN,
        max_workers=2,
    )


@pytest.fixture
def github_api(httpx_mock) -> Dict[str, Any]:
    """
    Mock every endpoint a successful remix touches.

    Returns a dict of respx routes keyed by call name so tests can
    override single responses with ``route.mock(...)``.
    """
    routes: Dict[str, Any] = {
        "source_repo": httpx_mock.get(SOURCE_PATH).mock(
            return_value=httpx.Response(200, json={"full_name": "acme/widgets", "default_branch": "trunk"})
        ),
        "source_tree": httpx_mock.get(f"{SOURCE_PATH}/git/trees/trunk").mock(
            return_value=httpx.Response(200, json=SOURCE_TREE)
        ),
        "dest_repo": httpx_mock.get(DEST_PATH).mock(
            return_value=httpx.Response(200, json={"full_name": "octo/remixed", "default_branch": "main"})
        ),
        "dest_ref": httpx_mock.get(f"{DEST_PATH}/git/ref/heads/main").mock(
            return_value=httpx.Response(
                200, json={"ref": "refs/heads/main", "object": {"sha": DEST_TIP, "type": "commit"}}
            )
        ),
        "create_blob": httpx_mock.post(f"{DEST_PATH}/git/blobs").mock(side_effect=_create_blob),
        "create_tree": httpx_mock.post(f"{DEST_PATH}/git/trees").mock(
            return_value=httpx.Response(201, json={"sha": NEW_TREE_SHA})
        ),
        "create_commit": httpx_mock.post(f"{DEST_PATH}/git/commits").mock(
            return_value=httpx.Response(201, json={"sha": NEW_COMMIT_SHA, "message": "remix"})
        ),
        "update_ref": httpx_mock.patch(f"{DEST_PATH}/git/refs/heads/main").mock(side_effect=_update_ref),
    }
    for sha, content in SOURCE_BLOBS.items():
        routes[f"blob_{sha}"] = httpx_mock.get(f"{SOURCE_PATH}/git/blobs/{sha}").mock(
            return_value=httpx.Response(200, json={"sha": sha, "content": content, "encoding": "base64"})
        )
    return routes


def request_json(route: Any, index: int = -1) -> Any:
    """Decoded JSON body of a request recorded by a respx route."""
    return json.loads(route.calls[index].request.content)
