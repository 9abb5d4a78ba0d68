"""
Integration tests against a running demo API, e.g. one started from the
`image-api` container image or with `nix-sample api`.

Set NIX_SAMPLE_API_URL (for example http://localhost:3001) to run them.
"""
import os

import httpx
import pytest

API_URL = os.environ.get("NIX_SAMPLE_API_URL", "")

pytestmark = pytest.mark.skipif(not API_URL, reason="NIX_SAMPLE_API_URL is not set")


@pytest.mark.parametrize(
    "path,keys",
    [
        ("/", {"name", "version", "description", "endpoints"}),
        ("/health", {"status", "timestamp", "environment"}),
        (
            "/api/info",
            {"python_version", "platform", "arch", "uptime", "memory", "environment"},
        ),
    ],
)
def test_route(path, keys):
    """Test if every route answers with the documented keys"""
    response = httpx.get(f"{API_URL.rstrip('/')}{path}")
    response.raise_for_status()
    assert response.headers["content-type"] == "application/json"
    assert set(response.json()) == keys
