"""
Pytest configuration for MegaCloud extractor tests.

Offline tests route every request through ``httpx.MockTransport``. The live
test loads its embed URL from environment variables; locally, add them to your
.env file.
"""

import json
import os
from pathlib import Path

import httpx
import pytest
from dotenv import load_dotenv

# Load .env file from project root
project_root = Path(__file__).parent.parent
load_dotenv(project_root / ".env")

EMBED_URL = "https://megacloud.blog/embed-2/v3/e-1/xYz123AbC?k=1"
REFERER = "https://hianime.to/"
NONCE_48 = "AbCdEfGh1234567890AbCdEfGh1234567890AbCdEfGh1234"


def pytest_configure(config):
    """Configure pytest-asyncio mode."""
    config.addinivalue_line("markers", "asyncio: mark test as async")


def embed_page(body: str, data_id: str = "99") -> str:
    return (
        "<!DOCTYPE html><html><head><title>MegaCloud</title></head><body>"
        f'<div id="megacloud-player" class="fix-area" data-id="{data_id}" data-realtime="1"></div>'
        f"{body}"
        "</body></html>"
    )


class FakeMegaCloud:
    """Records requests and answers as the embed host and the sources API would."""

    def __init__(self, html: str, payload=None, embed_status: int = 200, sources_status: int = 200):
        self.html = html
        self.payload = payload if payload is not None else {"sources": []}
        self.embed_status = embed_status
        self.sources_status = sources_status
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path.endswith("/getSources"):
            if isinstance(self.payload, str):
                return httpx.Response(self.sources_status, text=self.payload)
            return httpx.Response(self.sources_status, content=json.dumps(self.payload))
        return httpx.Response(self.embed_status, text=self.html)

    @property
    def sources_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path.endswith("/getSources")]

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def fake_megacloud():
    """
    Factory fixture building a FakeMegaCloud.

    Usage:
        def test_something(fake_megacloud):
            fake = fake_megacloud(embed_page(...), {"sources": [...]})
    """
    return FakeMegaCloud


@pytest.fixture
def get_test_url():
    """Factory fixture that returns a function to get test URLs from environment."""

    def _get_url(extractor_name: str) -> str | None:
        env_var = f"TEST_URL_{extractor_name.upper()}"
        return os.environ.get(env_var)

    return _get_url
