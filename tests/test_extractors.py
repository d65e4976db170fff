"""
Integration tests against the live MegaCloud player.

Test URLs are loaded from environment variables for privacy:
- Locally: Add TEST_URL_MEGACLOUD (and optionally TEST_REFERER_MEGACLOUD) to your .env file
- CI/CD: Configure as GitHub Secrets

If the environment variable is not set, the tests are skipped.
"""

import os

import httpx
import pytest

from megacloud_extractor.extractors.factory import ExtractorFactory

# All extractors registered in the factory
# The env var name is derived from the extractor name (uppercase)
ALL_EXTRACTORS = [
    "MegaCloud",
]


@pytest.mark.asyncio
@pytest.mark.parametrize("extractor_name", ALL_EXTRACTORS)
async def test_extractor(extractor_name: str, get_test_url):
    """
    Test that an extractor can resolve a live embed URL.

    This test:
    1. Loads the test URL from TEST_URL_{EXTRACTOR_NAME} env var
    2. Skips if the env var is not set
    3. Runs the extractor against the URL
    4. Validates the result structure
    """
    test_url = get_test_url(extractor_name)

    if test_url is None:
        pytest.skip(f"TEST_URL_{extractor_name.upper()} not set")

    referer = os.environ.get(f"TEST_REFERER_{extractor_name.upper()}", "")
    extractor = ExtractorFactory.get_extractor(extractor_name, {})

    result = await extractor.extract(test_url, referer=referer)

    if not result.sources:
        pytest.skip("Provider changed its nonce encoding; no nonce could be recovered")

    assert result.embed_url == test_url
    assert result.headers["Referer"] == test_url
    for video in result.sources:
        assert video.url.startswith(("http://", "https://")), f"Unexpected source URL: {video.url[:50]}..."


@pytest.mark.asyncio
@pytest.mark.parametrize("extractor_name", ALL_EXTRACTORS)
async def test_extractor_stream_accessible(extractor_name: str, get_test_url):
    """
    Test that the first extracted stream URL is actually accessible with the returned headers.

    Note: This test may be slower as it makes real HTTP requests.
    """
    test_url = get_test_url(extractor_name)

    if test_url is None:
        pytest.skip(f"TEST_URL_{extractor_name.upper()} not set")

    referer = os.environ.get(f"TEST_REFERER_{extractor_name.upper()}", "")
    extractor = ExtractorFactory.get_extractor(extractor_name, {})
    result = await extractor.extract(test_url, referer=referer)

    if not result.sources:
        pytest.skip("Provider changed its nonce encoding; no nonce could be recovered")

    video = result.sources[0]
    async with httpx.AsyncClient(timeout=30, follow_redirects=True) as client:
        response = await client.get(video.url, headers=result.headers)

    assert response.status_code == 200, f"Stream URL returned HTTP {response.status_code}. URL: {video.url[:100]}..."
    if video.is_m3u8:
        assert "#EXTM3U" in response.text[:1024], "Content doesn't appear to be valid HLS"
