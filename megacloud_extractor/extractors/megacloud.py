import logging
from typing import Optional, Tuple

from bs4 import BeautifulSoup
from pydantic import ValidationError

from megacloud_extractor.configs import settings
from megacloud_extractor.extractors.base import BaseExtractor, ExtractorError, ExtractionError, SourcesNotFoundError
from megacloud_extractor.schemas import (
    ExtractionResult,
    MegaCloudSourcesResponse,
    MegaCloudTimeskip,
    MegaCloudSource,
    MegaCloudTrack,
    Subtitle,
    Timeskip,
    Video,
)
from megacloud_extractor.utils.nonce_utils import resolve_nonce

logger = logging.getLogger(__name__)


class MegaCloudExtractor(BaseExtractor):
    """MegaCloud embed player extractor."""

    async def extract(self, url: str, referer: str = "", **kwargs) -> ExtractionResult:
        """Resolve the sources, subtitles and skip markers behind a MegaCloud embed URL."""
        try:
            data_id, nonce = await self._resolve_token(url, referer)
            if not nonce:
                logger.warning("MegaCloud: no nonce found in embed page %s", url)
                return ExtractionResult()

            payload = await self._fetch_sources(url, data_id, nonce)
            return self._normalize(url, payload)
        except Exception as e:
            raise ExtractionError(url, str(e)) from e

    async def _resolve_token(self, url: str, referer: str) -> Tuple[str, Optional[str]]:
        headers = {"Referer": referer} if referer else None
        response = await self._make_request(url, headers=headers)
        html = response.text

        soup = BeautifulSoup(html, "lxml")
        element = soup.select_one("[data-id]")
        if element is None:
            raise ExtractorError("data-id attribute not found in embed page")
        data_id = element["data-id"]

        return data_id, resolve_nonce(html)

    async def _fetch_sources(self, url: str, data_id: str, nonce: str) -> MegaCloudSourcesResponse:
        response = await self._make_request(
            settings.megacloud_sources_url,
            headers={"Referer": url},
            params={"id": data_id, "_k": nonce},
        )
        try:
            payload = MegaCloudSourcesResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise ExtractorError(f"Invalid sources response: {e}")

        if not payload.sources:
            raise SourcesNotFoundError("No sources returned")
        return payload

    def _normalize(self, url: str, payload: MegaCloudSourcesResponse) -> ExtractionResult:
        # the embed URL is the only Referer the stream host accepts
        headers = {k: v for k, v in (payload.headers or {}).items() if k.lower() != "referer"}
        headers["Referer"] = url

        return ExtractionResult(
            sources=[to_video(source) for source in payload.sources],
            subtitles=[to_subtitle(track) for track in payload.tracks or []],
            intro=to_timeskip(payload.intro),
            outro=to_timeskip(payload.outro),
            headers=headers,
            embed_url=url,
        )


def to_video(source: MegaCloudSource) -> Video:
    file = source.file or ""
    return Video(
        url=file,
        quality=source.type if source.type is not None else "auto",
        is_m3u8=".m3u8" in file,
        is_dash=".mpd" in file,
    )


def to_subtitle(track: MegaCloudTrack) -> Subtitle:
    return Subtitle(
        lang=track.label if track.label is not None else "Unknown",
        url=track.file or "",
        kind=track.kind if track.kind is not None else "captions",
    )


def to_timeskip(skip: Optional[MegaCloudTimeskip]) -> Timeskip:
    if skip is None:
        return Timeskip()
    return Timeskip(start=skip.start or 0, end=skip.end or 0)

