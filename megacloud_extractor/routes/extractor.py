import logging
from typing import Annotated

from fastapi import APIRouter, Query, HTTPException, Depends

from megacloud_extractor.extractors.base import ExtractorError, SourcesNotFoundError
from megacloud_extractor.extractors.factory import ExtractorFactory
from megacloud_extractor.schemas import ExtractorURLParams, ExtractionResult
from megacloud_extractor.utils.http_utils import DownloadError, ProxyRequestHeaders, get_proxy_headers

extractor_router = APIRouter()
logger = logging.getLogger(__name__)


@extractor_router.head("/video", response_model=ExtractionResult)
@extractor_router.get("/video", response_model=ExtractionResult)
async def extract_url(
    extractor_params: Annotated[ExtractorURLParams, Query()],
    proxy_headers: Annotated[ProxyRequestHeaders, Depends(get_proxy_headers)],
):
    """Extract stream sources, subtitles and skip markers from an embed player page."""
    try:
        extractor = ExtractorFactory.get_extractor(extractor_params.host, proxy_headers.request)
        return await extractor.extract(extractor_params.destination, referer=extractor_params.referer)

    except ExtractorError as e:
        cause = e.__cause__
        if isinstance(cause, DownloadError):
            logger.error(f"Extraction failed: {str(e)}")
            raise HTTPException(status_code=cause.status_code, detail=str(e))
        if isinstance(cause, SourcesNotFoundError):
            logger.error(f"Extraction failed: {str(e)}")
            raise HTTPException(status_code=404, detail=str(e))
        if cause is None or isinstance(cause, ExtractorError):
            logger.error(f"Extraction failed: {str(e)}")
            raise HTTPException(status_code=400, detail=str(e))
        logger.exception(f"Extraction failed: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Extraction failed: {str(e)}")
    except Exception as e:
        logger.exception(f"Extraction failed: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Extraction failed: {str(e)}")
