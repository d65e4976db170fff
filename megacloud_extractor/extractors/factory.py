from typing import Dict, Optional, Type

import httpx

from megacloud_extractor.extractors.base import BaseExtractor, ExtractorError
from megacloud_extractor.extractors.megacloud import MegaCloudExtractor


class ExtractorFactory:
    """Factory for creating URL extractors."""

    _extractors: Dict[str, Type[BaseExtractor]] = {
        "MegaCloud": MegaCloudExtractor,
    }

    @classmethod
    def get_extractor(
        cls, host: str, request_headers: dict, client: Optional[httpx.AsyncClient] = None
    ) -> BaseExtractor:
        """Get a fresh extractor instance for the given host."""
        extractor_class = cls._extractors.get(host)
        if not extractor_class:
            raise ExtractorError(f"Unsupported host: {host}")
        return extractor_class(request_headers, client=client)
