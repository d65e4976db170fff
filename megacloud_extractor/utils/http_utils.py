from dataclasses import dataclass

import httpx
from starlette.requests import Request

from megacloud_extractor.configs import settings
from megacloud_extractor.const import SUPPORTED_REQUEST_HEADERS


class DownloadError(Exception):
    def __init__(self, status_code, message):
        self.status_code = status_code
        self.message = message
        super().__init__(message)


def create_httpx_client(follow_redirects: bool = True, **kwargs) -> httpx.AsyncClient:
    """
    Create an HTTPX AsyncClient wired to the configured proxy, SSL and timeout settings.

    Args:
        follow_redirects (bool): Whether to follow 3xx redirects automatically.
        **kwargs: Additional AsyncClient keyword arguments.

    Returns:
        httpx.AsyncClient: Configured client. Transport settings apply unless overridden.
    """
    transport_config = settings.transport_config
    kwargs.setdefault("timeout", transport_config.timeout)
    kwargs.setdefault("verify", not transport_config.disable_ssl_verification_globally)
    if transport_config.proxy_url:
        kwargs.setdefault("proxy", transport_config.proxy_url)
    return httpx.AsyncClient(follow_redirects=follow_redirects, **kwargs)


@dataclass
class ProxyRequestHeaders:
    request: dict


def get_proxy_headers(request: Request) -> ProxyRequestHeaders:
    """
    Extract the headers to forward upstream from request headers and query parameters.

    Args:
        request (Request): Incoming HTTP request.

    Returns:
        ProxyRequestHeaders: Request headers to send with every upstream call.
    """
    request_headers = {k: v for k, v in request.headers.items() if k in SUPPORTED_REQUEST_HEADERS}
    request_headers.update({k[2:].lower(): v for k, v in request.query_params.items() if k.startswith("h_")})
    return ProxyRequestHeaders(request_headers)
