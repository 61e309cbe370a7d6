from __future__ import annotations

import logging
from typing import Optional

import httpx

from headwind._core._directives import parse_request_directives, parse_response_directives
from headwind._core._headers import RawHeaders
from headwind._core._url import URLComponents, parse_url
from headwind._core.models import RequestCacheDirectives, ResponseCacheDirectives

logger = logging.getLogger("headwind.integrations.httpx")


def raw_headers_from_httpx(headers: httpx.Headers) -> RawHeaders:
    """
    Convert httpx.Headers to RawHeaders, keeping repeated lines apart.
    """
    return RawHeaders(headers.multi_items())


def _request_of(response: httpx.Response) -> Optional[httpx.Request]:
    try:
        return response.request
    except RuntimeError:
        # httpx raises when the response was built without a request
        return None


def parse_httpx_request(request: httpx.Request) -> RequestCacheDirectives:
    return parse_request_directives(raw_headers_from_httpx(request.headers))


def parse_httpx_response(response: httpx.Response) -> ResponseCacheDirectives:
    request = _request_of(response)
    uri = str(request.url) if request is not None else None
    return parse_response_directives(uri, raw_headers_from_httpx(response.headers))


def components_from_httpx(url: httpx.URL) -> URLComponents:
    return parse_url(str(url))


def resolve_redirect(response: httpx.Response) -> Optional[URLComponents]:
    """
    Resolve the Location header of a response against the URL of its request.

    Returns None when the response has no Location header. A relative
    Location without a request to resolve it against raises InvalidURL.
    """
    location = response.headers.get("Location")
    if location is None:
        return None

    request = _request_of(response)
    base = components_from_httpx(request.url) if request is not None else None
    target = parse_url(location, base)
    logger.debug(f"Resolved redirect location {location!r} to {target}")
    return target
