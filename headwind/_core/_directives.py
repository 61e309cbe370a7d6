from __future__ import annotations

from dataclasses import asdict
from typing import Optional

from headwind._core._headers import HeadersInput, RawHeaders, Vary, parse_cache_control, pragma_no_cache
from headwind._core.models import RequestCacheDirectives, ResponseCacheDirectives
from headwind._utils import UNSET, parse_date, parse_seconds, strip_ows_around


def _as_raw_headers(headers: HeadersInput) -> RawHeaders:
    if isinstance(headers, RawHeaders):
        return headers
    return RawHeaders(headers)


def _get_date(headers: RawHeaders, name: str) -> Optional[int]:
    value = headers.get_last(name)
    return parse_date(value) if value is not None else None


def parse_request_directives(headers: HeadersInput) -> RequestCacheDirectives:
    """
    Read the caching policy a client asks for.

    Never raises: unreadable directives and dates fall back to their
    defaults.

    Example:
    ```python
        directives = parse_request_directives({"Cache-Control": "max-age=0", "Pragma": "no-cache"})
        assert directives.max_age == 0
        assert directives.no_cache
    ```
    """
    headers = _as_raw_headers(headers)
    cache_control = parse_cache_control(headers.get_list("Cache-Control"))

    fields = asdict(cache_control)
    if pragma_no_cache(headers.get_list("Pragma")):
        fields["no_cache"] = True

    return RequestCacheDirectives(
        **fields,
        has_authorization="Authorization" in headers,
        if_modified_since=_get_date(headers, "If-Modified-Since"),
        if_none_match=headers.get_last("If-None-Match"),
    )


def parse_response_directives(uri: Optional[str], headers: HeadersInput) -> ResponseCacheDirectives:
    """
    Read the caching policy an origin server states for a response.

    Single-valued headers (Date, Expires, Last-Modified, ETag, Age) take
    their last value. Never raises.
    """
    headers = _as_raw_headers(headers)
    cache_control = parse_cache_control(headers.get_list("Cache-Control"))

    fields = asdict(cache_control)
    if pragma_no_cache(headers.get_list("Pragma")):
        fields["no_cache"] = True

    age = headers.get_last("Age")

    return ResponseCacheDirectives(
        **fields,
        uri=uri,
        served_date=_get_date(headers, "Date"),
        expires=_get_date(headers, "Expires"),
        last_modified=_get_date(headers, "Last-Modified"),
        etag=headers.get_last("ETag"),
        age_seconds=parse_seconds(strip_ows_around(age)) if age is not None else UNSET,
        vary_fields=tuple(Vary.from_values(headers.get_list("Vary")).values),
    )
