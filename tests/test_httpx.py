from typing import Any

import httpx
import pytest

from headwind import InvalidURL
from headwind.httpx import (
    components_from_httpx,
    parse_httpx_request,
    parse_httpx_response,
    raw_headers_from_httpx,
    resolve_redirect,
)


def test_repeated_lines_stay_apart():
    headers = httpx.Headers([("Cache-Control", "no-store"), ("cache-control", "max-age=60")])
    raw = raw_headers_from_httpx(headers)
    assert raw.get_list("Cache-Control") == ["no-store", "max-age=60"]


def test_request_directives():
    request = httpx.Request(
        "GET",
        "https://example.com/resource",
        headers=[("Cache-Control", "max-age=0"), ("Pragma", "no-cache"), ("If-None-Match", '"v1"')],
    )
    directives = parse_httpx_request(request)
    assert directives.max_age == 0
    assert directives.no_cache is True
    assert directives.if_none_match == '"v1"'


def test_response_directives():
    request = httpx.Request("GET", "https://example.com/resource")
    response = httpx.Response(
        200,
        headers=[
            ("Cache-Control", 'private="Set-Cookie"'),
            ("Cache-Control", "max-age=60"),
            ("Date", "Mon, 25 Aug 2015 12:00:00 GMT"),
            ("ETag", '"abc"'),
        ],
        request=request,
    )
    directives = parse_httpx_response(response)
    assert directives.uri == "https://example.com/resource"
    assert directives.private_field == "Set-Cookie"
    assert directives.max_age == 60
    assert directives.served_date == 1440504000
    assert directives.etag == '"abc"'


def test_response_without_request():
    directives = parse_httpx_response(httpx.Response(200, headers={"Cache-Control": "no-store"}))
    assert directives.uri is None
    assert directives.no_store is True


def test_components_from_httpx():
    url = components_from_httpx(httpx.URL("https://example.com:8443/a/b?x=1"))
    assert url.host == "example.com"
    assert url.port == 8443
    assert url.path == "/a/b"
    assert url.query == "x=1"


def test_resolve_relative_redirect(caplog: Any):
    request = httpx.Request("GET", "https://example.com/a/b/c")
    response = httpx.Response(301, headers={"Location": "../d?page=2"}, request=request)

    with caplog.at_level("DEBUG", logger="headwind.integrations.httpx"):
        target = resolve_redirect(response)

    assert target is not None
    assert str(target) == "https://example.com/a/d?page=2"
    assert caplog.record_tuples == [
        (
            "headwind.integrations.httpx",
            10,
            "Resolved redirect location '../d?page=2' to https://example.com/a/d?page=2",
        )
    ]


def test_resolve_absolute_redirect():
    request = httpx.Request("GET", "https://example.com/a")
    response = httpx.Response(302, headers={"Location": "http://other.org/landing"}, request=request)
    assert str(resolve_redirect(response)) == "http://other.org/landing"


def test_no_location():
    request = httpx.Request("GET", "https://example.com/a")
    assert resolve_redirect(httpx.Response(200, request=request)) is None


def test_relative_redirect_without_request():
    response = httpx.Response(301, headers={"Location": "/elsewhere"})
    with pytest.raises(InvalidURL):
        resolve_redirect(response)
