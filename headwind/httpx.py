try:
    import httpx  # noqa: F401
except ImportError as e:
    raise ImportError(
        "httpx is required to use headwind.httpx module. "
        "Please install headwind with the 'httpx' extra, "
        "e.g., 'pip install headwind[httpx]'."
    ) from e


from ._integrations._httpx import (
    components_from_httpx as components_from_httpx,
    parse_httpx_request as parse_httpx_request,
    parse_httpx_response as parse_httpx_response,
    raw_headers_from_httpx as raw_headers_from_httpx,
    resolve_redirect as resolve_redirect,
)

__all__ = (
    "components_from_httpx",
    "parse_httpx_request",
    "parse_httpx_response",
    "raw_headers_from_httpx",
    "resolve_redirect",
)
