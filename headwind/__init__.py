from headwind._core import (
    DEFAULT_PORTS as DEFAULT_PORTS,
    CacheControl as CacheControl,
    RawHeaders as RawHeaders,
    RequestCacheDirectives as RequestCacheDirectives,
    ResponseCacheDirectives as ResponseCacheDirectives,
    URLComponents as URLComponents,
    URLHandler as URLHandler,
    Vary as Vary,
    get_handler as get_handler,
    iter_directive_spans as iter_directive_spans,
    parse_cache_control as parse_cache_control,
    parse_request_directives as parse_request_directives,
    parse_response_directives as parse_response_directives,
    parse_url as parse_url,
    remove_dot_segments as remove_dot_segments,
    resolve as resolve,
    split_directive as split_directive,
)
from headwind._exceptions import (
    HandlerMismatch as HandlerMismatch,
    HeadwindError as HeadwindError,
    InvalidAuthority as InvalidAuthority,
    InvalidPort as InvalidPort,
    InvalidURL as InvalidURL,
)
from headwind._utils import MAX_SECONDS as MAX_SECONDS, UNSET as UNSET, parse_date as parse_date

__all__ = (
    ## URLs
    "URLComponents",
    "URLHandler",
    "DEFAULT_PORTS",
    "get_handler",
    "parse_url",
    "resolve",
    "remove_dot_segments",
    ## Headers
    "RawHeaders",
    "Vary",
    "CacheControl",
    "RequestCacheDirectives",
    "ResponseCacheDirectives",
    "iter_directive_spans",
    "split_directive",
    "parse_cache_control",
    "parse_request_directives",
    "parse_response_directives",
    "parse_date",
    "UNSET",
    "MAX_SECONDS",
    ## Exceptions
    "HeadwindError",
    "InvalidURL",
    "InvalidAuthority",
    "InvalidPort",
    "HandlerMismatch",
)
