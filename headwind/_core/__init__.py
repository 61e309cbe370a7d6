from headwind._core._directives import (
    parse_request_directives as parse_request_directives,
    parse_response_directives as parse_response_directives,
)
from headwind._core._headers import (
    CacheControl as CacheControl,
    RawHeaders as RawHeaders,
    Vary as Vary,
    iter_directive_spans as iter_directive_spans,
    parse_cache_control as parse_cache_control,
    split_directive as split_directive,
)
from headwind._core._url import (
    DEFAULT_PORTS as DEFAULT_PORTS,
    URLComponents as URLComponents,
    URLHandler as URLHandler,
    get_handler as get_handler,
    parse_url as parse_url,
    remove_dot_segments as remove_dot_segments,
    resolve as resolve,
)
from headwind._core.models import (
    RequestCacheDirectives as RequestCacheDirectives,
    ResponseCacheDirectives as ResponseCacheDirectives,
)
