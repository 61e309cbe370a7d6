from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

from headwind._exceptions import HandlerMismatch, InvalidAuthority, InvalidPort, InvalidURL
from headwind._utils import is_ipv6_literal, parse_int32

logger = logging.getLogger("headwind.core.url")

DEFAULT_PORTS = {
    "http": 80,
    "https": 443,
    "ws": 80,
    "wss": 443,
    "ftp": 21,
}

_SCHEME = re.compile(r"[A-Za-z][A-Za-z0-9+.\-]*")


@dataclass(frozen=True, eq=False)
class URLComponents:
    """
    The parsed pieces of a URL.

    ``host`` is never None and ``port`` is -1 when the URL relies on the
    default port of its scheme. ``query`` and ``fragment`` are None when
    absent, which is not the same as empty.

    Equality and hashing follow the owning handler: two URLs are equal when
    they name the same fragment of the same file. Hosts are compared as
    case-insensitive strings, never by resolving them.
    """

    scheme: str
    authority: Optional[str] = None
    user_info: Optional[str] = None
    host: str = ""
    port: int = -1
    path: str = ""
    query: Optional[str] = None
    fragment: Optional[str] = None
    handler: Optional[URLHandler] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if self.handler is None:
            object.__setattr__(self, "handler", get_handler(self.scheme))

    @property
    def _handler(self) -> URLHandler:
        assert self.handler is not None
        return self.handler

    @property
    def file(self) -> str:
        return self.path if self.query is None else f"{self.path}?{self.query}"

    @property
    def effective_port(self) -> int:
        return self.port if self.port != -1 else self._handler.default_port

    def to_external_form(self) -> str:
        return self._handler.to_external_form(self)

    def __str__(self) -> str:
        return self.to_external_form()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, URLComponents):
            return NotImplemented
        return self._handler.equals(self, other)

    def __hash__(self) -> int:
        return self._handler.hash_url(self)


def remove_dot_segments(path: str) -> str:
    """
    Remove ``.`` and ``..`` segments from a path.

    A ``/../`` cancels the segment before it unless that segment is ``..``
    too. A ``/../`` at the very start has no parent to cancel and is dropped.

    Examples:
        >>> remove_dot_segments("/a/b/../c")
        '/a/c'
        >>> remove_dot_segments("/../../a")
        '/a'
        >>> remove_dot_segments("/a/./b/.")
        '/a/b/'
    """
    while "/./" in path:
        i = path.find("/./")
        path = path[:i] + path[i + 2 :]

    i = path.find("/../")
    while i != -1:
        if i == 0:
            path = path[3:]
            i = 0
        else:
            previous = path.rfind("/", 0, i)
            if previous != -1 and not path.startswith("/../", previous):
                path = path[:previous] + path[i + 3 :]
                i = 0
            else:
                i += 3
        i = path.find("/../", i)

    while path.endswith("/.."):
        i = len(path) - 3
        previous = path.rfind("/", 0, i)
        if previous == -1 or path[previous + 1 : i] == "..":
            break
        path = path[: previous + 1]

    if path.startswith("./") and len(path) > 2:
        path = path[2:]

    if path.endswith("/."):
        path = path[:-1]

    return path


@dataclass(frozen=True)
class URLHandler:
    """
    Parses, compares and renders URLs of one family of schemes.

    Attributes:
    ----------
    default_port : int
        Port used when a URL does not name one, -1 when the scheme has none.

        Examples:
        --------
        >>> URLHandler(default_port=443).default_port
        443
    """

    default_port: int = -1

    def resolve(
        self,
        base: URLComponents,
        spec: str,
        start: int = 0,
        limit: Optional[int] = None,
    ) -> URLComponents:
        """
        Parse ``spec[start:limit]`` in the context of ``base``.

        The caller has already removed the scheme and the fragment from the
        range. Pieces the range does not mention are inherited from
        ``base``; the scheme and fragment of ``base`` are kept as they are.

        Raises:
            InvalidAuthority: The authority holds a malformed IPv6 literal.
            InvalidPort: The port is not a run of digits.
            HandlerMismatch: ``base`` belongs to another handler.
        """
        if limit is None:
            limit = len(spec)
        rest = spec[start:limit]

        authority = base.authority
        user_info = base.user_info
        host = base.host
        port = base.port
        path: Optional[str] = base.path
        query = base.query
        query_set = False

        query_start = rest.find("?")
        if query_start != -1:
            query = rest[query_start + 1 :]
            rest = rest[:query_start]
            query_set = True

        if rest.startswith("//") and not rest.startswith("///"):
            authority_end = rest.find("/", 2)
            if authority_end == -1:
                authority_end = len(rest)
            authority = rest[2:authority_end]
            user_info, host, port = self._parse_authority(authority)
            rest = rest[authority_end:]

            # a new authority invalidates the inherited path and query
            path = None
            if not query_set:
                query = None

        if rest:
            if rest.startswith("/"):
                path = rest
            elif path:
                last_slash = path.rfind("/")
                separator = "/" if last_slash == -1 and authority is not None else ""
                path = path[: last_slash + 1] + separator + rest
            else:
                separator = "/" if authority is not None else ""
                path = separator + rest

        if path is None:
            path = ""

        normalized = remove_dot_segments(path)
        if normalized != path:
            logger.debug(f"Removed dot segments from {path!r}, got {normalized!r}")

        if port < -1:
            raise InvalidPort(f"Invalid port number: {port}", str(port))

        return self._set_url(
            base,
            host=host,
            port=port,
            authority=authority,
            user_info=user_info,
            path=normalized,
            query=query,
        )

    def _parse_authority(self, authority: str) -> Tuple[Optional[str], str, int]:
        user_info: Optional[str] = None
        host = authority
        port = -1

        at = authority.rfind("@")
        if at != -1:
            user_info = authority[:at]
            host = authority[at + 1 :]

        if host.startswith("["):
            # RFC 2732 literal, e.g. [::1]:8080
            close = host.find("]")
            if close <= 2:
                logger.debug(f"Rejecting authority {authority!r}: unterminated IPv6 literal")
                raise InvalidAuthority(f"Invalid authority field: {authority}", authority)

            literal = host[: close + 1]
            if not is_ipv6_literal(host[1:close]):
                logger.debug(f"Rejecting authority {authority!r}: {literal!r} is not an IPv6 address")
                raise InvalidAuthority(f"Invalid host: {literal}", literal)

            suffix = host[close + 1 :]
            if suffix:
                if suffix[0] != ":":
                    logger.debug(f"Rejecting authority {authority!r}: unexpected text after the IPv6 literal")
                    raise InvalidAuthority(f"Invalid authority field: {authority}", authority)
                # the port may be empty according to RFC 2396
                if len(suffix) > 1:
                    port = self._parse_port(suffix[1:])
            return user_info, literal, port

        colon = host.rfind(":")
        if colon != -1:
            if colon + 1 < len(host):
                port = self._parse_port(host[colon + 1 :])
            host = host[:colon]
        return user_info, host, port

    def _parse_port(self, text: str) -> int:
        port = parse_int32(text)
        if port is None:
            logger.debug(f"Rejecting port {text!r}")
            raise InvalidPort(f"Invalid port: {text}", text)
        return port

    def _set_url(
        self,
        url: URLComponents,
        *,
        host: str,
        port: int,
        authority: Optional[str],
        user_info: Optional[str],
        path: str,
        query: Optional[str],
    ) -> URLComponents:
        if url.handler != self:
            raise HandlerMismatch("handler for url different from this handler")
        # scheme and fragment are never re-derived here
        return replace(
            url,
            host=host,
            port=port,
            authority=authority,
            user_info=user_info,
            path=path,
            query=query,
        )

    def equals(self, u1: URLComponents, u2: URLComponents) -> bool:
        return u1.fragment == u2.fragment and u1.query == u2.query and self.same_file(u1, u2)

    def same_file(self, u1: URLComponents, u2: URLComponents) -> bool:
        """
        Whether both URLs name the same file: same scheme (ignoring case),
        same path, same effective port and equal hosts.
        """
        if u1.scheme.lower() != u2.scheme.lower():
            return False
        if u1.path != u2.path:
            return False
        if u1.effective_port != u2.effective_port:
            return False
        return self.hosts_equal(u1, u2)

    def hosts_equal(self, u1: URLComponents, u2: URLComponents) -> bool:
        return u1.host.lower() == u2.host.lower()

    def hash_url(self, url: URLComponents) -> int:
        return hash(
            (
                url.fragment,
                url.query,
                url.scheme.lower(),
                url.path,
                url.host.lower(),
                url.effective_port,
            )
        )

    def to_external_form(self, url: URLComponents) -> str:
        result = [url.scheme, ":"]
        if url.authority is not None:
            result.extend(("//", url.authority))
        result.append(url.file)
        if url.fragment is not None:
            result.extend(("#", url.fragment))
        return "".join(result)


def get_handler(scheme: str) -> URLHandler:
    return URLHandler(default_port=DEFAULT_PORTS.get(scheme.lower(), -1))


def resolve(
    base: URLComponents,
    spec: str,
    start: int = 0,
    limit: Optional[int] = None,
) -> URLComponents:
    """Resolve ``spec[start:limit]`` against ``base`` with the handler that owns ``base``."""
    assert base.handler is not None
    return base.handler.resolve(base, spec, start, limit)


def parse_url(spec: str, base: Optional[URLComponents] = None) -> URLComponents:
    """
    Parse a URL string, relative to ``base`` when it has no scheme of its own.

    A spec that repeats the scheme of a hierarchical ``base`` is still read
    relative to it, so ``http:foo`` against ``http://example.com/a/b`` gives
    ``http://example.com/a/foo``.

    Raises:
        InvalidURL: The spec has no scheme and there is no base.

    Examples:
        >>> str(parse_url("http://example.com/a/b?x#top"))
        'http://example.com/a/b?x#top'
        >>> str(parse_url("../c", parse_url("http://example.com/a/b/")))
        'http://example.com/a/c'
    """
    original = spec
    spec = spec.strip()
    start = 0
    limit = len(spec)

    if spec[:4].lower() == "url:":
        start = 4

    scheme: Optional[str] = None
    colon = spec.find(":", start)
    if colon != -1 and _SCHEME.fullmatch(spec, start, colon):
        scheme = spec[start:colon].lower()
        start = colon + 1

    context: Optional[URLComponents] = None
    if base is not None and (scheme is None or scheme == base.scheme.lower()):
        if scheme is None or base.path.startswith("/"):
            context = base

    if context is None:
        if scheme is None:
            raise InvalidURL(f"no protocol: {original}", original)
        context = URLComponents(scheme=scheme, handler=get_handler(scheme))

    fragment: Optional[str] = None
    hash_index = spec.find("#", start)
    if hash_index != -1:
        fragment = spec[hash_index + 1 :]
        limit = hash_index
    elif start == limit:
        fragment = context.fragment

    # an empty reference keeps the query and fragment of its base
    query = context.query if start == limit else None
    context = replace(context, query=query, fragment=fragment)

    return resolve(context, spec, start, limit)
