from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import (
    Any,
    Dict,
    Iterable,
    Iterator,
    List,
    Mapping,
    MutableMapping,
    Optional,
    Tuple,
    Union,
)

from headwind._utils import UNSET, parse_seconds, strip_ows_around

"""
Cache-Control tokenizing and directive parsing.

Header text comes from untrusted peers, so nothing in this module raises on
malformed input. Bad pieces are ignored or fall back to defaults.
"""

logger = logging.getLogger("headwind.core.headers")

HeadersInput = Union["RawHeaders", Mapping[str, Union[str, List[str]]], Iterable[Tuple[str, str]], None]

BOOLEAN_DIRECTIVES = {
    "no-store": "no_store",
    "no-transform": "no_transform",
    "must-revalidate": "must_revalidate",
    "public": "public",
    "only-if-cached": "only_if_cached",
}

SECONDS_DIRECTIVES = {
    "max-age": "max_age",
    "s-maxage": "s_maxage",
    "max-stale": "max_stale",
    "min-fresh": "min_fresh",
}


class RawHeaders(MutableMapping[str, str]):
    """
    Ordered multi-map of header lines.

    Names keep the case they arrived with, but every lookup is
    case-insensitive. Item access joins repeated lines with ", ".
    """

    def __init__(self, headers: HeadersInput = None) -> None:
        self._items: List[Tuple[str, str]] = []

        if headers is None:
            return
        if isinstance(headers, RawHeaders):
            self._items = headers.multi_items()
        elif isinstance(headers, Mapping):
            for name, value in headers.items():
                if isinstance(value, str):
                    self.add(name, value)
                else:
                    for item in value:
                        self.add(name, item)
        else:
            for name, value in headers:
                self.add(name, value)

    def add(self, name: str, value: str) -> None:
        self._items.append((name, value))

    def get_list(self, key: str) -> List[str]:
        key = key.lower()
        return [value for name, value in self._items if name.lower() == key]

    def get_last(self, key: str) -> Optional[str]:
        values = self.get_list(key)
        return values[-1] if values else None

    def multi_items(self) -> List[Tuple[str, str]]:
        return self._items[:]

    def __getitem__(self, key: str) -> str:
        values = self.get_list(key)
        if not values:
            raise KeyError(key)
        return ", ".join(values)

    def __setitem__(self, key: str, value: str) -> None:
        self._items = [(name, item) for name, item in self._items if name.lower() != key.lower()]
        self._items.append((key, value))

    def __delitem__(self, key: str) -> None:
        remaining = [(name, item) for name, item in self._items if name.lower() != key.lower()]
        if len(remaining) == len(self._items):
            raise KeyError(key)
        self._items = remaining

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and any(name.lower() == key.lower() for name, _ in self._items)

    def __iter__(self) -> Iterator[str]:
        seen = set()
        for name, _ in self._items:
            if name.lower() not in seen:
                seen.add(name.lower())
                yield name

    def __len__(self) -> int:
        return len({name.lower() for name, _ in self._items})

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._items!r})"

    def __eq__(self, other_headers: Any) -> bool:
        if not isinstance(other_headers, RawHeaders):
            return NotImplemented
        return [(k.lower(), v) for k, v in self._items] == [(k.lower(), v) for k, v in other_headers._items]


class Vary:
    def __init__(self, values: List[str]) -> None:
        self.values = values

    @classmethod
    def from_values(cls, vary_values: Iterable[str]) -> "Vary":
        values = []

        for vary_value in vary_values:
            for field_name in vary_value.split(","):
                field_name = field_name.strip()
                if field_name:
                    values.append(field_name)
        return Vary(values)


@dataclass(frozen=True)
class CacheControl:
    """
    Directives of one or more Cache-Control header lines.

    Seconds fields hold UNSET (-1) when the directive is absent or its value
    is not an integer, so an explicit ``max-age=0`` stays distinguishable.

    ``private_field`` and ``no_cache_field`` keep the raw, case-sensitive
    field-name list of ``private="..."`` and ``no-cache="..."``. They are
    None when the directive is absent or carried no value.
    """

    no_cache: bool = False
    no_store: bool = False
    no_transform: bool = False
    must_revalidate: bool = False
    public: bool = False
    is_private: bool = False
    only_if_cached: bool = False

    max_age: int = UNSET
    s_maxage: int = UNSET
    max_stale: int = UNSET
    min_fresh: int = UNSET

    private_field: Optional[str] = None
    no_cache_field: Optional[str] = None

    # Raw text of unrecognized directives, in arrival order
    extensions: Tuple[str, ...] = ()


def iter_directive_spans(value: str) -> Iterator[Tuple[int, int]]:
    """
    Yield the ``(start, end)`` range of every comma-separated directive.

    Commas inside a double-quoted span do not split. An unterminated quote
    runs to the end of the value.

    Examples:
        >>> list(iter_directive_spans('a, b="x,y"'))
        [(0, 1), (2, 10)]
    """
    start = 0
    quoted = False

    for i, char in enumerate(value):
        if char == '"':
            quoted = not quoted
        elif char == "," and not quoted:
            yield start, i
            start = i + 1

    yield start, len(value)


def unquote(value: str) -> str:
    if not value.startswith('"'):
        return value
    end = value.find('"', 1)
    # dangling quote, the end of the token closes it
    if end == -1:
        return value[1:]
    return value[1:end]


def split_directive(token: str) -> Optional[Tuple[str, Optional[str]]]:
    """
    Split one directive into its lower-cased name and its value.

    Returns None for a blank token. The value is None for a bare directive
    and "" for a directive ending with ``=``.
    """
    token = strip_ows_around(token)
    if not token:
        return None

    name, sep, value = token.partition("=")
    name = strip_ows_around(name).lower()
    if not sep:
        return name, None
    return name, unquote(strip_ows_around(value))


def iter_directives(value: str) -> Iterator[Tuple[str, Optional[str]]]:
    for start, end in iter_directive_spans(value):
        directive = split_directive(value[start:end])

        if directive is None:
            continue
        if not directive[0]:
            logger.debug(f"Skipping a cache directive without a name: {value[start:end]!r}")
            continue
        yield directive


def parse_cache_control(cache_control_values: Union[str, Iterable[str], None]) -> CacheControl:
    """
    Parse the values of every Cache-Control header line, in arrival order.

    A later occurrence of a directive overrides an earlier one.

    Examples:
        >>> cc = parse_cache_control(["no-store, max-age=60", "public"])
        >>> cc.no_store, cc.max_age, cc.public
        (True, 60, True)
    """
    if cache_control_values is None:
        return CacheControl()
    if isinstance(cache_control_values, str):
        cache_control_values = [cache_control_values]

    directives: Dict[str, Any] = {}
    extensions: List[str] = []

    for cache_control_value in cache_control_values:
        for name, value in iter_directives(cache_control_value):
            if name in BOOLEAN_DIRECTIVES:
                directives[BOOLEAN_DIRECTIVES[name]] = True
            elif name in SECONDS_DIRECTIVES:
                directives[SECONDS_DIRECTIVES[name]] = parse_seconds(value)
            elif name == "no-cache":
                directives["no_cache"] = True
                if value is not None:
                    directives["no_cache_field"] = value
            elif name == "private":
                directives["is_private"] = True
                directives["private_field"] = value
            else:
                logger.debug(f"Ignoring unrecognized cache directive {name!r}")
                extensions.append(name if value is None else f"{name}={value}")

    return CacheControl(extensions=tuple(extensions), **directives)


def pragma_no_cache(pragma_values: Iterable[str]) -> bool:
    for pragma_value in pragma_values:
        for token in pragma_value.split(","):
            if strip_ows_around(token).lower() == "no-cache":
                return True
    return False
