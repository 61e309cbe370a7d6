from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from headwind._core._headers import CacheControl
from headwind._utils import UNSET


@dataclass(frozen=True)
class RequestCacheDirectives(CacheControl):
    has_authorization: bool = False
    """Whether the request carries an Authorization header."""

    if_modified_since: Optional[int] = None
    """POSIX timestamp of the If-Modified-Since header, if it could be read."""

    if_none_match: Optional[str] = None
    """Raw If-None-Match header value."""

    @property
    def has_conditions(self) -> bool:
        return self.if_modified_since is not None or self.if_none_match is not None


@dataclass(frozen=True)
class ResponseCacheDirectives(CacheControl):
    uri: Optional[str] = None
    """URI of the request this response answers."""

    served_date: Optional[int] = None
    expires: Optional[int] = None
    last_modified: Optional[int] = None
    etag: Optional[str] = None

    age_seconds: int = UNSET
    """Value of the Age header, UNSET when absent or unreadable."""

    vary_fields: Tuple[str, ...] = ()

    @property
    def has_vary_all(self) -> bool:
        return "*" in self.vary_fields

    def varies_on(self, name: str) -> bool:
        name = name.lower()
        return any(field.lower() == name for field in self.vary_fields)
