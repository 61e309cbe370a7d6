from __future__ import annotations

import calendar
import ipaddress
import re
import typing as tp
from email.utils import parsedate_tz

UNSET = -1
MAX_SECONDS = 2147483647
_MAX_DIGITS = len(str(MAX_SECONDS))

_INTEGER = re.compile(r"[+-]?[0-9]+")


def parse_date(date: str) -> tp.Optional[int]:
    """
    Interpret an HTTP date as a POSIX timestamp in seconds.

    Accepts the RFC 1123 form as well as the obsolete RFC 850 and asctime
    forms. Returns None for anything that cannot be read as a date.

    Examples:
        >>> parse_date("Thu, 01 Jan 1970 00:00:01 GMT")
        1
        >>> parse_date("yesterday") is None
        True
    """
    try:
        parsed = parsedate_tz(date)
        if parsed is None:
            return None
        # asctime dates carry no zone, HTTP dates are always GMT
        return calendar.timegm(parsed[:6]) - (parsed[9] or 0)
    except (TypeError, ValueError, IndexError, OverflowError):
        return None


def parse_seconds(value: tp.Optional[str]) -> int:
    """
    Parse a delta-seconds value of a cache directive.

    Args:
        value: The raw directive value, or None if the directive had none.

    Returns:
        UNSET (-1) when the value is missing or not an integer, 0 for
        negative values, MAX_SECONDS for anything larger than a signed
        32-bit integer, otherwise the value itself.

    Examples:
        >>> parse_seconds("60")
        60
        >>> parse_seconds("-2")
        0
        >>> parse_seconds("pi")
        -1
    """
    if value is None or not _INTEGER.fullmatch(value):
        return UNSET
    if value[0] == "-":
        return 0
    # clamp by digit count, int() refuses very long digit strings
    digits = value.lstrip("+").lstrip("0")
    if len(digits) > _MAX_DIGITS:
        return MAX_SECONDS
    return min(int(digits or "0"), MAX_SECONDS)


def parse_int32(value: str) -> tp.Optional[int]:
    """Parse an unsigned run of ASCII digits that fits a signed 32-bit integer."""
    if not value.isascii() or not value.isdigit():
        return None
    digits = value.lstrip("0")
    if len(digits) > _MAX_DIGITS:
        return None
    number = int(digits or "0")
    return number if number <= MAX_SECONDS else None


def is_ipv6_literal(address: str) -> bool:
    """
    Check the text between the brackets of an IPv6 literal host.

    Zone identifiers (``fe80::1%eth0``) and embedded IPv4 tails are accepted.
    """
    try:
        ipaddress.IPv6Address(address)
    except ValueError:
        return False
    return True


def strip_ows_around(text: str) -> str:
    return text.strip(" \t")
