"""Rate-limit information carried in API response headers."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta
from fractions import Fraction
from typing import Any

_INT64_MAX = 2**63 - 1
_INT64_MIN = -(2**63)

_UNIT_NANOS = {
    "ns": 1,
    "us": 1_000,
    "\u00b5s": 1_000,
    "\u03bcs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}

_COMPONENT = re.compile(r"([0-9]*)(?:\.([0-9]*))?([^0-9.]*)")
_INTEGER = re.compile(r"[+-]?[0-9]+")


def parse_duration(text: str) -> timedelta:
    """Parse a duration such as ``"1h30m"``, ``"6m0s"`` or ``"-1.5s"``."""
    rest = text
    negative = False
    if rest and rest[0] in "+-":
        negative = rest[0] == "-"
        rest = rest[1:]
    if rest == "0":
        return timedelta(0)
    if not rest:
        raise ValueError(f'invalid duration "{text}"')

    total = Fraction(0)
    pos = 0
    while pos < len(rest):
        match = _COMPONENT.match(rest, pos)
        whole, frac, unit = match.group(1), match.group(2), match.group(3)
        if not whole and not frac:
            raise ValueError(f'invalid duration "{text}"')
        if not unit:
            raise ValueError(f'missing unit in duration "{text}"')
        if unit not in _UNIT_NANOS:
            raise ValueError(f'unknown unit "{unit}" in duration "{text}"')
        value = Fraction(int(whole or "0"))
        if frac:
            value += Fraction(int(frac), 10 ** len(frac))
        total += value * _UNIT_NANOS[unit]
        pos = match.end()

    nanos = int(total)
    if nanos > (_INT64_MAX + 1 if negative else _INT64_MAX):
        raise ValueError(f'invalid duration "{text}"')
    micros = nanos // 1000
    return timedelta(microseconds=-micros if negative else micros)


class ResetTime(str):
    """A reset interval as sent by the server, e.g. ``"6m0s"``."""

    def time(self) -> datetime:
        """The local time at which the limit resets; now if unparseable."""
        try:
            delta = parse_duration(self)
        except ValueError:
            delta = timedelta(0)
        return datetime.now() + delta


@dataclass(frozen=True)
class RateLimitHeaders:
    """Request and token limits reported by the server."""

    limit_requests: int = 0
    limit_tokens: int = 0
    remaining_requests: int = 0
    remaining_tokens: int = 0
    reset_requests: ResetTime = ResetTime("")
    reset_tokens: ResetTime = ResetTime("")


def _atoi(text: str) -> int:
    if not _INTEGER.fullmatch(text):
        return 0
    return max(_INT64_MIN, min(_INT64_MAX, int(text)))


def _header_table(headers: Mapping[str, Any]) -> dict[str, str]:
    table: dict[str, str] = {}
    for key, value in headers.items():
        if isinstance(value, (list, tuple)):
            if not value:
                continue
            value = value[0]
        table.setdefault(key.lower(), str(value))
    return table


def new_rate_limit_headers(headers: Mapping[str, Any]) -> RateLimitHeaders:
    """Read the ``x-ratelimit-*`` headers; missing or malformed numbers become 0."""
    table = _header_table(headers)

    def get(name: str) -> str:
        return table.get(name, "")

    return RateLimitHeaders(
        limit_requests=_atoi(get("x-ratelimit-limit-requests")),
        limit_tokens=_atoi(get("x-ratelimit-limit-tokens")),
        remaining_requests=_atoi(get("x-ratelimit-remaining-requests")),
        remaining_tokens=_atoi(get("x-ratelimit-remaining-tokens")),
        reset_requests=ResetTime(get("x-ratelimit-reset-requests")),
        reset_tokens=ResetTime(get("x-ratelimit-reset-tokens")),
    )