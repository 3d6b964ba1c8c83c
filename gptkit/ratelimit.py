"""Rate limit information carried in response headers."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from fractions import Fraction
from typing import Any

_UNIT_NS = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,
    "μs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}
_SEGMENT = re.compile(r"(\d+)?(?:\.(\d*))?([^\d.]*)")
_MAX_NS = 2**63 - 1
_INT = re.compile(r"[+-]?\d+")


def parse_duration(text: str) -> timedelta:
    """Parse a duration such as ``300ms``, ``-1.5h`` or ``2h45m``."""
    error = ValueError(f"time: invalid duration {text!r}")
    rest = text
    negative = False
    if rest[:1] in ("+", "-"):
        negative = rest[0] == "-"
        rest = rest[1:]
    if rest == "0":
        return timedelta(0)
    if not rest:
        raise error
    total = Fraction(0)
    pos = 0
    while pos < len(rest):
        match = _SEGMENT.match(rest, pos)
        whole, fraction, unit = match.groups()
        if whole is None and not fraction:
            raise error
        if not unit:
            raise ValueError(f"time: missing unit in duration {text!r}")
        if unit not in _UNIT_NS:
            raise ValueError(f"time: unknown unit {unit!r} in duration {text!r}")
        amount = Fraction(int(whole or "0"))
        if fraction:
            amount += Fraction(int(fraction), 10 ** len(fraction))
        total += amount * _UNIT_NS[unit]
        pos = match.end()
    if total > _MAX_NS:
        raise error
    micros = float(total / 1000)
    return timedelta(microseconds=-micros if negative else micros)


class ResetTime(str):
    """A reset delay as sent by the server, e.g. ``6m0s``."""

    def time(self) -> datetime:
        """The moment of reset; an unparsable value means now."""
        try:
            delta = parse_duration(self)
        except ValueError:
            delta = timedelta(0)
        return datetime.now(timezone.utc) + delta


def _atoi(value: str) -> int:
    return int(value) if _INT.fullmatch(value) else 0


@dataclass(frozen=True)
class RateLimitHeaders:
    limit_requests: int = 0
    limit_tokens: int = 0
    remaining_requests: int = 0
    remaining_tokens: int = 0
    reset_requests: ResetTime = ResetTime("")
    reset_tokens: ResetTime = ResetTime("")

    @classmethod
    def from_headers(cls, headers: Mapping[str, Any]) -> RateLimitHeaders:
        """Read the x-ratelimit-* headers; missing or malformed numbers become 0."""
        lowered: dict[str, str] = {}
        for key, value in headers.items():
            if isinstance(value, (list, tuple)):
                value = value[0] if value else ""
            lowered.setdefault(key.lower(), str(value))

        def get(name: str) -> str:
            return lowered.get(f"x-ratelimit-{name}", "")

        return cls(
            limit_requests=_atoi(get("limit-requests")),
            limit_tokens=_atoi(get("limit-tokens")),
            remaining_requests=_atoi(get("remaining-requests")),
            remaining_tokens=_atoi(get("remaining-tokens")),
            reset_requests=ResetTime(get("reset-requests")),
            reset_tokens=ResetTime(get("reset-tokens")),
        )