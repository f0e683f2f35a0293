"""Parsing and formatting of human-entered time spans."""

from __future__ import annotations

import re
from datetime import timedelta
from decimal import Decimal, InvalidOperation

from .errors import ParseDuration

_NANOS_PER_UNIT: dict[str, int] = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,  # U+00B5 micro sign
    "μs": 1_000,  # U+03BC greek mu
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}

# Largest span Go's time.Duration can hold, roughly 292 years.
MAX_NANOS = 2**63 - 1

_COMPONENT = r"(\d+\.?\d*|\.\d+)(ns|us|µs|μs|ms|s|m|h)"
_COMPONENT_PATTERN = re.compile(_COMPONENT)
_DURATION_PATTERN = re.compile(rf"\+?(?:{_COMPONENT})+")


def parse_duration(text: str) -> timedelta:
    """Parse a duration such as ``1h30m``, ``1.5h`` or ``250ms``.

    The syntax follows Go's ``time.ParseDuration``: one or more decimal
    numbers, each followed by a unit. A bare ``0`` is accepted. Negative
    spans are rejected since a logged entry cannot last less than nothing.
    """
    value = text.strip()
    if value in ("0", "+0"):
        return timedelta()
    if not _DURATION_PATTERN.fullmatch(value):
        raise ParseDuration()

    nanos = Decimal(0)
    try:
        for number, unit in _COMPONENT_PATTERN.findall(value):
            nanos += Decimal(number) * _NANOS_PER_UNIT[unit]
    except InvalidOperation as exc:
        raise ParseDuration() from exc
    if nanos > MAX_NANOS:
        raise ParseDuration()
    return timedelta(microseconds=int(nanos // 1000))


def format_duration(span: timedelta) -> str:
    """Render a span compactly, e.g. ``1d 2h 5m 3s`` or ``250ms``."""
    micros = max(span // timedelta(microseconds=1), 0)
    if micros == 0:
        return "0s"
    if micros < 1_000_000:
        millis = micros // 1000
        return f"{millis}ms" if millis else f"{micros}us"

    total_seconds = micros // 1_000_000
    days, remainder = divmod(total_seconds, 86400)
    hours, remainder = divmod(remainder, 3600)
    minutes, secs = divmod(remainder, 60)
    parts = [
        f"{amount}{unit}"
        for amount, unit in ((days, "d"), (hours, "h"), (minutes, "m"), (secs, "s"))
        if amount
    ]
    return " ".join(parts)
