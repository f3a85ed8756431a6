from __future__ import annotations

import re
from typing import List, Union


_SUFFIXES = {"k": 1e3, "m": 1e6, "b": 1e9}
_DURATION_RE = re.compile(r"^(?:(\d+)y)?(?:(\d+)m)?$")


def parse_amount(value: Union[str, float, int, None]) -> float:
    """Parse an amount such as ``"500k"``, ``"1.2m"`` or ``"6.5%"``.

    Empty input is 0. A trailing ``%`` is stripped, so percentages come back
    as plain numbers (``"6.5%" -> 6.5``).
    """
    if value is None:
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    text = value.strip().lower()
    if not text:
        return 0.0
    text = text.rstrip("%").strip()
    multiplier = 1.0
    if text and text[-1] in _SUFFIXES:
        multiplier = _SUFFIXES[text[-1]]
        text = text[:-1].strip()
    try:
        return float(text) * multiplier
    except ValueError:
        raise ValueError(f"invalid amount {value!r}") from None


def parse_duration(value: Union[str, int]) -> int:
    """Parse ``"5y6m"``, ``"30y"`` or ``"6m"`` into a number of months."""
    if isinstance(value, int):
        months = value
    else:
        text = value.strip().lower().replace(" ", "")
        match = _DURATION_RE.match(text)
        if not text or match is None:
            raise ValueError(f"invalid duration {value!r}")
        years, rest = match.groups()
        months = int(years or 0) * 12 + int(rest or 0)
    if months <= 0:
        raise ValueError("duration must be greater than 0")
    return months


def parse_rate_list(value: Union[str, float, List[float], None]) -> List[float]:
    """Parse comma separated per-year values, e.g. ``"10, 5, 3%"``.

    The last entry applies to every later year. Empty input is ``[0]``.
    """
    if value is None:
        return [0.0]
    if isinstance(value, (int, float)):
        return [float(value)]
    if isinstance(value, list):
        return [parse_amount(v) for v in value] or [0.0]
    text = value.strip()
    if not text:
        return [0.0]
    rates = []
    for part in text.split(","):
        try:
            rates.append(parse_amount(part))
        except ValueError:
            raise ValueError(f"invalid rate {part.strip()!r}") from None
    return rates
