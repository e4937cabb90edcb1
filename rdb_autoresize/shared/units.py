"""Human readable sizes and durations.

Sizes use decimal (SI) units, so ``5GB`` is 5 * 10**9 bytes. This matches the
way managed database providers bill and report volume sizes.
"""

import re
from typing import Union

_SIZE_UNITS = {
    "": 1,
    "k": 10**3,
    "m": 10**6,
    "g": 10**9,
    "t": 10**12,
    "p": 10**15,
}

_SIZE_SUFFIXES = ["B", "kB", "MB", "GB", "TB", "PB"]

_SIZE_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*([kmgtp]?)b?\s*$", re.IGNORECASE)

_DURATION_UNITS = {"h": 3600.0, "m": 60.0, "s": 1.0, "ms": 0.001}

_DURATION_PART_RE = re.compile(r"(\d+(?:\.\d+)?)(ms|h|m|s)")


def parse_size(value: Union[str, int, float]) -> int:
    """Parse a human readable size into bytes.

    Args:
        value: Size such as ``"100GB"``, ``"5 gb"``, ``"512MB"`` or a plain
            number of bytes.

    Returns:
        Size in bytes.

    Raises:
        ValueError: If the value cannot be parsed.
    """
    if isinstance(value, bool):
        raise ValueError(f"invalid size: {value!r}")
    if isinstance(value, (int, float)):
        if value < 0:
            raise ValueError(f"invalid size: {value!r}")
        return int(value)
    if not isinstance(value, str):
        raise ValueError(f"invalid size: {value!r}")

    match = _SIZE_RE.match(value)
    if not match:
        raise ValueError(f"invalid size: {value!r}")
    number, unit = match.groups()
    return int(float(number) * _SIZE_UNITS[unit.lower()])


def format_size(size: Union[int, float]) -> str:
    """Format a byte count with up to four significant digits, e.g. ``85GB``."""
    value = float(size)
    index = 0
    while value >= 1000 and index < len(_SIZE_SUFFIXES) - 1:
        value /= 1000
        index += 1
    return f"{value:.4g}{_SIZE_SUFFIXES[index]}"


def parse_duration(value: Union[str, int, float]) -> float:
    """Parse a duration into seconds.

    Accepts plain numbers (seconds) or strings such as ``"30s"``, ``"5m"``,
    ``"1h"``, ``"1m30s"`` and ``"250ms"``.

    Raises:
        ValueError: If the value cannot be parsed.
    """
    if isinstance(value, bool):
        raise ValueError(f"invalid duration: {value!r}")
    if isinstance(value, (int, float)):
        return float(value)
    if not isinstance(value, str):
        raise ValueError(f"invalid duration: {value!r}")

    text = value.strip().lower()
    try:
        return float(text)
    except ValueError:
        pass

    parts = _DURATION_PART_RE.findall(text)
    if not parts or "".join(n + u for n, u in parts) != text:
        raise ValueError(f"invalid duration: {value!r}")
    return sum(float(number) * _DURATION_UNITS[unit] for number, unit in parts)
