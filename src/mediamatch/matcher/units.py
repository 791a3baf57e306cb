"""Unit normalizers for media feature values.

Lengths are converted to CSS pixels, resolutions to dots per inch and ratios
to plain decimals so that query literals and environment values can be
compared numerically. Malformed input never raises: lengths and resolutions
become NaN (which compares false against everything) and counts fall back to
a caller-supplied default.
"""

from __future__ import annotations

import math
import re
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Iterator

if TYPE_CHECKING:
    from mediamatch.config import UnitsConfig

DEFAULT_ROOT_FONT_SIZE = 16.0

# CSS reference pixel: 96 per inch
PX_PER_INCH = 96.0

_NUMBER = r"[+-]?(?:\d+\.?\d*|\.\d+)(?:e[+-]?\d+)?"
_RE_LEADING_NUMBER = re.compile(rf"^\s*({_NUMBER})", re.IGNORECASE)
_RE_LENGTH_UNIT = re.compile(r"(em|rem|px|cm|mm|in|pt|pc)?\s*$")
_RE_RESOLUTION_UNIT = re.compile(r"(dpi|dpcm|dppx|x)?\s*$")
_RE_RATIO = re.compile(r"^\s*(\d+)\s*/\s*(\d+)\s*$")

# Pixels per unit, em and rem are resolved against the root font size
_PX_PER_UNIT: dict[str, float] = {
    "px": 1.0,
    "cm": PX_PER_INCH / 2.54,
    "mm": PX_PER_INCH / 25.4,
    "in": PX_PER_INCH,
    "pt": PX_PER_INCH / 72,
    "pc": PX_PER_INCH / 6,
}

_DPI_PER_UNIT: dict[str, float] = {
    "dpi": 1.0,
    "dpcm": 1 / 2.54,
    "dppx": PX_PER_INCH,
    "x": PX_PER_INCH,
}

_root_font_size = DEFAULT_ROOT_FONT_SIZE


def get_root_font_size() -> float:
    """Return the font size (in px) that em and rem lengths are resolved against."""
    return _root_font_size


def set_root_font_size(size: float) -> None:
    """Set the process-wide root font size used for em and rem conversion.

    Raises:
        ValueError: If the size is not a positive number.
    """
    global _root_font_size
    size = float(size)
    if not size > 0:
        raise ValueError(f"Root font size must be positive, got {size!r}")
    _root_font_size = size


@contextmanager
def root_font_size(size: float) -> Iterator[float]:
    """Temporarily use a different root font size.

    Example:
        with root_font_size(10):
            to_px("2em")  # 20.0
    """
    previous = get_root_font_size()
    set_root_font_size(size)
    try:
        yield get_root_font_size()
    finally:
        set_root_font_size(previous)


def configure_units(config: UnitsConfig) -> None:
    """Apply unit settings loaded from configuration."""
    set_root_font_size(config.root_font_size)


def _text(value: Any) -> str:
    return str(value).lower()


def _leading_float(value: Any) -> float:
    """Parse the numeric literal a value starts with, NaN if there is none."""
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value)
    match = _RE_LEADING_NUMBER.match(_text(value))
    if match is None:
        return math.nan
    return float(match.group(1))


def _to_number(value: Any) -> float:
    """Coerce a whole value to a number, NaN when it is not one."""
    if isinstance(value, (int, float)):
        return float(value)
    if value is None:
        return math.nan
    try:
        return float(_text(value).strip())
    except ValueError:
        return math.nan


def to_px(value: Any) -> float:
    """Convert a length such as ``48em``, ``2.54cm`` or ``800`` to pixels.

    A bare number is already in pixels.
    """
    number = _leading_float(value)
    unit = _RE_LENGTH_UNIT.search(_text(value)).group(1)
    if unit in ("em", "rem"):
        return number * get_root_font_size()
    return number * _PX_PER_UNIT.get(unit, 1.0)


def to_dpi(value: Any) -> float:
    """Convert a resolution such as ``2dppx`` or ``75dpcm`` to dots per inch.

    A bare number is already in dpi.
    """
    number = _leading_float(value)
    unit = _RE_RESOLUTION_UNIT.search(_text(value)).group(1)
    return number * _DPI_PER_UNIT.get(unit, 1.0)


def to_decimal(value: Any) -> float:
    """Convert a ratio such as ``16/9`` or ``16 / 9`` to a decimal."""
    if isinstance(value, (int, float)):
        return float(value)
    match = _RE_RATIO.match(_text(value))
    if match:
        numerator, denominator = (int(group) for group in match.groups())
        if denominator == 0:
            return math.nan
        return numerator / denominator
    return _to_number(value)


def to_count(value: Any, default: float) -> float:
    """Coerce an integer-valued feature (grid, color...) to a number.

    Args:
        value: The raw value, possibly absent.
        default: Returned when the value is absent or not numeric.
    """
    number = _to_number(value)
    if math.isnan(number):
        return default
    return number


__all__ = [
    "DEFAULT_ROOT_FONT_SIZE",
    "PX_PER_INCH",
    "configure_units",
    "get_root_font_size",
    "root_font_size",
    "set_root_font_size",
    "to_count",
    "to_decimal",
    "to_dpi",
    "to_px",
]
