"""Number helpers shared by the calculator stages.

Form values arrive as strings or numbers. Anything that does not start with a
decimal literal becomes NaN, and NaN is allowed to flow through the arithmetic
untouched so that a bad auxiliary field shows up in the outputs it affects.
"""

from __future__ import annotations

import math
import re
from typing import Optional, Union

NumberLike = Union[int, float, str, None]

_LEADING_NUMBER = re.compile(
    r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?"
)


def parse_number(value: NumberLike) -> float:
    """Parse the leading numeric prefix of ``value``; NaN when there is none."""
    if value is None or isinstance(value, bool):
        return math.nan
    if isinstance(value, (int, float)):
        return float(value)

    match = _LEADING_NUMBER.match(value.strip())
    if match is None:
        return math.nan
    return float(match.group(0))


def floor_at_zero(value: float) -> float:
    """``max(0, value)`` that keeps NaN instead of swallowing it."""
    if math.isnan(value):
        return value
    return max(0.0, value)


def round_half_up(value: float) -> Union[int, float]:
    """Round to the nearest whole unit, ties towards +inf.

    Non-finite values are returned unchanged.
    """
    if not math.isfinite(value):
        return value
    return math.floor(value + 0.5)


def as_age(value: float) -> Union[int, float]:
    # keep whole ages as ints so they serialize as 35, not 35.0
    if math.isfinite(value) and float(value).is_integer():
        return int(value)
    return value


def step_count(years: float) -> int:
    """Number of whole-year steps for ``i = 0; i < years; i++``."""
    if not years > 0:
        return 0
    return math.ceil(years)


def optional_number(value: NumberLike) -> Optional[float]:
    parsed = parse_number(value)
    return None if math.isnan(parsed) else parsed


def inclusive_step_count(span: float) -> int:
    """Number of steps for ``i = 0; i <= span; i++``."""
    if not span >= 0:
        return 0
    return math.floor(span) + 1
