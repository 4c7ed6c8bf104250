# engine/actions.py
from __future__ import annotations

import math
import re
from dataclasses import replace
from typing import Any

from ..data_model import TrackerState

_LEADING_NUMBER = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_amount(raw: Any) -> float:
    """Parse a form value; anything unusable becomes 0.0.

    Strings are read like a browser ``parseFloat``: the leading number is kept
    and trailing text ignored, so ``"12abc"`` is 12 and ``"abc"`` is 0.
    """
    if raw is None or isinstance(raw, bool):
        return 0.0
    if isinstance(raw, (int, float)):
        number = raw
    else:
        match = _LEADING_NUMBER.match(str(raw))
        if not match:
            return 0.0
        number = match.group(1)
    try:
        value = float(number)
    except (OverflowError, ValueError):
        return 0.0
    if not math.isfinite(value):
        return 0.0
    return value


def update_income_field(state: TrackerState, field: str, raw: Any) -> TrackerState:
    return replace(state, income=state.income.with_field(field, parse_amount(raw)))


def add_one_time_payment(state: TrackerState) -> TrackerState:
    """Move the pending one-time payment into the accumulated total."""
    payment = state.income.one_time_payment
    return TrackerState(
        income=state.income.with_field("one_time_payment", 0.0),
        accumulated_total=state.accumulated_total + payment,
    )
