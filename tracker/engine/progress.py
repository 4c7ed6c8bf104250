# engine/progress.py
from __future__ import annotations

import math
from typing import Any, Dict, List, Sequence

import pandas as pd

from ..data_model import IncomeState, Target, TrackerState

DEFAULT_MRR_TARGET = 13000.0

ALLOCATION_COLUMNS = ["Target", "Price", "Cost", "Funded", "Remaining", "Progress (%)"]


def clamp_percent(value: float) -> float:
    if math.isnan(value):
        return 0.0
    return max(0.0, min(100.0, value))


def monthly_income(income: IncomeState) -> float:
    return income.monthly_retainer + income.monthly_secondary_revenue


def total_target_cost(targets: Sequence[Target]) -> float:
    return sum(target.cost for target in targets)


def months_to_goal(income: IncomeState, accumulated_total: float, targets: Sequence[Target]) -> float:
    """Whole months of MRR needed to close the gap.

    Infinite when there is no recurring income. A surplus is not clamped, so
    the result is zero or negative once the goal has been passed.
    """
    mrr = monthly_income(income)
    if mrr <= 0:
        return math.inf
    return float(math.ceil((total_target_cost(targets) - accumulated_total) / mrr))


def _cost_before(targets: Sequence[Target], index: int) -> float:
    return sum(target.cost for target in targets[:index])


def target_progress(targets: Sequence[Target], index: int, accumulated_total: float) -> float:
    """Waterfall allocation: earlier targets fill completely before later ones."""
    target = targets[index]
    funds = accumulated_total - _cost_before(targets, index)
    if target.cost <= 0:
        return 100.0 if funds >= 0 else 0.0
    return clamp_percent(funds / target.cost * 100.0)


def allocation(targets: Sequence[Target], accumulated_total: float) -> List[Dict[str, Any]]:
    rows: List[Dict[str, Any]] = []
    for index, target in enumerate(targets):
        funded = min(max(0.0, accumulated_total - _cost_before(targets, index)), max(0.0, target.cost))
        rows.append(
            {
                "Target": target.label,
                "Price": target.price,
                "Cost": target.cost,
                "Funded": funded,
                "Remaining": max(0.0, target.cost - funded),
                "Progress (%)": target_progress(targets, index, accumulated_total),
            }
        )
    return rows


def allocation_frame(targets: Sequence[Target], accumulated_total: float) -> pd.DataFrame:
    return pd.DataFrame(allocation(targets, accumulated_total), columns=ALLOCATION_COLUMNS)


def overall_progress(accumulated_total: float, targets: Sequence[Target]) -> float:
    total = total_target_cost(targets)
    if total <= 0:
        return 100.0
    return clamp_percent(accumulated_total / total * 100.0)


def mrr_progress(income: IncomeState, mrr_target: float = DEFAULT_MRR_TARGET) -> float:
    if mrr_target <= 0:
        return 100.0
    return clamp_percent(monthly_income(income) / mrr_target * 100.0)


def summarize(state: TrackerState, targets: Sequence[Target], mrr_target: float = DEFAULT_MRR_TARGET) -> Dict[str, Any]:
    """Collect every derived value shown on the page."""
    return {
        "mrrTarget": mrr_target,
        "monthlyIncome": monthly_income(state.income),
        "mrrProgress": mrr_progress(state.income, mrr_target),
        "accumulatedTotal": state.accumulated_total,
        "totalTargetCost": total_target_cost(targets),
        "overallProgress": overall_progress(state.accumulated_total, targets),
        "monthsToGoal": months_to_goal(state.income, state.accumulated_total, targets),
        "targets": allocation(targets, state.accumulated_total),
    }


def format_currency(value: float) -> str:
    if float(value).is_integer():
        return f"${value:,.0f}"
    return f"${value:,.2f}"


def format_months(value: float) -> str:
    if math.isinf(value):
        return "∞"
    return str(int(value))


def format_percent(value: float) -> str:
    return f"{clamp_percent(value):.1f}%"
