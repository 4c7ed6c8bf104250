from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from .income import IncomeState, TrackerState


@dataclass(frozen=True)
class PersistedRecord:
    """Unit written to the local store and to export files."""

    income: IncomeState
    accumulated_total: float
    saved_at: str

    @classmethod
    def from_state(cls, state: TrackerState, saved_at: str) -> "PersistedRecord":
        return cls(income=state.income, accumulated_total=state.accumulated_total, saved_at=saved_at)

    def to_state(self) -> TrackerState:
        return TrackerState(income=self.income, accumulated_total=self.accumulated_total)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "income": self.income.to_payload(),
            "accumulatedTotal": self.accumulated_total,
            "savedAt": self.saved_at,
        }
