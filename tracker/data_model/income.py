from __future__ import annotations

from dataclasses import dataclass, field, replace

from .base import FieldDefinition, FormModel


class IncomeFormModel(FormModel):
    def __init__(self) -> None:
        fields = [
            FieldDefinition(
                "one_time_payment",
                "New Client Payment ($)",
                key="oneTimePayment",
                placeholder="One-time payment",
            ),
            FieldDefinition(
                "monthly_retainer",
                "Monthly Retainer Amount ($)",
                key="monthlyRetainer",
                placeholder="Monthly recurring revenue",
            ),
            FieldDefinition(
                "monthly_secondary_revenue",
                "Monthly SaaS Revenue ($)",
                key="monthlySecondaryRevenue",
                placeholder="Additional MRR from your SaaS product",
                help="Optional",
            ),
        ]
        super().__init__("income", fields)


INCOME_FORM = IncomeFormModel()


@dataclass(frozen=True)
class IncomeState:
    one_time_payment: float = 0.0
    monthly_retainer: float = 0.0
    monthly_secondary_revenue: float = 0.0

    def with_field(self, name: str, value: float) -> "IncomeState":
        INCOME_FORM.get(name)
        return replace(self, **{name: value})

    def to_payload(self) -> dict[str, float]:
        return {f.key: getattr(self, f.field) for f in INCOME_FORM.fields}


@dataclass(frozen=True)
class TrackerState:
    """Income figures plus the running total of one-time payments."""

    income: IncomeState = field(default_factory=IncomeState)
    accumulated_total: float = 0.0
