from .base import FieldDefinition, FormModel
from .income import INCOME_FORM, IncomeFormModel, IncomeState, TrackerState
from .record import PersistedRecord
from .targets import DEFAULT_CARS, DEFAULT_FINANCING_DIVISOR, Target, financed_targets

__all__ = [
    "DEFAULT_CARS",
    "DEFAULT_FINANCING_DIVISOR",
    "INCOME_FORM",
    "FieldDefinition",
    "FormModel",
    "IncomeFormModel",
    "IncomeState",
    "PersistedRecord",
    "Target",
    "TrackerState",
    "financed_targets",
]
