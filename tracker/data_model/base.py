from __future__ import annotations

from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class FieldDefinition:
    """Lightweight schema descriptor used to build the income form."""

    field: str
    label: str
    key: str  # camelCase name used in persisted records
    placeholder: str | None = None
    help: str | None = None


@dataclass(frozen=True)
class FormModel:
    """Container for a form schema."""

    name: str
    fields: List[FieldDefinition]

    def field_names(self) -> List[str]:
        return [f.field for f in self.fields]

    def get(self, name: str) -> FieldDefinition:
        for definition in self.fields:
            if definition.field == name:
                return definition
        raise KeyError(f"Unknown field: {name}")
