"""Assessment level model."""

from __future__ import annotations

from dataclasses import dataclass
from collections.abc import Mapping
from typing import Any


@dataclass(frozen=True)
class AssessmentLevel:
    """Informational severity classification, independent of compliance levels."""

    id: int | float
    label: str

    def to_dict(self) -> dict[str, object]:
        return {"id": self.id, "label": self.label}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> AssessmentLevel:
        return cls(id=data["id"], label=data["label"])
