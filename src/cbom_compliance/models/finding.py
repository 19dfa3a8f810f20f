"""Finding model."""

from __future__ import annotations

from dataclasses import dataclass
from collections.abc import Mapping
from typing import Any


@dataclass(frozen=True)
class Finding:
    """Associate a scanned asset (by ``bom-ref``) with a compliance level."""

    bom_ref: str
    level_id: int | float
    message: str | None = None

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {"bomRef": self.bom_ref, "levelId": self.level_id}
        if self.message is not None:
            data["message"] = self.message
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Finding:
        return cls(
            bom_ref=data["bomRef"],
            level_id=data["levelId"],
            message=data.get("message"),
        )
