"""Compliance level model and icon vocabulary."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from collections.abc import Mapping
from typing import Any


class ComplianceIcon(str, Enum):
    """Icons a compliance backend may attach to a level."""

    CHECKMARK = "CHECKMARK"
    CHECKMARK_SECURE = "CHECKMARK_SECURE"
    WARNING = "WARNING"
    ERROR = "ERROR"
    NOT_APPLICABLE = "NOT_APPLICABLE"
    UNKNOWN = "UNKNOWN"


# Glyph names used by the viewer for each icon.
COMPLIANCE_ICON_MAP: dict[ComplianceIcon, str] = {
    ComplianceIcon.CHECKMARK: "Checkmark24",
    ComplianceIcon.CHECKMARK_SECURE: "Security24",
    ComplianceIcon.WARNING: "WarningAlt24",
    ComplianceIcon.ERROR: "MisuseOutline24",
    ComplianceIcon.NOT_APPLICABLE: "NotAvailable24",
    ComplianceIcon.UNKNOWN: "WatsonHealthImageAvailabilityUnavailable24",
}

ICON_NAMES = frozenset(icon.value for icon in ComplianceIcon)


@dataclass(frozen=True)
class ComplianceLevel:
    """A severity/status tier with its display metadata."""

    id: int | float
    label: str
    color_hex: str
    icon: ComplianceIcon
    description: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.icon, ComplianceIcon):
            # Raises ValueError for names outside the vocabulary
            object.__setattr__(self, "icon", ComplianceIcon(self.icon))

    @property
    def glyph(self) -> str:
        return COMPLIANCE_ICON_MAP[self.icon]

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {
            "id": self.id,
            "label": self.label,
            "colorHex": self.color_hex,
            "icon": self.icon.value,
        }
        if self.description is not None:
            data["description"] = self.description
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ComplianceLevel:
        return cls(
            id=data["id"],
            label=data["label"],
            color_hex=data["colorHex"],
            icon=ComplianceIcon(data["icon"]),
            description=data.get("description"),
        )
