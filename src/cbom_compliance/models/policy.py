"""Policy descriptor returned by the policy listing endpoint."""

from __future__ import annotations

from dataclasses import dataclass
from collections.abc import Mapping
from typing import Any


@dataclass(frozen=True)
class PolicyDescriptor:
    """A compliance policy the backend can check against."""

    id: str
    label: str | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Policy id must be non-empty")

    @property
    def display_name(self) -> str:
        return self.label or self.id

    def to_dict(self) -> dict[str, str]:
        data = {"id": self.id}
        if self.label is not None:
            data["label"] = self.label
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PolicyDescriptor:
        policy_id = data.get("id")
        if not isinstance(policy_id, str):
            raise ValueError(f"Policy entry is missing a string 'id': {data!r}")
        label = data.get("label")
        return cls(id=policy_id, label=label if isinstance(label, str) else None)
