"""Snapshot representation for compliance-check results."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from types import MappingProxyType
from collections.abc import Mapping
from typing import Any

from .assessment_level import AssessmentLevel
from .compliance_level import ComplianceLevel
from .finding import Finding


@dataclass(frozen=True)
class ComplianceCheckResult:
    """Immutable snapshot of one compliance-check result document.

    Instances are built wholesale from a document that already passed
    :func:`cbom_compliance.validation.validate`; they are never mutated, only
    replaced by a newer snapshot.
    """

    policy_name: str
    compliance_service_name: str
    findings: tuple[Finding, ...]
    compliance_levels: tuple[ComplianceLevel, ...]
    default_compliance_level: int | float
    assessment_level: Mapping[str, Any] = field(
        default_factory=lambda: MappingProxyType({}), hash=False
    )
    assessment_levels: tuple[AssessmentLevel, ...] | None = None
    error: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.assessment_level, dict):
            object.__setattr__(
                self, "assessment_level", MappingProxyType(copy.deepcopy(self.assessment_level))
            )

    @property
    def level_ids(self) -> frozenset[int | float]:
        return frozenset(level.id for level in self.compliance_levels)

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {
            "error": self.error,
            "policyName": self.policy_name,
            "complianceServiceName": self.compliance_service_name,
            "findings": [finding.to_dict() for finding in self.findings],
            "complianceLevels": [level.to_dict() for level in self.compliance_levels],
            "defaultComplianceLevel": self.default_compliance_level,
            "assessmentLevel": copy.deepcopy(dict(self.assessment_level)),
        }
        if self.assessment_levels is not None:
            data["assessmentLevels"] = [level.to_dict() for level in self.assessment_levels]
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ComplianceCheckResult:
        raw_assessment_levels = data.get("assessmentLevels")
        assessment_levels = None
        if isinstance(raw_assessment_levels, (list, tuple)):
            assessment_levels = tuple(
                AssessmentLevel.from_dict(entry) for entry in raw_assessment_levels
            )
        return cls(
            error=data["error"],
            policy_name=data["policyName"],
            compliance_service_name=data["complianceServiceName"],
            findings=tuple(Finding.from_dict(entry) for entry in data["findings"]),
            compliance_levels=tuple(
                ComplianceLevel.from_dict(entry) for entry in data["complianceLevels"]
            ),
            default_compliance_level=data["defaultComplianceLevel"],
            assessment_level=data["assessmentLevel"],
            assessment_levels=assessment_levels,
        )
