"""Data models for compliance-check results."""

from __future__ import annotations

from .assessment_level import AssessmentLevel
from .check_result import ComplianceCheckResult
from .compliance_level import COMPLIANCE_ICON_MAP, ICON_NAMES, ComplianceIcon, ComplianceLevel
from .error_entry import ErrorEntry, ErrorStatus
from .finding import Finding
from .policy import PolicyDescriptor

__all__ = [
    "AssessmentLevel",
    "COMPLIANCE_ICON_MAP",
    "ComplianceCheckResult",
    "ComplianceIcon",
    "ComplianceLevel",
    "ErrorEntry",
    "ErrorStatus",
    "Finding",
    "ICON_NAMES",
    "PolicyDescriptor",
]
