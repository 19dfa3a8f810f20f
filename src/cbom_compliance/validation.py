"""Structural validation of compliance-check result documents.

Validation runs in stages and stops at the first failing stage:

1. existence and ``error is False``
2. top-level field types
3. compliance levels (types, icon vocabulary, unique ids)
4. findings (types, ``levelId`` must reference a declared level)
5. assessment levels, only when present as an array

Each rejection is logged and recorded as a :class:`Violation` so callers can
tell why a document was refused, not just that it was.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from collections.abc import Mapping
from typing import Any

from .errors import ReferentialError, StructuralError
from .models import ComplianceCheckResult, ICON_NAMES

logger = logging.getLogger(__name__)

STAGE_EXISTENCE = "existence"
STAGE_TOP_LEVEL = "top-level"
STAGE_COMPLIANCE_LEVELS = "complianceLevels"
STAGE_FINDINGS = "findings"
STAGE_ASSESSMENT_LEVELS = "assessmentLevels"


@dataclass(frozen=True)
class Violation:
    """One reason a document was rejected."""

    path: str
    expected: str
    actual: str
    stage: str
    referential: bool = False

    def __str__(self) -> str:
        return f"{self.path}: expected {self.expected}, got {self.actual}"

    def to_dict(self) -> dict[str, object]:
        return {
            "path": self.path,
            "expected": self.expected,
            "actual": self.actual,
            "stage": self.stage,
            "referential": self.referential,
        }


@dataclass(frozen=True)
class ValidationReport:
    """Outcome of :func:`validate`."""

    violations: tuple[Violation, ...] = ()

    @property
    def valid(self) -> bool:
        return not self.violations

    @property
    def first(self) -> Violation | None:
        return self.violations[0] if self.violations else None

    def raise_for_violations(self) -> None:
        """Raise ``ReferentialError`` or ``StructuralError`` when invalid."""
        first = self.first
        if first is None:
            return
        message = "\n".join(f"- {violation}" for violation in self.violations)
        if first.referential:
            raise ReferentialError("Invalid compliance result:\n" + message, report=self)
        raise StructuralError("Invalid compliance result:\n" + message, report=self)


def json_type(value: Any) -> str:
    """Name the JSON type of a decoded value."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    return type(value).__name__


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _present(entry: Mapping[str, Any], key: str) -> bool:
    return entry.get(key) is not None


class _Rejected(Exception):
    """Internal signal carrying the violations of the failing stage."""

    def __init__(self, violations: list[Violation]) -> None:
        super().__init__(violations)
        self.violations = violations


def _reject(path: str, expected: str, value: Any, stage: str) -> _Rejected:
    return _Rejected([Violation(path, expected, json_type(value), stage)])


def _check_existence(candidate: Any) -> None:
    if candidate is None or not isinstance(candidate, Mapping):
        raise _reject("<root>", "object", candidate, STAGE_EXISTENCE)
    error = candidate.get("error")
    if error is not False:
        actual = "true" if error is True else json_type(error)
        raise _Rejected([Violation("error", "false", actual, STAGE_EXISTENCE)])


_TOP_LEVEL_FIELDS: tuple[tuple[str, str], ...] = (
    ("policyName", "string"),
    ("complianceServiceName", "string"),
    ("findings", "array"),
    ("complianceLevels", "array"),
    ("defaultComplianceLevel", "number"),
    ("assessmentLevel", "object"),
)

_CHECKS = {
    "string": lambda value: isinstance(value, str),
    "array": _is_array,
    "number": _is_number,
    "object": lambda value: isinstance(value, Mapping),
}


def _check_top_level(candidate: Mapping[str, Any]) -> None:
    violations = [
        Violation(name, expected, json_type(candidate.get(name)), STAGE_TOP_LEVEL)
        for name, expected in _TOP_LEVEL_FIELDS
        if not _CHECKS[expected](candidate.get(name))
    ]
    if violations:
        raise _Rejected(violations)


def _check_compliance_levels(levels: list[Any]) -> set[int | float]:
    seen: set[int | float] = set()
    for index, level in enumerate(levels):
        path = f"complianceLevels[{index}]"
        if not isinstance(level, Mapping):
            raise _reject(path, "object", level, STAGE_COMPLIANCE_LEVELS)
        if not _is_number(level.get("id")):
            raise _reject(f"{path}.id", "number", level.get("id"), STAGE_COMPLIANCE_LEVELS)
        for key in ("label", "colorHex", "icon"):
            if not isinstance(level.get(key), str):
                raise _reject(f"{path}.{key}", "string", level.get(key), STAGE_COMPLIANCE_LEVELS)
        if level["icon"] not in ICON_NAMES:
            raise _Rejected(
                [
                    Violation(
                        f"{path}.icon",
                        "one of " + ", ".join(sorted(ICON_NAMES)),
                        repr(level["icon"]),
                        STAGE_COMPLIANCE_LEVELS,
                    )
                ]
            )
        if _present(level, "description") and not isinstance(level["description"], str):
            raise _reject(
                f"{path}.description", "string", level["description"], STAGE_COMPLIANCE_LEVELS
            )
        if level["id"] in seen:
            raise _Rejected(
                [
                    Violation(
                        f"{path}.id",
                        "unique id",
                        f"duplicate id {level['id']!r}",
                        STAGE_COMPLIANCE_LEVELS,
                    )
                ]
            )
        seen.add(level["id"])
    return seen


def _check_findings(findings: list[Any], level_ids: set[int | float]) -> None:
    for index, finding in enumerate(findings):
        path = f"findings[{index}]"
        if not isinstance(finding, Mapping):
            raise _reject(path, "object", finding, STAGE_FINDINGS)
        if not isinstance(finding.get("bomRef"), str):
            raise _reject(f"{path}.bomRef", "string", finding.get("bomRef"), STAGE_FINDINGS)
        level_id = finding.get("levelId")
        if not _is_number(level_id):
            raise _reject(f"{path}.levelId", "number", level_id, STAGE_FINDINGS)
        if level_id not in level_ids:
            raise _Rejected(
                [
                    Violation(
                        f"{path}.levelId",
                        "a declared compliance level id",
                        f"unknown level id {level_id!r}",
                        STAGE_FINDINGS,
                        referential=True,
                    )
                ]
            )
        if _present(finding, "message") and not isinstance(finding["message"], str):
            raise _reject(f"{path}.message", "string", finding["message"], STAGE_FINDINGS)


def _check_assessment_levels(candidate: Mapping[str, Any]) -> None:
    levels = candidate.get("assessmentLevels")
    if not _is_array(levels):
        logger.debug("No assessmentLevels array found, skipping")
        return
    seen: set[int | float] = set()
    for index, level in enumerate(levels):
        path = f"assessmentLevels[{index}]"
        if not isinstance(level, Mapping):
            raise _reject(path, "object", level, STAGE_ASSESSMENT_LEVELS)
        if not _is_number(level.get("id")):
            raise _reject(f"{path}.id", "number", level.get("id"), STAGE_ASSESSMENT_LEVELS)
        if not isinstance(level.get("label"), str):
            raise _reject(f"{path}.label", "string", level.get("label"), STAGE_ASSESSMENT_LEVELS)
        if level["id"] in seen:
            raise _Rejected(
                [
                    Violation(
                        f"{path}.id",
                        "unique id",
                        f"duplicate id {level['id']!r}",
                        STAGE_ASSESSMENT_LEVELS,
                    )
                ]
            )
        seen.add(level["id"])


def validate(candidate: Any) -> ValidationReport:
    """Validate a decoded compliance-check result document.

    Returns a report whose ``violations`` hold the failures of the first stage
    that did not pass; an empty report means the document is valid.
    """
    try:
        _check_existence(candidate)
        logger.debug("Passed: existence and error flag")
        _check_top_level(candidate)
        logger.debug("Passed: top-level structure")
        level_ids = _check_compliance_levels(candidate["complianceLevels"])
        logger.debug("Passed: complianceLevels")
        _check_findings(candidate["findings"], level_ids)
        logger.debug("Passed: findings")
        _check_assessment_levels(candidate)
    except _Rejected as rejected:
        for violation in rejected.violations:
            logger.error("Invalid compliance result (%s stage): %s", violation.stage, violation)
        return ValidationReport(violations=tuple(rejected.violations))

    logger.debug("Compliance result is valid")
    return ValidationReport()


def check_valid_compliance_results(candidate: Any) -> bool:
    """Return True when ``candidate`` is a structurally valid result document."""
    return validate(candidate).valid


def parse_result(candidate: Any) -> ComplianceCheckResult:
    """Validate ``candidate`` and build an immutable snapshot from it.

    Raises:
        StructuralError: If the document fails validation.
        ReferentialError: If a finding references an unknown level.
    """
    report = validate(candidate)
    report.raise_for_violations()
    return ComplianceCheckResult.from_dict(candidate)
