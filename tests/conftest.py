"""Shared fixtures for the cbom-compliance test suite."""

from __future__ import annotations

import copy
from typing import Any

import pytest

from cbom_compliance.models import ComplianceCheckResult

SCENARIO_A: dict[str, Any] = {
    "error": False,
    "policyName": "P",
    "complianceServiceName": "S",
    "findings": [{"bomRef": "a", "levelId": 1}],
    "complianceLevels": [
        {"id": 1, "label": "OK", "colorHex": "#0f0", "icon": "CHECKMARK"},
        {"id": 2, "label": "Bad", "colorHex": "#f00", "icon": "ERROR"},
    ],
    "defaultComplianceLevel": 2,
    "assessmentLevel": {},
}


@pytest.fixture()
def document() -> dict[str, Any]:
    """A fresh copy of the two-level result document (scenario A)."""
    return copy.deepcopy(SCENARIO_A)


@pytest.fixture()
def result(document: dict[str, Any]) -> ComplianceCheckResult:
    return ComplianceCheckResult.from_dict(document)


@pytest.fixture()
def asset_a() -> dict[str, str]:
    return {"type": "cryptographic-asset", "bom-ref": "a"}


@pytest.fixture()
def asset_b() -> dict[str, str]:
    return {"type": "cryptographic-asset", "bom-ref": "b"}


@pytest.fixture()
def cbom(asset_a: dict[str, str], asset_b: dict[str, str]) -> dict[str, Any]:
    return {
        "bomFormat": "CycloneDX",
        "components": [
            asset_a,
            asset_b,
            {"type": "library", "bom-ref": "lib"},
        ],
    }
