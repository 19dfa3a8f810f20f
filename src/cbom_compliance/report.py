"""Report aggregation and schema-friendly output."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from . import aggregation
from .models import ComplianceCheckResult


def aggregate(
    result: ComplianceCheckResult | None, assets: Iterable[Mapping[str, Any]]
) -> dict[str, Any]:
    """Aggregate per-asset compliance levels into a single report.

    ``levels`` lists every known level with its asset count, in the order the
    backend declared them. ``totals.counted`` is the number of assets that
    landed in a known level; it can be lower than ``totals.assets``.
    """

    assets = list(assets)
    valid = aggregation.has_valid_result(result)
    counts = aggregation.repartition(result, assets)
    levels = [
        {
            "id": level.id,
            "label": level.label,
            "colorHex": level.color_hex,
            "icon": level.icon.value,
            "count": counts.get(level.id, 0),
        }
        for level in aggregation.available_levels(result)
    ]

    report: dict[str, Any] = {
        "version": "1",
        "valid": valid,
        "policyName": result.policy_name if valid else "",
        "complianceServiceName": aggregation.compliance_service_name(result),
        "levels": levels,
        "repartition": {str(level_id): count for level_id, count in counts.items()},
        "colorScale": aggregation.color_scale(result, assets),
        "totals": {
            "assets": len(assets),
            "findings": len(result.findings) if valid else 0,
            "counted": sum(counts.values()),
        },
    }

    return report
