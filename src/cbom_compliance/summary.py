"""Human-readable Markdown summary of a compliance report."""

from __future__ import annotations

from typing import Any


def render_summary(report: dict[str, Any]) -> str:
    """Return a Markdown string with totals and a table of assets per level."""
    totals = report.get("totals", {})
    levels = report.get("levels", [])

    lines = []
    lines.append("# CBOM Compliance Summary")
    lines.append("")
    lines.append(
        f"Policy: {report.get('policyName') or 'Unknown'} | "
        f"Service: {report.get('complianceServiceName') or 'n/a'}"
    )
    lines.append("")
    lines.append(
        f"Assets: {totals.get('assets', 0)} | Findings: {totals.get('findings', 0)}"
        f" | Classified: {totals.get('counted', 0)}"
    )
    lines.append("")
    lines.append("| Level | Label | Color | Assets |")
    lines.append("| --- | --- | --- | --- |")

    for level in levels:
        lines.append(
            f"| {level.get('id', '')} | {level.get('label', '')} | "
            f"{level.get('colorHex', '')} | {level.get('count', 0)} |"
        )

    if not levels:
        lines.append("| n/a | No compliance levels | n/a | 0 |")

    return "\n".join(lines) + "\n"
