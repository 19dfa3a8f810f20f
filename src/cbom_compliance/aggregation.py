"""Per-asset compliance lookups and level repartition.

Every function here is a pure function of the snapshot and assets it is
given. ``result`` is the active :class:`ComplianceCheckResult` or None when no
result has been loaded yet.
"""

from __future__ import annotations

import logging
import warnings
from collections.abc import Iterable, Mapping
from typing import Any, Literal

from .assets import bom_ref
from .errors import ConsistencyWarning
from .models import (
    COMPLIANCE_ICON_MAP,
    AssessmentLevel,
    ComplianceCheckResult,
    ComplianceIcon,
    ComplianceLevel,
    Finding,
)

logger = logging.getLogger(__name__)

DEFAULT_COLOR = "#999"
DEFAULT_LABEL = "Unknown"
DEFAULT_DESCRIPTION = "No description"
DEFAULT_GLYPH = COMPLIANCE_ICON_MAP[ComplianceIcon.UNKNOWN]

Asset = Mapping[str, Any]


def is_result_loading(result: ComplianceCheckResult | None) -> bool:
    """True while no snapshot is active (distinct from a loaded invalid one)."""
    return result is None


def has_valid_result(result: ComplianceCheckResult | None) -> bool:
    """Cheap gate used before reading a snapshot; not a full validation."""
    return (
        result is not None
        and result.error is False
        and isinstance(result.assessment_level, Mapping)
    )


def available_levels(result: ComplianceCheckResult | None) -> tuple[ComplianceLevel, ...]:
    return result.compliance_levels if has_valid_result(result) else ()


def available_assessment_levels(
    result: ComplianceCheckResult | None,
) -> tuple[AssessmentLevel, ...]:
    if not has_valid_result(result) or not isinstance(result.assessment_levels, tuple):
        return ()
    return result.assessment_levels


def compliance_service_name(result: ComplianceCheckResult | None) -> str:
    return result.compliance_service_name if has_valid_result(result) else ""


def is_using_local_compliance_service(
    result: ComplianceCheckResult | None, local_service_name: str
) -> bool:
    """True when the result was produced by the local fallback service."""
    return compliance_service_name(result) == local_service_name


def findings_for_asset(result: ComplianceCheckResult | None, asset: Asset | None) -> list[Finding]:
    ref = bom_ref(asset)
    if result is None or ref is None:
        return []
    return [finding for finding in result.findings if finding.bom_ref == ref]


def findings_with_message(
    result: ComplianceCheckResult | None, asset: Asset | None
) -> list[Finding]:
    """Findings for ``asset`` that carry an explanatory message."""
    if not has_valid_result(result) or asset is None:
        return []
    return [finding for finding in findings_for_asset(result, asset) if finding.message]


def level_for_asset(
    result: ComplianceCheckResult | None, asset: Asset | None
) -> int | float | Literal[False]:
    """Return the compliance level id that applies to ``asset``.

    The lowest level id among the asset's findings wins; an asset without
    findings gets the result's default level. Returns False when there is no
    valid result to read from.
    """
    if not has_valid_result(result):
        return False
    level_ids = [finding.level_id for finding in findings_for_asset(result, asset)]
    if level_ids:
        return min(level_ids)
    return result.default_compliance_level


def level_object(
    result: ComplianceCheckResult | None, level_id: int | float | bool
) -> ComplianceLevel | None:
    """Look up the compliance level with ``level_id``.

    Returns None when no level matches, and also when several do; duplicate
    ids are reported with a :class:`ConsistencyWarning` instead of picking one.
    """
    if isinstance(level_id, bool):
        matches: list[ComplianceLevel] = []
    else:
        matches = [level for level in available_levels(result) if level.id == level_id]

    if len(matches) == 1:
        return matches[0]

    if matches:
        message = f"Duplicate compliance levels found for compliance ID {level_id}"
        logger.error(message)
        warnings.warn(message, ConsistencyWarning, stacklevel=2)
    else:
        logger.error("No compliance level found for asset with compliance ID %s", level_id)
    return None


def _level_object_for_asset(
    result: ComplianceCheckResult | None, asset: Asset | None
) -> ComplianceLevel | None:
    return level_object(result, level_for_asset(result, asset))


def color_for_asset(result: ComplianceCheckResult | None, asset: Asset | None) -> str:
    level = _level_object_for_asset(result, asset)
    return (level.color_hex if level else None) or DEFAULT_COLOR


def label_for_asset(result: ComplianceCheckResult | None, asset: Asset | None) -> str:
    level = _level_object_for_asset(result, asset)
    return (level.label if level else None) or DEFAULT_LABEL


def icon_for_asset(result: ComplianceCheckResult | None, asset: Asset | None) -> str:
    """Return the glyph name for the asset's level icon."""
    level = _level_object_for_asset(result, asset)
    return level.glyph if level else DEFAULT_GLYPH


def description_for_asset(result: ComplianceCheckResult | None, asset: Asset | None) -> str:
    level = _level_object_for_asset(result, asset)
    if level is None:
        return DEFAULT_DESCRIPTION
    return level.description or level.label or DEFAULT_DESCRIPTION


def repartition(
    result: ComplianceCheckResult | None, assets: Iterable[Asset]
) -> dict[int | float, int]:
    """Count assets per compliance level id.

    Every known level starts at zero. Assets whose level is not a known id
    are left out of the counts.
    """
    counts: dict[int | float, int] = {level.id: 0 for level in available_levels(result)}
    for asset in assets:
        level_id = level_for_asset(result, asset)
        if isinstance(level_id, bool):
            continue
        if level_id in counts:
            counts[level_id] += 1
    return counts


def color_scale(result: ComplianceCheckResult | None, assets: Iterable[Asset]) -> dict[str, str]:
    """Map level labels to their colors for every level in the repartition.

    Levels sharing a label collapse into one entry; the level with the
    highest id wins.
    """
    levels = {level.id: level for level in available_levels(result)}
    scale: dict[str, str] = {}
    for level_id in sorted(repartition(result, assets)):
        level = levels[level_id]
        scale[level.label] = level.color_hex
    return scale
