"""Asset (detection) access over CycloneDX CBOM documents."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

BOM_REF_KEY = "bom-ref"
CRYPTOGRAPHIC_ASSET_TYPE = "cryptographic-asset"


def bom_ref(asset: Any) -> str | None:
    """Return the ``bom-ref`` of an asset, or None when it has none."""
    if not isinstance(asset, Mapping):
        return None
    ref = asset.get(BOM_REF_KEY)
    return ref if isinstance(ref, str) else None


def detections(cbom: Any) -> list[Mapping[str, Any]]:
    """Return the cryptographic-asset components of a CBOM, in document order."""
    if not isinstance(cbom, Mapping):
        return []
    components = cbom.get("components")
    if not isinstance(components, list):
        return []
    return [
        component
        for component in components
        if isinstance(component, Mapping)
        and component.get("type") == CRYPTOGRAPHIC_ASSET_TYPE
    ]
