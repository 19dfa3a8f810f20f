"""Wire the compliance client, validator and result store together."""

from __future__ import annotations

import logging
from typing import Any

from . import aggregation
from .assets import detections
from .client import ComplianceClient
from .config import Settings
from .errors import StructuralError, TransportError
from .models import ComplianceCheckResult, ErrorStatus
from .store import ResultStore
from .validation import parse_result

logger = logging.getLogger(__name__)

POLICY_LOAD_FAILED = "Could not load compliance policies"
RECHECK_FAILED = "Failed to recheck compliance with new policy."


class ComplianceSession:
    """Shared state of one viewer session: the scanned CBOM plus its compliance result."""

    def __init__(
        self,
        client: ComplianceClient | None = None,
        store: ResultStore | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.settings = settings or (client.settings if client else Settings())
        self.client = client or ComplianceClient(self.settings)
        self.store = store or ResultStore(self.settings.default_policy)
        self.cbom: Any = None

    @property
    def result(self) -> ComplianceCheckResult | None:
        return self.store.result

    @property
    def assets(self) -> list[Any]:
        return detections(self.cbom)

    def start_again(self) -> None:
        self.cbom = None
        self.store.clear()

    def reload_policy_identifiers(self) -> bool:
        """Refresh the available policies; report a connection error on failure."""
        try:
            policies = self.client.list_policies()
        except TransportError as exc:
            logger.error("Error loading compliance policies: %s", exc)
            self.store.add_error(ErrorStatus.NO_CONNECTION, POLICY_LOAD_FAILED)
            return False
        self.store.set_available_policies(policies)
        return True

    def begin_recheck(self) -> int:
        return self.store.begin_request()

    def apply_response(self, token: int, document: Any) -> bool:
        """Validate ``document`` and make it the active result.

        Responses to superseded requests are dropped. An invalid document
        leaves the previous result active and is reported as a scan error.
        """
        if not self.store.is_current(token):
            logger.info("Discarding stale compliance response for request %d", token)
            return False
        try:
            result = parse_result(document)
        except StructuralError as exc:
            first = exc.report.first if exc.report is not None else None
            logger.error("Rejected compliance result: %s", exc)
            self.store.add_error(
                ErrorStatus.SCAN_ERROR,
                f"Invalid compliance result: {first}" if first else "Invalid compliance result",
            )
            return False
        self.store.replace(result)
        return True

    def recheck_compliance(self, cbom: Any = None) -> bool:
        """Run a compliance check of the current CBOM against the selected policy."""
        if cbom is not None:
            self.cbom = cbom
        policy = self.store.selected_policy_identifier
        if not self.cbom or not policy:
            return False

        token = self.begin_recheck()
        try:
            document = self.client.check_compliance(self.cbom, policy)
        except TransportError as exc:
            logger.error("Failed to recheck compliance: %s", exc)
            self.store.add_error(ErrorStatus.SCAN_ERROR, RECHECK_FAILED)
            return False
        return self.apply_response(token, document)

    # ---- read-through helpers ------------------------------------------------------------

    def is_loading(self) -> bool:
        return aggregation.is_result_loading(self.result)

    def has_valid_result(self) -> bool:
        return aggregation.has_valid_result(self.result)

    def compliance_level(self, asset: Any) -> int | float | bool:
        return aggregation.level_for_asset(self.result, asset)

    def compliance_color(self, asset: Any) -> str:
        return aggregation.color_for_asset(self.result, asset)

    def compliance_label(self, asset: Any) -> str:
        return aggregation.label_for_asset(self.result, asset)

    def compliance_icon(self, asset: Any) -> str:
        return aggregation.icon_for_asset(self.result, asset)

    def compliance_description(self, asset: Any) -> str:
        return aggregation.description_for_asset(self.result, asset)

    def findings_with_message(self, asset: Any) -> list:
        return aggregation.findings_with_message(self.result, asset)

    def repartition(self) -> dict[int | float, int]:
        return aggregation.repartition(self.result, self.assets)

    def color_scale(self) -> dict[str, str]:
        return aggregation.color_scale(self.result, self.assets)

    def policy_name(self) -> str:
        return self.store.policy_name()

    def service_name(self) -> str:
        return aggregation.compliance_service_name(self.result)

    def is_using_local_service(self) -> bool:
        return aggregation.is_using_local_compliance_service(
            self.result, self.settings.local_service_name
        )
