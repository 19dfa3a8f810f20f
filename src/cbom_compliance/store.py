"""Holder of the active compliance snapshot and its surrounding UI state."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from .config import DEFAULT_POLICY
from .models import ComplianceCheckResult, ErrorEntry, ErrorStatus, PolicyDescriptor

logger = logging.getLogger(__name__)

Listener = Callable[[ComplianceCheckResult | None], None]


class ResultStore:
    """Single owner of the "current result" reference.

    The snapshot is only ever swapped wholesale through :meth:`replace` or
    :meth:`clear`; subscribers are notified once per swap. Request tokens
    from :meth:`begin_request` let callers drop responses that were
    overtaken by a newer request.
    """

    def __init__(self, selected_policy_identifier: str = DEFAULT_POLICY) -> None:
        self._result: ComplianceCheckResult | None = None
        self._listeners: list[Listener] = []
        self._errors: list[ErrorEntry] = []
        self._policies: tuple[PolicyDescriptor, ...] = ()
        self._request_seq = 0
        self.selected_policy_identifier = selected_policy_identifier

    # ---- snapshot ------------------------------------------------------------------------

    @property
    def result(self) -> ComplianceCheckResult | None:
        return self._result

    def replace(self, result: ComplianceCheckResult) -> None:
        if not isinstance(result, ComplianceCheckResult):
            raise TypeError("Only ComplianceCheckResult snapshots can be installed")
        self._swap(result)

    def clear(self) -> None:
        self._swap(None)

    def _swap(self, result: ComplianceCheckResult | None) -> None:
        if result is None and self._result is None:
            return
        self._result = result
        for listener in list(self._listeners):
            listener(result)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` for snapshot swaps and return an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ---- stale response protection -------------------------------------------------------

    def begin_request(self) -> int:
        self._request_seq += 1
        return self._request_seq

    def is_current(self, token: int) -> bool:
        return token == self._request_seq

    # ---- error list ----------------------------------------------------------------------

    @property
    def errors(self) -> tuple[ErrorEntry, ...]:
        return tuple(self._errors)

    def add_error(self, status: ErrorStatus | str, message: str) -> ErrorEntry:
        entry = ErrorEntry(status=status, message=message)
        self._errors.append(entry)
        return entry

    def close_error(self, index: int) -> None:
        if not 0 <= index < len(self._errors):
            raise IndexError(f"No error at index {index}")
        del self._errors[index]

    # ---- policies ------------------------------------------------------------------------

    @property
    def available_policies(self) -> tuple[PolicyDescriptor, ...]:
        return self._policies

    def set_available_policies(self, policies: Iterable[PolicyDescriptor]) -> None:
        """Install the policy listing, selecting the first policy if the current one is gone."""
        self._policies = tuple(policies)
        ids = {policy.id for policy in self._policies}
        if self.selected_policy_identifier not in ids and self._policies:
            logger.info(
                "Selected policy %r not offered by backend, switching to %r",
                self.selected_policy_identifier,
                self._policies[0].id,
            )
            self.selected_policy_identifier = self._policies[0].id

    def selected_policy(self) -> PolicyDescriptor | None:
        for policy in self._policies:
            if policy.id == self.selected_policy_identifier:
                return policy
        return None

    def policy_name(self) -> str:
        selected = self.selected_policy()
        return selected.display_name if selected else "Unknown"
