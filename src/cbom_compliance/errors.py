"""Error taxonomy for validation, transport and lookup failures."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from .validation import ValidationReport


class ComplianceError(RuntimeError):
    """Base error for the compliance package."""


class StructuralError(ComplianceError, ValueError):
    """Raised when a result document fails structural validation."""

    def __init__(self, message: str, report: ValidationReport | None = None) -> None:
        super().__init__(message)
        self.report = report


class ReferentialError(StructuralError):
    """Raised when a finding references a compliance level that does not exist."""


class TransportError(ComplianceError):
    """Raised when the compliance backend cannot be reached or answers with an error."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ConfigError(ComplianceError):
    """Raised when the configuration file cannot be loaded or is invalid."""


class ConsistencyWarning(UserWarning):
    """Emitted when a lookup meets duplicate level ids despite validation."""
