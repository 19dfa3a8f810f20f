"""User-visible error list entries."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorStatus(str, Enum):
    """Categories of errors surfaced to the user."""

    NO_CONNECTION = "NoConnection"
    INVALID_REPO = "InvalidRepo"
    SCAN_ERROR = "ScanError"
    JSON_PARSING = "JsonParsing"
    INVALID_CBOM = "InvalidCbom"
    IGNORED_COMPONENT = "IgnoredComponent"
    MULTI_UPLOAD = "MultiUpload"
    EMPTY_DATABASE = "EmptyDatabase"
    FALLBACK_LOCAL_COMPLIANCE_REPORT = "FallBackLocalComplianceReport"
    SCAN_WARNING = "ScanWarning"


@dataclass(frozen=True)
class ErrorEntry:
    """A ``{status, message}`` pair shown in the error list."""

    status: ErrorStatus
    message: str

    def __post_init__(self) -> None:
        if not isinstance(self.status, ErrorStatus):
            object.__setattr__(self, "status", ErrorStatus(self.status))

    def to_dict(self) -> dict[str, str]:
        return {"status": self.status.value, "message": self.message}
