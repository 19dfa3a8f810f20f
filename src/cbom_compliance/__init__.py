"""cbom-compliance core package.

Validation and aggregation of compliance-check results for cryptography
bills of materials, callable from a viewer front end or the bundled CLIs.
"""

from . import aggregation
from .errors import (
    ComplianceError,
    ConfigError,
    ConsistencyWarning,
    ReferentialError,
    StructuralError,
    TransportError,
)
from .validation import ValidationReport, Violation, check_valid_compliance_results, validate

__all__ = [
    "ComplianceError",
    "ConfigError",
    "ConsistencyWarning",
    "ReferentialError",
    "StructuralError",
    "TransportError",
    "ValidationReport",
    "Violation",
    "aggregation",
    "check_valid_compliance_results",
    "validate",
]
