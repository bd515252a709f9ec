"""stylecheck -- conformance checker for component-style CSS/SCSS."""

__version__ = "0.1.0"

from stylecheck.engine import DiagnosticReport, check, check_many  # noqa: E402
from stylecheck.model import CheckOptions, Diagnostic, RuleId, Severity  # noqa: E402

__all__ = [
    "__version__",
    "check",
    "check_many",
    "CheckOptions",
    "Diagnostic",
    "DiagnosticReport",
    "RuleId",
    "Severity",
]
