"""Engine: single-file and batch checking plus the diagnostic aggregator."""

from stylecheck.engine.aggregator import DiagnosticReport, aggregate
from stylecheck.engine.engine import SourceInput, check, check_many

__all__ = [
    "check",
    "check_many",
    "SourceInput",
    "DiagnosticReport",
    "aggregate",
]
