"""Domain entities package."""

from .errors import (
    AssessmentError,
    DomainError,
    LimitDetectionError,
    RuntimeProbeError,
)
from .health import AggregateReport, ApplicationCheck, DimensionResult, HealthStatus
from .runtime import EstimatedLimit, RuntimeSnapshot, to_mb

__all__ = [
    "AggregateReport",
    "ApplicationCheck",
    "AssessmentError",
    "DimensionResult",
    "DomainError",
    "EstimatedLimit",
    "HealthStatus",
    "LimitDetectionError",
    "RuntimeProbeError",
    "RuntimeSnapshot",
    "to_mb",
]
