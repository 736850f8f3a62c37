"""Domain services package."""

from .aggregator import aggregate, application_check, evaluate_overrides
from .assessors import (
    COLLECTOR,
    CONTAINER,
    DIMENSION_ORDER,
    MEMORY,
    PERFORMANCE,
    CollectorAssessor,
    ContainerAssessor,
    MemoryAssessor,
    PerformanceAssessor,
)
from .limit_estimator import LimitEstimator, limit_from_threshold

__all__ = [
    "COLLECTOR",
    "CONTAINER",
    "DIMENSION_ORDER",
    "MEMORY",
    "PERFORMANCE",
    "CollectorAssessor",
    "ContainerAssessor",
    "LimitEstimator",
    "MemoryAssessor",
    "PerformanceAssessor",
    "aggregate",
    "application_check",
    "evaluate_overrides",
    "limit_from_threshold",
]
