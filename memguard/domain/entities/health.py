"""
Health domain entities.

Value objects describing the outcome of one assessment: the tri-state
status, a per-dimension result and the aggregate report exposed across the
service boundary.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple


class HealthStatus(str, Enum):
    """Severity-ordered health status: Healthy < Degraded < Unhealthy."""

    HEALTHY = "Healthy"
    DEGRADED = "Degraded"
    UNHEALTHY = "Unhealthy"

    @property
    def severity(self) -> int:
        return _SEVERITY[self]

    @property
    def score(self) -> float:
        """Scalar published to the metrics surface (1, 0.5, 0)."""
        return _SCORE[self]

    @property
    def is_available(self) -> bool:
        """Healthy and Degraded are served as success, Unhealthy is not."""
        return self is not HealthStatus.UNHEALTHY

    @classmethod
    def worst(cls, statuses: Iterable["HealthStatus"]) -> "HealthStatus":
        """Return the most severe status, or Healthy for an empty input."""
        result = cls.HEALTHY
        for status in statuses:
            if status.severity > result.severity:
                result = status
        return result


_SEVERITY = {
    HealthStatus.HEALTHY: 0,
    HealthStatus.DEGRADED: 1,
    HealthStatus.UNHEALTHY: 2,
}

_SCORE = {
    HealthStatus.HEALTHY: 1.0,
    HealthStatus.DEGRADED: 0.5,
    HealthStatus.UNHEALTHY: 0.0,
}


def _freeze(mapping: Optional[Mapping[str, Any]]) -> Mapping[str, Any]:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True, slots=True)
class DimensionResult:
    """Outcome of one dimension assessor for one snapshot."""

    name: str
    status: HealthStatus
    metrics: Mapping[str, Any] = field(default_factory=dict)
    issues: Tuple[str, ...] = ()
    thresholds: Mapping[str, float] = field(default_factory=dict)
    duration_ms: Optional[float] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "metrics", _freeze(self.metrics))
        object.__setattr__(self, "thresholds", _freeze(self.thresholds))
        object.__setattr__(self, "issues", tuple(self.issues))

    def with_duration(self, duration_ms: float) -> "DimensionResult":
        return DimensionResult(
            name=self.name,
            status=self.status,
            metrics=self.metrics,
            issues=self.issues,
            thresholds=self.thresholds,
            duration_ms=duration_ms,
        )


@dataclass(frozen=True, slots=True)
class ApplicationCheck:
    """Liveness entry attached to every aggregate report."""

    status: HealthStatus
    pid: int
    uptime_seconds: float
    runtime_version: str


@dataclass(frozen=True, slots=True)
class AggregateReport:
    """Aggregated health for one assessment cycle."""

    status: HealthStatus
    dimensions: Mapping[str, DimensionResult]
    issues: Tuple[str, ...] = ()
    overrides: Tuple[str, ...] = ()
    metrics: Mapping[str, Any] = field(default_factory=dict)
    application: Optional[ApplicationCheck] = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        object.__setattr__(self, "dimensions", _freeze(self.dimensions))
        object.__setattr__(self, "metrics", _freeze(self.metrics))
        object.__setattr__(self, "issues", tuple(self.issues))
        object.__setattr__(self, "overrides", tuple(self.overrides))

    def dimension(self, name: str) -> DimensionResult:
        return self.dimensions[name]

    def dimension_statuses(self) -> Dict[str, HealthStatus]:
        return {name: result.status for name, result in self.dimensions.items()}
