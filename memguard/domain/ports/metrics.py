"""Domain port for the metrics surface."""

from __future__ import annotations

from typing import Protocol


class IWorkloadMetrics(Protocol):
    """Sink for the scalar series published by the workload and assessments.

    Every method performs a single scalar update, so concurrent readers never
    observe a partially updated value.
    """

    def record_allocation(self, allocated_mb: float) -> None: ...

    def record_allocation_failure(self) -> None: ...

    def set_iteration(self, iteration: int) -> None: ...

    def set_runtime_readings(
        self,
        resident_mb: float,
        pressure_pct: float,
        utilization_pct: float,
    ) -> None: ...

    def set_container_limit(self, limit_mb: float) -> None: ...

    def record_dimension(
        self, name: str, status_score: float, duration_seconds: float
    ) -> None: ...

    def record_assessment_failure(self) -> None:
        """Count a failed cycle and report every known dimension as Unhealthy."""
        ...

    def set_assessment_available(self, available: bool) -> None: ...
