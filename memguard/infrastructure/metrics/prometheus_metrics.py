"""Prometheus implementation of the workload metrics surface."""

from __future__ import annotations

from typing import Optional, Set

from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram

from memguard.domain.entities.health import HealthStatus
from memguard.domain.ports.metrics import IWorkloadMetrics

METRIC_PREFIX = "memguard"


class PrometheusWorkloadMetrics(IWorkloadMetrics):
    """Counters, gauges and histograms exported on ``/metrics``.

    Each instance owns its registry so that several app instances (tests,
    reloads) never collide on metric names.
    """

    def __init__(
        self,
        registry: Optional[CollectorRegistry] = None,
        namespace: str = METRIC_PREFIX,
    ) -> None:
        self.registry = registry or CollectorRegistry()
        self._namespace = namespace
        self._dimensions: Set[str] = set()

        self.allocations_total = Counter(
            "memory_allocations_total",
            "Total number of memory allocations",
            namespace=namespace,
            registry=self.registry,
        )
        self.out_of_memory_total = Counter(
            "out_of_memory_total",
            "Total allocation failures observed by the workload",
            namespace=namespace,
            registry=self.registry,
        )
        self.assessment_failures_total = Counter(
            "assessment_failures_total",
            "Assessment cycles that raised an error",
            namespace=namespace,
            registry=self.registry,
        )
        self.current_allocated_mb = Gauge(
            "memory_current_allocated_mb",
            "Current allocated memory in MB",
            namespace=namespace,
            registry=self.registry,
        )
        self.resident_set_mb = Gauge(
            "process_resident_set_mb",
            "Process resident set in MB",
            namespace=namespace,
            registry=self.registry,
        )
        self.memory_pressure_percent = Gauge(
            "memory_pressure_percent",
            "Memory load as percentage of the high-load threshold",
            namespace=namespace,
            registry=self.registry,
        )
        self.container_utilization_percent = Gauge(
            "container_utilization_percent",
            "Resident memory as percentage of the estimated container limit",
            namespace=namespace,
            registry=self.registry,
        )
        self.iteration_number = Gauge(
            "app_iteration_number",
            "Current allocation loop iteration",
            namespace=namespace,
            registry=self.registry,
        )
        self.container_limit_mb = Gauge(
            "container_memory_limit_mb",
            "Estimated container memory limit in MB",
            namespace=namespace,
            registry=self.registry,
        )
        self.assessment_available = Gauge(
            "assessment_available",
            "1 when the last assessment cycle completed, 0 when it failed",
            namespace=namespace,
            registry=self.registry,
        )
        self.health_check_status = Gauge(
            "health_check_status",
            "Health check status (1=healthy, 0.5=degraded, 0=unhealthy)",
            ["check_name"],
            namespace=namespace,
            registry=self.registry,
        )
        self.health_check_duration = Histogram(
            "health_check_duration_seconds",
            "Health check duration",
            ["check_name"],
            namespace=namespace,
            registry=self.registry,
        )

    def record_allocation(self, allocated_mb: float) -> None:
        self.allocations_total.inc()
        self.current_allocated_mb.set(allocated_mb)

    def record_allocation_failure(self) -> None:
        self.out_of_memory_total.inc()
        self.current_allocated_mb.set(0)

    def set_iteration(self, iteration: int) -> None:
        self.iteration_number.set(iteration)

    def set_runtime_readings(
        self,
        resident_mb: float,
        pressure_pct: float,
        utilization_pct: float,
    ) -> None:
        self.resident_set_mb.set(resident_mb)
        self.memory_pressure_percent.set(pressure_pct)
        self.container_utilization_percent.set(utilization_pct)

    def set_container_limit(self, limit_mb: float) -> None:
        self.container_limit_mb.set(limit_mb)

    def record_dimension(
        self, name: str, status_score: float, duration_seconds: float
    ) -> None:
        self._dimensions.add(name)
        self.health_check_status.labels(check_name=name).set(status_score)
        self.health_check_duration.labels(check_name=name).observe(duration_seconds)

    def record_assessment_failure(self) -> None:
        """Mark the cycle unavailable; stale per-dimension statuses drop to Unhealthy."""
        self.assessment_failures_total.inc()
        self.assessment_available.set(0)
        for name in self._dimensions:
            self.health_check_status.labels(check_name=name).set(
                HealthStatus.UNHEALTHY.score
            )

    def set_assessment_available(self, available: bool) -> None:
        self.assessment_available.set(1 if available else 0)

    def sample(self, name: str, labels: Optional[dict] = None) -> Optional[float]:
        """Read one sample back from the registry (diagnostics and tests)."""
        return self.registry.get_sample_value(f"{self._namespace}_{name}", labels)
