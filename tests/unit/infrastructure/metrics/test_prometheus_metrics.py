from __future__ import annotations

from prometheus_client import generate_latest

from memguard.infrastructure.metrics.prometheus_metrics import PrometheusWorkloadMetrics


def test_allocation_series() -> None:
    metrics = PrometheusWorkloadMetrics()

    metrics.record_allocation(10.0)
    metrics.record_allocation(20.0)
    metrics.set_iteration(2)

    assert metrics.sample("memory_allocations_total") == 2
    assert metrics.sample("memory_current_allocated_mb") == 20.0
    assert metrics.sample("app_iteration_number") == 2


def test_failure_zeroes_allocated_gauge() -> None:
    metrics = PrometheusWorkloadMetrics()
    metrics.record_allocation(30.0)

    metrics.record_allocation_failure()

    assert metrics.sample("out_of_memory_total") == 1
    assert metrics.sample("memory_current_allocated_mb") == 0


def test_dimension_series_are_labelled() -> None:
    metrics = PrometheusWorkloadMetrics()

    metrics.record_dimension("memory", 0.5, 0.002)

    assert metrics.sample("health_check_status", {"check_name": "memory"}) == 0.5
    assert (
        metrics.sample("health_check_duration_seconds_count", {"check_name": "memory"})
        == 1
    )


def test_assessment_availability() -> None:
    metrics = PrometheusWorkloadMetrics()

    metrics.set_assessment_available(True)
    assert metrics.sample("assessment_available") == 1

    metrics.record_assessment_failure()
    assert metrics.sample("assessment_available") == 0
    assert metrics.sample("assessment_failures_total") == 1


def test_runtime_readings_and_limit_are_exported() -> None:
    metrics = PrometheusWorkloadMetrics()
    metrics.set_runtime_readings(resident_mb=100.0, pressure_pct=50.0, utilization_pct=25.0)
    metrics.set_container_limit(1000.0)

    exposition = generate_latest(metrics.registry).decode()

    assert "memguard_process_resident_set_mb 100.0" in exposition
    assert "memguard_memory_pressure_percent 50.0" in exposition
    assert "memguard_container_utilization_percent 25.0" in exposition
    assert "memguard_container_memory_limit_mb 1000.0" in exposition


def test_instances_do_not_share_registries() -> None:
    first = PrometheusWorkloadMetrics()
    second = PrometheusWorkloadMetrics()

    first.record_allocation(1.0)

    assert second.sample("memory_allocations_total") == 0


def test_failed_assessment_marks_known_dimensions_unhealthy() -> None:
    metrics = PrometheusWorkloadMetrics()
    metrics.record_dimension("memory", 1.0, 0.001)
    metrics.record_dimension("gc", 0.5, 0.001)

    metrics.record_assessment_failure()

    assert metrics.sample("health_check_status", {"check_name": "memory"}) == 0
    assert metrics.sample("health_check_status", {"check_name": "gc"}) == 0
    assert metrics.sample("health_check_status", {"check_name": "container"}) is None
