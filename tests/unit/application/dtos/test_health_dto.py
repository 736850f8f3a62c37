from __future__ import annotations

from memguard.application.dtos.health_dto import (
    DimensionHealthDTO,
    HealthReportDTO,
    HealthSummaryDTO,
)
from memguard.domain.entities.health import (
    AggregateReport,
    ApplicationCheck,
    DimensionResult,
    HealthStatus,
)


def _report() -> AggregateReport:
    return AggregateReport(
        status=HealthStatus.UNHEALTHY,
        dimensions={
            "memory": DimensionResult(
                name="memory",
                status=HealthStatus.HEALTHY,
                metrics={"working_set_mb": 12.5},
                thresholds={"memory_pressure_critical": 90.0},
                duration_ms=0.123456,
            ),
            "container": DimensionResult(
                name="container",
                status=HealthStatus.UNHEALTHY,
                issues=("Critical: approaching container memory limit - eviction risk",),
            ),
        },
        issues=("Critical: approaching container memory limit - eviction risk",),
        overrides=("container_limit",),
        metrics={"uptime_seconds": 10.0},
        application=ApplicationCheck(
            status=HealthStatus.HEALTHY,
            pid=1,
            uptime_seconds=10.04,
            runtime_version="3.12.1",
        ),
    )


def test_dimension_dto_rounds_duration() -> None:
    dto = DimensionHealthDTO.from_domain(_report().dimension("memory"))
    assert dto.duration_ms == 0.123
    assert dto.thresholds == {"memory_pressure_critical": 90.0}


def test_summary_serializes_status_names() -> None:
    payload = HealthSummaryDTO.from_domain(_report()).model_dump(mode="json")

    assert payload["status"] == "Unhealthy"
    assert payload["checks"] == {"memory": "Healthy", "container": "Unhealthy"}
    assert payload["overrides"] == ["container_limit"]


def test_detailed_report_includes_application() -> None:
    dto = HealthReportDTO.from_domain(_report())

    assert dto.application is not None
    assert dto.application.uptime_seconds == 10.0
    assert dto.checks["container"].issues == [
        "Critical: approaching container memory limit - eviction risk"
    ]
    assert dto.metrics == {"uptime_seconds": 10.0}
