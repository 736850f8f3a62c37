from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from memguard.application.models import ServiceInfo, WorkloadOptions
from memguard.application.services.allocation_loop import AllocationLoop
from memguard.application.services.assessment_loop import AssessmentLoop
from memguard.application.services.shutdown import ShutdownSignal
from memguard.application.use_cases.health_use_cases import (
    GetDimensionHealthUseCase,
    GetHealthReportUseCase,
    GetLivenessUseCase,
    GetReadinessUseCase,
    GetServiceIndexUseCase,
    GetWorkloadStatusUseCase,
    RequestShutdownUseCase,
    quick_status,
)
from memguard.domain.entities.health import (
    AggregateReport,
    DimensionResult,
    HealthStatus,
)
from memguard.domain.services.limit_estimator import LimitEstimator


class _StubAssessmentService:
    def __init__(self, status: HealthStatus = HealthStatus.HEALTHY) -> None:
        self.report = AggregateReport(
            status=status,
            dimensions={
                "memory": DimensionResult(
                    name="memory",
                    status=status,
                    metrics={"memory_pressure_percent": 42.0},
                    issues=("note",),
                    duration_ms=1.25,
                ),
            },
            issues=("note",),
        )

    async def assess(self) -> AggregateReport:
        return self.report

    async def assess_dimension(self, name: str) -> DimensionResult:
        return self.report.dimension(name)


@pytest.mark.parametrize(
    "pressure, utilization, expected",
    [
        (10, 10, HealthStatus.HEALTHY),
        (80, 85, HealthStatus.HEALTHY),
        (80.5, 10, HealthStatus.DEGRADED),
        (10, 85.5, HealthStatus.DEGRADED),
        (90.5, 10, HealthStatus.UNHEALTHY),
        (10, 95.5, HealthStatus.UNHEALTHY),
    ],
)
def test_quick_status_rules(pressure, utilization, expected) -> None:
    assert quick_status(pressure, utilization) is expected


@pytest.mark.asyncio
async def test_health_report_summary_and_detail() -> None:
    use_case = GetHealthReportUseCase(_StubAssessmentService(HealthStatus.DEGRADED))

    summary = await use_case.execute()
    detailed = await use_case.execute_detailed()

    assert summary.status is HealthStatus.DEGRADED
    assert summary.checks == {"memory": HealthStatus.DEGRADED}
    assert detailed.checks["memory"].metrics["memory_pressure_percent"] == 42.0
    assert detailed.issues == ["note"]


@pytest.mark.asyncio
async def test_dimension_use_case() -> None:
    use_case = GetDimensionHealthUseCase(_StubAssessmentService())
    dto = await use_case.execute("memory")

    assert dto.status is HealthStatus.HEALTHY
    assert dto.issues == ["note"]
    assert dto.duration_ms == 1.25


@pytest.mark.asyncio
async def test_liveness_is_always_healthy() -> None:
    dto = await GetLivenessUseCase().execute()
    assert dto.status is HealthStatus.HEALTHY


@pytest.mark.asyncio
async def test_readiness_follows_report_and_shutdown() -> None:
    shutdown = ShutdownSignal()
    use_case = GetReadinessUseCase(_StubAssessmentService(), shutdown)

    ready = await use_case.execute()
    assert ready.status is HealthStatus.HEALTHY
    assert ready.checks == {"memory": HealthStatus.HEALTHY}

    shutdown.request("test")
    draining = await use_case.execute()
    assert draining.status is HealthStatus.UNHEALTHY


@pytest.mark.asyncio
async def test_workload_status_reads_ledger(
    probe_factory, make_snapshot, recording_metrics
) -> None:
    probe = probe_factory(
        make_snapshot(resident_mb=880, memory_load_mb=300, threshold_mb=900)
    )
    estimator = LimitEstimator(probe)
    shutdown = ShutdownSignal()
    allocation_loop = AllocationLoop(
        probe,
        estimator,
        recording_metrics,
        shutdown,
        options=WorkloadOptions(allocation_size_bytes=4096, interval_seconds=0),
        allocator=bytearray,
        collect=lambda: 0,
    )
    await allocation_loop.run_iteration()
    assessment_loop = AssessmentLoop(_StubAssessmentService(), recording_metrics, shutdown)

    dto = await GetWorkloadStatusUseCase(
        allocation_loop, assessment_loop, probe, estimator
    ).execute()

    assert dto.iteration == 1
    assert dto.buffers == 1
    assert dto.state == "running"
    assert dto.container_limit_mb == pytest.approx(1000, abs=0.1)
    assert dto.container_utilization_percent == pytest.approx(88.0)
    assert dto.status is HealthStatus.DEGRADED
    assert dto.last_assessment is None


@pytest.mark.asyncio
async def test_request_shutdown_is_idempotent() -> None:
    shutdown = ShutdownSignal()
    use_case = RequestShutdownUseCase(shutdown)

    first = await use_case.execute()
    second = await use_case.execute("again")

    assert shutdown.is_requested
    assert first.already_requested is False
    assert second.already_requested is True
    assert second.reason == "pre-stop hook"


@pytest.mark.asyncio
async def test_service_index_reports_uptime() -> None:
    info = ServiceInfo(
        title="memguard",
        description="desc",
        version="1.2.3",
        environment="testing",
        git_commit="abc1234",
        build_time="2026-01-01T00:00:00Z",
    )
    started_at = datetime.now(timezone.utc) - timedelta(seconds=120)

    dto = await GetServiceIndexUseCase(info).execute(started_at)

    assert dto.name == "memguard"
    assert abs(dto.uptime_seconds - 120) < 2
    assert dto.endpoints["gc"] == "/health/gc"
    assert dto.endpoints["metrics"] == "/metrics"
