"""Use cases behind the health, probe, status and shutdown endpoints."""

from datetime import datetime, timezone
from typing import Optional

from memguard.application.dtos.health_dto import (
    DimensionHealthDTO,
    HealthReportDTO,
    HealthSummaryDTO,
    ProbeResponseDTO,
    ServiceIndexDTO,
    ShutdownResponseDTO,
    WorkloadStatusDTO,
)
from memguard.application.models import ServiceInfo
from memguard.application.services.allocation_loop import AllocationLoop
from memguard.application.services.assessment_loop import AssessmentLoop
from memguard.application.services.assessment_service import HealthAssessmentService
from memguard.application.services.memory_report import container_utilization_pct
from memguard.application.services.shutdown import ShutdownSignal
from memguard.domain.entities.health import HealthStatus
from memguard.domain.ports.runtime_probe import IRuntimeProbe
from memguard.domain.services.limit_estimator import LimitEstimator

QUICK_PRESSURE_UNHEALTHY_PCT = 90.0
QUICK_PRESSURE_DEGRADED_PCT = 80.0
QUICK_UTILIZATION_UNHEALTHY_PCT = 95.0
QUICK_UTILIZATION_DEGRADED_PCT = 85.0

ENDPOINTS = {
    "health": "/health",
    "detailed": "/health/detailed",
    "liveness": "/health/live",
    "readiness": "/health/ready",
    "memory": "/health/memory",
    "gc": "/health/gc",
    "container": "/health/container",
    "performance": "/health/performance",
    "shutdown": "/health/shutdown",
    "status": "/status",
    "metrics": "/metrics",
}


def quick_status(pressure_pct: float, utilization_pct: float) -> HealthStatus:
    if (
        pressure_pct > QUICK_PRESSURE_UNHEALTHY_PCT
        or utilization_pct > QUICK_UTILIZATION_UNHEALTHY_PCT
    ):
        return HealthStatus.UNHEALTHY
    if (
        pressure_pct > QUICK_PRESSURE_DEGRADED_PCT
        or utilization_pct > QUICK_UTILIZATION_DEGRADED_PCT
    ):
        return HealthStatus.DEGRADED
    return HealthStatus.HEALTHY


class GetHealthReportUseCase:
    """Run a fresh assessment and return the summary or the detailed report."""

    def __init__(self, assessment_service: HealthAssessmentService) -> None:
        self._assessment_service = assessment_service

    async def execute(self) -> HealthSummaryDTO:
        report = await self._assessment_service.assess()
        return HealthSummaryDTO.from_domain(report)

    async def execute_detailed(self) -> HealthReportDTO:
        report = await self._assessment_service.assess()
        return HealthReportDTO.from_domain(report)


class GetDimensionHealthUseCase:
    """Assess a single dimension against a fresh snapshot."""

    def __init__(self, assessment_service: HealthAssessmentService) -> None:
        self._assessment_service = assessment_service

    async def execute(self, name: str) -> DimensionHealthDTO:
        result = await self._assessment_service.assess_dimension(name)
        return DimensionHealthDTO.from_domain(result)


class GetLivenessUseCase:
    """The process answered, which is all liveness asks."""

    async def execute(self) -> ProbeResponseDTO:
        return ProbeResponseDTO(
            status=HealthStatus.HEALTHY,
            timestamp=datetime.now(timezone.utc),
        )


class GetReadinessUseCase:
    """Readiness gated on the four assessment dimensions."""

    def __init__(
        self,
        assessment_service: HealthAssessmentService,
        shutdown: ShutdownSignal,
    ) -> None:
        self._assessment_service = assessment_service
        self._shutdown = shutdown

    async def execute(self) -> ProbeResponseDTO:
        report = await self._assessment_service.assess()
        status = report.status
        # A draining instance must stop receiving traffic.
        if self._shutdown.is_requested:
            status = HealthStatus.UNHEALTHY
        return ProbeResponseDTO(
            status=status,
            timestamp=report.timestamp,
            checks=report.dimension_statuses(),
        )


class GetWorkloadStatusUseCase:
    """Quick status from the allocation ledger and live readings."""

    def __init__(
        self,
        allocation_loop: AllocationLoop,
        assessment_loop: AssessmentLoop,
        runtime_probe: IRuntimeProbe,
        limit_estimator: LimitEstimator,
    ) -> None:
        self._allocation_loop = allocation_loop
        self._assessment_loop = assessment_loop
        self._runtime_probe = runtime_probe
        self._limit_estimator = limit_estimator

    async def execute(self) -> WorkloadStatusDTO:
        snapshot = self._runtime_probe.capture()
        limit = self._limit_estimator.estimate()
        ledger = self._allocation_loop.ledger

        pressure = snapshot.memory_pressure_pct
        utilization = container_utilization_pct(snapshot, limit)
        latest = self._assessment_loop.latest_report

        return WorkloadStatusDTO(
            timestamp=datetime.now(timezone.utc),
            status=quick_status(pressure, utilization),
            state=self._allocation_loop.state.value,
            iteration=ledger.iteration,
            allocated_mb=round(ledger.allocated_mb, 2),
            buffers=len(ledger),
            failures=ledger.failures,
            working_set_mb=round(snapshot.resident_mb, 2),
            memory_pressure_percent=round(pressure, 2),
            container_utilization_percent=round(utilization, 2),
            container_limit_mb=round(limit.limit_mb, 1),
            limit_detected=limit.limit_detected,
            uptime_seconds=round(snapshot.uptime_seconds, 1),
            last_assessment=latest.status if latest else None,
            last_assessment_error=self._assessment_loop.last_error,
        )


class RequestShutdownUseCase:
    """Pre-stop hook: ask both loops to drain."""

    def __init__(self, shutdown: ShutdownSignal) -> None:
        self._shutdown = shutdown

    async def execute(self, reason: str = "pre-stop hook") -> ShutdownResponseDTO:
        accepted = self._shutdown.request(reason)
        return ShutdownResponseDTO(
            status="accepted",
            reason=self._shutdown.reason,
            already_requested=not accepted,
            timestamp=datetime.now(timezone.utc),
        )


class GetServiceIndexUseCase:
    """Service metadata plus the list of endpoints."""

    def __init__(self, service_info: ServiceInfo) -> None:
        self._info = service_info

    async def execute(self, started_at: Optional[datetime]) -> ServiceIndexDTO:
        now = datetime.now(timezone.utc)
        started = started_at or now

        return ServiceIndexDTO(
            name=self._info.title,
            description=self._info.description,
            version=self._info.version,
            environment=self._info.environment,
            git_commit=self._info.git_commit,
            build_time=self._info.build_time,
            started_at=started,
            uptime_seconds=max(0.0, (now - started).total_seconds()),
            endpoints=dict(ENDPOINTS),
        )
