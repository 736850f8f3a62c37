"""
Periodic Assessment Loop - Application Service

Runs the engine on a fixed cadence, independent of the allocation loop, and
publishes per-dimension status and duration. A failed cycle is logged and
counted, then the loop backs off for one longer interval; it never exits
except on shutdown.
"""

from __future__ import annotations

from typing import Optional

from memguard.application.services.assessment_service import HealthAssessmentService
from memguard.application.services.shutdown import ShutdownSignal
from memguard.domain.entities.health import AggregateReport
from memguard.domain.ports.metrics import IWorkloadMetrics
from memguard.shared import get_logger

logger = get_logger(__name__)


class AssessmentLoop:
    def __init__(
        self,
        assessment_service: HealthAssessmentService,
        metrics: IWorkloadMetrics,
        shutdown: ShutdownSignal,
        interval_seconds: float = 10.0,
        backoff_seconds: float = 30.0,
    ) -> None:
        self._assessment_service = assessment_service
        self._metrics = metrics
        self._shutdown = shutdown
        self._interval_seconds = interval_seconds
        self._backoff_seconds = backoff_seconds
        self._latest: Optional[AggregateReport] = None
        self._last_error: Optional[str] = None
        self.cycles = 0
        self.failures = 0

    @property
    def latest_report(self) -> Optional[AggregateReport]:
        """Report of the last successful cycle, None if the last cycle failed."""
        return self._latest

    @property
    def last_error(self) -> Optional[str]:
        return self._last_error

    async def run_cycle(self) -> AggregateReport:
        report = await self._assessment_service.assess()

        for name, result in report.dimensions.items():
            self._metrics.record_dimension(
                name,
                result.status.score,
                (result.duration_ms or 0.0) / 1000,
            )
        self._metrics.set_assessment_available(True)

        self._latest = report
        self._last_error = None
        self.cycles += 1
        logger.debug(
            "assessment.cycle.completed",
            status=report.status.value,
            issues=len(report.issues),
            overrides=list(report.overrides),
        )
        return report

    async def run_once(self) -> float:
        """Run one guarded cycle and return the delay before the next one."""
        try:
            await self.run_cycle()
        except Exception as exc:
            self.failures += 1
            self._latest = None
            self._last_error = str(exc)
            self._metrics.record_assessment_failure()
            logger.error(
                "assessment.cycle.failed",
                error=str(exc),
                backoff_seconds=self._backoff_seconds,
                exc_info=exc,
            )
            return self._backoff_seconds
        return self._interval_seconds

    async def run(self) -> None:
        logger.info(
            "assessment.loop.started",
            interval_seconds=self._interval_seconds,
            backoff_seconds=self._backoff_seconds,
        )
        while not self._shutdown.is_requested:
            delay = await self.run_once()
            if await self._shutdown.wait(delay):
                break
        logger.info("assessment.loop.stopped", cycles=self.cycles, failures=self.failures)
