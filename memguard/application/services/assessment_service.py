"""Runs the assessment engine once: snapshot, four dimensions, aggregate."""

from __future__ import annotations

from time import perf_counter
from typing import Dict, Sequence

from memguard.domain.entities.errors import AssessmentError
from memguard.domain.entities.health import AggregateReport, DimensionResult
from memguard.domain.entities.runtime import RuntimeSnapshot
from memguard.domain.ports.assessor import IDimensionAssessor
from memguard.domain.ports.runtime_probe import IRuntimeProbe
from memguard.domain.services.aggregator import aggregate
from memguard.domain.services.limit_estimator import LimitEstimator


class HealthAssessmentService:
    """Capture one snapshot and run every assessor against it."""

    def __init__(
        self,
        runtime_probe: IRuntimeProbe,
        limit_estimator: LimitEstimator,
        assessors: Sequence[IDimensionAssessor],
    ) -> None:
        self._runtime_probe = runtime_probe
        self._limit_estimator = limit_estimator
        self._assessors: Dict[str, IDimensionAssessor] = {
            assessor.name: assessor for assessor in assessors
        }

    @property
    def dimension_names(self) -> Sequence[str]:
        return tuple(self._assessors)

    def capture(self) -> RuntimeSnapshot:
        return self._runtime_probe.capture()

    async def assess_dimension(
        self, name: str, snapshot: RuntimeSnapshot | None = None
    ) -> DimensionResult:
        """Run one assessor and stamp its duration on the result."""
        assessor = self._assessors.get(name)
        if assessor is None:
            raise KeyError(f"Unknown health dimension: {name}")

        snapshot = snapshot or self.capture()
        start = perf_counter()
        try:
            result = await assessor.assess(snapshot)
        except Exception as exc:
            raise AssessmentError(name, exc) from exc
        return result.with_duration((perf_counter() - start) * 1000)

    async def assess(self) -> AggregateReport:
        """Run the full engine against a single snapshot."""
        snapshot = self.capture()
        results = {}
        for name in self._assessors:
            results[name] = await self.assess_dimension(name, snapshot)
        return aggregate(results, snapshot, self._limit_estimator.estimate())
