"""
Limit Estimator - Domain Service

Infers the container memory ceiling from the runtime's high-load threshold,
which the runtime places at 90% of the memory it can see. The estimate is
computed once and then treated as fixed infrastructure metadata: it is not
refreshed if the container is resized while the process runs.
"""

from __future__ import annotations

import math
from typing import Optional

from memguard.domain.entities.errors import LimitDetectionError
from memguard.domain.entities.runtime import EstimatedLimit, to_mb
from memguard.domain.ports.runtime_probe import IRuntimeProbe
from memguard.shared import DEFAULT_FALLBACK_LIMIT_MB, get_logger

logger = get_logger(__name__)


def limit_from_threshold(threshold_bytes: float) -> EstimatedLimit:
    """Derive the limit from a raw threshold, or raise LimitDetectionError."""
    if threshold_bytes is None or not math.isfinite(threshold_bytes):
        raise LimitDetectionError("threshold is not a finite number")
    if threshold_bytes <= 0:
        raise LimitDetectionError(
            "threshold is not positive", {"threshold_bytes": threshold_bytes}
        )
    return EstimatedLimit.from_threshold_mb(to_mb(threshold_bytes))


class LimitEstimator:
    """Write-once estimator for the effective memory ceiling."""

    def __init__(
        self,
        runtime_probe: IRuntimeProbe,
        fallback_limit_mb: float = DEFAULT_FALLBACK_LIMIT_MB,
    ) -> None:
        self._runtime_probe = runtime_probe
        self._fallback_limit_mb = fallback_limit_mb
        self._limit: Optional[EstimatedLimit] = None

    @property
    def is_estimated(self) -> bool:
        return self._limit is not None

    def estimate(self) -> EstimatedLimit:
        """Return the cached estimate, computing it on first use."""
        if self._limit is None:
            self._limit = self._compute()
        return self._limit

    def _compute(self) -> EstimatedLimit:
        try:
            snapshot = self._runtime_probe.capture()
            limit = limit_from_threshold(snapshot.high_load_threshold_bytes)
        except Exception as exc:
            logger.warning(
                "limit.detection.fallback",
                error=str(exc),
                fallback_limit_mb=self._fallback_limit_mb,
            )
            return EstimatedLimit.fallback(self._fallback_limit_mb)

        logger.info(
            "limit.detection.success",
            threshold_mb=round(limit.threshold_mb or 0.0, 1),
            limit_mb=round(limit.limit_mb, 1),
        )
        return limit
