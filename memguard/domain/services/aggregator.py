"""
Aggregator - Domain Service

Merges the four dimension results into one report. The overall status is the
worst dimension status; two direct overrides may escalate it to Unhealthy
but nothing ever makes it milder than any dimension.
"""

from __future__ import annotations

import platform
from datetime import datetime, timezone
from typing import Dict, List, Mapping, Optional

from memguard.domain.entities.health import (
    AggregateReport,
    ApplicationCheck,
    DimensionResult,
    HealthStatus,
)
from memguard.domain.entities.runtime import EstimatedLimit, RuntimeSnapshot
from memguard.domain.services.assessors import (
    DIMENSION_ORDER,
    MEMORY_PRESSURE_CRITICAL_PCT,
)

CONTAINER_OVERRIDE_RATIO = 0.95

OVERRIDE_MEMORY_PRESSURE = "memory_pressure"
OVERRIDE_CONTAINER_LIMIT = "container_limit"


def application_check(snapshot: RuntimeSnapshot) -> ApplicationCheck:
    """Liveness entry: the process answered, so it is Healthy."""
    return ApplicationCheck(
        status=HealthStatus.HEALTHY,
        pid=snapshot.pid,
        uptime_seconds=snapshot.uptime_seconds,
        runtime_version=platform.python_version(),
    )


def evaluate_overrides(
    snapshot: RuntimeSnapshot, limit: EstimatedLimit
) -> List[str]:
    fired: List[str] = []
    if snapshot.memory_pressure_pct >= MEMORY_PRESSURE_CRITICAL_PCT:
        fired.append(OVERRIDE_MEMORY_PRESSURE)
    if snapshot.resident_mb > limit.limit_mb * CONTAINER_OVERRIDE_RATIO:
        fired.append(OVERRIDE_CONTAINER_LIMIT)
    return fired


def aggregate(
    results: Mapping[str, DimensionResult],
    snapshot: RuntimeSnapshot,
    limit: EstimatedLimit,
    timestamp: Optional[datetime] = None,
) -> AggregateReport:
    """Combine dimension results into an ``AggregateReport``.

    ``results`` must hold every dimension in ``DIMENSION_ORDER``; issues are
    concatenated in that order regardless of the mapping's own order.
    """
    missing = [name for name in DIMENSION_ORDER if name not in results]
    if missing:
        raise KeyError(f"Missing dimension results: {', '.join(missing)}")

    ordered: Dict[str, DimensionResult] = {
        name: results[name] for name in DIMENSION_ORDER
    }

    status = HealthStatus.worst(result.status for result in ordered.values())
    overrides = evaluate_overrides(snapshot, limit)
    if overrides:
        status = HealthStatus.UNHEALTHY

    issues = [issue for result in ordered.values() for issue in result.issues]

    metrics = {
        "uptime_seconds": round(snapshot.uptime_seconds, 1),
        "working_set_mb": round(snapshot.resident_mb, 2),
        "memory_pressure_percent": round(snapshot.memory_pressure_pct, 2),
        "estimated_limit_mb": round(limit.limit_mb),
    }
    for index, count in enumerate(snapshot.collection_counts):
        metrics[f"generation{index}_collections"] = count

    return AggregateReport(
        status=status,
        dimensions=ordered,
        issues=tuple(issues),
        overrides=tuple(overrides),
        metrics=metrics,
        application=application_check(snapshot),
        timestamp=timestamp or datetime.now(timezone.utc),
    )
