"""
Dimension Assessors - Domain Services

Four independent health dimensions. Memory, collector and container are pure
functions of a ``RuntimeSnapshot`` (``evaluate``); performance runs its own
micro-benchmarks and therefore perturbs the process it measures, which is
accepted as self-measurement noise.
"""

from __future__ import annotations

import asyncio
import gc
import os
import platform
from time import perf_counter
from typing import List, Tuple

from memguard.domain.entities.health import DimensionResult, HealthStatus
from memguard.domain.entities.runtime import RuntimeSnapshot, to_mb
from memguard.domain.services.limit_estimator import LimitEstimator
from memguard.shared import BYTES_PER_MB, DEFAULT_HEAP_LIMIT_PERCENT

MEMORY = "memory"
COLLECTOR = "gc"
CONTAINER = "container"
PERFORMANCE = "performance"

DIMENSION_ORDER: Tuple[str, ...] = (MEMORY, COLLECTOR, CONTAINER, PERFORMANCE)

MEMORY_PRESSURE_ADVISORY_PCT = 70.0
MEMORY_PRESSURE_DEGRADED_PCT = 85.0
MEMORY_PRESSURE_CRITICAL_PCT = 90.0
MEMORY_GROWTH_LEAK_MB_PER_HOUR = 50.0

OLDEST_GENERATION_RATIO_LIMIT = 0.10
OLDEST_COLLECTIONS_PER_HOUR_LIMIT = 100.0

CONTAINER_UTILIZATION_DEGRADED_PCT = 85.0
CONTAINER_UTILIZATION_CRITICAL_PCT = 95.0

SCHEDULING_LATENCY_LIMIT_MS = 100.0
ALLOCATION_LATENCY_LIMIT_MS = 50.0
COLLECTION_LATENCY_LIMIT_MS = 100.0
PROBE_ALLOCATION_BYTES = BYTES_PER_MB


def _elapsed_hours(snapshot: RuntimeSnapshot) -> float:
    # Floored at one hour so early-run rates are not inflated.
    return max(1.0, snapshot.uptime_hours)


def classify_memory_pressure(pressure_pct: float) -> Tuple[HealthStatus, List[str]]:
    if pressure_pct >= MEMORY_PRESSURE_CRITICAL_PCT:
        return HealthStatus.UNHEALTHY, [
            "Critical memory pressure - collector struggling"
        ]
    if pressure_pct >= MEMORY_PRESSURE_DEGRADED_PCT:
        return HealthStatus.DEGRADED, [
            "High memory pressure - frequent collection expected"
        ]
    if pressure_pct >= MEMORY_PRESSURE_ADVISORY_PCT:
        return HealthStatus.HEALTHY, ["Moderate memory pressure - monitor"]
    return HealthStatus.HEALTHY, []


def classify_container_utilization(
    utilization_pct: float,
) -> Tuple[HealthStatus, List[str]]:
    if utilization_pct >= CONTAINER_UTILIZATION_CRITICAL_PCT:
        return HealthStatus.UNHEALTHY, [
            "Critical: approaching container memory limit - eviction risk"
        ]
    if utilization_pct >= CONTAINER_UTILIZATION_DEGRADED_PCT:
        return HealthStatus.DEGRADED, ["Warning: high container memory utilization"]
    return HealthStatus.HEALTHY, []


def classify_latencies(
    scheduling_ms: float, allocation_ms: float, collection_ms: float
) -> Tuple[HealthStatus, List[str]]:
    status = HealthStatus.HEALTHY
    issues: List[str] = []

    if scheduling_ms > SCHEDULING_LATENCY_LIMIT_MS:
        status = HealthStatus.DEGRADED
        issues.append(f"High operation latency: {scheduling_ms:.1f}ms")
    if allocation_ms > ALLOCATION_LATENCY_LIMIT_MS:
        issues.append(f"Slow memory allocation: {allocation_ms:.1f}ms")
    if collection_ms > COLLECTION_LATENCY_LIMIT_MS:
        issues.append(f"Slow collection: {collection_ms:.1f}ms")

    return status, issues


class MemoryAssessor:
    """Raw memory pressure against the runtime's high-load threshold."""

    name = MEMORY

    def evaluate(self, snapshot: RuntimeSnapshot) -> DimensionResult:
        pressure_pct = snapshot.memory_pressure_pct
        status, issues = classify_memory_pressure(pressure_pct)

        growth_rate = snapshot.resident_mb / _elapsed_hours(snapshot)
        if growth_rate > MEMORY_GROWTH_LEAK_MB_PER_HOUR:
            issues.append(
                f"Potential memory leak detected - growth rate: {growth_rate:.1f} MB/hour"
            )

        return DimensionResult(
            name=self.name,
            status=status,
            issues=tuple(issues),
            metrics={
                "working_set_mb": round(snapshot.resident_mb, 2),
                "private_memory_mb": round(to_mb(snapshot.private_bytes), 2),
                "virtual_memory_mb": round(to_mb(snapshot.virtual_bytes), 2),
                "heap_mb": round(to_mb(snapshot.heap_bytes), 2),
                "memory_load_mb": round(snapshot.memory_load_mb, 2),
                "memory_threshold_mb": round(snapshot.high_load_threshold_mb, 2),
                "memory_pressure_percent": round(pressure_pct, 2),
                "memory_growth_rate_mb_per_hour": round(growth_rate, 2),
            },
            thresholds={
                "memory_pressure_warning": MEMORY_PRESSURE_ADVISORY_PCT,
                "memory_pressure_degraded": MEMORY_PRESSURE_DEGRADED_PCT,
                "memory_pressure_critical": MEMORY_PRESSURE_CRITICAL_PCT,
            },
        )

    async def assess(self, snapshot: RuntimeSnapshot) -> DimensionResult:
        return self.evaluate(snapshot)


class CollectorAssessor:
    """Collector strain. Never escalates beyond Degraded."""

    name = COLLECTOR

    def __init__(self, server_mode: bool = False) -> None:
        self._server_mode = server_mode

    def evaluate(self, snapshot: RuntimeSnapshot) -> DimensionResult:
        youngest = snapshot.youngest_collections
        oldest = snapshot.oldest_collections
        oldest_ratio = oldest / max(1, youngest)
        oldest_per_hour = oldest / _elapsed_hours(snapshot)

        status = HealthStatus.HEALTHY
        issues: List[str] = []

        if oldest_ratio > OLDEST_GENERATION_RATIO_LIMIT:
            status = HealthStatus.DEGRADED
            issues.append(
                "High oldest-generation collection ratio indicates memory pressure"
            )
        if oldest_per_hour > OLDEST_COLLECTIONS_PER_HOUR_LIMIT:
            status = HealthStatus.DEGRADED
            issues.append(
                f"High oldest-generation collection frequency: {oldest_per_hour:.1f} per hour"
            )

        metrics = {
            f"generation{index}_collections": count
            for index, count in enumerate(snapshot.collection_counts)
        }
        metrics.update(
            {
                "oldest_generation_ratio_percent": round(oldest_ratio * 100, 2),
                "oldest_collections_per_hour": round(oldest_per_hour, 1),
                "heap_mb": round(to_mb(snapshot.heap_bytes), 2),
                "fragmented_mb": round(to_mb(snapshot.fragmented_bytes), 2),
                "memory_load_mb": round(snapshot.memory_load_mb, 2),
                "is_server_mode": self._server_mode,
                "collector_thresholds": list(gc.get_threshold()),
            }
        )

        return DimensionResult(
            name=self.name,
            status=status,
            issues=tuple(issues),
            metrics=metrics,
            thresholds={
                "oldest_generation_ratio": OLDEST_GENERATION_RATIO_LIMIT,
                "oldest_collections_per_hour": OLDEST_COLLECTIONS_PER_HOUR_LIMIT,
            },
        )

    async def assess(self, snapshot: RuntimeSnapshot) -> DimensionResult:
        return self.evaluate(snapshot)


class ContainerAssessor:
    """Resident memory against the inferred container ceiling."""

    name = CONTAINER

    def __init__(
        self,
        limit_estimator: LimitEstimator,
        container_aware: bool = False,
        heap_limit_percent: float = DEFAULT_HEAP_LIMIT_PERCENT,
    ) -> None:
        self._limit_estimator = limit_estimator
        self._container_aware = container_aware
        self._heap_limit_percent = heap_limit_percent

    def evaluate(self, snapshot: RuntimeSnapshot) -> DimensionResult:
        limit = self._limit_estimator.estimate()
        utilization_pct = snapshot.resident_mb / limit.limit_mb * 100
        status, issues = classify_container_utilization(utilization_pct)

        if not self._container_aware:
            issues.append("Application may not be container-aware")
        if limit.is_fallback:
            issues.append(
                f"Container limit could not be detected - using default {limit.limit_mb:.0f}MB"
            )

        return DimensionResult(
            name=self.name,
            status=status,
            issues=tuple(issues),
            metrics={
                "estimated_limit_mb": round(limit.limit_mb),
                "current_usage_mb": round(snapshot.resident_mb, 2),
                "utilization_percent": round(utilization_pct, 2),
                "is_container_aware": self._container_aware and limit.limit_detected,
                "limit_detected": limit.limit_detected,
                "heap_limit_percent": self._heap_limit_percent,
                "heap_limit_mb": round(limit.heap_limit_mb(self._heap_limit_percent)),
                "processor_count": os.cpu_count() or 1,
                "os_version": platform.platform(),
                "runtime_version": platform.python_version(),
            },
            thresholds={
                "utilization_warning": CONTAINER_UTILIZATION_DEGRADED_PCT,
                "utilization_critical": CONTAINER_UTILIZATION_CRITICAL_PCT,
            },
        )

    async def assess(self, snapshot: RuntimeSnapshot) -> DimensionResult:
        return self.evaluate(snapshot)


class PerformanceAssessor:
    """Scheduler, allocation and collection latency, measured live."""

    name = PERFORMANCE

    async def measure(self) -> Tuple[float, float, float]:
        """Run the three micro-benchmarks and return their latencies in ms."""
        start = perf_counter()
        await asyncio.sleep(0)
        scheduling_ms = (perf_counter() - start) * 1000

        start = perf_counter()
        probe = bytearray(PROBE_ALLOCATION_BYTES)
        allocation_ms = (perf_counter() - start) * 1000
        del probe

        start = perf_counter()
        gc.collect(0)
        collection_ms = (perf_counter() - start) * 1000

        return scheduling_ms, allocation_ms, collection_ms

    async def assess(self, snapshot: RuntimeSnapshot) -> DimensionResult:
        scheduling_ms, allocation_ms, collection_ms = await self.measure()
        status, issues = classify_latencies(scheduling_ms, allocation_ms, collection_ms)

        return DimensionResult(
            name=self.name,
            status=status,
            issues=tuple(issues),
            metrics={
                "operation_ms": round(scheduling_ms, 3),
                "allocation_ms": round(allocation_ms, 3),
                "gc_collection_ms": round(collection_ms, 3),
                "cpu_usage_percent": round(snapshot.cpu_percent, 2),
                "thread_count": snapshot.thread_count,
                "handle_count": snapshot.handle_count,
                "uptime_seconds": round(snapshot.uptime_seconds, 1),
            },
            thresholds={
                "operation_latency_critical": SCHEDULING_LATENCY_LIMIT_MS,
                "allocation_latency_warning": ALLOCATION_LATENCY_LIMIT_MS,
                "gc_latency_warning": COLLECTION_LATENCY_LIMIT_MS,
            },
        )
