"""
Pressure-Driven Allocation Loop - Application Service

The workload whose behaviour the assessors measure. Every iteration
allocates a buffer, writes one byte per 4 KiB page so the environment has to
back it with physical memory, and keeps it in the ledger. When an allocation
is refused the loop moves to ``Recovering``, drops the whole ledger, runs two
full collections and returns to ``Running``. Failure is the expected outcome,
not an exceptional one.
"""

from __future__ import annotations

import asyncio
import gc
from enum import Enum
from typing import Callable, List, Optional

from memguard.application.models import WorkloadOptions
from memguard.application.services.memory_report import (
    build_memory_report,
    container_utilization_pct,
)
from memguard.application.services.shutdown import ShutdownSignal
from memguard.domain.entities.runtime import to_mb
from memguard.domain.ports.metrics import IWorkloadMetrics
from memguard.domain.ports.runtime_probe import IRuntimeProbe
from memguard.domain.services.limit_estimator import LimitEstimator
from memguard.shared import BYTES_PER_MB, PAGE_SIZE_BYTES, get_logger

logger = get_logger(__name__)


class LoopState(str, Enum):
    RUNNING = "running"
    RECOVERING = "recovering"
    STOPPED = "stopped"


def touch_pages(buffer: bytearray, page_size: int = PAGE_SIZE_BYTES) -> None:
    for offset in range(0, len(buffer), page_size):
        buffer[offset] = 1


def allocate_buffer(size_bytes: int) -> bytearray:
    """Allocate and commit ``size_bytes``; raises MemoryError when refused."""
    buffer = bytearray(size_bytes)
    touch_pages(buffer)
    return buffer


class AllocationLedger:
    """Buffers held by the workload. Mutated only by ``AllocationLoop``."""

    def __init__(self) -> None:
        self._buffers: List[bytearray] = []
        self.iteration = 0
        self.allocated_bytes = 0
        self.failures = 0

    def __len__(self) -> int:
        return len(self._buffers)

    @property
    def allocated_mb(self) -> float:
        return self.allocated_bytes / BYTES_PER_MB

    def append(self, buffer: bytearray) -> None:
        self._buffers.append(buffer)
        self.allocated_bytes += len(buffer)

    def clear(self) -> None:
        self._buffers.clear()
        self.allocated_bytes = 0


class AllocationLoop:
    """Running -> Recovering -> Running, until shutdown is requested."""

    def __init__(
        self,
        runtime_probe: IRuntimeProbe,
        limit_estimator: LimitEstimator,
        metrics: IWorkloadMetrics,
        shutdown: ShutdownSignal,
        options: Optional[WorkloadOptions] = None,
        allocator: Callable[[int], bytearray] = allocate_buffer,
        collect: Callable[[], int] = gc.collect,
    ) -> None:
        self._runtime_probe = runtime_probe
        self._limit_estimator = limit_estimator
        self._metrics = metrics
        self._shutdown = shutdown
        self._options = options or WorkloadOptions()
        self._allocator = allocator
        self._collect = collect
        self.ledger = AllocationLedger()
        self.state = LoopState.RUNNING

    @property
    def options(self) -> WorkloadOptions:
        return self._options

    async def run(self) -> None:
        logger.info(
            "allocation.loop.started",
            allocation_size_mb=self._options.allocation_size_mb,
            interval_seconds=self._options.interval_seconds,
        )
        while not self._shutdown.is_requested:
            try:
                await self.run_iteration()
            except Exception as exc:
                logger.error(
                    "allocation.iteration.error",
                    iteration=self.ledger.iteration,
                    error=str(exc),
                    exc_info=exc,
                )
            if await self._shutdown.wait(self._options.interval_seconds):
                break

        self.state = LoopState.STOPPED
        logger.info("allocation.loop.stopped", iteration=self.ledger.iteration)

    async def run_iteration(self) -> bool:
        """Run one iteration. Returns False when it ended in recovery."""
        self.ledger.iteration += 1
        self._metrics.set_iteration(self.ledger.iteration)
        size = self._options.allocation_size_bytes

        try:
            self._check_heap_budget(size)
            buffer = await asyncio.to_thread(self._allocator, size)
        except MemoryError as exc:
            self.recover(exc)
            self._publish_readings()
            return False

        self.ledger.append(buffer)
        self._metrics.record_allocation(self.ledger.allocated_mb)
        logger.info(
            "allocation.succeeded",
            iteration=self.ledger.iteration,
            allocated_mb=round(to_mb(size), 2),
            total_allocated_mb=round(self.ledger.allocated_mb, 2),
            buffers=len(self.ledger),
        )
        self._publish_readings()
        return True

    def recover(self, error: Optional[BaseException] = None) -> None:
        """Drop every buffer, zero the allocated metric and collect twice."""
        self.state = LoopState.RECOVERING
        released_mb = self.ledger.allocated_mb
        self.ledger.clear()
        self.ledger.failures += 1
        self._metrics.record_allocation_failure()

        self._collect()
        # Finalizers run inside collect(); the second pass reclaims what they freed.
        self._collect()

        logger.warning(
            "allocation.failed",
            iteration=self.ledger.iteration,
            released_mb=round(released_mb, 2),
            failures=self.ledger.failures,
            error=str(error) if error else None,
        )
        self.state = LoopState.RUNNING

    def _check_heap_budget(self, size: int) -> None:
        if not self._options.enforce_heap_limit:
            return
        limit = self._limit_estimator.estimate()
        budget_bytes = limit.heap_limit_mb(self._options.heap_limit_percent) * BYTES_PER_MB
        if self.ledger.allocated_bytes + size > budget_bytes:
            raise MemoryError(
                f"Heap budget of {budget_bytes / BYTES_PER_MB:.0f}MB exhausted"
            )

    def _publish_readings(self) -> None:
        try:
            snapshot = self._runtime_probe.capture()
        except Exception as exc:
            logger.warning("allocation.readings.unavailable", error=str(exc))
            return

        limit = self._limit_estimator.estimate()
        self._metrics.set_runtime_readings(
            resident_mb=snapshot.resident_mb,
            pressure_pct=snapshot.memory_pressure_pct,
            utilization_pct=container_utilization_pct(snapshot, limit),
        )
        logger.info(
            "memory.report",
            iteration=self.ledger.iteration,
            **build_memory_report(
                snapshot,
                limit,
                heap_limit_percent=self._options.heap_limit_percent,
                container_aware=self._options.container_aware,
                server_mode=self._options.server_mode,
            ),
        )
