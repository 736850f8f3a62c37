"""Runtime probe backed by psutil, cgroups and the ``gc`` module."""

from __future__ import annotations

import gc
from datetime import datetime, timezone
from typing import Callable, Optional, Tuple

import psutil

from memguard.domain.entities.errors import RuntimeProbeError
from memguard.domain.entities.runtime import RuntimeSnapshot
from memguard.domain.ports.runtime_probe import IRuntimeProbe
from memguard.infrastructure.runtime.cgroup import CgroupMemoryReader
from memguard.shared import HIGH_LOAD_THRESHOLD_RATIO


def collection_counts() -> Tuple[int, ...]:
    """Collections performed per generation, youngest first."""
    return tuple(int(stat.get("collections", 0)) for stat in gc.get_stats())


class PsutilRuntimeProbe(IRuntimeProbe):
    """Capture process, collector and container counters in one pass.

    The high-load threshold is reported the way a managed runtime reports it:
    90% of the memory visible to the process, where "visible" is the cgroup
    ceiling when one is set and physical memory otherwise.
    """

    def __init__(
        self,
        cgroup_reader: Optional[CgroupMemoryReader] = None,
        process: Optional[psutil.Process] = None,
        counts: Callable[[], Tuple[int, ...]] = collection_counts,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        self._cgroup = cgroup_reader or CgroupMemoryReader()
        self._process = process or psutil.Process()
        self._counts = counts
        self._clock = clock

    def capture(self) -> RuntimeSnapshot:
        try:
            with self._process.oneshot():
                memory = self._process.memory_info()
                start = datetime.fromtimestamp(
                    self._process.create_time(), tz=timezone.utc
                )
                thread_count = self._process.num_threads()
                handle_count = self._handle_count()
                cpu_percent = self._process.cpu_percent(interval=None)
                pid = self._process.pid
            system = psutil.virtual_memory()
        except psutil.Error as exc:
            raise RuntimeProbeError(f"Unable to read process counters: {exc}") from exc

        total_available = system.total
        limit = self._cgroup.limit_bytes()
        if limit is not None:
            total_available = min(limit, system.total)

        memory_load = self._cgroup.usage_bytes()
        if memory_load is None:
            memory_load = system.total - system.available

        private = self._private_bytes(memory)
        heap = int(getattr(memory, "data", 0) or private)

        return RuntimeSnapshot(
            captured_at=self._clock(),
            process_start_time=start,
            resident_bytes=int(memory.rss),
            private_bytes=private,
            virtual_bytes=int(memory.vms),
            heap_bytes=heap,
            fragmented_bytes=max(0, heap - private),
            memory_load_bytes=int(memory_load),
            high_load_threshold_bytes=int(total_available * HIGH_LOAD_THRESHOLD_RATIO),
            total_available_bytes=int(total_available),
            collection_counts=self._counts(),
            thread_count=thread_count,
            handle_count=handle_count,
            pid=pid,
            cpu_percent=float(cpu_percent),
        )

    def _handle_count(self) -> int:
        if hasattr(self._process, "num_fds"):
            return self._process.num_fds()
        if hasattr(self._process, "num_handles"):
            return self._process.num_handles()
        return 0

    @staticmethod
    def _private_bytes(memory) -> int:
        private = getattr(memory, "private", None)
        if private is not None:
            return int(private)
        shared = getattr(memory, "shared", None)
        if shared is not None:
            return max(0, int(memory.rss) - int(shared))
        return int(memory.rss)
