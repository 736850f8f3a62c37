from __future__ import annotations

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from memguard.domain.entities.runtime import RuntimeSnapshot  # noqa: E402
from memguard.shared import BYTES_PER_MB  # noqa: E402

NOW = datetime(2026, 1, 12, 10, 0, tzinfo=timezone.utc)


def _snapshot(
    resident_mb: float = 100,
    memory_load_mb: float = 100,
    threshold_mb: float = 900,
    uptime_hours: float = 1.0,
    collection_counts: Tuple[int, ...] = (10, 5, 1),
    **overrides: Any,
) -> RuntimeSnapshot:
    values: Dict[str, Any] = dict(
        captured_at=NOW,
        process_start_time=NOW - timedelta(hours=uptime_hours),
        resident_bytes=int(resident_mb * BYTES_PER_MB),
        private_bytes=int(resident_mb * BYTES_PER_MB),
        virtual_bytes=int(resident_mb * 4 * BYTES_PER_MB),
        heap_bytes=int(resident_mb * BYTES_PER_MB),
        memory_load_bytes=int(memory_load_mb * BYTES_PER_MB),
        high_load_threshold_bytes=int(threshold_mb * BYTES_PER_MB),
        total_available_bytes=int(threshold_mb / 0.9 * BYTES_PER_MB),
        collection_counts=collection_counts,
        thread_count=4,
        handle_count=12,
        pid=4242,
        cpu_percent=3.5,
    )
    values.update(overrides)
    return RuntimeSnapshot(**values)


@pytest.fixture()
def make_snapshot() -> Callable[..., RuntimeSnapshot]:
    return _snapshot


class StubProbe:
    """Probe returning a fixed snapshot, or raising a configured error."""

    def __init__(
        self,
        snapshot: Optional[RuntimeSnapshot] = None,
        error: Optional[Exception] = None,
    ) -> None:
        self.snapshot = snapshot or _snapshot()
        self.error = error
        self.calls = 0

    def capture(self) -> RuntimeSnapshot:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.snapshot


@pytest.fixture()
def stub_probe() -> StubProbe:
    return StubProbe()


@pytest.fixture()
def probe_factory() -> Callable[..., StubProbe]:
    return StubProbe


class RecordingMetrics:
    """In-memory metrics sink that keeps the last value of every series."""

    def __init__(self) -> None:
        self.allocations = 0
        self.allocation_failures = 0
        self.allocated_mb: Optional[float] = None
        self.iteration: Optional[int] = None
        self.readings: List[Tuple[float, float, float]] = []
        self.container_limit_mb: Optional[float] = None
        self.dimensions: Dict[str, Tuple[float, float]] = {}
        self.assessment_failures = 0
        self.assessment_available: Optional[bool] = None

    def record_allocation(self, allocated_mb: float) -> None:
        self.allocations += 1
        self.allocated_mb = allocated_mb

    def record_allocation_failure(self) -> None:
        self.allocation_failures += 1
        self.allocated_mb = 0

    def set_iteration(self, iteration: int) -> None:
        self.iteration = iteration

    def set_runtime_readings(
        self, resident_mb: float, pressure_pct: float, utilization_pct: float
    ) -> None:
        self.readings.append((resident_mb, pressure_pct, utilization_pct))

    def set_container_limit(self, limit_mb: float) -> None:
        self.container_limit_mb = limit_mb

    def record_dimension(
        self, name: str, status_score: float, duration_seconds: float
    ) -> None:
        self.dimensions[name] = (status_score, duration_seconds)

    def record_assessment_failure(self) -> None:
        self.assessment_failures += 1
        self.assessment_available = False
        self.dimensions = {
            name: (0.0, duration) for name, (_, duration) in self.dimensions.items()
        }

    def set_assessment_available(self, available: bool) -> None:
        self.assessment_available = available


@pytest.fixture()
def recording_metrics() -> RecordingMetrics:
    return RecordingMetrics()
