"""
Runtime domain entities.

A ``RuntimeSnapshot`` is an immutable, point-in-time read of process and
collector counters. It is captured once per assessment and handed to every
assessor, so all dimensions of one cycle see the same numbers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Tuple

from memguard.shared.consts import BYTES_PER_MB, HIGH_LOAD_THRESHOLD_RATIO


def to_mb(value_bytes: float) -> float:
    return value_bytes / BYTES_PER_MB


@dataclass(frozen=True, slots=True)
class RuntimeSnapshot:
    """Process, collector and container counters captured at one instant."""

    captured_at: datetime
    process_start_time: datetime
    resident_bytes: int
    private_bytes: int = 0
    virtual_bytes: int = 0
    heap_bytes: int = 0
    fragmented_bytes: int = 0
    memory_load_bytes: int = 0
    high_load_threshold_bytes: int = 0
    total_available_bytes: int = 0
    collection_counts: Tuple[int, ...] = (0, 0, 0)
    thread_count: int = 0
    handle_count: int = 0
    pid: int = 0
    cpu_percent: float = 0.0

    @property
    def resident_mb(self) -> float:
        return to_mb(self.resident_bytes)

    @property
    def memory_load_mb(self) -> float:
        return to_mb(self.memory_load_bytes)

    @property
    def high_load_threshold_mb(self) -> float:
        return to_mb(self.high_load_threshold_bytes)

    @property
    def memory_pressure_pct(self) -> float:
        """Memory load as a percentage of the high-load threshold."""
        if self.high_load_threshold_bytes <= 0:
            return 0.0
        return self.memory_load_bytes / self.high_load_threshold_bytes * 100

    @property
    def uptime_seconds(self) -> float:
        return max(0.0, (self.captured_at - self.process_start_time).total_seconds())

    @property
    def uptime_hours(self) -> float:
        return self.uptime_seconds / 3600

    @property
    def youngest_collections(self) -> int:
        return self.collection_counts[0] if self.collection_counts else 0

    @property
    def oldest_collections(self) -> int:
        return self.collection_counts[-1] if self.collection_counts else 0


@dataclass(frozen=True, slots=True)
class EstimatedLimit:
    """Memory ceiling inferred from the high-load threshold."""

    limit_mb: float
    threshold_mb: Optional[float] = None
    is_fallback: bool = False
    estimated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_threshold_mb(cls, threshold_mb: float) -> "EstimatedLimit":
        return cls(
            limit_mb=threshold_mb / HIGH_LOAD_THRESHOLD_RATIO,
            threshold_mb=threshold_mb,
        )

    @classmethod
    def fallback(cls, limit_mb: float) -> "EstimatedLimit":
        return cls(limit_mb=float(limit_mb), is_fallback=True)

    @property
    def limit_detected(self) -> bool:
        return not self.is_fallback

    def heap_limit_mb(self, percent: float) -> float:
        """Heap budget expressed as a percentage of the estimated limit."""
        return self.limit_mb * percent / 100
