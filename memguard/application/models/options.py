"""Lightweight settings structures consumed by the application layer."""

from __future__ import annotations

from dataclasses import dataclass

from memguard.shared import BYTES_PER_MB, DEFAULT_HEAP_LIMIT_PERCENT


@dataclass(frozen=True)
class WorkloadOptions:
    """Subset of configuration required by the allocation loop."""

    allocation_size_bytes: int = 10 * BYTES_PER_MB
    interval_seconds: float = 2.0
    heap_limit_percent: float = DEFAULT_HEAP_LIMIT_PERCENT
    enforce_heap_limit: bool = True
    container_aware: bool = False
    server_mode: bool = False

    @classmethod
    def from_megabytes(cls, allocation_size_mb: float, **kwargs) -> "WorkloadOptions":
        return cls(allocation_size_bytes=int(allocation_size_mb * BYTES_PER_MB), **kwargs)

    @property
    def allocation_size_mb(self) -> float:
        return self.allocation_size_bytes / BYTES_PER_MB


@dataclass(frozen=True)
class ServiceInfo:
    """Descriptive metadata surfaced by the index endpoint."""

    title: str
    description: str
    version: str
    environment: str
    git_commit: str
    build_time: str
