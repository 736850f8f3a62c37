"""Memory report logged by the workload after every iteration."""

from __future__ import annotations

from typing import Any, Dict

from memguard.domain.entities.runtime import EstimatedLimit, RuntimeSnapshot, to_mb


def pressure_band(pressure_pct: float) -> str:
    if pressure_pct > 90:
        return "critical"
    if pressure_pct > 80:
        return "warning"
    if pressure_pct > 60:
        return "caution"
    return "ok"


def utilization_band(utilization_pct: float) -> str:
    if utilization_pct > 95:
        return "critical"
    if utilization_pct > 85:
        return "warning"
    if utilization_pct > 70:
        return "caution"
    return "ok"


def container_utilization_pct(snapshot: RuntimeSnapshot, limit: EstimatedLimit) -> float:
    if limit.limit_mb <= 0:
        return 0.0
    return snapshot.resident_mb / limit.limit_mb * 100


def build_memory_report(
    snapshot: RuntimeSnapshot,
    limit: EstimatedLimit,
    heap_limit_percent: float,
    container_aware: bool,
    server_mode: bool,
) -> Dict[str, Any]:
    """Flatten one snapshot into log-friendly fields."""
    pressure = snapshot.memory_pressure_pct
    utilization = container_utilization_pct(snapshot, limit)

    return {
        "working_set_mb": round(snapshot.resident_mb, 1),
        "private_memory_mb": round(to_mb(snapshot.private_bytes), 1),
        "virtual_memory_mb": round(to_mb(snapshot.virtual_bytes), 1),
        "heap_mb": round(to_mb(snapshot.heap_bytes), 1),
        "high_load_threshold_mb": round(snapshot.high_load_threshold_mb, 1),
        "total_available_mb": round(to_mb(snapshot.total_available_bytes), 1),
        "memory_load_mb": round(snapshot.memory_load_mb, 1),
        "memory_pressure_percent": round(pressure, 1),
        "memory_pressure_band": pressure_band(pressure),
        "container_limit_mb": round(limit.limit_mb),
        "container_limit_detected": limit.limit_detected,
        "heap_limit_mb": round(limit.heap_limit_mb(heap_limit_percent)),
        "container_utilization_percent": round(utilization, 1),
        "container_utilization_band": utilization_band(utilization),
        "running_in_container": container_aware,
        "heap_limit_percent": heap_limit_percent,
        "server_mode": server_mode,
    }
