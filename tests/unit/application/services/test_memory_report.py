from __future__ import annotations

import pytest

from memguard.application.services.memory_report import (
    build_memory_report,
    container_utilization_pct,
    pressure_band,
    utilization_band,
)
from memguard.domain.entities.runtime import EstimatedLimit


@pytest.mark.parametrize(
    "value, expected",
    [(50, "ok"), (60, "ok"), (61, "caution"), (81, "warning"), (90, "warning"), (91, "critical")],
)
def test_pressure_band(value, expected) -> None:
    assert pressure_band(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [(70, "ok"), (71, "caution"), (86, "warning"), (95, "warning"), (96, "critical")],
)
def test_utilization_band(value, expected) -> None:
    assert utilization_band(value) == expected


def test_utilization_against_limit(make_snapshot) -> None:
    snapshot = make_snapshot(resident_mb=256)
    assert container_utilization_pct(snapshot, EstimatedLimit.fallback(512)) == 50.0
    assert container_utilization_pct(snapshot, EstimatedLimit.fallback(0)) == 0.0


def test_report_includes_heap_budget(make_snapshot) -> None:
    snapshot = make_snapshot(resident_mb=800, memory_load_mb=850, threshold_mb=900)
    report = build_memory_report(
        snapshot,
        EstimatedLimit.from_threshold_mb(900),
        heap_limit_percent=70,
        container_aware=True,
        server_mode=False,
    )

    assert report["container_limit_mb"] == 1000
    assert report["heap_limit_mb"] == 700
    assert report["memory_pressure_band"] == "critical"
    assert report["container_utilization_band"] == "caution"
    assert report["running_in_container"] is True
