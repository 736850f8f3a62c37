from __future__ import annotations

import pytest

from memguard.domain.entities.runtime import EstimatedLimit


def test_pressure_is_load_over_threshold(make_snapshot) -> None:
    snapshot = make_snapshot(memory_load_mb=450, threshold_mb=900)
    assert snapshot.memory_pressure_pct == pytest.approx(50.0)


def test_pressure_is_zero_without_threshold(make_snapshot) -> None:
    snapshot = make_snapshot(high_load_threshold_bytes=0)
    assert snapshot.memory_pressure_pct == 0.0


def test_uptime_and_generations(make_snapshot) -> None:
    snapshot = make_snapshot(uptime_hours=2, collection_counts=(40, 8, 3))

    assert snapshot.uptime_seconds == pytest.approx(7200)
    assert snapshot.uptime_hours == pytest.approx(2)
    assert snapshot.youngest_collections == 40
    assert snapshot.oldest_collections == 3


def test_empty_generations_read_as_zero(make_snapshot) -> None:
    snapshot = make_snapshot(collection_counts=())
    assert snapshot.youngest_collections == 0
    assert snapshot.oldest_collections == 0


def test_limit_from_threshold_and_heap_budget() -> None:
    limit = EstimatedLimit.from_threshold_mb(900)

    assert limit.limit_mb == pytest.approx(1000)
    assert limit.threshold_mb == 900
    assert limit.limit_detected is True
    assert limit.heap_limit_mb(70) == pytest.approx(700)


def test_fallback_limit_is_not_detected() -> None:
    limit = EstimatedLimit.fallback(1024)
    assert limit.is_fallback is True
    assert limit.limit_detected is False
    assert limit.threshold_mb is None
