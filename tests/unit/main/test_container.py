from __future__ import annotations

import asyncio

import pytest
from dependency_injector import providers

from memguard.domain.services.assessors import DIMENSION_ORDER
from memguard.main.config import AppSettings
from memguard.main.container import app_lifespan, get_container, init_container


@pytest.fixture()
def settings(monkeypatch) -> AppSettings:
    monkeypatch.setenv("WORKLOAD_ENABLED", "false")
    monkeypatch.setenv("ALLOCATION_SIZE_MB", "0.01")
    monkeypatch.setenv("ALLOCATION_INTERVAL_SECONDS", "0.01")
    monkeypatch.setenv("ASSESSMENT_INTERVAL_SECONDS", "0.01")
    return AppSettings()


def test_init_and_get_container(settings) -> None:
    container = init_container(settings)

    assert get_container() is container
    assert container.metrics() is container.metrics()
    assert [assessor.name for assessor in container.assessors()] == list(
        DIMENSION_ORDER
    )
    assert container.workload_options().allocation_size_bytes == int(0.01 * 1024 * 1024)


def test_use_cases_share_singletons(settings) -> None:
    container = init_container(settings)

    status_use_case = container.get_workload_status_use_case()
    assert status_use_case._allocation_loop is container.allocation_loop()
    assert container.get_readiness_use_case()._shutdown is container.shutdown_signal()


@pytest.mark.asyncio
async def test_lifespan_estimates_limit_and_runs_assessments(
    settings, probe_factory, make_snapshot
) -> None:
    container = init_container(settings)
    probe = probe_factory(make_snapshot(threshold_mb=900))
    container.runtime_probe.override(providers.Object(probe))

    async with app_lifespan():
        loop = container.assessment_loop()
        for _ in range(100):
            if loop.cycles:
                break
            await asyncio.sleep(0.01)
        assert loop.latest_report is not None

    metrics = container.metrics()
    assert metrics.sample("container_memory_limit_mb") == pytest.approx(1000)
    assert metrics.sample("assessment_available") == 1
    assert container.shutdown_signal().is_requested
    assert container.allocation_loop().ledger.iteration == 0


@pytest.mark.asyncio
async def test_lifespan_starts_workload_when_enabled(
    monkeypatch, probe_factory
) -> None:
    monkeypatch.setenv("WORKLOAD_ENABLED", "true")
    monkeypatch.setenv("ALLOCATION_SIZE_MB", "0.01")
    monkeypatch.setenv("ALLOCATION_INTERVAL_SECONDS", "0.01")
    container = init_container(AppSettings())
    container.runtime_probe.override(providers.Object(probe_factory()))

    async with app_lifespan():
        loop = container.allocation_loop()
        for _ in range(100):
            if loop.ledger.iteration >= 2:
                break
            await asyncio.sleep(0.01)

    assert loop.ledger.iteration >= 2
    assert container.metrics().sample("memory_allocations_total") >= 1


def test_get_container_without_init_raises(monkeypatch) -> None:
    monkeypatch.setattr("memguard.main.container._app_container", None)
    with pytest.raises(RuntimeError):
        get_container()
