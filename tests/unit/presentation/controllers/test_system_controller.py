from __future__ import annotations

import json
from datetime import datetime, timezone
from types import SimpleNamespace

import pytest
from fastapi import Request
from fastapi.responses import JSONResponse

from memguard.application.models import ServiceInfo
from memguard.application.use_cases.health_use_cases import GetServiceIndexUseCase
from memguard.presentation.controllers.system_controller import index, workload_status


@pytest.mark.asyncio
async def test_index_returns_service_metadata():
    info = ServiceInfo(
        title="memguard",
        description="desc",
        version="1.0",
        environment="dev",
        git_commit="abc",
        build_time="now",
    )
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/",
        "headers": [],
        "query_string": b"",
        "server": ("test", 80),
        "app": SimpleNamespace(
            state=SimpleNamespace(started_at=datetime.now(timezone.utc))
        ),
    }

    dto = await index(
        request=Request(scope),
        get_service_index_use_case=GetServiceIndexUseCase(info),
    )

    assert dto.name == "memguard"
    assert dto.endpoints["health"] == "/health"


class _BrokenStatusUseCase:
    async def execute(self):
        raise RuntimeError("probe unavailable")


@pytest.mark.asyncio
async def test_status_failure_returns_unhealthy_body():
    result = await workload_status(get_workload_status_use_case=_BrokenStatusUseCase())

    assert isinstance(result, JSONResponse)
    assert result.status_code == 503
    assert json.loads(result.body)["status"] == "Unhealthy"
