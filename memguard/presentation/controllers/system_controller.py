"""System endpoints exposing the service index and the workload status."""

from datetime import datetime, timezone

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from memguard.application.dtos.health_dto import ServiceIndexDTO, WorkloadStatusDTO
from memguard.application.use_cases.health_use_cases import (
    GetServiceIndexUseCase,
    GetWorkloadStatusUseCase,
)
from memguard.domain.entities.health import HealthStatus
from memguard.shared import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["System"])


@router.get("/", response_model=ServiceIndexDTO)
@inject
async def index(
    request: Request,
    get_service_index_use_case: GetServiceIndexUseCase = Depends(
        Provide["get_service_index_use_case"]
    ),
) -> ServiceIndexDTO:
    """Return service metadata and the available endpoints."""
    started_at = getattr(request.app.state, "started_at", None)
    return await get_service_index_use_case.execute(started_at)


@router.get("/status", response_model=WorkloadStatusDTO)
@inject
async def workload_status(
    get_workload_status_use_case: GetWorkloadStatusUseCase = Depends(
        Provide["get_workload_status_use_case"]
    ),
):
    """Return the allocation workload's quick status."""
    try:
        result = await get_workload_status_use_case.execute()
        logger.debug("status.retrieved", status=result.status.value)
        return result
    except Exception as exc:
        logger.error("status.fetch.failure", error=str(exc), exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": HealthStatus.UNHEALTHY.value,
                "error": str(exc),
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
        )
