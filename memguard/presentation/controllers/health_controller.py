"""Health endpoints: aggregate report, probes, single dimensions, shutdown."""

from datetime import datetime, timezone
from typing import Any, Union

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse

from memguard.application.dtos.health_dto import (
    DimensionHealthDTO,
    HealthReportDTO,
    HealthSummaryDTO,
    ProbeResponseDTO,
    ShutdownResponseDTO,
)
from memguard.application.use_cases.health_use_cases import (
    GetDimensionHealthUseCase,
    GetHealthReportUseCase,
    GetLivenessUseCase,
    GetReadinessUseCase,
    RequestShutdownUseCase,
)
from memguard.domain.entities.health import HealthStatus
from memguard.domain.services.assessors import (
    COLLECTOR,
    CONTAINER,
    MEMORY,
    PERFORMANCE,
)
from memguard.shared import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/health", tags=["Health"])


def _status_code(health_status: HealthStatus) -> int:
    if health_status.is_available:
        return status.HTTP_200_OK
    return status.HTTP_503_SERVICE_UNAVAILABLE


def _unavailable(event: str, exc: Exception) -> JSONResponse:
    logger.error(event, error=str(exc), exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": HealthStatus.UNHEALTHY.value,
            "error": str(exc),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    )


@router.get("", response_model=HealthSummaryDTO)
@inject
async def health(
    response: Response,
    get_health_report_use_case: GetHealthReportUseCase = Depends(
        Provide["get_health_report_use_case"]
    ),
) -> Union[HealthSummaryDTO, JSONResponse]:
    """Return the aggregate status; 503 when Unhealthy."""
    try:
        report = await get_health_report_use_case.execute()
    except Exception as exc:
        return _unavailable("health.check.failure", exc)

    logger.debug("health.check.success", status=report.status.value)
    response.status_code = _status_code(report.status)
    return report


@router.get("/detailed", response_model=HealthReportDTO)
@inject
async def health_detailed(
    response: Response,
    get_health_report_use_case: GetHealthReportUseCase = Depends(
        Provide["get_health_report_use_case"]
    ),
) -> Union[HealthReportDTO, JSONResponse]:
    """Return the aggregate report with every dimension's readings."""
    try:
        report = await get_health_report_use_case.execute_detailed()
    except Exception as exc:
        return _unavailable("health.detailed.failure", exc)

    response.status_code = _status_code(report.status)
    return report


@router.get("/live", response_model=ProbeResponseDTO)
@inject
async def liveness(
    get_liveness_use_case: GetLivenessUseCase = Depends(
        Provide["get_liveness_use_case"]
    ),
) -> ProbeResponseDTO:
    """Healthy for as long as the process answers."""
    return await get_liveness_use_case.execute()


@router.get("/ready", response_model=ProbeResponseDTO)
@inject
async def readiness(
    response: Response,
    get_readiness_use_case: GetReadinessUseCase = Depends(
        Provide["get_readiness_use_case"]
    ),
) -> Union[ProbeResponseDTO, JSONResponse]:
    try:
        probe = await get_readiness_use_case.execute()
    except Exception as exc:
        return _unavailable("health.readiness.failure", exc)

    response.status_code = _status_code(probe.status)
    return probe


async def _dimension(
    name: str,
    response: Response,
    use_case: GetDimensionHealthUseCase,
) -> Union[DimensionHealthDTO, JSONResponse]:
    try:
        result = await use_case.execute(name)
    except Exception as exc:
        return _unavailable(f"health.{name}.failure", exc)

    response.status_code = _status_code(result.status)
    return result


@router.get("/memory", response_model=DimensionHealthDTO)
@inject
async def memory_health(
    response: Response,
    get_dimension_health_use_case: GetDimensionHealthUseCase = Depends(
        Provide["get_dimension_health_use_case"]
    ),
) -> Any:
    return await _dimension(MEMORY, response, get_dimension_health_use_case)


@router.get("/gc", response_model=DimensionHealthDTO)
@inject
async def collector_health(
    response: Response,
    get_dimension_health_use_case: GetDimensionHealthUseCase = Depends(
        Provide["get_dimension_health_use_case"]
    ),
) -> Any:
    return await _dimension(COLLECTOR, response, get_dimension_health_use_case)


@router.get("/container", response_model=DimensionHealthDTO)
@inject
async def container_health(
    response: Response,
    get_dimension_health_use_case: GetDimensionHealthUseCase = Depends(
        Provide["get_dimension_health_use_case"]
    ),
) -> Any:
    return await _dimension(CONTAINER, response, get_dimension_health_use_case)


@router.get("/performance", response_model=DimensionHealthDTO)
@inject
async def performance_health(
    response: Response,
    get_dimension_health_use_case: GetDimensionHealthUseCase = Depends(
        Provide["get_dimension_health_use_case"]
    ),
) -> Any:
    return await _dimension(PERFORMANCE, response, get_dimension_health_use_case)


@router.api_route(
    "/shutdown",
    methods=["GET", "POST"],
    response_model=ShutdownResponseDTO,
    status_code=status.HTTP_202_ACCEPTED,
)
@inject
async def shutdown(
    request_shutdown_use_case: RequestShutdownUseCase = Depends(
        Provide["request_shutdown_use_case"]
    ),
) -> ShutdownResponseDTO:
    """Pre-stop hook. Signals both loops to drain; the process exits on SIGTERM."""
    result = await request_shutdown_use_case.execute("pre-stop hook")
    logger.info("health.shutdown.accepted", already_requested=result.already_requested)
    return result
