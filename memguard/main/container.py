"""
Dependency container injection module - Main Layer

Composition root: builds the probe, the write-once limit estimator, the
assessors, both background loops and the use cases, and owns their
lifecycle through ``app_lifespan``.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import List

from dependency_injector import containers, providers

from memguard.application.models import ServiceInfo, WorkloadOptions
from memguard.application.services.allocation_loop import AllocationLoop
from memguard.application.services.assessment_loop import AssessmentLoop
from memguard.application.services.assessment_service import HealthAssessmentService
from memguard.application.services.shutdown import ShutdownSignal
from memguard.application.use_cases.health_use_cases import (
    GetDimensionHealthUseCase,
    GetHealthReportUseCase,
    GetLivenessUseCase,
    GetReadinessUseCase,
    GetServiceIndexUseCase,
    GetWorkloadStatusUseCase,
    RequestShutdownUseCase,
)
from memguard.domain.services.assessors import (
    CollectorAssessor,
    ContainerAssessor,
    MemoryAssessor,
    PerformanceAssessor,
)
from memguard.domain.services.limit_estimator import LimitEstimator
from memguard.infrastructure.metrics import PrometheusWorkloadMetrics
from memguard.infrastructure.runtime import CgroupMemoryReader, PsutilRuntimeProbe
from memguard.shared import get_logger

from .config import AppSettings

logger = get_logger(__name__)

SHUTDOWN_GRACE_SECONDS = 5.0


class AppContainer(containers.DeclarativeContainer):
    """Composition Root using dependency-injector."""

    wiring_config = containers.WiringConfiguration(
        packages=["..presentation", "..application"]
    )

    # Settings
    config = providers.Configuration()

    # Infrastructure
    metrics = providers.Singleton(PrometheusWorkloadMetrics)

    cgroup_reader = providers.Singleton(
        CgroupMemoryReader,
        root=config.runtime.cgroup_root,
    )

    runtime_probe = providers.Singleton(
        PsutilRuntimeProbe,
        cgroup_reader=cgroup_reader,
    )

    # Domain
    limit_estimator = providers.Singleton(
        LimitEstimator,
        runtime_probe=runtime_probe,
        fallback_limit_mb=config.runtime.fallback_limit_mb,
    )

    memory_assessor = providers.Singleton(MemoryAssessor)

    collector_assessor = providers.Singleton(
        CollectorAssessor,
        server_mode=config.runtime.server_mode,
    )

    container_assessor = providers.Singleton(
        ContainerAssessor,
        limit_estimator=limit_estimator,
        container_aware=config.runtime.running_in_container,
        heap_limit_percent=config.runtime.heap_limit_percent,
    )

    performance_assessor = providers.Singleton(PerformanceAssessor)

    assessors = providers.List(
        memory_assessor,
        collector_assessor,
        container_assessor,
        performance_assessor,
    )

    # Application services
    shutdown_signal = providers.Singleton(ShutdownSignal)

    assessment_service = providers.Singleton(
        HealthAssessmentService,
        runtime_probe=runtime_probe,
        limit_estimator=limit_estimator,
        assessors=assessors,
    )

    workload_options = providers.Singleton(
        WorkloadOptions.from_megabytes,
        config.workload.allocation_size_mb,
        interval_seconds=config.workload.interval_seconds,
        heap_limit_percent=config.runtime.heap_limit_percent,
        enforce_heap_limit=config.workload.enforce_heap_limit,
        container_aware=config.runtime.running_in_container,
        server_mode=config.runtime.server_mode,
    )

    allocation_loop = providers.Singleton(
        AllocationLoop,
        runtime_probe=runtime_probe,
        limit_estimator=limit_estimator,
        metrics=metrics,
        shutdown=shutdown_signal,
        options=workload_options,
    )

    assessment_loop = providers.Singleton(
        AssessmentLoop,
        assessment_service=assessment_service,
        metrics=metrics,
        shutdown=shutdown_signal,
        interval_seconds=config.assessment.interval_seconds,
        backoff_seconds=config.assessment.backoff_seconds,
    )

    service_info = providers.Singleton(
        ServiceInfo,
        title=config.service.title,
        description=config.service.description,
        version=config.service.version,
        environment=providers.Callable(
            lambda env: env.value if hasattr(env, "value") else str(env),
            config.environment,
        ),
        git_commit=config.service.git_commit,
        build_time=config.service.build_time,
    )

    # Application (use cases)
    get_health_report_use_case = providers.Factory(
        GetHealthReportUseCase,
        assessment_service=assessment_service,
    )

    get_dimension_health_use_case = providers.Factory(
        GetDimensionHealthUseCase,
        assessment_service=assessment_service,
    )

    get_liveness_use_case = providers.Factory(GetLivenessUseCase)

    get_readiness_use_case = providers.Factory(
        GetReadinessUseCase,
        assessment_service=assessment_service,
        shutdown=shutdown_signal,
    )

    get_workload_status_use_case = providers.Factory(
        GetWorkloadStatusUseCase,
        allocation_loop=allocation_loop,
        assessment_loop=assessment_loop,
        runtime_probe=runtime_probe,
        limit_estimator=limit_estimator,
    )

    request_shutdown_use_case = providers.Factory(
        RequestShutdownUseCase,
        shutdown=shutdown_signal,
    )

    get_service_index_use_case = providers.Factory(
        GetServiceIndexUseCase,
        service_info=service_info,
    )


# -------------------------
# Global Container Instance
# -------------------------
_app_container: AppContainer | None = None


def init_container(settings: AppSettings) -> AppContainer:
    """Initialize global container with application settings."""

    global _app_container

    container = AppContainer()
    container.config.from_pydantic(settings)
    _app_container = container
    return container


def get_container() -> AppContainer:
    """Get the initialized global container."""

    if _app_container is None:
        raise RuntimeError("Container has not been initialized yet")

    return _app_container


async def _drain(tasks: List[asyncio.Task], timeout: float) -> None:
    if not tasks:
        return
    done, pending = await asyncio.wait(tasks, timeout=timeout)
    for task in pending:
        logger.warning("container.task.cancelled", task=task.get_name())
        task.cancel()
    if pending:
        await asyncio.gather(*pending, return_exceptions=True)
    for task in done:
        if not task.cancelled() and task.exception() is not None:
            logger.error(
                "container.task.failed",
                task=task.get_name(),
                error=str(task.exception()),
            )


@asynccontextmanager
async def app_lifespan():
    """
    Start and stop the background loops.

    The limit estimate is computed once here, before either loop runs, and
    never refreshed afterwards. On exit the shared shutdown signal is set
    and both loops get a bounded grace period to finish their iteration.
    """
    container = get_container()

    limit = container.limit_estimator().estimate()
    metrics = container.metrics()
    metrics.set_container_limit(limit.limit_mb)

    shutdown = container.shutdown_signal()
    tasks: List[asyncio.Task] = [
        asyncio.create_task(container.assessment_loop().run(), name="assessment-loop")
    ]

    if container.config.workload.enabled():
        tasks.append(
            asyncio.create_task(
                container.allocation_loop().run(), name="allocation-loop"
            )
        )
    else:
        logger.info("container.workload.disabled")

    logger.info(
        "container.resources.initialized",
        limit_mb=round(limit.limit_mb, 1),
        limit_detected=limit.limit_detected,
        tasks=[task.get_name() for task in tasks],
    )

    try:
        yield container
    finally:
        shutdown.request("application shutdown")
        await _drain(tasks, SHUTDOWN_GRACE_SECONDS)
        logger.info("container.resources.shutdown")
