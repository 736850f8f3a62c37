"""
Use Cases Package - Application Layer

Use cases answer the HTTP queries. They read from the assessment engine and
the loops but never mutate the allocation ledger.
"""

from .health_use_cases import (
    GetDimensionHealthUseCase,
    GetHealthReportUseCase,
    GetLivenessUseCase,
    GetReadinessUseCase,
    GetServiceIndexUseCase,
    GetWorkloadStatusUseCase,
    RequestShutdownUseCase,
    quick_status,
)

__all__ = [
    "GetDimensionHealthUseCase",
    "GetHealthReportUseCase",
    "GetLivenessUseCase",
    "GetReadinessUseCase",
    "GetServiceIndexUseCase",
    "GetWorkloadStatusUseCase",
    "RequestShutdownUseCase",
    "quick_status",
]
