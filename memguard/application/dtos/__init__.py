"""
DTOs Package - Application Layer

Data Transfer Objects exchanged between the use cases and the HTTP
controllers.
"""

from .health_dto import (
    ApplicationCheckDTO,
    DimensionHealthDTO,
    HealthReportDTO,
    HealthSummaryDTO,
    ProbeResponseDTO,
    ServiceIndexDTO,
    ShutdownResponseDTO,
    WorkloadStatusDTO,
)

__all__ = [
    "ApplicationCheckDTO",
    "DimensionHealthDTO",
    "HealthReportDTO",
    "HealthSummaryDTO",
    "ProbeResponseDTO",
    "ServiceIndexDTO",
    "ShutdownResponseDTO",
    "WorkloadStatusDTO",
]
