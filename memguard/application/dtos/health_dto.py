"""DTOs for health reports, probes and workload status responses."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from memguard.domain.entities.health import (
    AggregateReport,
    ApplicationCheck,
    DimensionResult,
    HealthStatus,
)


class DimensionHealthDTO(BaseModel):
    """Serializable representation of one health dimension."""

    status: HealthStatus = Field(description="Dimension status")
    metrics: Dict[str, Any] = Field(
        default_factory=dict, description="Readings the status was derived from"
    )
    issues: List[str] = Field(
        default_factory=list, description="Human readable findings"
    )
    thresholds: Dict[str, float] = Field(
        default_factory=dict, description="Thresholds applied by the assessor"
    )
    duration_ms: Optional[float] = Field(
        default=None, description="Time spent assessing, in milliseconds"
    )

    @classmethod
    def from_domain(cls, result: DimensionResult) -> "DimensionHealthDTO":
        return cls(
            status=result.status,
            metrics=dict(result.metrics),
            issues=list(result.issues),
            thresholds=dict(result.thresholds),
            duration_ms=(
                round(result.duration_ms, 3) if result.duration_ms is not None else None
            ),
        )

    model_config = {
        "json_schema_extra": {
            "example": {
                "status": "Degraded",
                "metrics": {
                    "working_set_mb": 412.5,
                    "memory_pressure_percent": 86.2,
                    "memory_growth_rate_mb_per_hour": 412.5,
                },
                "issues": [
                    "High memory pressure - frequent collection expected",
                    "Potential memory leak detected - growth rate: 412.5 MB/hour",
                ],
                "thresholds": {
                    "memory_pressure_warning": 70.0,
                    "memory_pressure_degraded": 85.0,
                    "memory_pressure_critical": 90.0,
                },
                "duration_ms": 0.412,
            }
        }
    }


class ApplicationCheckDTO(BaseModel):
    """Liveness entry attached to every health report."""

    status: HealthStatus = Field(description="Always Healthy while the process answers")
    pid: int = Field(description="Process identifier")
    uptime_seconds: float = Field(description="Process uptime in seconds")
    runtime_version: str = Field(description="Python version")

    @classmethod
    def from_domain(cls, check: ApplicationCheck) -> "ApplicationCheckDTO":
        return cls(
            status=check.status,
            pid=check.pid,
            uptime_seconds=round(check.uptime_seconds, 1),
            runtime_version=check.runtime_version,
        )


class HealthSummaryDTO(BaseModel):
    """DTO representing the /health response payload."""

    status: HealthStatus = Field(description="Overall status")
    timestamp: datetime = Field(description="When the assessment ran")
    issues: List[str] = Field(default_factory=list, description="All dimension issues")
    overrides: List[str] = Field(
        default_factory=list, description="Override rules that escalated the status"
    )
    checks: Dict[str, HealthStatus] = Field(
        default_factory=dict, description="Status per dimension"
    )

    @classmethod
    def from_domain(cls, report: AggregateReport) -> "HealthSummaryDTO":
        return cls(
            status=report.status,
            timestamp=report.timestamp,
            issues=list(report.issues),
            overrides=list(report.overrides),
            checks=report.dimension_statuses(),
        )

    model_config = {
        "json_schema_extra": {
            "example": {
                "status": "Unhealthy",
                "timestamp": "2026-01-12T10:00:00Z",
                "issues": [
                    "Critical: approaching container memory limit - eviction risk"
                ],
                "overrides": ["container_limit"],
                "checks": {
                    "memory": "Healthy",
                    "gc": "Healthy",
                    "container": "Unhealthy",
                    "performance": "Healthy",
                },
            }
        }
    }


class HealthReportDTO(BaseModel):
    """DTO representing the /health/detailed response payload."""

    status: HealthStatus = Field(description="Overall status")
    timestamp: datetime = Field(description="When the assessment ran")
    issues: List[str] = Field(default_factory=list, description="All dimension issues")
    overrides: List[str] = Field(
        default_factory=list, description="Override rules that escalated the status"
    )
    checks: Dict[str, DimensionHealthDTO] = Field(
        default_factory=dict, description="Full result per dimension"
    )
    application: Optional[ApplicationCheckDTO] = Field(
        default=None, description="Liveness entry"
    )
    metrics: Dict[str, Any] = Field(
        default_factory=dict, description="Summary readings"
    )

    @classmethod
    def from_domain(cls, report: AggregateReport) -> "HealthReportDTO":
        return cls(
            status=report.status,
            timestamp=report.timestamp,
            issues=list(report.issues),
            overrides=list(report.overrides),
            checks={
                name: DimensionHealthDTO.from_domain(result)
                for name, result in report.dimensions.items()
            },
            application=(
                ApplicationCheckDTO.from_domain(report.application)
                if report.application
                else None
            ),
            metrics=dict(report.metrics),
        )


class ProbeResponseDTO(BaseModel):
    """Liveness and readiness probe payload."""

    status: HealthStatus = Field(description="Probe outcome")
    timestamp: datetime = Field(description="When the probe was answered")
    checks: Dict[str, HealthStatus] = Field(
        default_factory=dict, description="Dimensions the probe was gated on"
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "status": "Healthy",
                "timestamp": "2026-01-12T10:00:00Z",
                "checks": {},
            }
        }
    }


class WorkloadStatusDTO(BaseModel):
    """Quick status of the allocation workload, served by /status."""

    timestamp: datetime = Field(description="Response timestamp")
    status: HealthStatus = Field(description="Quick overall status")
    state: str = Field(description="Allocation loop state")
    iteration: int = Field(description="Allocation iterations so far")
    allocated_mb: float = Field(description="Memory currently held by the ledger")
    buffers: int = Field(description="Buffers currently held by the ledger")
    failures: int = Field(description="Allocation failures recovered from")
    working_set_mb: float = Field(description="Process resident memory")
    memory_pressure_percent: float = Field(
        description="Memory load against the high-load threshold"
    )
    container_utilization_percent: float = Field(
        description="Resident memory against the estimated limit"
    )
    container_limit_mb: float = Field(description="Estimated container limit")
    limit_detected: bool = Field(description="False when the fallback limit is used")
    uptime_seconds: float = Field(description="Process uptime in seconds")
    last_assessment: Optional[HealthStatus] = Field(
        default=None, description="Status of the latest periodic assessment"
    )
    last_assessment_error: Optional[str] = Field(
        default=None, description="Error of the latest failed assessment cycle"
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "timestamp": "2026-01-12T10:00:00Z",
                "status": "Degraded",
                "state": "running",
                "iteration": 42,
                "allocated_mb": 410.0,
                "buffers": 41,
                "failures": 1,
                "working_set_mb": 455.3,
                "memory_pressure_percent": 81.4,
                "container_utilization_percent": 88.9,
                "container_limit_mb": 512,
                "limit_detected": True,
                "uptime_seconds": 183.2,
                "last_assessment": "Degraded",
                "last_assessment_error": None,
            }
        }
    }


class ShutdownResponseDTO(BaseModel):
    """Acknowledgement of a shutdown request."""

    status: str = Field(default="accepted", description="Request outcome")
    reason: Optional[str] = Field(default=None, description="Reason recorded")
    already_requested: bool = Field(
        default=False, description="True when shutdown was already in progress"
    )
    timestamp: datetime = Field(description="Response timestamp")


class ServiceIndexDTO(BaseModel):
    """DTO representing metadata returned by the index endpoint."""

    name: str = Field(description="Service name")
    description: str = Field(description="Service description")
    version: str = Field(description="Service version")
    environment: str = Field(description="Current deployment environment")
    git_commit: str = Field(description="Git commit hash")
    build_time: str = Field(description="Build timestamp")
    started_at: datetime = Field(description="Application start timestamp")
    uptime_seconds: float = Field(description="Uptime in seconds")
    endpoints: Dict[str, str] = Field(
        default_factory=dict, description="Available endpoints"
    )
