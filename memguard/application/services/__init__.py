"""Application services: the two background loops and their helpers."""

from .allocation_loop import AllocationLedger, AllocationLoop, LoopState
from .assessment_loop import AssessmentLoop
from .assessment_service import HealthAssessmentService
from .memory_report import build_memory_report, container_utilization_pct
from .shutdown import ShutdownSignal

__all__ = [
    "AllocationLedger",
    "AllocationLoop",
    "AssessmentLoop",
    "HealthAssessmentService",
    "LoopState",
    "ShutdownSignal",
    "build_memory_report",
    "container_utilization_pct",
]
