"""Domain ports package."""

from .assessor import IDimensionAssessor
from .metrics import IWorkloadMetrics
from .runtime_probe import IRuntimeProbe

__all__ = ["IDimensionAssessor", "IRuntimeProbe", "IWorkloadMetrics"]
