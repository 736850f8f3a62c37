"""Application models."""

from .options import ServiceInfo, WorkloadOptions

__all__ = ["ServiceInfo", "WorkloadOptions"]
