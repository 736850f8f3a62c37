"""Runtime counter readers."""

from .cgroup import CgroupMemoryReader
from .runtime_probe import PsutilRuntimeProbe, collection_counts

__all__ = ["CgroupMemoryReader", "PsutilRuntimeProbe", "collection_counts"]
