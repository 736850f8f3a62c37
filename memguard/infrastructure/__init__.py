"""
Infrastructure Layer Package

Implementations of the domain ports that touch the outside world: psutil
and cgroup readers for runtime counters, and the Prometheus exporter.
"""

from memguard.infrastructure import metrics, runtime

__all__ = ["metrics", "runtime"]
