"""Metrics exporters."""

from .prometheus_metrics import METRIC_PREFIX, PrometheusWorkloadMetrics

__all__ = ["METRIC_PREFIX", "PrometheusWorkloadMetrics"]
