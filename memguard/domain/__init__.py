"""
Domain Layer Package

The assessment engine: runtime snapshots, limit estimation, the four health
dimensions and their aggregation. Nothing here depends on web frameworks or
on the metrics exporter.
"""

from memguard.domain import entities, ports, services

__all__ = ["entities", "ports", "services"]
