"""
Application Layer Package

Use cases, DTOs and the long-running services (allocation loop and periodic
assessment loop) that orchestrate the domain. Depends only on the domain
and shared layers; infrastructure is injected through ports.
"""

# Re-export submodules
from memguard.application import dtos, models, services, use_cases

__all__ = ["dtos", "models", "services", "use_cases"]
