"""
Domain Errors

Error types raised inside the assessment engine. None of them is allowed to
reach the top level: each is caught at a loop or controller boundary and
turned into a degraded status.
"""

from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base class for domain errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class RuntimeProbeError(DomainError):
    """Raised when process counters cannot be read."""


class LimitDetectionError(DomainError):
    """Raised when the high-load threshold signal is missing or malformed."""

    def __init__(self, reason: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(f"Unable to detect memory limit: {reason}", details)


class AssessmentError(DomainError):
    """Raised when a dimension assessor fails."""

    def __init__(
        self,
        dimension: str,
        cause: BaseException,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.dimension = dimension
        super().__init__(f"Assessment of '{dimension}' failed: {cause}", details)
