"""Domain port implemented by every health dimension."""

from __future__ import annotations

from typing import Protocol

from memguard.domain.entities.health import DimensionResult
from memguard.domain.entities.runtime import RuntimeSnapshot


class IDimensionAssessor(Protocol):
    """One independent axis of health assessment."""

    name: str

    async def assess(self, snapshot: RuntimeSnapshot) -> DimensionResult:
        """Classify the snapshot along this dimension."""
        ...
