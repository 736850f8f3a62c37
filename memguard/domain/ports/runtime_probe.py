"""Domain port for reading live runtime counters."""

from __future__ import annotations

from typing import Protocol

from memguard.domain.entities.runtime import RuntimeSnapshot


class IRuntimeProbe(Protocol):
    """Interface for capturing process and collector counters."""

    def capture(self) -> RuntimeSnapshot:
        """Read every counter once and return them as one snapshot."""
        ...
