"""Cooperative shutdown signal shared by the background loops."""

from __future__ import annotations

import asyncio
from typing import Optional

from memguard.shared import get_logger

logger = get_logger(__name__)


class ShutdownSignal:
    """Set once; observed at the top of every loop iteration and by each sleep."""

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self._reason: Optional[str] = None

    @property
    def is_requested(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> Optional[str]:
        return self._reason

    def request(self, reason: str = "requested") -> bool:
        """Request shutdown. Returns False when it was already requested."""
        if self._event.is_set():
            return False
        self._reason = reason
        self._event.set()
        logger.info("shutdown.requested", reason=reason)
        return True

    async def wait(self, timeout: float) -> bool:
        """Sleep up to ``timeout`` seconds; True if shutdown was requested."""
        if self._event.is_set():
            return True
        try:
            await asyncio.wait_for(self._event.wait(), timeout=max(0.0, timeout))
        except asyncio.TimeoutError:
            return False
        return True
