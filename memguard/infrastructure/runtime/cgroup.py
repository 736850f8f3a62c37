"""Readers for the container memory ceiling and usage exposed by cgroups."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from memguard.shared import get_logger

logger = get_logger(__name__)

# cgroup v1 reports "no limit" as a huge page-aligned number.
_V1_UNLIMITED_FLOOR = 1 << 60


class CgroupMemoryReader:
    """Read memory limit and usage from cgroup v2, then cgroup v1."""

    def __init__(self, root: str = "/sys/fs/cgroup") -> None:
        self._root = Path(root)

    def limit_bytes(self) -> Optional[int]:
        v2 = self._read_int("memory.max")
        if v2 is not None:
            return v2
        v1 = self._read_int("memory/memory.limit_in_bytes")
        if v1 is not None and v1 < _V1_UNLIMITED_FLOOR:
            return v1
        return None

    def usage_bytes(self) -> Optional[int]:
        v2 = self._read_int("memory.current")
        if v2 is not None:
            return v2
        return self._read_int("memory/memory.usage_in_bytes")

    def _read_int(self, relative: str) -> Optional[int]:
        path = self._root / relative
        try:
            raw = path.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            return None
        except OSError as exc:
            logger.debug("cgroup.read_failed", path=str(path), error=str(exc))
            return None

        if not raw or raw == "max":
            return None
        try:
            value = int(raw)
        except ValueError:
            logger.debug("cgroup.malformed_value", path=str(path), value=raw)
            return None
        return value if value > 0 else None
