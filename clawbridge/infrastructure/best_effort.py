"""Fire-and-forget wrapper for platform calls whose failure must not propagate."""

import sys
from typing import Awaitable, Optional, TypeVar

T = TypeVar("T")


def _log(msg: str):
    print(msg, file=sys.stderr)


async def attempt_best_effort(label: str, op: Awaitable[T]) -> Optional[T]:
    """Await ``op``; on any Exception log it and return None."""
    try:
        return await op
    except Exception as e:
        _log(f"[discord] {label} failed (ignored): {e}")
        return None
