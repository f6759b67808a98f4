"""Track platform work in progress so shutdown can wait for it."""

import asyncio


class InFlight:
    """Async context manager counting work that still needs the client."""

    def __init__(self):
        self._count = 0
        self._idle = asyncio.Event()
        self._idle.set()

    @property
    def count(self) -> int:
        return self._count

    async def __aenter__(self):
        self._count += 1
        self._idle.clear()
        return self

    async def __aexit__(self, *exc):
        self._count -= 1
        if self._count == 0:
            self._idle.set()
        return False

    async def wait_idle(self) -> None:
        await self._idle.wait()
