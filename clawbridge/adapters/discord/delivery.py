"""Reply delivery — inline for short replies, a thread for long ones."""

import sys
from datetime import date
from typing import Callable, List, Optional

from clawbridge.domain.chunker import MAX_MESSAGE_LENGTH, chunk_message
from clawbridge.infrastructure.best_effort import attempt_best_effort
from clawbridge.ports.outbound import MessageHandle


def _log(msg: str):
    print(msg, file=sys.stderr)


def thread_title(sender_name: str, today: Optional[date] = None) -> str:
    today = today or date.today()
    return f"{sender_name} — {today.isoformat()}"


class DeliveryStrategy:
    """Deliver a reply to the message that triggered it.

    Chunks are always sent sequentially in text order.
    """

    def __init__(self, limit: int = MAX_MESSAGE_LENGTH,
                 today: Callable[[], date] = date.today):
        self._limit = limit
        self._today = today

    async def deliver(self, text: str, handle: MessageHandle, sender_name: str) -> List[str]:
        chunks = chunk_message(text, self._limit)

        if len(chunks) > 1 and handle.supports_threads:
            try:
                thread = await handle.create_thread(thread_title(sender_name, self._today()))
            except Exception as e:
                _log(f"[discord] thread creation failed, replying inline: {e}")
            else:
                for chunk in chunks:
                    await attempt_best_effort("thread send", thread.send(chunk))
                return chunks

        await self._reply_inline(chunks, handle)
        return chunks

    @staticmethod
    async def _reply_inline(chunks: List[str], handle: MessageHandle) -> None:
        for chunk in chunks:
            await attempt_best_effort("reply", handle.reply(chunk))
