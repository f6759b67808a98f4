"""Split long text into segments under a platform's message length cap."""

from typing import List

# Discord rejects messages over 2000 chars; keep a margin for mentions/markup.
MAX_MESSAGE_LENGTH = 1990


def chunk_message(text: str, limit: int = MAX_MESSAGE_LENGTH) -> List[str]:
    """Split ``text`` into chunks of at most ``limit`` characters.

    Cuts at the last newline within the window when it falls in the second
    half of the window, otherwise hard-cuts at ``limit``. Leading whitespace
    of each following chunk is dropped.
    """
    if limit <= 0:
        raise ValueError("limit must be positive")
    if len(text) <= limit:
        return [text]

    chunks = []
    remaining = text
    while remaining:
        if len(remaining) <= limit:
            chunks.append(remaining)
            break
        cut = remaining.rfind("\n", 0, limit + 1)
        if cut < limit / 2:
            cut = limit
        chunks.append(remaining[:cut])
        remaining = remaining[cut:].lstrip()
    return chunks
