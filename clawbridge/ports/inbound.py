"""Inbound port — platform-agnostic chat event."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class InboundEvent:
    """One chat message as seen by the bridge. Consumed once, not retained."""

    sender_id: str
    sender_name: str
    text: str
    channel_id: str
    guild_id: Optional[str]  # None for direct messages
    is_self: bool = False
    is_bot: bool = False

    @property
    def is_direct(self) -> bool:
        return self.guild_id is None
