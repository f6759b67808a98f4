"""Discord adapter — bridges discord.Client events to the InboundDispatcher."""

import sys
from typing import Optional

import discord

from clawbridge.adapters.discord.dispatcher import InboundDispatcher
from clawbridge.infrastructure.client_handle import ClientHandle
from clawbridge.ports.inbound import InboundEvent

THREAD_AUTO_ARCHIVE_MINUTES = 60


def _log(msg: str):
    print(msg, file=sys.stderr)


class DiscordThreadHandle:
    def __init__(self, thread: discord.Thread):
        self._thread = thread

    async def send(self, text: str) -> None:
        await self._thread.send(text)


class DiscordMessageHandle:
    """MessageHandle implementation over a discord.Message."""

    def __init__(self, message: discord.Message):
        self._message = message

    @property
    def supports_threads(self) -> bool:
        # Threads can only be started from messages in regular guild text channels
        return isinstance(self._message.channel, discord.TextChannel)

    async def reply(self, text: str) -> None:
        await self._message.reply(text)

    async def react(self, emoji: str) -> None:
        await self._message.add_reaction(emoji)

    async def send_typing(self) -> None:
        await self._message.channel.typing()

    async def create_thread(self, name: str) -> DiscordThreadHandle:
        thread = await self._message.create_thread(
            name=name[:100],
            auto_archive_duration=THREAD_AUTO_ARCHIVE_MINUTES,
        )
        return DiscordThreadHandle(thread)


def to_inbound_event(message: discord.Message, own_user: Optional[discord.ClientUser]) -> InboundEvent:
    """Convert a Discord message to a platform-agnostic InboundEvent."""
    return InboundEvent(
        sender_id=str(message.author.id),
        sender_name=message.author.name,
        text=message.content or "",
        channel_id=str(message.channel.id),
        guild_id=str(message.guild.id) if message.guild else None,
        is_self=own_user is not None and message.author.id == own_user.id,
        is_bot=bool(message.author.bot),
    )


class BridgeBot(discord.Client):
    """Discord client that forwards channel messages through the dispatcher."""

    def __init__(self, dispatcher: InboundDispatcher, handle: ClientHandle, **discord_kwargs):
        intents = discord.Intents.default()
        intents.message_content = True
        super().__init__(intents=intents, **discord_kwargs)
        self._dispatcher = dispatcher
        self._handle = handle

    async def on_ready(self):
        _log(f"[discord] Logged in as {self.user}")
        self._handle.publish(self)

    async def on_message(self, message: discord.Message):
        event = to_inbound_event(message, self.user)
        await self._dispatcher.dispatch(event, DiscordMessageHandle(message))
