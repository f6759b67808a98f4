"""Proactive posting — push a message to a named channel (cron jobs, alerts)."""

import sys
from typing import List, Optional

import discord

from clawbridge.config import ChannelConfig
from clawbridge.domain.chunker import MAX_MESSAGE_LENGTH, chunk_message
from clawbridge.infrastructure.client_handle import ClientHandle, NotInitialized
from clawbridge.infrastructure.in_flight import InFlight


def _log(msg: str):
    print(msg, file=sys.stderr)


class PosterError(Exception):
    """Base for errors returned to the proactive post caller."""


class ChannelNotConfigured(PosterError):
    pass


class NotTextChannel(PosterError):
    pass


class ProactivePoster:
    """Send into an existing channel by logical name; no threading, no reply."""

    def __init__(self, handle: ClientHandle, routing: ChannelConfig,
                 limit: int = MAX_MESSAGE_LENGTH, in_flight: Optional[InFlight] = None):
        self._handle = handle
        self._in_flight = in_flight or InFlight()
        self._routing = routing
        self._limit = limit

    async def _resolve(self, client: discord.Client, channel_id: str) -> discord.abc.Messageable:
        channel = client.get_channel(int(channel_id))
        if channel is None:
            try:
                channel = await client.fetch_channel(int(channel_id))
            except discord.HTTPException as e:
                raise NotTextChannel(f"Channel {channel_id} could not be fetched: {e}") from e
        if not isinstance(channel, discord.abc.Messageable):
            raise NotTextChannel(f"Channel {channel_id} is not a text channel")
        return channel

    async def post_to_channel(self, channel_name: str, message: str) -> List[str]:
        async with self._in_flight:
            return await self._post(self._handle.get(), channel_name, message)

    async def _post(self, client: discord.Client, channel_name: str, message: str) -> List[str]:
        channel_id = self._routing.channel_id_for_name(channel_name)
        if not channel_id:
            raise ChannelNotConfigured(f"No channel ID configured for channel name: {channel_name}")

        channel = await self._resolve(client, channel_id)
        chunks = chunk_message(message, self._limit)
        for chunk in chunks:
            await channel.send(chunk)
        _log(f"[discord] posted {len(chunks)} chunk(s) to #{channel_name}")
        return chunks


__all__ = [
    "PosterError",
    "NotInitialized",
    "ChannelNotConfigured",
    "NotTextChannel",
    "ProactivePoster",
]
