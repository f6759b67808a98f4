"""Tests for the Discord adapter — message conversion and platform handle."""

from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

from clawbridge.adapters.discord.bot import (
    THREAD_AUTO_ARCHIVE_MINUTES,
    BridgeBot,
    DiscordMessageHandle,
    to_inbound_event,
)
from clawbridge.infrastructure.client_handle import ClientHandle

BOT_USER_ID = 999


def _make_message(content="hello", *, author_id=1234, is_bot=False, guild_id=42,
                  channel_id=100, text_channel=True) -> MagicMock:
    """Create a fake discord.Message."""
    msg = MagicMock()
    msg.content = content
    msg.channel = MagicMock(spec=discord.TextChannel) if text_channel else MagicMock(spec=discord.Thread)
    msg.channel.id = channel_id
    msg.channel.typing = AsyncMock()
    msg.guild = None
    if guild_id is not None:
        msg.guild = MagicMock()
        msg.guild.id = guild_id
    msg.author = MagicMock()
    msg.author.id = author_id
    msg.author.name = "alice"
    msg.author.bot = is_bot
    msg.reply = AsyncMock()
    msg.add_reaction = AsyncMock()
    msg.create_thread = AsyncMock()
    return msg


def _own_user():
    user = MagicMock()
    user.id = BOT_USER_ID
    return user


class TestToInboundEvent:
    def test_guild_message(self):
        event = to_inbound_event(_make_message(), _own_user())
        assert event.sender_id == "1234"
        assert event.sender_name == "alice"
        assert event.text == "hello"
        assert event.channel_id == "100"
        assert event.guild_id == "42"
        assert event.is_self is False
        assert event.is_bot is False
        assert event.is_direct is False

    def test_direct_message(self):
        event = to_inbound_event(_make_message(guild_id=None), _own_user())
        assert event.guild_id is None
        assert event.is_direct is True

    def test_own_message(self):
        event = to_inbound_event(_make_message(author_id=BOT_USER_ID, is_bot=True), _own_user())
        assert event.is_self is True
        assert event.is_bot is True

    def test_before_ready(self):
        event = to_inbound_event(_make_message(), None)
        assert event.is_self is False

    def test_missing_content(self):
        event = to_inbound_event(_make_message(content=None), _own_user())
        assert event.text == ""


class TestDiscordMessageHandle:
    def test_threads_only_in_text_channels(self):
        assert DiscordMessageHandle(_make_message()).supports_threads is True
        assert DiscordMessageHandle(_make_message(text_channel=False)).supports_threads is False

    @pytest.mark.asyncio
    async def test_reply_react_typing(self):
        msg = _make_message()
        handle = DiscordMessageHandle(msg)
        await handle.reply("hi")
        await handle.react("🚫")
        await handle.send_typing()
        msg.reply.assert_awaited_once_with("hi")
        msg.add_reaction.assert_awaited_once_with("🚫")
        msg.channel.typing.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_create_thread_and_send(self):
        msg = _make_message()
        thread = MagicMock()
        thread.send = AsyncMock()
        msg.create_thread = AsyncMock(return_value=thread)

        handle = DiscordMessageHandle(msg)
        created = await handle.create_thread("alice — 2026-03-01")
        await created.send("chunk")

        msg.create_thread.assert_awaited_once_with(
            name="alice — 2026-03-01",
            auto_archive_duration=THREAD_AUTO_ARCHIVE_MINUTES,
        )
        thread.send.assert_awaited_once_with("chunk")

    @pytest.mark.asyncio
    async def test_thread_name_truncated(self):
        msg = _make_message()
        handle = DiscordMessageHandle(msg)
        await handle.create_thread("n" * 150)
        assert len(msg.create_thread.await_args.kwargs["name"]) == 100


class TestBridgeBot:
    def _make_bot(self):
        dispatcher = MagicMock()
        dispatcher.dispatch = AsyncMock()
        handle = ClientHandle()
        bot = BridgeBot(dispatcher, handle)
        bot._connection = MagicMock()
        bot._connection.user = _own_user()
        return bot, dispatcher, handle

    @pytest.mark.asyncio
    async def test_on_ready_publishes_client(self):
        bot, _, handle = self._make_bot()
        await bot.on_ready()
        assert handle.get() is bot

    @pytest.mark.asyncio
    async def test_on_message_delegates(self):
        bot, dispatcher, _ = self._make_bot()
        await bot.on_message(_make_message("ping"))
        event, msg_handle = dispatcher.dispatch.await_args.args
        assert event.text == "ping"
        assert isinstance(msg_handle, DiscordMessageHandle)
