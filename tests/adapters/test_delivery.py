"""Tests for DeliveryStrategy."""

from datetime import date
from unittest.mock import AsyncMock, MagicMock

import pytest

from clawbridge.adapters.discord.delivery import DeliveryStrategy, thread_title


def _make_handle(supports_threads=True, thread_error=None):
    handle = MagicMock()
    handle.supports_threads = supports_threads
    handle.reply = AsyncMock()
    thread = MagicMock()
    thread.send = AsyncMock()
    if thread_error:
        handle.create_thread = AsyncMock(side_effect=thread_error)
    else:
        handle.create_thread = AsyncMock(return_value=thread)
    return handle, thread


def _strategy():
    return DeliveryStrategy(limit=1990, today=lambda: date(2026, 3, 1))


def test_thread_title():
    assert thread_title("alice", date(2026, 3, 1)) == "alice — 2026-03-01"


@pytest.mark.asyncio
async def test_single_chunk_replies_inline():
    handle, thread = _make_handle()
    await _strategy().deliver("short answer", handle, "alice")
    handle.reply.assert_awaited_once_with("short answer")
    handle.create_thread.assert_not_awaited()


@pytest.mark.asyncio
async def test_long_reply_goes_to_thread_in_order():
    handle, thread = _make_handle()
    text = "a" * 1990 + "b" * 1990 + "c" * 1020
    chunks = await _strategy().deliver(text, handle, "alice")

    assert len(chunks) == 3
    handle.create_thread.assert_awaited_once_with("alice — 2026-03-01")
    sent = [call.args[0] for call in thread.send.await_args_list]
    assert sent == ["a" * 1990, "b" * 1990, "c" * 1020]
    handle.reply.assert_not_awaited()


@pytest.mark.asyncio
async def test_thread_creation_failure_falls_back_to_replies():
    handle, thread = _make_handle(thread_error=RuntimeError("missing permissions"))
    text = "a" * 1990 + "b" * 1990 + "c" * 1020
    await _strategy().deliver(text, handle, "alice")

    sent = [call.args[0] for call in handle.reply.await_args_list]
    assert sent == ["a" * 1990, "b" * 1990, "c" * 1020]
    thread.send.assert_not_awaited()


@pytest.mark.asyncio
async def test_no_thread_support_replies_sequentially():
    handle, thread = _make_handle(supports_threads=False)
    await _strategy().deliver("x" * 5000, handle, "alice")
    assert handle.reply.await_count == 3
    handle.create_thread.assert_not_awaited()


@pytest.mark.asyncio
async def test_failed_send_does_not_stop_remaining_chunks():
    handle, thread = _make_handle()
    thread.send = AsyncMock(side_effect=[RuntimeError("429"), None, None])
    await _strategy().deliver("x" * 5000, handle, "alice")
    assert thread.send.await_count == 3


@pytest.mark.asyncio
async def test_failed_inline_reply_is_swallowed():
    handle, thread = _make_handle()
    handle.reply = AsyncMock(side_effect=RuntimeError("gone"))
    await _strategy().deliver("hi", handle, "alice")
    handle.reply.assert_awaited_once()
