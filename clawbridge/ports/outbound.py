"""Outbound ports — interfaces for the gateway backend and the chat platform."""

from dataclasses import dataclass
from typing import Optional, Protocol, runtime_checkable


@dataclass
class GatewayRequest:
    session_key: str
    message: str
    sender_id: str
    channel_name: str


@dataclass
class GatewayResponse:
    text: str
    session_key: str


@dataclass
class PostResult:
    """Unified result type for SNS post operations."""

    success: bool
    post_id: Optional[str] = None
    text: Optional[str] = None
    error: Optional[str] = None


@runtime_checkable
class GatewayPort(Protocol):
    """Interface for the backend conversational agent."""

    async def call(self, request: GatewayRequest) -> GatewayResponse: ...


@runtime_checkable
class ThreadHandle(Protocol):
    """A sub-thread created under an inbound message."""

    async def send(self, text: str) -> None: ...


@runtime_checkable
class MessageHandle(Protocol):
    """Platform operations available on the message that triggered a reply."""

    @property
    def supports_threads(self) -> bool: ...

    async def reply(self, text: str) -> None: ...
    async def react(self, emoji: str) -> None: ...
    async def send_typing(self) -> None: ...
    async def create_thread(self, name: str) -> ThreadHandle: ...
