"""Claw Discord Bridge — routes Discord channels to a backend agent gateway."""

from clawbridge.config import (
    AccessPolicy,
    BridgeConfig,
    ChannelConfig,
    ConfigError,
    GatewayConfig,
    LinkedInConfig,
    __version__,
)
from clawbridge.domain import chunk_message, derive_session_key, is_allowed

__all__ = [
    "AccessPolicy",
    "BridgeConfig",
    "ChannelConfig",
    "ConfigError",
    "GatewayConfig",
    "LinkedInConfig",
    "__version__",
    "chunk_message",
    "derive_session_key",
    "is_allowed",
]
