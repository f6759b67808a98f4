"""Port interfaces (Hexagonal Architecture)."""

from clawbridge.ports.inbound import InboundEvent
from clawbridge.ports.outbound import (
    GatewayPort,
    GatewayRequest,
    GatewayResponse,
    MessageHandle,
    PostResult,
    ThreadHandle,
)

__all__ = [
    "InboundEvent",
    "GatewayPort",
    "GatewayRequest",
    "GatewayResponse",
    "MessageHandle",
    "PostResult",
    "ThreadHandle",
]
