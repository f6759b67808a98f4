"""Inbound dispatcher — routes one chat event to the gateway and back.

Each event is handled independently; the only shared state is the
read-only routing table and the gateway client.
"""

import sys
from enum import Enum
from typing import Optional

from clawbridge.config import ChannelConfig, GatewayConfig
from clawbridge.adapters.discord.delivery import DeliveryStrategy
from clawbridge.domain.access import is_allowed
from clawbridge.domain.session import derive_session_key
from clawbridge.infrastructure.best_effort import attempt_best_effort
from clawbridge.infrastructure.in_flight import InFlight
from clawbridge.ports.inbound import InboundEvent
from clawbridge.ports.outbound import GatewayPort, GatewayRequest, MessageHandle

DENIED_REACTION = "🚫"


def _log(msg: str):
    print(msg, file=sys.stderr)


class Outcome(str, Enum):
    FILTERED_OUT = "filtered-out"
    DENIED = "denied"
    FAILED = "failed"
    DELIVERED = "delivered"


class InboundDispatcher:
    def __init__(
        self,
        routing: ChannelConfig,
        gateway_config: GatewayConfig,
        gateway: GatewayPort,
        delivery: Optional[DeliveryStrategy] = None,
        in_flight: Optional[InFlight] = None,
    ):
        self._routing = routing
        self._agent_id = gateway_config.agent_id
        self._gateway = gateway
        self._delivery = delivery or DeliveryStrategy()
        self._in_flight = in_flight or InFlight()

    async def dispatch(self, event: InboundEvent, handle: MessageHandle) -> Outcome:
        async with self._in_flight:
            return await self._dispatch(event, handle)

    async def _dispatch(self, event: InboundEvent, handle: MessageHandle) -> Outcome:
        # Own (and other bot) messages would loop back through the agent
        if event.is_self or event.is_bot:
            return Outcome.FILTERED_OUT

        if event.guild_id != self._routing.guild_id:
            return Outcome.FILTERED_OUT

        channel_name = self._routing.channel_name_for_id(event.channel_id)
        if channel_name is None:
            return Outcome.FILTERED_OUT

        if self._routing.is_post_only(channel_name):
            return Outcome.FILTERED_OUT

        if not is_allowed(event.sender_id, self._routing.policy):
            _log(f"[discord] denied {event.sender_id} in #{channel_name}")
            await attempt_best_effort("deny reaction", handle.react(DENIED_REACTION))
            return Outcome.DENIED

        text = event.text.strip()
        if not text:
            return Outcome.FILTERED_OUT

        await attempt_best_effort("typing", handle.send_typing())

        session_key = derive_session_key(self._agent_id, channel_name)
        try:
            result = await self._gateway.call(GatewayRequest(
                session_key=session_key,
                message=text,
                sender_id=event.sender_id,
                channel_name=channel_name,
            ))
        except Exception as e:
            _log(f"[discord] Gateway error in #{channel_name}: {e}")
            await attempt_best_effort("error reply", handle.reply(f"⚠️ OpenClaw error: {e}"))
            return Outcome.FAILED

        await self._delivery.deliver(result.text, handle, event.sender_name)
        return Outcome.DELIVERED
