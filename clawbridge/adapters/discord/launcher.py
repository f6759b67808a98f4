"""Bridge lifecycle — build the Discord bot from config, start and stop it."""

import asyncio
import sys
from typing import Optional

from clawbridge.config import BridgeConfig, load_config
from clawbridge.adapters.discord.bot import BridgeBot
from clawbridge.adapters.discord.delivery import DeliveryStrategy
from clawbridge.adapters.discord.dispatcher import InboundDispatcher
from clawbridge.adapters.discord.poster import ProactivePoster
from clawbridge.adapters.gateway.client import GatewayClient
from clawbridge.infrastructure.client_handle import ClientHandle
from clawbridge.infrastructure.in_flight import InFlight


def _log(msg: str):
    print(msg, file=sys.stderr)


class DiscordBridge:
    """Owns the bot, the client handle and the proactive poster."""

    def __init__(self, config: BridgeConfig):
        self.config = config
        self.handle: ClientHandle[BridgeBot] = ClientHandle()
        self.in_flight = InFlight()
        self.dispatcher = InboundDispatcher(
            routing=config.routing,
            gateway_config=config.gateway,
            gateway=GatewayClient(config.gateway),
            delivery=DeliveryStrategy(),
            in_flight=self.in_flight,
        )
        self.poster = ProactivePoster(self.handle, config.routing, in_flight=self.in_flight)
        self.bot: Optional[BridgeBot] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def connected(self) -> bool:
        return self.handle.is_set

    async def run(self) -> None:
        """Connect and block until the client closes."""
        self.bot = BridgeBot(self.dispatcher, self.handle)
        try:
            await self.bot.start(self.config.bot_token)
        except Exception as e:
            _log(f"[discord] Failed to start bot: {e}")
        finally:
            self.handle.clear()

    def start_background(self) -> asyncio.Task:
        if self._task is None or self._task.done():
            self._task = asyncio.create_task(self.run())
        return self._task

    async def stop(self) -> None:
        """Refuse new posts, let in-flight sends finish, then disconnect."""
        client = self.handle.clear()
        if self.in_flight.count:
            _log(f"[discord] waiting for {self.in_flight.count} in-flight send(s)")
        await self.in_flight.wait_idle()
        bot = client or self.bot
        if bot is not None and not bot.is_closed():
            await bot.close()
            _log("[discord] Bot stopped")
        if self._task is not None:
            await asyncio.gather(self._task, return_exceptions=True)
            self._task = None


def build_bridge() -> Optional[DiscordBridge]:
    """Resolve config from the environment; None when the bridge must not start."""
    config = load_config()
    if config is None:
        return None
    return DiscordBridge(config)


async def run_bridge():
    bridge = build_bridge()
    if bridge is None:
        return
    await bridge.run()


if __name__ == "__main__":
    asyncio.run(run_bridge())
