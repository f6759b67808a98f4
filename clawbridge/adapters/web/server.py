"""FastAPI application — side endpoints and bridge startup/shutdown."""

import sys

from fastapi import Depends, FastAPI

from clawbridge.config import BridgeConfig, ConfigError, ready_to_start
from clawbridge.adapters.discord.launcher import DiscordBridge
from clawbridge.adapters.web.deps import get_bridge, set_runtime
from clawbridge.adapters.web.linkedin_routes import linkedin_router
from clawbridge.adapters.web.post_routes import post_router


def _log(msg: str):
    print(msg, file=sys.stderr)


app = FastAPI(title="Claw Discord Bridge")
app.include_router(post_router)
app.include_router(linkedin_router)


@app.get("/health")
async def health(bridge=Depends(get_bridge)):
    return {
        "discord": "connected" if bridge is not None and bridge.connected else "disconnected",
    }


@app.on_event("startup")
async def startup_event():
    try:
        config = BridgeConfig.from_env()
    except ConfigError as e:
        _log(f"[discord] invalid configuration — bot will not start: {e}")
        set_runtime(None)
        return

    bridge = None
    if ready_to_start(config):
        bridge = DiscordBridge(config)
        _log("[discord] Starting Discord bot...")
        bridge.start_background()
    set_runtime(config, bridge)


@app.on_event("shutdown")
async def shutdown_event():
    bridge = get_bridge()
    if bridge is not None:
        await bridge.stop()
    set_runtime(None)
