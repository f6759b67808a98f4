"""Run the bridge's HTTP side endpoints (and the Discord bot) under uvicorn."""

import uvicorn

from clawbridge.adapters.web.server import app
from clawbridge.config import BridgeConfig, ConfigError, DEFAULT_PORT


def main():
    try:
        port = BridgeConfig.from_env().port
    except ConfigError:
        port = DEFAULT_PORT
    uvicorn.run(app, host="0.0.0.0", port=port, log_level="info")


if __name__ == "__main__":
    main()
