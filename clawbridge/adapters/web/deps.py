"""Shared FastAPI dependencies — runtime objects and bearer-token auth."""

import hmac
from typing import Optional

from fastapi import Depends, Header, HTTPException

from clawbridge.config import BridgeConfig

_runtime = {"config": None, "bridge": None}


def set_runtime(config: Optional[BridgeConfig], bridge=None) -> None:
    _runtime["config"] = config
    _runtime["bridge"] = bridge


def get_config() -> Optional[BridgeConfig]:
    return _runtime["config"]


def get_bridge():
    return _runtime["bridge"]


async def require_token(
    authorization: Optional[str] = Header(default=None),
    config: Optional[BridgeConfig] = Depends(get_config),
) -> None:
    """Accept ``Authorization: Bearer <GATEWAY_TOKEN>`` only."""
    if config is None:
        raise HTTPException(status_code=503, detail="Bridge not configured")
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not hmac.compare_digest(
        token.strip().encode(), config.gateway.token.encode()
    ):
        raise HTTPException(status_code=401, detail="Invalid or missing bearer token")
