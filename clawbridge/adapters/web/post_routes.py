"""Proactive post trigger — lets cron jobs push a message into a named channel."""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from clawbridge.adapters.discord.poster import ChannelNotConfigured, NotTextChannel
from clawbridge.adapters.web.deps import get_bridge, require_token
from clawbridge.infrastructure.client_handle import NotInitialized

post_router = APIRouter(prefix="/discord", tags=["Discord"])


class ChannelPostRequest(BaseModel):
    channel: str
    message: str


class ChannelPostResponse(BaseModel):
    ok: bool
    chunks: int


@post_router.post("/post", response_model=ChannelPostResponse, dependencies=[Depends(require_token)])
async def discord_post(req: ChannelPostRequest, bridge=Depends(get_bridge)):
    if bridge is None:
        raise HTTPException(status_code=503, detail="Discord bridge not running")
    try:
        chunks = await bridge.poster.post_to_channel(req.channel, req.message)
    except NotInitialized as e:
        raise HTTPException(status_code=503, detail=str(e))
    except ChannelNotConfigured as e:
        raise HTTPException(status_code=404, detail=str(e))
    except NotTextChannel as e:
        raise HTTPException(status_code=400, detail=str(e))
    return ChannelPostResponse(ok=True, chunks=len(chunks))
