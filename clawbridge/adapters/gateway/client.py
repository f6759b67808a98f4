"""Gateway client — forwards a chat turn to the backend agent over HTTP (aiohttp)."""

import asyncio
import sys
from typing import Optional

import aiohttp

from clawbridge.config import GatewayConfig
from clawbridge.domain.session import PLATFORM
from clawbridge.ports.outbound import GatewayRequest, GatewayResponse

NO_BODY = "(no body)"
NO_RESPONSE = "(no response)"


def _log(msg: str):
    print(msg, file=sys.stderr)


class GatewayError(Exception):
    """Non-2xx status or transport failure talking to the gateway."""

    def __init__(self, status: Optional[int], body: str):
        self.status = status
        self.body = body
        if status is None:
            super().__init__(f"gateway unreachable: {body}")
        else:
            super().__init__(f"gateway error {status}: {body}")


class GatewayClient:
    """Single-attempt client for ``POST {url}/agents/{agent_id}/chat``."""

    def __init__(self, config: GatewayConfig):
        self._config = config

    @property
    def chat_url(self) -> str:
        return f"{self._config.url}/agents/{self._config.agent_id}/chat"

    def _headers(self) -> dict:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._config.token}",
        }

    @staticmethod
    def build_payload(request: GatewayRequest) -> dict:
        return {
            "message": request.message,
            "sessionKey": request.session_key,
            "metadata": {
                "channel": PLATFORM,
                "channelName": request.channel_name,
                "userId": request.sender_id,
            },
        }

    async def call(self, request: GatewayRequest) -> GatewayResponse:
        payload = self.build_payload(request)
        try:
            async with aiohttp.ClientSession() as session:
                async with session.post(self.chat_url, headers=self._headers(), json=payload) as resp:
                    if not 200 <= resp.status < 300:
                        try:
                            body = await resp.text()
                        except Exception:
                            body = NO_BODY
                        raise GatewayError(resp.status, body)
                    try:
                        data = await resp.json(content_type=None)
                    except ValueError as e:
                        raise GatewayError(resp.status, f"invalid JSON in reply: {e}") from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise GatewayError(None, str(e) or type(e).__name__) from e

        text = data.get("text") if isinstance(data, dict) else None
        if not isinstance(text, str) or not text:
            _log(f"[gateway] reply for {request.session_key} had no text field")
            text = NO_RESPONSE
        return GatewayResponse(text=text, session_key=request.session_key)
