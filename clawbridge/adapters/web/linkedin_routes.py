"""LinkedIn posting route."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from clawbridge.adapters.sns.linkedin_client import LinkedInClient
from clawbridge.adapters.web.deps import get_config, require_token
from clawbridge.domain.linkedin_command import USAGE, parse_linkedin_command

linkedin_router = APIRouter(prefix="/linkedin", tags=["LinkedIn"])


class LinkedInPostRequest(BaseModel):
    command: str


class LinkedInPostResponse(BaseModel):
    success: bool
    kind: Optional[str] = None
    post_id: Optional[str] = None
    error: Optional[str] = None
    message: str


def get_linkedin_client(config=Depends(get_config)) -> Optional[LinkedInClient]:
    if config is None or not config.linkedin.access_token:
        return None
    return LinkedInClient(config.linkedin)


def _summary(kind: str, result) -> str:
    if not result.success:
        return f"❌ LinkedIn {kind} post failed: {result.error}"
    msg = f"✅ LinkedIn {kind} post published!"
    if result.post_id:
        msg += f"\nPost ID: {result.post_id}"
    return msg


@linkedin_router.post("/post", response_model=LinkedInPostResponse, dependencies=[Depends(require_token)])
async def linkedin_post(req: LinkedInPostRequest, client=Depends(get_linkedin_client)):
    command = parse_linkedin_command(req.command)
    if command is None:
        return LinkedInPostResponse(success=False, message=USAGE)
    if client is None:
        raise HTTPException(status_code=503, detail="LinkedIn API not configured")

    if command.kind == "article":
        result = await client.post_article(command.text, command.url, visibility=command.visibility)
    elif command.kind == "image":
        result = await client.post_image(command.text, command.image_path, visibility=command.visibility)
    else:
        result = await client.post_text(command.text, visibility=command.visibility)

    return LinkedInPostResponse(
        success=result.success,
        kind=command.kind,
        post_id=result.post_id,
        error=result.error,
        message=_summary(command.kind, result),
    )
