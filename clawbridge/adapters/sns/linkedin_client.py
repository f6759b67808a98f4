"""LinkedIn client using aiohttp (UGC Posts API v2)."""

import asyncio
from pathlib import Path
from typing import Optional

import aiohttp

from clawbridge.config import LinkedInConfig
from clawbridge.ports.outbound import PostResult

LINKEDIN_API_BASE = "https://api.linkedin.com/v2"
UGC_POSTS_URL = f"{LINKEDIN_API_BASE}/ugcPosts"
REGISTER_UPLOAD_URL = f"{LINKEDIN_API_BASE}/assets?action=registerUpload"
IMAGE_RECIPE = "urn:li:digitalmediaRecipe:feedshare-image"
UPLOAD_MECHANISM = "com.linkedin.digitalmedia.uploading.MediaUploadHttpRequest"
VISIBILITIES = ("PUBLIC", "CONNECTIONS")


class LinkedInError(Exception):
    pass


class LinkedInClient:
    """Async LinkedIn API client for text, article and image posts."""

    def __init__(self, config: LinkedInConfig):
        self._config = config

    @property
    def is_configured(self) -> bool:
        return bool(self._config.access_token)

    @staticmethod
    def truncate_text(text: str, limit: int = 3000) -> str:
        if len(text) <= limit:
            return text
        return text[: limit - 3] + "..."

    @staticmethod
    def _bad_visibility(visibility: str, text: str) -> Optional[PostResult]:
        if visibility in VISIBILITIES:
            return None
        return PostResult(success=False, text=text,
                          error=f"Unsupported visibility {visibility!r} (expected PUBLIC or CONNECTIONS)")

    def _resolve_image(self, image_path: str) -> Path:
        """Resolve ``image_path`` inside the configured image directory."""
        if not self._config.image_dir:
            raise LinkedInError("Image posts are disabled: LINKEDIN_IMAGE_DIR is not set")
        base = Path(self._config.image_dir).resolve()
        target = (base / image_path).resolve()
        if not target.is_relative_to(base):
            raise LinkedInError(f"Image path {image_path} is outside LINKEDIN_IMAGE_DIR")
        return target

    def _headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self._config.access_token}",
            "Content-Type": "application/json",
            "X-Restli-Protocol-Version": "2.0.0",
        }

    async def _get_user_urn(self, session: aiohttp.ClientSession) -> str:
        """Get the authenticated user's URN (person ID)."""
        headers = {"Authorization": f"Bearer {self._config.access_token}"}
        async with session.get(f"{LINKEDIN_API_BASE}/userinfo", headers=headers) as resp:
            if resp.status >= 400:
                body = await resp.text()
                raise LinkedInError(f"LinkedIn auth failed (HTTP {resp.status}): {body}")
            data = await resp.json()
            if "sub" not in data:
                raise LinkedInError(f"Failed to get user info: {data}")
            return f"urn:li:person:{data['sub']}"

    async def _author_urn(self, session: aiohttp.ClientSession, required: bool) -> Optional[str]:
        if self._config.person_urn:
            return self._config.person_urn
        if not required:
            # LinkedIn infers the author from the token when omitted
            return None
        return await self._get_user_urn(session)

    @staticmethod
    def _share_body(text: str, category: str, visibility: str,
                    author: Optional[str], media: Optional[list] = None) -> dict:
        share = {
            "shareCommentary": {"text": text},
            "shareMediaCategory": category,
        }
        if media:
            share["media"] = media
        body = {
            "lifecycleState": "PUBLISHED",
            "specificContent": {"com.linkedin.ugc.ShareContent": share},
            "visibility": {"com.linkedin.ugc.MemberNetworkVisibility": visibility},
        }
        if author:
            body["author"] = author
        return body

    async def _create_post(self, session: aiohttp.ClientSession, body: dict, text: str) -> PostResult:
        async with session.post(UGC_POSTS_URL, headers=self._headers(), json=body) as resp:
            if resp.status >= 400:
                err = await resp.text()
                return PostResult(success=False, text=text,
                                  error=f"LinkedIn API error ({resp.status}): {err}")
            return PostResult(success=True, post_id=resp.headers.get("X-RestLi-Id"), text=text)

    async def _register_upload(self, session: aiohttp.ClientSession, owner: str) -> tuple:
        payload = {
            "registerUploadRequest": {
                "recipes": [IMAGE_RECIPE],
                "owner": owner,
                "serviceRelationships": [
                    {"relationshipType": "OWNER", "identifier": "urn:li:userGeneratedContent"}
                ],
            }
        }
        async with session.post(REGISTER_UPLOAD_URL, headers=self._headers(), json=payload) as resp:
            if resp.status >= 400:
                err = await resp.text()
                raise LinkedInError(f"LinkedIn upload registration failed ({resp.status}): {err}")
            data = await resp.json()
        try:
            value = data["value"]
            upload_url = value["uploadMechanism"][UPLOAD_MECHANISM]["uploadUrl"]
            asset = value["asset"]
        except (KeyError, TypeError) as e:
            raise LinkedInError(f"Unexpected upload registration response: {data}") from e
        return upload_url, asset

    async def _upload_binary(self, session: aiohttp.ClientSession, upload_url: str, data: bytes) -> None:
        headers = {"Authorization": f"Bearer {self._config.access_token}"}
        async with session.put(upload_url, headers=headers, data=data) as resp:
            if resp.status >= 400:
                err = await resp.text()
                raise LinkedInError(f"LinkedIn image upload failed ({resp.status}): {err}")

    async def post_text(self, text: str, visibility: str = "PUBLIC") -> PostResult:
        """Create a text post on LinkedIn."""
        text = self.truncate_text(text)
        rejected = self._bad_visibility(visibility, text)
        if rejected:
            return rejected
        try:
            async with aiohttp.ClientSession() as session:
                author = await self._author_urn(session, required=False)
                body = self._share_body(text, "NONE", visibility, author)
                return await self._create_post(session, body, text)
        except Exception as e:
            return PostResult(success=False, text=text, error=str(e))

    async def post_article(self, text: str, url: str, title: Optional[str] = None,
                           description: Optional[str] = None,
                           visibility: str = "PUBLIC") -> PostResult:
        """Share a URL with commentary."""
        text = self.truncate_text(text)
        rejected = self._bad_visibility(visibility, text)
        if rejected:
            return rejected
        media = {"status": "READY", "originalUrl": url}
        if title:
            media["title"] = {"text": title}
        if description:
            media["description"] = {"text": description}
        try:
            async with aiohttp.ClientSession() as session:
                author = await self._author_urn(session, required=False)
                body = self._share_body(text, "ARTICLE", visibility, author, [media])
                return await self._create_post(session, body, text)
        except Exception as e:
            return PostResult(success=False, text=text, error=str(e))

    async def post_image(self, text: str, image_path: str, visibility: str = "PUBLIC") -> PostResult:
        """Post an image: register asset → upload binary → create post."""
        text = self.truncate_text(text)
        rejected = self._bad_visibility(visibility, text)
        if rejected:
            return rejected
        try:
            path = self._resolve_image(image_path)
        except LinkedInError as e:
            return PostResult(success=False, text=text, error=str(e))
        try:
            data = await asyncio.to_thread(path.read_bytes)
        except OSError as e:
            return PostResult(success=False, text=text, error=f"Cannot read image {image_path}: {e}")

        try:
            async with aiohttp.ClientSession() as session:
                author = await self._author_urn(session, required=True)
                upload_url, asset = await self._register_upload(session, author)
                await self._upload_binary(session, upload_url, data)
                media = [{"status": "READY", "media": asset, "description": {"text": text}}]
                body = self._share_body(text, "IMAGE", visibility, author, media)
                return await self._create_post(session, body, text)
        except Exception as e:
            return PostResult(success=False, text=text, error=str(e))
