"""Parse ``/linkedin``-style post commands."""

import re
from dataclasses import dataclass
from typing import Optional

USAGE = (
    "Usage:\n"
    "• `Hello world!` — text post\n"
    "• `url:https://example.com Great read!` — share article\n"
    "• `image:/path/to/img.jpg Check this out` — share image\n"
    "• `visibility:connections Just for my network` — connections-only"
)

_VISIBILITY_RE = re.compile(r"^visibility:(public|connections)\s+", re.IGNORECASE)
_URL_RE = re.compile(r"^url:(\S+)\s+(.+)", re.DOTALL)
_IMAGE_RE = re.compile(r"^image:(\S+)\s+(.+)", re.DOTALL)


@dataclass
class LinkedInCommand:
    kind: str  # "text" | "article" | "image"
    text: str
    visibility: str = "PUBLIC"
    url: Optional[str] = None
    image_path: Optional[str] = None


def parse_linkedin_command(body: str) -> Optional[LinkedInCommand]:
    """Return the parsed command, or None for an empty body (show USAGE)."""
    remaining = (body or "").strip()
    if not remaining:
        return None

    visibility = "PUBLIC"
    m = _VISIBILITY_RE.match(remaining)
    if m:
        visibility = m.group(1).upper()
        remaining = remaining[m.end():]

    m = _URL_RE.match(remaining)
    if m:
        return LinkedInCommand("article", m.group(2).strip(), visibility, url=m.group(1))

    m = _IMAGE_RE.match(remaining)
    if m:
        return LinkedInCommand("image", m.group(2).strip(), visibility, image_path=m.group(1))

    return LinkedInCommand("text", remaining, visibility)
