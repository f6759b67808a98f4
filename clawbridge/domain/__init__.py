"""Domain layer — platform-agnostic bridge logic."""

from clawbridge.domain.access import is_allowed
from clawbridge.domain.chunker import MAX_MESSAGE_LENGTH, chunk_message
from clawbridge.domain.linkedin_command import USAGE, LinkedInCommand, parse_linkedin_command
from clawbridge.domain.session import PLATFORM, derive_session_key

__all__ = [
    "is_allowed",
    "MAX_MESSAGE_LENGTH",
    "chunk_message",
    "USAGE",
    "LinkedInCommand",
    "parse_linkedin_command",
    "PLATFORM",
    "derive_session_key",
]
