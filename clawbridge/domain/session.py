"""Session key derivation — one backend conversation per (agent, channel)."""

PLATFORM = "discord"


def derive_session_key(agent_id: str, channel_name: str) -> str:
    return f"agent:{agent_id}:{PLATFORM}:{channel_name}"
