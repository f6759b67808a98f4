"""Configuration — environment loading and the resolved bridge config."""

__version__ = "0.1.0"

import json
import os
import sys
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Optional, Tuple

from dotenv import load_dotenv

load_dotenv()

_stderr_print = lambda *a, **kw: print(*a, **kw, file=sys.stderr)

DEFAULT_GATEWAY_URL = "http://127.0.0.1:18789"
DEFAULT_GATEWAY_TOKEN = "dev-token"
DEFAULT_AGENT_ID = "main"
DEFAULT_PORT = 18790

DM_POLICIES = ("allowlist", "open")


class ConfigError(Exception):
    """Raised at startup when the bridge cannot be configured."""


def _truthy(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _split_list(raw: str) -> Tuple[str, ...]:
    return tuple(item.strip() for item in raw.split(",") if item.strip())


def parse_channel_map(raw: str) -> Dict[str, str]:
    """Parse ``name=id`` pairs (comma separated) or a JSON object."""
    raw = raw.strip()
    if not raw:
        return {}
    if raw.startswith("{"):
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ConfigError(f"DISCORD_CHANNELS is not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError("DISCORD_CHANNELS must be a JSON object")
        return {str(k).strip(): str(v).strip() for k, v in data.items()}

    channels: Dict[str, str] = {}
    for pair in _split_list(raw):
        name, sep, channel_id = pair.partition("=")
        if not sep or not name.strip() or not channel_id.strip():
            raise ConfigError(f"Malformed DISCORD_CHANNELS entry: {pair!r}")
        channels[name.strip()] = channel_id.strip()
    return channels


@dataclass(frozen=True)
class AccessPolicy:
    mode: str = "allowlist"
    allowed: FrozenSet[str] = frozenset()


@dataclass(frozen=True)
class GatewayConfig:
    url: str = DEFAULT_GATEWAY_URL
    token: str = DEFAULT_GATEWAY_TOKEN
    agent_id: str = DEFAULT_AGENT_ID


@dataclass(frozen=True)
class ChannelConfig:
    """Routing table — immutable for the lifetime of the process.

    Every post-only name must be a key of ``channels``.
    """

    guild_id: str = ""
    channels: Dict[str, str] = field(default_factory=dict)
    post_only: FrozenSet[str] = frozenset()
    policy: AccessPolicy = field(default_factory=AccessPolicy)
    _by_id: Dict[str, str] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self):
        unknown = sorted(set(self.post_only) - set(self.channels))
        if unknown:
            raise ConfigError(f"post-only channels not in DISCORD_CHANNELS: {', '.join(unknown)}")
        object.__setattr__(self, "_by_id", {cid: name for name, cid in self.channels.items()})

    def channel_name_for_id(self, channel_id: str) -> Optional[str]:
        return self._by_id.get(channel_id)

    def channel_id_for_name(self, channel_name: str) -> Optional[str]:
        return self.channels.get(channel_name)

    def is_post_only(self, channel_name: str) -> bool:
        return channel_name in self.post_only


@dataclass(frozen=True)
class LinkedInConfig:
    access_token: str = ""
    person_urn: str = ""
    image_dir: str = ""  # image posts may only read files under this directory


@dataclass(frozen=True)
class BridgeConfig:
    enabled: bool = True
    bot_token: str = ""
    port: int = DEFAULT_PORT
    routing: ChannelConfig = field(default_factory=ChannelConfig)
    gateway: GatewayConfig = field(default_factory=GatewayConfig)
    linkedin: LinkedInConfig = field(default_factory=LinkedInConfig)

    @classmethod
    def from_env(cls, env: Optional[Dict[str, str]] = None) -> "BridgeConfig":
        """Create BridgeConfig from environment variables, filling defaults."""
        env = os.environ if env is None else env

        def get(name: str, default: str = "") -> str:
            value = env.get(name, "")
            return value.strip() if value and value.strip() else default

        mode = get("DISCORD_DM_POLICY", "allowlist").lower()
        try:
            port = int(get("PORT", str(DEFAULT_PORT)))
        except ValueError as e:
            raise ConfigError(f"PORT must be an integer: {e}") from e

        return cls(
            enabled=_truthy(get("DISCORD_ENABLED", "true")),
            bot_token=get("DISCORD_BOT_TOKEN"),
            port=port,
            routing=ChannelConfig(
                guild_id=get("DISCORD_GUILD_ID"),
                channels=parse_channel_map(get("DISCORD_CHANNELS")),
                post_only=frozenset(_split_list(get("DISCORD_POST_ONLY_CHANNELS"))),
                policy=AccessPolicy(
                    mode=mode,
                    allowed=frozenset(_split_list(get("DISCORD_ALLOW_FROM"))),
                ),
            ),
            gateway=GatewayConfig(
                url=get("GATEWAY_URL", DEFAULT_GATEWAY_URL).rstrip("/"),
                token=get("GATEWAY_TOKEN", DEFAULT_GATEWAY_TOKEN),
                agent_id=get("AGENT_ID", DEFAULT_AGENT_ID),
            ),
            linkedin=LinkedInConfig(
                access_token=get("LINKEDIN_ACCESS_TOKEN"),
                person_urn=get("LINKEDIN_PERSON_URN"),
                image_dir=get("LINKEDIN_IMAGE_DIR"),
            ),
        )

    def validate(self) -> None:
        """Raise ConfigError listing every problem that prevents startup."""
        problems = []
        if not self.bot_token:
            problems.append("DISCORD_BOT_TOKEN is not set")
        if not self.routing.guild_id:
            problems.append("DISCORD_GUILD_ID is not set")
        if not self.routing.channels:
            problems.append("DISCORD_CHANNELS has no channels")
        bad_ids = sorted(name for name, cid in self.routing.channels.items() if not cid.isdigit())
        if bad_ids:
            problems.append(f"non-numeric channel ids for: {', '.join(bad_ids)}")
        if self.routing.policy.mode not in DM_POLICIES:
            problems.append(
                f"DISCORD_DM_POLICY={self.routing.policy.mode!r} (expected one of {', '.join(DM_POLICIES)})"
            )
        if problems:
            raise ConfigError("; ".join(problems))


def ready_to_start(config: BridgeConfig) -> bool:
    """Report (to stderr) why the bot must not start; True when it may."""
    if not config.enabled:
        _stderr_print("[discord] bridge registered but not enabled — set DISCORD_ENABLED=true")
        return False
    try:
        config.validate()
    except ConfigError as e:
        _stderr_print(f"[discord] {e} — bot will not start")
        return False
    return True


def load_config() -> Optional[BridgeConfig]:
    """Resolve config for startup. Returns None (after reporting) if unusable."""
    try:
        config = BridgeConfig.from_env()
    except ConfigError as e:
        _stderr_print(f"[discord] invalid configuration — bot will not start: {e}")
        return None
    return config if ready_to_start(config) else None
