"""Sender access policy."""

from typing import Optional

from clawbridge.config import AccessPolicy


def is_allowed(sender_id: str, policy: Optional[AccessPolicy]) -> bool:
    """Return True if sender may trigger the agent.

    ``open`` admits everyone. ``allowlist`` (the default, also used when no
    policy is given) admits only members of ``policy.allowed``.
    """
    if policy is not None and policy.mode == "open":
        return True
    allowed = policy.allowed if policy is not None and policy.allowed else frozenset()
    return sender_id in allowed
