"""Process-wide holder for the single active platform client."""

from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class NotInitialized(Exception):
    """No platform client is connected yet."""


class ClientAlreadySet(Exception):
    """A client was published while another one is still active."""


class ClientHandle(Generic[T]):
    """Set once on connect, cleared once on disconnect.

    Everything runs on one event loop, so plain attribute access is atomic
    with respect to other tasks; the guards enforce the publish-once /
    clear-once lifecycle.
    """

    def __init__(self):
        self._client: Optional[T] = None

    @property
    def is_set(self) -> bool:
        return self._client is not None

    def publish(self, client: T) -> None:
        if self._client is not None and self._client is not client:
            raise ClientAlreadySet("platform client already published")
        self._client = client

    def get(self) -> T:
        if self._client is None:
            raise NotInitialized("Discord client not initialised")
        return self._client

    def clear(self) -> Optional[T]:
        """Detach and return the client (None if nothing was published)."""
        client, self._client = self._client, None
        return client
