"""Infrastructure helpers shared by adapters."""

from clawbridge.infrastructure.best_effort import attempt_best_effort
from clawbridge.infrastructure.client_handle import ClientAlreadySet, ClientHandle, NotInitialized
from clawbridge.infrastructure.in_flight import InFlight

__all__ = [
    "attempt_best_effort",
    "ClientAlreadySet",
    "ClientHandle",
    "InFlight",
    "NotInitialized",
]
