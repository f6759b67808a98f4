from clawbridge.adapters.gateway.client import GatewayClient, GatewayError

__all__ = ["GatewayClient", "GatewayError"]
