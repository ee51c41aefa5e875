# Adapters
from mongofix.adapters.gateway import GATEWAY_PROVIDERS, build_gateway
from mongofix.adapters.gateway.memory import MemoryGateway

__all__ = (
    "GATEWAY_PROVIDERS",
    "MemoryGateway",
    "build_gateway",
)
