"""Package for Concrete Implementations of Store Gateways"""

import logging

from mongofix.exceptions import ConfigurationError
from mongofix.port.gateway import BaseGateway
from mongofix.utils.importlib import import_from_string

logger = logging.getLogger(__name__)


GATEWAY_PROVIDERS = {
    "memory": "mongofix.adapters.gateway.memory.MemoryGateway",
    "mongodb": "mongofix.adapters.gateway.mongodb.MongoGateway",
}


def build_gateway(conn_info: dict, name: str = "default") -> BaseGateway:
    """Construct the gateway described by `conn_info` and verify it is reachable.

    `conn_info["provider"]` is either a key of `GATEWAY_PROVIDERS` or the
    dotted path of a `BaseGateway` subclass.
    """
    provider = (conn_info or {}).get("provider")
    if not provider:
        raise ConfigurationError("You must define a gateway 'provider'")

    gateway_full_path = GATEWAY_PROVIDERS.get(provider, provider)
    if "." not in gateway_full_path:
        raise ConfigurationError(f"Unknown gateway provider '{provider}'")

    try:
        gateway_cls = import_from_string(gateway_full_path)
    except ImportError as exc:
        raise ConfigurationError(
            f"Could not load gateway provider '{provider}': {exc}"
        ) from exc

    if not (isinstance(gateway_cls, type) and issubclass(gateway_cls, BaseGateway)):
        raise ConfigurationError(f"'{gateway_full_path}' is not a Store Gateway")

    gateway = gateway_cls(name, conn_info)

    # Initialize a connection to check if everything is ok
    if not gateway.is_alive():
        gateway.close()
        raise ConfigurationError(
            f"Could not connect to store at {conn_info.get('database_uri', provider)}"
        )

    logger.debug(f"Gateway {gateway!r} is ready")
    return gateway
