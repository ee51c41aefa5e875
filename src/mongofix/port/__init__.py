from .gateway import BaseGateway

__all__ = ["BaseGateway"]
