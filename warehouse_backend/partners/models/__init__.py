from .client import Client
from .provider import Provider

__all__ = ["Client", "Provider"]
