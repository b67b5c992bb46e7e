"""infracore - Async client core for cloud firewalls, volumes and Primary IPs."""

from .client import Client
from .config import ClientConfig

__version__ = "0.1.0"
__all__ = ["Client", "ClientConfig"]
