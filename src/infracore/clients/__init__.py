"""Per-kind clients built on the generic resource client."""

from .action import ActionClient
from .firewall import FirewallClient
from .primary_ip import PrimaryIPClient
from .volume import VolumeClient

__all__ = ["ActionClient", "FirewallClient", "PrimaryIPClient", "VolumeClient"]
