"""Client facade bundling the per-kind clients over one transport.

Usage:
    async with Client.from_config(load_config().api) as client:
        volume, _ = await client.volume.get("my-volume")
        action, _ = await client.volume.resize(volume, 100)
        await client.action.wait_for(action)
"""

from .api.transport import HTTPTransport, Transport
from .clients import ActionClient, FirewallClient, PrimaryIPClient, VolumeClient
from .config import APIConfig
from .constants import DEFAULT_POLL_INTERVAL


class Client:
    """Entry point to the API. Each resource kind is reached through an attribute."""

    def __init__(self, transport: Transport, poll_interval: float = DEFAULT_POLL_INTERVAL):
        self.transport = transport
        self.action = ActionClient(transport, poll_interval=poll_interval)
        self.firewall = FirewallClient(transport)
        self.volume = VolumeClient(transport)
        self.primary_ip = PrimaryIPClient(transport)

    @classmethod
    def from_config(cls, config: APIConfig) -> "Client":
        """Build a client on the default HTTP transport."""
        return cls(HTTPTransport(config), poll_interval=config.poll_interval)

    async def __aenter__(self) -> "Client":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the transport if it holds resources."""
        close = getattr(self.transport, "close", None)
        if close is not None:
            await close()
