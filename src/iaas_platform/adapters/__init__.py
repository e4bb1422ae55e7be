"""Adapters layer - concrete implementations of port interfaces.

Adapters provide the actual implementations:
- Outbound adapters: server storage (JSON file, in-memory)

Inbound adapters (HTTP) live outside this package; they consume
iaas_platform.ports.inbound.ManageServers.
"""

from iaas_platform.adapters.outbound import (
    InMemoryServerRepository,
    JsonFileServerRepository,
)

__all__ = [
    # Outbound adapters
    "JsonFileServerRepository",
    "InMemoryServerRepository",
]
