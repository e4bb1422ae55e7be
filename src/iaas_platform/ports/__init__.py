"""Ports layer - interface definitions following Hexagonal Architecture.

Ports are abstract interfaces (protocols) that define contracts:
- Inbound ports: use cases offered to driving adapters (ManageServers)
- Outbound ports: storage the core depends on (ServerRepository)

Adapters implement these ports with concrete functionality.
"""

from iaas_platform.ports.inbound import (
    AttachDiskCommand,
    CreateServerCommand,
    ManageServers,
)
from iaas_platform.ports.outbound import ServerRepository

__all__ = [
    # Inbound ports
    "ManageServers",
    "CreateServerCommand",
    "AttachDiskCommand",
    # Outbound ports
    "ServerRepository",
]
