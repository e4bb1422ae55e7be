"""Domain entities for the provisioning core.

Exports:
    - ServerStatus: Server lifecycle state machine
    - Disk: Block volume attached to a server
    - Server: Virtual server aggregate owning its disks
"""

from iaas_platform.domain.entities.server import Disk, Server, ServerStatus

__all__ = [
    "ServerStatus",
    "Disk",
    "Server",
]
