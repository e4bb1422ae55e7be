"""Inbound ports - use-case contracts for driving adapters.

An HTTP (or CLI) adapter translates wire requests into the commands
defined here, calls ManageServers, and maps the typed errors from
iaas_platform.domain.errors onto its own status codes.
"""

from iaas_platform.ports.inbound.manage_servers import (
    AttachDiskCommand,
    CreateServerCommand,
    ManageServers,
)

__all__ = [
    "ManageServers",
    "CreateServerCommand",
    "AttachDiskCommand",
]
