"""Manage Servers port - the provisioning use cases.

References:
    - ports/outbound/server_repository.py (storage contract)
"""

from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass
from typing import Optional, Protocol

from iaas_platform.domain.entities import Server


@dataclass(frozen=True)
class CreateServerCommand:
    """Request to create a server.

    Sizing fields left as None are filled from provisioning defaults.
    """

    name: str
    cpu_cores: Optional[int] = None
    ram_gb: Optional[int] = None
    storage_gb: Optional[int] = None


@dataclass(frozen=True)
class AttachDiskCommand:
    """Request to attach a disk to a server identified out of band."""

    size_gb: int


class ManageServers(Protocol):
    """Protocol for server provisioning use cases.

    These operations are the only mutation entry points into the
    domain.

    Thread Safety:
        Implementations hold no shared mutable state and may be called
        concurrently; isolation is provided by the repository.

    Example:
        server = service.create_server(CreateServerCommand(name="web-1"))
        server = service.attach_disk(server.server_id, AttachDiskCommand(size_gb=100))
        servers = service.list_servers()
    """

    @abstractmethod
    def create_server(self, command: CreateServerCommand) -> Server:
        """Create and persist a new server.

        Args:
            command: Server name and optional sizing.

        Returns:
            The created server, in the provisioning state with no disks.

        Raises:
            ValidationError: If the name or sizing is invalid.
            PersistenceError: If the store cannot be written.
        """
        ...

    @abstractmethod
    def list_servers(self) -> list[Server]:
        """List all servers in store order.

        Returns:
            Servers in insertion order.

        Raises:
            PersistenceError: If the store is unreadable or corrupt.
        """
        ...

    @abstractmethod
    def attach_disk(self, server_id: str, command: AttachDiskCommand) -> Server:
        """Attach a new disk to a server.

        Args:
            server_id: Target server.
            command: Disk size.

        Returns:
            The updated server.

        Raises:
            NotFoundError: If the server does not exist.
            ValidationError: If size_gb is not positive.
            ConflictError: If the server is terminated.
            PersistenceError: If the store cannot be read or written.
        """
        ...
