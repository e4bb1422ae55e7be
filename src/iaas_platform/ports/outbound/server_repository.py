"""Server Repository port for persisting servers.

This outbound port defines the storage contract for the application
service. It carries no knowledge of the storage medium.

References:
    - adapters/outbound/json_file_repository.py
    - adapters/outbound/in_memory_repository.py
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Callable, Optional, Protocol

from iaas_platform.domain.entities import Server


class ServerRepository(Protocol):
    """Protocol for server persistence.

    Visibility:
        A save() or update() that returns is visible to every
        find_by_id()/find_all() issued after it completes.

    Thread Safety:
        All methods must be thread-safe. update() must be atomic with
        respect to every other save() and update().
    """

    @abstractmethod
    def save(self, server: Server) -> None:
        """Insert or replace a server keyed by its identifier.

        Args:
            server: Server to persist.

        Raises:
            PersistenceError: If the store cannot be read or written.
        """
        ...

    @abstractmethod
    def find_by_id(self, server_id: str) -> Optional[Server]:
        """Get a server by ID.

        Args:
            server_id: Server ID.

        Returns:
            Server or None if not found.

        Raises:
            PersistenceError: If the store cannot be read.
        """
        ...

    @abstractmethod
    def find_all(self) -> list[Server]:
        """Get every persisted server in insertion order.

        Raises:
            PersistenceError: If the store cannot be read.
        """
        ...

    @abstractmethod
    def update(self, server_id: str, mutate: Callable[[Server], object]) -> Server:
        """Atomically load, mutate and persist one server.

        If ``mutate`` raises, nothing is persisted and the exception
        propagates unchanged.

        Args:
            server_id: Server to update.
            mutate: Callback applied to the loaded server.

        Returns:
            The server as persisted.

        Raises:
            NotFoundError: If the server does not exist.
            PersistenceError: If the store cannot be read or written.
        """
        ...
