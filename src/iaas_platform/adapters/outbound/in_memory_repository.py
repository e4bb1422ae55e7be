"""In-memory Server Repository for testing and development.

This adapter provides a storage-free implementation of the
ServerRepository protocol. Nothing survives the process.
"""

from __future__ import annotations

import copy
import threading
from typing import Callable, Optional

from iaas_platform.domain.entities import Server
from iaas_platform.domain.errors import NotFoundError
from iaas_platform.ports.outbound.server_repository import ServerRepository


class InMemoryServerRepository(ServerRepository):
    """Mock implementation of ServerRepository.

    Stores deep copies, so a server handed out can only change the
    stored state through save() or update().

    Example:
        repo = InMemoryServerRepository()
        repo.save(Server.create("web-1"))
        servers = repo.find_all()
    """

    def __init__(self) -> None:
        """Initialize an empty repository."""
        self._servers: dict[str, Server] = {}
        self._lock = threading.Lock()

    def save(self, server: Server) -> None:
        with self._lock:
            self._servers[server.server_id] = copy.deepcopy(server)

    def find_by_id(self, server_id: str) -> Optional[Server]:
        with self._lock:
            server = self._servers.get(server_id)
            return copy.deepcopy(server) if server is not None else None

    def find_all(self) -> list[Server]:
        with self._lock:
            return [copy.deepcopy(server) for server in self._servers.values()]

    def update(self, server_id: str, mutate: Callable[[Server], object]) -> Server:
        with self._lock:
            stored = self._servers.get(server_id)
            if stored is None:
                raise NotFoundError(f"Server {server_id} not found")
            server = copy.deepcopy(stored)
            mutate(server)
            self._servers[server_id] = server
            return copy.deepcopy(server)

    def __len__(self) -> int:
        with self._lock:
            return len(self._servers)
