"""JSON file Server Repository implementation.

This adapter implements the ServerRepository protocol by keeping the
whole server collection in one JSON document.

File Format:
    A top-level array of server records:
    [{"id", "name", "status", "cpu_cores", "ram_gb", "storage_gb",
      "disks": [{"id", "size_gb", "attached_at"}, ...]}, ...]

Write Protocol:
    lock -> read + parse -> mutate in memory -> serialize -> write temp
    file in the same directory -> fsync -> os.replace over the store ->
    unlock. The store file is always either the previous complete
    document or the new one.

    Each write replaces the file, so its permission bits are copied
    from the file being replaced. A store created from scratch gets
    mode 0600 (owner read/write only).

Thread Safety:
    Every operation holds an exclusive lock shared by all adapters that
    target the same resolved path in this process. Access from several
    processes is NOT supported: nothing coordinates across processes.
    Locks are never released from the per-path table, which holds one
    entry for every distinct store path opened in the process.
"""

from __future__ import annotations

import os
import stat
import tempfile
import threading
import time
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Callable, Iterator, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as SchemaError

from iaas_platform.domain.entities import Disk, Server, ServerStatus
from iaas_platform.domain.errors import (
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from iaas_platform.domain.value_objects import DiskId, ServerId
from iaas_platform.infrastructure.logging import get_logger
from iaas_platform.infrastructure.metrics import MetricsRegistry
from iaas_platform.infrastructure.tracing import trace_span
from iaas_platform.ports.outbound.server_repository import ServerRepository


logger = get_logger(__name__)


class DiskRecord(BaseModel):
    """On-disk representation of a disk."""

    model_config = ConfigDict(strict=True)

    id: str = Field(min_length=1)
    size_gb: int = Field(gt=0)
    attached_at: datetime = Field(strict=False)


class ServerRecord(BaseModel):
    """On-disk representation of a server."""

    model_config = ConfigDict(strict=True)

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    status: ServerStatus = Field(strict=False)
    cpu_cores: int = Field(default=1, gt=0)
    ram_gb: int = Field(default=1, gt=0)
    storage_gb: int = Field(default=10, gt=0)
    disks: list[DiskRecord]

    @classmethod
    def from_entity(cls, server: Server) -> ServerRecord:
        return cls(
            id=server.server_id,
            name=server.name,
            status=server.status,
            cpu_cores=server.cpu_cores,
            ram_gb=server.ram_gb,
            storage_gb=server.storage_gb,
            disks=[
                DiskRecord(id=disk.disk_id, size_gb=disk.size_gb, attached_at=disk.attached_at)
                for disk in server.disks
            ],
        )

    def to_entity(self) -> Server:
        return Server(
            server_id=ServerId(self.id),
            name=self.name,
            status=self.status,
            cpu_cores=self.cpu_cores,
            ram_gb=self.ram_gb,
            storage_gb=self.storage_gb,
            disks=[
                Disk(disk_id=DiskId(d.id), size_gb=d.size_gb, attached_at=d.attached_at)
                for d in self.disks
            ],
        )


_STORE_SCHEMA = TypeAdapter(list[ServerRecord])

# One lock per resolved store path, shared by every adapter in the process
_path_locks: dict[Path, threading.Lock] = {}
_path_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.Lock:
    with _path_locks_guard:
        lock = _path_locks.get(path)
        if lock is None:
            lock = threading.Lock()
            _path_locks[path] = lock
        return lock


class JsonFileServerRepository(ServerRepository):
    """File-based implementation of the ServerRepository protocol.

    Attributes:
        store_path: Path to the JSON store file.
    """

    def __init__(
        self,
        store_path: str | Path,
        fsync: bool = True,
        metrics: MetricsRegistry | None = None,
    ) -> None:
        """Initialize the repository.

        The store file itself is created lazily on the first write; a
        missing file reads as an empty collection.

        Args:
            store_path: Path to the JSON store file.
            fsync: If True, fsync the temp file and directory on write.
            metrics: Optional metrics registry.

        Raises:
            PersistenceError: If the store directory cannot be created.
        """
        self._store_path = Path(store_path).absolute()
        self._fsync = fsync
        self._metrics = metrics
        self._lock = _lock_for(self._store_path.resolve())

        try:
            self._store_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            logger.error("store_directory_unavailable", path=str(self._store_path.parent), error=str(exc))
            raise PersistenceError("Server store is not available") from exc

    @property
    def store_path(self) -> Path:
        """Return the store file path."""
        return self._store_path

    def save(self, server: Server) -> None:
        """Insert or replace a server keyed by its identifier."""
        with self._locked("save"):
            servers = self._load()
            for index, existing in enumerate(servers):
                if existing.server_id == server.server_id:
                    servers[index] = server
                    break
            else:
                servers.append(server)
            self._store(servers)

    def find_by_id(self, server_id: str) -> Optional[Server]:
        """Get a server by ID, or None."""
        with self._locked("find_by_id"):
            servers = self._load()
        for server in servers:
            if server.server_id == server_id:
                return server
        return None

    def find_all(self) -> list[Server]:
        """Get every server in store order."""
        with self._locked("find_all"):
            return self._load()

    def update(self, server_id: str, mutate: Callable[[Server], object]) -> Server:
        """Atomically load, mutate and persist one server.

        The server handed to ``mutate`` is a private copy decoded from
        the store, so a failing mutation leaves nothing behind.
        """
        with self._locked("update"):
            servers = self._load()
            for server in servers:
                if server.server_id == server_id:
                    break
            else:
                raise NotFoundError(f"Server {server_id} not found")

            mutate(server)
            self._store(servers)
            return server

    @contextmanager
    def _locked(self, operation: str) -> Iterator[None]:
        """Hold the store lock for the duration of an operation."""
        started = time.perf_counter()
        with self._lock:
            if self._metrics:
                self._metrics.store_lock_wait_seconds.labels(operation=operation).observe(
                    time.perf_counter() - started
                )
            with trace_span(f"store.{operation}", {"store.operation": operation}):
                yield

    def _load(self) -> list[Server]:
        """Read and decode the store. Caller must hold the lock."""
        try:
            raw = self._store_path.read_bytes()
        except FileNotFoundError:
            return []
        except OSError as exc:
            logger.error("store_read_failed", path=str(self._store_path), error=str(exc))
            raise PersistenceError("Server store could not be read") from exc

        try:
            records = _STORE_SCHEMA.validate_json(raw)
            servers = [record.to_entity() for record in records]
        except (SchemaError, ValidationError) as exc:
            logger.error("store_corrupt", path=str(self._store_path), error=str(exc))
            raise PersistenceError("Server store is corrupt") from exc

        seen: set[str] = set()
        for server in servers:
            if server.server_id in seen:
                logger.error("store_corrupt", path=str(self._store_path), duplicate_id=server.server_id)
                raise PersistenceError("Server store is corrupt")
            seen.add(server.server_id)
        return servers

    def _store(self, servers: list[Server]) -> None:
        """Replace the store with ``servers``. Caller must hold the lock.

        Raises:
            PersistenceError: If any step fails; the previous file is
                left untouched and the temp file removed.
        """
        directory = self._store_path.parent
        tmp_path: Path | None = None
        try:
            payload = _STORE_SCHEMA.dump_json(
                [ServerRecord.from_entity(server) for server in servers], indent=2
            )
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self._store_path.name}.", suffix=".tmp", dir=directory
            )
            tmp_path = Path(tmp_name)
            with os.fdopen(fd, "wb") as handle:
                handle.write(payload)
                handle.flush()
                if self._fsync:
                    os.fsync(handle.fileno())
            self._copy_mode(tmp_path)
            os.replace(tmp_path, self._store_path)
        except (OSError, SchemaError) as exc:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)
            if self._metrics:
                self._metrics.store_writes_total.labels(status="error").inc()
            logger.error("store_write_failed", path=str(self._store_path), error=str(exc))
            raise PersistenceError("Server store could not be written") from exc

        if self._fsync:
            self._sync_directory(directory)
        if self._metrics:
            self._metrics.store_writes_total.labels(status="success").inc()
            self._metrics.store_servers.set(len(servers))

    def _copy_mode(self, tmp_path: Path) -> None:
        """Give the temp file the permission bits of the current store."""
        try:
            mode = stat.S_IMODE(self._store_path.stat().st_mode)
        except FileNotFoundError:
            return
        os.chmod(tmp_path, mode)

    def _sync_directory(self, directory: Path) -> None:
        """Persist the rename itself. Best effort: not every platform allows it."""
        try:
            dir_fd = os.open(directory, os.O_RDONLY)
        except OSError as exc:
            logger.warning("store_directory_sync_skipped", path=str(directory), error=str(exc))
            return
        try:
            os.fsync(dir_fd)
        except OSError as exc:
            logger.warning("store_directory_sync_skipped", path=str(directory), error=str(exc))
        finally:
            os.close(dir_fd)
