"""Server and disk entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from iaas_platform.domain.errors import ConflictError, ValidationError
from iaas_platform.domain.value_objects import (
    DiskId,
    ServerId,
    create_disk_id,
    create_server_id,
)


class ServerStatus(Enum):
    """Server lifecycle state."""
    PROVISIONING = "provisioning"
    RUNNING = "running"
    STOPPED = "stopped"
    TERMINATED = "terminated"

    @property
    def is_terminal(self) -> bool:
        """True if no further mutation is permitted."""
        return self is ServerStatus.TERMINATED

    def can_transition_to(self, target: ServerStatus) -> bool:
        """Check whether moving to ``target`` is a legal transition.

        Args:
            target: Desired status.

        Returns:
            True if allowed.
        """
        return target in _ALLOWED_TRANSITIONS[self]


_ALLOWED_TRANSITIONS: dict[ServerStatus, frozenset[ServerStatus]] = {
    ServerStatus.PROVISIONING: frozenset({ServerStatus.RUNNING, ServerStatus.TERMINATED}),
    ServerStatus.RUNNING: frozenset({ServerStatus.STOPPED, ServerStatus.TERMINATED}),
    ServerStatus.STOPPED: frozenset({ServerStatus.RUNNING, ServerStatus.TERMINATED}),
    ServerStatus.TERMINATED: frozenset(),
}


def _require_positive_int(value: Any, what: str) -> None:
    # bool is an int subclass; True is not a size
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{what} must be an integer")
    if value <= 0:
        raise ValidationError(f"{what} must be greater than zero")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Disk:
    """Block volume attached to a server.

    A disk has no lifecycle of its own: it lives and dies with the
    server that owns it.
    """
    disk_id: DiskId
    size_gb: int
    attached_at: datetime = field(default_factory=_utcnow)

    def __post_init__(self) -> None:
        _require_positive_int(self.size_gb, "size_gb")

    @classmethod
    def create(cls, size_gb: int) -> Disk:
        """Create a disk with a fresh identifier, attached now.

        Args:
            size_gb: Size in gigabytes.

        Returns:
            New disk.

        Raises:
            ValidationError: If size_gb is not a positive integer.
        """
        return cls(disk_id=create_disk_id(), size_gb=size_gb)


_IMMUTABLE_FIELDS = frozenset({"server_id", "name"})


@dataclass
class Server:
    """Virtual server entity.

    ``server_id`` and ``name`` are fixed once set; ``disks`` is kept in
    attachment order.
    """
    server_id: ServerId
    name: str
    status: ServerStatus = ServerStatus.PROVISIONING
    cpu_cores: int = 1
    ram_gb: int = 1
    storage_gb: int = 10
    disks: list[Disk] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValidationError("name must be a non-empty string")
        _require_positive_int(self.cpu_cores, "cpu_cores")
        _require_positive_int(self.ram_gb, "ram_gb")
        _require_positive_int(self.storage_gb, "storage_gb")

    def __setattr__(self, name: str, value: Any) -> None:
        if name in _IMMUTABLE_FIELDS and name in self.__dict__:
            raise AttributeError(f"{name} cannot be changed once set")
        super().__setattr__(name, value)

    @classmethod
    def create(
        cls,
        name: str,
        cpu_cores: int = 1,
        ram_gb: int = 1,
        storage_gb: int = 10,
    ) -> Server:
        """Create a new server in the provisioning state.

        Args:
            name: Human-readable server name.
            cpu_cores: Virtual CPU count.
            ram_gb: Memory in gigabytes.
            storage_gb: Boot volume size in gigabytes.

        Returns:
            New server with a fresh identifier and no disks.

        Raises:
            ValidationError: If any argument is invalid.
        """
        return cls(
            server_id=create_server_id(),
            name=name,
            cpu_cores=cpu_cores,
            ram_gb=ram_gb,
            storage_gb=storage_gb,
        )

    def attach_disk(self, size_gb: int) -> Disk:
        """Attach a new disk to this server.

        Args:
            size_gb: Size of the new disk in gigabytes.

        Returns:
            The attached disk.

        Raises:
            ValidationError: If size_gb is not a positive integer.
            ConflictError: If the server is in a terminal status.
        """
        disk = Disk.create(size_gb)
        if self.status.is_terminal:
            raise ConflictError(f"Cannot attach disk to server in state {self.status.value}")
        self.disks.append(disk)
        return disk

    def transition_to(self, status: ServerStatus) -> None:
        """Move the server to a new status.

        Args:
            status: Target status.

        Raises:
            ConflictError: If the transition is not allowed.
        """
        if not self.status.can_transition_to(status):
            raise ConflictError(
                f"Cannot move server from {self.status.value} to {status.value}"
            )
        self.status = status

    def start(self) -> None:
        """Mark server as running."""
        self.transition_to(ServerStatus.RUNNING)

    def stop(self) -> None:
        """Mark server as stopped."""
        self.transition_to(ServerStatus.STOPPED)

    def terminate(self) -> None:
        """Mark server as terminated."""
        self.transition_to(ServerStatus.TERMINATED)

    def total_disk_gb(self) -> int:
        """Get the combined size of attached disks.

        Returns:
            Size in gigabytes.
        """
        return sum(disk.size_gb for disk in self.disks)
