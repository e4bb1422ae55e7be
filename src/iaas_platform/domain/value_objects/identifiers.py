"""Identifier value objects."""

import uuid
from typing import NewType

# Type-safe identifiers
ServerId = NewType("ServerId", str)
DiskId = NewType("DiskId", str)


def create_server_id() -> ServerId:
    """Create a server ID.

    Random 128-bit UUID; collisions are not defended against.

    Returns:
        Server ID.
    """
    return ServerId(str(uuid.uuid4()))


def create_disk_id() -> DiskId:
    """Create a disk ID.

    Returns:
        Disk ID.
    """
    return DiskId(str(uuid.uuid4()))
