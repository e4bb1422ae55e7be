"""Domain layer - entities, value objects and the error taxonomy.

Nothing in this package performs I/O.
"""

from iaas_platform.domain.entities import Disk, Server, ServerStatus
from iaas_platform.domain.errors import (
    ConflictError,
    IaaSError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from iaas_platform.domain.value_objects import DiskId, ServerId

__all__ = [
    # Entities
    "Server",
    "Disk",
    "ServerStatus",
    # Identifiers
    "ServerId",
    "DiskId",
    # Errors
    "IaaSError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "PersistenceError",
]
