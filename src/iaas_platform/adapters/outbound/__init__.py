"""Outbound adapters - implementations of outbound ports.

These adapters implement server persistence: a crash-safe JSON file
store and an in-memory store for tests and development.
"""

from iaas_platform.adapters.outbound.in_memory_repository import InMemoryServerRepository
from iaas_platform.adapters.outbound.json_file_repository import (
    DiskRecord,
    JsonFileServerRepository,
    ServerRecord,
)

__all__ = [
    "JsonFileServerRepository",
    "InMemoryServerRepository",
    "ServerRecord",
    "DiskRecord",
]
