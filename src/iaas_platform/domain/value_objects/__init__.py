"""Value objects for the provisioning domain.

Exports:
    Identifiers:
        - ServerId: Type-safe server identifier
        - DiskId: Type-safe disk identifier
        - create_server_id, create_disk_id: Random identifier factories
"""

from iaas_platform.domain.value_objects.identifiers import (
    DiskId,
    ServerId,
    create_disk_id,
    create_server_id,
)

__all__ = [
    "ServerId",
    "DiskId",
    "create_server_id",
    "create_disk_id",
]
