"""Outbound ports - interfaces for external dependencies.

The provisioning core depends on a single outbound port: server
persistence. Implementations may use a file, SQL or memory.
"""

from iaas_platform.ports.outbound.server_repository import ServerRepository

__all__ = [
    "ServerRepository",
]
