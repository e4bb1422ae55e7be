"""Application layer - use-case orchestration.

Provides ServerService, the implementation of the ManageServers port.
"""

from iaas_platform.application.server_service import ServerService

__all__ = [
    "ServerService",
]
