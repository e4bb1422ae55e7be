"""Server Service - the provisioning use cases.

Implements the ManageServers port by validating input, building or
mutating domain entities and delegating all persistence to a
ServerRepository.

Usage:
    from iaas_platform.adapters.outbound import JsonFileServerRepository
    from iaas_platform.application import ServerService

    service = ServerService(JsonFileServerRepository("/tmp/servers.json"))
    server = service.create_server(CreateServerCommand(name="web-1"))
    server = service.attach_disk(server.server_id, AttachDiskCommand(size_gb=100))

References:
    - ports/inbound/manage_servers.py (use-case contract)
    - ports/outbound/server_repository.py (storage contract)
"""

from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Iterator, Optional

from iaas_platform.domain.entities import Disk, Server
from iaas_platform.domain.errors import IaaSError
from iaas_platform.infrastructure.config import ProvisioningConfig
from iaas_platform.infrastructure.logging import get_logger
from iaas_platform.infrastructure.metrics import MetricsRegistry
from iaas_platform.infrastructure.tracing import trace_span
from iaas_platform.ports.inbound.manage_servers import (
    AttachDiskCommand,
    CreateServerCommand,
    ManageServers,
)
from iaas_platform.ports.outbound.server_repository import ServerRepository


logger = get_logger(__name__)


class ServerService(ManageServers):
    """Coordinates server provisioning with full observability.

    Holds no mutable state of its own; one instance may serve any
    number of concurrent callers.
    """

    def __init__(
        self,
        repository: ServerRepository,
        defaults: Optional[ProvisioningConfig] = None,
        metrics: Optional[MetricsRegistry] = None,
    ) -> None:
        """Initialize the service.

        Args:
            repository: Server storage port.
            defaults: Sizing applied when a command omits it.
            metrics: Optional metrics registry.
        """
        self._repository = repository
        self._defaults = defaults or ProvisioningConfig()
        self._metrics = metrics

    def create_server(self, command: CreateServerCommand) -> Server:
        with self._observe("create_server"):
            server = Server.create(
                name=command.name,
                cpu_cores=self._or_default(command.cpu_cores, self._defaults.default_cpu_cores),
                ram_gb=self._or_default(command.ram_gb, self._defaults.default_ram_gb),
                storage_gb=self._or_default(command.storage_gb, self._defaults.default_storage_gb),
            )
            self._repository.save(server)

        logger.info(
            "server_created",
            server_id=server.server_id,
            name=server.name,
            cpu_cores=server.cpu_cores,
            ram_gb=server.ram_gb,
            storage_gb=server.storage_gb,
        )
        return server

    def list_servers(self) -> list[Server]:
        with self._observe("list_servers"):
            return self._repository.find_all()

    def attach_disk(self, server_id: str, command: AttachDiskCommand) -> Server:
        attached: list[Disk] = []

        def _attach(server: Server) -> None:
            attached.append(server.attach_disk(command.size_gb))

        with self._observe("attach_disk", server_id=server_id):
            server = self._repository.update(server_id, _attach)

        disk = attached[0]
        if self._metrics:
            self._metrics.disks_attached_gb_total.inc(disk.size_gb)
        logger.info(
            "disk_attached",
            server_id=server.server_id,
            disk_id=disk.disk_id,
            size_gb=disk.size_gb,
            disk_count=len(server.disks),
        )
        return server

    @staticmethod
    def _or_default(value: Optional[int], default: int) -> int:
        return default if value is None else value

    @contextmanager
    def _observe(self, operation: str, **context: str) -> Iterator[None]:
        """Trace, time and count one use-case invocation.

        Errors are logged and re-raised, never swallowed.
        """
        started = time.perf_counter()
        status = "success"
        try:
            with trace_span(f"server_service.{operation}", context or None):
                yield
        except IaaSError as exc:
            status = type(exc).__name__
            logger.warning(f"{operation}_rejected", error=status, reason=str(exc), **context)
            raise
        except Exception:
            status = "error"
            raise
        finally:
            if self._metrics:
                self._metrics.server_operations_total.labels(
                    operation=operation, status=status
                ).inc()
                self._metrics.server_operation_latency_seconds.labels(
                    operation=operation
                ).observe(time.perf_counter() - started)
