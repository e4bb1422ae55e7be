"""Dependency injection container and service wiring."""

from __future__ import annotations

from typing import Any, Callable, TypeVar

from prometheus_client import CollectorRegistry

from iaas_platform.adapters.outbound import InMemoryServerRepository, JsonFileServerRepository
from iaas_platform.application import ServerService
from iaas_platform.infrastructure.config import Config, get_config
from iaas_platform.infrastructure.logging import setup_logging
from iaas_platform.infrastructure.metrics import MetricsRegistry, get_metrics, setup_metrics
from iaas_platform.infrastructure.tracing import setup_tracing
from iaas_platform.ports.inbound import ManageServers
from iaas_platform.ports.outbound import ServerRepository

T = TypeVar("T")


class Container:
    """Simple dependency injection container.

    Factories run once, on first resolve; their result is cached.
    """

    def __init__(self) -> None:
        self._factories: dict[type, Callable[[Container], Any]] = {}
        self._instances: dict[type, Any] = {}

    def register_singleton(self, interface: type[T], instance: T) -> None:
        """Register a ready-made instance."""
        self._instances[interface] = instance

    def register_factory(self, interface: type[T], factory: Callable[[Container], T]) -> None:
        """Register a factory, dropping any instance it previously produced."""
        self._factories[interface] = factory
        self._instances.pop(interface, None)

    def resolve(self, interface: type[T]) -> T:
        """Resolve a dependency.

        Raises:
            KeyError: If nothing is registered for the interface.
        """
        if interface in self._instances:
            return self._instances[interface]
        if interface in self._factories:
            instance = self._factories[interface](self)
            self._instances[interface] = instance
            return instance
        raise KeyError(f"No registration found for {interface}")

    def has(self, interface: type) -> bool:
        """Check if an interface is registered."""
        return interface in self._instances or interface in self._factories

    def clear(self) -> None:
        """Clear all registrations."""
        self._factories.clear()
        self._instances.clear()


def _build_repository(container: Container) -> ServerRepository:
    config = container.resolve(Config)
    if config.storage.backend == "memory":
        return InMemoryServerRepository()
    metrics = container.resolve(MetricsRegistry) if container.has(MetricsRegistry) else None
    return JsonFileServerRepository(
        config.storage.store_path,
        fsync=config.storage.fsync,
        metrics=metrics,
    )


def _build_service(container: Container) -> ManageServers:
    config = container.resolve(Config)
    metrics = container.resolve(MetricsRegistry) if container.has(MetricsRegistry) else None
    return ServerService(
        container.resolve(ServerRepository),
        defaults=config.provisioning,
        metrics=metrics,
    )


def configure_container(
    config: Config | None = None,
    metrics: MetricsRegistry | None = None,
    container: Container | None = None,
) -> Container:
    """Register the provisioning core in a container.

    Args:
        config: Service configuration (the global one by default).
        metrics: Metrics registry shared by service and store (the
            global one by default).
        container: Container to populate (the global one by default).

    Returns:
        The populated container; resolve ManageServers from it.
    """
    container = container or get_container()
    container.register_singleton(Config, config if config is not None else get_config())
    container.register_singleton(MetricsRegistry, metrics if metrics is not None else get_metrics())
    container.register_factory(ServerRepository, _build_repository)
    container.register_factory(ManageServers, _build_service)
    return container


_container: Container | None = None


def get_container() -> Container:
    """Get the global container instance."""
    global _container
    if _container is None:
        _container = Container()
    return _container


def reset_container() -> None:
    """Reset the global container (useful for testing)."""
    global _container
    if _container is not None:
        _container.clear()
    _container = None


def setup_observability(
    config: Config,
    serve_metrics: bool = False,
    registry: CollectorRegistry | None = None,
) -> MetricsRegistry | None:
    """Configure logging and tracing, and optionally serve metrics.

    Tracing is exported only when an OTLP endpoint is configured. A
    served registry becomes the global one, so a later
    configure_container() call picks it up.

    Args:
        config: Service configuration.
        serve_metrics: Start the Prometheus exposition server.
        registry: Collector registry to serve (the default one if None).

    Returns:
        The metrics registry when served, else None.
    """
    observability = config.observability
    setup_logging(
        level=observability.log_level,
        log_format=observability.log_format,
        service_name=observability.otel_service_name,
    )
    if observability.otel_endpoint:
        setup_tracing(observability.otel_service_name, otlp_endpoint=observability.otel_endpoint)
    if serve_metrics:
        return setup_metrics(observability.metrics_port, registry=registry)
    return None
