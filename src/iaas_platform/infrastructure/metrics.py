"""Prometheus metrics for the provisioning service."""

from __future__ import annotations

from prometheus_client import (
    Counter,
    Gauge,
    Histogram,
    Info,
    start_http_server,
    REGISTRY,
    CollectorRegistry,
)


class MetricsRegistry:
    """Registry of all provisioning service metrics."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """Initialize metrics registry."""
        self._registry = registry or REGISTRY

        # Use-case metrics
        self.server_operations_total = Counter(
            "iaas_server_operations_total",
            "Total server use-case invocations",
            ["operation", "status"],  # create/list/attach_disk, success/<error kind>
            registry=self._registry,
        )

        self.server_operation_latency_seconds = Histogram(
            "iaas_server_operation_latency_seconds",
            "Server use-case latency in seconds",
            ["operation"],
            buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
            registry=self._registry,
        )

        self.disks_attached_gb_total = Counter(
            "iaas_disks_attached_gb_total",
            "Total gigabytes of disk attached",
            registry=self._registry,
        )

        # Store metrics
        self.store_lock_wait_seconds = Histogram(
            "iaas_store_lock_wait_seconds",
            "Time spent waiting for the store lock",
            ["operation"],  # save, find_by_id, find_all, update
            buckets=(0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0),
            registry=self._registry,
        )

        self.store_writes_total = Counter(
            "iaas_store_writes_total",
            "Total store write attempts",
            ["status"],  # success, error
            registry=self._registry,
        )

        self.store_servers = Gauge(
            "iaas_store_servers",
            "Number of servers in the store after the last write",
            registry=self._registry,
        )

        # Server info
        self.info = Info(
            "iaas_platform",
            "Provisioning service information",
            registry=self._registry,
        )


_metrics: MetricsRegistry | None = None


def setup_metrics(port: int = 8003, registry: CollectorRegistry | None = None) -> MetricsRegistry:
    """Set up Prometheus metrics server."""
    global _metrics
    _metrics = MetricsRegistry(registry)

    from iaas_platform import __version__
    _metrics.info.info({"version": __version__})

    start_http_server(port, registry=registry or REGISTRY)
    return _metrics


def get_metrics() -> MetricsRegistry:
    """Get the global metrics registry."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsRegistry()
    return _metrics
