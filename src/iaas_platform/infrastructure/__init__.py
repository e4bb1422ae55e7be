"""Infrastructure layer - cross-cutting concerns.

Dependency wiring lives in iaas_platform.infrastructure.container and is
not re-exported here, since it imports the application and adapter
layers which themselves depend on this package.
"""

from iaas_platform.infrastructure.config import Config, get_config
from iaas_platform.infrastructure.logging import setup_logging, get_logger
from iaas_platform.infrastructure.metrics import setup_metrics, get_metrics, MetricsRegistry
from iaas_platform.infrastructure.tracing import setup_tracing, get_tracer, trace_span

__all__ = [
    "Config",
    "get_config",
    "setup_logging",
    "get_logger",
    "setup_metrics",
    "get_metrics",
    "MetricsRegistry",
    "setup_tracing",
    "get_tracer",
    "trace_span",
]
