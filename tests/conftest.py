"""Pytest configuration and fixtures for iaas_platform tests."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Generator

import pytest
from prometheus_client import CollectorRegistry

from iaas_platform.adapters.outbound import InMemoryServerRepository, JsonFileServerRepository
from iaas_platform.application import ServerService
from iaas_platform.infrastructure.config import Config, StorageConfig
from iaas_platform.infrastructure.container import Container, reset_container
from iaas_platform.infrastructure.metrics import MetricsRegistry


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def store_path(temp_dir: Path) -> Path:
    """Provide a store file location (not yet created)."""
    return temp_dir / "store" / "servers.json"


@pytest.fixture
def test_config(store_path: Path) -> Config:
    """Provide a test configuration backed by a temporary store."""
    return Config(storage=StorageConfig(store_path=store_path, fsync=False))


@pytest.fixture
def container() -> Generator[Container, None, None]:
    """Provide a fresh DI container."""
    reset_container()
    c = Container()
    yield c
    c.clear()


@pytest.fixture
def metrics_registry() -> MetricsRegistry:
    """Provide a fresh metrics registry."""
    # Separate registry to avoid duplicate-collector errors between tests
    registry = CollectorRegistry(auto_describe=True)
    return MetricsRegistry(registry=registry)


@pytest.fixture
def memory_repository() -> InMemoryServerRepository:
    """Provide an empty in-memory repository."""
    return InMemoryServerRepository()


@pytest.fixture
def file_repository(store_path: Path) -> JsonFileServerRepository:
    """Provide a file repository over a fresh store."""
    return JsonFileServerRepository(store_path, fsync=False)


@pytest.fixture
def service(memory_repository: InMemoryServerRepository) -> ServerService:
    """Provide a service over the in-memory repository."""
    return ServerService(memory_repository)


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "chaos: Fault injection tests")
