"""Unit tests for the provisioning domain layer."""

from datetime import datetime, timezone

import pytest

from iaas_platform.domain.entities import Disk, Server, ServerStatus
from iaas_platform.domain.errors import (
    ConflictError,
    IaaSError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from iaas_platform.domain.value_objects import create_disk_id, create_server_id


class TestIdentifiers:
    """Test identifier creation."""

    def test_server_ids_are_unique(self):
        """Test that generated server IDs never repeat."""
        ids = {create_server_id() for _ in range(1000)}
        assert len(ids) == 1000

    def test_disk_id_is_uuid_string(self):
        """Test disk ID format."""
        disk_id = create_disk_id()
        assert isinstance(disk_id, str)
        assert len(disk_id) == 36


class TestErrors:
    """Test the error taxonomy."""

    @pytest.mark.parametrize(
        "error_type", [ValidationError, NotFoundError, ConflictError, PersistenceError]
    )
    def test_errors_share_base(self, error_type):
        """Test every error kind can be caught as IaaSError."""
        with pytest.raises(IaaSError):
            raise error_type("boom")


class TestServerStatus:
    """Test the status state machine."""

    def test_only_terminated_is_terminal(self):
        """Test terminal flag."""
        assert ServerStatus.TERMINATED.is_terminal
        assert not ServerStatus.PROVISIONING.is_terminal
        assert not ServerStatus.RUNNING.is_terminal
        assert not ServerStatus.STOPPED.is_terminal

    def test_wire_values(self):
        """Test persisted status strings."""
        assert [s.value for s in ServerStatus] == [
            "provisioning",
            "running",
            "stopped",
            "terminated",
        ]

    def test_allowed_transitions(self):
        """Test legal transitions."""
        assert ServerStatus.PROVISIONING.can_transition_to(ServerStatus.RUNNING)
        assert ServerStatus.RUNNING.can_transition_to(ServerStatus.STOPPED)
        assert ServerStatus.STOPPED.can_transition_to(ServerStatus.RUNNING)
        assert ServerStatus.STOPPED.can_transition_to(ServerStatus.TERMINATED)

    def test_terminated_has_no_exit(self):
        """Test that nothing leaves the terminal state."""
        for status in ServerStatus:
            assert not ServerStatus.TERMINATED.can_transition_to(status)

    def test_provisioning_cannot_stop(self):
        """Test an illegal transition."""
        assert not ServerStatus.PROVISIONING.can_transition_to(ServerStatus.STOPPED)


class TestDisk:
    """Test disk entity."""

    def test_disk_creation(self):
        """Test creating a disk."""
        disk = Disk.create(50)
        assert disk.size_gb == 50
        assert disk.disk_id
        assert disk.attached_at.tzinfo is not None

    @pytest.mark.parametrize("size_gb", [0, -5])
    def test_non_positive_size_rejected(self, size_gb):
        """Test size must be positive."""
        with pytest.raises(ValidationError):
            Disk.create(size_gb)

    @pytest.mark.parametrize("size_gb", [1.5, "10", True, None])
    def test_non_integer_size_rejected(self, size_gb):
        """Test size must be an integer."""
        with pytest.raises(ValidationError):
            Disk.create(size_gb)

    def test_disk_is_immutable(self):
        """Test disks cannot be edited after creation."""
        disk = Disk.create(10)
        with pytest.raises(AttributeError):
            disk.size_gb = 20


class TestServer:
    """Test server entity."""

    def test_server_creation(self):
        """Test creating a server."""
        server = Server.create("web-1")
        assert server.name == "web-1"
        assert server.status == ServerStatus.PROVISIONING
        assert server.disks == []
        assert server.server_id

    def test_server_sizing(self):
        """Test explicit sizing is kept."""
        server = Server.create("db-1", cpu_cores=8, ram_gb=32, storage_gb=500)
        assert (server.cpu_cores, server.ram_gb, server.storage_gb) == (8, 32, 500)

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_invalid_name_rejected(self, name):
        """Test name must be non-empty."""
        with pytest.raises(ValidationError):
            Server.create(name)

    @pytest.mark.parametrize("field", ["cpu_cores", "ram_gb", "storage_gb"])
    def test_invalid_sizing_rejected(self, field):
        """Test sizing must be positive."""
        with pytest.raises(ValidationError):
            Server.create("web-1", **{field: 0})

    def test_identity_is_immutable(self):
        """Test ID and name cannot be reassigned."""
        server = Server.create("web-1")
        with pytest.raises(AttributeError):
            server.server_id = create_server_id()
        with pytest.raises(AttributeError):
            server.name = "web-2"

    def test_attach_disk_keeps_order(self):
        """Test disks are ordered by attachment."""
        server = Server.create("web-1")
        first = server.attach_disk(100)
        second = server.attach_disk(20)
        assert server.disks == [first, second]
        assert server.total_disk_gb() == 120

    def test_attach_disk_to_terminated_server(self):
        """Test terminated servers reject disks."""
        server = Server.create("web-1")
        server.terminate()
        with pytest.raises(ConflictError):
            server.attach_disk(10)
        assert server.disks == []

    def test_attach_invalid_disk_to_terminated_server(self):
        """Test size is validated before status."""
        server = Server.create("web-1")
        server.terminate()
        with pytest.raises(ValidationError):
            server.attach_disk(0)

    def test_lifecycle(self):
        """Test status transitions."""
        server = Server.create("web-1")
        server.start()
        assert server.status == ServerStatus.RUNNING
        server.stop()
        assert server.status == ServerStatus.STOPPED
        server.start()
        server.terminate()
        assert server.status == ServerStatus.TERMINATED

    def test_illegal_transition(self):
        """Test illegal transitions raise ConflictError."""
        server = Server.create("web-1")
        with pytest.raises(ConflictError):
            server.stop()
        assert server.status == ServerStatus.PROVISIONING

    def test_equality_by_value(self):
        """Test servers rebuilt from the same data compare equal."""
        attached_at = datetime(2026, 1, 1, tzinfo=timezone.utc)
        disk = Disk(disk_id=create_disk_id(), size_gb=10, attached_at=attached_at)
        server_id = create_server_id()
        a = Server(server_id=server_id, name="web-1", disks=[disk])
        b = Server(server_id=server_id, name="web-1", disks=[disk])
        assert a == b
