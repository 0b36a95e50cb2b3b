"""Tests for unit generation."""

import pytest

from podunits.generator.commands import CommandBuilder
from podunits.generator.units import UnitGenerator, container_unit_name, pod_unit_name
from podunits.models.config import RuntimeConfig
from podunits.models.container import ContainerSpec
from podunits.models.pod import PodSpec
from podunits.models.unit import RestartPolicy, ServiceType


@pytest.fixture
def generator():
    """Create a unit generator with default runtime settings."""
    return UnitGenerator(RuntimeConfig())


def test_unit_names():
    """Test unit naming."""
    assert pod_unit_name("web") == "pod-web.service"
    assert container_unit_name("web-app") == "podman-web-app.service"


class TestPodUnit:
    """Test pod unit generation."""

    def test_lifecycle_commands(self, generator):
        """Test start, stop and post-stop commands."""
        pod = PodSpec(name="web", publish=["8080:80"])
        unit = generator.pod_unit(pod)
        commands = CommandBuilder(RuntimeConfig())

        assert unit.name == "pod-web.service"
        assert unit.start_pre == [
            "/bin/mkdir -p /run/podman/pods",
            commands.create_command(pod),
        ]
        assert unit.start == "/usr/bin/podman pod start web"
        assert unit.stop == "/usr/bin/podman pod stop web"
        # Stop is issued twice, as podman's own generated units do
        assert unit.stop_post == unit.stop

    def test_service_settings(self, generator):
        """Test supervision settings."""
        unit = generator.pod_unit(PodSpec(name="web"))

        assert unit.type == ServiceType.FORKING
        assert unit.restart == RestartPolicy.ON_FAILURE
        assert unit.timeout_stop_sec == 70
        assert unit.pid_file == "/run/podman/pods/web.pid"
        assert unit.environment == {"PODMAN_SYSTEMD_UNIT": "%n"}
        assert unit.path == ["/usr/bin"]

    def test_ordering(self, generator):
        """Test network ordering and install targets."""
        unit = generator.pod_unit(PodSpec(name="web"))

        assert unit.wants == ["network.target"]
        assert unit.after == ["network-online.target"]
        assert unit.wanted_by == ["multi-user.target", "default.target"]
        assert unit.requires == []

    def test_stop_timeout_from_runtime(self):
        """Test that the stop timeout is configurable."""
        generator = UnitGenerator(RuntimeConfig(stop_timeout=120))

        assert generator.pod_unit(PodSpec(name="web")).timeout_stop_sec == 120


class TestContainerUnit:
    """Test container unit generation."""

    def test_container_unit(self, generator):
        """Test a standalone container unit."""
        container = ContainerSpec(name="app", image="nginx", depends_on=["db"])
        unit = generator.container_unit(container)

        assert unit.name == "podman-app.service"
        assert unit.type == ServiceType.SIMPLE
        assert unit.restart == RestartPolicy.ALWAYS
        assert unit.after == ["network-online.target", "podman-db.service"]
        assert unit.requires == ["podman-db.service"]
        assert unit.wanted_by == ["multi-user.target"]
        assert unit.start.startswith("/usr/bin/podman run --rm --name=app")
        assert unit.start_pre == ["/usr/bin/podman rm -f --ignore app"]
        assert unit.stop == "/usr/bin/podman stop --ignore app"
        assert unit.stop_post == "/usr/bin/podman rm -f --ignore app"
        assert unit.pid_file is None

    def test_no_autostart(self, generator):
        """Test that disabled autostart leaves the unit uninstalled."""
        container = ContainerSpec(name="app", image="nginx", autostart=False)

        assert generator.container_unit(container).wanted_by == []
