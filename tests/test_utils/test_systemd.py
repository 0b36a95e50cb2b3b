"""Tests for unit file rendering."""

import pytest

from podunits.generator.units import UnitGenerator
from podunits.models.config import RuntimeConfig
from podunits.models.container import ContainerSpec
from podunits.models.pod import PodSpec
from podunits.models.unit import ServiceUnit
from podunits.utils.systemd import env_quote, exec_escape, render_unit, unit_name


@pytest.fixture
def generator():
    return UnitGenerator(RuntimeConfig())


def test_unit_name():
    assert unit_name("pod", "web") == "pod-web.service"


def test_exec_escape():
    """Test that specifiers and variables are passed through literally."""
    assert exec_escape("echo 100% $HOME") == "echo 100%% $$HOME"


def test_env_quote():
    assert env_quote("A=b") == '"A=b"'
    assert env_quote('A=say "hi"') == '"A=say \\"hi\\""'


class TestRenderUnit:
    """Test rendering units to systemd's format."""

    def test_pod_unit(self, generator):
        """Test the rendered pod unit."""
        text = render_unit(generator.pod_unit(PodSpec(name="web", added_hosts=["db:10.0.0.1"])))
        lines = text.splitlines()

        assert lines[1] == "[Unit]"
        assert "Description=Podman pod web" in lines
        assert "Wants=network.target" in lines
        assert "After=network-online.target" in lines
        assert "[Service]" in lines
        assert "Type=forking" in lines
        assert 'Environment="PODMAN_SYSTEMD_UNIT=%n"' in lines
        assert "ExecStartPre=/bin/mkdir -p /run/podman/pods" in lines
        assert (
            "ExecStartPre=/usr/bin/podman pod create "
            "--infra-conmon-pidfile=/run/podman/pods/web.pid --name=web --replace "
            "--add-host=db:10.0.0.1"
        ) in lines
        assert "ExecStart=/usr/bin/podman pod start web" in lines
        assert "ExecStop=/usr/bin/podman pod stop web" in lines
        assert "ExecStopPost=/usr/bin/podman pod stop web" in lines
        assert "PIDFile=/run/podman/pods/web.pid" in lines
        assert "Restart=on-failure" in lines
        assert "TimeoutStopSec=70" in lines
        assert "[Install]" in lines
        assert "WantedBy=multi-user.target default.target" in lines
        assert text.endswith("\n")
        assert "Requires=" not in text

    def test_path_environment(self, generator):
        """Test that the runtime directory leads PATH."""
        text = render_unit(generator.pod_unit(PodSpec(name="web")))

        assert 'Environment="PATH=/usr/bin:/usr/local/sbin:' in text

    def test_start_pre_order(self, generator):
        """Test that the pid directory is created before the pod."""
        lines = render_unit(generator.pod_unit(PodSpec(name="web"))).splitlines()
        pre = [line for line in lines if line.startswith("ExecStartPre=")]

        assert pre[0] == "ExecStartPre=/bin/mkdir -p /run/podman/pods"
        assert pre[1].startswith("ExecStartPre=/usr/bin/podman pod create")

    def test_container_without_autostart(self, generator):
        """Test that a unit without install targets has no [Install] section."""
        unit = generator.container_unit(ContainerSpec(name="app", image="nginx", autostart=False))
        text = render_unit(unit)

        assert "[Install]" not in text
        assert "PIDFile=" not in text
        assert "TimeoutStopSec=" not in text
        assert "Restart=always" in text

    def test_percent_in_command(self):
        """Test that literal percent signs survive systemd's specifier expansion."""
        unit = ServiceUnit(name="t.service", start="/bin/echo 50%")

        assert "ExecStart=/bin/echo 50%%" in render_unit(unit).splitlines()

    def test_minimal_unit(self):
        """Test a unit with no ordering at all."""
        text = render_unit(ServiceUnit(name="t.service", start="/bin/true"))

        assert "After=" not in text
        assert "Wants=" not in text
        assert "ExecStop=" not in text
        assert "Type=simple" in text
        assert "Restart=no" in text


class TestControlCharacters:
    """Test values that systemd would otherwise reinterpret."""

    def test_exec_escape_backslash(self):
        assert exec_escape("echo 'a\\b'") == "echo 'a\\\\b'"

    def test_exec_escape_newline(self):
        assert exec_escape("echo 'a\nb'") == "echo 'a\\nb'"
        assert exec_escape("echo 'a\rb'") == "echo 'a\\rb'"

    def test_env_quote_newline(self):
        assert env_quote("A=x\ny") == '"A=x\\ny"'

    def test_newline_in_pod_value_stays_on_one_line(self, generator):
        """Test that a multi-line value cannot end an Exec line early."""
        pod = PodSpec(name="web", infra_command="sleep\ninfinity")
        lines = render_unit(generator.pod_unit(pod)).splitlines()
        create = [line for line in lines if line.startswith("ExecStartPre=/usr/bin/podman")]

        assert len(create) == 1
        assert create[0].endswith("--infra-command='sleep\\ninfinity'")
        assert "infinity'" not in lines

    def test_backslash_in_container_cmd(self, generator):
        """Test that backslashes reach the container unchanged."""
        container = ContainerSpec(name="app", image="busybox", cmd=["printf", "a\\tb"])
        lines = render_unit(generator.container_unit(container)).splitlines()
        start = [line for line in lines if line.startswith("ExecStart=")]

        assert start[0].endswith("busybox printf 'a\\\\tb'")

    def test_newline_in_environment_value(self, generator):
        """Test that environment values with line breaks stay on one line."""
        container = ContainerSpec(name="app", image="nginx", environment={"MOTD": "hi\nthere"})
        lines = render_unit(generator.container_unit(container)).splitlines()
        start = [line for line in lines if line.startswith("ExecStart=")]

        assert "-e 'MOTD=hi\\nthere'" in start[0]
        assert "there'" not in " ".join(lines[lines.index(start[0]) + 1:])
