"""Service unit generation for pods and containers."""

import logging
import posixpath
from typing import List, Optional

from podunits.generator.commands import CommandBuilder
from podunits.models.config import RuntimeConfig
from podunits.models.container import ContainerSpec
from podunits.models.pod import PodSpec
from podunits.models.unit import RestartPolicy, ServiceType, ServiceUnit
from podunits.utils.systemd import unit_name


logger = logging.getLogger(__name__)

POD_UNIT_PREFIX = "pod"
CONTAINER_UNIT_PREFIX = "podman"

NETWORK_ONLINE = "network-online.target"
NETWORK = "network.target"
MULTI_USER = "multi-user.target"
DEFAULT = "default.target"


def pod_unit_name(pod_name: str) -> str:
    return unit_name(POD_UNIT_PREFIX, pod_name)


def container_unit_name(container_name: str) -> str:
    return unit_name(CONTAINER_UNIT_PREFIX, container_name)


class UnitGenerator:
    """Wraps podman commands into lifecycle-managed service units."""

    def __init__(self, runtime: Optional[RuntimeConfig] = None, commands: Optional[CommandBuilder] = None):
        self.runtime = runtime or RuntimeConfig()
        self.commands = commands or CommandBuilder(self.runtime)

    def _search_path(self) -> List[str]:
        directory = posixpath.dirname(self.runtime.binary)
        return [directory] if directory else []

    def pod_unit(self, pod: PodSpec) -> ServiceUnit:
        """Build the unit that creates, starts and stops a pod."""
        stop = self.commands.stop_command(pod)
        unit = ServiceUnit(
            name=pod_unit_name(pod.name),
            description=f"Podman pod {pod.name}",
            wants=[NETWORK],
            after=[NETWORK_ONLINE],
            wanted_by=[MULTI_USER, DEFAULT],
            type=ServiceType.FORKING,
            environment={"PODMAN_SYSTEMD_UNIT": "%n"},
            path=self._search_path(),
            start_pre=[
                self.commands.prepare_command(),
                self.commands.create_command(pod),
            ],
            start=self.commands.start_command(pod),
            stop=stop,
            # podman generate systemd issues the stop a second time after the
            # main process exits; generated pod units keep doing the same.
            stop_post=stop,
            pid_file=self.commands.pid_file(pod),
            restart=RestartPolicy.ON_FAILURE,
            timeout_stop_sec=self.runtime.stop_timeout,
        )
        logger.debug(f"Generated pod unit {unit.name}")
        return unit

    def container_unit(self, container: ContainerSpec) -> ServiceUnit:
        """Build the unit that runs a single container in the foreground."""
        dependencies = [container_unit_name(dep) for dep in container.depends_on]
        unit = ServiceUnit(
            name=container_unit_name(container.name),
            description=f"Podman container {container.name}",
            after=[NETWORK_ONLINE] + dependencies,
            requires=dependencies,
            wanted_by=[MULTI_USER] if container.autostart else [],
            type=ServiceType.SIMPLE,
            environment={"PODMAN_SYSTEMD_UNIT": "%n"},
            path=self._search_path(),
            start_pre=[self.commands.container_remove_command(container)],
            start=self.commands.run_command(container),
            stop=self.commands.container_stop_command(container),
            stop_post=self.commands.container_remove_command(container),
            restart=RestartPolicy.ALWAYS,
        )
        logger.debug(f"Generated container unit {unit.name}")
        return unit
