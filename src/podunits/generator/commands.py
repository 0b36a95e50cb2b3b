"""Podman command line construction."""

import logging
import posixpath
import shlex
from typing import List, Optional, Sequence

from podunits.models.config import RuntimeConfig
from podunits.models.container import ContainerSpec
from podunits.models.pod import PodSpec


logger = logging.getLogger(__name__)


def list_to_args(flag: str, values: Sequence[str]) -> List[str]:
    """Expand a list into one ``--flag=value`` token per element."""
    return [f"--{flag}={shlex.quote(value)}" for value in values]


def optional_arg(flag: str, value) -> List[str]:
    """Expand a scalar into a ``--flag=value`` token, or nothing if unset."""
    if value is None:
        return []
    if isinstance(value, bool):
        value = "true" if value else "false"
    return [f"--{flag}={shlex.quote(value)}"]


class CommandBuilder:
    """Builds the podman invocations run by generated units.

    Output depends only on the specs and runtime settings, so repeated builds
    yield byte-identical commands.
    """

    def __init__(self, runtime: Optional[RuntimeConfig] = None):
        self.runtime = runtime or RuntimeConfig()

    @property
    def binary(self) -> str:
        return shlex.quote(self.runtime.binary)

    def pid_file(self, pod: PodSpec) -> str:
        """Path of the infra conmon pid file for a pod."""
        return posixpath.join(self.runtime.pid_dir, f"{pod.name}.pid")

    def create_args(self, pod: PodSpec) -> List[str]:
        """Flags for ``podman pod create``, in a fixed order."""
        args = [
            f"--infra-conmon-pidfile={shlex.quote(self.pid_file(pod))}",
            f"--name={shlex.quote(pod.name)}",
            "--replace",
        ]
        args += list_to_args("add-host", pod.added_hosts)
        args += optional_arg("cgroup-parent", pod.cgroup_parent)
        args += list_to_args("dns", pod.dns)
        args += list_to_args("dns-opt", pod.dns_opt)
        args += list_to_args("dns-search", pod.dns_search)
        args += optional_arg("hostname", pod.hostname)
        args += optional_arg("infra", pod.infra)
        args += optional_arg("infra-command", pod.infra_command)
        args += optional_arg("infra-image", pod.infra_image)
        args += optional_arg("ip", pod.ip)
        args += optional_arg("mac-address", pod.mac_address)
        args += optional_arg("network", pod.network)
        args += optional_arg("network-alias", pod.network_alias)
        args += optional_arg("no-hosts", pod.no_hosts)
        args += list_to_args("publish", pod.publish)
        args += list_to_args("share", pod.share)
        return args

    def create_command(self, pod: PodSpec) -> str:
        return " ".join([self.binary, "pod", "create", *self.create_args(pod)])

    def start_command(self, pod: PodSpec) -> str:
        return f"{self.binary} pod start {shlex.quote(pod.name)}"

    def stop_command(self, pod: PodSpec) -> str:
        return f"{self.binary} pod stop {shlex.quote(pod.name)}"

    def prepare_command(self) -> str:
        """Create the pid file directory before the pod is created."""
        return f"/bin/mkdir -p {shlex.quote(self.runtime.pid_dir)}"

    def run_args(self, container: ContainerSpec) -> List[str]:
        """Arguments for ``podman run``, up to and including the command."""
        args = [
            "--rm",
            f"--name={shlex.quote(container.name)}",
            f"--log-driver={shlex.quote(container.log_driver)}",
        ]
        args += optional_arg("entrypoint", container.entrypoint)
        for key in sorted(container.environment):
            args += ["-e", shlex.quote(f"{key}={container.environment[key]}")]
        args += list_to_args("env-file", container.environment_files)
        for port in container.ports:
            args += ["-p", shlex.quote(port)]
        for volume in container.volumes:
            args += ["-v", shlex.quote(volume)]
        for key in sorted(container.labels):
            args += ["-l", shlex.quote(f"{key}={container.labels[key]}")]
        if container.user is not None:
            args += ["-u", shlex.quote(container.user)]
        if container.workdir is not None:
            args += ["-w", shlex.quote(container.workdir)]
        # Extra options are raw runtime flags and pass through as written
        args += container.extra_options
        args.append(shlex.quote(container.image))
        args += [shlex.quote(arg) for arg in container.cmd]
        return args

    def run_command(self, container: ContainerSpec) -> str:
        return " ".join([self.binary, "run", *self.run_args(container)])

    def container_stop_command(self, container: ContainerSpec) -> str:
        return f"{self.binary} stop --ignore {shlex.quote(container.name)}"

    def container_remove_command(self, container: ContainerSpec) -> str:
        return f"{self.binary} rm -f --ignore {shlex.quote(container.name)}"
