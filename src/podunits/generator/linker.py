"""Moves pod member containers into their pod."""

import logging
from dataclasses import dataclass, field
from typing import Dict, Mapping, Tuple

from podunits.errors import DuplicateNameError, UnknownDependencyError
from podunits.generator.units import container_unit_name, pod_unit_name
from podunits.models.container import ContainerSpec
from podunits.models.pod import PodSpec
from podunits.models.unit import UnitOverride


logger = logging.getLogger(__name__)


def qualified_name(pod_name: str, container_name: str) -> str:
    """Runtime name of a container inside a pod."""
    return f"{pod_name}-{container_name}"


@dataclass
class LinkResult:
    """Containers ready for unit generation plus the pod ordering edges."""
    containers: Dict[str, ContainerSpec] = field(default_factory=dict)
    overrides: Dict[str, UnitOverride] = field(default_factory=dict)


class DependencyLinker:
    """Rewrites pod members so they join their pod at runtime.

    Each member is renamed to ``<pod>-<container>``, its dependencies are
    renamed the same way, ``--pod=<pod>`` is added to its runtime flags and
    its unit is ordered after the pod's unit. Input specs are left untouched.
    """

    def __init__(self, strict: bool = True):
        self.strict = strict

    def link_container(self, pod: PodSpec, container: ContainerSpec) -> Tuple[ContainerSpec, UnitOverride]:
        """Link a single member container to its pod."""
        if self.strict:
            missing = [dep for dep in container.depends_on if dep not in pod.containers]
            if missing:
                logger.error(
                    f"Container {container.name} in pod {pod.name} depends on "
                    f"unknown container(s): {', '.join(missing)}"
                )
                raise UnknownDependencyError(
                    f"Container {container.name!r} in pod {pod.name!r} depends on "
                    f"{', '.join(repr(m) for m in missing)}, not declared in the same pod"
                )

        name = qualified_name(pod.name, container.name)
        linked = container.model_copy(update={
            "name": name,
            "depends_on": [qualified_name(pod.name, dep) for dep in container.depends_on],
            "extra_options": container.extra_options + [f"--pod={pod.name}"],
        })
        pod_unit = pod_unit_name(pod.name)
        override = UnitOverride(
            unit=container_unit_name(name),
            after=[pod_unit],
            requires=[pod_unit],
        )
        return linked, override

    def link(self, pods: Mapping[str, PodSpec], standalone: Mapping[str, ContainerSpec]) -> LinkResult:
        """Merge standalone containers with linked members of every pod."""
        result = LinkResult(containers=dict(standalone))

        for pod_name in sorted(pods):
            pod = pods[pod_name]
            for container_name in sorted(pod.containers):
                linked, override = self.link_container(pod, pod.containers[container_name])
                if linked.name in result.containers:
                    logger.error(f"Container name collision: {linked.name}")
                    raise DuplicateNameError(
                        f"Container {container_name!r} in pod {pod_name!r} is named "
                        f"{linked.name!r} at runtime, which is already taken"
                    )
                result.containers[linked.name] = linked
                result.overrides[override.unit] = override
                logger.debug(f"Linked {linked.name} to pod {pod_name}")

        if self.strict:
            for name, container in standalone.items():
                missing = [dep for dep in container.depends_on if dep not in result.containers]
                if missing:
                    logger.error(f"Container {name} depends on unknown container(s): {', '.join(missing)}")
                    raise UnknownDependencyError(
                        f"Container {name!r} depends on "
                        f"{', '.join(repr(m) for m in missing)}, which is not declared"
                    )

        return result
