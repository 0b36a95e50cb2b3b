"""Unit generation engine."""

import hashlib
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from podunits.generator.commands import CommandBuilder
from podunits.generator.linker import DependencyLinker, LinkResult
from podunits.generator.units import UnitGenerator
from podunits.models.config import PodunitsConfig
from podunits.models.container import ContainerSpec
from podunits.models.pod import PodSpec
from podunits.models.unit import ServiceUnit
from podunits.utils.systemd import render_unit


logger = logging.getLogger(__name__)


@dataclass
class WriteResult:
    """Files touched by a write."""
    written: List[Path] = field(default_factory=list)
    unchanged: List[Path] = field(default_factory=list)


def _digest(content: str) -> str:
    return hashlib.md5(content.encode()).hexdigest()


class GenerationEngine:
    """Turns validated pods and containers into service units."""

    def __init__(
        self,
        config: PodunitsConfig,
        pods: Mapping[str, PodSpec],
        containers: Optional[Mapping[str, ContainerSpec]] = None,
    ):
        """Initialize generation engine."""
        self.config = config
        self.pods = pods
        self.containers = containers or {}
        self.commands = CommandBuilder(config.runtime)
        self.units = UnitGenerator(config.runtime, self.commands)
        self.linker = DependencyLinker(strict=config.runtime.strict_dependencies)

    @classmethod
    def from_manager(cls, manager) -> "GenerationEngine":
        """Build an engine from a loaded ConfigManager."""
        return cls(manager.config, manager.pods, manager.containers)

    def link(self) -> LinkResult:
        return self.linker.link(self.pods, self.containers)

    def generate(self) -> Dict[str, ServiceUnit]:
        """Generate every unit, keyed and sorted by unit name."""
        linked = self.link()
        units: Dict[str, ServiceUnit] = {}

        for name in sorted(self.pods):
            unit = self.units.pod_unit(self.pods[name])
            units[unit.name] = unit

        for name in sorted(linked.containers):
            unit = self.units.container_unit(linked.containers[name])
            override = linked.overrides.get(unit.name)
            if override is not None:
                unit = unit.with_override(override)
            units[unit.name] = unit

        logger.info(
            f"Generated {len(units)} unit(s) for {len(self.pods)} pod(s) "
            f"and {len(linked.containers)} container(s)"
        )
        return dict(sorted(units.items()))

    def render(self) -> Dict[str, str]:
        """Render every unit file, keyed by file name."""
        return {name: render_unit(unit) for name, unit in self.generate().items()}

    def write(self, output_dir: Path) -> WriteResult:
        """Write unit files, leaving files whose content is unchanged alone."""
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        result = WriteResult()

        for name, content in self.render().items():
            target = output_dir / name
            if target.exists() and _digest(target.read_text()) == _digest(content):
                logger.debug(f"Unit {name} unchanged")
                result.unchanged.append(target)
                continue

            tmp = target.with_name(f".{name}.tmp")
            tmp.write_text(content)
            tmp.replace(target)
            logger.info(f"Wrote unit {target}")
            result.written.append(target)

        return result
