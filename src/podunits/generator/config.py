"""Configuration loading and merging."""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError
from pydantic import ValidationError

from podunits.errors import ConfigError, DuplicateNameError
from podunits.models.config import PodunitsConfig
from podunits.models.container import ContainerSpec
from podunits.models.pod import PodSpec


logger = logging.getLogger(__name__)


class ConfigManager:
    """Loads the main config, pods and standalone containers.

    Pods and containers may be spread over several files. Every name must be
    declared exactly once; a second declaration is an error rather than an
    override.
    """

    def __init__(self, config_dir: Path):
        """Initialize configuration manager."""
        self.config_dir = Path(config_dir)
        # Safe mode yields plain dicts, lists and strings for strict validation
        self.yaml = YAML(typ="safe")
        self.config: Optional[PodunitsConfig] = None
        self.pods: Dict[str, PodSpec] = {}
        self.containers: Dict[str, ContainerSpec] = {}
        self._sources: Dict[Tuple[str, str], Path] = {}

    def load(self):
        """Load all configuration files."""
        logger.info(f"Loading configuration from {self.config_dir}")

        self._sources.clear()
        self._load_main_config()
        self._load_pods()
        self._load_containers()

        logger.info(
            f"Configuration loaded: {len(self.pods)} pod(s), "
            f"{len(self.containers)} standalone container(s)"
        )

    def _load_main_config(self):
        """Load main configuration file."""
        config_file = self.config_dir / "config.yaml"
        if not config_file.exists():
            raise FileNotFoundError(f"Main config not found: {config_file}")

        try:
            data = self._read_yaml(config_file) or {}
            if not isinstance(data, dict):
                raise ConfigError(f"{config_file}: expected a mapping")
            self.config = PodunitsConfig(**data)
            logger.debug(f"Loaded main config: {config_file}")
        except ValidationError as e:
            logger.error(f"Invalid main config: {e}")
            raise

    def _load_pods(self):
        """Load pod definitions."""
        self.pods.clear()
        for yaml_file, name, spec in self._iter_entries("pods"):
            try:
                self.pods[name] = PodSpec.model_validate({**spec, "name": name})
            except ValidationError as e:
                logger.error(f"Invalid pod {name} in {yaml_file}: {e}")
                raise
            logger.debug(f"Loaded pod {name} from {yaml_file}")

    def _load_containers(self):
        """Load standalone container definitions."""
        self.containers.clear()
        for yaml_file, name, spec in self._iter_entries("containers"):
            try:
                self.containers[name] = ContainerSpec.model_validate({**spec, "name": name})
            except ValidationError as e:
                logger.error(f"Invalid container {name} in {yaml_file}: {e}")
                raise
            logger.debug(f"Loaded container {name} from {yaml_file}")

    def _iter_entries(self, kind: str):
        """Yield ``(file, name, fields)`` for every entry under ``<kind>/``."""
        directory = self.config_dir / kind
        if not directory.exists():
            logger.warning(f"{kind.capitalize()} directory not found: {directory}")
            return

        for yaml_file in sorted(directory.glob("*.yaml")):
            data = self._read_yaml(yaml_file)
            if data is None:
                continue
            if not isinstance(data, dict):
                raise ConfigError(f"{yaml_file}: expected a mapping of {kind}")
            for name, spec in self._unwrap(kind, data).items():
                self._claim(kind, name, yaml_file)
                if spec is None:
                    spec = {}
                if not isinstance(spec, dict):
                    raise ConfigError(f"{yaml_file}: {kind} entry {name!r} must be a mapping")
                yield yaml_file, name, spec

    @staticmethod
    def _unwrap(kind: str, data: Dict[Any, Any]) -> Dict[Any, Any]:
        """Strip an optional top-level ``<kind>:`` key.

        The key is only a wrapper when everything under it is a mapping of
        entries; ``pods: {hostname: h}`` declares a pod named ``pods``.
        """
        if set(data) != {kind}:
            return data
        inner = data[kind]
        if inner is None:
            return {}
        if isinstance(inner, dict) and all(
            isinstance(spec, dict) or spec is None for spec in inner.values()
        ):
            return inner
        return data

    def _claim(self, kind: str, name: Any, source: Path):
        """Record where a name was declared, rejecting duplicates."""
        key = (kind, str(name))
        if key in self._sources:
            logger.error(f"Duplicate {kind} entry {name!r}")
            raise DuplicateNameError(
                f"{kind} entry {name!r} declared in both "
                f"{self._sources[key]} and {source}"
            )
        self._sources[key] = source

    def _read_yaml(self, file_path: Path) -> Any:
        """Read and parse YAML file."""
        content = file_path.read_text()
        try:
            return self.yaml.load(content)
        except YAMLError as e:
            # Covers duplicate keys inside a single document as well
            logger.error(f"Error parsing {file_path}: {e}")
            raise ConfigError(f"{file_path}: {e}") from e

    def get_pod_spec(self, name: str) -> Optional[PodSpec]:
        """Get pod specification by name."""
        return self.pods.get(name)

    def get_container_spec(self, name: str) -> Optional[ContainerSpec]:
        """Get standalone container specification by name."""
        return self.containers.get(name)
