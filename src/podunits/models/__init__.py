"""Pydantic models for configuration and validation."""

from podunits.models.config import PodunitsConfig, GeneratorConfig, RuntimeConfig
from podunits.models.container import ContainerSpec
from podunits.models.pod import PodSpec
from podunits.models.unit import RestartPolicy, ServiceType, ServiceUnit, UnitOverride

__all__ = [
    "PodunitsConfig",
    "GeneratorConfig",
    "RuntimeConfig",
    "ContainerSpec",
    "PodSpec",
    "RestartPolicy",
    "ServiceType",
    "ServiceUnit",
    "UnitOverride",
]
