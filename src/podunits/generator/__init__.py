"""Configuration loading and unit generation."""

from podunits.generator.commands import CommandBuilder
from podunits.generator.config import ConfigManager
from podunits.generator.engine import GenerationEngine, WriteResult
from podunits.generator.linker import DependencyLinker, LinkResult
from podunits.generator.units import UnitGenerator

__all__ = [
    "CommandBuilder",
    "ConfigManager",
    "GenerationEngine",
    "WriteResult",
    "DependencyLinker",
    "LinkResult",
    "UnitGenerator",
]
