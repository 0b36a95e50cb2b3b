"""
Podunits - systemd units for podman pods.

Translates declarative pod and container definitions into systemd service
units and the podman command lines they run.
"""

__version__ = "1.0.0"
__author__ = "Podunits Development Team"

# Re-export key components for easier access
from podunits.models.config import PodunitsConfig
from podunits.models.container import ContainerSpec
from podunits.models.pod import PodSpec
from podunits.models.unit import ServiceUnit

__all__ = [
    "PodunitsConfig",
    "ContainerSpec",
    "PodSpec",
    "ServiceUnit",
]
