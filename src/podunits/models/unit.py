"""Service unit descriptor models."""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class RestartPolicy(str, Enum):
    """systemd Restart= values used by generated units."""
    NEVER = "no"
    ON_FAILURE = "on-failure"
    ALWAYS = "always"


class ServiceType(str, Enum):
    """systemd Type= values."""
    FORKING = "forking"
    SIMPLE = "simple"
    NOTIFY = "notify"
    ONESHOT = "oneshot"


class UnitOverride(BaseModel):
    """Ordering edges added to an existing unit."""
    model_config = ConfigDict(frozen=True)

    unit: str = Field(..., description="Unit the override applies to")
    after: List[str] = Field(default_factory=list)
    requires: List[str] = Field(default_factory=list)


class ServiceUnit(BaseModel):
    """A generated systemd service unit."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Unit file name, including .service")
    description: str = ""

    # [Unit] / [Install]
    after: List[str] = Field(default_factory=list)
    wants: List[str] = Field(default_factory=list)
    requires: List[str] = Field(default_factory=list)
    wanted_by: List[str] = Field(default_factory=list)

    # [Service]
    type: ServiceType = ServiceType.SIMPLE
    environment: Dict[str, str] = Field(default_factory=dict)
    path: List[str] = Field(default_factory=list)
    start_pre: List[str] = Field(default_factory=list)
    start: str
    stop: Optional[str] = None
    stop_post: Optional[str] = None
    pid_file: Optional[str] = None
    restart: RestartPolicy = RestartPolicy.NEVER
    timeout_stop_sec: Optional[int] = None

    def with_override(self, override: UnitOverride) -> "ServiceUnit":
        """Return a copy with the override's ordering edges appended."""
        after = self.after + [u for u in override.after if u not in self.after]
        requires = self.requires + [u for u in override.requires if u not in self.requires]
        return self.model_copy(update={"after": after, "requires": requires})
