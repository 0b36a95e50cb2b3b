"""Container specification models."""

import re
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, field_validator


# Names end up in file paths and unit names, so keep them to a safe subset.
NAME_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]*$")


def check_name(value: str) -> str:
    """Validate that a name is usable as a path segment and a unit name."""
    if not NAME_PATTERN.fullmatch(value):
        raise ValueError(
            f"Invalid name {value!r}: use letters, digits, '_', '.' or '-', "
            "starting with a letter or digit"
        )
    return value


class ContainerSpec(BaseModel):
    """Container specification."""
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    name: StrictStr = Field(..., description="Container name")
    image: StrictStr = Field(..., description="Image to run")
    cmd: List[StrictStr] = Field(default_factory=list)
    entrypoint: Optional[StrictStr] = None
    environment: Dict[StrictStr, StrictStr] = Field(default_factory=dict)
    environment_files: List[StrictStr] = Field(default_factory=list, alias="environment-files")
    log_driver: StrictStr = Field(default="journald", alias="log-driver")
    ports: List[StrictStr] = Field(default_factory=list)
    volumes: List[StrictStr] = Field(default_factory=list)
    labels: Dict[StrictStr, StrictStr] = Field(default_factory=dict)
    user: Optional[StrictStr] = None
    workdir: Optional[StrictStr] = None
    depends_on: List[StrictStr] = Field(
        default_factory=list, alias="depends-on",
        description="Names of containers that must start first",
    )
    extra_options: List[StrictStr] = Field(
        default_factory=list, alias="extra-options",
        description="Raw flags passed to the runtime",
    )
    autostart: StrictBool = Field(default=True)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        """Validate container name."""
        return check_name(v)
