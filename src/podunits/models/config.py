"""Configuration models."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class GeneratorConfig(BaseModel):
    """Generator configuration."""
    log_level: str = Field(default="INFO")
    output_dir: str = Field(default="./units")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}")
        return v.upper()


class RuntimeConfig(BaseModel):
    """Container runtime settings baked into generated commands."""
    binary: str = Field(default="/usr/bin/podman")
    pid_dir: str = Field(default="/run/podman/pods")
    stop_timeout: int = Field(default=70, ge=1)
    strict_dependencies: bool = Field(default=True)

    @field_validator("pid_dir")
    @classmethod
    def strip_trailing_slash(cls, v):
        """Normalise the pid directory so joined paths stay clean."""
        return v.rstrip("/") or "/"


class PodunitsConfig(BaseModel):
    """Main configuration model."""
    model_config = ConfigDict(extra="ignore")

    generator: GeneratorConfig = Field(default_factory=GeneratorConfig)
    runtime: RuntimeConfig = Field(default_factory=RuntimeConfig)
