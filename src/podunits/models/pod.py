"""Pod specification models."""

from typing import Any, Dict, List, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictStr,
    field_validator,
    model_validator,
)

from podunits.models.container import ContainerSpec, check_name


class PodSpec(BaseModel):
    """Pod specification.

    Field aliases follow the ``podman pod create`` flag names, so YAML keys
    read like the command line they produce.
    """
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    name: StrictStr = Field(..., description="Pod name")
    added_hosts: List[StrictStr] = Field(
        default_factory=list, alias="added-hosts",
        description="Additional hosts to add to /etc/hosts, as name:ip",
    )
    cgroup_parent: Optional[StrictStr] = Field(
        None, alias="cgroup-parent",
        description="The cgroups path under which the pod cgroup is created",
    )
    dns: List[StrictStr] = Field(default_factory=list, description="DNS servers")
    dns_opt: List[StrictStr] = Field(default_factory=list, alias="dns-opt")
    dns_search: List[StrictStr] = Field(default_factory=list, alias="dns-search")
    hostname: Optional[StrictStr] = None
    infra: Optional[StrictBool] = Field(
        None, description="Whether to create the infra container"
    )
    infra_command: Optional[StrictStr] = Field(None, alias="infra-command")
    infra_image: Optional[StrictStr] = Field(None, alias="infra-image")
    ip: Optional[StrictStr] = Field(None, description="Static IP for the pod network")
    mac_address: Optional[StrictStr] = Field(None, alias="mac-address")
    network: Optional[StrictStr] = None
    network_alias: Optional[StrictStr] = Field(None, alias="network-alias")
    no_hosts: Optional[StrictBool] = Field(None, alias="no-hosts")
    publish: List[StrictStr] = Field(default_factory=list, description="Ports to publish")
    share: List[StrictStr] = Field(default_factory=list, description="Namespaces to share")
    containers: Dict[StrictStr, ContainerSpec] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def name_containers(cls, data: Any) -> Any:
        """Fill in member container names from their mapping keys."""
        if not isinstance(data, dict):
            return data
        containers = data.get("containers")
        if not isinstance(containers, dict):
            return data
        named = {}
        for key, spec in containers.items():
            if isinstance(spec, dict) and "name" not in spec:
                spec = {"name": key, **spec}
            named[key] = spec
        return {**data, "containers": named}

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        """Validate pod name."""
        return check_name(v)

    @field_validator("containers")
    @classmethod
    def validate_container_keys(cls, v):
        """Ensure container keys match the names they carry."""
        for key, spec in v.items():
            if key != spec.name:
                raise ValueError(
                    f"Container key {key!r} does not match its name {spec.name!r}"
                )
        return v
