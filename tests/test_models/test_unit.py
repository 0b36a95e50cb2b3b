"""Tests for service unit models."""

import pytest
from pydantic import ValidationError

from podunits.models.unit import RestartPolicy, ServiceType, ServiceUnit, UnitOverride


class TestServiceUnit:
    """Test ServiceUnit model."""

    def test_defaults(self):
        """Test default unit values."""
        unit = ServiceUnit(name="test.service", start="/bin/true")

        assert unit.type == ServiceType.SIMPLE
        assert unit.restart == RestartPolicy.NEVER
        assert unit.restart.value == "no"
        assert unit.pid_file is None
        assert unit.after == []

    def test_frozen(self):
        """Test that generated units cannot be modified."""
        unit = ServiceUnit(name="test.service", start="/bin/true")

        with pytest.raises(ValidationError):
            unit.start = "/bin/false"

    def test_with_override(self):
        """Test merging ordering edges into a unit."""
        unit = ServiceUnit(
            name="podman-web-app.service",
            start="/bin/true",
            after=["network-online.target", "podman-web-db.service"],
            requires=["podman-web-db.service"],
        )
        override = UnitOverride(
            unit="podman-web-app.service",
            after=["pod-web.service"],
            requires=["pod-web.service"],
        )

        merged = unit.with_override(override)

        assert merged.after == [
            "network-online.target",
            "podman-web-db.service",
            "pod-web.service",
        ]
        assert merged.requires == ["podman-web-db.service", "pod-web.service"]
        # Original is untouched
        assert unit.after == ["network-online.target", "podman-web-db.service"]

    def test_with_override_skips_existing(self):
        """Test that edges already present are not repeated."""
        unit = ServiceUnit(name="a.service", start="/bin/true", after=["pod-web.service"])
        merged = unit.with_override(UnitOverride(unit="a.service", after=["pod-web.service"]))

        assert merged.after == ["pod-web.service"]
