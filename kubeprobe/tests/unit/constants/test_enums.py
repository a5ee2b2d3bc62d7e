"""Tests for constants enums."""

from __future__ import annotations

import pytest

from kubeprobe.constants.enums import ResourceType, Severity
from kubeprobe.errors import UnsupportedResourceError


class TestResourceType:
    """Tests for ResourceType parsing and kinds."""

    def test_parse_plural_name(self) -> None:
        """Plural names resolve case-insensitively."""
        assert ResourceType.parse("Deployments") is ResourceType.DEPLOYMENTS
        assert ResourceType.parse(" rollouts ") is ResourceType.ROLLOUTS

    def test_parse_passes_members_through(self) -> None:
        """Enum members are returned unchanged."""
        assert ResourceType.parse(ResourceType.JOBS) is ResourceType.JOBS

    def test_parse_unknown_raises(self) -> None:
        """Unknown kinds raise an error that is also a ValueError."""
        with pytest.raises(UnsupportedResourceError):
            ResourceType.parse("replicasets")
        with pytest.raises(ValueError):
            ResourceType.parse("services")

    def test_kind(self) -> None:
        """Every resource type maps to its API kind."""
        assert ResourceType.STATEFULSETS.kind == "StatefulSet"
        assert ResourceType.PODS.kind == "Pod"
        assert all(member.kind for member in ResourceType)


def test_severity_values() -> None:
    """Severity values are the display strings."""
    assert [s.value for s in Severity] == ["High", "Medium", "Warning"]
