"""Unit tests for all enum definitions in constants/enums.py."""

from __future__ import annotations

from enum import Enum

import pytest

from kdiff.constants.enums import FetchState, ImageComponent, ResourceKind

# =============================================================================
# ResourceKind
# =============================================================================


class TestResourceKind:
    """Test ResourceKind enum."""

    def test_is_enum(self) -> None:
        assert issubclass(ResourceKind, Enum)

    def test_members_count(self) -> None:
        assert len(ResourceKind) == 3

    def test_values(self) -> None:
        assert ResourceKind.DEPLOYMENT.value == "Deployment"
        assert ResourceKind.STATEFUL_SET.value == "StatefulSet"
        assert ResourceKind.DAEMON_SET.value == "DaemonSet"

    def test_kubectl_resource(self) -> None:
        assert ResourceKind.DEPLOYMENT.kubectl_resource == "deployments.apps"
        assert ResourceKind.STATEFUL_SET.kubectl_resource == "statefulsets.apps"
        assert ResourceKind.DAEMON_SET.kubectl_resource == "daemonsets.apps"

    @pytest.mark.parametrize("raw", ["deployment", "Deployment", " DEPLOYMENT "])
    def test_parse_is_case_insensitive(self, raw: str) -> None:
        assert ResourceKind.parse(raw) is ResourceKind.DEPLOYMENT

    def test_parse_unknown(self) -> None:
        with pytest.raises(ValueError):
            ResourceKind.parse("CronJob")


# =============================================================================
# ImageComponent
# =============================================================================


class TestImageComponent:
    """Test ImageComponent enum."""

    def test_members(self) -> None:
        assert [component.value for component in ImageComponent] == [
            "registry",
            "name",
            "tag",
            "digest",
        ]

    def test_membership(self) -> None:
        assert ImageComponent("tag") is ImageComponent.TAG


# =============================================================================
# FetchState
# =============================================================================


class TestFetchState:
    """Test FetchState enum."""

    def test_members_count(self) -> None:
        assert len(FetchState) == 4

    def test_invalid_membership(self) -> None:
        with pytest.raises(ValueError):
            FetchState("invalid")
