"""Unit tests for base model helpers."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from kubernetes.client import V1Ingress, V1ObjectMeta, V1OwnerReference

from acme_http_solver.integrations.kubernetes.models.base import (
    K8sEntityBase,
    _get_metadata_map,
    _get_timestamp,
    _safe_get,
    controller_reference,
    is_controlled_by,
)


def _owned(*refs: V1OwnerReference) -> V1Ingress:
    return V1Ingress(metadata=V1ObjectMeta(name="x", owner_references=list(refs) or None))


def _ref(uid: str, controller: bool | None) -> V1OwnerReference:
    return V1OwnerReference(
        api_version="v1", kind="Certificate", name="c", uid=uid, controller=controller
    )


@pytest.mark.unit
@pytest.mark.kubernetes
class TestIsControlledBy:
    """Tests for is_controlled_by."""

    def test_controller_matches(self) -> None:
        """The controller reference with the owner's UID counts."""
        assert is_controlled_by(_owned(_ref("u1", True)), "u1")

    def test_controller_other_uid(self) -> None:
        """A controller reference to another UID does not count."""
        assert not is_controlled_by(_owned(_ref("u2", True)), "u1")

    def test_non_controller_reference(self) -> None:
        """A plain owner reference does not count."""
        assert not is_controlled_by(_owned(_ref("u1", False)), "u1")
        assert not is_controlled_by(_owned(_ref("u1", None)), "u1")

    def test_uses_controller_among_many(self) -> None:
        """Only the reference marked as controller is compared."""
        obj = _owned(_ref("u1", False), _ref("u2", True))

        assert is_controlled_by(obj, "u2")
        assert not is_controlled_by(obj, "u1")

    def test_no_references(self) -> None:
        """Objects without owners are not controlled."""
        assert not is_controlled_by(_owned(), "u1")

    def test_missing_owner_uid(self) -> None:
        """An owner without a UID never controls anything."""
        assert not is_controlled_by(_owned(_ref("u1", True)), None)

    def test_controller_reference(self) -> None:
        """The controller reference is returned as a display model."""
        ref = controller_reference(_owned(_ref("u1", False), _ref("u2", True)))

        assert ref is not None
        assert ref.uid == "u2"
        assert ref.controller is True
        assert controller_reference(_owned()) is None


@pytest.mark.unit
@pytest.mark.kubernetes
class TestHelpers:
    """Tests for attribute helpers."""

    def test_safe_get_nested(self) -> None:
        """Should walk nested attributes."""
        obj = V1Ingress(metadata=V1ObjectMeta(name="x"))

        assert _safe_get(obj, "metadata", "name") == "x"
        assert _safe_get(obj, "spec", "rules", default=[]) == []

    def test_get_timestamp(self) -> None:
        """Should render datetimes as ISO strings."""
        ts = datetime(2026, 1, 1, tzinfo=UTC)

        assert _get_timestamp(ts) == "2026-01-01T00:00:00+00:00"
        assert _get_timestamp("raw") == "raw"
        assert _get_timestamp(None) is None

    def test_get_metadata_map(self) -> None:
        """Should copy labels and return None when empty."""
        obj = V1Ingress(metadata=V1ObjectMeta(name="x", labels={"a": "b"}, annotations={}))

        assert _get_metadata_map(obj, "labels") == {"a": "b"}
        assert _get_metadata_map(obj, "annotations") is None


@pytest.mark.unit
@pytest.mark.kubernetes
class TestAge:
    """Tests for K8sEntityBase.age."""

    def test_unknown_without_timestamp(self) -> None:
        """Should report Unknown without a timestamp."""
        assert K8sEntityBase(name="x").age == "Unknown"

    def test_unknown_for_invalid_timestamp(self) -> None:
        """Should report Unknown for unparsable timestamps."""
        assert K8sEntityBase(name="x", creation_timestamp="yesterday").age == "Unknown"

    def test_days(self) -> None:
        """Should report whole days."""
        created = (datetime.now(UTC) - timedelta(days=3, hours=1)).isoformat()

        assert K8sEntityBase(name="x", creation_timestamp=created).age == "3d"
