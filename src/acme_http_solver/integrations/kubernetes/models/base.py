"""Base models and attribute helpers for Kubernetes resources.

The kubernetes SDK returns typed objects (``V1Ingress`` ...) for built-in
kinds and plain dicts for custom resources; the helpers here cover the typed
side.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field


def _format_age(delta: timedelta) -> str:
    if delta.days > 0:
        return f"{delta.days}d"
    hours, remainder = divmod(delta.seconds, 3600)
    if hours > 0:
        return f"{hours}h"
    return f"{remainder // 60}m"


class K8sEntityBase(BaseModel):
    """Common identity fields shared by all resource models."""

    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    name: str = Field(description="Resource name")
    namespace: str | None = Field(default=None, description="Resource namespace")
    uid: str | None = Field(default=None, description="Kubernetes UID")
    creation_timestamp: str | None = Field(default=None, description="Creation time")
    labels: dict[str, str] | None = Field(default=None, description="Resource labels")
    annotations: dict[str, str] | None = Field(default=None, description="Resource annotations")

    _entity_name: ClassVar[str] = "entity"

    @property
    def age(self) -> str:
        """Human-readable age such as ``3d``, ``5h`` or ``12m``."""
        if not self.creation_timestamp:
            return "Unknown"
        try:
            created = datetime.fromisoformat(self.creation_timestamp.replace("Z", "+00:00"))
        except ValueError:
            return "Unknown"
        return _format_age(datetime.now(UTC) - created)


class OwnerReference(BaseModel):
    """Owner reference as shown in CLI output."""

    model_config = ConfigDict(extra="ignore")

    api_version: str | None = None
    kind: str | None = None
    name: str | None = None
    uid: str | None = None
    controller: bool = False

    @classmethod
    def from_k8s_object(cls, obj: Any) -> OwnerReference:
        """Create from a kubernetes V1OwnerReference object."""
        if obj is None:
            return cls()
        return cls(
            api_version=getattr(obj, "api_version", None),
            kind=getattr(obj, "kind", None),
            name=getattr(obj, "name", None),
            uid=getattr(obj, "uid", None),
            controller=bool(getattr(obj, "controller", False)),
        )


def _safe_get(obj: Any, *attrs: str, default: Any = None) -> Any:
    """Follow ``attrs`` on an SDK object, stopping at the first ``None``."""
    current = obj
    for attr in attrs:
        if current is None:
            return default
        current = getattr(current, attr, None)
    return current if current is not None else default


def _get_timestamp(obj: Any) -> str | None:
    """Render an SDK timestamp (datetime or string) as an ISO string."""
    if obj is None:
        return None
    if isinstance(obj, datetime):
        return obj.isoformat()
    return str(obj)


def _get_metadata_map(obj: Any, field: str) -> dict[str, str] | None:
    """Copy ``metadata.<field>`` (labels or annotations); ``None`` when empty."""
    value = _safe_get(obj, "metadata", field)
    return dict(value) if value else None


def controller_reference(obj: Any) -> OwnerReference | None:
    """Return the owner reference marked ``controller: true``, if any."""
    for ref in _safe_get(obj, "metadata", "owner_references", default=[]):
        if getattr(ref, "controller", False):
            return OwnerReference.from_k8s_object(ref)
    return None


def is_controlled_by(obj: Any, owner_uid: str | None) -> bool:
    """Return whether ``obj``'s controller is the object with ``owner_uid``.

    Same rule as apimachinery's ``IsControlledBy``: plain owner references
    do not count.
    """
    if not owner_uid:
        return False
    ref = controller_reference(obj)
    return ref is not None and ref.uid == owner_uid
