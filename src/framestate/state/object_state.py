"""State of one annotated object on one frame.

Usage:
    state = ObjectState({"frame": 0, "type": "shape", "shape": "rectangle"})
    state.points = [0, 0, 10, 10]
    state.attributes = {5: "cat"}
    state.changed_fields()  # frozenset({"points", "attributes"})

    # Owning collections attach hooks; plugins may wrap both operations
    state.update_in_collection = collection.updater(state)
    await state.persist()
    await state.remove(force=True)
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from framestate.config import StateSettings
from framestate.core.enums import ObjectShape, ObjectType
from framestate.core.snapshot import ObjectSnapshot
from framestate.core.validators import (
    STRICT_VALIDATORS,
    FieldValidator,
    copy_points,
    validate_attributes,
)
from framestate.plugins.models import Operation
from framestate.plugins.operations import default_persist, default_remove
from framestate.plugins.protocol import DispatchGateway
from framestate.plugins.registry import get_registry
from framestate.state.tracking import FieldStore, UpdateFlags


class ObjectState:
    """Mutable state of an annotated object on a specific frame.

    ``frame``, ``type`` and ``shape`` are fixed at construction. Every other
    field is written through a property setter, which always marks the field
    dirty. Construction applies the snapshot and then clears all flags, so a
    new state reports no pending changes.

    Args:
        snapshot: Initial values, as an ObjectSnapshot or a mapping accepted by
            ObjectSnapshot.from_dict. ``frame``, ``type`` and ``shape`` are required.
        validators: Extra per-field validators, called as validator(field, value)
            before the write. Defaults to STRICT_VALIDATORS when
            settings.strict_validation is set, otherwise none.
        gateway: Dispatch gateway for persist/remove. Defaults to the global
            plugin registry, looked up on every call.
        settings: Configuration. Defaults to StateSettings().
        update_in_collection: Optional hook used by the default persist.
        delete_from_collection: Optional hook used by the default remove.

    Raises:
        ArgumentError: If the snapshot or one of its values is invalid.
    """

    __slots__ = (
        "_frame",
        "_type",
        "_shape",
        "_store",
        "_validators",
        "_gateway",
        "update_in_collection",
        "delete_from_collection",
    )

    def __init__(
        self,
        snapshot: ObjectSnapshot | Mapping[str, Any],
        *,
        validators: Mapping[str, FieldValidator] | None = None,
        gateway: DispatchGateway | None = None,
        settings: StateSettings | None = None,
        update_in_collection: Any = None,
        delete_from_collection: Any = None,
    ) -> None:
        if not isinstance(snapshot, ObjectSnapshot):
            snapshot = ObjectSnapshot.from_dict(snapshot)

        if validators is None:
            settings = settings or StateSettings()
            validators = STRICT_VALIDATORS if settings.strict_validation else {}

        self._frame = snapshot.frame
        self._type = snapshot.type
        self._shape = snapshot.shape
        self._store = FieldStore()
        self._validators: Mapping[str, FieldValidator] = dict(validators)
        self._gateway = gateway
        self.update_in_collection = update_in_collection
        self.delete_from_collection = delete_from_collection

        self._store.set("attributes", {})

        self.label = snapshot.label
        self.group = snapshot.group
        self.z_order = snapshot.z_order
        self.outside = snapshot.outside
        self.keyframe = snapshot.keyframe
        self.occluded = snapshot.occluded
        self.attributes = snapshot.attributes
        self.points = snapshot.points
        self.color = snapshot.color
        self.lock = snapshot.lock

        self._store.reset()

    def _write(self, name: str, value: Any) -> None:
        """Run the installed validator for name, then store and flag the value."""
        validator = self._validators.get(name)
        if validator is not None:
            value = validator(name, value)
        self._store.set(name, value)

    # Read-only

    @property
    def frame(self) -> int:
        """Frame this state belongs to."""
        return self._frame

    @property
    def type(self) -> ObjectType:
        return self._type

    @property
    def shape(self) -> ObjectShape:
        return self._shape

    # Tracked

    @property
    def label(self) -> Any:
        """Label reference. Opaque to ObjectState."""
        return self._store.get("label")

    @label.setter
    def label(self, label: Any) -> None:
        self._write("label", label)

    @property
    def attributes(self) -> Mapping[int, Any]:
        """Read-only view of attribute id to value pairs.

        Assigning merges: new ids are added, existing ids overwritten, and ids
        not mentioned are kept.

        Raises:
            ArgumentError: On assignment of a non-mapping value.
        """
        return MappingProxyType(self._store.get("attributes"))

    @attributes.setter
    def attributes(self, attributes: Mapping[Any, Any]) -> None:
        normalized = validate_attributes(attributes)
        validator = self._validators.get("attributes")
        if validator is not None:
            normalized = validator("attributes", normalized)
        merged = dict(self._store.get("attributes"))
        merged.update(normalized)
        self._store.set("attributes", merged)

    @property
    def points(self) -> list[float] | None:
        """Flattened coordinates. Returns a copy; assign to change them."""
        points = self._store.get("points")
        return list(points) if points is not None else None

    @points.setter
    def points(self, points: Any) -> None:
        self._write("points", copy_points(points))

    @property
    def outside(self) -> bool | None:
        return self._store.get("outside")

    @outside.setter
    def outside(self, outside: bool | None) -> None:
        self._write("outside", outside)

    @property
    def occluded(self) -> bool | None:
        return self._store.get("occluded")

    @occluded.setter
    def occluded(self, occluded: bool | None) -> None:
        self._write("occluded", occluded)

    @property
    def keyframe(self) -> bool | None:
        return self._store.get("keyframe")

    @keyframe.setter
    def keyframe(self, keyframe: bool | None) -> None:
        self._write("keyframe", keyframe)

    @property
    def group(self) -> int | None:
        return self._store.get("group")

    @group.setter
    def group(self, group: int | None) -> None:
        self._write("group", group)

    @property
    def z_order(self) -> int | None:
        return self._store.get("z_order")

    @z_order.setter
    def z_order(self, z_order: int | None) -> None:
        self._write("z_order", z_order)

    @property
    def lock(self) -> bool | None:
        """Locked objects are kept by collections unless removal is forced."""
        return self._store.get("lock")

    @lock.setter
    def lock(self, lock: bool | None) -> None:
        self._write("lock", lock)

    @property
    def color(self) -> str | None:
        return self._store.get("color")

    @color.setter
    def color(self, color: str | None) -> None:
        self._write("color", color)

    # Change tracking

    @property
    def update_flags(self) -> UpdateFlags:
        """Copy of the dirty flags. Changing the copy does not affect the state."""
        return dataclasses.replace(self._store.flags)

    def dirty(self, name: str) -> bool:
        """Check whether a field was written since the last reset.

        Raises:
            KeyError: If name is not a tracked field.
        """
        return self._store.flags.is_dirty(name)

    def changed_fields(self) -> frozenset[str]:
        """Names of fields written since the last reset."""
        return self._store.flags.changed()

    def reset_dirty(self) -> None:
        """Clear every dirty flag, e.g. after the collection saved this state."""
        self._store.reset()

    # Serialization

    def to_snapshot(self) -> ObjectSnapshot:
        """Export current values. Dirty flags are not included."""
        return ObjectSnapshot(
            frame=self._frame,
            type=self._type,
            shape=self._shape,
            label=self.label,
            attributes=dict(self._store.get("attributes")),
            points=self.points,
            outside=self.outside,
            occluded=self.occluded,
            keyframe=self.keyframe,
            group=self.group,
            z_order=self.z_order,
            lock=self.lock,
            color=self.color,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return self.to_snapshot().to_dict()

    # Gateway operations

    def _resolve_gateway(self) -> DispatchGateway:
        return self._gateway if self._gateway is not None else get_registry()

    async def persist(self) -> ObjectState:
        """Save this state through the active persist implementation.

        Without plugins this calls ``update_in_collection()`` if attached and
        otherwise returns the state unchanged.

        Returns:
            Updated state of the object.

        Raises:
            PluginError: If a plugin in the chain fails.
        """
        return await self._resolve_gateway().invoke(self, Operation.PERSIST, default_persist)

    async def remove(self, force: bool = False) -> bool:
        """Delete this state through the active remove implementation.

        Without plugins this calls ``delete_from_collection(force)`` if attached
        and otherwise returns False. The lock is not checked here.

        Args:
            force: Ask the collection to remove the object even if it is locked.

        Returns:
            Whether the object was removed.

        Raises:
            PluginError: If a plugin in the chain fails.
        """
        return await self._resolve_gateway().invoke(
            self, Operation.REMOVE, default_remove, force
        )

    def __repr__(self) -> str:
        return (
            f"ObjectState(frame={self._frame}, type={self._type.value}, "
            f"shape={self._shape.value}, label={self.label!r})"
        )
