"""Construction input for ObjectState.

A snapshot is the serialized form an ObjectState is built from and exported to.
It carries no change-tracking information.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeVar

from framestate.core.enums import ObjectShape, ObjectType
from framestate.core.errors import ArgumentError
from framestate.core.validators import validate_attributes

E = TypeVar("E", bound=Enum)


def parse_frame(value: Any) -> int:
    """Check that a frame number is present and an integer.

    Raises:
        ArgumentError: If value is missing, a bool, or not an int.
    """
    if value is None:
        raise ArgumentError("Snapshot field 'frame' is required")
    if isinstance(value, bool) or not isinstance(value, int):
        raise ArgumentError(f"Expected frame is integer, but got {type(value).__name__}")
    return value


def parse_enum(enum_cls: type[E], value: Any, name: str) -> E:
    """Accept an enum member or its value.

    Raises:
        ArgumentError: If value is missing or not a member of enum_cls.
    """
    if isinstance(value, enum_cls):
        return value
    if value is None:
        raise ArgumentError(f"Snapshot field '{name}' is required")
    try:
        return enum_cls(value)
    except ValueError as e:
        allowed = ", ".join(repr(member.value) for member in enum_cls)
        raise ArgumentError(f"Unknown {name} {value!r}, expected one of {allowed}") from e


@dataclass(slots=True)
class ObjectSnapshot:
    """Initial values for an ObjectState.

    Attributes:
        frame: Frame number.
        type: Object type tag.
        shape: Geometry tag.
        label: Label reference (opaque to framestate).
        attributes: Mapping of attribute id to value.
        points: Flattened coordinate list.
        outside: Object is outside the frame.
        occluded: Object is occluded.
        keyframe: Frame is a keyframe of a track.
        group: Group id.
        z_order: Drawing order.
        lock: Object is locked against edits.
        color: Color token, e.g. "#ff0000".

    Example:
        snapshot = ObjectSnapshot.from_dict(
            {"frame": 3, "type": "shape", "shape": "rectangle", "points": [0, 0, 10, 10]}
        )
    """

    frame: int
    type: ObjectType
    shape: ObjectShape
    label: Any = None
    attributes: dict[int, Any] = field(default_factory=dict)
    points: list[float] | None = None
    outside: bool | None = None
    occluded: bool | None = None
    keyframe: bool | None = None
    group: int | None = None
    z_order: int | None = None
    lock: bool | None = None
    color: str | None = None

    def __post_init__(self) -> None:
        self.frame = parse_frame(self.frame)
        self.type = parse_enum(ObjectType, self.type, "type")
        self.shape = parse_enum(ObjectShape, self.shape, "shape")
        self.attributes = (
            validate_attributes(self.attributes) if self.attributes is not None else {}
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return {
            "frame": self.frame,
            "type": self.type.value,
            "shape": self.shape.value,
            "label": self.label,
            "attributes": dict(self.attributes),
            "points": list(self.points) if self.points is not None else None,
            "outside": self.outside,
            "occluded": self.occluded,
            "keyframe": self.keyframe,
            "group": self.group,
            "zOrder": self.z_order,
            "lock": self.lock,
            "color": self.color,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ObjectSnapshot:
        """Create from dictionary. Accepts both ``zOrder`` and ``z_order``.

        Raises:
            ArgumentError: If data is not a mapping, frame is missing or not an
                integer, or type/shape are missing or unknown.
        """
        if not isinstance(data, Mapping):
            raise ArgumentError(f"Expected snapshot is mapping, but got {type(data).__name__}")

        z_order = data.get("zOrder")
        if z_order is None:
            z_order = data.get("z_order")
        return cls(
            frame=data.get("frame"),
            type=data.get("type"),
            shape=data.get("shape"),
            label=data.get("label"),
            attributes=data.get("attributes"),
            points=data.get("points"),
            outside=data.get("outside"),
            occluded=data.get("occluded"),
            keyframe=data.get("keyframe"),
            group=data.get("group"),
            z_order=z_order,
            lock=data.get("lock"),
            color=data.get("color"),
        )
