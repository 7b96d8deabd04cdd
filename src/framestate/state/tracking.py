"""Change tracking for mutable ObjectState fields.

FieldStore keeps field values next to one dirty flag per field. Writing a value
always marks its flag; there is no write path that skips it. Flags are cleared
together by reset(), after a save or an interpolation pass.

Usage:
    store = FieldStore()
    store.set("label", car)
    store.flags.is_dirty("label")  # True
    store.reset()
    store.flags.changed()  # frozenset()
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, fields
from typing import Any

TRACKED_FIELDS: tuple[str, ...] = (
    "label",
    "attributes",
    "points",
    "outside",
    "occluded",
    "keyframe",
    "group",
    "z_order",
    "lock",
    "color",
)
"""Mutable fields of an ObjectState, in the order they are applied at construction."""


@dataclass(slots=True)
class UpdateFlags:
    """Shows whether each field was written since the last reset().

    A freshly created instance has every flag cleared.
    """

    label: bool = False
    attributes: bool = False
    points: bool = False
    outside: bool = False
    occluded: bool = False
    keyframe: bool = False
    group: bool = False
    z_order: bool = False
    lock: bool = False
    color: bool = False

    def reset(self) -> None:
        """Clear every flag in one step."""
        for name in TRACKED_FIELDS:
            setattr(self, name, False)

    def mark(self, name: str) -> None:
        """Flag a field as written.

        Raises:
            KeyError: If name is not a tracked field.
        """
        _check_field(name)
        setattr(self, name, True)

    def is_dirty(self, name: str) -> bool:
        """Check whether a field was written since the last reset.

        Raises:
            KeyError: If name is not a tracked field.
        """
        _check_field(name)
        return bool(getattr(self, name))

    def changed(self) -> frozenset[str]:
        """Names of all fields written since the last reset."""
        return frozenset(f.name for f in fields(self) if getattr(self, f.name))

    def __iter__(self) -> Iterator[tuple[str, bool]]:
        for name in TRACKED_FIELDS:
            yield name, getattr(self, name)

    def __bool__(self) -> bool:
        return any(getattr(self, name) for name in TRACKED_FIELDS)


def _check_field(name: str) -> None:
    if name not in TRACKED_FIELDS:
        raise KeyError(f"Unknown tracked field: {name!r}")


class FieldStore:
    """Field values with per-field dirty flags.

    Structure:
        _values[field] = current value
        _flags.<field> = written since last reset

    Exclusively owned by one ObjectState.
    """

    __slots__ = ("_values", "_flags")

    def __init__(self) -> None:
        """Initialize store with every field set to None and every flag clear."""
        self._values: dict[str, Any] = dict.fromkeys(TRACKED_FIELDS)
        self._flags = UpdateFlags()

    def get(self, name: str) -> Any:
        """Get the current value of a field.

        Raises:
            KeyError: If name is not a tracked field.
        """
        _check_field(name)
        return self._values[name]

    def set(self, name: str, value: Any) -> None:
        """Write a field and mark it dirty, even if the value is unchanged.

        Raises:
            KeyError: If name is not a tracked field.
        """
        self._flags.mark(name)
        self._values[name] = value

    def reset(self) -> None:
        """Clear all dirty flags. Values are kept."""
        self._flags.reset()

    @property
    def flags(self) -> UpdateFlags:
        """Dirty flags, one per tracked field."""
        return self._flags
