"""Field validators for ObjectState setters.

Only ``attributes`` and ``points`` are always shape-checked. Other fields are
assigned as given unless a validator is installed for them, so the owning
collection decides how strict to be.

Usage:
    from framestate import ObjectState
    from framestate.core.validators import STRICT_VALIDATORS

    state = ObjectState(snapshot, validators=STRICT_VALIDATORS)
    state.group = "a"  # raises ArgumentError
"""

from __future__ import annotations

import numbers
from collections.abc import Callable, Iterable, Mapping, Set
from types import MappingProxyType
from typing import Any

from framestate.core.errors import ArgumentError

FieldValidator = Callable[[str, Any], Any]
"""Signature: (field_name, value) -> value to store. Raise ArgumentError to reject."""


def describe_type(value: Any) -> str:
    """Name the type of value for error messages. ``None`` reads as undefined."""
    if value is None:
        return "undefined"
    return type(value).__name__


def validate_attributes(value: Any) -> dict[int, Any]:
    """Check that value is a mapping of attribute id to attribute value.

    Args:
        value: Candidate attributes mapping.

    Returns:
        New dict with integer keys.

    Raises:
        ArgumentError: If value is not a mapping or an id is not an integer.
    """
    if not isinstance(value, Mapping):
        raise ArgumentError(f"Expected attributes are mapping, but got {describe_type(value)}")

    normalized: dict[int, Any] = {}
    for attr_id, attr_value in value.items():
        # bool is an int subclass but never a valid id
        if isinstance(attr_id, bool):
            raise ArgumentError(f"Attribute id must be an integer, but got {attr_id!r}")
        try:
            normalized[int(attr_id)] = attr_value
        except (TypeError, ValueError) as e:
            raise ArgumentError(f"Attribute id must be an integer, but got {attr_id!r}") from e
    return normalized


def copy_points(value: Any) -> list[float] | None:
    """Copy a flattened coordinate sequence element by element.

    Raises:
        ArgumentError: If value is neither None nor an ordered iterable of numbers.
    """
    if value is None:
        return None
    # Mappings and sets iterate in no meaningful coordinate order
    if isinstance(value, str | bytes | Mapping | Set) or not isinstance(value, Iterable):
        raise ArgumentError(f"Expected points are sequence, but got {describe_type(value)}")

    points = []
    for coordinate in value:
        if isinstance(coordinate, bool) or not isinstance(coordinate, numbers.Real):
            raise ArgumentError(
                f"Expected points are numbers, but got {describe_type(coordinate)}"
            )
        points.append(coordinate)
    return points


def _optional(expected: type | tuple[type, ...], name: str) -> FieldValidator:
    """Build a validator accepting None or instances of expected."""

    def validator(field: str, value: Any) -> Any:
        if value is None:
            return value
        # bool passes isinstance(int) checks, reject it for numeric fields
        if isinstance(value, bool) and bool not in _as_tuple(expected):
            raise ArgumentError(f"Expected {field} is {name}, but got bool")
        if not isinstance(value, expected):
            raise ArgumentError(f"Expected {field} is {name}, but got {describe_type(value)}")
        return value

    return validator


def _as_tuple(expected: type | tuple[type, ...]) -> tuple[type, ...]:
    return expected if isinstance(expected, tuple) else (expected,)


_integer = _optional(int, "integer")
_boolean = _optional(bool, "boolean")
_string = _optional(str, "string")

STRICT_VALIDATORS: Mapping[str, FieldValidator] = MappingProxyType(
    {
        "group": _integer,
        "z_order": _integer,
        "outside": _boolean,
        "occluded": _boolean,
        "keyframe": _boolean,
        "lock": _boolean,
        "color": _string,
    }
)
"""Type-shape checks for scalar fields. Read-only; copy into a dict to extend."""
