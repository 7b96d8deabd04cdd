"""Core definitions: enums, errors, validators, and snapshots.

Architecture Note:
    core/ holds stateless building blocks. Stateful pieces live in state/
    (ObjectState and its change tracking) and plugins/ (dispatch gateway).
"""

from framestate.core.enums import ObjectShape, ObjectType
from framestate.core.errors import ArgumentError, FrameStateError, PluginError
from framestate.core.snapshot import ObjectSnapshot
from framestate.core.validators import (
    STRICT_VALIDATORS,
    FieldValidator,
    copy_points,
    validate_attributes,
)

__all__ = [
    # Enums
    "ObjectType",
    "ObjectShape",
    # Errors
    "FrameStateError",
    "ArgumentError",
    "PluginError",
    # Snapshot
    "ObjectSnapshot",
    # Validators
    "FieldValidator",
    "STRICT_VALIDATORS",
    "copy_points",
    "validate_attributes",
]
