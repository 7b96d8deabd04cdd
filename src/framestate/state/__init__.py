"""ObjectState and its change tracking."""

from framestate.state.object_state import ObjectState
from framestate.state.tracking import TRACKED_FIELDS, FieldStore, UpdateFlags

__all__ = [
    "ObjectState",
    "FieldStore",
    "UpdateFlags",
    "TRACKED_FIELDS",
]
