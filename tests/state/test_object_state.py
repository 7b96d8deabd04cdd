"""Tests for ObjectState fields and change tracking.

Critical Invariants:
- A freshly constructed state has no dirty flags
- Every setter call marks its flag, even with an unchanged value
- attributes merge, points are copied, frame/type/shape are read-only
"""

from types import MappingProxyType

import pytest
from hypothesis import given
from hypothesis import strategies as st

from framestate import (
    STRICT_VALIDATORS,
    ArgumentError,
    ObjectShape,
    ObjectSnapshot,
    ObjectState,
    ObjectType,
)
from framestate.config import StateSettings
from framestate.state.tracking import TRACKED_FIELDS

field_values = {
    "label": st.one_of(st.none(), st.text(max_size=8)),
    "attributes": st.dictionaries(st.integers(0, 50), st.text(max_size=5), max_size=4),
    "points": st.lists(st.floats(allow_nan=False, allow_infinity=False), max_size=8),
    "outside": st.booleans(),
    "occluded": st.booleans(),
    "keyframe": st.booleans(),
    "group": st.integers(0, 100),
    "z_order": st.integers(-10, 10),
    "lock": st.booleans(),
    "color": st.sampled_from(["#000000", "#ffffff", "red"]),
}

snapshots = st.builds(
    ObjectSnapshot,
    frame=st.integers(0, 10_000),
    type=st.sampled_from(ObjectType),
    shape=st.sampled_from(ObjectShape),
    **field_values,
)


@given(snapshot=snapshots)
def test_new_state_has_no_dirty_flags(snapshot):
    """PROPERTY: Construction writes every field but leaves every flag clear.

    Why: Collections decide what to save from the flags; a new object is not a change.
    """
    state = ObjectState(snapshot, validators={})

    assert state.changed_fields() == frozenset()
    assert not state.update_flags
    for name in TRACKED_FIELDS:
        assert state.dirty(name) is False


@given(name=st.sampled_from(TRACKED_FIELDS), data=st.data())
def test_setter_marks_only_its_flag(name, data):
    """PROPERTY: Setting field F marks F and nothing else."""
    state = ObjectState({"frame": 0, "type": "shape", "shape": "points"})
    setattr(state, name, data.draw(field_values[name]))

    assert state.dirty(name)
    assert state.changed_fields() == frozenset({name})


@pytest.mark.parametrize("name", [n for n in TRACKED_FIELDS if n != "attributes"])
def test_setter_marks_flag_when_value_unchanged(state, name):
    """Re-assigning the current value still counts as a write."""
    setattr(state, name, getattr(state, name))

    assert state.dirty(name)


def test_attributes_reassigned_with_same_mapping_is_dirty(state):
    state.attributes = dict(state.attributes)

    assert state.dirty("attributes")


def test_reset_clears_every_flag(state):
    """reset_dirty() clears all flags at once."""
    for name in TRACKED_FIELDS:
        setattr(state, name, getattr(state, name) if name != "attributes" else {})
    assert state.changed_fields() == frozenset(TRACKED_FIELDS)

    state.reset_dirty()

    assert state.changed_fields() == frozenset()


def test_reset_keeps_values(state):
    state.label = "truck"
    state.reset_dirty()

    assert state.label == "truck"


def test_read_only_fields(state):
    """frame, type and shape have no setter."""
    assert state.frame == 7
    assert state.type is ObjectType.SHAPE
    assert state.shape is ObjectShape.RECTANGLE

    with pytest.raises(AttributeError):
        state.frame = 8  # type: ignore[misc]
    with pytest.raises(AttributeError):
        state.type = ObjectType.TRACK  # type: ignore[misc]
    with pytest.raises(AttributeError):
        state.shape = ObjectShape.POLYGON  # type: ignore[misc]


def test_update_flags_returns_detached_copy(state):
    """Changing the returned flags cannot change the state's bookkeeping."""
    flags = state.update_flags
    flags.label = True

    assert not state.dirty("label")


def test_flags_not_exposed_by_inspection(state):
    """Bookkeeping never shows up next to domain data."""
    assert not hasattr(state, "__dict__")
    assert "updateFlags" not in state.to_dict()
    assert "update_flags" not in state.to_dict()


def test_dirty_unknown_field_raises(state):
    with pytest.raises(KeyError):
        state.dirty("frame")


# attributes


def test_attributes_merge_not_replace(state):
    """Later writes add and overwrite keys but never delete them."""
    state.attributes = {5: "cat"}
    state.attributes = {5: "dog", 6: "leash"}

    assert dict(state.attributes) == {1: "red", 5: "dog", 6: "leash"}
    assert state.dirty("attributes")


def test_attributes_merge_from_empty():
    state = ObjectState({"frame": 0, "type": "tag", "shape": "rectangle"})
    state.attributes = {5: "cat"}
    state.attributes = {5: "dog", 6: "leash"}

    assert dict(state.attributes) == {5: "dog", 6: "leash"}
    assert state.dirty("attributes")


def test_attributes_string_ids_coerced():
    state = ObjectState({"frame": 0, "type": "tag", "shape": "rectangle"})
    state.attributes = {"3": "x"}

    assert dict(state.attributes) == {3: "x"}


def test_attributes_view_is_read_only(state):
    """attributes getter cannot be used to mutate without flagging."""
    view = state.attributes

    assert isinstance(view, MappingProxyType)
    with pytest.raises(TypeError):
        view[9] = "sneaky"  # type: ignore[index]


@pytest.mark.parametrize(
    ("value", "type_name"),
    [("cat", "str"), (5, "int"), ([1, 2], "list"), (None, "undefined")],
)
def test_attributes_non_mapping_raises(state, value, type_name):
    """Non-mapping attributes fail with a message naming the received type."""
    with pytest.raises(ArgumentError, match=f"but got {type_name}"):
        state.attributes = value

    assert not state.dirty("attributes")
    assert dict(state.attributes) == {1: "red"}


def test_attributes_non_integer_id_raises(state):
    with pytest.raises(ArgumentError, match="Attribute id"):
        state.attributes = {"size": "big"}


def test_argument_error_is_value_error(state):
    with pytest.raises(ValueError):
        state.attributes = "cat"


# points


def test_points_copied_on_write(state):
    """Mutating the caller's list afterwards does not reach the state."""
    points = [1, 2, 3]
    state.points = points
    points.append(4)
    points[0] = 100

    assert state.points == [1, 2, 3]


def test_points_getter_returns_copy(state):
    state.points = [1, 2]
    state.reset_dirty()

    state.points.append(3)

    assert state.points == [1, 2]
    assert not state.dirty("points")


def test_points_accept_any_iterable(state):
    state.points = (1.5, 2.5)

    assert state.points == [1.5, 2.5]


def test_points_none_clears(state):
    state.points = None

    assert state.points is None
    assert state.dirty("points")


@pytest.mark.parametrize("value", [5, "1,2,3"])
def test_points_non_sequence_raises(state, value):
    with pytest.raises(ArgumentError, match="Expected points are sequence"):
        state.points = value


# construction and validation


def test_construct_from_mapping():
    state = ObjectState(
        {"frame": 2, "type": "track", "shape": "polygon", "zOrder": 4, "points": [1, 2]}
    )

    assert state.frame == 2
    assert state.type is ObjectType.TRACK
    assert state.z_order == 4
    assert state.points == [1, 2]
    assert state.label is None
    assert dict(state.attributes) == {}


def test_construct_invalid_attributes_raises():
    with pytest.raises(ArgumentError):
        ObjectState({"frame": 0, "type": "shape", "shape": "points", "attributes": "oops"})


def test_custom_validator_runs_before_write():
    """Installed validators may reject or transform values."""

    def upper(field, value):
        return value.upper()

    custom = ObjectState(
        {"frame": 0, "type": "shape", "shape": "points", "color": "#abcdef"},
        validators={"color": upper},
    )
    assert custom.color == "#ABCDEF"


def test_strict_validators_reject_bad_types():
    state = ObjectState(
        {"frame": 0, "type": "shape", "shape": "points"}, validators=STRICT_VALIDATORS
    )

    with pytest.raises(ArgumentError, match="Expected group is integer, but got str"):
        state.group = "1"
    with pytest.raises(ArgumentError, match="Expected outside is boolean"):
        state.outside = 1
    with pytest.raises(ArgumentError, match="Expected z_order is integer, but got bool"):
        state.z_order = True
    assert not state.changed_fields()


def test_lenient_by_default():
    """Without strict validation scalar fields accept anything."""
    state = ObjectState({"frame": 0, "type": "shape", "shape": "points"})
    state.group = "not an int"

    assert state.group == "not an int"


def test_strict_validation_from_settings():
    state = ObjectState(
        {"frame": 0, "type": "shape", "shape": "points"},
        settings=StateSettings(strict_validation=True),
    )

    with pytest.raises(ArgumentError):
        state.color = 123


def test_to_snapshot_roundtrip(state, snapshot):
    assert state.to_snapshot() == snapshot


def test_repr_mentions_identity(state):
    assert repr(state) == "ObjectState(frame=7, type=shape, shape=rectangle, label='car')"


def test_construct_requires_integer_frame():
    with pytest.raises(ArgumentError, match="'frame' is required"):
        ObjectState({"type": "shape", "shape": "points"})
    with pytest.raises(ArgumentError, match="Expected frame is integer, but got str"):
        ObjectState({"frame": "seven", "type": "shape", "shape": "points"})


def test_construct_from_snapshot_with_string_tags():
    """A dataclass snapshot built from raw tags still yields enum members."""
    state = ObjectState(ObjectSnapshot(frame=0, type="track", shape="points"))

    assert state.type is ObjectType.TRACK
    assert state.shape is ObjectShape.POINTS
    assert repr(state) == "ObjectState(frame=0, type=track, shape=points, label=None)"
