"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from framestate import ObjectSnapshot, ObjectShape, ObjectType, ObjectState, PluginRegistry
from framestate.config import StateSettings


@pytest.fixture
def registry():
    """Fresh PluginRegistry, isolated from the global one."""
    return PluginRegistry(settings=StateSettings())


@pytest.fixture
def snapshot():
    """Snapshot of a labeled rectangle on frame 7."""
    return ObjectSnapshot(
        frame=7,
        type=ObjectType.SHAPE,
        shape=ObjectShape.RECTANGLE,
        label="car",
        attributes={1: "red"},
        points=[0.0, 0.0, 10.0, 10.0],
        outside=False,
        occluded=False,
        keyframe=True,
        group=0,
        z_order=1,
        lock=False,
        color="#ff0000",
    )


@pytest.fixture
def state(snapshot, registry):
    """ObjectState bound to the isolated registry."""
    return ObjectState(snapshot, gateway=registry)
