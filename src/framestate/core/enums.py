"""Enumerations describing what kind of object a state belongs to."""

from __future__ import annotations

from enum import Enum


class ObjectType(Enum):
    """How an annotated object is stored in its collection."""

    SHAPE = "shape"  # Exists on a single frame
    TRACK = "track"  # Interpolated across frames
    TAG = "tag"  # Frame-level label, no geometry


class ObjectShape(Enum):
    """Geometry of an annotated object."""

    RECTANGLE = "rectangle"
    POLYGON = "polygon"
    POLYLINE = "polyline"
    POINTS = "points"
    CUBOID = "cuboid"
