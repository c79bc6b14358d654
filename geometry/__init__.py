"""Integer lattice geometry: points, extents and orientations."""
from .orientation import (
    ORIENTATION_COUNT,
    Orientation,
    RotationAmount,
    iter_orientations,
    iter_proper_orientations,
)
from .point import FACE_DIRECTIONS, Axis, BoundedExtent, Point, neighbors

__all__ = [
    "Axis",
    "Point",
    "BoundedExtent",
    "FACE_DIRECTIONS",
    "neighbors",
    "RotationAmount",
    "Orientation",
    "ORIENTATION_COUNT",
    "iter_orientations",
    "iter_proper_orientations",
]
