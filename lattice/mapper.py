"""Conversion between oriented lattice points and dense storage indices."""
from __future__ import annotations

from typing import Optional

from geometry.orientation import Orientation
from geometry.point import BoundedExtent, Point


class Mapper:
    """Maps points inside a :class:`BoundedExtent` to a linear index.

    Indices are assigned in storage frame; the orientation is only applied
    at the point/index boundary, so changing it never moves stored bits.
    Bounds are checked in storage frame as well, which keeps ``resolve``
    and ``unresolve`` exact inverses for asymmetric extents.
    """

    __slots__ = ("extent", "orientation")

    def __init__(self, extent: BoundedExtent, orientation: Optional[Orientation] = None) -> None:
        self.extent = extent
        self.orientation = orientation if orientation is not None else Orientation()

    @property
    def size(self) -> int:
        return self.extent.size()

    def copy(self) -> Mapper:
        return Mapper(self.extent, self.orientation)

    def to_storage(self, point: Point) -> Point:
        """Map an oriented request back into storage coordinates."""
        return point.apply_inverse_orientation(self.orientation)

    def in_bounds(self, point: Point) -> bool:
        return self.extent.in_bounds(self.to_storage(point))

    def unresolve(self, point: Point) -> Optional[int]:
        """Return the storage index for ``point`` or ``None`` when out of bounds."""
        stored = self.to_storage(point)
        if not self.extent.in_bounds(stored):
            return None
        width, depth, _ = self.extent.all_axis_len()
        x_neg, y_neg, z_neg = self.extent.negative_offsets()
        return (stored.x + x_neg) + width * ((stored.y + y_neg) + depth * (stored.z + z_neg))

    def resolve(self, index: int) -> Optional[Point]:
        """Return the oriented point stored at ``index`` or ``None`` if invalid."""
        if not 0 <= index < self.size:
            return None
        width, depth, _ = self.extent.all_axis_len()
        x = index % width
        y = (index // width) % depth
        z = index // (width * depth)
        x_neg, y_neg, z_neg = self.extent.negative_offsets()
        stored = Point(x - x_neg, y - y_neg, z - z_neg)
        return stored.apply_orientation(self.orientation)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Mapper):
            return NotImplemented
        return self.extent == other.extent and self.orientation == other.orientation

    def __repr__(self) -> str:
        return f"Mapper(extent={self.extent!r}, orientation={self.orientation!r})"
