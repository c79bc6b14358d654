"""Lattice points, axes and bounded extents around the origin."""
from __future__ import annotations

import math
from dataclasses import dataclass, replace
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Callable, Iterator, Tuple

if TYPE_CHECKING:
    from .orientation import Orientation, RotationAmount


class Axis(Enum):
    X = 0
    Y = 1
    Z = 2


@dataclass(frozen=True)
class Point:
    """A lattice cell offset from the global origin."""

    x: int = 0
    y: int = 0
    z: int = 0

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Point) -> Point:
        return Point(self.x - other.x, self.y - other.y, self.z - other.z)

    def __str__(self) -> str:
        return f"({self.x}, {self.y}, {self.z})"

    def as_tuple(self) -> Tuple[int, int, int]:
        return self.x, self.y, self.z

    def component(self, axis: Axis) -> int:
        return self.as_tuple()[axis.value]

    def map_all(self, fn: Callable[[int], int]) -> Point:
        return Point(fn(self.x), fn(self.y), fn(self.z))

    # Orientation primitives --------------------------------------------
    def rotate(self, axis: Axis, amount: RotationAmount) -> Point:
        """Rotate clockwise in the plane orthogonal to ``axis`` in 90 degree steps."""
        x, y, z = self.x, self.y, self.z
        for _ in range(amount.quarter_turns):
            if axis is Axis.X:
                y, z = -z, y
            elif axis is Axis.Y:
                x, z = -z, x
            else:
                x, y = -y, x
        return Point(x, y, z)

    def mirror(self, axis: Axis) -> Point:
        if axis is Axis.X:
            return replace(self, x=-self.x)
        if axis is Axis.Y:
            return replace(self, y=-self.y)
        return replace(self, z=-self.z)

    def apply_orientation(self, orientation: Orientation) -> Point:
        """Mirror X, Y, Z in order, then rotate about X, Y, Z in order."""
        p = self
        if orientation.x_mir:
            p = p.mirror(Axis.X)
        if orientation.y_mir:
            p = p.mirror(Axis.Y)
        if orientation.z_mir:
            p = p.mirror(Axis.Z)
        p = p.rotate(Axis.X, orientation.x_rot)
        p = p.rotate(Axis.Y, orientation.y_rot)
        return p.rotate(Axis.Z, orientation.z_rot)

    def apply_inverse_orientation(self, orientation: Orientation) -> Point:
        """Undo :meth:`apply_orientation` by replaying its steps backwards."""
        p = self.rotate(Axis.Z, orientation.z_rot.inverse())
        p = p.rotate(Axis.Y, orientation.y_rot.inverse())
        p = p.rotate(Axis.X, orientation.x_rot.inverse())
        if orientation.z_mir:
            p = p.mirror(Axis.Z)
        if orientation.y_mir:
            p = p.mirror(Axis.Y)
        if orientation.x_mir:
            p = p.mirror(Axis.X)
        return p

    def distance_to_origin(self) -> Decimal:
        square_sum = self.x * self.x + self.y * self.y + self.z * self.z
        return Decimal(math.sqrt(square_sum))


ORIGIN = Point()

FACE_DIRECTIONS: Tuple[Point, ...] = (
    Point(1, 0, 0),
    Point(-1, 0, 0),
    Point(0, 1, 0),
    Point(0, -1, 0),
    Point(0, 0, 1),
    Point(0, 0, -1),
)


def neighbors(point: Point) -> Iterator[Point]:
    """Yield the six face-adjacent cells of ``point``."""
    for offset in FACE_DIRECTIONS:
        yield point + offset


@dataclass(frozen=True)
class BoundedExtent:
    """Axis-aligned box around the origin given as reach along each half axis."""

    x_pos: int = 0
    x_neg: int = 0
    y_pos: int = 0
    y_neg: int = 0
    z_pos: int = 0
    z_neg: int = 0

    def __post_init__(self) -> None:
        if min(self.x_pos, self.x_neg, self.y_pos, self.y_neg, self.z_pos, self.z_neg) < 0:
            raise ValueError("extent reach must be non-negative")

    @classmethod
    def uniform(cls, reach: int) -> BoundedExtent:
        return cls(reach, reach, reach, reach, reach, reach)

    def reach(self, axis: Axis) -> Tuple[int, int]:
        """Return ``(positive, negative)`` reach along ``axis``."""
        if axis is Axis.X:
            return self.x_pos, self.x_neg
        if axis is Axis.Y:
            return self.y_pos, self.y_neg
        return self.z_pos, self.z_neg

    def negative_offsets(self) -> Tuple[int, int, int]:
        return self.x_neg, self.y_neg, self.z_neg

    def axis_len(self, axis: Axis) -> int:
        pos, neg = self.reach(axis)
        return pos + neg + 1

    def all_axis_len(self) -> Tuple[int, int, int]:
        return self.axis_len(Axis.X), self.axis_len(Axis.Y), self.axis_len(Axis.Z)

    def size(self) -> int:
        """Number of cells contained in the box."""
        w, d, h = self.all_axis_len()
        return w * d * h

    def axis_in_bounds(self, point: Point, axis: Axis) -> bool:
        pos, neg = self.reach(axis)
        return -neg <= point.component(axis) <= pos

    def in_bounds(self, point: Point) -> bool:
        return (
            -self.x_neg <= point.x <= self.x_pos
            and -self.y_neg <= point.y <= self.y_pos
            and -self.z_neg <= point.z <= self.z_pos
        )

    def including(self, point: Point) -> BoundedExtent:
        """Return the smallest extent covering both this box and ``point``."""
        return BoundedExtent(
            x_pos=max(self.x_pos, point.x),
            x_neg=max(self.x_neg, -point.x),
            y_pos=max(self.y_pos, point.y),
            y_neg=max(self.y_neg, -point.y),
            z_pos=max(self.z_pos, point.z),
            z_neg=max(self.z_neg, -point.z),
        )
