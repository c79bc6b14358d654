"""Polycube shapes stored as occupancy bits over a growable lattice."""
from __future__ import annotations

from decimal import Decimal
from typing import FrozenSet, Iterable, Iterator, List, Optional, Tuple

from geometry.orientation import Orientation, iter_proper_orientations
from geometry.point import ORIGIN, Axis, BoundedExtent, Point, neighbors
from lattice.bitset import OccupancyBits
from lattice.mapper import Mapper


class PlacementError(ValueError):
    """Raised when a block cannot be placed into an arrangement."""


class NotAdjacentToBlockError(PlacementError):
    def __init__(self, point: Point) -> None:
        super().__init__(f"point {point} does not share a face with any block")
        self.point = point


def _trunc_div(value: int, divisor: int) -> int:
    # Integer division rounding toward zero.
    quotient = abs(value) // divisor
    return quotient if value >= 0 else -quotient


class ShapeArrangement:
    """A connected set of face-joined unit cubes.

    Two arrangements compare equal when some rotation maps one onto the
    other, so equality ignores position and rotation. A chiral shape and its
    mirror image compare unequal.
    """

    __slots__ = ("_bits", "_block_count", "_center", "_mapper")

    def __init__(self) -> None:
        self._mapper = Mapper(BoundedExtent())
        self._bits = OccupancyBits(self._mapper.size)
        self._bits.set(self._mapper.unresolve(ORIGIN))
        self._block_count = 1
        self._center = ORIGIN

    @classmethod
    def from_storage(cls, mapper: Mapper, bits: OccupancyBits) -> ShapeArrangement:
        """Build an arrangement around already populated storage."""
        if bits.capacity != mapper.size:
            raise ValueError("bit capacity does not match mapper size")
        count = bits.count()
        if count < 1:
            raise ValueError("an arrangement needs at least one block")
        shape = cls.__new__(cls)
        shape._mapper = mapper
        shape._bits = bits
        shape._block_count = count
        shape._update_center_of_mass()
        return shape

    @classmethod
    def from_points(cls, points: Iterable[Point]) -> ShapeArrangement:
        """Build an arrangement from cells that must include the origin.

        Cells are placed in whatever order keeps every placement adjacent;
        a disconnected set raises :class:`NotAdjacentToBlockError` and a set
        without the origin raises :class:`PlacementError`.
        """
        pending = list(dict.fromkeys(points))
        if ORIGIN not in pending:
            raise PlacementError("points must include the origin")
        pending.remove(ORIGIN)
        shape = cls()
        while pending:
            remaining = [p for p in pending if not shape.has_neighbors(p)]
            if len(remaining) == len(pending):
                raise NotAdjacentToBlockError(remaining[0])
            for p in pending:
                if p not in remaining:
                    shape.add_block_at(p)
            pending = remaining
        return shape

    # Accessors ------------------------------------------------------------
    @property
    def block_count(self) -> int:
        return self._block_count

    @property
    def mapper(self) -> Mapper:
        return self._mapper

    @property
    def bits(self) -> OccupancyBits:
        return self._bits

    @property
    def orientation(self) -> Orientation:
        return self._mapper.orientation

    @property
    def extent(self) -> BoundedExtent:
        return self._mapper.extent

    def copy(self) -> ShapeArrangement:
        clone = ShapeArrangement.__new__(ShapeArrangement)
        clone._mapper = self._mapper.copy()
        clone._bits = self._bits.copy()
        clone._block_count = self._block_count
        clone._center = self._center
        return clone

    __copy__ = copy

    # Mutation ---------------------------------------------------------------
    def add_block_at(self, point: Point) -> None:
        """Occupy ``point``, growing storage when it lies outside the extent."""
        if not self.has_neighbors(point):
            raise NotAdjacentToBlockError(point)
        if not self._mapper.in_bounds(point):
            self._grow(point)
        index = self._mapper.unresolve(point)
        if not self._bits[index]:
            self._block_count += 1
            self._bits.set(index)
        self._update_center_of_mass()

    def _grow(self, point: Point) -> None:
        extent = self._mapper.extent.including(self._mapper.to_storage(point))
        mapper = Mapper(extent, self._mapper.orientation)
        bits = OccupancyBits(mapper.size)
        for index in self._bits.ones():
            bits.set(mapper.unresolve(self._mapper.resolve(index)))
        self._mapper, self._bits = mapper, bits

    def set_orientation(self, orientation: Orientation) -> None:
        """Replace the view orientation; stored bits do not move."""
        self._mapper.orientation = orientation
        self._update_center_of_mass()

    def apply_orientation(self, orientation: Orientation) -> None:
        """Add ``orientation`` field-wise onto the current view."""
        self.set_orientation(self._mapper.orientation + orientation)

    # Queries ----------------------------------------------------------------
    def is_set(self, point: Point) -> bool:
        index = self._mapper.unresolve(point)
        return index is not None and self._bits[index]

    def has_neighbors(self, point: Point) -> bool:
        """True if any face-adjacent cell of ``point`` is occupied."""
        return any(self.is_set(n) for n in neighbors(point))

    def iter_blocks(self) -> Iterator[Point]:
        for index in self._bits.ones():
            yield self._mapper.resolve(index)

    def iter_relative_blocks(self) -> Iterator[Point]:
        """Yield block coordinates offset by the cached center of mass."""
        center = self._center
        for p in self.iter_blocks():
            yield p - center

    def is_set_relative_to_center_of_mass(self, point: Point) -> bool:
        return self.is_set(point + self._center)

    def points(self) -> List[Point]:
        return sorted(self.iter_blocks(), key=Point.as_tuple)

    def center_of_mass(self) -> Point:
        """Componentwise mean of all blocks, truncated toward zero."""
        sx, sy, sz = self._coordinate_sums()
        n = self._block_count
        return Point(_trunc_div(sx, n), _trunc_div(sy, n), _trunc_div(sz, n))

    def _update_center_of_mass(self) -> None:
        self._center = self.center_of_mass()

    def _coordinate_sums(self) -> Tuple[int, int, int]:
        sx = sy = sz = 0
        for p in self.iter_blocks():
            sx += p.x
            sy += p.y
            sz += p.z
        return sx, sy, sz

    def _scaled_offsets(self) -> Iterator[Point]:
        # Offsets from the exact centroid, multiplied by the block count so
        # they stay integral. Invariant under translation and orientation.
        n = self._block_count
        total = Point(*self._coordinate_sums())
        for p in self.iter_blocks():
            yield Point(n * p.x, n * p.y, n * p.z) - total

    def density(self) -> Decimal:
        """Mean distance of the blocks to the centroid."""
        n = self._block_count
        distances = sorted(p.distance_to_origin() for p in self._scaled_offsets())
        return sum(distances, Decimal(0)) / Decimal(n * n)

    def axis_alignment(self, axis: Axis) -> Decimal:
        """Mean absolute offset from the centroid along ``axis``.

        Lower values mean stronger alignment; a straight line scores zero on
        its own axis.
        """
        n = self._block_count
        total = sum(abs(p.component(axis)) for p in self._scaled_offsets())
        return Decimal(total) / Decimal(n * n)

    def axis_alignments(self) -> Tuple[Decimal, Decimal, Decimal]:
        return (
            self.axis_alignment(Axis.X),
            self.axis_alignment(Axis.Y),
            self.axis_alignment(Axis.Z),
        )

    # Equality ---------------------------------------------------------------
    def matching_orientation(self, other: ShapeArrangement) -> Optional[Orientation]:
        """Return a rotation mapping ``self`` onto ``other`` if one exists.

        Only handedness-preserving orientations are tried.
        """
        if self._block_count != other._block_count:
            return None
        target: FrozenSet[Point] = frozenset(other._scaled_offsets())
        offsets = list(self._scaled_offsets())
        for orientation in iter_proper_orientations():
            if all(p.apply_orientation(orientation) in target for p in offsets):
                return orientation
        return None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ShapeArrangement):
            return NotImplemented
        return self.matching_orientation(other) is not None

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        cells = ", ".join(str(p) for p in self.points())
        return f"ShapeArrangement(blocks={self._block_count}, cells=[{cells}])"
