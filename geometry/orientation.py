"""Rotation amounts, orientations and the exhaustive orientation enumeration."""
from __future__ import annotations

import itertools
from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterator

from .point import Axis, Point


class RotationAmount(Enum):
    """Element of the cyclic group of quarter turns."""

    ZERO = 0
    NINETY = 1
    ONE_EIGHTY = 2
    TWO_SEVENTY = 3

    @property
    def quarter_turns(self) -> int:
        return self.value

    @property
    def degrees(self) -> int:
        return self.value * 90

    def __add__(self, other: RotationAmount) -> RotationAmount:
        if not isinstance(other, RotationAmount):
            return NotImplemented
        return RotationAmount((self.value + other.value) % 4)

    def __sub__(self, other: RotationAmount) -> RotationAmount:
        if not isinstance(other, RotationAmount):
            return NotImplemented
        return RotationAmount((self.value - other.value) % 4)

    def inverse(self) -> RotationAmount:
        """The amount that brings ``self`` back to ``ZERO`` when added."""
        return RotationAmount.ZERO - self


@dataclass(frozen=True)
class Orientation:
    """A quarter-turn per axis plus a mirror flag per axis."""

    x_rot: RotationAmount = RotationAmount.ZERO
    y_rot: RotationAmount = RotationAmount.ZERO
    z_rot: RotationAmount = RotationAmount.ZERO
    x_mir: bool = False
    y_mir: bool = False
    z_mir: bool = False

    def __add__(self, other: Orientation) -> Orientation:
        # Field-wise: mirrors XOR, rotations add per axis.
        if not isinstance(other, Orientation):
            return NotImplemented
        return Orientation(
            x_rot=self.x_rot + other.x_rot,
            y_rot=self.y_rot + other.y_rot,
            z_rot=self.z_rot + other.z_rot,
            x_mir=self.x_mir != other.x_mir,
            y_mir=self.y_mir != other.y_mir,
            z_mir=self.z_mir != other.z_mir,
        )

    @property
    def is_identity(self) -> bool:
        return self == IDENTITY

    @property
    def is_proper(self) -> bool:
        """True when an even number of mirrors is set, i.e. a pure rotation."""
        return not (self.x_mir ^ self.y_mir ^ self.z_mir)

    def additive_complement(self) -> Orientation:
        """Return the orientation that sums with ``self`` to the identity."""
        return Orientation(
            x_rot=self.x_rot.inverse(),
            y_rot=self.y_rot.inverse(),
            z_rot=self.z_rot.inverse(),
            x_mir=self.x_mir,
            y_mir=self.y_mir,
            z_mir=self.z_mir,
        )

    def rotation(self, axis: Axis) -> RotationAmount:
        if axis is Axis.X:
            return self.x_rot
        if axis is Axis.Y:
            return self.y_rot
        return self.z_rot

    def mirrored_on(self, axis: Axis) -> bool:
        if axis is Axis.X:
            return self.x_mir
        if axis is Axis.Y:
            return self.y_mir
        return self.z_mir

    def rotate(self, axis: Axis, amount: RotationAmount) -> Orientation:
        new_amount = self.rotation(axis) + amount
        if axis is Axis.X:
            return replace(self, x_rot=new_amount)
        if axis is Axis.Y:
            return replace(self, y_rot=new_amount)
        return replace(self, z_rot=new_amount)

    def mirror(self, axis: Axis) -> Orientation:
        flipped = not self.mirrored_on(axis)
        if axis is Axis.X:
            return replace(self, x_mir=flipped)
        if axis is Axis.Y:
            return replace(self, y_mir=flipped)
        return replace(self, z_mir=flipped)

    def apply(self, point: Point) -> Point:
        return point.apply_orientation(self)

    def apply_inverse(self, point: Point) -> Point:
        return point.apply_inverse_orientation(self)


IDENTITY = Orientation()

_ROTATIONS = tuple(RotationAmount)
_MIRRORS = (False, True)

# 4^3 rotation combinations times 2^3 mirror combinations. Many of these
# describe the same transform; the 48 distinct symmetries are all covered.
ORIENTATION_COUNT = len(_ROTATIONS) ** 3 * len(_MIRRORS) ** 3


def iter_orientations() -> Iterator[Orientation]:
    """Yield every rotation/mirror combination, starting with the identity."""
    for x_rot, y_rot, z_rot, x_mir, y_mir, z_mir in itertools.product(
        _ROTATIONS, _ROTATIONS, _ROTATIONS, _MIRRORS, _MIRRORS, _MIRRORS
    ):
        yield Orientation(x_rot, y_rot, z_rot, x_mir, y_mir, z_mir)


def iter_proper_orientations() -> Iterator[Orientation]:
    """Yield the combinations that preserve handedness (the 24 rotations)."""
    return (o for o in iter_orientations() if o.is_proper)
