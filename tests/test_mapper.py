from geometry.orientation import Orientation, RotationAmount, iter_orientations
from geometry.point import BoundedExtent, Point
from lattice.bitset import OccupancyBits
from lattice.mapper import Mapper

import pytest


def _points_in(extent):
    for x in range(-extent.x_neg, extent.x_pos + 1):
        for y in range(-extent.y_neg, extent.y_pos + 1):
            for z in range(-extent.z_neg, extent.z_pos + 1):
                yield Point(x, y, z)


def test_mapping_round_trip():
    mapper = Mapper(BoundedExtent.uniform(5))
    for index in range(mapper.size):
        point = mapper.resolve(index)
        assert point is not None
        assert mapper.unresolve(point) == index


def test_linear_layout_matches_x_fastest():
    mapper = Mapper(BoundedExtent(x_pos=2, y_pos=1, z_pos=1))
    assert mapper.unresolve(Point(0, 0, 0)) == 0
    assert mapper.unresolve(Point(1, 0, 0)) == 1
    assert mapper.unresolve(Point(0, 1, 0)) == 3
    assert mapper.unresolve(Point(0, 0, 1)) == 6
    assert mapper.resolve(mapper.size - 1) == Point(2, 1, 1)


def test_out_of_bounds_is_none():
    mapper = Mapper(BoundedExtent(x_pos=1))
    assert mapper.unresolve(Point(2, 0, 0)) is None
    assert mapper.unresolve(Point(0, 1, 0)) is None
    assert mapper.resolve(-1) is None
    assert mapper.resolve(mapper.size) is None


def test_round_trip_under_every_orientation_with_lopsided_extent():
    extent = BoundedExtent(2, 0, 1, 3, 0, 1)
    for orientation in iter_orientations():
        mapper = Mapper(extent, orientation)
        indices = set()
        for index in range(mapper.size):
            point = mapper.resolve(index)
            assert mapper.unresolve(point) == index
            indices.add(index)
        assert len(indices) == extent.size()
        for stored in _points_in(extent):
            oriented = stored.apply_orientation(orientation)
            assert mapper.in_bounds(oriented)
            assert mapper.resolve(mapper.unresolve(oriented)) == oriented


def test_orientation_does_not_move_storage():
    extent = BoundedExtent.uniform(1)
    plain = Mapper(extent)
    turned = Mapper(extent, Orientation(z_rot=RotationAmount.NINETY))
    # Same storage cell, seen through the rotation.
    index = plain.unresolve(Point(1, 0, 0))
    assert turned.resolve(index) == Point(0, 1, 0)
    assert turned.unresolve(Point(0, 1, 0)) == index


def test_bits_basic_operations():
    bits = OccupancyBits(10)
    assert bits.count() == 0
    bits.set(3)
    bits.set(7)
    assert bits[3] and bits[7] and not bits[4]
    assert list(bits.ones()) == [3, 7]
    bits.set(3, False)
    assert list(bits.ones()) == [7]
    assert OccupancyBits.from_bytes(10, bits.to_bytes()) == bits


def test_bits_index_errors():
    bits = OccupancyBits(4)
    with pytest.raises(IndexError):
        bits.set(4)
    with pytest.raises(IndexError):
        bits[-1]
    with pytest.raises(ValueError):
        OccupancyBits(0)
    with pytest.raises(ValueError):
        OccupancyBits(2, bits=0b100)
