from geometry.orientation import Orientation, RotationAmount, iter_orientations
from geometry.point import Axis, BoundedExtent, Point
from lattice.arrangement import NotAdjacentToBlockError, PlacementError, ShapeArrangement

import pytest


def _line(length, axis=Axis.X):
    cells = []
    for i in range(length):
        coords = [0, 0, 0]
        coords[axis.value] = i
        cells.append(Point(*coords))
    return ShapeArrangement.from_points(cells)


def test_new_has_single_origin_block():
    shape = ShapeArrangement()
    assert shape.block_count == 1
    assert shape.is_set(Point(0, 0, 0))
    assert shape.extent == BoundedExtent()
    assert list(shape.iter_blocks()) == [Point()]
    assert shape.center_of_mass() == Point()


def test_num_blocks():
    shape = ShapeArrangement()
    shape.add_block_at(Point(1, 0, 0))
    assert shape.block_count == 2
    shape.add_block_at(Point(2, 0, 0))
    assert shape.block_count == 3
    assert shape.has_neighbors(Point(2, 0, 0))
    shape.add_block_at(Point(2, 0, 0))
    assert shape.block_count == 3


def test_not_adjacent_is_rejected_and_leaves_shape_untouched():
    shape = ShapeArrangement()
    shape.add_block_at(Point(1, 0, 0))
    before = shape.points()
    with pytest.raises(NotAdjacentToBlockError) as info:
        shape.add_block_at(Point(3, 0, 0))
    assert isinstance(info.value, PlacementError)
    assert info.value.point == Point(3, 0, 0)
    assert shape.block_count == 2
    assert shape.points() == before
    with pytest.raises(NotAdjacentToBlockError):
        shape.add_block_at(Point(1, 1, 0) + Point(0, 0, 1))


def test_is_set_after_growth_in_every_direction():
    shape = ShapeArrangement()
    placed = [
        Point(1, 0, 0),
        Point(2, 0, 0),
        Point(0, 0, -1),
        Point(0, -1, -1),
        Point(0, -1, 0),
    ]
    for p in placed:
        shape.add_block_at(p)
        assert shape.is_set(p)
    assert shape.is_set(Point())
    assert shape.block_count == 6
    assert shape.extent == BoundedExtent(x_pos=2, y_neg=1, z_neg=1)
    assert set(shape.iter_blocks()) == set(placed) | {Point()}


def test_growth_preserves_cells_under_orientation():
    shape = _line(3)
    shape.set_orientation(Orientation(z_rot=RotationAmount.NINETY))
    assert set(shape.iter_blocks()) == {Point(0, 0, 0), Point(0, 1, 0), Point(0, 2, 0)}
    shape.add_block_at(Point(0, -1, 0))
    shape.add_block_at(Point(1, 2, 0))
    assert shape.block_count == 5
    assert set(shape.iter_blocks()) == {
        Point(0, -1, 0),
        Point(0, 0, 0),
        Point(0, 1, 0),
        Point(0, 2, 0),
        Point(1, 2, 0),
    }


def test_block_iter_with_orientation(bent_shape):
    bent_shape.set_orientation(Orientation().mirror(Axis.X).rotate(Axis.Y, RotationAmount.NINETY))
    for p in bent_shape.iter_blocks():
        assert bent_shape.is_set(p)
    for p in bent_shape.iter_relative_blocks():
        assert bent_shape.is_set_relative_to_center_of_mass(p)


def test_x_mirroring():
    shape = _line(3)
    shape.set_orientation(Orientation().mirror(Axis.X))
    assert not shape.is_set(Point(1, 0, 0))
    assert shape.is_set(Point(0, 0, 0))
    assert shape.is_set(Point(-1, 0, 0))
    assert shape.is_set(Point(-2, 0, 0))


def test_center_of_mass_truncates_toward_zero():
    assert _line(2).center_of_mass() == Point(0, 0, 0)
    assert _line(3).center_of_mass() == Point(1, 0, 0)
    shape = ShapeArrangement.from_points([Point(0, 0, 0), Point(-1, 0, 0), Point(-2, 0, 0), Point(-3, 0, 0)])
    # mean -1.5 truncates to -1, not -2
    assert shape.center_of_mass() == Point(-1, 0, 0)


def test_density_and_alignment_of_straight_line():
    line = _line(3)
    # Offsets -1, 0, 1 from the middle block.
    assert float(line.density()) == pytest.approx(2 / 3)
    x, y, z = line.axis_alignments()
    assert float(x) == pytest.approx(2 / 3)
    assert y == 0 and z == 0

    upright = _line(3, Axis.Z)
    assert upright.axis_alignment(Axis.Z) == x
    assert upright.axis_alignment(Axis.X) == 0


def _screw(z):
    # Chiral tetracube; z=1 and z=-1 give mirror images of each other.
    return ShapeArrangement.from_points([Point(0, 0, 0), Point(1, 0, 0), Point(1, 1, 0), Point(1, 1, z)])


def test_eq_with_every_rotation(bent_shape):
    clone = bent_shape.copy()
    for orientation in iter_orientations():
        if not orientation.is_proper:
            continue
        clone.set_orientation(orientation)
        assert bent_shape == clone, f"not equal under {orientation}"


def test_symmetric_shape_equals_its_mirror_image(bent_shape):
    # The bent shape is unchanged by swapping y and z.
    clone = bent_shape.copy()
    clone.set_orientation(Orientation().mirror(Axis.Z))
    assert bent_shape == clone


@pytest.mark.parametrize("axis", list(Axis))
def test_eq_with_quarter_turns(bent_shape, axis):
    clone = bent_shape.copy()
    orientation = Orientation()
    for _ in range(4):
        orientation = orientation.rotate(axis, RotationAmount.NINETY)
        clone.set_orientation(orientation)
        assert bent_shape == clone


@pytest.mark.parametrize("axis", list(Axis))
def test_single_mirror_separates_chiral_shape(axis):
    shape = _screw(1)
    clone = shape.copy()
    clone.set_orientation(Orientation().mirror(axis))
    assert shape != clone
    assert shape.matching_orientation(clone) is None


@pytest.mark.parametrize("first, second", [(Axis.X, Axis.Y), (Axis.Y, Axis.Z), (Axis.X, Axis.Z)])
def test_mirror_pair_is_a_rotation(first, second):
    shape = _screw(1)
    clone = shape.copy()
    clone.set_orientation(Orientation().mirror(first).mirror(second))
    assert shape == clone
    assert shape.matching_orientation(clone).is_proper


def test_eq_ignores_position():
    near = ShapeArrangement.from_points([Point(0, 0, 0), Point(1, 0, 0), Point(0, 1, 0)])
    far = ShapeArrangement.from_points([Point(0, 0, 0), Point(-1, 0, 0), Point(-1, 1, 0)])
    assert near == far
    assert near.matching_orientation(far) is not None


def test_chiral_pair_is_not_equal():
    left, right = _screw(1), _screw(-1)
    assert left != right
    assert right != left
    assert left == _screw(1)


def test_not_equal_shapes():
    line = _line(3)
    corner = ShapeArrangement.from_points([Point(0, 0, 0), Point(1, 0, 0), Point(0, 1, 0)])
    assert line != corner
    assert line != _line(4)
    assert line.matching_orientation(_line(2)) is None
    assert (line == "line") is False


def test_orientation_then_complement_restores_view(bent_shape):
    reference = bent_shape.copy()
    for orientation in iter_orientations():
        bent_shape.apply_orientation(orientation)
        bent_shape.apply_orientation(orientation.additive_complement())
        assert bent_shape.orientation == Orientation()
        assert bent_shape.points() == reference.points()
        assert bent_shape.density() == reference.density()
        assert bent_shape.axis_alignments() == reference.axis_alignments()
        assert bent_shape == reference


def test_copy_is_independent():
    shape = _line(2)
    clone = shape.copy()
    clone.add_block_at(Point(2, 0, 0))
    assert shape.block_count == 2
    assert clone.block_count == 3
    assert not shape.is_set(Point(2, 0, 0))


def test_from_points_requires_connection():
    with pytest.raises(NotAdjacentToBlockError):
        ShapeArrangement.from_points([Point(0, 0, 0), Point(2, 0, 0)])
    shape = ShapeArrangement.from_points([Point(3, 0, 0), Point(1, 0, 0), Point(2, 0, 0), Point(0, 0, 0)])
    assert shape.block_count == 4


def test_from_points_requires_origin():
    with pytest.raises(PlacementError):
        ShapeArrangement.from_points([Point(1, 0, 0), Point(2, 0, 0)])
    with pytest.raises(PlacementError):
        ShapeArrangement.from_points([])
