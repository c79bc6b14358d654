"""One-block extensions of an arrangement."""
from __future__ import annotations

from typing import Iterator, List

from geometry.point import Point, neighbors
from lattice.arrangement import ShapeArrangement


def candidate_positions(shape: ShapeArrangement) -> List[Point]:
    """Unoccupied cells sharing a face with the shape, each listed once."""
    seen = {}
    for block in shape.iter_blocks():
        for cell in neighbors(block):
            if cell not in seen and not shape.is_set(cell):
                seen[cell] = None
    return list(seen)


def iter_variations(shape: ShapeArrangement) -> Iterator[ShapeArrangement]:
    """Yield a copy of ``shape`` with one block added for every candidate.

    Candidate cells are distinct, the resulting shapes may still be equal
    to each other under rotation or mirroring.
    """
    for cell in candidate_positions(shape):
        variant = shape.copy()
        variant.add_block_at(cell)
        yield variant
