"""Orientation-invariant summary used to bucket candidate duplicates."""
from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Tuple

from lattice.arrangement import ShapeArrangement

DECIMAL_PLACES = 5
_QUANTUM = Decimal(1).scaleb(-DECIMAL_PLACES)


def _round(value: Decimal) -> Decimal:
    return value.quantize(_QUANTUM, rounding=ROUND_HALF_UP)


@dataclass(frozen=True, order=True)
class ShapeFingerprint:
    """Block count, density and sorted axis alignments of a shape.

    Equal shapes always share a fingerprint; distinct shapes may collide.
    """

    block_count: int
    density: Decimal
    axis_alignments: Tuple[Decimal, Decimal, Decimal]

    @classmethod
    def of(cls, shape: ShapeArrangement) -> ShapeFingerprint:
        alignments = sorted(_round(a) for a in shape.axis_alignments())
        return cls(
            block_count=shape.block_count,
            density=_round(shape.density()),
            axis_alignments=(alignments[0], alignments[1], alignments[2]),
        )

    def __str__(self) -> str:
        aligned = "/".join(str(a) for a in self.axis_alignments)
        return f"<{self.block_count} blocks d={self.density} a={aligned}>"
