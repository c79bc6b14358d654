"""Shape storage, symmetry-aware equality and one-block growth."""
from .arrangement import NotAdjacentToBlockError, PlacementError, ShapeArrangement
from .bitset import OccupancyBits
from .fingerprint import ShapeFingerprint
from .mapper import Mapper
from .variations import candidate_positions, iter_variations

__all__ = [
    "Mapper",
    "OccupancyBits",
    "ShapeArrangement",
    "PlacementError",
    "NotAdjacentToBlockError",
    "ShapeFingerprint",
    "candidate_positions",
    "iter_variations",
]
