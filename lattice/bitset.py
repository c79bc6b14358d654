"""Fixed-capacity occupancy bits indexed by dense lattice index."""
from __future__ import annotations

from typing import Iterator


class OccupancyBits:
    """Dense bit vector backed by a single Python integer."""

    __slots__ = ("capacity", "_bits")

    def __init__(self, capacity: int, bits: int = 0) -> None:
        capacity = int(capacity)
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        if bits < 0 or bits.bit_length() > capacity:
            raise ValueError("bits exceed capacity")
        self.capacity = capacity
        self._bits = bits

    # Internal utilities -------------------------------------------------
    def _mask(self, index: int) -> int:
        if not 0 <= index < self.capacity:
            raise IndexError("bit index out of range")
        return 1 << index

    # API ----------------------------------------------------------------
    def __getitem__(self, index: int) -> bool:
        return bool(self._bits & self._mask(index))

    def set(self, index: int, value: bool = True) -> None:
        mask = self._mask(index)
        if value:
            self._bits |= mask
        else:
            self._bits &= ~mask

    def count(self) -> int:
        return bin(self._bits).count("1")

    def ones(self) -> Iterator[int]:
        """Yield indices of set bits in ascending order."""
        bits = self._bits
        while bits:
            lowest = bits & -bits
            yield lowest.bit_length() - 1
            bits ^= lowest

    def copy(self) -> OccupancyBits:
        return OccupancyBits(self.capacity, self._bits)

    def to_bytes(self) -> bytes:
        return self._bits.to_bytes((self.capacity + 7) // 8, "little")

    @classmethod
    def from_bytes(cls, capacity: int, data: bytes) -> OccupancyBits:
        return cls(capacity, int.from_bytes(data, "little"))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OccupancyBits):
            return NotImplemented
        return self.capacity == other.capacity and self._bits == other._bits

    def __repr__(self) -> str:
        return f"OccupancyBits(capacity={self.capacity}, set={list(self.ones())})"
