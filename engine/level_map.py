"""Deduplicated collection of the shapes sharing one block count."""
from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Tuple

from lattice.arrangement import ShapeArrangement
from lattice.fingerprint import ShapeFingerprint


class LevelMap:
    """Shapes of a single block count, bucketed by fingerprint.

    Fingerprints only narrow the search; a shape is new when no member of
    its bucket is equal to it under some orientation.
    """

    def __init__(self, block_count: int) -> None:
        if block_count < 1:
            raise ValueError("block_count must be at least 1")
        self.block_count = block_count
        self._buckets: Dict[ShapeFingerprint, List[ShapeArrangement]] = {}
        self._size = 0

    @classmethod
    def seed(cls) -> LevelMap:
        """The trivial level holding the single-cube shape."""
        level = cls(1)
        level.insert(ShapeArrangement())
        return level

    @classmethod
    def from_shapes(cls, block_count: int, shapes: Iterable[ShapeArrangement]) -> LevelMap:
        level = cls(block_count)
        for shape in shapes:
            level.insert(shape)
        return level

    def insert(self, shape: ShapeArrangement) -> bool:
        """Add ``shape`` unless an equal one is present. Returns True if added."""
        if shape.block_count != self.block_count:
            raise ValueError(
                f"shape has {shape.block_count} blocks, level holds {self.block_count}"
            )
        bucket = self._buckets.setdefault(ShapeFingerprint.of(shape), [])
        if any(member == shape for member in bucket):
            return False
        bucket.append(shape)
        self._size += 1
        return True

    def add_bucket(self, fingerprint: ShapeFingerprint, shapes: List[ShapeArrangement]) -> None:
        """Restore a bucket verbatim, as read back from a checkpoint."""
        if fingerprint.block_count != self.block_count:
            raise ValueError("fingerprint block count does not match level")
        if not shapes:
            return
        bucket = self._buckets.setdefault(fingerprint, [])
        bucket.extend(shapes)
        self._size += len(shapes)

    def contains(self, shape: ShapeArrangement) -> bool:
        if shape.block_count != self.block_count:
            return False
        bucket = self._buckets.get(ShapeFingerprint.of(shape), [])
        return any(member == shape for member in bucket)

    __contains__ = contains

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[ShapeArrangement]:
        for _, bucket in self.buckets():
            yield from bucket

    def buckets(self) -> Iterator[Tuple[ShapeFingerprint, List[ShapeArrangement]]]:
        """Yield ``(fingerprint, shapes)`` pairs in fingerprint order."""
        for fingerprint in sorted(self._buckets):
            yield fingerprint, self._buckets[fingerprint]

    def fingerprint_count(self) -> int:
        return len(self._buckets)

    def collision_count(self) -> int:
        """Number of shapes sharing a fingerprint with an earlier, different shape."""
        return self._size - len(self._buckets)

    def count_arrangements_with_n_blocks(self, num_blocks: int) -> int:
        return self._size if num_blocks == self.block_count else 0

    def __repr__(self) -> str:
        return f"LevelMap(block_count={self.block_count}, shapes={self._size})"
