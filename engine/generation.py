"""Level-by-level growth of polycube shapes with resumable checkpoints."""
from __future__ import annotations

import sys
from typing import Iterable, List, Optional

from common.checkpoints import DEFAULT_PATTERN, CheckpointStore, CorruptCheckpointError
from engine import config as engine_config
from engine.level_map import LevelMap
from lattice.arrangement import ShapeArrangement
from lattice.variations import iter_variations

_PREFIX = "[generate]"
_CHECKPOINT_PREFIX = "[checkpoint]"


def default_store() -> Optional[CheckpointStore]:
    """Build the checkpoint store described by the config, if enabled."""
    if not engine_config.get_bool("checkpoint.enabled", True):
        return None
    return CheckpointStore(
        engine_config.get("checkpoint.directory", "."),
        engine_config.get("checkpoint.file_pattern", DEFAULT_PATTERN),
    )


def generate_variants_from(shapes: Iterable[ShapeArrangement], block_count: int) -> LevelMap:
    """Fold every one-block extension of ``shapes`` into a new level map."""
    level = LevelMap(block_count)
    for shape in shapes:
        for variant in iter_variations(shape):
            level.insert(variant)
    return level


class GenerationRun:
    """State of one enumeration from the trivial shape up to ``target`` blocks.

    ``levels`` holds the current map only, or with ``keep_history`` every
    map produced or loaded by this run, in order.
    """

    def __init__(
        self,
        target: int,
        store: Optional[CheckpointStore] = None,
        verbose: Optional[bool] = None,
        keep_history: bool = False,
    ) -> None:
        if target < 1:
            raise ValueError("target block count must be at least 1")
        self.target = target
        self.store = store
        if verbose is None:
            verbose = engine_config.get_bool("generation.verbose", True)
        self.verbose = verbose
        self.keep_history = keep_history
        self.levels: List[LevelMap] = [LevelMap.seed()]
        self._resumed = False

    @property
    def current(self) -> LevelMap:
        return self.levels[-1]

    @property
    def level(self) -> int:
        return self.current.block_count

    def _advance(self, level_map: LevelMap) -> None:
        if self.keep_history:
            self.levels.append(level_map)
        else:
            self.levels = [level_map]

    def _log(self, message: str, prefix: str = _PREFIX) -> None:
        if self.verbose:
            print(f"{prefix} {message}")

    def _warn(self, message: str) -> None:
        print(f"{_CHECKPOINT_PREFIX} {message}", file=sys.stderr)

    def resume(self) -> int:
        """Load the highest checkpoint not above the target; return the start level."""
        if self._resumed or self.store is None:
            return self.level
        self._resumed = True
        for level in range(self.target, max(self.level, 1), -1):
            self._log(f"Attempting to load cache data for {level} blocks...", _CHECKPOINT_PREFIX)
            try:
                loaded = self.store.load(level)
            except FileNotFoundError:
                self._log(f"No cache for {level} blocks", _CHECKPOINT_PREFIX)
                continue
            except (CorruptCheckpointError, OSError) as exc:
                self._warn(f"Failed to load cache: {exc}")
                continue
            self._log(f"Loaded cache with {len(loaded)} items.", _CHECKPOINT_PREFIX)
            self._advance(loaded)
            break
        return self.level

    def step(self) -> LevelMap:
        """Grow the current level by one block and checkpoint the result."""
        next_count = self.level + 1
        self._log(f"Generating shapes with {next_count} blocks...")
        produced = generate_variants_from(self.current, next_count)
        self._log(
            f"Done: {len(produced)} shapes, "
            f"{produced.collision_count()} shared a fingerprint with another shape"
        )
        self._checkpoint(produced)
        self._advance(produced)
        return produced

    def _checkpoint(self, level_map: LevelMap) -> None:
        if self.store is None:
            return
        try:
            path = self.store.save(level_map.block_count, level_map)
        except OSError as exc:
            self._warn(f"Failed to save cache data: {exc}")
            return
        self._log(f"Saved cache with {len(level_map)} items to {path}", _CHECKPOINT_PREFIX)

    def run(self) -> LevelMap:
        self.resume()
        while self.level < self.target:
            self.step()
        return self.current


def generate(
    n: int,
    store: Optional[CheckpointStore] = None,
    verbose: Optional[bool] = None,
) -> List[LevelMap]:
    """Return the level maps produced on the way to ``n`` blocks."""
    run = GenerationRun(n, store=store, verbose=verbose, keep_history=True)
    run.run()
    return run.levels


def calc_num_of_unique_arrangements(
    n: int,
    store: Optional[CheckpointStore] = None,
    verbose: Optional[bool] = False,
) -> int:
    """Number of distinct polycubes made of ``n`` cubes."""
    return len(GenerationRun(n, store=store, verbose=verbose).run())
