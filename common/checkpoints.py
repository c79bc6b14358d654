"""One checkpoint file per block-count level."""
from __future__ import annotations

from pathlib import Path
from typing import Union

from common.codec import CodecError, read_level_map, write_level_map
from engine.level_map import LevelMap

DEFAULT_PATTERN = "shape_cache_{level}.cac"


class CorruptCheckpointError(CodecError):
    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"corrupt checkpoint {path}: {reason}")
        self.path = path


class CheckpointStore:
    """Persists level maps under ``directory`` using ``pattern`` for file names."""

    def __init__(self, directory: Union[str, Path] = ".", pattern: str = DEFAULT_PATTERN) -> None:
        if "{level}" not in pattern:
            raise ValueError("pattern must contain a '{level}' placeholder")
        self.directory = Path(directory)
        self.pattern = pattern

    def path_for(self, level: int) -> Path:
        return self.directory / self.pattern.format(level=level)

    def exists(self, level: int) -> bool:
        return self.path_for(level).is_file()

    def load(self, level: int) -> LevelMap:
        """Read the map for ``level``.

        Raises FileNotFoundError when absent and CorruptCheckpointError when
        the file cannot be decoded or holds a different level.
        """
        path = self.path_for(level)
        with path.open("rb") as handle:
            try:
                level_map = read_level_map(handle)
            except CodecError as exc:
                raise CorruptCheckpointError(path, str(exc)) from exc
        if level_map.block_count != level:
            raise CorruptCheckpointError(path, f"holds level {level_map.block_count}")
        return level_map

    def save(self, level: int, level_map: LevelMap) -> Path:
        """Overwrite the checkpoint for ``level``; OSError propagates."""
        if level_map.block_count != level:
            raise ValueError(f"map holds level {level_map.block_count}, not {level}")
        path = self.path_for(level)
        path.parent.mkdir(parents=True, exist_ok=True)
        try:
            path.unlink()
        except FileNotFoundError:
            pass
        with path.open("wb") as handle:
            write_level_map(handle, level_map)
        return path
