import pytest

from common.checkpoints import CheckpointStore
from geometry.point import Point
from lattice.arrangement import ShapeArrangement


@pytest.fixture
def store(tmp_path):
    return CheckpointStore(tmp_path)


@pytest.fixture
def bent_shape():
    # Six blocks: a row of four with two branches off the far end.
    return ShapeArrangement.from_points([
        Point(0, 0, 0),
        Point(1, 0, 0),
        Point(2, 0, 0),
        Point(3, 0, 0),
        Point(3, 1, 0),
        Point(3, 0, 1),
    ])


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch, tmp_path):
    from engine import config

    monkeypatch.setenv("POLYCUBES_CONFIG", str(tmp_path / "missing.json"))
    config.reload()
    yield
    config.reload()
