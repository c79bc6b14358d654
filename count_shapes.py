"""Count the distinct polycubes that can be built from N cubes."""
from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from engine.generation import GenerationRun, default_store


def _block_count(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"'{raw}' is not a whole number") from exc
    if value < 1:
        raise argparse.ArgumentTypeError("block count must be at least 1")
    return value


def _parse_args(argv: List[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Count polycubes of N face-joined cubes, ignoring rotation and mirroring"
    )
    parser.add_argument("n", type=_block_count, help="Number of cubes per shape")
    return parser.parse_args(argv)


def main(argv: List[str], store_factory=default_store) -> int:
    args = _parse_args(argv)
    run = GenerationRun(args.n, store=store_factory())
    unique = run.run()
    print(len(unique))
    return 0


def cli(argv: Optional[List[str]] = None) -> None:
    raise SystemExit(main(sys.argv[1:] if argv is None else argv))


if __name__ == "__main__":
    cli()
