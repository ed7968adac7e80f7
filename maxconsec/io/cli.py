"""Command-line harness for running constraints over a YAML scenario."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from ..core.grid import GridPropagator
from ..core.model import TileSet
from . import parser


def _cell_token(propagator: GridPropagator, x: int, y: int, z: int, constrained: TileSet) -> str:
    domain = propagator.domain(x, y, z)
    if not domain:
        return "!"
    if len(domain) == 1:
        return str(next(iter(domain)))
    if constrained.tiles and domain.isdisjoint(constrained.tiles):
        return "-"
    return parser.UNDECIDED


def render(propagator: GridPropagator) -> str:
    topology = propagator.topology
    constrained = TileSet(frozenset(t for c in propagator.constraints for t in getattr(c, "tiles", ())))
    out = []
    for z in range(topology.depth):
        if topology.depth > 1:
            out.append(f"z={z}")
        for y in range(topology.height):
            tokens = [_cell_token(propagator, x, y, z, constrained) for x in range(topology.width)]
            width = max(len(t) for t in tokens)
            out.append(" ".join(t.ljust(width) for t in tokens).rstrip())
    return "\n".join(out)


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Run max-consecutive constraints over a scenario")
    ap.add_argument("scenario", help="Path to scenario YAML")
    ap.add_argument("-v", "--verbose", action="store_true", help="Log every ban")
    args = ap.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    propagator = parser.load_scenario(Path(args.scenario)).build()
    ok = propagator.propagate()
    print(render(propagator))
    if not ok:
        print(f"Contradiction after {len(propagator.bans)} bans.")
        return 1
    print(f"Consistent; {len(propagator.bans)} bans issued.")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
