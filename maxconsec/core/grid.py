"""In-memory propagator holding an explicit domain per cell.

This is not a solver: it has no search and no collapse heuristic. It keeps a
set of possible tiles per cell, lets callers select tiles by hand, and runs
its constraints to a fixpoint.
"""

from __future__ import annotations

import logging
from typing import Dict, FrozenSet, Hashable, Iterable, List, Tuple

from .constraints import TileConstraint
from .model import Coord, TileSet, Topology
from .propagator import TilePropagator

logger = logging.getLogger(__name__)


class GridPropagator(TilePropagator):
    def __init__(self, topology: Topology, tiles: Iterable[Hashable], constraints: Iterable[TileConstraint] = ()):
        self.topology = topology
        self.tiles: Tuple[Hashable, ...] = tuple(dict.fromkeys(tiles))
        if not self.tiles:
            raise ValueError("GridPropagator needs at least one tile")
        self._domains: Dict[Coord, set] = {c: set(self.tiles) for c in topology.coords()}
        self.contradiction = False
        self.bans: List[Tuple[Coord, Hashable]] = []
        self.constraints: List[TileConstraint] = list(constraints)
        for constraint in self.constraints:
            constraint.init(self)

    def _domain(self, x: int, y: int, z: int) -> set:
        try:
            return self._domains[(x, y, z)]
        except KeyError:
            raise IndexError(f"cell {(x, y, z)} is outside the grid") from None

    def domain(self, x: int, y: int, z: int = 0) -> FrozenSet[Hashable]:
        return frozenset(self._domain(x, y, z))

    def create_tile_set(self, tiles: Iterable[Hashable]) -> TileSet:
        tiles = frozenset(tiles)
        unknown = tiles.difference(self.tiles)
        if unknown:
            raise ValueError(f"Unknown tiles: {sorted(map(str, unknown))}")
        return TileSet(tiles)

    def get_banned_selected(self, x: int, y: int, z: int, tile_set: TileSet) -> Tuple[bool, bool]:
        domain = self._domain(x, y, z)
        is_banned = domain.isdisjoint(tile_set.tiles)
        is_selected = bool(domain) and domain.issubset(tile_set.tiles)
        return is_banned, is_selected

    def ban(self, x: int, y: int, z: int, tile_set: TileSet) -> bool:
        """Remove ``tile_set`` from a cell. Returns True if the domain changed."""
        domain = self._domain(x, y, z)
        removed = domain.intersection(tile_set.tiles)
        if not removed:
            return False
        domain.difference_update(removed)
        self.bans.extend(((x, y, z), t) for t in removed)
        if not domain:
            logger.debug("cell %s has no tiles left", (x, y, z))
            self.contradiction = True
        return True

    def select(self, x: int, y: int, z: int, tile: Hashable) -> None:
        if tile not in self.tiles:
            raise ValueError(f"Unknown tile: {tile!r}")
        domain = self._domain(x, y, z)
        if tile not in domain:
            self.contradiction = True
        domain.intersection_update({tile})

    def set_contradiction(self) -> None:
        self.contradiction = True

    def propagate(self) -> bool:
        """Check every constraint until no ban changes anything.

        Returns False if the grid ended in contradiction.
        """
        while not self.contradiction:
            before = len(self.bans)
            for constraint in self.constraints:
                constraint.check(self)
                if self.contradiction:
                    break
            if len(self.bans) == before:
                break
        return not self.contradiction
