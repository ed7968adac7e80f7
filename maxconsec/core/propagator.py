"""Interface the constraint needs from the tile solver driving it."""

from __future__ import annotations

from typing import Iterable, Tuple

from .model import TileSet, Topology


class TilePropagator:
    """Base propagator adapter.

    Solvers expose their grid to constraints through this narrow surface.
    ``ban`` must be safe to call on a cell where the tiles are already banned.
    """
    topology: Topology

    def create_tile_set(self, tiles: Iterable) -> TileSet:
        raise NotImplementedError

    def get_banned_selected(self, x: int, y: int, z: int, tile_set: TileSet) -> Tuple[bool, bool]:
        """Return ``(is_banned, is_selected)`` for ``tile_set`` at a cell."""
        raise NotImplementedError

    def ban(self, x: int, y: int, z: int, tile_set: TileSet):
        raise NotImplementedError

    def set_contradiction(self) -> None:
        raise NotImplementedError
