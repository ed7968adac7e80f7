"""Per-axis line enumeration feeding the run tracker."""

from __future__ import annotations

import logging
from typing import Callable, Iterator

from .model import Axis, Ban, Contradiction, Coord, Observation, TileSet, Topology
from .propagator import TilePropagator
from .tracker import INITIAL_STATE, TrackerConfig, step

logger = logging.getLogger(__name__)

CoordMap = Callable[[int], Coord]


def lines(topology: Topology, axis: Axis) -> Iterator[CoordMap]:
    """Yield one index -> coordinate mapping per line along ``axis``."""
    if axis == Axis.X:
        for z in range(topology.depth):
            for y in range(topology.height):
                yield lambda i, y=y, z=z: (i, y, z)
    elif axis == Axis.Y:
        for z in range(topology.depth):
            for x in range(topology.width):
                yield lambda i, x=x, z=z: (x, i, z)
    elif axis == Axis.Z:
        for y in range(topology.height):
            for x in range(topology.width):
                yield lambda i, x=x, y=y: (x, y, i)
    else:
        raise ValueError(f"unknown axis {axis!r}")


def scan_line(propagator: TilePropagator, tile_set: TileSet, to_coord: CoordMap, config: TrackerConfig) -> bool:
    """Run a fresh tracker over one line, applying its bans as they appear.

    Periodic lines get a second pass over their first ``max_count`` cells
    without resetting the tracker, so runs crossing the seam are seen whole.
    Returns True as soon as the line is found to be in contradiction.
    """
    indices = list(range(config.length))
    if config.periodic:
        indices += range(min(config.max_count, config.length))

    state = INITIAL_STATE
    for i in indices:
        x, y, z = to_coord(i)
        is_banned, is_selected = propagator.get_banned_selected(x, y, z, tile_set)
        state, effects = step(config, state, Observation(i, is_banned, is_selected))
        for effect in effects:
            if isinstance(effect, Contradiction):
                logger.debug("run longer than %d ending at %s", config.max_count, (x, y, z))
                return True
            if isinstance(effect, Ban):
                target = to_coord(effect.index)
                logger.debug("banning %s at %s", set(tile_set.tiles), target)
                propagator.ban(*target, tile_set)
    return False


def scan_axis(propagator: TilePropagator, tile_set: TileSet, axis: Axis, max_count: int) -> bool:
    topology = propagator.topology
    config = TrackerConfig(
        max_count=max_count,
        length=topology.size(axis),
        periodic=topology.is_periodic(axis),
    )
    for to_coord in lines(topology, axis):
        if scan_line(propagator, tile_set, to_coord, config):
            return True
    return False
