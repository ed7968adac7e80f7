"""Tile constraints and their registry."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Mapping, Optional, Type

from .model import Axis, TileSet, TopologyKind
from .propagator import TilePropagator
from .scanner import scan_axis

logger = logging.getLogger(__name__)


class UnsupportedTopologyError(Exception):
    """The constraint cannot run on the propagator's topology."""


class TileConstraint:
    """Base constraint adapter."""
    name: str = "constraint"

    def init(self, propagator: TilePropagator) -> None:  # pragma: no cover - stubs
        pass

    def check(self, propagator: TilePropagator) -> None:  # pragma: no cover - stubs
        pass

    @classmethod
    def from_config(cls, options: Mapping[str, Any]) -> "TileConstraint":
        raise NotImplementedError


CONSTRAINT_REGISTRY: Dict[str, Type[TileConstraint]] = {}


def register_constraint(cls: Type[TileConstraint]) -> Type[TileConstraint]:
    CONSTRAINT_REGISTRY[cls.name] = cls
    return cls


def build_constraint(config: Mapping[str, Any]) -> TileConstraint:
    """Instantiate a constraint from a ``{type: ..., **options}`` mapping."""
    options = dict(config)
    kind = options.pop("type", None)
    if kind not in CONSTRAINT_REGISTRY:
        raise ValueError(f"Unknown constraint type: {kind!r}")
    return CONSTRAINT_REGISTRY[kind].from_config(options)


def _parse_axes(axes: Optional[Iterable]) -> Optional[frozenset]:
    if axes is None:
        return None
    try:
        return frozenset(a if isinstance(a, Axis) else Axis(str(a).lower()) for a in axes)
    except ValueError as exc:
        raise ValueError(f"Invalid axes {axes!r}; expected a subset of x, y, z") from exc


@register_constraint
class MaxConsecutiveConstraint(TileConstraint):
    """Limits how many cells in a row, along each axis, may hold ``tiles``.

    Every ``check`` rescans the whole grid: lines are read one at a time and
    bans are issued on cells that would otherwise extend a run past
    ``max_count``. If a run is already too long the propagator is put into
    contradiction and scanning stops.
    """
    name = "max_consecutive"

    def __init__(self, tiles: Iterable, max_count: int, axes: Optional[Iterable] = None):
        self.tiles = frozenset(tiles)
        if not self.tiles:
            raise ValueError("MaxConsecutiveConstraint needs at least one tile")
        if isinstance(max_count, bool) or not isinstance(max_count, int) or max_count < 1:
            raise ValueError(f"max_count must be a positive integer, got {max_count!r}")
        self.max_count = max_count
        self.axes = _parse_axes(axes)
        self._tile_set: Optional[TileSet] = None

    @classmethod
    def from_config(cls, options: Mapping[str, Any]) -> "MaxConsecutiveConstraint":
        options = dict(options)
        max_count = options.pop("maxCount", options.pop("max_count", None))
        tiles = options.pop("tiles", None)
        axes = options.pop("axes", None)
        if options:
            raise ValueError(f"Unknown options for {cls.name}: {sorted(options)}")
        if tiles is None or max_count is None:
            raise ValueError(f"{cls.name} requires 'tiles' and 'maxCount'")
        return cls(tiles, max_count, axes)

    def active_axes(self):
        return [a for a in (Axis.X, Axis.Y, Axis.Z) if self.axes is None or a in self.axes]

    def init(self, propagator: TilePropagator) -> None:
        kind = propagator.topology.kind
        if kind not in (TopologyKind.CARTESIAN_2D, TopologyKind.CARTESIAN_3D):
            raise UnsupportedTopologyError(
                f"MaxConsecutiveConstraint only supports cartesian topologies, got {kind.value}"
            )
        self._tile_set = propagator.create_tile_set(self.tiles)

    def check(self, propagator: TilePropagator) -> None:
        if self._tile_set is None:
            raise RuntimeError("MaxConsecutiveConstraint.check called before init")
        for axis in self.active_axes():
            if scan_axis(propagator, self._tile_set, axis, self.max_count):
                logger.debug("max_consecutive(%d) violated along %s", self.max_count, axis.value)
                propagator.set_contradiction()
                return
