from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Hashable, Tuple, Union


class Axis(str, Enum):
    """Coordinate axis of a cartesian grid."""
    X = "x"
    Y = "y"
    Z = "z"


class TopologyKind(str, Enum):
    """Direction set of a topology; only the cartesian kinds are scanned."""
    CARTESIAN_2D = "cartesian2d"
    CARTESIAN_3D = "cartesian3d"
    OTHER = "other"


Coord = Tuple[int, int, int]


@dataclass(frozen=True)
class Topology:
    """Grid dimensions plus per-axis periodicity."""
    width: int
    height: int
    depth: int = 1
    periodic_x: bool = False
    periodic_y: bool = False
    periodic_z: bool = False
    kind: TopologyKind = TopologyKind.CARTESIAN_2D

    def __post_init__(self) -> None:
        for name in ("width", "height", "depth"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be at least 1, got {getattr(self, name)}")
        if self.kind == TopologyKind.CARTESIAN_2D and self.depth != 1:
            raise ValueError(f"cartesian2d topology must have depth 1, got {self.depth}")

    def size(self, axis: Axis) -> int:
        return {Axis.X: self.width, Axis.Y: self.height, Axis.Z: self.depth}[axis]

    def is_periodic(self, axis: Axis) -> bool:
        return {Axis.X: self.periodic_x, Axis.Y: self.periodic_y, Axis.Z: self.periodic_z}[axis]

    def coords(self):
        for z in range(self.depth):
            for y in range(self.height):
                for x in range(self.width):
                    yield (x, y, z)


@dataclass(frozen=True)
class TileSet:
    """Resolved handle for a group of tiles, as handed out by a propagator."""
    tiles: FrozenSet[Hashable] = field(default_factory=frozenset)


@dataclass(frozen=True)
class Observation:
    """State of the constrained tiles at one index along a line."""
    index: int
    is_banned: bool
    is_selected: bool


@dataclass(frozen=True)
class Ban:
    index: int


@dataclass(frozen=True)
class Contradiction:
    pass


Effect = Union[Ban, Contradiction]
