"""Max-consecutive run constraint for grid tile propagators."""

from .core.constraints import (
    CONSTRAINT_REGISTRY,
    MaxConsecutiveConstraint,
    TileConstraint,
    UnsupportedTopologyError,
    build_constraint,
    register_constraint,
)
from .core.grid import GridPropagator
from .core.model import Axis, TileSet, Topology, TopologyKind
from .core.propagator import TilePropagator

__all__ = [
    "Axis",
    "CONSTRAINT_REGISTRY",
    "GridPropagator",
    "MaxConsecutiveConstraint",
    "TileConstraint",
    "TilePropagator",
    "TileSet",
    "Topology",
    "TopologyKind",
    "UnsupportedTopologyError",
    "build_constraint",
    "register_constraint",
]
