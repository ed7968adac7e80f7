from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from ..core.constraints import build_constraint
from ..core.grid import GridPropagator
from ..core.model import Axis, Topology, TopologyKind

UNDECIDED = "."


@dataclass
class Scenario:
    topology: Topology
    tiles: List[str]
    constraints: List[Dict[str, Any]] = field(default_factory=list)
    layers: List[List[List[str]]] = field(default_factory=list)

    def build(self) -> GridPropagator:
        """Create a propagator with constraints initialised and cells pre-selected."""
        propagator = GridPropagator(
            self.topology,
            self.tiles,
            [build_constraint(c) for c in self.constraints],
        )
        for z, layer in enumerate(self.layers):
            for y, row in enumerate(layer):
                for x, token in enumerate(row):
                    if token != UNDECIDED:
                        propagator.select(x, y, z, token)
        return propagator


def _parse_topology(data: Dict[str, Any]) -> Topology:
    if not isinstance(data, dict):
        raise ValueError(f"topology must be a mapping, got {data!r}")
    try:
        width = int(data["width"])
        height = int(data.get("height", 1))
    except KeyError as exc:
        raise ValueError(f"topology is missing {exc.args[0]!r}") from exc
    depth = int(data.get("depth", 1))
    periodic = {str(a).lower() for a in data.get("periodic", [])}
    unknown = periodic - {a.value for a in Axis}
    if unknown:
        raise ValueError(f"Unknown periodic axes: {sorted(unknown)}")
    default_kind = TopologyKind.CARTESIAN_3D if depth > 1 else TopologyKind.CARTESIAN_2D
    kind = TopologyKind(data.get("kind", default_kind.value))
    return Topology(
        width=width,
        height=height,
        depth=depth,
        periodic_x="x" in periodic,
        periodic_y="y" in periodic,
        periodic_z="z" in periodic,
        kind=kind,
    )


def _parse_layer(rows: List[Any], topology: Topology, tiles: List[str]) -> List[List[str]]:
    if len(rows) != topology.height:
        raise ValueError(f"Expected {topology.height} rows, got {len(rows)}")
    layer = []
    for y, row in enumerate(rows):
        tokens = row.split() if isinstance(row, str) else [str(t) for t in row]
        if len(tokens) != topology.width:
            raise ValueError(f"Row {y} has {len(tokens)} cells, expected {topology.width}")
        for token in tokens:
            if token != UNDECIDED and token not in tiles:
                raise ValueError(f"Row {y} uses unknown tile {token!r}")
        layer.append(tokens)
    return layer


def load_scenario(path: str | Path) -> Scenario:
    """Load a YAML scenario description into a Scenario object."""
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at the top level")

    if "topology" not in data:
        raise ValueError(f"{path}: missing 'topology'")
    topology = _parse_topology(data["topology"])
    tiles = [str(t) for t in data.get("tiles", [])]
    if not tiles:
        raise ValueError(f"{path}: 'tiles' must list at least one tile")
    constraints = []
    for c in data.get("constraints", []):
        c = dict(c)
        if "tiles" in c:
            c["tiles"] = [str(t) for t in c["tiles"]]
        constraints.append(c)

    if "rows" in data and "layers" in data:
        raise ValueError(f"{path}: give either 'rows' or 'layers', not both")
    raw_layers: Optional[List[Any]] = data.get("layers")
    if raw_layers is None and "rows" in data:
        raw_layers = [data["rows"]]
    layers = []
    if raw_layers is not None:
        if len(raw_layers) != topology.depth:
            raise ValueError(f"{path}: expected {topology.depth} layers, got {len(raw_layers)}")
        layers = [_parse_layer(rows, topology, tiles) for rows in raw_layers]

    return Scenario(
        topology=topology,
        tiles=tiles,
        constraints=constraints,
        layers=layers,
    )
