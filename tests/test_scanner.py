import pytest

from maxconsec.core.model import Axis, Topology, TopologyKind
from maxconsec.core.scanner import lines


@pytest.mark.parametrize("axis, count, length", [
    (Axis.X, 12, 2),
    (Axis.Y, 8, 3),
    (Axis.Z, 6, 4),
])
def test_lines_cover_grid_once(axis, count, length):
    topology = Topology(width=2, height=3, depth=4, kind=TopologyKind.CARTESIAN_3D)
    seen = []
    maps = list(lines(topology, axis))
    assert len(maps) == count
    for to_coord in maps:
        line = [to_coord(i) for i in range(length)]
        # every cell on a line shares the two fixed coordinates
        fixed = [i for i, a in enumerate(Axis) if a != axis]
        assert len({tuple(c[k] for k in fixed) for c in line}) == 1
        seen.extend(line)
    assert sorted(seen) == sorted(topology.coords())


def test_scan_stops_at_contradiction(make_line):
    grid = make_line("###...", 2)
    grid.constraints[0].check(grid)
    assert grid.contradiction
    assert grid.queries == [(0, 0, 0), (1, 0, 0), (2, 0, 0)]
    assert grid.ban_calls == []


def test_periodic_line_rescans_prefix(make_line):
    grid = make_line("o.o.o.o", 3, periodic=True)
    grid.constraints[0].check(grid)
    assert [q[0] for q in grid.queries] == list(range(7)) + [0, 1, 2]


def test_periodic_rescan_capped_by_length(make_line):
    grid = make_line("o.o", 5, periodic=True)
    grid.constraints[0].check(grid)
    assert [q[0] for q in grid.queries] == [0, 1, 2, 0, 1, 2]


def test_non_periodic_line_scanned_once(make_line):
    grid = make_line("o.o.o.o", 3)
    grid.constraints[0].check(grid)
    assert [q[0] for q in grid.queries] == list(range(7))
