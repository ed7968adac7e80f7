import pytest

from maxconsec import GridPropagator, MaxConsecutiveConstraint, Topology

SELECTED = "#"
OTHER = "o"


class RecordingPropagator(GridPropagator):
    """GridPropagator that remembers every query and ban request."""

    def __init__(self, *args, **kwargs):
        self.queries = []
        self.ban_calls = []
        super().__init__(*args, **kwargs)

    def get_banned_selected(self, x, y, z, tile_set):
        self.queries.append((x, y, z))
        return super().get_banned_selected(x, y, z, tile_set)

    def ban(self, x, y, z, tile_set):
        already = GridPropagator.get_banned_selected(self, x, y, z, tile_set)[0]
        self.ban_calls.append(((x, y, z), already))
        return super().ban(x, y, z, tile_set)


def build_line(mask, max_count, periodic=False):
    """One-row grid; '#' selects the constrained tile, 'o' the other, '.' is undecided."""
    topology = Topology(width=len(mask), height=1, periodic_x=periodic)
    constraint = MaxConsecutiveConstraint([SELECTED], max_count, axes=["x"])
    grid = RecordingPropagator(topology, [SELECTED, OTHER], [constraint])
    for x, ch in enumerate(mask):
        if ch != ".":
            grid.select(x, 0, 0, ch)
    return grid


@pytest.fixture
def make_line():
    return build_line
