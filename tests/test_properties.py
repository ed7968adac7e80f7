"""Exhaustive checks over every short line."""

import itertools

import pytest

from maxconsec import GridPropagator, MaxConsecutiveConstraint, Topology

A, B = "a", "b"


def longest_run(cells, periodic=False):
    """Longest run of A; on a periodic line runs may cross the seam."""
    seq = list(cells) * 2 if periodic else list(cells)
    best = run = 0
    for c in seq:
        run = run + 1 if c == A else 0
        best = max(best, run)
    return min(best, len(cells)) if periodic else best


def line(cells, max_count, periodic=False):
    topology = Topology(width=len(cells), height=1, periodic_x=periodic)
    grid = GridPropagator(topology, [A, B], [MaxConsecutiveConstraint([A], max_count, axes=["x"])])
    for x, c in enumerate(cells):
        if c is not None:
            grid.select(x, 0, 0, c)
    return grid


def masks(max_len):
    for n in range(1, max_len + 1):
        yield from itertools.product([A, None], repeat=n)


@pytest.mark.parametrize("periodic", [False, True])
@pytest.mark.parametrize("max_count", [1, 2, 3])
def test_collapsed_line_contradicts_iff_run_too_long(max_count, periodic):
    for n in range(1, 8):
        for cells in itertools.product([A, B], repeat=n):
            if periodic and B not in cells:
                continue
            grid = line(cells, max_count, periodic)
            assert grid.propagate() == (longest_run(cells, periodic) <= max_count), cells


@pytest.mark.parametrize("max_count", [1, 2, 3])
def test_every_ban_is_needed(max_count):
    for cells in masks(7):
        if longest_run(cells) > max_count:
            continue
        grid = line(cells, max_count)
        assert grid.propagate()
        for (x, _, _), _ in grid.bans:
            filled = list(cells)
            filled[x] = A
            assert longest_run(filled) > max_count, (cells, x)


@pytest.mark.parametrize("max_count", [2, 3])
def test_every_needed_ban_is_made(max_count):
    # exact equality in the boundary check is enough: the sum of two runs
    # grows one cell at a time, so it always passes through max_count
    for cells in masks(7):
        if longest_run(cells) > max_count:
            continue
        grid = line(cells, max_count)
        assert grid.propagate()
        for x, c in enumerate(cells):
            filled = list(cells)
            filled[x] = A
            if c is None and longest_run(filled) > max_count:
                assert A not in grid.domain(x, 0), (cells, x)


def test_max_one_leading_neighbour_left_open():
    grid = line([None, A, None], 1)
    assert grid.propagate()
    assert grid.domain(0, 0) == {A, B}
    assert grid.domain(2, 0) == {B}
    grid.select(0, 0, 0, A)
    assert not grid.propagate()


@pytest.mark.parametrize("max_count", [2, 3])
@pytest.mark.parametrize("n", [3, 4, 5])
def test_collapsing_in_any_order_respects_bound(n, max_count):
    for wanted in itertools.product([A, B], repeat=n):
        for order in itertools.permutations(range(n)):
            grid = line([None] * n, max_count)
            for x in order:
                grid.select(x, 0, 0, wanted[x] if wanted[x] in grid.domain(x, 0) else B)
                assert grid.propagate(), (wanted, order)
            result = [next(iter(grid.domain(x, 0))) for x in range(n)]
            assert longest_run(result) <= max_count


@pytest.mark.parametrize("max_count", [1, 2, 3])
def test_collapsing_left_to_right_respects_bound(max_count):
    for n in range(1, 8):
        for wanted in itertools.product([A, B], repeat=n):
            grid = line([None] * n, max_count)
            for x in range(n):
                grid.select(x, 0, 0, wanted[x] if wanted[x] in grid.domain(x, 0) else B)
                assert grid.propagate(), wanted
            result = [next(iter(grid.domain(x, 0))) for x in range(n)]
            assert longest_run(result) <= max_count


@pytest.mark.parametrize("max_count", [2, 3, 4])
def test_seam_run_counts_as_one(max_count):
    n = 9
    for k in range(1, max_count):
        cells = [None] * n
        for x in list(range(n - k, n)) + list(range(max_count - k)):
            cells[x] = A
        grid = line(cells, max_count, periodic=True)
        assert grid.propagate()
        banned = sorted(x for (x, _, _), _ in grid.bans)
        assert banned == [max_count - k, n - k - 1]
        assert line(cells, max_count).propagate()
