"""Run-length automaton for a single line of cells.

The tracker looks at every cell along a line, in order, and remembers just
enough to know when the line is about to break the run bound. It never
touches the grid itself: ``step`` returns the new state together with the
effects the caller should apply.

Two situations produce bans:

1. A run of exactly ``max_count`` selected cells. Both neighbours are banned,
   the trailing one when the scan reaches it and the leading one when the run
   length reaches the bound.
2. Two runs separated by a single cell whose lengths add up to
   ``max_count``. Selecting the separating cell would join them into a run of
   ``max_count + 1``, so it is banned.

A run longer than ``max_count`` cannot be repaired by banning anything and is
reported as a contradiction.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import List, Tuple

from .model import Ban, Contradiction, Effect, Observation


class RunState(str, Enum):
    INITIAL = "initial"
    IN_RUN = "in_run"
    JUST_AFTER_RUN = "just_after_run"


@dataclass(frozen=True)
class TrackerConfig:
    max_count: int
    length: int
    periodic: bool = False


@dataclass(frozen=True)
class TrackerState:
    state: RunState = RunState.INITIAL
    run_count: int = 0
    run_start: int = 0
    prev_run_count: int = 0


INITIAL_STATE = TrackerState()


def _boundary_effects(config: TrackerConfig, state: TrackerState) -> List[Effect]:
    # The cell before the current run would merge it with the previous run
    # (or extend a run of exactly max_count) if it were ever selected.
    if state.prev_run_count + state.run_count != config.max_count:
        return []
    if state.run_start == 0:
        if config.periodic:
            return [Ban(config.length - 1)]
        return []
    return [Ban(state.run_start - 1)]


def step(config: TrackerConfig, state: TrackerState, obs: Observation) -> Tuple[TrackerState, List[Effect]]:
    """Advance the automaton by one cell."""
    if state.state == RunState.INITIAL:
        if obs.is_selected:
            return replace(state, state=RunState.IN_RUN, run_count=1, run_start=obs.index), []
        return state, []

    if state.state == RunState.JUST_AFTER_RUN:
        if obs.is_selected:
            new = replace(state, state=RunState.IN_RUN, run_count=1, run_start=obs.index)
            return new, _boundary_effects(config, new)
        return replace(state, state=RunState.INITIAL, run_count=0, prev_run_count=0), []

    if state.state == RunState.IN_RUN:
        if obs.is_selected:
            new = replace(state, run_count=state.run_count + 1)
            if new.run_count > config.max_count:
                return new, [Contradiction()]
            return new, _boundary_effects(config, new)
        effects: List[Effect] = []
        if state.run_count == config.max_count and not obs.is_banned:
            effects.append(Ban(obs.index))
        new = replace(state, state=RunState.JUST_AFTER_RUN, prev_run_count=state.run_count, run_count=0)
        return new, effects

    raise RuntimeError(f"run tracker reached unknown state {state.state!r}")

