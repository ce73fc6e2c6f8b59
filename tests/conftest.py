"""
Shared fixtures: a scripted random source for deterministic throws.
"""
from collections import deque

import numpy as np
import pytest

from dartsim.board import ThrowSimulator
from dartsim.core import Target


class ScriptedRng:
    """
    Stand-in for numpy's Generator that returns queued (dx, dy) offsets.

    Offsets are absolute millimetres; the requested scale is ignored.
    With an empty queue every dart lands on its aim point.
    """

    def __init__(self, offsets=()):
        self.offsets = deque(offsets)
        self.calls = 0

    def push(self, dx: float, dy: float) -> None:
        self.offsets.append((dx, dy))

    def normal(self, loc=0.0, scale=1.0, size=None):
        self.calls += 1
        if self.offsets:
            return np.array(self.offsets.popleft(), dtype=float)
        return np.zeros(2)


def steer(rng: ScriptedRng, simulator: ThrowSimulator, aimed: str, struck: str) -> None:
    """Queue the offset that turns a throw aimed at `aimed` into a hit on `struck`."""
    ax, ay = simulator.aim_point(Target.parse(aimed))
    sx, sy = simulator.aim_point(Target.parse(struck))
    rng.push(sx - ax, sy - ay)


@pytest.fixture
def scripted_rng():
    return ScriptedRng()


@pytest.fixture
def scripted_simulator(scripted_rng):
    return ThrowSimulator(rng=scripted_rng)
