"""
Stochastic dart throw simulation.

A throw aims at the centre of the intended scoring area and lands at a point
drawn from an isotropic 2D Gaussian around it. The landing point is then
scored without reference to the aim, so a wide throw can strike a
neighbouring number or ring, or miss the board entirely.
"""
from typing import Optional, Tuple
import logging

import numpy as np

from dartsim.core import MalformedInputError, Ring, Target, ThrowOutcome
from .geometry import DartboardMapper

logger = logging.getLogger(__name__)

# Skill -> dispersion curve
SPREAD_K = 1800.0
SPREAD_OFFSET = 20.0
MIN_DISPERSION = 5.0  # mm, sharper than any human grouping
MAX_DISPERSION = 50.0  # mm, still lands most darts on the board


def dispersion_for_three_da(
        three_da: float,
        k: float = SPREAD_K,
        offset: float = SPREAD_OFFSET,
        min_dispersion: float = MIN_DISPERSION,
        max_dispersion: float = MAX_DISPERSION
) -> float:
    """
    Convert a three-dart average into a throw dispersion.

    Roughly: 90+ average groups within 10-15mm, 60 within 20-25mm,
    30 scatters 35-40mm.

    Args:
        three_da: Skill rating in points per three darts
        k: Curve numerator
        offset: Added to the average before dividing
        min_dispersion: Lower clamp in mm
        max_dispersion: Upper clamp in mm

    Returns:
        Standard deviation of the landing point in mm
    """
    if three_da < 0:
        logger.warning(f"Negative three-dart average {three_da} treated as 0")
        three_da = 0.0

    spread = k / (three_da + offset)
    spread = float(np.clip(spread, min_dispersion, max_dispersion))

    logger.debug(f"Dispersion for 3DA {three_da:.2f} is {spread:.2f} mm")
    return spread


class ThrowSimulator:
    """
    Simulates single dart throws against a dartboard.

    Each instance owns its random generator; share an instance across
    threads only behind the owner's lock.
    """

    def __init__(
            self,
            mapper: Optional[DartboardMapper] = None,
            rng=None,
            seed: Optional[int] = None,
            spread_k: float = SPREAD_K,
            spread_offset: float = SPREAD_OFFSET,
            min_dispersion: float = MIN_DISPERSION,
            max_dispersion: float = MAX_DISPERSION
    ):
        """
        Initialize throw simulator.

        Args:
            mapper: Board geometry mapper (default: standard board)
            rng: Random source exposing normal(loc, scale, size);
                defaults to numpy.random.default_rng(seed)
            seed: Seed for the default generator (None = system entropy)
            spread_k: Numerator of the skill -> dispersion curve
            spread_offset: Offset of the skill -> dispersion curve
            min_dispersion: Tightest allowed grouping in mm
            max_dispersion: Widest allowed scatter in mm
        """
        if not 0 < min_dispersion <= max_dispersion:
            raise MalformedInputError("Dispersion bounds must satisfy 0 < min <= max")

        self.mapper = mapper or DartboardMapper()
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.spread_k = spread_k
        self.spread_offset = spread_offset
        self.min_dispersion = min_dispersion
        self.max_dispersion = max_dispersion

    def dispersion_for(self, three_da: float) -> float:
        """Dispersion for a skill rating using this simulator's curve."""
        return dispersion_for_three_da(
            three_da,
            k=self.spread_k,
            offset=self.spread_offset,
            min_dispersion=self.min_dispersion,
            max_dispersion=self.max_dispersion,
        )

    def aim_radius(self, ring: Ring) -> float:
        """
        Radius to aim at for a ring.

        Singles aim at the big outer single bed between treble and double.
        """
        g = self.mapper.geometry
        if ring == Ring.DOUBLE:
            return (g.double_inner_radius + g.double_outer_radius) / 2.0
        if ring == Ring.SINGLE:
            return (g.triple_outer_radius + g.double_inner_radius) / 2.0
        return (g.triple_inner_radius + g.triple_outer_radius) / 2.0

    def aim_point(self, target: Target) -> Tuple[float, float]:
        """
        Cartesian aim point for a target.

        Bull targets (and a nonsensical aim at a miss) aim at the centre.
        """
        if target.is_bull or target.ring == Ring.MISS:
            return 0.0, 0.0

        return self.mapper.to_cartesian(
            self.aim_radius(target.ring),
            self.mapper.angle_for_number(target.number)
        )

    def throw(self, target: Target, dispersion: float) -> ThrowOutcome:
        """
        Throw one dart.

        Args:
            target: What the player aims at
            dispersion: Standard deviation of the landing point in mm

        Returns:
            ThrowOutcome for what was actually struck
        """
        if dispersion <= 0:
            raise MalformedInputError(f"Dispersion must be positive, got {dispersion}")

        aim_x, aim_y = self.aim_point(target)
        dx, dy = self.rng.normal(0.0, dispersion, size=2)

        outcome = self.mapper.classify(aim_x + float(dx), aim_y + float(dy))

        logger.debug(
            f"Aim {target} ({aim_x:.1f}, {aim_y:.1f}) → "
            f"landed ({outcome.x:.1f}, {outcome.y:.1f}) r={outcome.radius:.1f}mm → {outcome}"
        )

        return outcome
