"""
Dartboard geometry calculations and sector mapping.
"""
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple
import logging

import numpy as np

from dartsim.core import BULLSEYE, MISS, BoardGeometry, Ring, Target, ThrowOutcome

logger = logging.getLogger(__name__)


class DartboardMapper:
    """
    Maps board coordinates to sectors, rings and scores.

    Coordinates are millimetres relative to the bull with y pointing
    at the 20. Angles are radians, 0 at the top, growing clockwise.
    """

    def __init__(self, board_geometry: Optional[BoardGeometry] = None):
        """
        Initialize dartboard mapper.

        Args:
            board_geometry: Board dimensions (default: BoardGeometry())
        """
        self.geometry = board_geometry or BoardGeometry()
        self.sector_angle = self.geometry.sector_angle

        # Centre angle of every number, built once
        angles: Dict[int, float] = {
            number: i * self.sector_angle
            for i, number in enumerate(self.geometry.sector_sequence)
        }
        angles[BULLSEYE] = 0.0  # radius alone decides bull hits
        self._angles: Mapping[int, float] = MappingProxyType(angles)

        logger.debug(
            f"DartboardMapper initialized: board radius={self.geometry.board_radius}mm, "
            f"{self.geometry.num_sectors} sectors"
        )

    @property
    def number_angles(self) -> Mapping[int, float]:
        """Read-only number -> centre angle table."""
        return self._angles

    def angle_for_number(self, number: int) -> float:
        """
        Get the centre angle of a number's sector.

        Args:
            number: Board number (1-20) or 25 for the bull

        Returns:
            Angle in radians (0 = top, clockwise)
        """
        return self._angles.get(number, 0.0)

    def to_cartesian(self, radius: float, angle: float) -> Tuple[float, float]:
        """Convert board polar coordinates to (x, y)."""
        return float(radius * np.sin(angle)), float(radius * np.cos(angle))

    def to_polar(self, x: float, y: float) -> Tuple[float, float]:
        """
        Convert board coordinates to polar coordinates.

        Returns:
            (radius, angle) with angle normalised to [0, 2π)
        """
        radius = float(np.hypot(x, y))
        # atan2(x, y) measures clockwise from the +y axis
        angle = float(np.arctan2(x, y)) % (2.0 * np.pi)
        return radius, angle

    def number_from_angle(self, angle: float) -> int:
        """
        Resolve the number whose sector centre is nearest to an angle.

        Args:
            angle: Angle in radians (any range)

        Returns:
            Sector number (1-20)
        """
        num_sectors = self.geometry.num_sectors
        sector_idx = int(np.floor(angle / self.sector_angle + 0.5)) % num_sectors
        return self.geometry.sector_sequence[sector_idx]

    def ring_from_radius(self, radius: float) -> Ring:
        """
        Ring for a radius inside the numbered area (outside the bull).

        Returns Ring.MISS beyond the board edge.
        """
        g = self.geometry
        if radius > g.board_radius:
            return Ring.MISS
        if g.double_inner_radius <= radius <= g.double_outer_radius:
            return Ring.DOUBLE
        if g.triple_inner_radius <= radius <= g.triple_outer_radius:
            return Ring.TRIPLE
        return Ring.SINGLE

    def classify(self, x: float, y: float) -> ThrowOutcome:
        """
        Convert a landing point to what was struck.

        Args:
            x: X coordinate in mm
            y: Y coordinate in mm

        Returns:
            ThrowOutcome with the struck target and its polar position
        """
        radius, angle = self.to_polar(x, y)
        g = self.geometry

        if radius <= g.double_bull_radius:
            target = Target(Ring.DOUBLE, BULLSEYE)
        elif radius <= g.single_bull_radius:
            target = Target(Ring.SINGLE, BULLSEYE)
        elif radius > g.board_radius:
            target = MISS
        else:
            target = Target(self.ring_from_radius(radius), self.number_from_angle(angle))

        return ThrowOutcome(target=target, x=x, y=y, radius=radius, angle=angle)
