"""
Core data types for the darts simulator.
Defines contracts between modules to ensure stable interfaces.
"""
from dataclasses import dataclass
from enum import Enum, IntEnum
import math
from typing import Tuple

from .errors import MalformedInputError

BULLSEYE = 25


class Ring(IntEnum):
    """Board ring; the value is the scoring multiplier."""
    MISS = 0
    SINGLE = 1
    DOUBLE = 2
    TRIPLE = 3

    @property
    def prefix(self) -> str:
        return {Ring.SINGLE: "S", Ring.DOUBLE: "D", Ring.TRIPLE: "T"}.get(self, "")


class ScoringPreference(Enum):
    """Which treble a player aims at when no checkout is on."""
    TWENTIES = "twenties"
    NINETEENS = "nineteens"

    @classmethod
    def parse(cls, value) -> "ScoringPreference":
        """Parse a boundary string; None resolves to TWENTIES."""
        if value is None or value == "":
            return cls.TWENTIES
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise MalformedInputError(f"Unknown scoring preference: {value!r}") from None


class PlayerKind(Enum):
    """Who throws the darts for a player."""
    REAL = "real"  # scores submitted externally
    SIMULATED = "simulated"  # darts drawn by the throw simulator

    @classmethod
    def parse(cls, value) -> "PlayerKind":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise MalformedInputError(f"Unknown player kind: {value!r}") from None


@dataclass(frozen=True)
class Target:
    """
    A single scoring area on the board.

    number is 1-20, 25 for the bull, or 0 together with Ring.MISS.
    """
    ring: Ring
    number: int

    def __post_init__(self):
        if not isinstance(self.ring, Ring):
            try:
                object.__setattr__(self, "ring", Ring(self.ring))
            except ValueError:
                raise MalformedInputError(f"Unknown ring: {self.ring!r}") from None

        if self.ring == Ring.MISS:
            if self.number != 0:
                raise MalformedInputError("A miss has no number")
        elif self.number == BULLSEYE:
            if self.ring == Ring.TRIPLE:
                raise MalformedInputError("There is no triple bull")
        elif not 1 <= self.number <= 20:
            raise MalformedInputError(f"Invalid board number: {self.number}")

    @classmethod
    def parse(cls, text: str) -> "Target":
        """
        Parse compact notation: S20, D16, T19, SB, DB or MISS.

        Raises:
            MalformedInputError: If the notation is not recognised
        """
        label = str(text).strip().upper()

        if label == "MISS":
            return cls(Ring.MISS, 0)
        if label == "SB":
            return cls(Ring.SINGLE, BULLSEYE)
        if label == "DB":
            return cls(Ring.DOUBLE, BULLSEYE)

        rings = {"S": Ring.SINGLE, "D": Ring.DOUBLE, "T": Ring.TRIPLE}
        if len(label) < 2 or label[0] not in rings or not label[1:].isdigit():
            raise MalformedInputError(f"Invalid target notation: {text!r}")

        return cls(rings[label[0]], int(label[1:]))

    @property
    def is_bull(self) -> bool:
        return self.number == BULLSEYE

    @property
    def is_double(self) -> bool:
        """True for a double ring hit, including the double bull."""
        return self.ring == Ring.DOUBLE

    @property
    def score(self) -> int:
        """Points for a clean hit on this target."""
        if self.ring == Ring.MISS:
            return 0
        if self.is_bull:
            return 50 if self.ring == Ring.DOUBLE else 25
        return self.number * int(self.ring)

    def __str__(self) -> str:
        if self.ring == Ring.MISS:
            return "MISS"
        if self.is_bull:
            return "DB" if self.ring == Ring.DOUBLE else "SB"
        return f"{self.ring.prefix}{self.number}"


MISS = Target(Ring.MISS, 0)


@dataclass(frozen=True)
class ThrowOutcome:
    """
    Where a single dart actually landed.

    Landing point is in board millimetres, origin at the bull,
    y pointing towards the 20.
    """
    target: Target  # what was struck (not what was aimed at)
    x: float = 0.0
    y: float = 0.0
    radius: float = 0.0
    angle: float = 0.0  # radians, 0 = top, clockwise

    @property
    def score(self) -> int:
        return self.target.score

    @property
    def ring(self) -> Ring:
        return self.target.ring

    @property
    def number(self) -> int:
        return self.target.number

    @property
    def is_double(self) -> bool:
        return self.target.is_double

    def __str__(self) -> str:
        return f"{self.target}({self.score})"


@dataclass(frozen=True)
class BoardGeometry:
    """
    Dartboard geometric parameters (official dimensions).
    All measurements in millimeters.
    """
    # Radii (from center)
    double_bull_radius: float = 6.35  # Double bull (50 points)
    single_bull_radius: float = 15.9  # Single bull (25 points)
    triple_inner_radius: float = 99.0  # Inner edge of triple ring
    triple_outer_radius: float = 107.0  # Outer edge of triple ring
    double_inner_radius: float = 162.0  # Inner edge of double ring
    double_outer_radius: float = 170.0  # Outer edge of double ring (board edge)

    # Clockwise from the top
    sector_sequence: Tuple[int, ...] = (20, 1, 18, 4, 13, 6, 10, 15, 2, 17,
                                        3, 19, 7, 16, 8, 11, 14, 9, 12, 5)

    def __post_init__(self):
        radii = (
            self.double_bull_radius,
            self.single_bull_radius,
            self.triple_inner_radius,
            self.triple_outer_radius,
            self.double_inner_radius,
            self.double_outer_radius,
        )
        if radii[0] <= 0 or any(a >= b for a, b in zip(radii, radii[1:])):
            raise ValueError("Board radii must be positive and strictly increasing")

        if sorted(self.sector_sequence) != list(range(1, 21)):
            raise ValueError("Sector sequence must contain each number 1-20 exactly once")

    @property
    def board_radius(self) -> float:
        return self.double_outer_radius

    @property
    def num_sectors(self) -> int:
        return len(self.sector_sequence)

    @property
    def sector_angle(self) -> float:
        """Sector width in radians."""
        return 2.0 * math.pi / self.num_sectors
