"""
Player profiles and per-game statistics.
"""
from dataclasses import dataclass, field
from typing import ClassVar, Optional
import uuid

from dartsim.core import MalformedInputError, PlayerKind, ScoringPreference

DEFAULT_THREE_DA = 60.0


def _new_player_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class PlayerProfile:
    """
    Who a player is, independent of any game.

    Use RealPlayer or SimulatedPlayer; the kind decides whether a turn is
    simulated or waits for submitted scores.
    """
    name: str
    three_da: float = DEFAULT_THREE_DA  # skill rating, only drives simulated throws
    scoring_preference: ScoringPreference = ScoringPreference.TWENTIES
    player_id: str = field(default_factory=_new_player_id)

    kind: ClassVar[PlayerKind]

    def __post_init__(self):
        if not self.name or not str(self.name).strip():
            raise MalformedInputError("Player name must not be empty")
        object.__setattr__(
            self, "scoring_preference", ScoringPreference.parse(self.scoring_preference)
        )

    @staticmethod
    def create(
            name: str,
            kind="simulated",
            three_da: Optional[float] = None,
            scoring_preference=None,
            default_three_da: float = DEFAULT_THREE_DA
    ) -> "PlayerProfile":
        """
        Build a profile from boundary values.

        Args:
            name: Display name
            kind: PlayerKind or "real"/"simulated"
            three_da: Skill rating (None or 0 = default_three_da)
            scoring_preference: ScoringPreference or "twenties"/"nineteens"
            default_three_da: Rating used when none is given

        Raises:
            MalformedInputError: On unknown kind/preference or bad rating
        """
        player_kind = PlayerKind.parse(kind)
        if not three_da:
            three_da = default_three_da
        if three_da < 0:
            raise MalformedInputError(f"Three-dart average must not be negative: {three_da}")

        profile_cls = RealPlayer if player_kind == PlayerKind.REAL else SimulatedPlayer
        return profile_cls(
            name=name,
            three_da=float(three_da),
            scoring_preference=ScoringPreference.parse(scoring_preference),
        )


@dataclass(frozen=True)
class RealPlayer(PlayerProfile):
    """Externally controlled player; turns are submitted as scores."""
    kind: ClassVar[PlayerKind] = PlayerKind.REAL


@dataclass(frozen=True)
class SimulatedPlayer(PlayerProfile):
    """Player whose darts come from the throw simulator."""
    kind: ClassVar[PlayerKind] = PlayerKind.SIMULATED


@dataclass
class PlayerStats:
    """Running state of one player in one game."""
    remaining: int
    points: int = 0  # Total points scored in non-bust turns
    darts: int = 0  # Darts thrown in non-bust turns
    turns: int = 0  # Completed visits, busts included
    highest_turn: int = 0
    busts: int = 0

    @property
    def three_da(self) -> float:
        """Average points per three darts."""
        if self.darts == 0:
            return 0.0
        return self.points / self.darts * 3.0

    def record_turn(self, remaining: int, points: int, darts: int) -> None:
        """Commit a non-bust turn."""
        self.remaining = remaining
        self.points += points
        self.darts += darts
        self.turns += 1
        if points > self.highest_turn:
            self.highest_turn = points

    def record_bust(self) -> None:
        """A bust leaves score and averages untouched."""
        self.turns += 1
        self.busts += 1


@dataclass
class Player:
    """A profile taking part in a game, with its stats."""
    profile: PlayerProfile
    stats: PlayerStats
    dispersion: Optional[float] = None  # mm, simulated players only

    @property
    def name(self) -> str:
        return self.profile.name

    @property
    def player_id(self) -> str:
        return self.profile.player_id

    @property
    def remaining(self) -> int:
        return self.stats.remaining

    def reset(self, starting_score: int) -> None:
        """Reset player to starting state."""
        self.stats = PlayerStats(remaining=starting_score)
