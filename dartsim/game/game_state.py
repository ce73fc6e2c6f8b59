"""
X01 game state management.

One GameSession is one leg: players take turns in the order they were added,
each simulated turn throws up to three darts at targets chosen by the
checkout chart, and the first player to reach exactly zero on a double wins.
Real players suspend the rotation until their scores are submitted.

A session is not thread-safe; callers sharing one must serialise access
(see GameRegistry).
"""
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple
import logging
import uuid

from dartsim.core import (
    Config,
    GameOverError,
    MalformedInputError,
    NotFoundError,
    PlayerKind,
    PreconditionError,
    ThrowOutcome,
)
from dartsim.board import ThrowSimulator
from .checkout import CheckoutChart
from .player import Player, PlayerProfile, PlayerStats, RealPlayer

logger = logging.getLogger(__name__)

DEFAULT_STARTING_SCORE = 501
MAX_DART_SCORE = 60

# Submitted scores that can only be a double or the double bull
DOUBLE_FINISHES = frozenset(list(range(2, 41, 2)) + [50])


class TurnOutcome(Enum):
    """How a turn ended."""
    SCORING = "scoring"  # three darts thrown, score reduced
    BUST = "bust"  # score reverted to the start of the turn
    WIN = "win"  # leg finished


class SubmitPolicy(Enum):
    """Finishing rule applied to externally submitted turns."""
    ZERO_OR_BELOW = "zero_or_below"  # any score reaching 0 or less wins
    DOUBLE_OUT = "double_out"  # same bust rules as simulated play

    @classmethod
    def parse(cls, value) -> "SubmitPolicy":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise MalformedInputError(f"Unknown submit policy: {value!r}") from None


@dataclass(frozen=True)
class TurnResult:
    """Outcome of one player's turn."""
    outcome: TurnOutcome
    player_name: str
    scores: Tuple[int, ...]  # per dart, in throwing order
    total_score: int  # on a bust, only the darts before the busting one
    remaining_score: int  # committed remaining score after the turn
    three_da: float  # player's running average after the turn
    darts: Tuple[ThrowOutcome, ...] = ()  # simulated turns only

    @property
    def is_bust(self) -> bool:
        return self.outcome == TurnOutcome.BUST

    @property
    def is_win(self) -> bool:
        return self.outcome == TurnOutcome.WIN


@dataclass(frozen=True)
class PlayerSnapshot:
    """Read-only view of one player."""
    player_id: str
    name: str
    kind: PlayerKind
    skill_rating: float
    remaining: int
    points: int
    darts: int
    turns: int
    highest_turn: int
    busts: int
    three_da: float


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view of a whole game for display."""
    game_id: str
    starting_score: int
    turn: int
    current_player_index: int
    players: Tuple[PlayerSnapshot, ...]
    last_result: Optional[TurnResult]
    finished: bool
    winner: Optional[str]

    @property
    def current_player(self) -> Optional[PlayerSnapshot]:
        if not self.players:
            return None
        return self.players[self.current_player_index]


class GameSession:
    """
    One X01 leg.

    Owns its checkout chart, throw simulator and every player's stats.
    """

    def __init__(
            self,
            starting_score: int = DEFAULT_STARTING_SCORE,
            checkout_chart: Optional[CheckoutChart] = None,
            simulator: Optional[ThrowSimulator] = None,
            rng=None,
            max_darts: int = 3,
            submit_policy: SubmitPolicy = SubmitPolicy.ZERO_OR_BELOW
    ):
        """
        Create a game.

        Args:
            starting_score: Score every player starts from (> 1)
            checkout_chart: Finish lookup (default: standard chart)
            simulator: Throw simulator (default: new one using rng)
            rng: Random source for the default simulator
            max_darts: Darts per turn
            submit_policy: Finishing rule for submitted turns

        Raises:
            MalformedInputError: If starting_score or max_darts is invalid
        """
        if isinstance(starting_score, bool) or not isinstance(starting_score, int) \
                or starting_score < 2:
            raise MalformedInputError(f"Starting score must be an integer above 1: {starting_score!r}")
        if max_darts < 1:
            raise MalformedInputError(f"A turn needs at least one dart: {max_darts}")

        self.game_id = str(uuid.uuid4())
        self.starting_score = starting_score
        self.checkout_chart = checkout_chart if checkout_chart is not None else CheckoutChart()
        self.simulator = simulator if simulator is not None else ThrowSimulator(rng=rng)
        self.max_darts = max_darts
        self.submit_policy = SubmitPolicy.parse(submit_policy)

        self.players: List[Player] = []
        self.current_player_idx = 0
        self.turn = 0
        self.finished = False
        self.winner: Optional[Player] = None
        self.last_result: Optional[TurnResult] = None
        self._in_play = False  # roster is fixed once a turn has been taken

        logger.info(f"Game {self.game_id} created: {starting_score} (double out)")

    @classmethod
    def from_config(cls, config: Optional[Config] = None, rng=None,
                    starting_score: Optional[int] = None) -> "GameSession":
        """
        Build a game from configuration.

        Args:
            config: Loaded Config (default: built-in defaults)
            rng: Random source (default: generator seeded from config)
            starting_score: Overrides game.starting_score
        """
        config = config or Config()
        sim = config.get_section("simulator")
        game = config.get_section("game")

        simulator = ThrowSimulator(
            rng=rng,
            seed=sim.get("seed"),
            spread_k=sim.get("spread_k", 1800.0),
            spread_offset=sim.get("spread_offset", 20.0),
            min_dispersion=sim.get("min_dispersion", 5.0),
            max_dispersion=sim.get("max_dispersion", 50.0),
        )
        if starting_score is None:
            starting_score = game.get("starting_score", DEFAULT_STARTING_SCORE)

        return cls(
            starting_score=starting_score,
            simulator=simulator,
            max_darts=game.get("max_darts_per_turn", 3),
            submit_policy=game.get("submitted_win_policy", SubmitPolicy.ZERO_OR_BELOW),
        )

    # ------------------------------------------------------------------
    # Roster
    # ------------------------------------------------------------------

    def add_player(self, profile: PlayerProfile) -> Player:
        """
        Add a player; order of addition is the turn order.

        Raises:
            PreconditionError: If turns have already been played
        """
        if self._in_play:
            raise PreconditionError("Cannot add players once the game is under way")

        dispersion = None
        if profile.kind == PlayerKind.SIMULATED:
            dispersion = self.simulator.dispersion_for(profile.three_da)

        player = Player(
            profile=profile,
            stats=PlayerStats(remaining=self.starting_score),
            dispersion=dispersion,
        )
        self.players.append(player)

        if dispersion is None:
            logger.info(f"Player added: {profile.name} (real)")
        else:
            logger.info(
                f"Player added: {profile.name} (simulated, 3DA {profile.three_da:.1f}, "
                f"spread {dispersion:.1f}mm)"
            )
        return player

    def get_player(self, player_id: str) -> Player:
        """
        Look up a player by id.

        Raises:
            NotFoundError: If no player has that id
        """
        for player in self.players:
            if player.player_id == player_id:
                return player
        raise NotFoundError(f"Player not found: {player_id}")

    def start(self) -> None:
        """
        Check the game can be played.

        Raises:
            PreconditionError: If no players were added
        """
        if not self.players:
            logger.error("Cannot start game: No players")
            raise PreconditionError("Cannot start a game with no players")

        # Callers may check before every turn; only the first is news
        if self._in_play:
            logger.debug(f"Game in play: turn {self.turn}")
        else:
            logger.info(f"Game started: {self.starting_score} with {len(self.players)} players")

    def current_player(self) -> Optional[Player]:
        """Get the player whose turn it is."""
        if not self.players:
            return None
        return self.players[self.current_player_idx]

    def next_player(self) -> None:
        """Advance to next player."""
        if not self.players:
            return

        self.current_player_idx = (self.current_player_idx + 1) % len(self.players)
        logger.debug(f"Next player: {self.current_player().name}")

    # ------------------------------------------------------------------
    # Turns
    # ------------------------------------------------------------------

    def _require_playable(self) -> Player:
        if self.finished:
            raise GameOverError(f"Game already won by {self.winner.name}")
        if not self.players:
            logger.error("Turn requested with no players")
            raise PreconditionError("Cannot play a turn with no players")
        return self.current_player()

    @staticmethod
    def _is_bust(candidate: int, finished_on_double: bool) -> bool:
        return (
            candidate < 0
            or candidate == 1
            or (candidate == 0 and not finished_on_double)
        )

    def play_turn(self) -> Optional[TurnResult]:
        """
        Play the current player's turn.

        Returns:
            TurnResult, or None when the current player is real and the
            game is waiting for submit_score()

        Raises:
            GameOverError: If the leg has been won
            PreconditionError: If there are no players
        """
        player = self._require_playable()

        if isinstance(player.profile, RealPlayer):
            logger.info(f"Awaiting score submission for {player.name}")
            return None

        self._in_play = True
        logger.info(
            f"{player.name} to throw: {player.remaining} remaining, "
            f"3DA {player.stats.three_da:.2f}"
        )

        remaining = player.remaining
        turn_score = 0
        darts: List[ThrowOutcome] = []

        for dart in range(self.max_darts):
            target = self.checkout_chart.next_target(
                remaining, player.profile.scoring_preference
            )
            outcome = self.simulator.throw(target, player.dispersion)
            darts.append(outcome)

            logger.debug(f"  Dart {dart + 1} (target {target}): {outcome}")

            scores = [d.score for d in darts]
            candidate = remaining - outcome.score
            if self._is_bust(candidate, outcome.is_double):
                return self._bust(player, scores, turn_score, darts)

            remaining = candidate
            turn_score += outcome.score

            if remaining == 0:
                return self._win(player, scores, turn_score, darts)

        player.stats.record_turn(remaining, turn_score, len(darts))
        result = self._result(TurnOutcome.SCORING, player, [d.score for d in darts],
                              turn_score, darts)
        self._end_turn(result)
        return result

    def submit_score(self, scores: Sequence[int]) -> TurnResult:
        """
        Apply externally reported scores for the current (real) player.

        Bypasses the checkout chart and simulator. Under
        SubmitPolicy.ZERO_OR_BELOW the turn wins as soon as the score
        reaches zero or below; under SubmitPolicy.DOUBLE_OUT it follows the
        simulated bust rules, counting a finishing score as a double when
        it is an even number up to 40 or 50.

        Args:
            scores: 1 to max_darts dart scores, each 0-60

        Raises:
            MalformedInputError: On a bad score list
            GameOverError: If the leg has been won
            PreconditionError: If the current player is simulated
        """
        scores = self._validate_scores(scores)
        player = self._require_playable()

        if not isinstance(player.profile, RealPlayer):
            logger.error(f"Score submitted for simulated player {player.name}")
            raise PreconditionError(f"{player.name} is simulated; use play_turn()")

        self._in_play = True
        remaining = player.remaining
        applied: List[int] = []

        for score in scores:
            applied.append(score)
            candidate = remaining - score

            if self.submit_policy == SubmitPolicy.DOUBLE_OUT:
                if self._is_bust(candidate, score in DOUBLE_FINISHES):
                    return self._bust(player, applied, sum(applied[:-1]))
            elif candidate <= 0:
                # Overshoot still finishes the leg under the relaxed rule
                return self._win(player, applied, sum(applied))

            remaining = candidate
            if remaining == 0:
                return self._win(player, applied, sum(applied))

        player.stats.record_turn(remaining, sum(applied), len(applied))
        result = self._result(TurnOutcome.SCORING, player, applied, sum(applied))
        self._end_turn(result)
        return result

    def _validate_scores(self, scores: Sequence[int]) -> Tuple[int, ...]:
        scores = tuple(scores)
        if not 1 <= len(scores) <= self.max_darts:
            raise MalformedInputError(f"Submit between 1 and {self.max_darts} scores, got {len(scores)}")
        for score in scores:
            if isinstance(score, bool) or not isinstance(score, int):
                raise MalformedInputError(f"Dart score must be an integer: {score!r}")
            if not 0 <= score <= MAX_DART_SCORE:
                raise MalformedInputError(f"Dart score out of range: {score}")
        return scores

    @staticmethod
    def _result(outcome: TurnOutcome, player: Player, scores: Sequence[int], total: int,
                darts: Sequence[ThrowOutcome] = ()) -> TurnResult:
        return TurnResult(
            outcome=outcome,
            player_name=player.name,
            scores=tuple(scores),
            total_score=total,
            remaining_score=player.remaining,
            three_da=player.stats.three_da,
            darts=tuple(darts),
        )

    def _bust(self, player: Player, scores: Sequence[int], counted: int,
              darts: Sequence[ThrowOutcome] = ()) -> TurnResult:
        player.stats.record_bust()
        result = self._result(TurnOutcome.BUST, player, scores, counted, darts)
        logger.info(f"{player.name} BUST! Score stays at {player.remaining}")
        self._end_turn(result)
        return result

    def _win(self, player: Player, scores: Sequence[int], turn_score: int,
             darts: Sequence[ThrowOutcome] = ()) -> TurnResult:
        player.stats.record_turn(0, turn_score, len(scores))
        self.finished = True
        self.winner = player
        result = self._result(TurnOutcome.WIN, player, scores, turn_score, darts)
        self.last_result = result
        logger.info(
            f"Game finished! Winner: {player.name} "
            f"({turn_score} checkout, 3DA {player.stats.three_da:.2f})"
        )
        return result

    def _end_turn(self, result: TurnResult) -> None:
        self.last_result = result
        if result.outcome == TurnOutcome.SCORING:
            logger.info(
                f"{result.player_name} scored {result.total_score}, "
                f"{result.remaining_score} remaining (3DA {result.three_da:.2f})"
            )
        self.turn += 1
        self.next_player()

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def get_state(self) -> GameSnapshot:
        """Read-only projection of the whole game."""
        players = tuple(
            PlayerSnapshot(
                player_id=p.player_id,
                name=p.name,
                kind=p.profile.kind,
                skill_rating=p.profile.three_da,
                remaining=p.stats.remaining,
                points=p.stats.points,
                darts=p.stats.darts,
                turns=p.stats.turns,
                highest_turn=p.stats.highest_turn,
                busts=p.stats.busts,
                three_da=p.stats.three_da,
            )
            for p in self.players
        )
        return GameSnapshot(
            game_id=self.game_id,
            starting_score=self.starting_score,
            turn=self.turn,
            current_player_index=self.current_player_idx,
            players=players,
            last_result=self.last_result,
            finished=self.finished,
            winner=self.winner.name if self.winner else None,
        )

    def summary(self) -> str:
        """Multi-line text summary of every player."""
        lines = ["Game Summary:"]
        for p in self.players:
            lines.append(
                f"{p.name}:\n\tRemaining: {p.stats.remaining}, Total Points: {p.stats.points}, "
                f"Darts: {p.stats.darts}, Busts: {p.stats.busts}, 3DA: {p.stats.three_da:.2f}"
            )
        if self.winner:
            lines.append(f"Winner: {self.winner.name}")
        return "\n".join(lines)

    def reset(self) -> None:
        """Reset game to initial state, keeping the roster."""
        for player in self.players:
            player.reset(self.starting_score)

        self.current_player_idx = 0
        self.turn = 0
        self.finished = False
        self.winner = None
        self.last_result = None
        self._in_play = False

        logger.info("Game reset")


def create_game(starting_score: Optional[int] = None, rng=None,
                config: Optional[Config] = None) -> GameSession:
    """
    Create a game session (starting score defaults to 501).
    """
    if config is not None:
        return GameSession.from_config(config, rng=rng, starting_score=starting_score)
    return GameSession(
        starting_score=DEFAULT_STARTING_SCORE if starting_score is None else starting_score,
        rng=rng,
    )
