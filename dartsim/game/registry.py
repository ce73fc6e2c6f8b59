"""
In-memory registry of concurrent games.

Every session gets its own lock; mutating calls for the same game are
serialised while different games proceed independently. Nothing outlives
the process.
"""
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional, Sequence
import threading
import logging

from dartsim.core import Config, NotFoundError
from .game_state import GameSession, GameSnapshot, TurnResult, create_game
from .player import Player, PlayerProfile

logger = logging.getLogger(__name__)


class GameRegistry:
    """Owns game sessions keyed by game id."""

    def __init__(self, config: Optional[Config] = None):
        """
        Args:
            config: Settings applied to every new game (default: built-ins)
        """
        self.config = config
        self._games: Dict[str, GameSession] = {}
        self._locks: Dict[str, threading.RLock] = {}
        self._lock = threading.Lock()

    def create_game(self, starting_score: Optional[int] = None, rng=None) -> GameSession:
        """Create and register a new game (starting score defaults to 501)."""
        game = create_game(starting_score, rng=rng, config=self.config)

        with self._lock:
            self._games[game.game_id] = game
            self._locks[game.game_id] = threading.RLock()

        return game

    def get(self, game_id: str) -> GameSession:
        """
        Raises:
            NotFoundError: If the game id is unknown
        """
        with self._lock:
            game = self._games.get(game_id)
        if game is None:
            raise NotFoundError(f"Game not found: {game_id}")
        return game

    @contextmanager
    def locked(self, game_id: str) -> Iterator[GameSession]:
        """Hold a game's lock for the duration of the block."""
        with self._lock:
            game = self._games.get(game_id)
            lock = self._locks.get(game_id)
        if game is None:
            raise NotFoundError(f"Game not found: {game_id}")

        with lock:
            yield game

    def add_player(self, game_id: str, profile: PlayerProfile) -> Player:
        with self.locked(game_id) as game:
            return game.add_player(profile)

    def play_turn(self, game_id: str) -> Optional[TurnResult]:
        """Start the game if needed and play the current player's turn."""
        with self.locked(game_id) as game:
            game.start()
            return game.play_turn()

    def submit_score(self, game_id: str, scores: Sequence[int]) -> TurnResult:
        """Start the game if needed and apply a real player's scores."""
        with self.locked(game_id) as game:
            game.start()
            return game.submit_score(scores)

    def get_state(self, game_id: str) -> GameSnapshot:
        with self.locked(game_id) as game:
            return game.get_state()

    def remove(self, game_id: str) -> None:
        """
        Drop a game.

        Raises:
            NotFoundError: If the game id is unknown
        """
        with self._lock:
            if game_id not in self._games:
                raise NotFoundError(f"Game not found: {game_id}")
            del self._games[game_id]
            del self._locks[game_id]
        logger.info(f"Game {game_id} removed")

    def list_games(self) -> List[str]:
        with self._lock:
            return list(self._games)

    def __len__(self) -> int:
        with self._lock:
            return len(self._games)
