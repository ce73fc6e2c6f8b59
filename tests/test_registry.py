"""
Tests for the in-memory game registry.
"""
import logging
import threading

import pytest

from dartsim.core import Config, NotFoundError, PreconditionError
from dartsim.game import GameRegistry, RealPlayer, SimulatedPlayer, TurnOutcome
from conftest import ScriptedRng


def test_create_and_get():
    registry = GameRegistry()
    game = registry.create_game()

    assert registry.get(game.game_id) is game
    assert game.starting_score == 501
    assert registry.list_games() == [game.game_id]
    assert len(registry) == 1


def test_create_uses_config():
    registry = GameRegistry(Config.from_dict({"game": {"starting_score": 301}}))
    assert registry.create_game().starting_score == 301
    assert registry.create_game(701).starting_score == 701


def test_unknown_game():
    registry = GameRegistry()

    with pytest.raises(NotFoundError):
        registry.get("missing")
    with pytest.raises(NotFoundError):
        registry.play_turn("missing")
    with pytest.raises(NotFoundError):
        registry.remove("missing")


def test_play_turn_starts_game():
    """Playing an empty game reports the empty roster."""
    registry = GameRegistry()
    game = registry.create_game()

    with pytest.raises(PreconditionError):
        registry.play_turn(game.game_id)

    registry.add_player(game.game_id, SimulatedPlayer(name="Bot"))
    result = registry.play_turn(game.game_id)
    assert result.player_name == "Bot"


def test_real_and_simulated_turns():
    registry = GameRegistry()
    game = registry.create_game(180, rng=ScriptedRng())
    registry.add_player(game.game_id, RealPlayer(name="Human"))
    registry.add_player(game.game_id, SimulatedPlayer(name="Bot"))

    assert registry.play_turn(game.game_id) is None

    result = registry.submit_score(game.game_id, [60, 60, 1])
    assert result.outcome == TurnOutcome.SCORING
    assert result.remaining_score == 59

    # 180 -> T20, 120 -> T20, 60 -> S20, every dart lands true
    result = registry.play_turn(game.game_id)
    assert result.player_name == "Bot"
    assert result.scores == (60, 60, 20)
    assert result.remaining_score == 40

    state = registry.get_state(game.game_id)
    assert state.turn == 2
    assert [p.remaining for p in state.players] == [59, 40]
    assert state.current_player.name == "Human"

    result = registry.submit_score(game.game_id, [59])
    assert result.outcome == TurnOutcome.WIN
    assert registry.get_state(game.game_id).winner == "Human"


def test_remove():
    registry = GameRegistry()
    game = registry.create_game()
    registry.remove(game.game_id)

    assert len(registry) == 0
    with pytest.raises(NotFoundError):
        registry.get_state(game.game_id)


def test_concurrent_turns_are_serialised():
    """Parallel callers on one game never interleave a turn."""
    registry = GameRegistry(Config.from_dict({"simulator": {"seed": 3}}))
    game = registry.create_game(100001)
    for name in ("A", "B", "C"):
        registry.add_player(game.game_id, SimulatedPlayer(name=name, three_da=80.0))

    def worker():
        for _ in range(20):
            registry.play_turn(game.game_id)

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    state = registry.get_state(game.game_id)
    assert state.turn == 80
    assert sum(p.turns for p in state.players) == 80
    assert state.current_player_index == 80 % 3


def test_game_start_logged_once(caplog):
    """Repeated turns through the registry announce the game start only once."""
    registry = GameRegistry(Config.from_dict({"simulator": {"seed": 5}}))
    game = registry.create_game()
    registry.add_player(game.game_id, SimulatedPlayer(name="Bot"))

    with caplog.at_level(logging.DEBUG, logger="dartsim.game.game_state"):
        for _ in range(4):
            registry.play_turn(game.game_id)

    started = [r for r in caplog.records
               if r.levelno == logging.INFO and r.getMessage().startswith("Game started")]
    assert len(started) == 1
