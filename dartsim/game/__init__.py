"""
Game module - checkout chart, players, and the X01 game state machine.
"""
from .checkout import CHECKOUT_TABLE, CheckoutChart
from .player import Player, PlayerProfile, PlayerStats, RealPlayer, SimulatedPlayer
from .game_state import (
    GameSession,
    GameSnapshot,
    PlayerSnapshot,
    SubmitPolicy,
    TurnOutcome,
    TurnResult,
    create_game,
)
from .registry import GameRegistry

__all__ = [
    "CHECKOUT_TABLE",
    "CheckoutChart",
    "Player",
    "PlayerProfile",
    "PlayerStats",
    "RealPlayer",
    "SimulatedPlayer",
    "GameSession",
    "GameSnapshot",
    "PlayerSnapshot",
    "SubmitPolicy",
    "TurnOutcome",
    "TurnResult",
    "create_game",
    "GameRegistry",
]
