"""
dartsim - X01 darts scoring and throw simulation.

Subpackages:
    core:  shared types, errors and configuration
    board: dartboard geometry and the stochastic throw simulator
    game:  checkout chart, players and the turn/game state machine
"""
__version__ = "0.1.0"
