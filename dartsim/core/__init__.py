"""
Core module - shared data types, errors, and configuration.
"""
from .types import (
    BULLSEYE,
    MISS,
    Ring,
    Target,
    ThrowOutcome,
    BoardGeometry,
    ScoringPreference,
    PlayerKind,
)
from .errors import (
    DartsimError,
    PreconditionError,
    GameOverError,
    NotFoundError,
    MalformedInputError,
)
from .io_utils import load_yaml
from .config_loader import Config

__all__ = [
    # Types
    "BULLSEYE",
    "MISS",
    "Ring",
    "Target",
    "ThrowOutcome",
    "BoardGeometry",
    "ScoringPreference",
    "PlayerKind",
    # Errors
    "DartsimError",
    "PreconditionError",
    "GameOverError",
    "NotFoundError",
    "MalformedInputError",
    # I/O
    "load_yaml",
    # Config
    "Config",
]
