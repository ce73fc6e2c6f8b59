"""
Exception hierarchy shared by all dartsim modules.

Busted turns are normal game outcomes and never raise.
"""


class DartsimError(Exception):
    """Base class for all dartsim errors."""


class PreconditionError(DartsimError, RuntimeError):
    """A caller broke an invariant the game relies on (state-management bug)."""


class GameOverError(PreconditionError):
    """A turn was requested after the leg was already won."""


class NotFoundError(DartsimError, KeyError):
    """Unknown game or player identifier."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable
        return str(self.args[0]) if self.args else ""


class MalformedInputError(DartsimError, ValueError):
    """Input rejected at the boundary before it reaches the game core."""
