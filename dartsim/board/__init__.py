"""
Board module - dartboard geometry and throw simulation.
"""
from .geometry import DartboardMapper
from .simulator import ThrowSimulator, dispersion_for_three_da

__all__ = [
    "DartboardMapper",
    "ThrowSimulator",
    "dispersion_for_three_da",
]
