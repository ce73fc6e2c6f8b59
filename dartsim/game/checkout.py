"""
Checkout chart: recommended finishing darts for every finishable score.

The table is plain data in compact target notation (S = single,
D = double, T = treble, SB/DB = single/double bull). 159, 162, 163, 165,
166, 168 and 169 cannot be finished in three darts and have no entry.
"""
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple
import logging

from dartsim.core import (
    MalformedInputError,
    PreconditionError,
    Ring,
    ScoringPreference,
    Target,
)

logger = logging.getLogger(__name__)

MAX_CHECKOUT = 170
MAX_DARTS = 3

CHECKOUT_TABLE: Dict[int, Tuple[str, ...]] = {
    # 2-40
    2: ("D1",),
    3: ("S1", "D1"),
    4: ("D2",),
    5: ("S1", "D2"),
    6: ("D3",),
    7: ("S3", "D2"),
    8: ("D4",),
    9: ("S1", "D4"),
    10: ("D5",),
    11: ("S3", "D4"),
    12: ("D6",),
    13: ("S5", "D4"),
    14: ("D7",),
    15: ("S7", "D4"),
    16: ("D8",),
    17: ("S9", "D4"),
    18: ("D9",),
    19: ("S3", "D8"),
    20: ("D10",),
    21: ("S5", "D8"),
    22: ("D11",),
    23: ("S7", "D8"),
    24: ("D12",),
    25: ("S9", "D8"),
    26: ("D13",),
    27: ("S11", "D8"),
    28: ("D14",),
    29: ("S13", "D8"),
    30: ("D15",),
    31: ("S15", "D8"),
    32: ("D16",),
    33: ("S17", "D8"),
    34: ("D17",),
    35: ("S3", "D16"),
    36: ("D18",),
    37: ("S5", "D16"),
    38: ("D19",),
    39: ("S7", "D16"),
    40: ("D20",),

    # 41-60
    41: ("S9", "D16"),
    42: ("S10", "D16"),
    43: ("S11", "D16"),
    44: ("S12", "D16"),
    45: ("S13", "D16"),
    46: ("S6", "D20"),
    47: ("S7", "D20"),
    48: ("S8", "D20"),
    49: ("S17", "D16"),
    50: ("S18", "D16"),
    51: ("S19", "D16"),
    52: ("S12", "D20"),
    53: ("S13", "D20"),
    54: ("S14", "D20"),
    55: ("S15", "D20"),
    56: ("S16", "D20"),
    57: ("S17", "D20"),
    58: ("S18", "D20"),
    59: ("S19", "D20"),
    60: ("S20", "D20"),

    # 61-100
    61: ("T15", "D8"),
    62: ("T10", "D16"),
    63: ("T13", "D12"),
    64: ("T16", "D8"),
    65: ("T19", "D4"),
    66: ("T10", "D18"),
    67: ("T17", "D8"),
    68: ("T20", "D4"),
    69: ("T15", "D12"),
    70: ("T10", "D20"),
    71: ("T13", "D16"),
    72: ("T16", "D12"),
    73: ("T19", "D8"),
    74: ("T14", "D16"),
    75: ("T17", "D12"),
    76: ("T20", "D8"),
    77: ("T19", "D10"),
    78: ("T18", "D12"),
    79: ("T19", "D11"),
    80: ("T20", "D10"),
    81: ("T19", "D12"),
    82: ("T14", "D20"),
    83: ("T17", "D16"),
    84: ("T20", "D12"),
    85: ("T15", "D20"),
    86: ("T18", "D16"),
    87: ("T17", "D18"),
    88: ("T16", "D20"),
    89: ("T19", "D16"),
    90: ("T20", "D15"),
    91: ("T17", "D20"),
    92: ("T20", "D16"),
    93: ("T19", "D18"),
    94: ("T18", "D20"),
    95: ("T19", "D19"),
    96: ("T20", "D18"),
    97: ("T19", "D20"),
    98: ("T20", "D19"),
    99: ("T19", "S10", "D16"),
    100: ("T20", "D20"),

    # 101-130
    101: ("T20", "S1", "D20"),
    102: ("T20", "S10", "D16"),
    103: ("T20", "S3", "D20"),
    104: ("T18", "S18", "D16"),
    105: ("T19", "S16", "D16"),
    106: ("T20", "S14", "D16"),
    107: ("T19", "S18", "D16"),
    108: ("T20", "S16", "D16"),
    109: ("T19", "S20", "D16"),
    110: ("T20", "S18", "D16"),
    111: ("T20", "S19", "D16"),
    112: ("T20", "S12", "D20"),
    113: ("T20", "S13", "D20"),
    114: ("T20", "S14", "D20"),
    115: ("T20", "S15", "D20"),
    116: ("T20", "S16", "D20"),
    117: ("T20", "S17", "D20"),
    118: ("T20", "S18", "D20"),
    119: ("T19", "T10", "D16"),
    120: ("T20", "S20", "D20"),
    121: ("T17", "T10", "D20"),
    122: ("T18", "T20", "D4"),
    123: ("T19", "T16", "D9"),
    124: ("T20", "T16", "D8"),
    125: ("SB", "T20", "D20"),
    126: ("T19", "T19", "D6"),
    127: ("T20", "T17", "D8"),
    128: ("T18", "T14", "D16"),
    129: ("T19", "T16", "D12"),
    130: ("T20", "T20", "D5"),

    # 131-170
    131: ("T20", "T13", "D16"),
    132: ("T20", "T16", "D12"),
    133: ("T20", "T19", "D8"),
    134: ("T20", "T14", "D16"),
    135: ("T20", "T17", "D12"),
    136: ("T20", "T20", "D8"),
    137: ("T19", "T16", "D16"),
    138: ("T20", "T18", "D12"),
    139: ("T19", "T14", "D20"),
    140: ("T20", "T16", "D16"),
    141: ("T20", "T19", "D12"),
    142: ("T20", "T14", "D20"),
    143: ("T20", "T17", "D16"),
    144: ("T20", "T20", "D12"),
    145: ("T20", "T15", "D20"),
    146: ("T20", "T18", "D16"),
    147: ("T20", "T17", "D18"),
    148: ("T20", "T16", "D20"),
    149: ("T20", "T19", "D16"),
    150: ("T20", "T18", "D18"),
    151: ("T20", "T17", "D20"),
    152: ("T20", "T20", "D16"),
    153: ("T20", "T19", "D18"),
    154: ("T20", "T18", "D20"),
    155: ("T20", "T19", "D19"),
    156: ("T20", "T20", "D18"),
    157: ("T20", "T19", "D20"),
    158: ("T20", "T20", "D19"),
    160: ("T20", "T20", "D20"),
    161: ("T20", "T17", "DB"),
    164: ("T20", "T18", "DB"),
    167: ("T20", "T19", "DB"),
    170: ("T20", "T20", "DB"),
}

# Aim when no checkout is on
SCORING_TARGETS = {
    ScoringPreference.TWENTIES: Target(Ring.TRIPLE, 20),
    ScoringPreference.NINETEENS: Target(Ring.TRIPLE, 19),
}


class CheckoutChart:
    """
    Lookup of recommended finishes by remaining score.

    Immutable after construction. Every entry is checked to finish exactly
    on a double (or the double bull) in at most three darts.
    """

    def __init__(self, table: Optional[Mapping[int, Tuple[str, ...]]] = None):
        """
        Build the chart.

        Args:
            table: score -> target notation sequence (default: CHECKOUT_TABLE)

        Raises:
            MalformedInputError: If an entry does not finish its score
        """
        table = CHECKOUT_TABLE if table is None else table

        outs = {}
        for score, labels in table.items():
            targets = tuple(Target.parse(label) for label in labels)
            self._check_entry(score, targets)
            outs[score] = targets

        self._outs: Mapping[int, Tuple[Target, ...]] = MappingProxyType(outs)
        logger.debug(f"Checkout chart built with {len(self._outs)} entries")

    @staticmethod
    def _check_entry(score: int, targets: Tuple[Target, ...]) -> None:
        if not 1 <= len(targets) <= MAX_DARTS:
            raise MalformedInputError(f"Checkout for {score} must use 1-{MAX_DARTS} darts")
        if sum(t.score for t in targets) != score:
            raise MalformedInputError(
                f"Checkout for {score} scores {sum(t.score for t in targets)}"
            )
        if not targets[-1].is_double:
            raise MalformedInputError(f"Checkout for {score} does not finish on a double")

    def __contains__(self, score: int) -> bool:
        return score in self._outs

    def __len__(self) -> int:
        return len(self._outs)

    def scores(self) -> Tuple[int, ...]:
        """All scores with a recommended finish, ascending."""
        return tuple(sorted(self._outs))

    def lookup(self, score: int) -> Optional[Tuple[Target, ...]]:
        """
        Get the recommended finish for a score.

        Returns:
            Targets in throwing order, or None when no finish is charted
            (above 170 or one of the unfinishable scores)
        """
        return self._outs.get(score)

    def next_target(
            self,
            score: int,
            preference: Optional[ScoringPreference] = None
    ) -> Target:
        """
        Target for the next dart at a remaining score.

        Args:
            score: Remaining score (must be 2 or more)
            preference: Scoring treble when no finish is on (default: twenties)

        Returns:
            First dart of the charted finish, else the preferred treble

        Raises:
            PreconditionError: If score is below 2 (an impossible game state)
        """
        if score < 2:
            logger.error(f"Next target requested for impossible score {score}")
            raise PreconditionError(f"Score {score} is below 2, no checkout possible")

        out = self._outs.get(score)
        if out:
            return out[0]

        return SCORING_TARGETS.get(
            ScoringPreference.parse(preference),
            SCORING_TARGETS[ScoringPreference.TWENTIES]
        )
