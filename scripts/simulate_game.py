"""
Simulated X01 leg runner.

Plays simulated players against each other until someone checks out
or the turn limit is reached, then prints the game summary.

Usage:
    python scripts/simulate_game.py
    python scripts/simulate_game.py --start 401 -p Alice:32 -p Anthony:50
    python scripts/simulate_game.py -p Pro:95:nineteens -p Club:45 --seed 7
"""
import sys
import argparse
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from dartsim.core import Config, DartsimError
from dartsim.game import GameSession, PlayerProfile, TurnOutcome
import logging

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Simulate an X01 darts leg between computer players",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Player format:  NAME[:THREE_DART_AVERAGE[:twenties|nineteens]]

Examples:
  python scripts/simulate_game.py -p Alice:32 -p Anthony:50
  python scripts/simulate_game.py --start 301 -p Pro:100 --seed 42
        """
    )

    parser.add_argument(
        "-s", "--start",
        type=int,
        default=None,
        help="Starting score (default: from config, 501)"
    )

    parser.add_argument(
        "-p", "--player",
        action="append",
        default=None,
        help="Simulated player, repeatable (default: Alice:32 Anthony:50)"
    )

    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducible legs"
    )

    parser.add_argument(
        "--max-turns",
        type=int,
        default=200,
        help="Stop after this many turns (default: 200)"
    )

    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="YAML config file"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log every dart"
    )

    return parser.parse_args(argv)


def parse_player(text: str, default_three_da: float) -> PlayerProfile:
    """Parse NAME[:3DA[:PREFERENCE]] into a simulated player profile."""
    parts = text.split(":")
    three_da = float(parts[1]) if len(parts) > 1 and parts[1] else None
    preference = parts[2] if len(parts) > 2 else None

    return PlayerProfile.create(
        parts[0],
        kind="simulated",
        three_da=three_da,
        scoring_preference=preference,
        default_three_da=default_three_da,
    )


def main(argv=None) -> int:
    args = parse_args(argv)

    if args.debug:
        logging.getLogger("dartsim").setLevel(logging.DEBUG)

    config = Config(Path(args.config) if args.config else None)
    if args.seed is not None:
        config.data["simulator"]["seed"] = args.seed

    default_three_da = config.get("simulator", "default_three_da", 60.0)

    try:
        game = GameSession.from_config(config, starting_score=args.start)
        for spec in args.player or ["Alice:32", "Anthony:50"]:
            game.add_player(parse_player(spec, default_three_da))
        game.start()
    except (DartsimError, ValueError) as e:
        logger.error(f"Cannot set up game: {e}")
        return 1

    for _ in range(args.max_turns):
        result = game.play_turn()

        if result.outcome == TurnOutcome.WIN:
            print(f"{result.player_name} checked out {result.total_score} "
                  f"for the win (3DA: {result.three_da:.2f})!\n")
            break
        elif result.outcome == TurnOutcome.BUST:
            print(f"{result.player_name} busted, stays on {result.remaining_score}")
        else:
            darts = ", ".join(str(d) for d in result.darts)
            print(f"{result.player_name}: {darts} = {result.total_score}, "
                  f"{result.remaining_score} left (3DA: {result.three_da:.2f})")
    else:
        print(f"No winner after {args.max_turns} turns\n")

    print(game.summary())
    return 0


if __name__ == "__main__":
    sys.exit(main())
