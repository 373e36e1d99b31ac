#!/usr/bin/env python3
"""
Difficulty Tournament

Plays the difficulty tiers against each other in a round-robin and prints
the standings.

Usage:
    # Quick tournament with the default tiers
    python scripts/tournament.py

    # Specific tiers, more games
    python scripts/tournament.py --tiers easy,medium,hard --games 20

    # Include the learning tier with a trained memory file
    python scripts/tournament.py --tiers medium,learning --memory memory.json

    # Output to JSON
    python scripts/tournament.py --output results/tournament.json
"""

import argparse
import json
import logging
import random
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from cazconnect.data import MemoryStore
from cazconnect.evaluation import DIFFICULTY_CONFIGS, Arena, Difficulty, create_agent

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)

# Expert and learning search deeper and are slow over many games
DEFAULT_TIERS = [Difficulty.EASY, Difficulty.MEDIUM, Difficulty.HARD]


def main():
    parser = argparse.ArgumentParser(
        description="Run round-robin tournaments between difficulty tiers",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--tiers",
        "-t",
        type=str,
        default=None,
        help="Comma-separated list of difficulty tiers",
    )
    parser.add_argument(
        "--list-tiers",
        action="store_true",
        help="List all difficulty tiers and exit",
    )
    parser.add_argument(
        "--games",
        "-g",
        type=int,
        default=10,
        help="Number of games per matchup (default: 10)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducibility",
    )
    parser.add_argument(
        "--memory",
        type=str,
        default=None,
        help="Memory JSON file for the learning tier",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=str,
        default=None,
        help="Output file path (JSON format)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show a progress bar per match",
    )
    args = parser.parse_args()

    if args.list_tiers:
        print("Available tiers:")
        print("-" * 60)
        for tier, config in DIFFICULTY_CONFIGS.items():
            settings = ", ".join(f"{k}={v}" for k, v in config.items())
            print(f"{tier.value:<10} {settings}")
        return 0

    if args.tiers:
        names = [t.strip() for t in args.tiers.split(",")]
        invalid = [n for n in names if n not in {d.value for d in Difficulty}]
        if invalid:
            print(f"Error: Unknown tiers: {', '.join(invalid)}")
            print("Use --list-tiers to see available tiers")
            return 1
        tiers = [Difficulty(n) for n in names]
    else:
        tiers = DEFAULT_TIERS

    if len(tiers) < 2:
        print("Error: Need at least 2 tiers for a tournament")
        return 1

    store = MemoryStore.open(args.memory) if args.memory else MemoryStore()
    rng = random.Random(args.seed)
    agents = {tier.value: create_agent(tier, memory=store, rng=rng) for tier in tiers}

    arena = Arena(agents)
    result = arena.run_tournament(
        num_games_per_match=args.games,
        show_progress=args.verbose,
    )

    print()
    print(f"{'Tier':<10} {'W':>5} {'L':>5} {'D':>5} {'Score':>7}")
    print("-" * 36)
    for tier_id, tally in result.standings():
        print(
            f"{tier_id:<10} {tally.wins:>5} {tally.losses:>5} "
            f"{tally.draws:>5} {tally.score:>7.3f}"
        )
    print(f"\nCompleted in {result.time_seconds:.1f}s")

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        data = {
            "games_per_match": args.games,
            "matches": [
                {
                    "agent1": m.agent1_id,
                    "agent2": m.agent2_id,
                    "agent1_wins": m.agent1_wins,
                    "agent2_wins": m.agent2_wins,
                    "draws": m.draws,
                    "average_moves": m.average_moves,
                }
                for m in result.results
            ],
            "standings": [
                {"tier": tier_id, "score": tally.score} for tier_id, tally in result.standings()
            ],
        }
        with open(output_path, "w") as f:
            json.dump(data, f, indent=2)
        logger.info(f"Results saved to {output_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
