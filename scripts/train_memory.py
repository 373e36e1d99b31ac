#!/usr/bin/env python3
"""
Memory Training Script

Plays the learning policy against itself and records decisive games in a
memory JSON file. Ctrl+C stops early and keeps what was learned so far.

Usage:
    python scripts/train_memory.py --games 200 --memory memory.json
    python scripts/train_memory.py --config configs/simulation.yaml
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from cazconnect.data import MemoryStore
from cazconnect.self_play import SimulationTrainer, TrainerConfig

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(
        description="Grow the learned memory through self-play",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--config", type=str, help="Path to YAML configuration file")
    parser.add_argument("--games", type=int, help="Number of games to simulate")
    parser.add_argument("--depth", type=int, help="Search depth of the learning policy")
    parser.add_argument("--seed", type=int, help="Random seed")
    parser.add_argument("--memory", type=str, help="Memory JSON file to read and update")
    parser.add_argument("--quiet", action="store_true", help="Disable the progress bar")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    config = TrainerConfig.from_yaml(args.config) if args.config else TrainerConfig()

    # Override with command-line arguments
    if args.games is not None:
        config.games = args.games
    if args.depth is not None:
        config.depth = args.depth
    if args.seed is not None:
        config.seed = args.seed
    if args.memory is not None:
        config.memory_path = args.memory
    if args.quiet:
        config.show_progress = False

    if config.memory_path:
        store = MemoryStore.open(config.memory_path)
        logger.info(
            f"Loaded {store.win_count} wins and {store.loss_count} losses from {config.memory_path}"
        )
    else:
        logger.warning("No memory file given; results will not be saved")
        store = MemoryStore()

    trainer = SimulationTrainer(store, config)
    try:
        report = trainer.run()
    except KeyboardInterrupt:
        # The generator's cleanup has already committed the accumulated games
        logger.info("Interrupted")
        report = trainer.report
        if report is None:
            return 1

    logger.info(
        f"Played {report.games_played}/{report.games_requested} games in {report.time_seconds:.1f}s: "
        f"{report.wins_recorded} new wins, {report.losses_recorded} new losses, {report.draws} draws"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
