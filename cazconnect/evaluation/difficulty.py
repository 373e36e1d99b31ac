"""
Difficulty Tiers

Maps each named difficulty to the agent that plays it.
"""

import logging
import random
from enum import StrEnum
from typing import Any, Sequence

from ..data import GameMemory, GameState, Move, MemoryStore, MoveHistoryItem
from .agents import Agent, EasyAgent, LearningAgent, MinimaxAgent

logger = logging.getLogger(__name__)


class Difficulty(StrEnum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    EXPERT = "expert"
    LEARNING = "learning"


# Maps difficulty to engine settings
DIFFICULTY_CONFIGS: dict[Difficulty, dict[str, Any]] = {
    Difficulty.EASY: {"engine": "easy"},
    Difficulty.MEDIUM: {"engine": "minimax", "depth": 2, "evaluator": "tactical"},
    Difficulty.HARD: {"engine": "minimax", "depth": 3, "evaluator": "strategic"},
    Difficulty.EXPERT: {
        "engine": "minimax",
        "depth": 3,
        "late_depth": 4,
        "late_after": 20,
        "evaluator": "strategic",
    },
    Difficulty.LEARNING: {"engine": "learning", "depth": 4},
}


def create_agent(
    difficulty: Difficulty | str,
    memory: MemoryStore | GameMemory | None = None,
    rng: random.Random | None = None,
) -> Agent:
    """
    Builds the agent for a difficulty tier.

    Args:
        difficulty: Tier, or its string value
        memory: Memory read by the learning tier
        rng: Random source for tiers that play random moves

    Raises:
        ValueError: For an unknown difficulty.
    """
    difficulty = Difficulty(difficulty)
    config = DIFFICULTY_CONFIGS[difficulty]
    engine = config["engine"]

    if engine == "easy":
        return EasyAgent(rng=rng)
    if engine == "minimax":
        return MinimaxAgent(
            depth=config["depth"],
            evaluator=config["evaluator"],
            late_depth=config.get("late_depth"),
            late_after=config.get("late_after", 20),
            name_override=difficulty.value,
        )
    if engine == "learning":
        return LearningAgent(memory=memory, depth=config["depth"], rng=rng)

    raise ValueError(f"Unknown engine type: {engine}")


def choose_computer_move(
    state: GameState,
    difficulty: Difficulty | str,
    history: Sequence[MoveHistoryItem] = (),
    memory: MemoryStore | GameMemory | None = None,
    rng: random.Random | None = None,
) -> Move | None:
    """
    Picks the computer's move for the side to move.

    Returns:
        A legal move, or None when no legal move exists (the game is drawn).
    """
    agent = create_agent(difficulty, memory=memory, rng=rng)
    move = agent.get_move(state, history)
    logger.debug(f"{agent.name} chose {move} after {state.moves_made} moves")
    return move
