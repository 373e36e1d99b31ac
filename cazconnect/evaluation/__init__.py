"""
Computer Players

Heuristic evaluation, minimax search, agents, difficulty tiers and the arena.
"""

from .agents import (
    LEARNING_DEPTH,
    Agent,
    AgentInfo,
    EasyAgent,
    LearningAgent,
    MinimaxAgent,
    RandomAgent,
    choose_learning_move,
    find_blocking_move,
    find_winning_move,
    remembered_bad_moves,
)
from .arena import Arena, MatchResult, Tally, TournamentResult, quick_match
from .difficulty import DIFFICULTY_CONFIGS, Difficulty, choose_computer_move, create_agent
from .heuristics import (
    EVAL_WEIGHTS,
    EVALUATORS,
    POSITIONAL_VALUE_MAP,
    WINDOWS,
    evaluate_window,
    get_evaluator,
    score_positional,
    score_strategic,
    score_tactical,
)
from .search import SearchResult, SearchStats, minimax_search, terminal_score

__all__ = [
    # Heuristics
    "EVAL_WEIGHTS",
    "EVALUATORS",
    "POSITIONAL_VALUE_MAP",
    "WINDOWS",
    "evaluate_window",
    "get_evaluator",
    "score_positional",
    "score_strategic",
    "score_tactical",
    # Search
    "SearchResult",
    "SearchStats",
    "minimax_search",
    "terminal_score",
    # Agents
    "LEARNING_DEPTH",
    "Agent",
    "AgentInfo",
    "EasyAgent",
    "LearningAgent",
    "MinimaxAgent",
    "RandomAgent",
    "choose_learning_move",
    "find_blocking_move",
    "find_winning_move",
    "remembered_bad_moves",
    # Difficulty
    "DIFFICULTY_CONFIGS",
    "Difficulty",
    "choose_computer_move",
    "create_agent",
    # Arena
    "Arena",
    "MatchResult",
    "Tally",
    "TournamentResult",
    "quick_match",
]
