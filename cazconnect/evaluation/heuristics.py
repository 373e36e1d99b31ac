"""
Position Evaluation

Heuristic scores used at the leaves of the minimax search. Both evaluators are
pure functions of (board, player) and are symmetric: what is good for the
player counts up, what is good for the opponent counts down.
"""

from typing import Callable, Literal, TypeAlias

from ..data import BOARD_SIZE, WIN_LENGTH, Board, Player, other_player
from ..data.game import WIN_DIRECTIONS

Evaluator: TypeAlias = Callable[[Board, Player], int]
EvaluatorName: TypeAlias = Literal["tactical", "strategic"]

EVAL_WEIGHTS = {
    "WIN": 100000,
    "THREE_IN_ROW": 100,
    "TWO_IN_ROW": 10,
    "BLOCK_THREE": -5000,
    "BLOCK_TWO": -50,
}

# Center-weighted, symmetric under both mirrors
POSITIONAL_VALUE_MAP: list[list[int]] = [
    [3, 4, 5, 7, 7, 5, 4, 3],
    [4, 6, 8, 10, 10, 8, 6, 4],
    [5, 8, 11, 13, 13, 11, 8, 5],
    [7, 10, 13, 16, 16, 13, 10, 7],
    [7, 10, 13, 16, 16, 13, 10, 7],
    [5, 8, 11, 13, 13, 11, 8, 5],
    [4, 6, 8, 10, 10, 8, 6, 4],
    [3, 4, 5, 7, 7, 5, 4, 3],
]


def _build_windows() -> tuple[tuple[tuple[int, int], ...], ...]:
    windows = []
    for row in range(BOARD_SIZE):
        for col in range(BOARD_SIZE):
            for dr, dc in WIN_DIRECTIONS:
                end_r = row + (WIN_LENGTH - 1) * dr
                end_c = col + (WIN_LENGTH - 1) * dc
                if 0 <= end_r < BOARD_SIZE and 0 <= end_c < BOARD_SIZE:
                    windows.append(
                        tuple((row + i * dr, col + i * dc) for i in range(WIN_LENGTH))
                    )
    return tuple(windows)


# Every 4-cell window on the board, in row-major origin order
WINDOWS = _build_windows()


def evaluate_window(window: list, player: Player) -> int:
    """Scores a single window of 4 cells for `player`."""
    opponent = other_player(player)
    player_count = sum(1 for c in window if c == player)
    opponent_count = sum(1 for c in window if c == opponent)
    empty_count = sum(1 for c in window if c is None)

    score = 0

    # Offense
    if player_count == 4:
        score += EVAL_WEIGHTS["WIN"]
    elif player_count == 3 and empty_count == 1:
        score += EVAL_WEIGHTS["THREE_IN_ROW"]
    elif player_count == 2 and empty_count == 2:
        score += EVAL_WEIGHTS["TWO_IN_ROW"]

    # Defense weighs heavier than offense
    if opponent_count == 3 and empty_count == 1:
        score += EVAL_WEIGHTS["BLOCK_THREE"]
    elif opponent_count == 2 and empty_count == 2:
        score += EVAL_WEIGHTS["BLOCK_TWO"]

    return score


def score_tactical(board: Board, player: Player) -> int:
    """Sum of window scores over every window on the board."""
    score = 0
    for window in WINDOWS:
        score += evaluate_window([board[r][c] for r, c in window], player)
    return score


def score_positional(board: Board, player: Player) -> int:
    """Positional weights of the player's cells minus the opponent's."""
    score = 0
    for r in range(BOARD_SIZE):
        for c in range(BOARD_SIZE):
            cell = board[r][c]
            if cell == player:
                score += POSITIONAL_VALUE_MAP[r][c]
            elif cell is not None:
                score -= POSITIONAL_VALUE_MAP[r][c]
    return score


def score_strategic(board: Board, player: Player) -> int:
    """Tactical score plus center-weighted positional control."""
    return score_tactical(board, player) + score_positional(board, player)


EVALUATORS: dict[str, Evaluator] = {
    "tactical": score_tactical,
    "strategic": score_strategic,
}


def get_evaluator(name: EvaluatorName) -> Evaluator:
    """
    Looks up an evaluator by name.

    Raises:
        ValueError: For an unknown evaluator name.
    """
    try:
        return EVALUATORS[name]
    except KeyError:
        raise ValueError(f"Unknown evaluator: {name!r} (expected one of {sorted(EVALUATORS)})") from None
