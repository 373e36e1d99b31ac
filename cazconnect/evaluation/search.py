"""
Minimax Search

Depth-limited minimax with alpha-beta pruning. Scores are always from the
perspective of `player` (the maximizing side); the maximizing node places
`player`, the minimizing node places the opponent.

The search places and removes pieces on a private working copy of the board
instead of cloning a board per node. Move order is the rule engine's
row-major enumeration and the first move reaching the best score is kept.
"""

from dataclasses import dataclass
from typing import NamedTuple, Sequence

from ..data import (
    AI_PLAYER,
    Board,
    Move,
    Player,
    copy_board,
    detect_win,
    get_legal_moves,
    other_player,
)
from .heuristics import EVAL_WEIGHTS, Evaluator

# Per remaining ply, so faster wins and slower losses score higher
DEPTH_BONUS = 100


class SearchResult(NamedTuple):
    """Best score and the move that reaches it (None when no move was searched)."""

    score: float
    move: Move | None


@dataclass
class SearchStats:
    """Counts visited nodes."""

    nodes: int = 0


def terminal_score(depth: int) -> int:
    """Value of a decided position with `depth` plies left."""
    return EVAL_WEIGHTS["WIN"] + depth * DEPTH_BONUS


def minimax_search(
    board: Board,
    moves_made: int,
    depth: int,
    evaluator: Evaluator,
    maximizing: bool = True,
    player: Player = AI_PLAYER,
    moves: Sequence[Move] | None = None,
    prune: bool = True,
    stats: SearchStats | None = None,
) -> SearchResult:
    """
    Minimax search with alpha-beta pruning.

    Args:
        board: Position to search (not modified)
        moves_made: Number of pieces on the board
        depth: Search depth (plies)
        evaluator: Leaf evaluation, called as evaluator(board, player)
        maximizing: True if `player` is to move
        player: Side whose score is maximized
        moves: Optional restriction of the root move list
        prune: Disable to run plain minimax (same score, more nodes)
        stats: Optional node counter

    Returns:
        SearchResult with the best score and move. The move is None when the
        root is terminal or has no legal moves.
    """
    return _search(
        copy_board(board),
        moves_made,
        depth,
        float("-inf"),
        float("inf"),
        maximizing,
        player,
        other_player(player),
        evaluator,
        [Move(*m) for m in moves] if moves is not None else None,
        prune,
        stats,
    )


def _search(
    board: Board,
    moves_made: int,
    depth: int,
    alpha: float,
    beta: float,
    maximizing: bool,
    player: Player,
    opponent: Player,
    evaluator: Evaluator,
    root_moves: list[Move] | None,
    prune: bool,
    stats: SearchStats | None,
) -> SearchResult:
    if stats is not None:
        stats.nodes += 1

    # Check terminal states
    if detect_win(board, player) is not None:
        return SearchResult(terminal_score(depth), None)
    if detect_win(board, opponent) is not None:
        return SearchResult(-terminal_score(depth), None)

    if depth == 0:
        return SearchResult(evaluator(board, player), None)

    moves = root_moves if root_moves is not None else get_legal_moves(board, moves_made)
    if not moves:
        return SearchResult(evaluator(board, player), None)

    best_move = moves[0]

    if maximizing:
        max_score = float("-inf")

        for move in moves:
            board[move.row][move.col] = player
            score, _ = _search(
                board, moves_made + 1, depth - 1, alpha, beta, False,
                player, opponent, evaluator, None, prune, stats,
            )
            board[move.row][move.col] = None

            if score > max_score:
                max_score = score
                best_move = move

            alpha = max(alpha, score)
            if prune and beta <= alpha:
                break

        return SearchResult(max_score, best_move)
    else:
        min_score = float("inf")

        for move in moves:
            board[move.row][move.col] = opponent
            score, _ = _search(
                board, moves_made + 1, depth - 1, alpha, beta, True,
                player, opponent, evaluator, None, prune, stats,
            )
            board[move.row][move.col] = None

            if score < min_score:
                min_score = score
                best_move = move

            beta = min(beta, score)
            if prune and beta <= alpha:
                break

        return SearchResult(min_score, best_move)
