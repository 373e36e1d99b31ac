"""
Agent Implementations

Computer players for Caz Connect:
- RandomAgent: Uniform random move selection
- EasyAgent: Takes immediate wins, blocks immediate losses, otherwise random
- MinimaxAgent: Alpha-beta search with a heuristic evaluator
- LearningAgent: Tactical checks, then search that avoids remembered losing continuations
"""

import logging
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence

from ..data import (
    AI_PLAYER,
    Board,
    GameState,
    HistoryKey,
    Move,
    MoveHistoryItem,
    Player,
    copy_board,
    detect_win,
    other_player,
)
from ..data.memory import GameMemory, MemoryStore
from .heuristics import EvaluatorName, get_evaluator, score_strategic
from .search import minimax_search

logger = logging.getLogger(__name__)

LEARNING_DEPTH = 4


@dataclass
class AgentInfo:
    """Information about an agent."""

    name: str
    description: str


class Agent(ABC):
    """
    Abstract base class for computer players.

    All agents implement get_move(), which returns a legal Move for the side to
    move, or None when there are no legal moves.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Returns the agent's name."""
        pass

    @property
    @abstractmethod
    def info(self) -> AgentInfo:
        """Returns information about the agent."""
        pass

    @abstractmethod
    def get_move(self, state: GameState, history: Sequence[MoveHistoryItem] = ()) -> Move | None:
        """
        Select a move for the given position.

        Args:
            state: Current game state; state.mover is the side to play
            history: Moves played so far, in order

        Returns:
            A legal Move, or None if no legal move exists
        """
        pass

    def reset(self) -> None:
        """Reset any internal state. Called before each game."""
        pass


def find_winning_move(board: Board, moves: Sequence[Move], player: Player) -> Move | None:
    """First move that completes four in a row for `player`."""
    for move in moves:
        board[move.row][move.col] = player
        won = detect_win(board, player) is not None
        board[move.row][move.col] = None
        if won:
            return move
    return None


def find_blocking_move(board: Board, moves: Sequence[Move], player: Player) -> Move | None:
    """First move on which the opponent of `player` would complete four in a row."""
    return find_winning_move(board, moves, other_player(player))


def remembered_bad_moves(
    player: Player,
    history: Sequence[MoveHistoryItem],
    memory: GameMemory,
) -> set[Move]:
    """
    Moves `player` made from this exact history in games its side went on to lose.

    O's losses are stored under "losses"; X's losses are O's "wins".
    """
    outcome = "losses" if player == AI_PLAYER else "wins"
    prefix = HistoryKey.from_items(history)
    return {
        item.move
        for item in memory.continuations(outcome, prefix)
        if item.player == player
    }


def choose_learning_move(
    player: Player,
    legal_moves: Sequence[Move],
    board: Board,
    history: Sequence[MoveHistoryItem],
    moves_made: int,
    memory: GameMemory,
    depth: int = LEARNING_DEPTH,
    rng: random.Random | None = None,
) -> Move:
    """
    Picks a move for `player` using tactics, memory and search.

    1. Win immediately if possible.
    2. Block the opponent's immediate win.
    3. Drop moves that led to a loss from this exact history before, then
       search the rest with the strategic evaluator.
    4. If memory rules out every move, play a random legal move.
    """
    rng = rng or random
    work = copy_board(board)

    winning_move = find_winning_move(work, legal_moves, player)
    if winning_move is not None:
        return winning_move

    blocking_move = find_blocking_move(work, legal_moves, player)
    if blocking_move is not None:
        return blocking_move

    bad_moves = remembered_bad_moves(player, history, memory)
    safe_moves = [m for m in legal_moves if m not in bad_moves]
    if bad_moves:
        logger.debug(f"Memory rules out {sorted(bad_moves)} for {player}")

    if safe_moves:
        result = minimax_search(
            board=board,
            moves_made=moves_made,
            depth=depth,
            evaluator=score_strategic,
            maximizing=player == AI_PLAYER,
            player=AI_PLAYER,
            moves=safe_moves,
        )
        if result.move is not None:
            return result.move

    return rng.choice(list(legal_moves))


class RandomAgent(Agent):
    """Agent that plays uniformly random legal moves."""

    def __init__(self, rng: random.Random | None = None):
        self._rng = rng or random

    @property
    def name(self) -> str:
        return "random"

    @property
    def info(self) -> AgentInfo:
        return AgentInfo(name="Random", description="Plays uniformly random legal moves")

    def get_move(self, state: GameState, history: Sequence[MoveHistoryItem] = ()) -> Move | None:
        legal_moves = state.legal_moves()
        if not legal_moves:
            return None
        return self._rng.choice(legal_moves)


class EasyAgent(Agent):
    """Takes an immediate win, blocks an immediate loss, otherwise plays randomly."""

    def __init__(self, rng: random.Random | None = None):
        self._rng = rng or random

    @property
    def name(self) -> str:
        return "easy"

    @property
    def info(self) -> AgentInfo:
        return AgentInfo(name="Easy", description="Win or block if possible, else random")

    def get_move(self, state: GameState, history: Sequence[MoveHistoryItem] = ()) -> Move | None:
        legal_moves = state.legal_moves()
        if not legal_moves:
            return None

        work = copy_board(state.board)
        move = find_winning_move(work, legal_moves, state.mover)
        if move is None:
            move = find_blocking_move(work, legal_moves, state.mover)
        if move is None:
            move = self._rng.choice(legal_moves)
        return move


class MinimaxAgent(Agent):
    """
    Minimax agent with alpha-beta pruning.

    The search depth can step up once the game is long enough
    (`late_depth` after more than `late_after` moves).
    """

    def __init__(
        self,
        depth: int,
        evaluator: EvaluatorName = "tactical",
        late_depth: int | None = None,
        late_after: int = 20,
        name_override: str | None = None,
    ):
        """
        Initialize minimax agent.

        Args:
            depth: Search depth (plies)
            evaluator: "tactical" or "strategic"
            late_depth: Depth used once more than `late_after` moves were made
            late_after: Move count threshold for late_depth
            name_override: Optional custom name
        """
        self._depth = depth
        self._evaluator_name = evaluator
        self._evaluator = get_evaluator(evaluator)
        self._late_depth = late_depth
        self._late_after = late_after
        self._name_override = name_override

    @property
    def name(self) -> str:
        if self._name_override:
            return self._name_override
        return f"minimax-d{self._depth}-{self._evaluator_name}"

    @property
    def info(self) -> AgentInfo:
        description = f"Minimax with depth={self._depth}, evaluator={self._evaluator_name}"
        if self._late_depth is not None:
            description += f", depth={self._late_depth} after move {self._late_after}"
        return AgentInfo(name=self.name, description=description)

    def depth_for(self, moves_made: int) -> int:
        if self._late_depth is not None and moves_made > self._late_after:
            return self._late_depth
        return self._depth

    def get_move(self, state: GameState, history: Sequence[MoveHistoryItem] = ()) -> Move | None:
        legal_moves = state.legal_moves()
        if not legal_moves:
            return None

        result = minimax_search(
            board=state.board,
            moves_made=state.moves_made,
            depth=self.depth_for(state.moves_made),
            evaluator=self._evaluator,
            maximizing=True,
            player=state.mover,
            moves=legal_moves,
        )

        return result.move if result.move is not None else legal_moves[0]


class LearningAgent(Agent):
    """
    Agent that learns from recorded games.

    Reads a consistent snapshot of the memory on every decision.
    """

    def __init__(
        self,
        memory: MemoryStore | GameMemory | None = None,
        depth: int = LEARNING_DEPTH,
        rng: random.Random | None = None,
    ):
        self._memory = memory if memory is not None else GameMemory()
        self._depth = depth
        self._rng = rng or random

    @property
    def name(self) -> str:
        return f"learning-d{self._depth}"

    @property
    def info(self) -> AgentInfo:
        return AgentInfo(
            name=self.name,
            description=f"Tactics, memory of past losses and minimax with depth={self._depth}",
        )

    def _snapshot(self) -> GameMemory:
        if isinstance(self._memory, MemoryStore):
            return self._memory.snapshot()
        return self._memory

    def get_move(self, state: GameState, history: Sequence[MoveHistoryItem] = ()) -> Move | None:
        legal_moves = state.legal_moves()
        if not legal_moves:
            return None

        return choose_learning_move(
            player=state.mover,
            legal_moves=legal_moves,
            board=state.board,
            history=history,
            moves_made=state.moves_made,
            memory=self._snapshot(),
            depth=self._depth,
            rng=self._rng,
        )
