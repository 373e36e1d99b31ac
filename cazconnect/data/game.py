"""
Caz Connect Game Logic

Pure Python implementation of the rules: wall/chain placement legality,
win detection with maximal lines, and immutable game-state transitions.
"""

import logging
from dataclasses import dataclass
from typing import TypeAlias

from .encoding import (
    BOARD_SIZE,
    PLAYER_X,
    WIN_LENGTH,
    Board,
    Move,
    Player,
    copy_board,
    count_pieces,
    create_empty_board,
    in_bounds,
    is_on_wall,
    other_player,
    board_to_string,
)
from .history import HistoryKey, MoveHistoryItem

logger = logging.getLogger(__name__)

Line: TypeAlias = tuple[Move, ...]

# Up, down, left, right. Chains back to a wall are only followed orthogonally.
CHAIN_DIRECTIONS = ((-1, 0), (1, 0), (0, -1), (0, 1))

# Horizontal, vertical, diagonal down-right, diagonal down-left
WIN_DIRECTIONS = ((0, 1), (1, 0), (1, 1), (1, -1))


def _chains_to_wall(board: Board, row: int, col: int, dr: int, dc: int) -> bool:
    """True if every cell from the neighbour to the edge is occupied, and there is a neighbour."""
    r, c = row + dr, col + dc
    has_piece = False
    while in_bounds(r, c):
        if board[r][c] is None:
            return False
        has_piece = True
        r += dr
        c += dc
    return has_piece


def is_legal_move(board: Board, move: tuple[int, int], moves_made: int) -> bool:
    """
    Checks whether a piece may be placed on `move`.

    The first move of a game must touch a wall. Later moves must either touch
    a wall or connect to one through an unbroken orthogonal run of pieces.
    """
    row, col = move
    if not in_bounds(row, col) or board[row][col] is not None:
        return False
    if moves_made == 0:
        return is_on_wall(row, col)
    if is_on_wall(row, col):
        return True
    return any(_chains_to_wall(board, row, col, dr, dc) for dr, dc in CHAIN_DIRECTIONS)


def get_legal_moves(board: Board, moves_made: int) -> list[Move]:
    """Returns every legal target in row-major order."""
    return [
        Move(row, col)
        for row in range(BOARD_SIZE)
        for col in range(BOARD_SIZE)
        if is_legal_move(board, (row, col), moves_made)
    ]


def detect_win(board: Board, player: Player) -> Line | None:
    """
    Finds the first four-in-a-row for `player` in row-major scan order.

    The returned line is extended in both directions along the same vector for
    as long as the cells belong to `player`, so it can be longer than four.
    """
    for row in range(BOARD_SIZE):
        for col in range(BOARD_SIZE):
            if board[row][col] != player:
                continue

            for dr, dc in WIN_DIRECTIONS:
                line = [Move(row, col)]
                for i in range(1, WIN_LENGTH):
                    r, c = row + i * dr, col + i * dc
                    if in_bounds(r, c) and board[r][c] == player:
                        line.append(Move(r, c))
                    else:
                        break

                if len(line) < WIN_LENGTH:
                    continue

                # Extend backwards from the start
                r, c = row - dr, col - dc
                while in_bounds(r, c) and board[r][c] == player:
                    line.insert(0, Move(r, c))
                    r -= dr
                    c -= dc

                # Extend forwards past the initial four
                r, c = line[-1].row + dr, line[-1].col + dc
                while in_bounds(r, c) and board[r][c] == player:
                    line.append(Move(r, c))
                    r += dr
                    c += dc

                return tuple(line)

    return None


def place_piece(board: Board, move: tuple[int, int], player: Player) -> Board:
    """
    Places a piece and returns a new board (does not modify original).

    Raises:
        ValueError: If the cell is already occupied.
    """
    row, col = move
    if board[row][col] is not None:
        raise ValueError(f"Cell ({row}, {col}) is occupied")
    new_board = copy_board(board)
    new_board[row][col] = player
    return new_board


@dataclass(frozen=True)
class GameState:
    """
    Board, side to move and number of moves made.

    States are values: every transition returns a new GameState and the board
    held by a state is never mutated.
    """

    board: Board
    mover: Player = PLAYER_X
    moves_made: int = 0

    def __post_init__(self) -> None:
        pieces = count_pieces(self.board)
        if pieces != self.moves_made:
            raise ValueError(
                f"moves_made={self.moves_made} does not match {pieces} pieces on the board"
            )

    @classmethod
    def initial(cls, starter: Player = PLAYER_X) -> "GameState":
        return cls(board=create_empty_board(), mover=starter, moves_made=0)

    def legal_moves(self) -> list[Move]:
        return get_legal_moves(self.board, self.moves_made)

    def is_legal(self, move: tuple[int, int]) -> bool:
        return is_legal_move(self.board, move, self.moves_made)

    def apply(self, move: tuple[int, int]) -> "GameState | None":
        """Returns the successor state, or None if the move is refused."""
        if not self.is_legal(move):
            logger.debug(f"Refused move {tuple(move)} for {self.mover} after {self.moves_made} moves")
            return None
        return GameState(
            board=place_piece(self.board, move, self.mover),
            mover=other_player(self.mover),
            moves_made=self.moves_made + 1,
        )


def legal_moves(state: GameState) -> list[Move]:
    """Legal moves for the side to move."""
    return state.legal_moves()


def apply_move(state: GameState, move: tuple[int, int]) -> GameState | None:
    """Applies a move for the side to move; illegal moves are refused with None."""
    return state.apply(move)


def win_line(board: Board, player: Player) -> Line | None:
    """The winning line for `player`, if any."""
    return detect_win(board, player)


class CazConnectGame:
    """
    Manages a single game: state, history and outcome.
    """

    def __init__(self, starter: Player = PLAYER_X):
        self.starter: Player = starter
        self.state: GameState = GameState.initial(starter)
        self.history: list[MoveHistoryItem] = []
        self.winner: Player | None = None
        self.win_line: Line | None = None
        self.is_draw: bool = False

    def reset(self, starter: Player | None = None) -> None:
        """Resets the game to an empty board."""
        if starter is not None:
            self.starter = starter
        self.state = GameState.initial(self.starter)
        self.history = []
        self.winner = None
        self.win_line = None
        self.is_draw = False

    @property
    def board(self) -> Board:
        return self.state.board

    @property
    def current_player(self) -> Player:
        return self.state.mover

    @property
    def moves_made(self) -> int:
        return self.state.moves_made

    @property
    def last_move(self) -> Move | None:
        return self.history[-1].move if self.history else None

    def history_key(self) -> HistoryKey:
        return HistoryKey.from_items(self.history)

    def get_legal_moves(self) -> list[Move]:
        if self.is_terminal():
            return []
        return self.state.legal_moves()

    def make_move(self, move: tuple[int, int]) -> bool:
        """
        Places a piece for the current player.

        Returns:
            True if the move was made, False if it was refused.
        """
        if self.is_terminal():
            return False

        player = self.state.mover
        new_state = self.state.apply(move)
        if new_state is None:
            return False

        self.state = new_state
        self.history.append(MoveHistoryItem(player, move[0], move[1]))

        line = detect_win(new_state.board, player)
        if line is not None:
            self.winner = player
            self.win_line = line
        elif not new_state.legal_moves():
            self.is_draw = True

        return True

    def is_terminal(self) -> bool:
        """Returns True if the game is over."""
        return self.winner is not None or self.is_draw

    def get_result_for_player(self, player: Player) -> float:
        """1.0 for a win, -1.0 for a loss, 0.0 otherwise."""
        if self.winner is None:
            return 0.0
        return 1.0 if self.winner == player else -1.0

    def copy(self) -> "CazConnectGame":
        """Returns a deep copy of the game."""
        game = CazConnectGame(starter=self.starter)
        game.state = self.state
        game.history = self.history[:]
        game.winner = self.winner
        game.win_line = self.win_line
        game.is_draw = self.is_draw
        return game

    @classmethod
    def from_history(cls, history: list[MoveHistoryItem]) -> "CazConnectGame":
        """
        Replays a recorded history.

        Raises:
            ValueError: If a move is out of turn or illegal.
        """
        game = cls(starter=history[0].player if history else PLAYER_X)
        for i, item in enumerate(history):
            if item.player != game.current_player:
                raise ValueError(f"Move {i} ({item.to_token()}) played out of turn")
            if not game.make_move(item.move):
                raise ValueError(f"Invalid move {item.to_token()} at position {i}")
        return game

    def __str__(self) -> str:
        lines = [board_to_string(self.board), f"Current player: {self.current_player}"]
        if self.winner:
            lines.append(f"Winner: Player {self.winner}")
        elif self.is_draw:
            lines.append("Result: Draw")
        return "\n".join(lines)
