"""
Board Representation

Constants, type aliases and small helpers for the 8x8 Caz Connect board.
Cells hold None (empty), "X" or "O". Row 0 is the top row; the board has
no gravity, so pieces stay exactly where they are placed.
"""

from typing import Literal, NamedTuple, TypeAlias

# Board dimensions (fixed)
BOARD_SIZE = 8
WIN_LENGTH = 4

# Type aliases
Player: TypeAlias = Literal["X", "O"]
Cell: TypeAlias = Player | None
Board: TypeAlias = list[list[Cell]]  # 8x8, None=empty

PLAYER_X: Player = "X"
PLAYER_O: Player = "O"

# The computer always plays O; memory is recorded from its perspective
AI_PLAYER: Player = PLAYER_O
HUMAN_PLAYER: Player = PLAYER_X


class Move(NamedTuple):
    """A target cell."""

    row: int
    col: int


def other_player(player: Player) -> Player:
    """Returns the opponent of the given player."""
    return PLAYER_O if player == PLAYER_X else PLAYER_X


def create_empty_board() -> Board:
    """Creates an empty 8x8 board."""
    return [[None for _ in range(BOARD_SIZE)] for _ in range(BOARD_SIZE)]


def copy_board(board: Board) -> Board:
    """Returns a copy of the board that shares no rows with the original."""
    return [row[:] for row in board]


def in_bounds(row: int, col: int) -> bool:
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


def is_on_wall(row: int, col: int) -> bool:
    """True for cells on the outer ring of the board."""
    return row == 0 or row == BOARD_SIZE - 1 or col == 0 or col == BOARD_SIZE - 1


def count_pieces(board: Board) -> int:
    """Counts the occupied cells."""
    return sum(1 for row in board for cell in row if cell is not None)


def board_from_placements(placements: dict[tuple[int, int], Player]) -> Board:
    """
    Builds a board from a {(row, col): player} mapping.

    Does not check placement legality; used for hand-built positions.
    """
    board = create_empty_board()
    for (row, col), player in placements.items():
        board[row][col] = player
    return board


def board_to_string(board: Board) -> str:
    """Returns a human-readable string representation of the board."""
    lines = ["  " + " ".join(str(c) for c in range(BOARD_SIZE))]
    for r, row in enumerate(board):
        lines.append(f"{r} " + " ".join("." if cell is None else cell for cell in row))
    return "\n".join(lines)
