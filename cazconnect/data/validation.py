"""
Data Validation Utilities

Validates boards, moves, recorded histories and imported memory payloads.
"""

from dataclasses import dataclass
from typing import Any

from .encoding import (
    BOARD_SIZE,
    PLAYER_O,
    PLAYER_X,
    Board,
    create_empty_board,
    in_bounds,
    is_on_wall,
    other_player,
)
from .game import detect_win, get_legal_moves, is_legal_move
from .history import HistoryKey, MoveHistoryItem

MEMORY_COLLECTIONS = ("wins", "losses")


@dataclass
class ValidationResult:
    """Result of validating a board, move, history or payload."""

    is_valid: bool
    errors: list[str]
    warnings: list[str]

    def __bool__(self) -> bool:
        return self.is_valid


def validate_board(board: Board) -> ValidationResult:
    """
    Validate that a board is a plausible Caz Connect position.

    Checks:
    - Board dimensions are correct
    - Only valid cell values (None, "X", "O")
    - Piece count difference is at most 1
    - At most one player has four in a row
    """
    errors = []
    warnings = []

    # Check dimensions
    if len(board) != BOARD_SIZE:
        errors.append(f"Invalid number of rows: {len(board)} (expected {BOARD_SIZE})")
        return ValidationResult(False, errors, warnings)

    for row_idx, row in enumerate(board):
        if len(row) != BOARD_SIZE:
            errors.append(f"Row {row_idx} has invalid length: {len(row)} (expected {BOARD_SIZE})")

    if errors:
        return ValidationResult(False, errors, warnings)

    # Check cell values
    for row_idx, row in enumerate(board):
        for col_idx, cell in enumerate(row):
            if cell not in (None, PLAYER_X, PLAYER_O):
                errors.append(f"Invalid cell value at ({row_idx}, {col_idx}): {cell!r}")

    if errors:
        return ValidationResult(False, errors, warnings)

    # Either side may start, so counts can differ by one in either direction
    x_count = sum(1 for row in board for cell in row if cell == PLAYER_X)
    o_count = sum(1 for row in board for cell in row if cell == PLAYER_O)
    if abs(x_count - o_count) > 1:
        errors.append(f"Invalid piece count: X={x_count}, O={o_count}")

    x_line = detect_win(board, PLAYER_X)
    o_line = detect_win(board, PLAYER_O)
    if x_line and o_line:
        errors.append("Both players have four in a row")
    elif x_line or o_line:
        warnings.append(f"Board has a winner (Player {PLAYER_X if x_line else PLAYER_O})")

    return ValidationResult(len(errors) == 0, errors, warnings)


def validate_move(board: Board, move: tuple[int, int], moves_made: int) -> ValidationResult:
    """
    Validate that a move is legal from the given position, with the reason when it is not.
    """
    errors = []
    warnings = []
    row, col = move

    if not in_bounds(row, col):
        errors.append(f"Move ({row}, {col}) is out of range [0, {BOARD_SIZE})")
        return ValidationResult(False, errors, warnings)

    if board[row][col] is not None:
        errors.append(f"Cell ({row}, {col}) is occupied")
    elif moves_made == 0 and not is_on_wall(row, col):
        errors.append(f"Opening move ({row}, {col}) must be placed against a wall")
    elif not is_legal_move(board, move, moves_made):
        errors.append(f"Cell ({row}, {col}) is not connected to a wall")

    return ValidationResult(len(errors) == 0, errors, warnings)


def validate_history(history: list[MoveHistoryItem]) -> ValidationResult:
    """
    Validate a recorded history by replaying it.

    Checks:
    - Players alternate
    - Every move is legal at its point in the game
    - No move follows a win
    """
    errors = []
    warnings = []

    board = create_empty_board()
    winner = None

    for i, item in enumerate(history):
        if winner is not None:
            errors.append(f"Move {i} ({item.to_token()}) played after Player {winner} won")
            break
        if i > 0 and item.player == history[i - 1].player:
            errors.append(f"Move {i} ({item.to_token()}) played out of turn")
            break

        move_result = validate_move(board, item.move, i)
        if not move_result:
            errors.extend(f"Move {i}: {e}" for e in move_result.errors)
            break

        board[item.row][item.col] = item.player
        if detect_win(board, item.player):
            winner = item.player

    if not errors and history and winner is None:
        if get_legal_moves(board, len(history)):
            warnings.append(f"History is unfinished; Player {other_player(history[-1].player)} to move")

    return ValidationResult(len(errors) == 0, errors, warnings)


def validate_memory_payload(data: Any) -> ValidationResult:
    """
    Validate an imported memory payload.

    The payload must be a mapping with "wins" and "losses" lists of
    {"moves": str} objects. Move strings that do not parse are reported as
    warnings only; they are kept verbatim but never match a lookup.
    """
    errors = []
    warnings = []

    if not isinstance(data, dict):
        errors.append(f"Memory must be an object, got {type(data).__name__}")
        return ValidationResult(False, errors, warnings)

    for name in MEMORY_COLLECTIONS:
        if name not in data:
            errors.append(f"Missing '{name}' field")
        elif not isinstance(data[name], list):
            errors.append(f"'{name}' must be an array, got {type(data[name]).__name__}")

    if errors:
        return ValidationResult(False, errors, warnings)

    for name in MEMORY_COLLECTIONS:
        seen = set()
        for i, entry in enumerate(data[name]):
            if not isinstance(entry, dict) or not isinstance(entry.get("moves"), str):
                errors.append(f"{name}[{i}] must be an object with a string 'moves' field")
                continue
            moves = entry["moves"]
            if moves in seen:
                warnings.append(f"{name}[{i}] duplicates an earlier entry")
            seen.add(moves)
            try:
                HistoryKey.parse(moves)
            except ValueError as e:
                warnings.append(f"{name}[{i}]: {e}")

    return ValidationResult(len(errors) == 0, errors, warnings)
