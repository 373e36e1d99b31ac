"""
Caz Connect

Rules engine and computer players for Caz Connect, a connect-four variant
played on an 8x8 board where pieces chain in from the walls.
"""

from .data import (
    AI_PLAYER,
    BOARD_SIZE,
    HUMAN_PLAYER,
    PLAYER_O,
    PLAYER_X,
    WIN_LENGTH,
    Board,
    CazConnectGame,
    GameMemory,
    GameState,
    HistoryKey,
    Line,
    MemoryFormatError,
    MemoryStore,
    Move,
    MoveHistoryItem,
    Player,
    apply_move,
    legal_moves,
    win_line,
)
from .evaluation import Difficulty, choose_computer_move
from .session import GameMode, GameSession

__version__ = "0.1.0"

__all__ = [
    "AI_PLAYER",
    "BOARD_SIZE",
    "HUMAN_PLAYER",
    "PLAYER_O",
    "PLAYER_X",
    "WIN_LENGTH",
    "Board",
    "CazConnectGame",
    "GameMemory",
    "GameState",
    "HistoryKey",
    "Line",
    "MemoryFormatError",
    "MemoryStore",
    "Move",
    "MoveHistoryItem",
    "Player",
    "apply_move",
    "legal_moves",
    "win_line",
    "Difficulty",
    "choose_computer_move",
    "GameMode",
    "GameSession",
]
