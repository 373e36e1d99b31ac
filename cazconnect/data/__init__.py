"""Board representation, rules and move histories for Caz Connect."""

from .encoding import (
    BOARD_SIZE,
    WIN_LENGTH,
    AI_PLAYER,
    HUMAN_PLAYER,
    PLAYER_O,
    PLAYER_X,
    Board,
    Cell,
    Move,
    Player,
    board_from_placements,
    board_to_string,
    copy_board,
    count_pieces,
    create_empty_board,
    is_on_wall,
    other_player,
)
from .game import (
    CazConnectGame,
    GameState,
    Line,
    apply_move,
    detect_win,
    get_legal_moves,
    is_legal_move,
    legal_moves,
    place_piece,
    win_line,
)
from .history import HistoryKey, MoveHistoryItem, parse_history, serialize_history
from .memory import (
    GameMemory,
    MemoryFormatError,
    MemoryStore,
    load_memory_json,
    save_memory_json,
)
from .validation import (
    ValidationResult,
    validate_board,
    validate_history,
    validate_memory_payload,
    validate_move,
)

__all__ = [
    # Constants and types
    "BOARD_SIZE",
    "WIN_LENGTH",
    "AI_PLAYER",
    "HUMAN_PLAYER",
    "PLAYER_O",
    "PLAYER_X",
    "Board",
    "Cell",
    "Move",
    "Player",
    "Line",
    # Board helpers
    "board_from_placements",
    "board_to_string",
    "copy_board",
    "count_pieces",
    "create_empty_board",
    "is_on_wall",
    "other_player",
    # Rules
    "CazConnectGame",
    "GameState",
    "apply_move",
    "detect_win",
    "get_legal_moves",
    "is_legal_move",
    "legal_moves",
    "place_piece",
    "win_line",
    # History
    "HistoryKey",
    "MoveHistoryItem",
    "parse_history",
    "serialize_history",
    # Memory
    "GameMemory",
    "MemoryFormatError",
    "MemoryStore",
    "load_memory_json",
    "save_memory_json",
    # Validation
    "ValidationResult",
    "validate_board",
    "validate_history",
    "validate_memory_payload",
    "validate_move",
]
