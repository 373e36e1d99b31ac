"""
Game Session - Single Owner of an Interactive Board

Handles:
- Mode and difficulty selection
- Human and computer moves
- Scores and starter alternation between games
- Recording finished player-vs-computer games in the learned memory

A host (UI, CLI, test) drives one GameSession; every state change goes through it.
"""

import logging
import random
from enum import StrEnum

from .data import (
    AI_PLAYER,
    PLAYER_O,
    PLAYER_X,
    Board,
    CazConnectGame,
    Line,
    MemoryStore,
    Move,
    MoveHistoryItem,
    Player,
    other_player,
)
from .evaluation.difficulty import Difficulty, choose_computer_move

logger = logging.getLogger(__name__)


class GameMode(StrEnum):
    PVC = "pvc"
    PVP = "pvp"


class GameSession:
    """Controller for one board: human vs computer, or two humans."""

    def __init__(
        self,
        mode: GameMode | str = GameMode.PVC,
        difficulty: Difficulty | str = Difficulty.MEDIUM,
        store: MemoryStore | None = None,
        rng: random.Random | None = None,
    ):
        self.store = store if store is not None else MemoryStore()
        self.scores: dict[Player, int] = {PLAYER_X: 0, PLAYER_O: 0}
        self._mode = GameMode(mode)
        self._difficulty = Difficulty(difficulty)
        self._rng = rng
        self.game = CazConnectGame(starter=PLAYER_X)
        self.next_starter: Player = PLAYER_O

    # --- Settings ---

    @property
    def mode(self) -> GameMode:
        return self._mode

    @mode.setter
    def mode(self, mode: GameMode | str) -> None:
        self._mode = GameMode(mode)
        self._restart()

    @property
    def difficulty(self) -> Difficulty:
        return self._difficulty

    @difficulty.setter
    def difficulty(self, difficulty: Difficulty | str) -> None:
        self._difficulty = Difficulty(difficulty)
        self._restart()

    def _restart(self) -> None:
        # A settings change starts over with X, then alternates again
        self.game.reset(PLAYER_X)
        self.next_starter = PLAYER_O

    def reset_game(self) -> None:
        """Start the next game; starters alternate between games."""
        self.game.reset(self.next_starter)
        self.next_starter = other_player(self.next_starter)

    # --- Read-only view ---

    @property
    def board(self) -> Board:
        return self.game.board

    @property
    def current_player(self) -> Player:
        return self.game.current_player

    @property
    def history(self) -> list[MoveHistoryItem]:
        return self.game.history

    @property
    def last_move(self) -> Move | None:
        return self.game.last_move

    @property
    def win_line(self) -> Line | None:
        return self.game.win_line

    @property
    def game_over(self) -> bool:
        return self.game.is_terminal()

    @property
    def valid_moves(self) -> list[Move]:
        return self.game.get_legal_moves()

    @property
    def is_computer_turn(self) -> bool:
        return (
            self._mode == GameMode.PVC
            and not self.game_over
            and self.current_player == AI_PLAYER
        )

    @property
    def status(self) -> str:
        if self.game.winner is not None:
            return f"Player {self.game.winner} Wins!"
        if self.game.is_draw:
            return "It's a Draw!"
        return f"Player {self.current_player}'s Turn"

    # --- Moves ---

    def handle_human_move(self, move: tuple[int, int]) -> bool:
        """
        Plays a human move for the side to move.

        Returns:
            False if the game is over, it is the computer's turn, or the move is illegal.
        """
        if self.game_over or self.is_computer_turn:
            return False
        return self._place(move)

    def play_computer_move(self) -> Move | None:
        """
        Plays the computer's move when it is the computer's turn.

        Returns:
            The move played, or None if it was not the computer's turn.
        """
        if not self.is_computer_turn:
            return None

        legal_moves = self.valid_moves
        move = choose_computer_move(
            self.game.state,
            self._difficulty,
            history=self.game.history,
            memory=self.store.snapshot(),
            rng=self._rng,
        )
        if move is None or move not in legal_moves:
            move = legal_moves[0]

        self._place(move)
        return move

    def _place(self, move: tuple[int, int]) -> bool:
        player = self.current_player
        if not self.game.make_move(move):
            logger.debug(f"Refused {tuple(move)} for {player}")
            return False

        if self.game.winner is not None:
            self.scores[player] += 1
            self._finish(player)
        elif self.game.is_draw:
            self._finish(None)
        return True

    def _finish(self, winner: Player | None) -> None:
        logger.info(f"Game over after {self.game.moves_made} moves: {self.status}")
        if self._mode == GameMode.PVC:
            self.store.record_game(self.game.history, winner)
