"""
Simulation Trainer

Grows the learned memory by playing the learning policy against itself.

Games are played against a private working copy of the memory, so later games
in a batch already avoid continuations that lost earlier in the same batch.
The working copy is committed to the MemoryStore once, when the batch ends or
is cancelled.
"""

import logging
import random
import threading
import time
from dataclasses import dataclass
from typing import Iterator

from tqdm import tqdm

from ..data import PLAYER_O, PLAYER_X, CazConnectGame, GameMemory, MemoryStore, Player
from ..evaluation.agents import choose_learning_move
from .config import TrainerConfig

logger = logging.getLogger(__name__)


class CancellationToken:
    """Cooperative stop flag, polled between games and between plies."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    def reset(self) -> None:
        self._event.clear()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


@dataclass
class TrainingProgress:
    """Progress record yielded after every finished game."""

    games_played: int
    games_requested: int
    winner: Player | None
    moves: int
    recorded: bool


@dataclass
class TrainingReport:
    """Outcome of one training batch."""

    games_requested: int
    games_played: int = 0
    wins_recorded: int = 0
    losses_recorded: int = 0
    draws: int = 0
    cancelled: bool = False
    total_wins: int = 0
    total_losses: int = 0
    time_seconds: float = 0.0


class TrainingHandle:
    """Handle on a batch running in a background thread."""

    def __init__(self, trainer: "SimulationTrainer", thread: threading.Thread):
        self._trainer = trainer
        self._thread = thread

    def stop(self) -> None:
        """Request cancellation; the accumulated memory is still committed."""
        self._trainer.token.cancel()

    def join(self, timeout: float | None = None) -> TrainingReport | None:
        """
        Wait for the batch to finish.

        Returns:
            The report, or None if the timeout expired first.

        Raises:
            Exception: Whatever the batch raised in the background thread.
        """
        self._thread.join(timeout)
        if self._thread.is_alive():
            return None
        if self._trainer.error is not None:
            raise self._trainer.error
        return self._trainer.report

    def is_alive(self) -> bool:
        return self._thread.is_alive()

    @property
    def report(self) -> TrainingReport | None:
        return self._trainer.report


class SimulationTrainer:
    """
    Plays self-play games with the learning policy on both sides and records
    the decisive ones into a MemoryStore.
    """

    def __init__(
        self,
        store: MemoryStore,
        config: TrainerConfig | None = None,
        token: CancellationToken | None = None,
    ):
        """
        Initialize the trainer.

        Args:
            store: Memory store that receives the results
            config: Trainer configuration
            token: Cancellation token (a fresh one by default)
        """
        self.store = store
        self.config = config if config is not None else TrainerConfig()
        self.token = token if token is not None else CancellationToken()
        self.report: TrainingReport | None = None
        self.error: BaseException | None = None
        self._rng = random.Random(self.config.seed)

    def play_game(self, memory: GameMemory) -> CazConnectGame | None:
        """
        Play one self-play game from a random starter.

        Returns:
            The finished game, or None if cancelled mid-game.
        """
        game = CazConnectGame(starter=self._rng.choice([PLAYER_X, PLAYER_O]))

        while not game.is_terminal():
            if self.token.cancelled:
                return None

            move = choose_learning_move(
                player=game.current_player,
                legal_moves=game.get_legal_moves(),
                board=game.board,
                history=game.history,
                moves_made=game.moves_made,
                memory=memory,
                depth=self.config.depth,
                rng=self._rng,
            )
            game.make_move(move)

        return game

    def iter_games(self, num_games: int | None = None) -> Iterator[TrainingProgress]:
        """
        Play a batch of games, yielding progress after each one.

        The working memory is committed when the generator finishes, is
        cancelled through the token, or is closed early.
        """
        num_games = self.config.games if num_games is None else num_games
        report = TrainingReport(games_requested=num_games)
        self.report = report
        working = self.store.snapshot()
        start_time = time.time()

        logger.info(f"Simulating {num_games} games at depth {self.config.depth}")
        pbar = tqdm(total=num_games, desc="Simulating games", disable=not self.config.show_progress)

        try:
            for _ in range(num_games):
                if self.token.cancelled:
                    break

                game = self.play_game(working)
                if game is None:
                    break

                outcome = working.record_game(game.history, game.winner)
                report.games_played += 1
                if game.winner is None:
                    report.draws += 1
                elif outcome == "wins":
                    report.wins_recorded += 1
                elif outcome == "losses":
                    report.losses_recorded += 1

                pbar.update(1)
                pbar.set_postfix(wins=len(working.wins), losses=len(working.losses))

                yield TrainingProgress(
                    games_played=report.games_played,
                    games_requested=num_games,
                    winner=game.winner,
                    moves=game.moves_made,
                    recorded=outcome is not None,
                )
        finally:
            pbar.close()
            # A cancel that lands after the last game does not count
            report.cancelled = report.games_played < num_games and self.token.cancelled
            if report.cancelled:
                logger.info(f"Simulation cancelled after {report.games_played} games")
            self.store.commit(working)
            report.total_wins = self.store.win_count
            report.total_losses = self.store.loss_count
            report.time_seconds = time.time() - start_time

    def run(self, num_games: int | None = None) -> TrainingReport:
        """Play a batch synchronously and return its report."""
        for _ in self.iter_games(num_games):
            pass
        assert self.report is not None
        return self.report

    def start(self, num_games: int | None = None) -> TrainingHandle:
        """Play a batch on a background thread."""
        self.token.reset()
        self.report = None
        self.error = None

        def target() -> None:
            try:
                self.run(num_games)
            except Exception as e:
                logger.exception("Simulation failed")
                self.error = e

        thread = threading.Thread(target=target, name="simulation-trainer", daemon=True)
        thread.start()
        return TrainingHandle(self, thread)
