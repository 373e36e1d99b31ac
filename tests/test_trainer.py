"""
Tests for Self-Play Memory Training

Tests cover configuration, game generation, memory commits and cancellation.
Search depth is kept at 1 so games finish quickly.
"""

import pytest

from cazconnect.data import GameMemory, MemoryStore, serialize_history, validate_history
from cazconnect.self_play import (
    CancellationToken,
    SimulationTrainer,
    TrainerConfig,
    TrainingProgress,
)


def fast_config(**overrides) -> TrainerConfig:
    settings = {"games": 3, "depth": 1, "seed": 7, "show_progress": False}
    settings.update(overrides)
    return TrainerConfig(**settings)


class TestTrainerConfig:
    """Tests for TrainerConfig."""

    def test_defaults(self):
        config = TrainerConfig()
        assert config.depth == 4
        assert config.memory_path is None

    def test_yaml_round_trip(self, tmp_path):
        path = tmp_path / "simulation.yaml"
        config = TrainerConfig(games=50, depth=2, seed=1, memory_path="memory.json")
        config.to_yaml(path)
        assert TrainerConfig.from_yaml(path) == config

    def test_partial_yaml(self, tmp_path):
        path = tmp_path / "simulation.yaml"
        path.write_text("games: 12\n")
        config = TrainerConfig.from_yaml(path)
        assert config.games == 12
        assert config.depth == 4

    def test_empty_yaml(self, tmp_path):
        path = tmp_path / "simulation.yaml"
        path.write_text("")
        assert TrainerConfig.from_yaml(path) == TrainerConfig()

    def test_unknown_key(self, tmp_path):
        path = tmp_path / "simulation.yaml"
        path.write_text("games: 12\nworkers: 4\n")
        with pytest.raises(ValueError, match="workers"):
            TrainerConfig.from_yaml(path)

    def test_invalid_values(self):
        with pytest.raises(ValueError):
            TrainerConfig(games=-1)
        with pytest.raises(ValueError):
            TrainerConfig(depth=0)


class TestCancellationToken:
    """Tests for CancellationToken."""

    def test_cancel_and_reset(self):
        token = CancellationToken()
        assert not token.cancelled
        token.cancel()
        assert token.cancelled
        token.reset()
        assert not token.cancelled


class TestPlayGame:
    """Tests for single self-play games."""

    def test_game_is_finished_and_valid(self):
        trainer = SimulationTrainer(MemoryStore(), fast_config())
        game = trainer.play_game(GameMemory())

        assert game is not None
        assert game.is_terminal()
        result = validate_history(game.history)
        assert result.is_valid
        assert result.warnings == []

    def test_cancelled_game_is_discarded(self):
        trainer = SimulationTrainer(MemoryStore(), fast_config())
        trainer.token.cancel()
        assert trainer.play_game(GameMemory()) is None


class TestRun:
    """Tests for batch runs."""

    def test_run(self):
        store = MemoryStore()
        report = SimulationTrainer(store, fast_config()).run()

        assert report.games_requested == 3
        assert report.games_played == 3
        assert not report.cancelled
        assert report.wins_recorded + report.losses_recorded + report.draws <= 3
        assert report.total_wins == store.win_count
        assert report.total_losses == store.loss_count
        assert report.total_wins + report.total_losses == (
            report.wins_recorded + report.losses_recorded
        )

    def test_run_with_explicit_count(self):
        report = SimulationTrainer(MemoryStore(), fast_config()).run(1)
        assert report.games_requested == 1
        assert report.games_played == 1

    def test_keeps_existing_memory(self):
        existing = "O:0,0;X:0,7;O:1,0"
        store = MemoryStore(GameMemory(losses=[existing]))
        SimulationTrainer(store, fast_config(games=2)).run()
        assert existing in store.snapshot().losses

    def test_same_seed_same_games(self):
        first, second = MemoryStore(), MemoryStore()
        SimulationTrainer(first, fast_config(games=2)).run()
        SimulationTrainer(second, fast_config(games=2)).run()
        assert first.snapshot() == second.snapshot()

    def test_iter_games_yields_progress(self):
        trainer = SimulationTrainer(MemoryStore(), fast_config())
        progress = list(trainer.iter_games())

        assert [p.games_played for p in progress] == [1, 2, 3]
        assert all(isinstance(p, TrainingProgress) for p in progress)
        assert all(p.games_requested == 3 for p in progress)
        assert all(p.moves >= 7 for p in progress if p.winner is not None)

    def test_store_untouched_until_batch_ends(self):
        store = MemoryStore()
        trainer = SimulationTrainer(store, fast_config(games=4))
        recorded = 0

        for progress in trainer.iter_games():
            recorded += progress.recorded
            assert len(store) == 0

        assert len(store) == recorded
        assert trainer.report.games_played == 4

    def test_trainer_ignores_config_memory_path(self, tmp_path):
        path = tmp_path / "memory.json"
        SimulationTrainer(MemoryStore(), fast_config(games=1, memory_path=str(path))).run()
        assert not path.exists()

    def test_memory_saved_to_store_path(self, tmp_path):
        path = tmp_path / "memory.json"
        store = MemoryStore.open(path)
        report = SimulationTrainer(store, fast_config()).run()

        if report.total_wins + report.total_losses:
            reopened = MemoryStore.open(path)
            assert len(reopened) == report.total_wins + report.total_losses


class TestCancellation:
    """Tests for stopping a batch early."""

    def test_cancelled_before_start(self):
        store = MemoryStore()
        trainer = SimulationTrainer(store, fast_config())
        trainer.token.cancel()
        report = trainer.run()

        assert report.cancelled
        assert report.games_played == 0
        assert len(store) == 0

    def test_cancel_mid_batch_commits_finished_games(self):
        store = MemoryStore()
        trainer = SimulationTrainer(store, fast_config(games=5))
        recorded = []

        for progress in trainer.iter_games():
            recorded.append(progress)
            trainer.token.cancel()

        report = trainer.report
        assert report.cancelled
        assert report.games_played == 1
        assert len(recorded) == 1
        assert len(store) == (1 if recorded[0].recorded else 0)

    def test_cancel_after_last_game_is_not_cancelled(self):
        store = MemoryStore()
        trainer = SimulationTrainer(store, fast_config(games=2))

        for progress in trainer.iter_games():
            if progress.games_played == 2:
                trainer.token.cancel()

        assert trainer.report.games_played == 2
        assert not trainer.report.cancelled

    def test_closing_generator_commits(self):
        store = MemoryStore()
        trainer = SimulationTrainer(store, fast_config(games=5))
        games = trainer.iter_games()
        first = next(games)
        games.close()

        assert trainer.report.games_played == 1
        assert len(store) == (1 if first.recorded else 0)

    def test_recorded_game_is_in_store(self):
        store = MemoryStore()
        trainer = SimulationTrainer(store, fast_config(games=1))
        game = trainer.play_game(GameMemory())
        store.record_game(game.history, game.winner)

        if game.winner is not None:
            assert serialize_history(game.history) in store.snapshot()


class TestBackgroundRun:
    """Tests for running a batch on a thread."""

    def test_start_and_join(self):
        store = MemoryStore()
        trainer = SimulationTrainer(store, fast_config(games=2))
        handle = trainer.start()
        report = handle.join(timeout=120)

        assert report is not None
        assert report.games_played == 2
        assert not handle.is_alive()
        assert handle.report is report

    def test_stop(self):
        store = MemoryStore()
        trainer = SimulationTrainer(store, fast_config(games=1000))
        handle = trainer.start()
        handle.stop()
        report = handle.join(timeout=120)

        assert report is not None
        assert report.cancelled
        assert report.games_played < 1000
