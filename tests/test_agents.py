"""Tests for computer players and the learning policy."""

import random

from cazconnect.data import (
    BOARD_SIZE,
    PLAYER_O,
    PLAYER_X,
    GameMemory,
    GameState,
    MemoryStore,
    Move,
    board_from_placements,
    copy_board,
    parse_history,
)
from cazconnect.evaluation.agents import (
    EasyAgent,
    LearningAgent,
    MinimaxAgent,
    RandomAgent,
    choose_learning_move,
    find_blocking_move,
    find_winning_move,
    remembered_bad_moves,
)


def full_state():
    board = [
        [PLAYER_X if ((c // 2) + r) % 2 == 0 else PLAYER_O for c in range(BOARD_SIZE)]
        for r in range(BOARD_SIZE)
    ]
    return GameState(board=board, mover=PLAYER_X, moves_made=64)


def x_threatens_row_zero():
    """X has three on row 0; O to move."""
    board = board_from_placements({
        (0, 0): PLAYER_X,
        (0, 1): PLAYER_X,
        (0, 2): PLAYER_X,
        (7, 7): PLAYER_O,
        (7, 6): PLAYER_O,
    })
    return GameState(board=board, mover=PLAYER_O, moves_made=5)


def both_threaten():
    """X and O both have three in a row; O to move."""
    board = board_from_placements({
        (0, 0): PLAYER_X,
        (0, 1): PLAYER_X,
        (0, 2): PLAYER_X,
        (7, 0): PLAYER_O,
        (7, 1): PLAYER_O,
        (7, 2): PLAYER_O,
    })
    return GameState(board=board, mover=PLAYER_O, moves_made=6)


def opening_state():
    """O opened at (0,0), X answered at (0,7); O to move."""
    board = board_from_placements({(0, 0): PLAYER_O, (0, 7): PLAYER_X})
    return GameState(board=board, mover=PLAYER_O, moves_made=2)


class TestTacticalHelpers:
    """Test immediate win and block detection."""

    def test_find_winning_move(self):
        state = both_threaten()
        board = copy_board(state.board)
        assert find_winning_move(board, state.legal_moves(), PLAYER_O) == Move(7, 3)
        assert board == state.board

    def test_find_blocking_move(self):
        state = x_threatens_row_zero()
        board = copy_board(state.board)
        assert find_blocking_move(board, state.legal_moves(), PLAYER_O) == Move(0, 3)

    def test_no_tactics(self):
        state = opening_state()
        board = copy_board(state.board)
        assert find_winning_move(board, state.legal_moves(), PLAYER_O) is None
        assert find_blocking_move(board, state.legal_moves(), PLAYER_O) is None


class TestRandomAgent:
    """Tests for RandomAgent."""

    def test_returns_legal_move(self):
        agent = RandomAgent(rng=random.Random(0))
        state = opening_state()
        for _ in range(10):
            assert agent.get_move(state) in state.legal_moves()

    def test_no_moves(self):
        assert RandomAgent().get_move(full_state()) is None


class TestEasyAgent:
    """Tests for EasyAgent."""

    def test_blocks(self):
        agent = EasyAgent(rng=random.Random(0))
        assert agent.get_move(x_threatens_row_zero()) == Move(0, 3)

    def test_prefers_win_over_block(self):
        agent = EasyAgent(rng=random.Random(0))
        assert agent.get_move(both_threaten()) == Move(7, 3)

    def test_no_moves(self):
        assert EasyAgent().get_move(full_state()) is None


class TestMinimaxAgent:
    """Tests for MinimaxAgent."""

    def test_blocks(self):
        agent = MinimaxAgent(depth=2)
        assert agent.get_move(x_threatens_row_zero()) == Move(0, 3)

    def test_wins(self):
        agent = MinimaxAgent(depth=2, evaluator="strategic")
        assert agent.get_move(both_threaten()) == Move(7, 3)

    def test_plays_for_side_to_move(self):
        """X to move takes its own win."""
        state = both_threaten()
        x_state = GameState(board=state.board, mover=PLAYER_X, moves_made=6)
        assert MinimaxAgent(depth=1).get_move(x_state) == Move(0, 3)

    def test_depth_for(self):
        agent = MinimaxAgent(depth=3, late_depth=4, late_after=20)
        assert agent.depth_for(0) == 3
        assert agent.depth_for(20) == 3
        assert agent.depth_for(21) == 4

    def test_name(self):
        assert MinimaxAgent(depth=2).name == "minimax-d2-tactical"
        assert MinimaxAgent(depth=2, name_override="medium").name == "medium"

    def test_no_moves(self):
        assert MinimaxAgent(depth=2).get_move(full_state()) is None


class TestRememberedBadMoves:
    """Test memory lookups."""

    def test_o_avoids_recorded_losses(self):
        memory = GameMemory(losses=["O:0,0;X:0,7;O:1,0"])
        history = parse_history("O:0,0;X:0,7")
        assert remembered_bad_moves(PLAYER_O, history, memory) == {Move(1, 0)}

    def test_x_avoids_recorded_o_wins(self):
        memory = GameMemory(wins=["X:0,0;O:0,7;X:1,0"])
        history = parse_history("X:0,0;O:0,7")
        assert remembered_bad_moves(PLAYER_X, history, memory) == {Move(1, 0)}

    def test_ignores_other_collection(self):
        memory = GameMemory(wins=["O:0,0;X:0,7;O:1,0"])
        history = parse_history("O:0,0;X:0,7")
        assert remembered_bad_moves(PLAYER_O, history, memory) == set()

    def test_ignores_other_branches(self):
        memory = GameMemory(losses=["O:0,0;X:7,7;O:1,0"])
        history = parse_history("O:0,0;X:0,7")
        assert remembered_bad_moves(PLAYER_O, history, memory) == set()

    def test_ignores_opponent_next_moves(self):
        memory = GameMemory(losses=["O:0,0;X:0,7;O:1,0"])
        history = parse_history("O:0,0")
        assert remembered_bad_moves(PLAYER_O, history, memory) == set()


class TestChooseLearningMove:
    """Tests for the learning policy."""

    def test_never_plays_remembered_loss(self):
        state = opening_state()
        memory = GameMemory(losses=["O:0,0;X:0,7;O:1,0"])
        move = choose_learning_move(
            player=PLAYER_O,
            legal_moves=[Move(1, 0), Move(2, 0)],
            board=state.board,
            history=parse_history("O:0,0;X:0,7"),
            moves_made=2,
            memory=memory,
            depth=1,
        )
        assert move == Move(2, 0)

    def test_full_search_skips_remembered_loss(self):
        state = opening_state()
        memory = GameMemory(losses=["O:0,0;X:0,7;O:1,0"])
        move = choose_learning_move(
            player=PLAYER_O,
            legal_moves=state.legal_moves(),
            board=state.board,
            history=parse_history("O:0,0;X:0,7"),
            moves_made=2,
            memory=memory,
            depth=1,
        )
        assert move != Move(1, 0)
        assert move in state.legal_moves()

    def test_all_moves_bad_falls_back_to_random(self):
        state = opening_state()
        memory = GameMemory(losses=["O:0,0;X:0,7;O:1,0"])
        move = choose_learning_move(
            player=PLAYER_O,
            legal_moves=[Move(1, 0)],
            board=state.board,
            history=parse_history("O:0,0;X:0,7"),
            moves_made=2,
            memory=memory,
            depth=1,
            rng=random.Random(0),
        )
        assert move == Move(1, 0)

    def test_win_before_memory(self):
        state = both_threaten()
        memory = GameMemory(losses=["X:0,0;O:7,0;X:0,1;O:7,1;X:0,2;O:7,2;O:7,3"])
        move = choose_learning_move(
            player=PLAYER_O,
            legal_moves=state.legal_moves(),
            board=state.board,
            history=parse_history("X:0,0;O:7,0;X:0,1;O:7,1;X:0,2;O:7,2"),
            moves_made=6,
            memory=memory,
            depth=1,
        )
        assert move == Move(7, 3)

    def test_blocks(self):
        state = x_threatens_row_zero()
        move = choose_learning_move(
            player=PLAYER_O,
            legal_moves=state.legal_moves(),
            board=state.board,
            history=[],
            moves_made=5,
            memory=GameMemory(),
            depth=1,
        )
        assert move == Move(0, 3)

    def test_board_not_modified(self):
        state = opening_state()
        board = copy_board(state.board)
        choose_learning_move(PLAYER_O, state.legal_moves(), board, [], 2, GameMemory(), depth=1)
        assert board == state.board


class TestLearningAgent:
    """Tests for LearningAgent."""

    def test_reads_store_snapshot(self):
        store = MemoryStore(GameMemory(losses=["O:0,0;X:0,7;O:1,0"]))
        agent = LearningAgent(memory=store, depth=1)
        history = parse_history("O:0,0;X:0,7")
        for _ in range(3):
            assert agent.get_move(opening_state(), history) != Move(1, 0)

    def test_blocks(self):
        agent = LearningAgent(depth=1)
        assert agent.get_move(x_threatens_row_zero()) == Move(0, 3)

    def test_no_moves(self):
        assert LearningAgent(depth=1).get_move(full_state()) is None

    def test_name(self):
        assert LearningAgent().name == "learning-d4"
