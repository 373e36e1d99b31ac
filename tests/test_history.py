"""Tests for move histories and their canonical serialization."""

import pytest

from cazconnect.data import (
    PLAYER_O,
    PLAYER_X,
    HistoryKey,
    Move,
    MoveHistoryItem,
    parse_history,
    serialize_history,
)


class TestMoveHistoryItem:
    """Test single history tokens."""

    def test_to_token(self):
        assert MoveHistoryItem(PLAYER_O, 1, 0).to_token() == "O:1,0"

    def test_from_token(self):
        item = MoveHistoryItem.from_token("X:0,7")
        assert item == MoveHistoryItem(PLAYER_X, 0, 7)
        assert item.move == Move(0, 7)

    @pytest.mark.parametrize(
        "token",
        ["", "Z:0,0", "X:0", "X0,0", "X:a,b", "X:0,0,0", " X:0,7", "X:0,7 ", "X:0,7\n", "X:\u0660,7"],
    )
    def test_malformed(self, token):
        with pytest.raises(ValueError, match="Malformed"):
            MoveHistoryItem.from_token(token)

    def test_off_board(self):
        with pytest.raises(ValueError, match="off the board"):
            MoveHistoryItem.from_token("O:8,0")


class TestSerialization:
    """Test the canonical history string."""

    def test_serialize(self):
        history = [
            MoveHistoryItem(PLAYER_O, 0, 0),
            MoveHistoryItem(PLAYER_X, 0, 7),
            MoveHistoryItem(PLAYER_O, 1, 0),
        ]
        assert serialize_history(history) == "O:0,0;X:0,7;O:1,0"

    def test_empty(self):
        assert serialize_history([]) == ""
        assert parse_history("") == []

    def test_parse(self):
        assert parse_history("O:0,0;X:0,7") == [
            MoveHistoryItem(PLAYER_O, 0, 0),
            MoveHistoryItem(PLAYER_X, 0, 7),
        ]

    def test_parse_rejects_bad_token(self):
        with pytest.raises(ValueError):
            parse_history("O:0,0;nonsense")


class TestHistoryKey:
    """Test typed history keys and prefix matching."""

    def test_startswith(self):
        key = HistoryKey.parse("O:0,0;X:0,7;O:1,0")
        assert key.startswith(HistoryKey.parse("O:0,0;X:0,7"))
        assert key.startswith(HistoryKey())
        assert key.startswith(key)
        assert not key.startswith(HistoryKey.parse("O:0,0;X:0,6"))

    def test_longer_prefix_does_not_match(self):
        key = HistoryKey.parse("O:0,0")
        assert not key.startswith(HistoryKey.parse("O:0,0;X:0,7"))

    def test_next_item_after(self):
        key = HistoryKey.parse("O:0,0;X:0,7;O:1,0")
        prefix = HistoryKey.parse("O:0,0;X:0,7")
        assert key.next_item_after(prefix) == MoveHistoryItem(PLAYER_O, 1, 0)

    def test_next_item_after_equal_key(self):
        key = HistoryKey.parse("O:0,0;X:0,7")
        assert key.next_item_after(key) is None

    def test_next_item_after_other_branch(self):
        key = HistoryKey.parse("O:0,0;X:0,7;O:1,0")
        assert key.next_item_after(HistoryKey.parse("O:0,0;X:7,7")) is None

    def test_append(self):
        key = HistoryKey().append(MoveHistoryItem(PLAYER_X, 0, 0))
        assert len(key) == 1
        assert str(key) == "X:0,0"

    def test_keys_are_hashable_values(self):
        a = HistoryKey.parse("O:0,0;X:0,7")
        b = HistoryKey.from_items(parse_history("O:0,0;X:0,7"))
        assert a == b
        assert len({a, b}) == 1
