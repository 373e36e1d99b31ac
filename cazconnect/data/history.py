"""
Move History

Play-order move logs and their canonical serialization.

A finished history serializes to "player:row,col" tokens joined by ";",
e.g. "O:0,0;X:0,7;O:1,0". That string is the storage key of the learned
memory, so the format must stay stable. Inside the package histories are
handled as HistoryKey values and compared token by token, never by raw
string prefix.
"""

import re
from dataclasses import dataclass
from typing import Iterable

from .encoding import BOARD_SIZE, Move, Player

TOKEN_SEPARATOR = ";"

_TOKEN_RE = re.compile(r"([XO]):(\d+),(\d+)", re.ASCII)


@dataclass(frozen=True)
class MoveHistoryItem:
    """One placement in play order."""

    player: Player
    row: int
    col: int

    @property
    def move(self) -> Move:
        return Move(self.row, self.col)

    def to_token(self) -> str:
        return f"{self.player}:{self.row},{self.col}"

    @classmethod
    def from_token(cls, token: str) -> "MoveHistoryItem":
        """
        Parses a single "player:row,col" token.

        Raises:
            ValueError: If the token is malformed or off the board.
        """
        match = _TOKEN_RE.fullmatch(token)
        if match is None:
            raise ValueError(f"Malformed history token: {token!r}")
        player, row, col = match.group(1), int(match.group(2)), int(match.group(3))
        if not (0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE):
            raise ValueError(f"History token off the board: {token!r}")
        return cls(player=player, row=row, col=col)  # type: ignore[arg-type]


@dataclass(frozen=True)
class HistoryKey:
    """
    Immutable, typed form of a move history.

    Used as the lookup key into the learned memory.
    """

    items: tuple[MoveHistoryItem, ...] = ()

    @classmethod
    def from_items(cls, items: Iterable[MoveHistoryItem]) -> "HistoryKey":
        return cls(tuple(items))

    @classmethod
    def parse(cls, text: str) -> "HistoryKey":
        """
        Parses a canonical history string. The empty string is the empty history.

        Raises:
            ValueError: If any token is malformed.
        """
        if not text:
            return cls()
        return cls(tuple(MoveHistoryItem.from_token(t) for t in text.split(TOKEN_SEPARATOR)))

    def serialize(self) -> str:
        return TOKEN_SEPARATOR.join(item.to_token() for item in self.items)

    def append(self, item: MoveHistoryItem) -> "HistoryKey":
        return HistoryKey(self.items + (item,))

    def startswith(self, prefix: "HistoryKey") -> bool:
        n = len(prefix.items)
        return n <= len(self.items) and self.items[:n] == prefix.items

    def next_item_after(self, prefix: "HistoryKey") -> MoveHistoryItem | None:
        """Returns the item that follows `prefix` in this history, if it extends it."""
        if not self.startswith(prefix) or len(self.items) == len(prefix.items):
            return None
        return self.items[len(prefix.items)]

    def __len__(self) -> int:
        return len(self.items)

    def __str__(self) -> str:
        return self.serialize()


def serialize_history(history: Iterable[MoveHistoryItem]) -> str:
    """Canonical string for a play-order history."""
    return HistoryKey.from_items(history).serialize()


def parse_history(text: str) -> list[MoveHistoryItem]:
    """Inverse of serialize_history."""
    return list(HistoryKey.parse(text).items)
