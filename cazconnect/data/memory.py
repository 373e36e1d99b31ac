"""
Learned Game Memory

Recorded finished games, labeled from the computer's (O's) perspective:
"wins" are games O won, "losses" are games X won. The learning policy looks up
entries that extend the current history to avoid continuations that lost
before.

The persisted format is {"wins": [{"moves": str}, ...], "losses": [...]}
where "moves" is the canonical history string.
"""

import json
import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Literal

from .encoding import AI_PLAYER, Player
from .history import HistoryKey, MoveHistoryItem, serialize_history
from .validation import validate_memory_payload

logger = logging.getLogger(__name__)

Outcome = Literal["wins", "losses"]


class MemoryFormatError(ValueError):
    """Raised when an imported memory payload has the wrong shape."""

    def __init__(self, message: str, errors: list[str] | None = None):
        super().__init__(message)
        self.errors = errors or []


def _unique(items: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(items))


@dataclass
class GameMemory:
    """
    Insertion-ordered, duplicate-free collections of finished game strings.
    """

    wins: list[str] = field(default_factory=list)
    losses: list[str] = field(default_factory=list)
    _parsed: dict[str, HistoryKey | None] = field(default_factory=dict, repr=False, compare=False)
    _seen: dict[str, set[str]] = field(default_factory=dict, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.wins = _unique(self.wins)
        self.losses = _unique(self.losses)
        # Membership index beside each ordered list
        self._seen = {"wins": set(self.wins), "losses": set(self.losses)}

    def __len__(self) -> int:
        return len(self.wins) + len(self.losses)

    def __contains__(self, moves: str) -> bool:
        return moves in self._seen["wins"] or moves in self._seen["losses"]

    def add(self, outcome: Outcome, moves: str) -> bool:
        """
        Adds a game string to one collection.

        Returns:
            True if it was new, False if it was already recorded.
        """
        seen = self._seen[outcome]
        if moves in seen:
            return False
        seen.add(moves)
        (self.wins if outcome == "wins" else self.losses).append(moves)
        return True

    def record_game(self, history: list[MoveHistoryItem], winner: Player | None) -> Outcome | None:
        """
        Records a finished game. Draws are not recorded.

        Returns:
            The collection the game went into, or None if nothing was added.
        """
        if winner is None:
            return None
        outcome: Outcome = "wins" if winner == AI_PLAYER else "losses"
        return outcome if self.add(outcome, serialize_history(history)) else None

    def merge(self, other: "GameMemory") -> int:
        """Adds every entry of `other`; returns how many were new."""
        added = sum(self.add("wins", m) for m in other.wins)
        added += sum(self.add("losses", m) for m in other.losses)
        return added

    def copy(self) -> "GameMemory":
        memory = GameMemory(wins=self.wins[:], losses=self.losses[:])
        memory._parsed = dict(self._parsed)
        return memory

    def _key(self, moves: str) -> HistoryKey | None:
        if moves not in self._parsed:
            try:
                self._parsed[moves] = HistoryKey.parse(moves)
            except ValueError as e:
                logger.warning(f"Ignoring unreadable memory entry: {e}")
                self._parsed[moves] = None
        return self._parsed[moves]

    def continuations(self, outcome: Outcome, prefix: HistoryKey) -> list[MoveHistoryItem]:
        """
        Items that followed `prefix` in recorded games of one collection.

        Entries equal to the prefix (no following move) and unreadable entries
        contribute nothing.
        """
        collection = self.wins if outcome == "wins" else self.losses
        found = []
        for moves in collection:
            key = self._key(moves)
            if key is None:
                continue
            item = key.next_item_after(prefix)
            if item is not None:
                found.append(item)
        return found

    def to_dict(self) -> dict:
        """Converts to the persisted JSON structure."""
        return {
            "wins": [{"moves": m} for m in self.wins],
            "losses": [{"moves": m} for m in self.losses],
        }

    @classmethod
    def from_dict(cls, data: object) -> "GameMemory":
        """
        Creates from the persisted JSON structure.

        Raises:
            MemoryFormatError: If the payload shape is invalid.
        """
        result = validate_memory_payload(data)
        if not result.is_valid:
            raise MemoryFormatError("Invalid memory file format: " + "; ".join(result.errors), result.errors)
        for warning in result.warnings:
            logger.warning(f"Memory import: {warning}")
        return cls(
            wins=[entry["moves"] for entry in data["wins"]],  # type: ignore[index]
            losses=[entry["moves"] for entry in data["losses"]],  # type: ignore[index]
        )


def save_memory_json(memory: GameMemory, file_path: str | Path) -> None:
    """Save memory to a JSON file."""
    with open(file_path, "w") as f:
        json.dump(memory.to_dict(), f, indent=2)


def load_memory_json(file_path: str | Path) -> GameMemory:
    """
    Load memory from a JSON file.

    Raises:
        MemoryFormatError: If the file is not JSON or has the wrong shape.
    """
    with open(file_path) as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise MemoryFormatError(f"Error reading or parsing the memory file: {e}") from e
    return GameMemory.from_dict(data)


class MemoryStore:
    """
    Owner of the learned memory.

    Thread-safe: every mutation replaces the whole memory under a lock, and
    readers work from snapshot() copies so a decision never sees a partial
    update.
    """

    def __init__(self, memory: GameMemory | None = None, path: str | Path | None = None):
        """
        Initialize the store.

        Args:
            memory: Initial memory (copied).
            path: Optional JSON file written after every change.
        """
        self._memory = memory.copy() if memory is not None else GameMemory()
        self._lock = threading.Lock()
        self.path = Path(path) if path is not None else None

    @classmethod
    def open(cls, path: str | Path) -> "MemoryStore":
        """Opens a store backed by a JSON file, starting empty if the file does not exist."""
        path = Path(path)
        memory = load_memory_json(path) if path.exists() else GameMemory()
        return cls(memory, path=path)

    def __len__(self) -> int:
        with self._lock:
            return len(self._memory)

    @property
    def win_count(self) -> int:
        with self._lock:
            return len(self._memory.wins)

    @property
    def loss_count(self) -> int:
        with self._lock:
            return len(self._memory.losses)

    def snapshot(self) -> GameMemory:
        """A consistent copy of the current memory."""
        with self._lock:
            return self._memory.copy()

    def record_game(self, history: list[MoveHistoryItem], winner: Player | None) -> Outcome | None:
        """
        Records one finished game (idempotent).

        Returns:
            The collection it went into, or None for draws and repeats.
        """
        with self._lock:
            updated = self._memory.copy()
            outcome = updated.record_game(history, winner)
            if outcome is None:
                return None
            self._memory = updated
            self._persist()
        logger.debug(f"Recorded game in {outcome}")
        return outcome

    def commit(self, memory: GameMemory) -> int:
        """
        Merges a working copy into the store as one update.

        Returns:
            Number of entries that were new.
        """
        with self._lock:
            updated = self._memory.copy()
            added = updated.merge(memory)
            self._memory = updated
            if added:
                self._persist()
            wins, losses = len(updated.wins), len(updated.losses)
        logger.info(f"Memory now has {wins} winning paths and {losses} losing paths ({added} new)")
        return added

    def import_dict(self, data: object) -> GameMemory:
        """
        Replaces the memory with an imported payload.

        Raises:
            MemoryFormatError: If the payload is malformed; the store is left untouched.
        """
        imported = GameMemory.from_dict(data)
        with self._lock:
            self._memory = imported.copy()
            self._persist()
        logger.info(
            f"AI memory imported: {len(imported.wins)} wins, {len(imported.losses)} losses"
        )
        return imported

    def import_json(self, text: str) -> GameMemory:
        """Same as import_dict, from a JSON document."""
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise MemoryFormatError(f"Error reading or parsing the memory file: {e}") from e
        return self.import_dict(data)

    def export_dict(self) -> dict:
        with self._lock:
            return self._memory.to_dict()

    def export_json(self, indent: int | None = 2) -> str:
        return json.dumps(self.export_dict(), indent=indent)

    def save(self, path: str | Path | None = None) -> Path:
        """Writes the memory to `path` (defaults to the store's own path)."""
        target = Path(path) if path is not None else self.path
        if target is None:
            raise ValueError("No path given and the store has no default path")
        save_memory_json(self.snapshot(), target)
        return target

    def _persist(self) -> None:
        # Caller holds the lock
        if self.path is not None:
            save_memory_json(self._memory, self.path)

