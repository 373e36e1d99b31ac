"""
Simulation Configuration

Dataclass-based configuration for self-play memory training.
"""

from dataclasses import asdict, dataclass, fields
from pathlib import Path

import yaml

from ..evaluation.agents import LEARNING_DEPTH


@dataclass
class TrainerConfig:
    """Configuration for a batch of self-play games."""

    games: int = 100
    depth: int = LEARNING_DEPTH  # Search depth of the learning policy
    seed: int | None = None
    show_progress: bool = True

    # Memory file the training script opens the store from
    memory_path: str | None = None

    def __post_init__(self) -> None:
        if self.games < 0:
            raise ValueError(f"games must be non-negative, got {self.games}")
        if self.depth < 1:
            raise ValueError(f"depth must be at least 1, got {self.depth}")

    @classmethod
    def from_yaml(cls, path: str | Path) -> "TrainerConfig":
        """
        Load configuration from a YAML file.

        Unknown keys are rejected so typos do not pass silently.
        """
        with open(path) as f:
            data = yaml.safe_load(f) or {}

        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown trainer config keys: {sorted(unknown)}")

        return cls(**data)

    def to_yaml(self, path: str | Path) -> None:
        """Save configuration to a YAML file."""
        with open(path, "w") as f:
            yaml.dump(asdict(self), f, default_flow_style=False, sort_keys=False)
