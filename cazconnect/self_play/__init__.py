"""
Self-Play Memory Training

Grows the learned memory by letting the learning policy play itself.
"""

from .config import TrainerConfig
from .trainer import (
    CancellationToken,
    SimulationTrainer,
    TrainingHandle,
    TrainingProgress,
    TrainingReport,
)

__all__ = [
    "TrainerConfig",
    "CancellationToken",
    "SimulationTrainer",
    "TrainingHandle",
    "TrainingProgress",
    "TrainingReport",
]
