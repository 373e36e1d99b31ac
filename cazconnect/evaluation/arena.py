"""
Arena

Plays agents (usually difficulty tiers) against each other. Colors alternate
between games so neither side always gets the first move; results are kept
per agent id, never per color.
"""

import itertools
import logging
import time
from dataclasses import dataclass
from typing import Literal

from tqdm import tqdm

from ..data import PLAYER_O, PLAYER_X, CazConnectGame
from .agents import Agent

logger = logging.getLogger(__name__)

GameOutcome = Literal["x_win", "o_win", "draw"]


@dataclass
class Tally:
    """Win/loss/draw counts for one agent."""

    wins: int = 0
    losses: int = 0
    draws: int = 0

    @property
    def games(self) -> int:
        return self.wins + self.losses + self.draws

    @property
    def score(self) -> float:
        """Points per game: 1 for a win, 0.5 for a draw."""
        return (self.wins + 0.5 * self.draws) / self.games if self.games else 0.0

    def __add__(self, other: "Tally") -> "Tally":
        return Tally(self.wins + other.wins, self.losses + other.losses, self.draws + other.draws)


@dataclass
class MatchResult:
    agent1_id: str
    agent2_id: str
    agent1_wins: int = 0
    agent2_wins: int = 0
    draws: int = 0
    total_moves: int = 0
    time_seconds: float = 0.0

    @property
    def num_games(self) -> int:
        return self.agent1_wins + self.agent2_wins + self.draws

    @property
    def average_moves(self) -> float:
        return self.total_moves / self.num_games if self.num_games else 0.0

    def tally_for(self, agent_id: str) -> Tally:
        """Counts from one participant's side; empty for an agent not in the match."""
        if agent_id == self.agent1_id:
            return Tally(self.agent1_wins, self.agent2_wins, self.draws)
        if agent_id == self.agent2_id:
            return Tally(self.agent2_wins, self.agent1_wins, self.draws)
        return Tally()

    @property
    def agent1_score(self) -> float:
        return self.tally_for(self.agent1_id).score

    @property
    def agent2_score(self) -> float:
        return self.tally_for(self.agent2_id).score


@dataclass
class TournamentResult:
    """All matches of a round-robin."""

    results: list[MatchResult]
    agent_ids: list[str]
    time_seconds: float = 0.0

    def get_match(self, agent1_id: str, agent2_id: str) -> MatchResult | None:
        pair = {agent1_id, agent2_id}
        return next(
            (r for r in self.results if {r.agent1_id, r.agent2_id} == pair),
            None,
        )

    def tally(self, agent_id: str) -> Tally:
        total = Tally()
        for result in self.results:
            total = total + result.tally_for(agent_id)
        return total

    def standings(self) -> list[tuple[str, Tally]]:
        """Agents with their totals, best score first."""
        totals = [(agent_id, self.tally(agent_id)) for agent_id in self.agent_ids]
        return sorted(totals, key=lambda entry: entry[1].score, reverse=True)


class Arena:
    """Runs games, matches and round-robins between registered agents."""

    def __init__(self, agents: dict[str, Agent]):
        """
        Args:
            agents: Agents keyed by id. Agents bring their own random sources.
        """
        self.agents = agents

    def play_game(self, agent_x: Agent, agent_o: Agent) -> tuple[GameOutcome, int]:
        """
        Play a single game with X to move first.

        Returns:
            Tuple of (outcome, moves played)

        Raises:
            ValueError: If an agent returns an illegal move.
        """
        game = CazConnectGame(starter=PLAYER_X)
        players = {PLAYER_X: agent_x, PLAYER_O: agent_o}
        for agent in players.values():
            agent.reset()

        while not game.is_terminal():
            agent = players[game.current_player]
            move = agent.get_move(game.state, game.history)
            if move is None or not game.make_move(move):
                raise ValueError(f"{agent.name} returned illegal move {move}")

        outcome: GameOutcome = {PLAYER_X: "x_win", PLAYER_O: "o_win"}.get(game.winner, "draw")
        return outcome, game.moves_made

    def run_match(
        self,
        agent1_id: str,
        agent2_id: str,
        num_games: int = 10,
        alternate_colors: bool = True,
        show_progress: bool = False,
    ) -> MatchResult:
        """
        Play `num_games` between two registered agents.

        With `alternate_colors`, agent2 plays X in every odd-numbered game.
        """
        result = MatchResult(agent1_id, agent2_id)
        start_time = time.time()

        for game_index in tqdm(
            range(num_games),
            desc=f"{agent1_id} vs {agent2_id}",
            disable=not show_progress,
        ):
            x_id, o_id = agent1_id, agent2_id
            if alternate_colors and game_index % 2 == 1:
                x_id, o_id = o_id, x_id

            outcome, moves = self.play_game(self.agents[x_id], self.agents[o_id])
            result.total_moves += moves

            winner_id = {"x_win": x_id, "o_win": o_id}.get(outcome)
            if winner_id is None:
                result.draws += 1
            elif winner_id == agent1_id:
                result.agent1_wins += 1
            else:
                result.agent2_wins += 1

        result.time_seconds = time.time() - start_time
        logger.info(
            f"{agent1_id} vs {agent2_id}: "
            f"{result.agent1_wins}-{result.agent2_wins}-{result.draws} "
            f"in {result.time_seconds:.1f}s"
        )
        return result

    def run_tournament(
        self,
        agent_ids: list[str] | None = None,
        num_games_per_match: int = 10,
        show_progress: bool = False,
    ) -> TournamentResult:
        """Every pair of agents plays one match."""
        agent_ids = list(self.agents) if agent_ids is None else agent_ids
        start_time = time.time()

        results = [
            self.run_match(id1, id2, num_games=num_games_per_match, show_progress=show_progress)
            for id1, id2 in itertools.combinations(agent_ids, 2)
        ]

        return TournamentResult(results, agent_ids, time_seconds=time.time() - start_time)


def quick_match(agent1: Agent, agent2: Agent, num_games: int = 10) -> MatchResult:
    """Match two agents by name; the names must differ."""
    arena = Arena({agent1.name: agent1, agent2.name: agent2})
    return arena.run_match(agent1.name, agent2.name, num_games=num_games)
