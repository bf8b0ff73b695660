"""Single match runner."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from unorules.engine import create_game, get_winner, is_game_over, play_hand, seeded_shuffler
from unorules.engine.game import TARGET_SCORE

if TYPE_CHECKING:
    from unorules.agent.protocol import AgentProtocol

logger = logging.getLogger(__name__)


@dataclass
class MatchResult:
    """Result of a completed match."""

    winner: Optional[str]
    scores: dict[str, int]
    num_hands: int
    num_steps: int
    player_ids: tuple[str, ...]


class MatchRunner:
    """Runs a match of UNO hands until a player reaches the target score."""

    def __init__(
        self,
        agents: dict[str, "AgentProtocol"],
        target_score: int = TARGET_SCORE,
        seed: Optional[int] = None,
        max_steps: int = 100_000,
    ):
        self._agents = agents
        self._target_score = target_score
        self._seed = seed
        self._max_steps = max_steps

    def run(self) -> MatchResult:
        """Run the match and return the result."""
        player_ids = list(self._agents.keys())
        game = create_game(
            player_ids,
            target_score=self._target_score,
            shuffler=seeded_shuffler(self._seed),
        )
        num_steps = 0

        while not is_game_over(game) and num_steps < self._max_steps:
            game = play_hand(game, self._agents)
            num_steps += 1

        if not is_game_over(game):
            logger.warning("Match stopped after %d steps without a winner", num_steps)

        return MatchResult(
            winner=get_winner(game),
            scores=dict(game.scores),
            num_hands=len(game.hands),
            num_steps=num_steps,
            player_ids=tuple(player_ids),
        )
