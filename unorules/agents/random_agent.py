"""Random agent - picks uniformly among the legal plays."""

import random
from typing import Optional

from unorules.engine import Action, PlayerView
from unorules.engine.rules import CatchUnoFailure, PlayCard, SayUno


class RandomAgent:
    """Agent that plays a random legal card, drawing only when it has to.

    Calls UNO when down to one card and always catches a missed call.
    """

    def __init__(self, name: str = "random", seed: Optional[int] = None):
        self._name = name
        self._rng = random.Random(seed)

    @property
    def name(self) -> str:
        return self._name

    def get_action(
        self,
        player_view: PlayerView,
        legal_actions: list[Action],
        player_id: str,
    ) -> Action | None:
        if not legal_actions:
            return None

        # A call made with two cards is cleared by the next play
        if len(player_view.my_hand) == 1 and SayUno() in legal_actions:
            return SayUno()
        catches = [a for a in legal_actions if isinstance(a, CatchUnoFailure)]
        if catches:
            return catches[0]

        # Prefer playing over drawing to make game progress
        play_actions = [a for a in legal_actions if isinstance(a, PlayCard)]
        if play_actions:
            return self._rng.choice(play_actions)
        return self._rng.choice(legal_actions)
