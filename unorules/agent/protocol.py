"""Agent protocol - the decision provider a game asks for each move."""

from typing import Protocol

from unorules.engine import Action, PlayerView


class AgentProtocol(Protocol):
    """Interface for UNO-playing agents."""

    @property
    def name(self) -> str:
        """Display name for the agent."""
        ...

    def get_action(
        self,
        player_view: PlayerView,
        legal_actions: list[Action],
        player_id: str,
    ) -> Action | None:
        """Choose an action given the player view and legal actions.

        Called on the agent's turn, and out of turn right after it plays down
        to one card, when the only legal action offered is ``SayUno``.

        Args:
            player_view: Filtered view with only this player's hand and public info.
            legal_actions: List of valid actions to choose from.
            player_id: This agent's player ID.

        Returns:
            One of the legal actions, or None to take the default (draw or pass
            on a turn, decline the UNO call out of turn).
        """
        ...
