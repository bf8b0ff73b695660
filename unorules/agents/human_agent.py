"""Human agent - reads actions from terminal."""

from unorules.engine import Action, PlayerView
from unorules.engine.rules import CatchUnoFailure, DrawCard, PassTurn, PlayCard, SayUno


def describe_action(action: Action, player_view: PlayerView) -> str:
    """One-line description of an action for a menu or prompt."""
    if isinstance(action, PlayCard):
        card = player_view.my_hand[action.card_index]
        color = f" color={action.chosen_color.value}" if action.chosen_color else ""
        return f"PLAY {card}{color}"
    if isinstance(action, DrawCard):
        return "DRAW"
    if isinstance(action, PassTurn):
        return "PASS"
    if isinstance(action, SayUno):
        return "SAY UNO"
    if isinstance(action, CatchUnoFailure):
        return f"CATCH {player_view.players[action.accused]} (missed UNO)"
    return repr(action)


class HumanAgent:
    """Agent that prompts the human for input via terminal."""

    def __init__(self, name: str = "human"):
        self._name = name

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

        if player_view.player_in_turn == player_view.player:
            print(f"\n--- Your turn ({player_id}) ---")
        else:
            print(f"\n--- Out of turn ({player_id}) ---")
        print("Your hand:", " ".join(str(c) for c in player_view.my_hand))
        print("Top discard:", player_view.top_discard)
        print("Color:", player_view.current_color.value if player_view.current_color else "any")
        print("\nLegal actions:")
        for i, a in enumerate(legal_actions):
            print(f"  {i}: {describe_action(a, player_view)}")

        while True:
            try:
                raw = input("Enter number (blank to skip): ").strip()
                if not raw:
                    return None
                idx = int(raw)
                if 0 <= idx < len(legal_actions):
                    return legal_actions[idx]
            except ValueError:
                pass
            except EOFError:
                return None
            print("Invalid. Try again.")
