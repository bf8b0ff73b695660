"""UNO actions: legal-action enumeration and dispatch onto hand transitions."""

from collections import Counter
from dataclasses import dataclass
from typing import List, Optional, Union

from unorules.engine.card import Color
from unorules.engine.errors import InvalidTurnError
from unorules.engine.hand import (
    FORCED_DRAWS,
    UNO_PENALTY_CARDS,
    Hand,
    can_play,
    catch_uno_failure,
    check_player,
    check_uno_failure,
    draw,
    drawable_cards,
    pass_turn,
    play,
    say_uno,
)


@dataclass(frozen=True)
class PlayCard:
    """Action: play the card at ``card_index``. For wilds, chosen_color is required."""

    card_index: int
    chosen_color: Optional[Color] = None


@dataclass(frozen=True)
class DrawCard:
    """Action: draw a card (the turn continues)."""


@dataclass(frozen=True)
class PassTurn:
    """Action: end the turn after drawing."""


@dataclass(frozen=True)
class SayUno:
    """Action: call UNO. Allowed out of turn."""


@dataclass(frozen=True)
class CatchUnoFailure:
    """Action: accuse another player of not calling UNO. Allowed out of turn."""

    accused: int


Action = Union[PlayCard, DrawCard, PassTurn, SayUno, CatchUnoFailure]

TURN_ACTIONS = (PlayCard, DrawCard, PassTurn)


def get_legal_actions(hand: Hand, player: int) -> List[Action]:
    """Return all legal actions for ``player``.

    The player in turn may play, draw or pass; any player may call UNO or
    catch an opponent who forgot to. Draw cards and catches are left out
    while the piles cannot supply the cards they would hand out.
    """
    check_player(hand, player)
    if hand.player_in_turn is None:
        return []

    actions: List[Action] = []
    if hand.player_in_turn == player:
        cards = hand.hands[player]
        for i, card in enumerate(cards):
            if not can_play(i, hand):
                continue
            # Once played, the card underneath joins the reshuffle
            if len(cards) > 1 and FORCED_DRAWS.get(card.type, 0) > drawable_cards(hand) + 1:
                continue
            if card.is_wild:
                actions.extend(PlayCard(card_index=i, chosen_color=color) for color in Color)
            else:
                actions.append(PlayCard(card_index=i))
        if not hand.has_drawn and drawable_cards(hand) > 0:
            actions.append(DrawCard())
        else:
            actions.append(PassTurn())

    if not hand.uno_called[player] and len(hand.hands[player]) <= 2:
        actions.append(SayUno())
    if drawable_cards(hand) >= UNO_PENALTY_CARDS:
        for accused in range(hand.num_players):
            if accused != player and check_uno_failure(player, accused, hand):
                actions.append(CatchUnoFailure(accused=accused))
    return actions


def apply_action(hand: Hand, player: int, action: Action) -> Hand:
    """Apply an action by ``player`` and return the new hand."""
    check_player(hand, player)
    if isinstance(action, TURN_ACTIONS) and hand.player_in_turn != player:
        raise InvalidTurnError(f"It is not {hand.players[player]}'s turn")

    if isinstance(action, PlayCard):
        return play(action.card_index, action.chosen_color, hand)
    if isinstance(action, DrawCard):
        return draw(hand)
    if isinstance(action, PassTurn):
        return pass_turn(hand)
    if isinstance(action, SayUno):
        return say_uno(player, hand)
    if isinstance(action, CatchUnoFailure):
        return catch_uno_failure(player, action.accused, hand)
    raise TypeError(f"Unknown action: {action!r}")


def _preferred_color(hand: Hand, player: int) -> Color:
    colors = Counter(card.color for card in hand.hands[player] if card.color is not None)
    if not colors:
        return Color.RED
    return colors.most_common(1)[0][0]


def default_action(hand: Hand, player: int, legal: List[Action]) -> Optional[Action]:
    """Built-in decision: catch, call UNO, play the first legal card, draw, pass.

    UNO is only called once down to a single card, since playing a card
    clears the call.
    """
    catch = next((a for a in legal if isinstance(a, CatchUnoFailure)), None)
    if catch is not None:
        return catch
    if len(hand.hands[player]) == 1 and SayUno() in legal:
        return SayUno()

    plays = [a for a in legal if isinstance(a, PlayCard)]
    if plays:
        first = plays[0]
        if first.chosen_color is None:
            return first
        return PlayCard(card_index=first.card_index, chosen_color=_preferred_color(hand, player))

    for kind in (DrawCard, PassTurn):
        chosen = next((a for a in legal if isinstance(a, kind)), None)
        if chosen is not None:
            return chosen
    return None
