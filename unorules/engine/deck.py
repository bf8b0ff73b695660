"""Deck creation, shuffling and drawing."""

from typing import Optional, Sequence, Tuple

from unorules.engine.card import ACTION_TYPES, Card, CardType, Color
from unorules.engine.shuffler import Shuffler, standard_shuffler

Deck = Tuple[Card, ...]

DECK_SIZE = 108


def create_initial_deck() -> Deck:
    """Create the standard 108-card UNO deck in a fixed order.

    - 4 colors x (one 0, two each of 1-9): 76 numbered cards
    - 4 colors x two each of Skip, Reverse, Draw Two: 24 action cards
    - 4 Wild, 4 Wild Draw Four: 8 cards
    """
    cards = []

    for color in Color:
        cards.append(Card(CardType.NUMBERED, color, 0))
        for number in range(1, 10):
            cards.append(Card(CardType.NUMBERED, color, number))
            cards.append(Card(CardType.NUMBERED, color, number))

    for card_type in ACTION_TYPES:
        for color in Color:
            cards.append(Card(card_type, color))
            cards.append(Card(card_type, color))

    cards.extend(Card(CardType.WILD) for _ in range(4))
    cards.extend(Card(CardType.WILD_DRAW) for _ in range(4))

    return tuple(cards)


def shuffle(deck: Sequence[Card], shuffler: Shuffler = standard_shuffler) -> Deck:
    """Return a shuffled copy of the deck."""
    return tuple(shuffler(deck))


def draw_card(deck: Sequence[Card]) -> Tuple[Optional[Card], Deck]:
    """Take the head card; an empty deck yields (None, ())."""
    if not deck:
        return None, ()
    return deck[0], tuple(deck[1:])
