"""Card, CardType and Color types for UNO."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Color(str, Enum):
    """Card colors."""

    RED = "red"
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"


class CardType(str, Enum):
    """Card types."""

    NUMBERED = "numbered"
    SKIP = "skip"
    REVERSE = "reverse"
    DRAW = "draw"
    WILD = "wild"
    WILD_DRAW = "wild_draw"


WILD_TYPES = (CardType.WILD, CardType.WILD_DRAW)
ACTION_TYPES = (CardType.SKIP, CardType.REVERSE, CardType.DRAW)


@dataclass(frozen=True)
class Card:
    """A UNO card.

    Numbered cards carry a color and a number 0-9, action cards (skip, reverse,
    draw) only a color, and wild cards neither.
    """

    type: CardType
    color: Optional[Color] = None
    number: Optional[int] = None

    def __post_init__(self) -> None:
        if self.type in WILD_TYPES:
            if self.color is not None or self.number is not None:
                raise ValueError(f"{self.type.value} cards have no color or number")
            return
        if self.color is None:
            raise ValueError(f"{self.type.value} cards must have a color")
        if self.type == CardType.NUMBERED:
            if self.number is None or not 0 <= self.number <= 9:
                raise ValueError(f"Invalid card number: {self.number}")
        elif self.number is not None:
            raise ValueError(f"{self.type.value} cards have no number")

    @property
    def is_wild(self) -> bool:
        return self.type in WILD_TYPES

    def __str__(self) -> str:
        if self.color is None:
            return self.type.value
        if self.type == CardType.NUMBERED:
            return f"{self.color.value}_{self.number}"
        return f"{self.color.value}_{self.type.value}"


def card_points(card: Card) -> int:
    """Points a card left in hand is worth at the end of a hand."""
    if card.type == CardType.NUMBERED:
        return card.number or 0
    if card.type in ACTION_TYPES:
        return 20
    return 50
