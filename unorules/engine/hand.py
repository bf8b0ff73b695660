"""Hand state for UNO: one round of play, from the deal until a player goes out.

Every operation takes a ``Hand`` and returns a new one; nothing is mutated in
place. Players are addressed by seat index, in the order they were dealt.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from unorules.engine.card import Card, CardType, Color, card_points
from unorules.engine.deck import DECK_SIZE, create_initial_deck, shuffle
from unorules.engine.errors import (
    AlreadyDrewError,
    EmptyDiscardPileError,
    IllegalPlayError,
    InvalidCardIndexError,
    InvalidConfigurationError,
    InvalidTurnError,
    MissingColorError,
    MustDrawError,
    NoUnoFailureError,
    NotEnoughCardsError,
    UnknownPlayerError,
    UnoAlreadyCalledError,
)
from unorules.engine.shuffler import Shuffler, standard_shuffler

logger = logging.getLogger(__name__)

CARDS_PER_PLAYER = 7
UNO_PENALTY_CARDS = 4


@dataclass(frozen=True)
class Hand:
    """Immutable state of a single hand."""

    players: Tuple[str, ...]
    hands: Tuple[Tuple[Card, ...], ...]  # one per seat
    draw_pile: Tuple[Card, ...]  # head is the next draw
    discard_pile: Tuple[Card, ...]  # top is last
    current_color: Optional[Color]  # None only while a turned-up wild is on top
    player_in_turn: Optional[int]  # None once the hand has ended
    direction: int = 1  # 1 = clockwise, -1 = counter-clockwise
    uno_called: Tuple[bool, ...] = ()
    dealer: int = 0
    has_drawn: bool = False  # the player in turn has drawn this turn
    history: Tuple[str, ...] = ()
    shuffler: Shuffler = field(default=standard_shuffler, compare=False, repr=False)

    @property
    def num_players(self) -> int:
        return len(self.players)

    def total_cards(self) -> int:
        """Cards across all seats and both piles."""
        in_hands = sum(len(cards) for cards in self.hands)
        return in_hands + len(self.draw_pile) + len(self.discard_pile)


def create_hand(
    players: Sequence[str],
    dealer: int = 0,
    shuffler: Shuffler = standard_shuffler,
    cards_per_player: int = CARDS_PER_PLAYER,
) -> Hand:
    """Shuffle a fresh deck and deal a hand.

    Seat ``i`` receives the contiguous slice ``[i * k, (i + 1) * k)`` of the
    shuffled deck, the next card is turned up on the discard pile and the rest
    becomes the draw pile. The player after the dealer starts.
    """
    num_players = len(players)
    if num_players < 1:
        raise InvalidConfigurationError("A hand needs at least one player")
    if cards_per_player < 1:
        raise InvalidConfigurationError(f"Invalid cards per player: {cards_per_player}")
    if not 0 <= dealer < num_players:
        raise InvalidConfigurationError(f"Dealer {dealer} is not a seat at a {num_players}-player table")
    dealt = num_players * cards_per_player
    if dealt + 1 > DECK_SIZE:
        raise InvalidConfigurationError(
            f"Cannot deal {cards_per_player} cards to {num_players} players from a {DECK_SIZE}-card deck"
        )

    deck = shuffle(create_initial_deck(), shuffler)
    hands = tuple(
        deck[i * cards_per_player:(i + 1) * cards_per_player] for i in range(num_players)
    )
    top = deck[dealt]
    hand = Hand(
        players=tuple(players),
        hands=hands,
        draw_pile=deck[dealt + 1:],
        discard_pile=(top,),
        current_color=top.color,
        player_in_turn=(dealer + 1) % num_players,
        direction=1,
        uno_called=tuple(False for _ in players),
        dealer=dealer,
        shuffler=shuffler,
    )
    logger.debug("Dealt %d cards to %d players, %s turned up", cards_per_player, num_players, top)
    return hand


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def check_player(hand: Hand, player: int) -> None:
    if not 0 <= player < hand.num_players:
        raise UnknownPlayerError(player)


def _require_turn(hand: Hand) -> int:
    if hand.player_in_turn is None:
        raise InvalidTurnError("The hand has ended; no player is in turn")
    return hand.player_in_turn


def _seat_after(hand: Hand, seat: int, steps: int = 1) -> int:
    return (seat + hand.direction * steps) % hand.num_players


def _with_cards(
    hands: Tuple[Tuple[Card, ...], ...], seat: int, cards: Tuple[Card, ...]
) -> Tuple[Tuple[Card, ...], ...]:
    return tuple(cards if i == seat else h for i, h in enumerate(hands))


def drawable_cards(hand: Hand) -> int:
    return len(hand.draw_pile) + max(len(hand.discard_pile) - 1, 0)


def _take_cards(
    hand: Hand, count: int
) -> Tuple[Tuple[Card, ...], Tuple[Card, ...], Tuple[Card, ...]]:
    """Take cards off the draw pile, reshuffling the discard pile if it runs short.

    Returns ``(taken, draw_pile, discard_pile)``. The top discard always stays.
    """
    available = drawable_cards(hand)
    if available < count:
        raise NotEnoughCardsError(count, available)

    draw_pile, discard_pile = hand.draw_pile, hand.discard_pile
    if len(draw_pile) < count:
        reshuffled = tuple(hand.shuffler(discard_pile[:-1]))
        logger.info("Draw pile short; reshuffling %d discarded cards", len(reshuffled))
        draw_pile = draw_pile + reshuffled
        discard_pile = discard_pile[-1:]
    return draw_pile[:count], draw_pile[count:], discard_pile


def _give_cards(hand: Hand, seat: int, count: int, event: str) -> Hand:
    taken, draw_pile, discard_pile = _take_cards(hand, count)
    return replace(
        hand,
        hands=_with_cards(hand.hands, seat, hand.hands[seat] + taken),
        draw_pile=draw_pile,
        discard_pile=discard_pile,
        history=hand.history + (event,),
    )


# ---------------------------------------------------------------------------
# Card effects, applied after a card lands on the discard pile
# ---------------------------------------------------------------------------


def _no_effect(hand: Hand, seat: int) -> Hand:
    return replace(hand, player_in_turn=_seat_after(hand, seat))


def _skip_effect(hand: Hand, seat: int) -> Hand:
    skipped = _seat_after(hand, seat)
    return replace(
        hand,
        player_in_turn=_seat_after(hand, seat, 2),
        history=hand.history + (f"{hand.players[skipped]} was skipped",),
    )


def _reverse_effect(hand: Hand, seat: int) -> Hand:
    # Two players: reverse acts as a skip
    if hand.num_players == 2:
        return _skip_effect(hand, seat)
    reversed_hand = replace(hand, direction=-hand.direction)
    return replace(reversed_hand, player_in_turn=_seat_after(reversed_hand, seat))


def _forced_draw(count: int) -> Callable[[Hand, int], Hand]:
    def effect(hand: Hand, seat: int) -> Hand:
        victim = _seat_after(hand, seat)
        hand = _give_cards(hand, victim, count, f"{hand.players[victim]} drew {count} cards (penalty)")
        return replace(hand, player_in_turn=_seat_after(hand, seat, 2))

    return effect


FORCED_DRAWS: Dict[CardType, int] = {CardType.DRAW: 2, CardType.WILD_DRAW: 4}

CARD_EFFECTS: Dict[CardType, Callable[[Hand, int], Hand]] = {
    CardType.NUMBERED: _no_effect,
    CardType.WILD: _no_effect,
    CardType.SKIP: _skip_effect,
    CardType.REVERSE: _reverse_effect,
    CardType.DRAW: _forced_draw(FORCED_DRAWS[CardType.DRAW]),
    CardType.WILD_DRAW: _forced_draw(FORCED_DRAWS[CardType.WILD_DRAW]),
}


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


def top_of_discard(hand: Hand) -> Card:
    """Return the active card."""
    if not hand.discard_pile:
        raise EmptyDiscardPileError("The discard pile is empty")
    return hand.discard_pile[-1]


def can_play(card_index: int, hand: Hand) -> bool:
    """Check whether the player in turn may play the card at ``card_index``."""
    if hand.player_in_turn is None:
        return False
    cards = hand.hands[hand.player_in_turn]
    if not 0 <= card_index < len(cards):
        raise InvalidCardIndexError(card_index, len(cards))

    card = cards[card_index]
    if card.is_wild:
        return True
    # A wild turned up at the deal leaves the color open
    if hand.current_color is None:
        return True
    if card.color == hand.current_color:
        return True
    top = top_of_discard(hand)
    return (
        card.type == CardType.NUMBERED
        and top.type == CardType.NUMBERED
        and card.number == top.number
    )


def can_play_any(hand: Hand) -> bool:
    if hand.player_in_turn is None:
        return False
    return any(can_play(i, hand) for i in range(len(hand.hands[hand.player_in_turn])))


def has_ended(hand: Hand) -> bool:
    return any(len(cards) == 0 for cards in hand.hands)


def winner(hand: Hand) -> Optional[int]:
    """First seat with no cards left, or None."""
    return next((i for i, cards in enumerate(hand.hands) if not cards), None)


def score(hand: Hand) -> int:
    """Total points of the cards still held, credited to the winner."""
    return sum(card_points(card) for cards in hand.hands for card in cards)


def check_uno_failure(accuser: int, accused: int, hand: Hand) -> bool:
    """True if ``accused`` holds a single card without having called UNO."""
    check_player(hand, accuser)
    check_player(hand, accused)
    return len(hand.hands[accused]) == 1 and not hand.uno_called[accused]


# ---------------------------------------------------------------------------
# Transitions
# ---------------------------------------------------------------------------


def play(card_index: int, chosen_color: Optional[Color], hand: Hand) -> Hand:
    """Play a card from the hand of the player in turn.

    ``chosen_color`` is required for wild cards and ignored otherwise.
    """
    seat = _require_turn(hand)
    if not can_play(card_index, hand):
        card = hand.hands[seat][card_index]
        raise IllegalPlayError(
            f"{card} cannot be played on {top_of_discard(hand)} "
            f"(color {hand.current_color.value if hand.current_color else 'open'})"
        )

    card = hand.hands[seat][card_index]
    if card.is_wild and chosen_color is None:
        raise MissingColorError(f"{card} requires a chosen color")

    cards = hand.hands[seat][:card_index] + hand.hands[seat][card_index + 1:]
    color = chosen_color if card.is_wild else card.color
    event = f"{hand.players[seat]} played {card}"
    if card.is_wild:
        event += f" (chose {color.value})"

    played = replace(
        hand,
        hands=_with_cards(hand.hands, seat, cards),
        discard_pile=hand.discard_pile + (card,),
        current_color=color,
        uno_called=tuple(False if i == seat else called for i, called in enumerate(hand.uno_called)),
        has_drawn=False,
        history=hand.history + (event,),
    )

    if not cards:
        logger.info("%s went out with %s", hand.players[seat], card)
        return replace(
            played,
            player_in_turn=None,
            history=played.history + (f"{hand.players[seat]} won the hand",),
        )
    return CARD_EFFECTS[card.type](played, seat)


def draw(hand: Hand) -> Hand:
    """Draw one card for the player in turn.

    Drawing does not end the turn: the player may then play a legal card or
    call ``pass_turn``.
    """
    seat = _require_turn(hand)
    if hand.has_drawn:
        raise AlreadyDrewError(f"{hand.players[seat]} has already drawn this turn")
    drawn = _give_cards(hand, seat, 1, f"{hand.players[seat]} drew a card")
    return replace(drawn, has_drawn=True)


def pass_turn(hand: Hand) -> Hand:
    """End the turn of a player who has drawn and does not play."""
    seat = _require_turn(hand)
    if not hand.has_drawn and drawable_cards(hand) > 0:
        raise MustDrawError(f"{hand.players[seat]} must draw before passing")
    return replace(
        hand,
        player_in_turn=_seat_after(hand, seat),
        has_drawn=False,
        history=hand.history + (f"{hand.players[seat]} passed",),
    )


def say_uno(player: int, hand: Hand) -> Hand:
    """Call UNO. Any player may call at any time, once until their next play."""
    check_player(hand, player)
    if hand.uno_called[player]:
        raise UnoAlreadyCalledError(f"{hand.players[player]} already called UNO")
    return replace(
        hand,
        uno_called=tuple(True if i == player else called for i, called in enumerate(hand.uno_called)),
        history=hand.history + (f"{hand.players[player]} called UNO",),
    )


def catch_uno_failure(accuser: int, accused: int, hand: Hand) -> Hand:
    """Penalize ``accused`` with four cards for not calling UNO."""
    _require_turn(hand)
    if not check_uno_failure(accuser, accused, hand):
        raise NoUnoFailureError(
            f"{hand.players[accused]} cannot be caught: no missed UNO call"
        )
    logger.debug("%s caught %s without UNO", hand.players[accuser], hand.players[accused])
    return _give_cards(
        hand,
        accused,
        UNO_PENALTY_CARDS,
        f"{hand.players[accuser]} caught {hand.players[accused]} not calling UNO; "
        f"{hand.players[accused]} drew {UNO_PENALTY_CARDS} cards",
    )


@dataclass
class PlayerView:
    """Hand state visible to a single player.

    Contains only that player's cards plus public information.
    """

    player: int
    player_id: str
    my_hand: List[Card]
    top_discard: Optional[Card]
    current_color: Optional[Color]
    player_in_turn: Optional[int]
    direction: int
    has_drawn: bool
    players: Tuple[str, ...]
    num_cards_per_player: Dict[str, int]
    uno_called: Dict[str, bool]
    draw_pile_size: int
    history: List[str]  # recent events

    @classmethod
    def from_hand(cls, hand: Hand, player: int) -> "PlayerView":
        """Create a player view from full hand state, hiding other players' cards."""
        check_player(hand, player)
        return cls(
            player=player,
            player_id=hand.players[player],
            my_hand=list(hand.hands[player]),
            top_discard=hand.discard_pile[-1] if hand.discard_pile else None,
            current_color=hand.current_color,
            player_in_turn=hand.player_in_turn,
            direction=hand.direction,
            has_drawn=hand.has_drawn and hand.player_in_turn == player,
            players=hand.players,
            num_cards_per_player={pid: len(cards) for pid, cards in zip(hand.players, hand.hands)},
            uno_called=dict(zip(hand.players, hand.uno_called)),
            draw_pile_size=len(hand.draw_pile),
            history=list(hand.history[-10:]),
        )
