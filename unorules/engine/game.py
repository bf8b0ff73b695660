"""Game: a sequence of hands played until a player reaches the target score."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Dict, Mapping, Optional, Sequence, Tuple

from unorules.engine.deck import Deck, create_initial_deck, shuffle
from unorules.engine.errors import (
    EndedWithoutWinnerError,
    InsufficientPlayersError,
    InvalidConfigurationError,
    InvalidTurnError,
    NoCurrentHandError,
)
from unorules.engine.hand import (
    CARDS_PER_PLAYER,
    Hand,
    PlayerView,
    create_hand,
    has_ended,
    say_uno,
    score,
    winner,
)
from unorules.engine.rules import (
    Action,
    DrawCard,
    PassTurn,
    PlayCard,
    SayUno,
    apply_action,
    default_action,
    get_legal_actions,
)
from unorules.engine.shuffler import Shuffler, standard_shuffler

if TYPE_CHECKING:
    from unorules.agent.protocol import AgentProtocol

logger = logging.getLogger(__name__)

TARGET_SCORE = 500


@dataclass(frozen=True)
class Game:
    """Immutable match state."""

    players: Tuple[str, ...]
    hands: Tuple[Hand, ...]  # every hand dealt; the last one is current while the game runs
    current_hand: Optional[Hand]  # None once the game is over
    scores: Dict[str, int]  # player -> cumulative score, in seat order
    target_score: int
    deck: Deck  # standalone shuffled deck, kept for reference
    cards_per_player: int = CARDS_PER_PLAYER
    shuffler: Shuffler = field(default=standard_shuffler, compare=False, repr=False)


def create_game(
    players: Sequence[str],
    target_score: int = TARGET_SCORE,
    dealer: int = 0,
    shuffler: Shuffler = standard_shuffler,
    cards_per_player: int = CARDS_PER_PLAYER,
) -> Game:
    """Create a game and deal its first hand."""
    if len(players) < 2:
        raise InsufficientPlayersError("UNO requires at least 2 players")
    if len(set(players)) != len(players):
        raise InvalidConfigurationError(f"Player names must be unique: {list(players)}")
    if target_score < 1:
        raise InvalidConfigurationError(f"Invalid target score: {target_score}")

    deck = shuffle(create_initial_deck(), shuffler)
    hand = create_hand(players, dealer=dealer, shuffler=shuffler, cards_per_player=cards_per_player)
    logger.info("New game: %s, playing to %d", ", ".join(players), target_score)
    return Game(
        players=tuple(players),
        hands=(hand,),
        current_hand=hand,
        scores={player: 0 for player in players},
        target_score=target_score,
        deck=deck,
        cards_per_player=cards_per_player,
        shuffler=shuffler,
    )


def _decide(
    hand: Hand,
    seat: int,
    legal: list[Action],
    agents: Optional[Mapping[str, AgentProtocol]],
) -> Optional[Action]:
    if agents is None:
        return default_action(hand, seat, legal)
    player_id = hand.players[seat]
    return agents[player_id].get_action(PlayerView.from_hand(hand, seat), legal, player_id)


def _take_turn(hand: Hand, agents: Optional[Mapping[str, AgentProtocol]]) -> Hand:
    """Apply one decision of the player in turn.

    A play that leaves the player on one card is followed by a chance for that
    player to call UNO before anyone else acts.
    """
    seat = hand.player_in_turn
    if seat is None:
        raise InvalidTurnError("The hand has ended; no player is in turn")
    legal = get_legal_actions(hand, seat)
    action = _decide(hand, seat, legal, agents)
    if action is None:
        action = next((a for a in legal if isinstance(a, (DrawCard, PassTurn))), legal[0])

    hand = apply_action(hand, seat, action)

    if (
        isinstance(action, PlayCard)
        and not has_ended(hand)
        and len(hand.hands[seat]) == 1
        and not hand.uno_called[seat]
    ):
        if isinstance(_decide(hand, seat, [SayUno()], agents), SayUno):
            hand = say_uno(seat, hand)
    return hand


def _settle(game: Game, hand: Hand) -> Game:
    seat = winner(hand)
    if seat is None:
        raise EndedWithoutWinnerError("The hand ended without a winner")

    player = game.players[seat]
    points = score(hand)
    scores = dict(game.scores)
    scores[player] += points
    logger.info("%s won hand %d for %d points (total %d)", player, len(game.hands), points, scores[player])

    if scores[player] >= game.target_score:
        logger.info("%s won the game with %d points", player, scores[player])
        return replace(game, current_hand=None, scores=scores)

    next_hand = create_hand(
        game.players,
        dealer=seat,
        shuffler=game.shuffler,
        cards_per_player=game.cards_per_player,
    )
    return replace(game, current_hand=next_hand, hands=game.hands + (next_hand,), scores=scores)


def play_hand(game: Game, agents: Optional[Mapping[str, AgentProtocol]] = None) -> Game:
    """Advance the game by one step.

    If the current hand has ended, score it and either finish the game or deal
    the next hand with the winner as dealer. Otherwise the player in turn makes
    one decision, taken from ``agents`` (keyed by player name) or from
    ``default_action`` when no agents are given.
    """
    hand = game.current_hand
    if hand is None:
        raise NoCurrentHandError("The game is over; there is no hand to play")

    if has_ended(hand):
        return _settle(game, hand)

    hand = _take_turn(hand, agents)
    return replace(game, current_hand=hand, hands=game.hands[:-1] + (hand,))


def is_game_over(game: Game) -> bool:
    return game.current_hand is None


def get_winner(game: Game) -> Optional[str]:
    """Return the first player at or above the target score once the game is over."""
    if not is_game_over(game):
        return None
    return next(
        (player for player, total in game.scores.items() if total >= game.target_score),
        None,
    )
