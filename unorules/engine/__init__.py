"""Rules engine for UNO."""

from unorules.engine.card import Card, CardType, Color, card_points
from unorules.engine.deck import DECK_SIZE, Deck, create_initial_deck, draw_card, shuffle
from unorules.engine.errors import UnoError
from unorules.engine.game import (
    Game,
    create_game,
    get_winner,
    is_game_over,
    play_hand,
)
from unorules.engine.hand import (
    Hand,
    PlayerView,
    can_play,
    can_play_any,
    catch_uno_failure,
    check_uno_failure,
    create_hand,
    draw,
    has_ended,
    pass_turn,
    play,
    say_uno,
    score,
    top_of_discard,
    winner,
)
from unorules.engine.rules import (
    Action,
    CatchUnoFailure,
    DrawCard,
    PassTurn,
    PlayCard,
    SayUno,
    apply_action,
    default_action,
    get_legal_actions,
)
from unorules.engine.shuffler import (
    Shuffler,
    identity_shuffler,
    seeded_shuffler,
    standard_shuffler,
)

__all__ = [
    "Card",
    "CardType",
    "Color",
    "card_points",
    "DECK_SIZE",
    "Deck",
    "create_initial_deck",
    "draw_card",
    "shuffle",
    "UnoError",
    "Game",
    "create_game",
    "get_winner",
    "is_game_over",
    "play_hand",
    "Hand",
    "PlayerView",
    "can_play",
    "can_play_any",
    "catch_uno_failure",
    "check_uno_failure",
    "create_hand",
    "draw",
    "has_ended",
    "pass_turn",
    "play",
    "say_uno",
    "score",
    "top_of_discard",
    "winner",
    "Action",
    "CatchUnoFailure",
    "DrawCard",
    "PassTurn",
    "PlayCard",
    "SayUno",
    "apply_action",
    "default_action",
    "get_legal_actions",
    "Shuffler",
    "identity_shuffler",
    "seeded_shuffler",
    "standard_shuffler",
]
