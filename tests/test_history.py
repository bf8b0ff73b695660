"""Unit tests for hand history logging."""

from dataclasses import replace

from unorules.engine import (
    Card,
    CardType,
    Color,
    DrawCard,
    PlayCard,
    PlayerView,
    apply_action,
    create_hand,
    identity_shuffler,
    seeded_shuffler,
)


def test_history_initialization():
    hand = create_hand(["p1", "p2"], shuffler=seeded_shuffler(42))
    assert len(hand.history) == 0


def test_history_records_play():
    hand = create_hand(["p1", "p2"], shuffler=identity_shuffler)
    # p2 sits after the dealer and holds only red cards
    card = hand.hands[1][0]
    hand = apply_action(hand, 1, PlayCard(card_index=0))

    assert len(hand.history) == 1
    assert "p2 played" in hand.history[0]
    assert str(card) in hand.history[0]


def test_history_records_wild_color():
    hand = create_hand(["p1", "p2"], shuffler=identity_shuffler)
    hand = replace(hand, hands=(hand.hands[0], (Card(CardType.WILD),) + hand.hands[1][1:]))
    hand = apply_action(hand, 1, PlayCard(card_index=0, chosen_color=Color.GREEN))

    assert hand.history == ("p2 played wild (chose green)",)


def test_history_records_draw():
    hand = create_hand(["p1", "p2"], shuffler=seeded_shuffler(42))
    seat = hand.player_in_turn
    hand = apply_action(hand, seat, DrawCard())

    assert hand.history[-1] == f"{hand.players[seat]} drew a card"


def test_history_persists_across_turns():
    hand = create_hand(["p1", "p2"], shuffler=identity_shuffler)

    # Turn 1: p2 plays a red card
    hand = apply_action(hand, 1, PlayCard(card_index=0))
    # Turn 2: p1 draws
    hand = apply_action(hand, 0, DrawCard())

    assert len(hand.history) == 2
    assert "p2 played" in hand.history[0]
    assert "p1 drew" in hand.history[1]


def test_player_view_keeps_last_ten_events():
    hand = create_hand(["p1", "p2"], shuffler=identity_shuffler)
    # Red 4-7 for p2, red 0-3 for p1: alternate plays stay legal
    for _ in range(6):
        seat = hand.player_in_turn
        hand = apply_action(hand, seat, PlayCard(card_index=0))
    hand = replace(hand, history=hand.history * 3)

    view = PlayerView.from_hand(hand, 0)
    assert len(view.history) == 10
    assert view.history == list(hand.history[-10:])
