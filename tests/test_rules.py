"""Unit tests for legal actions, action dispatch and the default decision."""

import pytest
from unorules.engine import (
    Card,
    CardType,
    CatchUnoFailure,
    Color,
    DrawCard,
    Hand,
    PassTurn,
    PlayCard,
    SayUno,
    apply_action,
    create_hand,
    default_action,
    draw,
    get_legal_actions,
    has_ended,
    identity_shuffler,
    seeded_shuffler,
)
from unorules.engine.errors import InvalidTurnError

R, B, G, Y = Color.RED, Color.BLUE, Color.GREEN, Color.YELLOW


def num(color: Color, number: int) -> Card:
    return Card(CardType.NUMBERED, color, number)


def make_hand(hands, discard, draw_pile=(), player_in_turn=0, uno_called=None) -> Hand:
    return Hand(
        players=tuple(f"p{i}" for i in range(len(hands))),
        hands=tuple(tuple(h) for h in hands),
        draw_pile=tuple(draw_pile),
        discard_pile=tuple(discard),
        current_color=discard[-1].color,
        player_in_turn=player_in_turn,
        uno_called=uno_called or tuple(False for _ in hands),
        shuffler=identity_shuffler,
    )


def test_legal_actions_player_in_turn() -> None:
    hand = create_hand(["A", "B"], dealer=0, shuffler=identity_shuffler)
    # B holds red 4-7 with red 7 on the discard pile
    actions = get_legal_actions(hand, 1)
    assert actions == [PlayCard(card_index=i) for i in range(7)] + [DrawCard()]


def test_legal_actions_player_not_in_turn() -> None:
    hand = create_hand(["A", "B"], dealer=0, shuffler=identity_shuffler)
    assert get_legal_actions(hand, 0) == []


def test_legal_actions_wild_per_color() -> None:
    hand = make_hand([[Card(CardType.WILD), num(B, 3), num(G, 3)], [num(G, 1)] * 3], [num(R, 7)], [num(Y, 1)])
    actions = get_legal_actions(hand, 0)
    assert actions == [PlayCard(card_index=0, chosen_color=c) for c in Color] + [DrawCard()]


def test_legal_actions_after_draw() -> None:
    hand = make_hand([[num(B, 3), num(G, 3), num(G, 4)], [num(G, 1)] * 3], [num(R, 7)], [num(Y, 1)])
    actions = get_legal_actions(draw(hand), 0)
    assert actions == [PassTurn()]


def test_legal_actions_nothing_to_draw() -> None:
    hand = make_hand([[num(B, 3), num(G, 3), num(G, 4)], [num(G, 1)] * 3], [num(R, 7)])
    assert get_legal_actions(hand, 0) == [PassTurn()]


def test_legal_actions_say_uno() -> None:
    hand = make_hand([[num(R, 3), num(B, 4)], [num(G, 1)] * 3], [num(R, 7)], [num(Y, 1)])
    assert SayUno() in get_legal_actions(hand, 0)
    called = make_hand(
        [[num(R, 3), num(B, 4)], [num(G, 1)] * 3], [num(R, 7)], [num(Y, 1)], uno_called=(True, False)
    )
    assert SayUno() not in get_legal_actions(called, 0)


def test_legal_actions_out_of_turn() -> None:
    hand = make_hand([[num(R, 3)] * 3, [num(G, 1)], [num(B, 1)]], [num(R, 7)], [num(Y, 1)] * 4)
    assert get_legal_actions(hand, 2) == [SayUno(), CatchUnoFailure(accused=1)]


def test_legal_actions_catch() -> None:
    hand = make_hand([[num(B, 3)] * 3, [num(G, 1)], [num(Y, 2)]], [num(R, 7)], [num(Y, 1)] * 4)
    actions = get_legal_actions(hand, 0)
    assert CatchUnoFailure(accused=1) in actions
    assert CatchUnoFailure(accused=2) in actions
    assert CatchUnoFailure(accused=0) not in actions


def test_legal_actions_ended_hand() -> None:
    hand = make_hand([[num(R, 3)], []], [num(R, 7)], player_in_turn=None)
    assert get_legal_actions(hand, 0) == []


def test_legal_actions_short_piles() -> None:
    wild_draw = Card(CardType.WILD_DRAW)
    hand = make_hand([[wild_draw, num(R, 3), num(B, 4)], [num(G, 1)]], [num(R, 7)], [num(Y, 1)])
    # one drawable card: no wild draw four and no catch
    assert get_legal_actions(hand, 0) == [PlayCard(card_index=1), DrawCard()]


def test_legal_actions_draw_two_uses_card_underneath() -> None:
    draw_two = Card(CardType.DRAW, R)
    hand = make_hand([[draw_two, num(B, 4)], [num(G, 1)] * 3], [num(R, 7)], [num(Y, 1)])
    assert PlayCard(card_index=0) in get_legal_actions(hand, 0)
    after = apply_action(hand, 0, PlayCard(card_index=0))
    assert after.hands[1][3:] == (num(Y, 1), num(R, 7))
    assert after.discard_pile == (draw_two,)
    assert after.player_in_turn == 0


def test_legal_actions_last_card_ignores_short_piles() -> None:
    hand = make_hand([[Card(CardType.WILD_DRAW)], [num(G, 1)] * 3], [num(R, 7)])
    assert PlayCard(card_index=0, chosen_color=G) in get_legal_actions(hand, 0)
    assert has_ended(apply_action(hand, 0, PlayCard(card_index=0, chosen_color=G)))


@pytest.mark.parametrize("seed", [3, 8])
def test_every_legal_action_applies_at_a_crowded_table(seed: int) -> None:
    players = [f"p{i}" for i in range(15)]
    hand = create_hand(players, dealer=0, shuffler=seeded_shuffler(seed))
    for _ in range(1500):
        if has_ended(hand):
            break
        for seat in range(hand.num_players):
            for action in get_legal_actions(hand, seat):
                apply_action(hand, seat, action)
        seat = hand.player_in_turn
        hand = apply_action(hand, seat, default_action(hand, seat, get_legal_actions(hand, seat)))


def test_apply_action_play() -> None:
    hand = create_hand(["A", "B"], dealer=0, shuffler=identity_shuffler)
    after = apply_action(hand, 1, PlayCard(card_index=0))
    assert len(after.hands[1]) == 6
    assert after.player_in_turn == 0


def test_apply_action_out_of_turn() -> None:
    hand = create_hand(["A", "B"], dealer=0, shuffler=identity_shuffler)
    with pytest.raises(InvalidTurnError):
        apply_action(hand, 0, PlayCard(card_index=0))
    with pytest.raises(InvalidTurnError):
        apply_action(hand, 0, DrawCard())


def test_apply_action_say_uno_out_of_turn() -> None:
    hand = create_hand(["A", "B"], dealer=0, shuffler=identity_shuffler)
    after = apply_action(hand, 0, SayUno())
    assert after.uno_called == (True, False)


def test_apply_action_catch() -> None:
    hand = make_hand([[num(B, 3)] * 3, [num(G, 1)]], [num(R, 7)], [num(Y, 1)] * 4)
    after = apply_action(hand, 0, CatchUnoFailure(accused=1))
    assert len(after.hands[1]) == 5


def test_default_action_prefers_catch() -> None:
    hand = make_hand([[num(R, 3)] * 3, [num(G, 1)]], [num(R, 7)], [num(Y, 1)] * 4)
    legal = get_legal_actions(hand, 0)
    assert default_action(hand, 0, legal) == CatchUnoFailure(accused=1)


def test_default_action_says_uno_on_last_card() -> None:
    hand = make_hand([[num(R, 3)], [num(G, 1)] * 3], [num(R, 7)], [num(Y, 1)])
    legal = get_legal_actions(hand, 0)
    assert default_action(hand, 0, legal) == SayUno()


def test_default_action_plays_before_calling_with_two_cards() -> None:
    hand = make_hand([[num(B, 3), num(R, 3)], [num(G, 1)] * 3], [num(R, 7)], [num(Y, 1)])
    legal = get_legal_actions(hand, 0)
    assert default_action(hand, 0, legal) == PlayCard(card_index=1)


def test_default_action_wild_picks_common_color() -> None:
    hand = make_hand(
        [[Card(CardType.WILD), num(G, 3), num(G, 4), num(B, 2)], [num(G, 1)] * 3],
        [num(R, 7)],
        [num(Y, 1)],
    )
    legal = get_legal_actions(hand, 0)
    assert default_action(hand, 0, legal) == PlayCard(card_index=0, chosen_color=G)


def test_default_action_draw_then_pass() -> None:
    hand = make_hand([[num(B, 3), num(G, 3), num(G, 4)], [num(G, 1)] * 3], [num(R, 7)], [num(Y, 1)])
    assert default_action(hand, 0, get_legal_actions(hand, 0)) == DrawCard()
    drawn = draw(hand)
    assert default_action(drawn, 0, get_legal_actions(drawn, 0)) == PassTurn()


@pytest.mark.parametrize("seed", [1, 2, 3])
def test_card_total_invariant(seed: int) -> None:
    hand = create_hand(["A", "B", "C"], dealer=0, shuffler=seeded_shuffler(seed))
    total = hand.total_cards()
    assert total == 108
    for _ in range(2000):
        if has_ended(hand):
            break
        seat = hand.player_in_turn
        legal = get_legal_actions(hand, seat)
        hand = apply_action(hand, seat, default_action(hand, seat, legal))
        assert hand.total_cards() == total
