"""Simulate a match with random agents, printing each hand's events."""

from unorules.agents import RandomAgent
from unorules.engine import create_game, get_winner, is_game_over, play_hand, seeded_shuffler


def main():
    agents = {pid: RandomAgent(name=f"Bot{i}", seed=i) for i, pid in enumerate(["p1", "p2", "p3", "p4"])}
    game = create_game(list(agents), target_score=200, shuffler=seeded_shuffler(42))

    printed = 0
    hand_number = 1
    print("--- Hand 1 ---")
    while not is_game_over(game):
        game = play_hand(game, agents)
        hand = game.hands[hand_number - 1]
        for event in hand.history[printed:]:
            print(f"> {event}")
        printed = len(hand.history)
        if len(game.hands) > hand_number:
            # A new hand was dealt
            hand_number = len(game.hands)
            printed = 0
            print(f"--- Hand {hand_number} --- scores: {game.scores}")

    print(f"Match finished! Winner: {get_winner(game)}")
    print(f"Hands: {len(game.hands)}  Final scores: {game.scores}")


if __name__ == "__main__":
    main()
