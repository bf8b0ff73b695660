"""Tournament - run many matches and aggregate results."""

import random
from collections import defaultdict
from typing import Any

from unorules.engine.game import TARGET_SCORE
from unorules.orchestration.match_runner import MatchRunner


def run_tournament(
    agents: dict[str, Any],
    num_matches: int = 10,
    target_score: int = TARGET_SCORE,
    seed: int | None = None,
) -> dict[str, int]:
    """Run a series of matches between the same agents.

    Seat order alternates between matches so no player always deals first.

    Returns:
        Dict mapping player_id to number of match wins.
    """
    player_ids = list(agents.keys())
    wins: dict[str, int] = defaultdict(int)

    rng = random.Random(seed)
    for m in range(num_matches):
        order = player_ids if m % 2 == 0 else list(reversed(player_ids))
        ordered_agents = {pid: agents[pid] for pid in order}
        runner = MatchRunner(
            ordered_agents,
            target_score=target_score,
            seed=rng.randint(0, 2**31 - 1),
        )
        result = runner.run()
        if result.winner:
            wins[result.winner] += 1

    return dict(wins)
