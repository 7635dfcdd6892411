"""Tournament - run many games and aggregate results."""

import logging
import random
from collections import defaultdict
from typing import Any

from cybersystems.engine.rules import DEFAULT_RULES, RuleConfig
from cybersystems.orchestration.game_runner import GameRunner

logger = logging.getLogger(__name__)


def run_tournament(
    agents: dict[str, Any],
    num_games: int = 100,
    seed: int | None = None,
    rules: RuleConfig = DEFAULT_RULES,
    max_turns: int = 500,
) -> dict[str, int]:
    """Run a series of games between the same agents.

    Seat order alternates between games. Each game's deck seed is drawn
    from random.Random(seed), so a fixed seed replays the whole series.

    Returns:
        Dict mapping player_id to number of wins; "draw" counts games
        that hit max_turns without a winner.
    """
    player_ids = list(agents.keys())
    wins: dict[str, int] = defaultdict(int)

    rng = random.Random(seed)
    for g in range(num_games):
        order = player_ids if g % 2 == 0 else list(reversed(player_ids))
        ordered_agents = {pid: agents[pid] for pid in order}
        game_seed = rng.randint(0, 2**31 - 1)
        runner = GameRunner(ordered_agents, seed=game_seed, rules=rules, max_turns=max_turns)
        result = runner.run()
        wins[result.winner or "draw"] += 1
        logger.debug("Game %d (seed=%d): winner=%s", g, game_seed, result.winner)

    return dict(wins)
