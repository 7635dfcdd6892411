"""Simulate a game between heuristic bots and print its history."""

import logging

from cybersystems.agents import HeuristicBot
from cybersystems.orchestration.game_runner import GameRunner


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    agents = {
        "p1": HeuristicBot("Bot1"),
        "p2": HeuristicBot("Bot2"),
        "p3": HeuristicBot("Bot3"),
    }

    runner = GameRunner(agents, seed=42)
    result = runner.run()

    for line in result.log.describe(last=20):
        print(f"> {line}")

    print(f"Game finished! Winner: {result.winner}")
    print(f"Turns: {result.num_turns}")
    for player in result.final_state.players:
        print(f"  {player.name}: {' '.join(str(c) for c in player.system) or '(empty)'}")


if __name__ == "__main__":
    main()
