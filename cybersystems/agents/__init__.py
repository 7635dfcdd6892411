"""Built-in agents."""

from cybersystems.agents.heuristic_bot import HeuristicBot
from cybersystems.agents.human_agent import HumanAgent

__all__ = ["HeuristicBot", "HumanAgent"]
