"""Single game runner."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Sequence

from cybersystems.engine import (
    Card,
    DeckConfig,
    GameEngine,
    GameState,
    PlayerView,
    RuleConfig,
    describe_action,
    get_legal_actions,
)
from cybersystems.engine.deck import DEFAULT_DECK
from cybersystems.engine.rules import DEFAULT_RULES
from cybersystems.orchestration.history import ActionLog

if TYPE_CHECKING:
    from cybersystems.agent.protocol import AgentProtocol

logger = logging.getLogger(__name__)


@dataclass
class GameResult:
    """Result of a completed game."""

    winner: Optional[str]
    num_turns: int
    num_actions: int
    player_ids: tuple[str, ...]
    final_state: GameState
    log: ActionLog


class GameRunner:
    """Runs a single Cyber Systems game to completion.

    Every agent's choice goes through GameEngine.submit_action.
    """

    def __init__(
        self,
        agents: dict[str, "AgentProtocol"],
        seed: Optional[int] = None,
        rules: RuleConfig = DEFAULT_RULES,
        deck_config: DeckConfig = DEFAULT_DECK,
        deck: Optional[Sequence[Card]] = None,
        max_turns: int = 500,
        max_rejections: int = 3,
    ):
        self._agents = agents
        self._seed = seed
        self._rules = rules
        self._deck_config = deck_config
        self._deck = deck
        self._max_turns = max_turns
        self._max_rejections = max_rejections

    def run(self) -> GameResult:
        """Run the game and return the result."""
        player_ids = list(self._agents.keys())
        engine = GameEngine.new_game(
            player_ids,
            seed=self._seed,
            names={pid: agent.name for pid, agent in self._agents.items()},
            bots=[pid for pid, agent in self._agents.items() if getattr(agent, "is_bot", False)],
            deck=self._deck,
            deck_config=self._deck_config,
            rules=self._rules,
        )
        log = ActionLog(engine.current_state())
        num_turns = 0

        state = engine.current_state()
        while state.winner is None and num_turns < self._max_turns:
            pid = state.current_player.id
            index = state.current_player_index
            self._play_one(engine, log, pid)
            state = engine.current_state()
            if state.current_player_index != index:
                num_turns += 1

        if state.winner is None:
            logger.info("No winner after %d turns", num_turns)
        else:
            logger.info("%s won after %d turns", state.winner, num_turns)
        return GameResult(
            winner=state.winner,
            num_turns=num_turns,
            num_actions=len(log),
            player_ids=tuple(player_ids),
            final_state=state,
            log=log,
        )

    def _play_one(self, engine: GameEngine, log: ActionLog, pid: str) -> None:
        """Ask the acting agent for one action and submit it."""
        agent = self._agents[pid]
        for _ in range(self._max_rejections):
            state = engine.current_state()
            legal = get_legal_actions(state, pid, self._rules)
            if not legal:
                raise RuntimeError(f"{pid} has no legal action in {state.phase.value}")
            player_view = PlayerView.from_state(state, pid)
            action = agent.get_action(player_view, legal, pid) or legal[0]
            result = engine.submit_action(action)
            if result.ok:
                log.record(action, result.state)
                return
            agent.on_rejected(result.error)

        state = engine.current_state()
        fallback = get_legal_actions(state, pid, self._rules)[0]
        logger.warning(
            "%s rejected %d times; falling back to %s",
            pid, self._max_rejections, describe_action(fallback),
        )
        result = engine.submit_action(fallback)
        log.record(fallback, result.state)
