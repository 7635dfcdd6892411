"""Turn engine: the single entry point through which every actor plays."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Dict, Iterable, Optional, Sequence

from cybersystems.engine.actions import (
    PLAY_ACTIONS,
    Action,
    DiscardCard,
    DrawCard,
    EndPlay,
    SkipDraw,
    describe_action,
)
from cybersystems.engine.card import Card
from cybersystems.engine.deck import DEFAULT_DECK, DeckConfig
from cybersystems.engine.errors import InvariantViolation, MoveError
from cybersystems.engine.game_state import GameState, Phase
from cybersystems.engine.resolver import resolve
from cybersystems.engine.rules import (
    DEFAULT_RULES,
    RuleConfig,
    check_invariants,
    check_winner,
    init_game,
    validate,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActionResult:
    """Outcome of submit_action: the published state, or why it was rejected."""

    state: GameState
    error: Optional[MoveError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class GameEngine:
    """Owns the current GameState and advances it one action at a time.

    Actions are validated, resolved, checked for invariants and winners, and
    only then published. A rejected action leaves the state untouched.
    """

    def __init__(self, state: GameState, rules: RuleConfig = DEFAULT_RULES):
        self._rules = rules
        self._state = state
        self._expected_cards = state.total_cards()
        check_invariants(state, self._expected_cards)

    @classmethod
    def new_game(
        cls,
        player_ids: Sequence[str],
        seed: Optional[int] = None,
        names: Optional[Dict[str, str]] = None,
        bots: Iterable[str] = (),
        deck: Optional[Sequence[Card]] = None,
        deck_config: DeckConfig = DEFAULT_DECK,
        rules: RuleConfig = DEFAULT_RULES,
    ) -> "GameEngine":
        state = init_game(
            player_ids,
            seed=seed,
            names=names,
            bots=bots,
            deck=deck,
            deck_config=deck_config,
            rules=rules,
        )
        logger.info(
            "New game: players=%s seed=%s deck=%d cards",
            ",".join(player_ids), seed, len(state.deck),
        )
        return cls(state, rules=rules)

    @property
    def rules(self) -> RuleConfig:
        return self._rules

    def current_state(self) -> GameState:
        return self._state

    def load(self, state: GameState) -> None:
        """Replace the current state wholesale (resume or undo).

        A DISCARD state whose hand is already at the discard limit has no
        legal action, so the turn is passed on as the engine would have.
        """
        check_invariants(state)
        if (
            state.phase == Phase.DISCARD
            and not state.is_finished
            and len(state.current_player.hand) <= self._rules.discard_limit
        ):
            logger.info("Nothing left to discard for %s; passing the turn", state.current_player.id)
            state = self._next_turn(state)
        self._state = state
        self._expected_cards = state.total_cards()
        logger.info("Loaded state: %s to act, phase=%s", state.current_player.id, state.phase.value)

    def submit_action(self, action: Action) -> ActionResult:
        """Validate and apply an action.

        Returns the new state on success or the MoveError on rejection.
        Raises InvariantViolation, without publishing anything, if resolution
        produced a corrupted state.
        """
        error = validate(action, self._state, self._rules)
        if error is not None:
            logger.info("Rejected %s: %s", describe_action(action), error)
            return ActionResult(state=self._state, error=error)

        new_state = resolve(action, self._state, self._rules)
        try:
            check_invariants(new_state, self._expected_cards)
        except InvariantViolation:
            logger.error("Invariant violated after %s; action aborted", describe_action(action))
            raise

        winner = check_winner(new_state, actor_id=action.player_id)
        if winner is not None:
            new_state = replace(new_state, winner=winner, phase=Phase.FINISHED)
            logger.info("%s wins after %s", winner, describe_action(action))
        else:
            new_state = self._advance(new_state, action)

        logger.debug("Accepted %s", describe_action(action))
        self._state = new_state
        return ActionResult(state=new_state)

    def _advance(self, state: GameState, action: Action) -> GameState:
        """Apply the phase transition that follows an accepted action."""
        if isinstance(action, (DrawCard, SkipDraw)):
            return replace(state, phase=Phase.PLAY, plays_made=0)
        if isinstance(action, PLAY_ACTIONS):
            return replace(state, plays_made=state.plays_made + 1)
        if isinstance(action, (EndPlay, DiscardCard)):
            if len(state.current_player.hand) > self._rules.discard_limit:
                return replace(state, phase=Phase.DISCARD)
            return self._next_turn(state)
        raise TypeError(f"Unknown action: {action!r}")

    def _next_turn(self, state: GameState) -> GameState:
        next_index = (state.current_player_index + 1) % len(state.players)
        logger.debug("Turn passes to %s", state.players[next_index].id)
        return replace(
            state,
            current_player_index=next_index,
            phase=Phase.DRAW,
            plays_made=0,
        )
