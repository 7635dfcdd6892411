"""Heuristic bot - deterministic rule-based strategy.

Priorities during the Play phase, first match wins:
1. Install the module that completes its own system.
2. Treat one of its own modules: immunize, then cure, then protect.
3. Infect the opponent closest to winning.
4. Install any other module it can.
5. Play an operation that gains it modules or costs the leader some.
6. End play.

The bot only sees a PlayerView and never consults a random source, so
equal views give equal actions.
"""

import logging
from dataclasses import replace
from typing import Optional, Sequence

from cybersystems.engine import (
    Action,
    Card,
    CardType,
    Color,
    DiscardCard,
    EndPlay,
    GameState,
    Modifier,
    MoveError,
    Phase,
    PlayDefense,
    PlayMalware,
    PlayModule,
    PlayOperation,
    Player,
    PlayerView,
    get_legal_actions,
    resolve,
    system_is_complete,
)
from cybersystems.engine.card import color_ordinal
from cybersystems.engine.rules import DEFAULT_RULES, RuleConfig

logger = logging.getLogger(__name__)

# Lower is better: immunize a protected module, cure an infected one, protect a clean one.
_DEFENSE_PRIORITY = {
    Modifier.PROTECTED: 0,
    Modifier.INFECTED: 1,
    Modifier.NONE: 2,
}


def _healthy(system: Sequence[Card]) -> int:
    return sum(1 for card in system if card.modifier != Modifier.INFECTED)


def _slot(system: Sequence[Card], color: Color) -> Optional[Card]:
    return next((card for card in system if card.slot == color), None)


def _leader(view: PlayerView) -> Optional[str]:
    """Opponent with the most healthy modules; ties go to the lowest seat."""
    opponents = [pid for pid in view.player_order if pid != view.player_id]
    if not opponents:
        return None
    return min(
        opponents,
        key=lambda pid: (-_healthy(view.systems[pid]), view.player_order.index(pid)),
    )


def _public_state(view: PlayerView) -> GameState:
    """GameState holding only what the view shows: other hands and the deck stay empty."""
    players = tuple(
        Player(
            id=pid,
            name=view.names.get(pid, pid),
            hand=tuple(view.my_hand) if pid == view.player_id else (),
            system=tuple(view.systems[pid]),
        )
        for pid in view.player_order
    )
    return GameState(
        players=players,
        deck=(),
        current_player_index=view.player_order.index(view.current_player),
        phase=view.phase,
    )


def _can_place(card: Card, system: Sequence[Card]) -> bool:
    if card.is_wildcard:
        return not any(c.is_wildcard for c in system) and len(system) < 4
    return _slot(system, card.color) is None


def _has_mark(card: Card, view: PlayerView) -> bool:
    """Whether a malware card has any opponent module it could infect."""
    for pid, system in view.systems.items():
        if pid == view.player_id:
            continue
        for module in system:
            if module.modifier == Modifier.IMMUNE:
                continue
            if card.is_wildcard or module.is_wildcard or module.color == card.color:
                return True
    return False


def _can_treat(card: Card, system: Sequence[Card]) -> bool:
    for module in system:
        if module.modifier == Modifier.IMMUNE:
            continue
        if card.is_wildcard or module.is_wildcard or module.color == card.color:
            return True
    return False


def card_usefulness(card: Card, view: PlayerView) -> int:
    """Score used for discards: 0 is dead weight, 2 is playable now."""
    mine = view.systems[view.player_id]
    if card.type == CardType.MODULE:
        return 2 if _can_place(card, mine) else 0
    if card.type == CardType.MALWARE:
        return 2 if _has_mark(card, view) else 0
    if card.type == CardType.DEFENSE:
        return 2 if _can_treat(card, mine) else 0
    return 1 if card.effect is not None else 0


class HeuristicBot:
    """Agent that plays by fixed priorities."""

    is_bot = True

    def __init__(self, name: str = "bot", rules: RuleConfig = DEFAULT_RULES):
        self._name = name
        self._rules = rules

    @property
    def name(self) -> str:
        return self._name

    def get_action(
        self,
        player_view: PlayerView,
        legal_actions: list[Action],
        player_id: str,
    ) -> Action | None:
        if not legal_actions:
            return None
        return self.choose(player_view, legal_actions)

    def on_rejected(self, error: MoveError) -> None:
        logger.warning("[%s] action rejected: %s", self.name, error)

    def decide(self, state: GameState) -> Action:
        """Choose the action for the player whose turn it is."""
        if state.is_finished:
            raise ValueError("Game is over; nothing to decide")
        me = state.current_player
        legal = get_legal_actions(state, me.id, self._rules)
        if not legal:
            raise ValueError(f"No legal action for {me.id} in {state.phase.value}")
        return self.choose(PlayerView.from_state(state, me.id), legal)

    def choose(self, view: PlayerView, legal: list[Action]) -> Action:
        """Pick one of the legal actions using only what the view shows."""
        if view.phase == Phase.DISCARD:
            return self._choose_discard(view, legal)
        if view.phase == Phase.PLAY:
            return self._choose_play(view, legal)
        # Draw phase: exactly one of draw / skip-draw is legal.
        return legal[0]

    def _choose_play(self, view: PlayerView, legal: list[Action]) -> Action:
        mine = view.systems[view.player_id]
        hand = {card.id: card for card in view.my_hand}

        modules = [a for a in legal if isinstance(a, PlayModule)]
        for action in modules:
            placed = replace(hand[action.card_id], modifier=Modifier.NONE, slot=action.slot)
            if system_is_complete(tuple(mine) + (placed,)):
                logger.debug("[%s] completing system with %s", self.name, action)
                return action

        defenses = [
            (i, a) for i, a in enumerate(legal) if isinstance(a, PlayDefense)
        ]
        if defenses:
            _, action = min(
                defenses,
                key=lambda pair: (
                    _DEFENSE_PRIORITY[_slot(mine, pair[1].slot).modifier],
                    color_ordinal(pair[1].slot),
                    pair[0],
                ),
            )
            return action

        leader = _leader(view)
        if leader is not None:
            attacks = [
                (i, a) for i, a in enumerate(legal)
                if isinstance(a, PlayMalware) and a.target_player == leader
            ]
            if attacks:
                _, action = min(attacks, key=lambda pair: (color_ordinal(pair[1].slot), pair[0]))
                return action

        if modules:
            return min(
                enumerate(modules),
                key=lambda pair: (
                    hand[pair[1].card_id].is_wildcard,
                    color_ordinal(pair[1].slot),
                    pair[0],
                ),
            )[1]

        operation = self._best_operation(view, leader, legal)
        if operation is not None:
            return operation

        return next(a for a in legal if isinstance(a, EndPlay))

    def _best_operation(
        self,
        view: PlayerView,
        leader: Optional[str],
        legal: list[Action],
    ) -> Optional[Action]:
        # Operation gains only depend on systems, which the view shows in full.
        state = _public_state(view)
        before = {pid: _healthy(system) for pid, system in view.systems.items()}
        best: Optional[Action] = None
        best_gain = 0
        for action in legal:
            if not isinstance(action, PlayOperation):
                continue
            after = resolve(action, state, self._rules)
            gain = after.get_player(view.player_id).healthy_modules() - before[view.player_id]
            if leader is not None:
                gain += before[leader] - after.get_player(leader).healthy_modules()
            if gain > best_gain:
                best, best_gain = action, gain
        return best

    def _choose_discard(self, view: PlayerView, legal: list[Action]) -> Action:
        positions = {card.id: i for i, card in enumerate(view.my_hand)}
        hand = {card.id: card for card in view.my_hand}
        discards = [a for a in legal if isinstance(a, DiscardCard)]
        return min(
            discards,
            key=lambda a: (
                card_usefulness(hand[a.card_id], view),
                positions[a.card_id],
            ),
        )
