"""Action resolution: validated action in, new immutable state out."""

from dataclasses import replace
from typing import Callable, Dict

from cybersystems.engine.actions import (
    Action,
    DiscardCard,
    DrawCard,
    EndPlay,
    PlayDefense,
    PlayMalware,
    PlayModule,
    PlayOperation,
    SkipDraw,
)
from cybersystems.engine.card import Card, Modifier, OperationEffect
from cybersystems.engine.game_state import GameState, Player
from cybersystems.engine.rules import DEFAULT_RULES, DEFENSE_TRANSITIONS, RuleConfig


def _take_from_hand(player: Player, card_id: int) -> tuple[Player, Card]:
    hand = list(player.hand)
    for i, card in enumerate(hand):
        if card.id == card_id:
            hand.pop(i)
            return replace(player, hand=tuple(hand)), card
    raise ValueError(f"Card #{card_id} not in {player.id}'s hand")


def _unslot(card: Card) -> Card:
    """A module leaving a system goes back to a plain card."""
    return replace(card, modifier=None, slot=None)


def _to_discard(player: Player, *cards: Card) -> Player:
    return replace(player, discard_pile=player.discard_pile + tuple(_unslot(c) for c in cards))


def _replace_slot(player: Player, old: Card, new: Card) -> Player:
    return replace(player, system=tuple(new if c.id == old.id else c for c in player.system))


def _remove_slot(player: Player, card: Card) -> Player:
    return replace(player, system=tuple(c for c in player.system if c.id != card.id))


def _play_card(state: GameState, action: Action) -> tuple[GameState, Player, Card]:
    """Remove the played card from the actor's hand."""
    actor, card = _take_from_hand(state.get_player(action.player_id), action.card_id)
    return state.with_player(actor), actor, card


def _resolve_module(state: GameState, action: PlayModule, rules: RuleConfig) -> GameState:
    state, actor, card = _play_card(state, action)
    placed = replace(card, modifier=Modifier.NONE, slot=action.slot)
    return state.with_player(replace(actor, system=actor.system + (placed,)))


def _resolve_malware(state: GameState, action: PlayMalware, rules: RuleConfig) -> GameState:
    state, actor, card = _play_card(state, action)
    state = state.with_player(_to_discard(actor, card))

    target = state.get_player(action.target_player)
    module = target.slot(action.slot)
    if module.modifier == Modifier.INFECTED and rules.malware_destroys_infected:
        target = _to_discard(_remove_slot(target, module), module)
    else:
        target = _replace_slot(target, module, replace(module, modifier=Modifier.INFECTED))
    return state.with_player(target)


def _resolve_defense(state: GameState, action: PlayDefense, rules: RuleConfig) -> GameState:
    """Move the slot one step along DEFENSE_TRANSITIONS.

    Immunizing needs a PROTECTED slot, so a bare module takes two defense
    cards to become IMMUNE and an infected one takes three.
    """
    state, actor, card = _play_card(state, action)
    module = actor.slot(action.slot)
    treated = replace(module, modifier=DEFENSE_TRANSITIONS[module.modifier])
    actor = _to_discard(_replace_slot(actor, module, treated), card)
    return state.with_player(actor)


def _force_discard(state: GameState, actor: Player, action: PlayOperation, rules: RuleConfig) -> GameState:
    for player in state.players:
        if player.id != actor.id and player.hand:
            state = state.with_player(replace(_to_discard(player, *player.hand), hand=()))
    return state


def _extra_draw(state: GameState, actor: Player, action: PlayOperation, rules: RuleConfig) -> GameState:
    deck = list(state.deck)
    hand = list(actor.hand)
    for _ in range(rules.extra_draw_count):
        if not deck or len(hand) >= rules.max_hand_size:
            break
        hand.append(deck.pop())
    state = replace(state, deck=tuple(deck))
    return state.with_player(replace(actor, hand=tuple(hand)))


def _module_theft(state: GameState, actor: Player, action: PlayOperation, rules: RuleConfig) -> GameState:
    target = state.get_player(action.target_player)
    module = target.slot(action.slot)
    state = state.with_player(_remove_slot(target, module))
    return state.with_player(replace(actor, system=actor.system + (module,)))


def _card_swap(state: GameState, actor: Player, action: PlayOperation, rules: RuleConfig) -> GameState:
    target = state.get_player(action.target_player)
    mine = actor.slot(action.slot)
    theirs = target.slot(action.target_slot)
    actor = replace(actor, system=_remove_slot(actor, mine).system + (theirs,))
    target = replace(target, system=_remove_slot(target, theirs).system + (mine,))
    return state.with_player(actor).with_player(target)


def _system_swap(state: GameState, actor: Player, action: PlayOperation, rules: RuleConfig) -> GameState:
    target = state.get_player(action.target_player)
    swapped_actor = replace(actor, system=target.system)
    swapped_target = replace(target, system=actor.system)
    return state.with_player(swapped_actor).with_player(swapped_target)


_OPERATIONS: Dict[OperationEffect, Callable[[GameState, Player, PlayOperation, RuleConfig], GameState]] = {
    OperationEffect.FORCE_DISCARD: _force_discard,
    OperationEffect.EXTRA_DRAW: _extra_draw,
    OperationEffect.MODULE_THEFT: _module_theft,
    OperationEffect.CARD_SWAP: _card_swap,
    OperationEffect.SYSTEM_SWAP: _system_swap,
}


def _resolve_operation(state: GameState, action: PlayOperation, rules: RuleConfig) -> GameState:
    state, actor, card = _play_card(state, action)
    if card.effect not in _OPERATIONS:
        raise ValueError(f"Operation card #{card.id} has no effect")
    actor = _to_discard(actor, card)
    state = state.with_player(actor)
    return _OPERATIONS[card.effect](state, actor, action, rules)


def _resolve_draw(state: GameState, action: DrawCard, rules: RuleConfig) -> GameState:
    if not state.deck:
        return state
    deck = list(state.deck)
    actor = state.get_player(action.player_id)
    actor = replace(actor, hand=actor.hand + (deck.pop(),))
    return replace(state, deck=tuple(deck)).with_player(actor)


def _resolve_discard(state: GameState, action: DiscardCard, rules: RuleConfig) -> GameState:
    actor, card = _take_from_hand(state.get_player(action.player_id), action.card_id)
    return state.with_player(_to_discard(actor, card))


def resolve(action: Action, state: GameState, rules: RuleConfig = DEFAULT_RULES) -> GameState:
    """Apply a validated action and return the new game state.

    Phase changes, turn order and the winner are left to the turn engine.
    """
    if isinstance(action, PlayModule):
        return _resolve_module(state, action, rules)
    if isinstance(action, PlayMalware):
        return _resolve_malware(state, action, rules)
    if isinstance(action, PlayDefense):
        return _resolve_defense(state, action, rules)
    if isinstance(action, PlayOperation):
        return _resolve_operation(state, action, rules)
    if isinstance(action, DrawCard):
        return _resolve_draw(state, action, rules)
    if isinstance(action, DiscardCard):
        return _resolve_discard(state, action, rules)
    if isinstance(action, (SkipDraw, EndPlay)):
        return state
    raise TypeError(f"Unknown action: {action!r}")
