"""Cyber Systems rules: setup, move validation, legal actions and winners."""

from collections import Counter
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence

from cybersystems.engine.actions import (
    PLAY_ACTIONS,
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
from cybersystems.engine.card import (
    SLOT_COLORS,
    Card,
    CardType,
    Color,
    Modifier,
    OperationEffect,
)
from cybersystems.engine.deck import DEFAULT_DECK, DeckConfig, DeckConfigError, generate_deck
from cybersystems.engine.errors import InvariantViolation, MoveError, MoveErrorCode
from cybersystems.engine.game_state import GameState, Phase, Player


@dataclass(frozen=True)
class RuleConfig:
    """Tunable rule parameters."""

    initial_hand_size: int = 3
    max_hand_size: int = 6  # no draw at or above this
    discard_limit: int = 3  # hand size to discard down to at end of turn
    plays_per_turn: int = 1
    extra_draw_count: int = 2
    malware_destroys_infected: bool = False

    def __post_init__(self) -> None:
        if self.initial_hand_size < 0:
            raise ValueError("initial_hand_size must not be negative")
        if self.plays_per_turn < 1:
            raise ValueError("plays_per_turn must be at least 1")
        if self.extra_draw_count < 0:
            raise ValueError("extra_draw_count must not be negative")
        if not 0 <= self.discard_limit < self.max_hand_size:
            raise ValueError("discard_limit must be in [0, max_hand_size)")
        if self.initial_hand_size > self.max_hand_size:
            raise ValueError("initial_hand_size must not exceed max_hand_size")


DEFAULT_RULES = RuleConfig()

# Modifier a defense card leaves behind, keyed by the modifier it finds.
DEFENSE_TRANSITIONS: Dict[Modifier, Modifier] = {
    Modifier.INFECTED: Modifier.NONE,  # cure
    Modifier.NONE: Modifier.PROTECTED,  # protect
    Modifier.PROTECTED: Modifier.IMMUNE,  # immunize
}


def init_game(
    player_ids: Sequence[str],
    seed: Optional[int] = None,
    names: Optional[Dict[str, str]] = None,
    bots: Iterable[str] = (),
    deck: Optional[Sequence[Card]] = None,
    deck_config: DeckConfig = DEFAULT_DECK,
    rules: RuleConfig = DEFAULT_RULES,
) -> GameState:
    """Create the initial game state and deal starting hands.

    An explicit deck (top = last element) overrides deck generation.
    """
    if len(player_ids) < 2:
        raise DeckConfigError("At least 2 players are required")
    if len(set(player_ids)) != len(player_ids):
        raise DeckConfigError(f"Duplicate player ids: {list(player_ids)}")

    cards = list(deck) if deck is not None else generate_deck(seed=seed, config=deck_config)
    if len(cards) < rules.initial_hand_size * len(player_ids):
        raise DeckConfigError(
            f"Deck of {len(cards)} cards cannot deal {rules.initial_hand_size} "
            f"to {len(player_ids)} players"
        )
    if any(card.in_slot for card in cards):
        raise DeckConfigError("Deck cards must not carry a slot")

    names = names or {}
    bot_ids = set(bots)
    hands: dict[str, list[Card]] = {pid: [] for pid in player_ids}
    for _ in range(rules.initial_hand_size):
        for pid in player_ids:
            hands[pid].append(cards.pop())

    players = tuple(
        Player(
            id=pid,
            name=names.get(pid, pid),
            is_bot=pid in bot_ids,
            hand=tuple(hands[pid]),
        )
        for pid in player_ids
    )
    return GameState(players=players, deck=tuple(cards))


def _err(code: MoveErrorCode, message: str) -> MoveError:
    return MoveError(code=code, message=message)


def _colors_match(card: Card, module: Card) -> bool:
    """Malware/defense color vs a slotted module; purple matches anything."""
    return card.is_wildcard or module.is_wildcard or card.color == module.color


def _opponent(state: GameState, actor: Player, target_id: Optional[str]) -> Optional[Player]:
    if target_id is None or target_id == actor.id:
        return None
    return state.get_player(target_id)


def _check_slot(slot: Optional[Color]) -> Optional[MoveError]:
    if slot not in SLOT_COLORS:
        return _err(MoveErrorCode.INVALID_TARGET, f"{slot} is not a system slot")
    return None


def _validate_module(action: PlayModule, actor: Player, card: Card) -> Optional[MoveError]:
    error = _check_slot(action.slot)
    if error:
        return error
    if actor.slot(action.slot) is not None:
        return _err(MoveErrorCode.SLOT_OCCUPIED, f"{action.slot.value} slot is occupied")
    if card.color == action.slot:
        return None
    if card.is_wildcard:
        if actor.has_wildcard_module():
            return _err(MoveErrorCode.COLOR_MISMATCH, "system already holds a wildcard module")
        return None
    return _err(
        MoveErrorCode.COLOR_MISMATCH,
        f"{card.color.value} module cannot fill the {action.slot.value} slot",
    )


def _validate_malware(
    action: PlayMalware, actor: Player, card: Card, state: GameState
) -> Optional[MoveError]:
    target = _opponent(state, actor, action.target_player)
    if target is None:
        return _err(MoveErrorCode.INVALID_TARGET, "malware must target an opponent")
    error = _check_slot(action.slot)
    if error:
        return error
    module = target.slot(action.slot)
    if module is None:
        return _err(MoveErrorCode.EMPTY_TARGET, f"{target.id} has no {action.slot.value} module")
    if not _colors_match(card, module):
        return _err(
            MoveErrorCode.COLOR_MISMATCH,
            f"{card.color.value} malware cannot infect a {module.color.value} module",
        )
    if module.modifier == Modifier.IMMUNE:
        return _err(MoveErrorCode.TARGET_IMMUNE, f"{target.id}'s {action.slot.value} module is immune")
    return None


def _validate_defense(action: PlayDefense, actor: Player, card: Card) -> Optional[MoveError]:
    error = _check_slot(action.slot)
    if error:
        return error
    module = actor.slot(action.slot)
    if module is None:
        return _err(MoveErrorCode.EMPTY_TARGET, f"no module in the {action.slot.value} slot")
    if not _colors_match(card, module):
        return _err(
            MoveErrorCode.COLOR_MISMATCH,
            f"{card.color.value} defense cannot treat a {module.color.value} module",
        )
    if module.modifier == Modifier.IMMUNE:
        return _err(MoveErrorCode.TARGET_IMMUNE, "module is already immune")
    return None


def _validate_operation(
    action: PlayOperation, actor: Player, card: Card, state: GameState
) -> Optional[MoveError]:
    effect = card.effect
    if effect is None:
        return _err(MoveErrorCode.UNKNOWN_EFFECT, f"card #{card.id} has no encoded effect")

    if effect == OperationEffect.FORCE_DISCARD:
        if not any(p.hand for p in state.players if p.id != actor.id):
            return _err(MoveErrorCode.EMPTY_TARGET, "no opponent holds any card")
        return None

    if effect == OperationEffect.EXTRA_DRAW:
        if not state.deck:
            return _err(MoveErrorCode.EMPTY_TARGET, "deck is empty")
        return None

    target = _opponent(state, actor, action.target_player)
    if target is None:
        return _err(MoveErrorCode.INVALID_TARGET, f"{effect.value} must target an opponent")

    if effect == OperationEffect.SYSTEM_SWAP:
        return None

    if effect == OperationEffect.MODULE_THEFT:
        error = _check_slot(action.slot)
        if error:
            return error
        module = target.slot(action.slot)
        if module is None:
            return _err(MoveErrorCode.EMPTY_TARGET, f"{target.id} has no {action.slot.value} module")
        if module.modifier == Modifier.IMMUNE:
            return _err(MoveErrorCode.TARGET_IMMUNE, "immune modules cannot be stolen")
        if actor.slot(action.slot) is not None:
            return _err(MoveErrorCode.SLOT_OCCUPIED, f"{action.slot.value} slot is occupied")
        if module.is_wildcard and actor.has_wildcard_module():
            return _err(MoveErrorCode.COLOR_MISMATCH, "system already holds a wildcard module")
        return None

    if effect == OperationEffect.CARD_SWAP:
        error = _check_slot(action.slot) or _check_slot(action.target_slot)
        if error:
            return error
        mine = actor.slot(action.slot)
        theirs = target.slot(action.target_slot)
        if mine is None or theirs is None:
            return _err(MoveErrorCode.EMPTY_TARGET, "both swapped slots must be occupied")
        if Modifier.IMMUNE in (mine.modifier, theirs.modifier):
            return _err(MoveErrorCode.TARGET_IMMUNE, "immune modules cannot be swapped")
        if action.slot != action.target_slot:
            if actor.slot(action.target_slot) is not None or target.slot(action.slot) is not None:
                return _err(MoveErrorCode.SLOT_OCCUPIED, "swap would duplicate a slot color")
        if theirs.is_wildcard and not mine.is_wildcard and actor.has_wildcard_module():
            return _err(MoveErrorCode.COLOR_MISMATCH, "swap would give a system two wildcards")
        if mine.is_wildcard and not theirs.is_wildcard and target.has_wildcard_module():
            return _err(MoveErrorCode.COLOR_MISMATCH, "swap would give a system two wildcards")
        return None

    return _err(MoveErrorCode.UNKNOWN_EFFECT, f"unhandled effect {effect}")


_CARD_TYPES = {
    PlayModule: CardType.MODULE,
    PlayMalware: CardType.MALWARE,
    PlayDefense: CardType.DEFENSE,
    PlayOperation: CardType.OPERATION,
}


def validate(
    action: Action, state: GameState, rules: RuleConfig = DEFAULT_RULES
) -> Optional[MoveError]:
    """Check an action against the state. Returns None when it is legal."""
    if state.is_finished:
        return _err(MoveErrorCode.GAME_ALREADY_OVER, f"{state.winner} already won")

    actor = state.get_player(action.player_id)
    if actor is None:
        return _err(MoveErrorCode.INVALID_TARGET, f"unknown player {action.player_id}")
    if state.current_player.id != actor.id:
        return _err(
            MoveErrorCode.NOT_YOUR_TURN,
            f"it is {state.current_player.id}'s turn, not {actor.id}'s",
        )

    if isinstance(action, (DrawCard, SkipDraw)):
        if state.phase != Phase.DRAW:
            return _err(MoveErrorCode.WRONG_PHASE, f"cannot draw during {state.phase.value}")
        at_cap = len(actor.hand) >= rules.max_hand_size
        if isinstance(action, DrawCard) and at_cap:
            return _err(MoveErrorCode.HAND_LIMIT, "hand is full; skip the draw")
        if isinstance(action, SkipDraw) and not at_cap:
            return _err(MoveErrorCode.HAND_LIMIT, "hand is below the cap; draw instead")
        return None

    if isinstance(action, EndPlay):
        if state.phase != Phase.PLAY:
            return _err(MoveErrorCode.WRONG_PHASE, f"cannot end play during {state.phase.value}")
        return None

    if isinstance(action, DiscardCard):
        if state.phase != Phase.DISCARD:
            return _err(MoveErrorCode.WRONG_PHASE, f"cannot discard during {state.phase.value}")
        if actor.find_in_hand(action.card_id) is None:
            return _err(MoveErrorCode.CARD_NOT_IN_HAND, f"card #{action.card_id} not in hand")
        if len(actor.hand) <= rules.discard_limit:
            return _err(MoveErrorCode.NOTHING_TO_DISCARD, "hand is within the discard limit")
        return None

    if not isinstance(action, PLAY_ACTIONS):
        raise TypeError(f"Unknown action: {action!r}")

    if state.phase != Phase.PLAY:
        return _err(MoveErrorCode.WRONG_PHASE, f"cannot play cards during {state.phase.value}")
    card = actor.find_in_hand(action.card_id)
    if card is None:
        return _err(MoveErrorCode.CARD_NOT_IN_HAND, f"card #{action.card_id} not in hand")
    expected = _CARD_TYPES[type(action)]
    if card.type != expected:
        return _err(
            MoveErrorCode.CARD_TYPE_MISMATCH,
            f"card #{card.id} is a {card.type.value}, not a {expected.value}",
        )
    if state.plays_made >= rules.plays_per_turn:
        return _err(MoveErrorCode.PLAY_LIMIT_REACHED, "no plays left this turn")

    if isinstance(action, PlayModule):
        return _validate_module(action, actor, card)
    if isinstance(action, PlayMalware):
        return _validate_malware(action, actor, card, state)
    if isinstance(action, PlayDefense):
        return _validate_defense(action, actor, card)
    return _validate_operation(action, actor, card, state)


def _candidate_actions(state: GameState, actor: Player) -> Iterable[Action]:
    pid = actor.id
    if state.phase == Phase.DRAW:
        yield DrawCard(pid)
        yield SkipDraw(pid)
        return
    if state.phase == Phase.DISCARD:
        for card in actor.hand:
            yield DiscardCard(pid, card.id)
        return
    if state.phase != Phase.PLAY:
        return

    opponents = [p for p in state.players if p.id != pid]
    for card in actor.hand:
        if card.type == CardType.MODULE:
            for slot in SLOT_COLORS:
                yield PlayModule(pid, card.id, slot)
        elif card.type == CardType.MALWARE:
            for opp in opponents:
                for slot in SLOT_COLORS:
                    yield PlayMalware(pid, card.id, opp.id, slot)
        elif card.type == CardType.DEFENSE:
            for slot in SLOT_COLORS:
                yield PlayDefense(pid, card.id, slot)
        elif card.effect == OperationEffect.MODULE_THEFT:
            for opp in opponents:
                for slot in SLOT_COLORS:
                    yield PlayOperation(pid, card.id, opp.id, slot)
        elif card.effect == OperationEffect.CARD_SWAP:
            for opp in opponents:
                for slot in SLOT_COLORS:
                    for target_slot in SLOT_COLORS:
                        yield PlayOperation(pid, card.id, opp.id, slot, target_slot)
        elif card.effect == OperationEffect.SYSTEM_SWAP:
            for opp in opponents:
                yield PlayOperation(pid, card.id, opp.id)
        else:
            yield PlayOperation(pid, card.id)
    yield EndPlay(pid)


def get_legal_actions(
    state: GameState, player_id: str, rules: RuleConfig = DEFAULT_RULES
) -> List[Action]:
    """Return all legal actions for a player, in a fixed deterministic order."""
    if state.is_finished:
        return []
    actor = state.get_player(player_id)
    if actor is None or state.current_player.id != player_id:
        return []
    return [a for a in _candidate_actions(state, actor) if validate(a, state, rules) is None]


def system_is_complete(system: Sequence[Card]) -> bool:
    """Four slotted modules, one per slot color, none infected."""
    if len(system) != len(SLOT_COLORS):
        return False
    if {card.slot for card in system} != set(SLOT_COLORS):
        return False
    return all(card.modifier != Modifier.INFECTED for card in system)


def check_winner(state: GameState, actor_id: Optional[str] = None) -> Optional[str]:
    """Return the id of a player with a complete, healthy system.

    When more than one system is complete, the acting player wins; after
    that, players are checked in turn order starting from the actor.
    """
    start = state.player_index(actor_id) if actor_id is not None else 0
    n = len(state.players)
    for offset in range(n):
        player = state.players[(start + offset) % n]
        if system_is_complete(player.system):
            return player.id
    return None


def check_invariants(state: GameState, expected_cards: Optional[int] = None) -> None:
    """Raise InvariantViolation if the state breaks a model invariant."""
    for player in state.players:
        if len(player.system) > len(SLOT_COLORS):
            raise InvariantViolation(f"{player.id} has {len(player.system)} modules")
        slots = Counter(card.slot for card in player.system)
        duplicated = [s for s, n in slots.items() if n > 1]
        if duplicated:
            raise InvariantViolation(f"{player.id} has duplicate slots {duplicated}")
        if sum(1 for card in player.system if card.is_wildcard) > 1:
            raise InvariantViolation(f"{player.id} has more than one wildcard module")
        if any(card.type != CardType.MODULE or not card.in_slot for card in player.system):
            raise InvariantViolation(f"{player.id} has a non-slotted card in the system")
        loose = player.hand + player.discard_pile
        if any(card.in_slot for card in loose):
            raise InvariantViolation(f"{player.id} holds a slotted card outside the system")

    if any(card.in_slot for card in state.deck):
        raise InvariantViolation("deck holds a slotted card")

    ids = [card.id for card in state.deck]
    for player in state.players:
        ids += [card.id for card in player.hand + player.system + player.discard_pile]
    if len(ids) != len(set(ids)):
        raise InvariantViolation("a card appears in more than one place")
    if expected_cards is not None and len(ids) != expected_cards:
        raise InvariantViolation(f"expected {expected_cards} cards, found {len(ids)}")
