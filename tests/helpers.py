"""Builders for hand-made cards and states used across the tests."""

import itertools
from dataclasses import replace
from typing import Dict, Iterable, Optional, Sequence

from cybersystems.engine import (
    Card,
    CardType,
    Color,
    GameState,
    Modifier,
    OperationEffect,
    Phase,
    Player,
)

_ids = itertools.count(1000)


def module(color: Color) -> Card:
    return Card(id=next(_ids), type=CardType.MODULE, color=color)


def malware(color: Color) -> Card:
    return Card(id=next(_ids), type=CardType.MALWARE, color=color)


def defense(color: Color) -> Card:
    return Card(id=next(_ids), type=CardType.DEFENSE, color=color)


def operation(effect: Optional[OperationEffect]) -> Card:
    return Card(id=next(_ids), type=CardType.OPERATION, color=Color.NEUTRAL, effect=effect)


def slotted(color: Color, modifier: Modifier = Modifier.NONE, slot: Optional[Color] = None) -> Card:
    """A module already sitting in a system."""
    return replace(module(color), modifier=modifier, slot=slot or color)


def make_state(
    hands: Dict[str, Sequence[Card]],
    systems: Optional[Dict[str, Sequence[Card]]] = None,
    deck: Iterable[Card] = (),
    phase: Phase = Phase.PLAY,
    current: int = 0,
    plays_made: int = 0,
    winner: Optional[str] = None,
) -> GameState:
    systems = systems or {}
    players = tuple(
        Player(id=pid, name=pid.upper(), hand=tuple(hand), system=tuple(systems.get(pid, ())))
        for pid, hand in hands.items()
    )
    return GameState(
        players=players,
        deck=tuple(deck),
        current_player_index=current,
        phase=phase,
        winner=winner,
        plays_made=plays_made,
    )


def full_system(*infected: Color) -> list[Card]:
    """Four healthy modules, except the listed slots which are infected."""
    return [
        slotted(color, Modifier.INFECTED if color in infected else Modifier.NONE)
        for color in (Color.BLUE, Color.RED, Color.GREEN, Color.YELLOW)
    ]
