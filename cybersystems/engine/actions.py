"""Actions a player can submit. Every action names its actor."""

from dataclasses import dataclass
from typing import Optional, Union

from cybersystems.engine.card import Color


@dataclass(frozen=True)
class DrawCard:
    """Action: draw the top card of the deck (Draw phase)."""

    player_id: str


@dataclass(frozen=True)
class SkipDraw:
    """Action: pass the draw when the hand is already at the cap."""

    player_id: str


@dataclass(frozen=True)
class PlayModule:
    """Action: place a module from hand into one of the actor's slots."""

    player_id: str
    card_id: int
    slot: Color


@dataclass(frozen=True)
class PlayMalware:
    """Action: infect an opponent's module."""

    player_id: str
    card_id: int
    target_player: str
    slot: Color


@dataclass(frozen=True)
class PlayDefense:
    """Action: cure, protect or immunize one of the actor's modules."""

    player_id: str
    card_id: int
    slot: Color


@dataclass(frozen=True)
class PlayOperation:
    """Action: play an operation card.

    Which of target_player, slot and target_slot are needed depends on the
    card's effect.
    """

    player_id: str
    card_id: int
    target_player: Optional[str] = None
    slot: Optional[Color] = None
    target_slot: Optional[Color] = None


@dataclass(frozen=True)
class EndPlay:
    """Action: finish the Play phase."""

    player_id: str


@dataclass(frozen=True)
class DiscardCard:
    """Action: discard a card from hand (Discard phase)."""

    player_id: str
    card_id: int


Action = Union[
    DrawCard,
    SkipDraw,
    PlayModule,
    PlayMalware,
    PlayDefense,
    PlayOperation,
    EndPlay,
    DiscardCard,
]

PLAY_ACTIONS = (PlayModule, PlayMalware, PlayDefense, PlayOperation)


def describe_action(action: Action) -> str:
    """One-line description used in logs and the action history."""
    pid = action.player_id
    if isinstance(action, DrawCard):
        return f"{pid} drew a card"
    if isinstance(action, SkipDraw):
        return f"{pid} skipped the draw"
    if isinstance(action, PlayModule):
        return f"{pid} installed module #{action.card_id} in {action.slot.value}"
    if isinstance(action, PlayMalware):
        return (
            f"{pid} played malware #{action.card_id} on "
            f"{action.target_player}'s {action.slot.value} module"
        )
    if isinstance(action, PlayDefense):
        return f"{pid} played defense #{action.card_id} on {action.slot.value}"
    if isinstance(action, PlayOperation):
        parts = [f"{pid} played operation #{action.card_id}"]
        if action.target_player:
            parts.append(f"against {action.target_player}")
        if action.slot:
            parts.append(f"slot={action.slot.value}")
        if action.target_slot:
            parts.append(f"target_slot={action.target_slot.value}")
        return " ".join(parts)
    if isinstance(action, EndPlay):
        return f"{pid} ended play"
    if isinstance(action, DiscardCard):
        return f"{pid} discarded #{action.card_id}"
    raise TypeError(f"Unknown action: {action!r}")
