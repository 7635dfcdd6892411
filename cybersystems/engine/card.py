"""Card, Color and Modifier types for Cyber Systems."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Color(str, Enum):
    """Card colors. Declaration order is the color ordinal."""

    BLUE = "blue"
    RED = "red"
    GREEN = "green"
    YELLOW = "yellow"
    PURPLE = "purple"  # wildcard
    NEUTRAL = "neutral"


# The four system slots a player has to fill.
SLOT_COLORS = (Color.BLUE, Color.RED, Color.GREEN, Color.YELLOW)


class CardType(str, Enum):
    """Card types."""

    MODULE = "module"
    MALWARE = "malware"
    DEFENSE = "defense"
    OPERATION = "operation"


class Modifier(str, Enum):
    """Per-slot status of a module sitting in a system."""

    NONE = "none"
    INFECTED = "infected"
    PROTECTED = "protected"
    IMMUNE = "immune"


class OperationEffect(str, Enum):
    """Effects an operation card can carry."""

    FORCE_DISCARD = "force_discard"
    CARD_SWAP = "card_swap"
    EXTRA_DRAW = "extra_draw"
    MODULE_THEFT = "module_theft"
    SYSTEM_SWAP = "system_swap"


def color_ordinal(color: Color) -> int:
    """Position of a color in declaration order."""
    return list(Color).index(color)


@dataclass(frozen=True)
class Card:
    """A Cyber Systems card.

    Hand and deck cards carry neither modifier nor slot. A module placed in a
    system carries both: the modifier is its current status and the slot is
    the color it was assigned when played (a purple wildcard keeps the slot
    it filled for the rest of the game).
    Operation cards carry their effect; an operation without one is kept as
    data but can never be played.
    """

    id: int
    type: CardType
    color: Color
    effect: Optional[OperationEffect] = None
    modifier: Optional[Modifier] = None
    slot: Optional[Color] = None

    def __post_init__(self) -> None:
        if self.type == CardType.OPERATION:
            if self.color != Color.NEUTRAL:
                raise ValueError("Operation cards must be neutral")
        else:
            if self.color == Color.NEUTRAL:
                raise ValueError(f"{self.type.value} cards need a color")
            if self.effect is not None:
                raise ValueError("Only operation cards carry an effect")
        if (self.modifier is None) != (self.slot is None):
            raise ValueError("modifier and slot must be set together")
        if self.modifier is not None:
            if self.type != CardType.MODULE:
                raise ValueError("Only module cards can occupy a slot")
            if self.slot not in SLOT_COLORS:
                raise ValueError(f"Invalid slot: {self.slot}")

    @property
    def is_wildcard(self) -> bool:
        return self.color == Color.PURPLE

    @property
    def in_slot(self) -> bool:
        return self.slot is not None

    def __str__(self) -> str:
        if self.type == CardType.OPERATION:
            name = self.effect.value if self.effect else "operation"
            return f"{name}#{self.id}"
        text = f"{self.color.value}_{self.type.value}#{self.id}"
        if self.slot is not None and self.modifier is not None:
            text += f"@{self.slot.value}"
            if self.modifier != Modifier.NONE:
                text += f"[{self.modifier.value}]"
        return text
