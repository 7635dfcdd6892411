"""Deck creation and shuffling."""

import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from cybersystems.engine.card import (
    SLOT_COLORS,
    Card,
    CardType,
    Color,
    OperationEffect,
)


class DeckConfigError(ValueError):
    """Raised when a deck or table setup cannot produce a playable game."""


def _default_operations() -> Dict[OperationEffect, int]:
    return {
        OperationEffect.CARD_SWAP: 2,
        OperationEffect.MODULE_THEFT: 3,
        OperationEffect.FORCE_DISCARD: 1,
        OperationEffect.SYSTEM_SWAP: 1,
        OperationEffect.EXTRA_DRAW: 2,
    }


@dataclass(frozen=True)
class DeckConfig:
    """Card counts for a generated deck."""

    modules_per_color: int = 5
    wildcard_modules: int = 1
    malware_per_color: int = 4
    wildcard_malware: int = 1
    defense_per_color: int = 4
    wildcard_defense: int = 4
    operations: Dict[OperationEffect, int] = field(default_factory=_default_operations)

    @property
    def total(self) -> int:
        per_color = self.modules_per_color + self.malware_per_color + self.defense_per_color
        wild = self.wildcard_modules + self.wildcard_malware + self.wildcard_defense
        return per_color * len(SLOT_COLORS) + wild + sum(self.operations.values())

    def validate(self) -> None:
        """Raise DeckConfigError if the counts cannot produce a winnable game."""
        counts = {
            "modules_per_color": self.modules_per_color,
            "wildcard_modules": self.wildcard_modules,
            "malware_per_color": self.malware_per_color,
            "wildcard_malware": self.wildcard_malware,
            "defense_per_color": self.defense_per_color,
            "wildcard_defense": self.wildcard_defense,
        }
        for effect, count in self.operations.items():
            counts[f"operations[{effect.value}]"] = count
        for name, count in counts.items():
            if count < 0:
                raise DeckConfigError(f"{name} must not be negative (got {count})")

        # A system holds at most one wildcard, so it can stand in for one color only.
        colored = len(SLOT_COLORS) if self.modules_per_color > 0 else 0
        reachable = colored + min(self.wildcard_modules, 1)
        if reachable < len(SLOT_COLORS):
            raise DeckConfigError(
                f"Module supply covers only {reachable} of {len(SLOT_COLORS)} slot colors"
            )


DEFAULT_DECK = DeckConfig()


def build_cards(config: DeckConfig = DEFAULT_DECK) -> List[Card]:
    """Build the card multiset in canonical order, ids assigned in sequence."""
    config.validate()
    specs: list[tuple[CardType, Color, Optional[OperationEffect]]] = []

    for color in SLOT_COLORS:
        specs += [(CardType.MODULE, color, None)] * config.modules_per_color
    specs += [(CardType.MODULE, Color.PURPLE, None)] * config.wildcard_modules

    for color in SLOT_COLORS:
        specs += [(CardType.MALWARE, color, None)] * config.malware_per_color
    specs += [(CardType.MALWARE, Color.PURPLE, None)] * config.wildcard_malware

    for color in SLOT_COLORS:
        specs += [(CardType.DEFENSE, color, None)] * config.defense_per_color
    specs += [(CardType.DEFENSE, Color.PURPLE, None)] * config.wildcard_defense

    # Effect order follows the enum so the canonical order ignores dict order.
    for effect in OperationEffect:
        specs += [(CardType.OPERATION, Color.NEUTRAL, effect)] * config.operations.get(effect, 0)

    return [
        Card(id=i, type=card_type, color=color, effect=effect)
        for i, (card_type, color, effect) in enumerate(specs)
    ]


def generate_deck(seed: int | None = None, config: DeckConfig = DEFAULT_DECK) -> List[Card]:
    """Create a Cyber Systems deck.

    Default supply (67 cards):
    - 4 colors x 5 modules + 1 wildcard module: 21 cards
    - 4 colors x 4 malware + 1 wildcard malware: 17 cards
    - 4 colors x 4 defense + 4 wildcard defense: 20 cards
    - 9 operation cards

    With a seed the deck is shuffled by random.Random(seed), so the same seed
    always gives the same order. Without one the canonical order is returned.
    """
    cards = build_cards(config)
    if seed is not None:
        rng = random.Random(seed)
        rng.shuffle(cards)
    return cards
