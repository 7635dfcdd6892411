"""Game engine for Cyber Systems."""

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
    describe_action,
)
from cybersystems.engine.card import (
    SLOT_COLORS,
    Card,
    CardType,
    Color,
    Modifier,
    OperationEffect,
)
from cybersystems.engine.deck import DeckConfig, DeckConfigError, generate_deck
from cybersystems.engine.errors import InvariantViolation, MoveError, MoveErrorCode
from cybersystems.engine.game_state import GameState, Phase, Player, PlayerView
from cybersystems.engine.resolver import resolve
from cybersystems.engine.rules import (
    RuleConfig,
    check_winner,
    get_legal_actions,
    init_game,
    system_is_complete,
    validate,
)
from cybersystems.engine.turn_engine import ActionResult, GameEngine

__all__ = [
    "Action",
    "DiscardCard",
    "DrawCard",
    "EndPlay",
    "PlayDefense",
    "PlayMalware",
    "PlayModule",
    "PlayOperation",
    "SkipDraw",
    "describe_action",
    "SLOT_COLORS",
    "Card",
    "CardType",
    "Color",
    "Modifier",
    "OperationEffect",
    "DeckConfig",
    "DeckConfigError",
    "generate_deck",
    "InvariantViolation",
    "MoveError",
    "MoveErrorCode",
    "GameState",
    "Phase",
    "Player",
    "PlayerView",
    "resolve",
    "RuleConfig",
    "check_winner",
    "get_legal_actions",
    "init_game",
    "system_is_complete",
    "validate",
    "ActionResult",
    "GameEngine",
]
