"""Error types for move validation and engine defects."""

from dataclasses import dataclass
from enum import Enum


class MoveErrorCode(str, Enum):
    """Reasons an action can be rejected."""

    NOT_YOUR_TURN = "not_your_turn"
    WRONG_PHASE = "wrong_phase"
    SLOT_OCCUPIED = "slot_occupied"
    COLOR_MISMATCH = "color_mismatch"
    TARGET_IMMUNE = "target_immune"
    CARD_NOT_IN_HAND = "card_not_in_hand"
    EMPTY_TARGET = "empty_target"
    GAME_ALREADY_OVER = "game_already_over"
    INVALID_TARGET = "invalid_target"
    CARD_TYPE_MISMATCH = "card_type_mismatch"
    UNKNOWN_EFFECT = "unknown_effect"
    HAND_LIMIT = "hand_limit"
    PLAY_LIMIT_REACHED = "play_limit_reached"
    NOTHING_TO_DISCARD = "nothing_to_discard"


@dataclass(frozen=True)
class MoveError:
    """A rejected action. Returned to the caller, never raised."""

    code: MoveErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class InvariantViolation(RuntimeError):
    """A resolved state broke a model invariant. Always a programming error."""
