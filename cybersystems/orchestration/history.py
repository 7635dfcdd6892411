"""Action history kept outside the game state."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, List

from cybersystems.engine import Action, GameState, describe_action

if TYPE_CHECKING:
    from cybersystems.engine import GameEngine


@dataclass(frozen=True)
class LogEntry:
    """One accepted action and the state it produced."""

    action: Action
    state: GameState

    def describe(self) -> str:
        return describe_action(self.action)


class ActionLog:
    """Log of accepted (action, resulting state) pairs.

    Entries are only ever appended; undo drops entries from the end and
    loads the earlier state into the engine.
    """

    def __init__(self, initial_state: GameState):
        self._initial = initial_state
        self._entries: List[LogEntry] = []

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> tuple[LogEntry, ...]:
        return tuple(self._entries)

    @property
    def initial_state(self) -> GameState:
        return self._initial

    def record(self, action: Action, state: GameState) -> None:
        self._entries.append(LogEntry(action=action, state=state))

    def state_at(self, n: int) -> GameState:
        """State after the first n accepted actions (0 = initial state)."""
        if not 0 <= n <= len(self._entries):
            raise IndexError(f"No state after {n} actions (log has {len(self._entries)})")
        return self._initial if n == 0 else self._entries[n - 1].state

    @property
    def latest_state(self) -> GameState:
        return self.state_at(len(self._entries))

    def undo(self, engine: "GameEngine", steps: int = 1) -> GameState:
        """Roll the engine back by steps accepted actions."""
        if steps < 1:
            raise ValueError("steps must be at least 1")
        target = len(self._entries) - steps
        state = self.state_at(target)
        del self._entries[target:]
        engine.load(state)
        return state

    def describe(self, last: int | None = None) -> List[str]:
        """Text lines for the logged actions, optionally only the last few."""
        entries = self._entries if last is None else self._entries[-last:]
        return [entry.describe() for entry in entries]
