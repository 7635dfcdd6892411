"""Agent protocol - interface that bot and human agents implement."""

from typing import Protocol

from cybersystems.engine import Action, MoveError, PlayerView


class AgentProtocol(Protocol):
    """Interface for Cyber Systems actors.

    Agents only choose; the game runner submits their choice through
    GameEngine.submit_action, the same entry point for every actor.
    """

    @property
    def name(self) -> str:
        """Display name for the agent."""
        ...

    def get_action(
        self,
        player_view: PlayerView,
        legal_actions: list[Action],
        player_id: str,
    ) -> Action | None:
        """Choose an action given the player view and legal actions.

        Args:
            player_view: Filtered view with only this player's hand and public info.
            legal_actions: List of valid actions to choose from.
            player_id: This agent's player ID.

        Returns:
            An action to submit, or None to let the runner pick the first legal one.
        """
        ...

    def on_rejected(self, error: MoveError) -> None:
        """Called when the engine rejects the agent's last action."""
        ...
