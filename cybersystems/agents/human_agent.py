"""Human agent - reads actions from terminal."""

from cybersystems.engine import (
    Action,
    MoveError,
    PlayerView,
    describe_action,
)


def _format_system(cards) -> str:
    return " ".join(str(c) for c in cards) or "(empty)"


class HumanAgent:
    """Agent that prompts the human for input via terminal."""

    is_bot = False

    def __init__(self, name: str = "human"):
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def on_rejected(self, error: MoveError) -> None:
        print(f"Rejected: {error}")

    def get_action(
        self,
        player_view: PlayerView,
        legal_actions: list[Action],
        player_id: str,
    ) -> Action | None:
        if not legal_actions:
            return None

        view = player_view
        print(f"\n--- Your turn ({view.phase.value}) ---")
        print("Your hand:", " ".join(str(c) for c in view.my_hand))
        for pid in view.player_order:
            label = "you" if pid == player_id else f"{view.num_cards_per_player[pid]} cards"
            print(f"  {view.names.get(pid, pid)} [{label}]: {_format_system(view.systems[pid])}")
        print(f"Deck: {view.deck_size} cards")
        print("\nLegal actions:")
        for i, a in enumerate(legal_actions):
            print(f"  {i}: {describe_action(a)}")

        while True:
            try:
                raw = input("Enter number: ").strip()
                idx = int(raw)
                if 0 <= idx < len(legal_actions):
                    return legal_actions[idx]
            except ValueError:
                pass
            except EOFError:
                return None
            print("Invalid. Try again.")
