"""Game state for Cyber Systems."""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, List, Optional

from cybersystems.engine.card import Card, Color, Modifier


class Phase(str, Enum):
    """Turn phases. FINISHED is terminal."""

    DRAW = "draw"
    PLAY = "play"
    DISCARD = "discard"
    FINISHED = "finished"


@dataclass(frozen=True)
class Player:
    """One seat at the table.

    hand order matters (bots use it as their default priority), system holds
    slotted module cards, discard_pile order does not matter.
    """

    id: str
    name: str
    is_bot: bool = False
    hand: tuple[Card, ...] = ()
    system: tuple[Card, ...] = ()
    discard_pile: tuple[Card, ...] = ()

    def find_in_hand(self, card_id: int) -> Optional[Card]:
        for card in self.hand:
            if card.id == card_id:
                return card
        return None

    def slot(self, color: Color) -> Optional[Card]:
        """Return the module occupying the given slot color, if any."""
        for card in self.system:
            if card.slot == color:
                return card
        return None

    def has_wildcard_module(self) -> bool:
        return any(card.is_wildcard for card in self.system)

    def healthy_modules(self) -> int:
        return sum(1 for card in self.system if card.modifier != Modifier.INFECTED)


@dataclass(frozen=True)
class GameState:
    """Immutable Cyber Systems game state.

    The top of the draw stack is the last element of deck.
    """

    players: tuple[Player, ...]
    deck: tuple[Card, ...]
    current_player_index: int = 0
    phase: Phase = Phase.DRAW
    winner: Optional[str] = None
    plays_made: int = 0  # plays already made in the current Play phase

    def __post_init__(self) -> None:
        if not 0 <= self.current_player_index < len(self.players):
            raise ValueError(
                f"current_player_index {self.current_player_index} out of range"
            )

    @property
    def current_player(self) -> Player:
        return self.players[self.current_player_index]

    @property
    def player_order(self) -> tuple[str, ...]:
        return tuple(p.id for p in self.players)

    @property
    def is_finished(self) -> bool:
        return self.winner is not None

    def player_index(self, player_id: str) -> int:
        for i, player in enumerate(self.players):
            if player.id == player_id:
                return i
        raise KeyError(player_id)

    def get_player(self, player_id: str) -> Optional[Player]:
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def with_player(self, player: Player) -> "GameState":
        """Return a copy with the player of the same id replaced."""
        players = tuple(player if p.id == player.id else p for p in self.players)
        return replace(self, players=players)

    def total_cards(self) -> int:
        """Cards anywhere in the game; constant for the whole game."""
        return len(self.deck) + sum(
            len(p.hand) + len(p.system) + len(p.discard_pile) for p in self.players
        )


@dataclass
class PlayerView:
    """Game state visible to a single player.

    Contains only that player's hand; systems and discard piles are public.
    """

    player_id: str
    my_hand: List[Card]
    systems: Dict[str, List[Card]]  # player_id -> slotted modules
    num_cards_per_player: Dict[str, int]
    deck_size: int
    current_player: str
    phase: Phase
    winner: Optional[str]
    player_order: tuple[str, ...]
    names: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_state(cls, state: GameState, player_id: str) -> "PlayerView":
        """Create a player view from full game state, hiding other players' hands."""
        me = state.get_player(player_id)
        return cls(
            player_id=player_id,
            my_hand=list(me.hand) if me else [],
            systems={p.id: list(p.system) for p in state.players},
            num_cards_per_player={p.id: len(p.hand) for p in state.players},
            deck_size=len(state.deck),
            current_player=state.current_player.id,
            phase=state.phase,
            winner=state.winner,
            player_order=state.player_order,
            names={p.id: p.name for p in state.players},
        )
