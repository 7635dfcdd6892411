"""JSON encoding of GameState for save/resume."""

import json
from typing import Any, Dict, Optional

from cybersystems.engine.card import Card, CardType, Color, Modifier, OperationEffect
from cybersystems.engine.game_state import GameState, Phase, Player

FORMAT_VERSION = 1


def card_to_dict(card: Card) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "id": card.id,
        "type": card.type.value,
        "color": card.color.value,
    }
    if card.effect is not None:
        data["effect"] = card.effect.value
    if card.slot is not None:
        data["modifier"] = card.modifier.value
        data["slot"] = card.slot.value
    return data


def card_from_dict(data: Dict[str, Any]) -> Card:
    def _opt(enum_cls, key: str) -> Optional[Any]:
        value = data.get(key)
        return enum_cls(value) if value is not None else None

    return Card(
        id=int(data["id"]),
        type=CardType(data["type"]),
        color=Color(data["color"]),
        effect=_opt(OperationEffect, "effect"),
        modifier=_opt(Modifier, "modifier"),
        slot=_opt(Color, "slot"),
    )


def _player_to_dict(player: Player) -> Dict[str, Any]:
    return {
        "id": player.id,
        "name": player.name,
        "is_bot": player.is_bot,
        "hand": [card_to_dict(c) for c in player.hand],
        "system": [card_to_dict(c) for c in player.system],
        "discard_pile": [card_to_dict(c) for c in player.discard_pile],
    }


def _player_from_dict(data: Dict[str, Any]) -> Player:
    return Player(
        id=data["id"],
        name=data["name"],
        is_bot=bool(data.get("is_bot", False)),
        hand=tuple(card_from_dict(c) for c in data["hand"]),
        system=tuple(card_from_dict(c) for c in data["system"]),
        discard_pile=tuple(card_from_dict(c) for c in data["discard_pile"]),
    )


def state_to_dict(state: GameState) -> Dict[str, Any]:
    """Encode every field of a GameState, deck order included."""
    return {
        "version": FORMAT_VERSION,
        "players": [_player_to_dict(p) for p in state.players],
        "deck": [card_to_dict(c) for c in state.deck],
        "current_player_index": state.current_player_index,
        "phase": state.phase.value,
        "winner": state.winner,
        "plays_made": state.plays_made,
    }


def state_from_dict(data: Dict[str, Any]) -> GameState:
    version = data.get("version")
    if version != FORMAT_VERSION:
        raise ValueError(f"Unsupported save format version: {version}")
    try:
        return GameState(
            players=tuple(_player_from_dict(p) for p in data["players"]),
            deck=tuple(card_from_dict(c) for c in data["deck"]),
            current_player_index=int(data["current_player_index"]),
            phase=Phase(data["phase"]),
            winner=data.get("winner"),
            plays_made=int(data.get("plays_made", 0)),
        )
    except KeyError as e:
        raise ValueError(f"Missing field in saved state: {e}") from e


def dumps(state: GameState, indent: Optional[int] = None) -> str:
    return json.dumps(state_to_dict(state), indent=indent)


def loads(text: str) -> GameState:
    return state_from_dict(json.loads(text))
