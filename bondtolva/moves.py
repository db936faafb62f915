"""Move variants accepted by the engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Union

from .cards import Card, deserialize_card, serialize_card

PLAY = "play"
DECLARE_MARRIAGE = "declare_marriage"


@dataclass(frozen=True)
class Play:
    """Play a card from hand to the current trick."""

    card: Card
    player: str


@dataclass(frozen=True)
class DeclareMarriage:
    """Lead a King or Queen while holding its partner, banking the marriage."""

    card: Card
    player: str


Move = Union[Play, DeclareMarriage]

_MOVE_TYPES = {PLAY: Play, DECLARE_MARRIAGE: DeclareMarriage}


def move_type(move: Move) -> str:
    if isinstance(move, Play):
        return PLAY
    if isinstance(move, DeclareMarriage):
        return DECLARE_MARRIAGE
    raise TypeError(f"Unknown move kind: {type(move).__name__}")


def serialize_move(move: Move) -> dict:
    return {"type": move_type(move), "card": serialize_card(move.card), "player": move.player}


def deserialize_move(payload: Mapping[str, object]) -> Move:
    kind = payload.get("type")
    if kind not in _MOVE_TYPES:
        raise ValueError(f"Unknown move type: {kind!r}")
    card_payload = payload.get("card")
    if not isinstance(card_payload, Mapping):
        raise ValueError("Move payload must include a card.")
    player = payload.get("player")
    if not isinstance(player, str):
        raise ValueError("Move payload must name the player.")
    return _MOVE_TYPES[kind](deserialize_card(card_payload), player)


def move_label(move: Move) -> str:
    if isinstance(move, DeclareMarriage):
        return f"Declare marriage with {move.card}"
    return f"Play {move.card}"
