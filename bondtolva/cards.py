"""Card-related data structures and helpers for Bondtolva."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Mapping, Set


class Suit(Enum):
    HEARTS = auto()
    SPADES = auto()
    DIAMONDS = auto()
    CLUBS = auto()

    def __str__(self) -> str:
        return self.name.lower()


class Rank(Enum):
    KING = auto()
    TEN = auto()
    QUEEN = auto()
    JACK = auto()
    NINE = auto()

    def __str__(self) -> str:
        return self.name.lower()


# Card point values used by the round-end tie-break.
CARD_POINTS: dict[Rank, int] = {
    Rank.TEN: 4,
    Rank.KING: 3,
    Rank.QUEEN: 2,
    Rank.JACK: 1,
    Rank.NINE: 0,
}

# Rank order from lowest to highest for trick resolution and heading.
# The Ten sits between the Queen and the King.
RANK_ORDER: list[Rank] = [
    Rank.NINE,
    Rank.JACK,
    Rank.QUEEN,
    Rank.TEN,
    Rank.KING,
]

RANK_STRENGTH: dict[Rank, int] = {rank: index for index, rank in enumerate(RANK_ORDER)}

MATADOR_RANKS: frozenset[Rank] = frozenset({Rank.KING, Rank.TEN})

MARRIAGE_RANKS: frozenset[Rank] = frozenset({Rank.KING, Rank.QUEEN})


@dataclass(frozen=True)
class Card:
    """Immutable representation of a playing card."""

    rank: Rank
    suit: Suit

    def point_value(self) -> int:
        return CARD_POINTS[self.rank]

    def is_matador(self) -> bool:
        return self.rank in MATADOR_RANKS

    def __str__(self) -> str:
        return card_label(self)


def card_strength(card: Card) -> int:
    """Return an integer strength used for ordering cards within a suit."""
    return RANK_STRENGTH[card.rank]


def outranks(candidate: Card, current: Card) -> bool:
    """Return True if candidate is strictly higher than current by rank alone."""
    return card_strength(candidate) > card_strength(current)


def card_sort_key(card: Card) -> tuple[int, int]:
    """Group by suit in deck order, strongest card first within a suit."""
    return card.suit.value, -card_strength(card)


def sort_cards(cards: Iterable[Card]) -> list[Card]:
    return sorted(cards, key=card_sort_key)


def is_complete_marriage(cards: Iterable[Card], suit: Suit) -> bool:
    """Return True if the iterable contains both K and Q of the given suit."""
    seen: Set[Rank] = {card.rank for card in cards if card.suit is suit}
    return MARRIAGE_RANKS <= seen


def marriage_suits(cards: Iterable[Card]) -> list[Suit]:
    """Return the suits, in deck order, for which the cards hold King and Queen."""
    held = list(cards)
    return [suit for suit in Suit if is_complete_marriage(held, suit)]


def matador_count(cards: Iterable[Card]) -> int:
    return sum(1 for card in cards if card.is_matador())


def card_points_total(cards: Iterable[Card]) -> int:
    return sum(card.point_value() for card in cards)


def serialize_card(card: Card) -> dict[str, str]:
    return {"rank": card.rank.name.lower(), "suit": card.suit.name.lower()}


def deserialize_card(payload: Mapping[str, str]) -> Card:
    try:
        rank_name = payload["rank"].upper()
        suit_name = payload["suit"].upper()
        return Card(Rank[rank_name], Suit[suit_name])
    except (KeyError, AttributeError) as exc:
        raise ValueError(f"Malformed card payload: {payload!r}") from exc


def card_label(card: Card) -> str:
    return f"{card.rank.name.title()} of {card.suit.name.title()}"
