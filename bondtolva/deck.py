"""Deck creation and dealing utilities for Bondtolva."""

from __future__ import annotations

from random import Random
from typing import List, Optional, Sequence, Tuple

from .cards import Card, Rank, Suit

DECK_SIZE = 20


def build_deck() -> List[Card]:
    """Return the ordered 20-card deck."""
    return [Card(rank, suit) for suit in Suit for rank in Rank]


def is_complete_deck(cards: Sequence[Card]) -> bool:
    return len(cards) == DECK_SIZE and set(cards) == set(build_deck())


def shuffle_and_deal(
    deck: Sequence[Card],
    *,
    rng: Optional[Random] = None,
    hand_size: int = 6,
    packet_size: int = 3,
) -> Tuple[List[List[Card]], List[Card]]:
    """Shuffle a copy of the deck and deal two hands in alternating packets.

    Cards come off the end of the shuffled sequence, first packet to the
    elder hand. Whatever is left becomes the stock, its top card last.
    """
    if not is_complete_deck(deck):
        raise ValueError("Deck must contain exactly the 20 Bondtolva cards.")
    if hand_size % packet_size != 0:
        raise ValueError("Packet size must divide the hand size.")

    cards = list(deck)
    if rng is None:
        rng = Random()
    rng.shuffle(cards)

    hands: List[List[Card]] = [[], []]
    for index in range(2 * hand_size):
        seat = (index // packet_size) % 2
        hands[seat].append(cards.pop())
    return hands, cards
