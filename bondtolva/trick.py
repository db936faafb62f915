"""Trick resolution."""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

from .cards import Card, Suit, outranks


class TrickError(RuntimeError):
    """Raised when a trick is resolved in an impossible shape."""


def led_suit(plays: Sequence[Tuple[str, Card]]) -> Optional[Suit]:
    return plays[0][1].suit if plays else None


def trick_winner(plays: Sequence[Tuple[str, Card]], trump: Optional[Suit]) -> str:
    """Return the player who takes a completed two-card trick.

    A lone trump wins. Otherwise the higher card of the led suit wins, and an
    off-suit follow never does.
    """
    if len(plays) != 2:
        raise TrickError("A trick is resolved only once both players have played.")
    (leader, lead_card), (follower, follow_card) = plays

    if trump is not None:
        lead_trump = lead_card.suit is trump
        follow_trump = follow_card.suit is trump
        if lead_trump != follow_trump:
            return leader if lead_trump else follower

    if follow_card.suit is lead_card.suit and outranks(follow_card, lead_card):
        return follower
    return leader
