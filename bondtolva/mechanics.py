"""Legal move generation for Bondtolva."""

from __future__ import annotations

from typing import Iterable, List, Optional

from .cards import MARRIAGE_RANKS, Card, Suit, marriage_suits, outranks, sort_cards
from .moves import DeclareMarriage, Move, Play
from .state import GameState, Phase

PLAYABLE_PHASES = frozenset({Phase.STOCK_OPEN, Phase.STOCK_CLOSED})


def follow_candidates(hand: Iterable[Card], lead: Card, trump: Optional[Suit]) -> List[Card]:
    """Return the cards a follower may play once the stock is closed.

    Follow suit and head the led card if possible, else trump, else anything.
    """
    cards = sort_cards(hand)
    in_led = [card for card in cards if card.suit is lead.suit]
    if in_led:
        heading = [card for card in in_led if outranks(card, lead)]
        return heading if heading else in_led

    if trump is not None:
        trump_cards = [card for card in cards if card.suit is trump]
        if trump_cards:
            return trump_cards

    return cards


def marriage_cards(hand: Iterable[Card], declared: Iterable[Suit], *, allow_repeat: bool = False) -> List[Card]:
    """Return the Kings and Queens that would declare a marriage if led."""
    cards = sort_cards(hand)
    already = set(declared)
    suits = [suit for suit in marriage_suits(cards) if allow_repeat or suit not in already]
    return [card for card in cards if card.suit in suits and card.rank in MARRIAGE_RANKS]


def get_valid_moves(state: GameState) -> List[Move]:
    """Return every legal move for the player on move, in a stable order."""
    if state.phase not in PLAYABLE_PHASES:
        return []
    state.check_integrity()

    player = state.current_player
    player_state = state.player_state(player)
    hand = player_state.hand

    if state.current_trick:
        if state.phase is Phase.STOCK_OPEN:
            cards = sort_cards(hand)
        else:
            lead = state.current_trick[0][1]
            cards = follow_candidates(hand, lead, state.trump)
        return [Play(card, player) for card in cards]

    moves: List[Move] = [Play(card, player) for card in sort_cards(hand)]
    if state.phase is Phase.STOCK_OPEN:
        for card in marriage_cards(hand, player_state.marriages, allow_repeat=state.rules.allow_repeat_marriage):
            moves.append(DeclareMarriage(card, player))
    return moves
