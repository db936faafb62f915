from typing import Dict, Iterable, Optional, Sequence, Tuple

import pytest

from bondtolva.cards import Card
from bondtolva.deck import build_deck
from bondtolva.state import GameState, Phase, PlayerState


class NoShuffle:
    """Random stand-in that keeps deck order and always picks the first choice."""

    def shuffle(self, cards):
        return None

    def choice(self, seq):
        return seq[0]


@pytest.fixture
def no_shuffle():
    return NoShuffle()


@pytest.fixture
def make_state():
    """Build a consistent state for players A (elder) and B (dealer).

    Cards not placed explicitly go to the stock while it is open, otherwise
    onto A's won pile.
    """

    def build(
        hands: Tuple[Iterable[Card], Iterable[Card]],
        *,
        phase: Phase = Phase.STOCK_CLOSED,
        trick: Sequence[Tuple[str, Card]] = (),
        trump=None,
        current: Optional[str] = None,
        won: Optional[Tuple[Iterable[Card], Iterable[Card]]] = None,
        stock: Optional[Iterable[Card]] = None,
        scores: Tuple[int, int] = (0, 0),
        marriages: Optional[Dict[str, Iterable]] = None,
    ) -> GameState:
        hand_a, hand_b = (frozenset(hand) for hand in hands)
        won_a, won_b = (tuple(pile) for pile in (won or ((), ())))
        placed = set(hand_a) | set(hand_b) | set(won_a) | set(won_b) | {card for _, card in trick}
        stock_cards = tuple(stock) if stock is not None else ()
        placed |= set(stock_cards)
        leftovers = tuple(card for card in build_deck() if card not in placed)
        if stock is None and phase is Phase.STOCK_OPEN:
            stock_cards = leftovers
        else:
            won_a = won_a + leftovers
        marriages = marriages or {}
        if current is None:
            current = "B" if trick and trick[0][0] == "A" else "A"
        state = GameState(
            players=("A", "B"),
            dealer="B",
            current_player=current,
            phase=phase,
            player_states=(
                PlayerState(hand=hand_a, tricks_won=won_a, score=scores[0], marriages=frozenset(marriages.get("A", ()))),
                PlayerState(hand=hand_b, tricks_won=won_b, score=scores[1], marriages=frozenset(marriages.get("B", ()))),
            ),
            current_trick=tuple(trick),
            trump=trump,
            stock=stock_cards,
        )
        state.check_integrity()
        return state

    return build
