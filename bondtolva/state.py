"""Game state snapshots for Bondtolva."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field, replace
from enum import Enum, auto
from typing import Dict, Iterator, List, Optional, Tuple

from .cards import Card, Suit
from .deck import build_deck
from .rules_schema import DEFAULT_RULES, RuleSet
from .scoring import RoundScoreResult


class BondtolvaError(RuntimeError):
    """Base class for engine errors."""


class InvalidMove(BondtolvaError):
    """Raised when a move outside the legal move set is applied."""


class PreconditionViolation(BondtolvaError):
    """Raised when an operation is called in the wrong phase or on a malformed state."""


class Phase(Enum):
    DEALING = auto()
    STOCK_OPEN = auto()
    STOCK_CLOSED = auto()
    ROUND_SCORING = auto()
    GAME_END = auto()

    def __str__(self) -> str:
        return self.name.lower()


PHASE_ORDER: Dict[Phase, int] = {phase: index for index, phase in enumerate(Phase)}


@dataclass(frozen=True)
class PlayerState:
    hand: frozenset[Card] = frozenset()
    marriages: frozenset[Suit] = frozenset()
    tricks_won: Tuple[Card, ...] = ()
    score: int = 0


TrickPlay = Tuple[str, Card]


@dataclass(frozen=True)
class GameState:
    """Immutable snapshot of a game; transitions return new instances."""

    players: Tuple[str, str]
    dealer: str
    current_player: str
    phase: Phase = Phase.DEALING
    player_states: Tuple[PlayerState, PlayerState] = (PlayerState(), PlayerState())
    current_trick: Tuple[TrickPlay, ...] = ()
    trump: Optional[Suit] = None
    stock: Tuple[Card, ...] = ()
    rules: RuleSet = field(default_factory=lambda: DEFAULT_RULES)
    last_trick_winner: Optional[str] = None
    round_result: Optional[RoundScoreResult] = None
    round_number: int = 1

    def seat_of(self, player: str) -> int:
        try:
            return self.players.index(player)
        except ValueError as exc:
            raise PreconditionViolation(f"Unknown player {player!r}.") from exc

    def opponent_of(self, player: str) -> str:
        return self.players[1 - self.seat_of(player)]

    def player_state(self, player: str) -> PlayerState:
        return self.player_states[self.seat_of(player)]

    def hand_of(self, player: str) -> frozenset[Card]:
        return self.player_state(player).hand

    def score_of(self, player: str) -> int:
        return self.player_state(player).score

    def scores(self) -> Dict[str, int]:
        return {player: self.player_states[seat].score for seat, player in enumerate(self.players)}

    def with_player_state(self, player: str, player_state: PlayerState) -> "GameState":
        seats = list(self.player_states)
        seats[self.seat_of(player)] = player_state
        return replace(self, player_states=(seats[0], seats[1]))

    def all_cards(self) -> Iterator[Card]:
        for player_state in self.player_states:
            yield from player_state.hand
            yield from player_state.tricks_won
        yield from self.stock
        for _, card in self.current_trick:
            yield card

    def check_integrity(self) -> None:
        """Raise PreconditionViolation if the snapshot breaks a structural invariant."""
        if len(self.players) != 2 or self.players[0] == self.players[1]:
            raise PreconditionViolation("A game needs exactly two distinct players.")
        if self.dealer not in self.players or self.current_player not in self.players:
            raise PreconditionViolation("Dealer and current player must be seated.")
        if len(self.player_states) != 2:
            raise PreconditionViolation("Exactly two player states are required.")

        cards: List[Card] = list(self.all_cards())
        if self.phase is Phase.DEALING:
            if cards:
                raise PreconditionViolation("No cards may be in play before the deal.")
            return

        counts = Counter(cards)
        duplicates = [card for card, count in counts.items() if count > 1]
        if duplicates:
            raise PreconditionViolation(f"Duplicate cards across zones: {duplicates}.")
        if set(counts) != set(build_deck()):
            raise PreconditionViolation("Cards are missing from the game.")

        if len(self.current_trick) > 1:
            raise PreconditionViolation("An unresolved trick holds at most one card.")
        sizes = [len(player_state.hand) for player_state in self.player_states]
        if self.current_trick:
            leader = self.current_trick[0][0]
            if leader == self.current_player:
                raise PreconditionViolation("The player who led cannot also be on move.")
            expected_gap = 1 if self.seat_of(leader) == 1 else -1
            if sizes[0] - sizes[1] != expected_gap:
                raise PreconditionViolation("Hand sizes do not match the trick in progress.")
        elif sizes[0] != sizes[1]:
            raise PreconditionViolation("Hand sizes must match between tricks.")

        if self.phase is Phase.STOCK_OPEN and not self.stock:
            raise PreconditionViolation("Stock cannot be empty while it is open.")
        if self.phase is Phase.STOCK_CLOSED and self.stock:
            raise PreconditionViolation("Stock must be empty once closed.")
