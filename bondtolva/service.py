"""Convenience service layer for UI and bot drivers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from random import Random
from typing import Dict, List, Optional, Sequence

from .cards import card_label, serialize_card, sort_cards
from .deck import build_deck
from .game import deal, initial_state, make_move, start_next_round, winner
from .mechanics import get_valid_moves
from .moves import Move, deserialize_move, move_label, serialize_move
from .rules_schema import RuleSet
from .state import GameState, InvalidMove

logger = logging.getLogger(__name__)


@dataclass
class TrickPlayView:
    player: str
    card: dict
    label: str


@dataclass
class RoundResultView:
    last_trick_winner: str
    matador_counts: Dict[str, int]
    card_points: Dict[str, int]
    matador_winner: Optional[str]
    card_point_winner: Optional[str]
    awards: Dict[str, int]


@dataclass
class GameView:
    phase: str
    round_number: int
    players: List[str]
    dealer: str
    current_player: str
    trump: Optional[str]
    hand: List[dict]
    hand_labels: List[str]
    legal_moves: List[dict]
    legal_move_labels: List[str]
    opponent_hand_size: int
    stock_size: int
    trick: List[TrickPlayView]
    scores: Dict[str, int]
    marriages: Dict[str, List[str]]
    tricks_won: Dict[str, int]
    round_result: Optional[RoundResultView]
    winner: Optional[str]


class GameService:
    """Facade around the engine functions for a single two-player game."""

    def __init__(self, players: Sequence[str], *, seed: Optional[int] = None, rules: Optional[RuleSet] = None) -> None:
        self.rng = Random(seed)
        self.state: GameState = initial_state(players, rng=self.rng, rules=rules)
        self.history: List[Move] = []
        logger.info("Game created for %s, %s deals", ", ".join(self.state.players), self.state.dealer)

    # Actions -----------------------------------------------------------

    def deal(self) -> GameView:
        self.state = deal(build_deck(), self.state, rng=self.rng)
        return self.get_view(self.state.current_player)

    def play(self, payload: dict) -> GameView:
        move = deserialize_move(payload)
        return self.apply(move)

    def apply(self, move: Move) -> GameView:
        try:
            self.state = make_move(self.state, move)
        except InvalidMove:
            logger.warning("Rejected move %s from %s", move_label(move), move.player)
            raise
        self.history.append(move)
        return self.get_view(move.player)

    def start_next_round(self) -> GameView:
        self.state = start_next_round(self.state)
        logger.info("Round %d starting", self.state.round_number)
        return self.get_view(self.state.current_player)

    def legal_moves(self) -> List[Move]:
        return get_valid_moves(self.state)

    # Views -------------------------------------------------------------

    def get_view(self, perspective: str) -> GameView:
        state = self.state
        opponent = state.opponent_of(perspective)
        hand = sort_cards(state.hand_of(perspective))
        legal: List[Move] = get_valid_moves(state) if state.current_player == perspective else []

        round_result = None
        if state.round_result is not None:
            result = state.round_result
            round_result = RoundResultView(
                last_trick_winner=result.last_trick_winner,
                matador_counts=dict(zip(state.players, result.matador_counts)),
                card_points=dict(zip(state.players, result.card_points)),
                matador_winner=result.matador_winner,
                card_point_winner=result.card_point_winner,
                awards=dict(zip(state.players, result.awards)),
            )

        return GameView(
            phase=str(state.phase),
            round_number=state.round_number,
            players=list(state.players),
            dealer=state.dealer,
            current_player=state.current_player,
            trump=str(state.trump) if state.trump else None,
            hand=[serialize_card(card) for card in hand],
            hand_labels=[card_label(card) for card in hand],
            legal_moves=[serialize_move(move) for move in legal],
            legal_move_labels=[move_label(move) for move in legal],
            opponent_hand_size=len(state.hand_of(opponent)),
            stock_size=len(state.stock),
            trick=[
                TrickPlayView(player=player, card=serialize_card(card), label=card_label(card))
                for player, card in state.current_trick
            ],
            scores=state.scores(),
            marriages={
                player: [str(suit) for suit in sorted(state.player_state(player).marriages, key=lambda s: s.value)]
                for player in state.players
            },
            tricks_won={player: len(state.player_state(player).tricks_won) // 2 for player in state.players},
            round_result=round_result,
            winner=winner(state),
        )
