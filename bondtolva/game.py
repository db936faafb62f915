"""State transitions for a game of Bondtolva."""

from __future__ import annotations

import logging
from dataclasses import replace
from random import Random
from typing import Optional, Sequence, Tuple

from .cards import Card
from .deck import is_complete_deck, shuffle_and_deal
from .mechanics import get_valid_moves
from .moves import DeclareMarriage, Move, Play
from .rules_schema import DEFAULT_RULES, RuleSet
from .scoring import score_round
from .state import GameState, InvalidMove, Phase, PlayerState, PreconditionViolation
from .trick import trick_winner

logger = logging.getLogger(__name__)


def initial_state(
    players: Sequence[str],
    *,
    rng: Optional[Random] = None,
    rules: Optional[RuleSet] = None,
) -> GameState:
    """Seat two players with a randomly chosen dealer; the elder hand moves first."""
    if len(players) != 2 or players[0] == players[1]:
        raise PreconditionViolation("A game needs exactly two distinct players.")
    if rng is None:
        rng = Random()

    dealer = rng.choice(list(players))
    elder = players[1] if dealer == players[0] else players[0]
    logger.debug("New game: elder %s, dealer %s", elder, dealer)
    return GameState(
        players=(elder, dealer),
        dealer=dealer,
        current_player=elder,
        phase=Phase.DEALING,
        rules=rules or DEFAULT_RULES,
    )


def deal(deck: Sequence[Card], state: GameState, *, rng: Optional[Random] = None) -> GameState:
    """Shuffle the deck and distribute hands and stock, opening the stock."""
    if state.phase is not Phase.DEALING:
        raise PreconditionViolation(f"Cannot deal in phase {state.phase}.")
    if not is_complete_deck(deck):
        raise PreconditionViolation("Deck must contain exactly the 20 Bondtolva cards.")
    state.check_integrity()

    hands, stock = shuffle_and_deal(
        deck,
        rng=rng,
        hand_size=state.rules.hand_size,
        packet_size=state.rules.packet_size,
    )
    seats = tuple(
        replace(player_state, hand=frozenset(hand))
        for player_state, hand in zip(state.player_states, hands)
    )
    logger.debug("Dealt round %d, stock of %d", state.round_number, len(stock))
    return replace(
        state,
        player_states=seats,
        stock=tuple(stock),
        current_player=state.players[0],
        phase=Phase.STOCK_OPEN,
    )


def make_move(state: GameState, move: Move) -> GameState:
    """Apply a legal move and return the resulting state.

    The input state is never modified. Raises InvalidMove for anything
    outside get_valid_moves(state).
    """
    if move not in get_valid_moves(state):
        raise InvalidMove(f"{move!r} is not legal in phase {state.phase}.")

    player = move.player
    actor = state.player_state(player)
    trump = state.trump

    if isinstance(move, DeclareMarriage):
        suit = move.card.suit
        if trump is None:
            trump = suit
            bonus = state.rules.first_marriage_points
        else:
            bonus = state.rules.later_marriage_points
        actor = replace(actor, marriages=actor.marriages | {suit}, score=actor.score + bonus)
        logger.debug("%s declares marriage in %s for %d", player, suit, bonus)
    elif not isinstance(move, Play):
        raise TypeError(f"Unknown move kind: {type(move).__name__}")

    actor = replace(actor, hand=actor.hand - {move.card})
    trick = state.current_trick + ((player, move.card),)
    new_state = replace(state.with_player_state(player, actor), current_trick=trick, trump=trump)

    if len(trick) == 1:
        return replace(new_state, current_player=state.opponent_of(player))
    return _complete_trick(new_state)


def _complete_trick(state: GameState) -> GameState:
    winner = trick_winner(state.current_trick, state.trump)
    loser = state.opponent_of(winner)
    trick_cards = tuple(card for _, card in state.current_trick)
    logger.debug("Trick %s taken by %s", trick_cards, winner)

    winner_state = state.player_state(winner)
    winner_state = replace(winner_state, tricks_won=winner_state.tricks_won + trick_cards)
    loser_state = state.player_state(loser)

    phase = state.phase
    stock = state.stock
    if phase is Phase.STOCK_OPEN:
        winner_state = replace(winner_state, hand=winner_state.hand | {stock[-1]})
        loser_state = replace(loser_state, hand=loser_state.hand | {stock[-2]})
        stock = stock[:-2]
        if not stock:
            phase = Phase.STOCK_CLOSED

    state = replace(
        state.with_player_state(winner, winner_state).with_player_state(loser, loser_state),
        current_trick=(),
        current_player=winner,
        stock=stock,
        phase=phase,
        last_trick_winner=winner,
    )

    if all(not player_state.hand for player_state in state.player_states):
        state = _score_round(state, winner)

    if any(player_state.score >= state.rules.game_target for player_state in state.player_states):
        logger.debug("Game over: %s", state.scores())
        state = replace(state, phase=Phase.GAME_END)
    return state


def _score_round(state: GameState, last_winner: str) -> GameState:
    rules = state.rules
    result = score_round(
        players=state.players,
        tricks_won=[player_state.tricks_won for player_state in state.player_states],
        last_trick_winner=last_winner,
        last_trick_bonus=rules.last_trick_bonus,
        matador_bonus=rules.matador_bonus,
        card_point_bonus=rules.card_point_bonus,
    )
    seats = tuple(
        replace(player_state, score=player_state.score + award)
        for player_state, award in zip(state.player_states, result.awards)
    )
    return replace(state, player_states=seats, round_result=result, phase=Phase.ROUND_SCORING)


def start_next_round(state: GameState) -> GameState:
    """Return a fresh DEALING state for the next round; the deal passes across."""
    if state.phase is not Phase.ROUND_SCORING:
        raise PreconditionViolation(f"Cannot start a new round in phase {state.phase}.")

    elder, dealer = state.players
    players: Tuple[str, str] = (dealer, elder)
    seats = tuple(
        PlayerState(score=state.player_state(player).score) for player in players
    )
    logger.debug("Round %d: %s deals", state.round_number + 1, elder)
    return GameState(
        players=players,
        dealer=elder,
        current_player=dealer,
        phase=Phase.DEALING,
        player_states=seats,
        rules=state.rules,
        round_number=state.round_number + 1,
    )


def winner(state: GameState) -> Optional[str]:
    """Return the player with the higher score once the game has ended."""
    if state.phase is not Phase.GAME_END:
        return None
    first, second = state.players
    if state.score_of(first) == state.score_of(second):
        return None
    return first if state.score_of(first) > state.score_of(second) else second
