"""Round-end bonus scoring for Bondtolva."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from .cards import Card, card_points_total, matador_count

logger = logging.getLogger(__name__)


class ScoringError(ValueError):
    """Raised when round scoring receives inconsistent input."""


@dataclass(frozen=True)
class RoundScoreResult:
    """Outcome of the round-end cascade, indexed by seat where paired."""

    last_trick_winner: str
    matador_counts: Tuple[int, int]
    card_points: Tuple[int, int]
    matador_winner: Optional[str]
    card_point_winner: Optional[str]
    awards: Tuple[int, int]


def _higher(players: Sequence[str], values: Sequence[int]) -> Optional[str]:
    if values[0] == values[1]:
        return None
    return players[0] if values[0] > values[1] else players[1]


def score_round(
    *,
    players: Sequence[str],
    tricks_won: Sequence[Sequence[Card]],
    last_trick_winner: str,
    last_trick_bonus: int = 1,
    matador_bonus: int = 1,
    card_point_bonus: int = 1,
) -> RoundScoreResult:
    """Run the last-trick, matador and card-point cascade once.

    The card-point comparison is only consulted when the matador counts tie,
    and a tie there awards nothing.
    """
    if len(players) != 2 or len(tricks_won) != 2:
        raise ScoringError("Exactly two players are supported.")
    if last_trick_winner not in players:
        raise ScoringError(f"Unknown last trick winner {last_trick_winner!r}.")

    awards = [0, 0]
    awards[list(players).index(last_trick_winner)] += last_trick_bonus

    matadors = (matador_count(tricks_won[0]), matador_count(tricks_won[1]))
    points = (card_points_total(tricks_won[0]), card_points_total(tricks_won[1]))

    matador_winner = _higher(players, matadors)
    card_point_winner: Optional[str] = None
    if matador_winner is not None:
        awards[list(players).index(matador_winner)] += matador_bonus
    else:
        card_point_winner = _higher(players, points)
        if card_point_winner is not None:
            awards[list(players).index(card_point_winner)] += card_point_bonus

    logger.debug(
        "Round scored: last trick %s, matadors %s, card points %s, awards %s",
        last_trick_winner,
        matadors,
        points,
        awards,
    )
    return RoundScoreResult(
        last_trick_winner=last_trick_winner,
        matador_counts=matadors,
        card_points=points,
        matador_winner=matador_winner,
        card_point_winner=card_point_winner,
        awards=(awards[0], awards[1]),
    )
