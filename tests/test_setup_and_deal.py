from dataclasses import replace
from random import Random

import pytest

from bondtolva.cards import Card, Rank, Suit
from bondtolva.deck import build_deck
from bondtolva.game import deal, initial_state, start_next_round
from bondtolva.mechanics import get_valid_moves
from bondtolva.rules_schema import RuleSet
from bondtolva.state import Phase, PlayerState, PreconditionViolation


def test_initial_state_seats_elder_first(no_shuffle):
    state = initial_state(["A", "B"], rng=no_shuffle)

    assert state.dealer == "A"
    assert state.players == ("B", "A")
    assert state.current_player == "B"
    assert state.phase is Phase.DEALING
    assert state.trump is None
    assert state.player_states == (PlayerState(), PlayerState())
    assert get_valid_moves(state) == []


def test_initial_state_dealer_is_one_of_the_players():
    for seed in range(10):
        state = initial_state(["A", "B"], rng=Random(seed))
        assert set(state.players) == {"A", "B"}
        assert state.players[1] == state.dealer
        assert state.current_player == state.players[0]


def test_initial_state_needs_two_distinct_players():
    with pytest.raises(PreconditionViolation):
        initial_state(["A", "A"])
    with pytest.raises(PreconditionViolation):
        initial_state(["A"])


def test_deal_gives_six_six_eight(no_shuffle):
    state = initial_state(["A", "B"], rng=no_shuffle)
    dealt = deal(build_deck(), state, rng=no_shuffle)

    assert dealt.phase is Phase.STOCK_OPEN
    assert len(dealt.hand_of("A")) == 6
    assert len(dealt.hand_of("B")) == 6
    assert len(dealt.stock) == 8
    assert Card(Rank.NINE, Suit.CLUBS) in dealt.hand_of("B")
    assert Card(Rank.KING, Suit.CLUBS) in dealt.hand_of("A")
    assert dealt.stock[-1] == Card(Rank.QUEEN, Suit.SPADES)
    assert dealt.current_player == "B"
    dealt.check_integrity()
    assert state.phase is Phase.DEALING


def test_deal_with_seed_is_reproducible():
    first = deal(build_deck(), initial_state(["A", "B"], rng=Random(5)), rng=Random(9))
    second = deal(build_deck(), initial_state(["A", "B"], rng=Random(5)), rng=Random(9))
    assert first == second


def test_deal_preconditions(no_shuffle):
    state = initial_state(["A", "B"], rng=no_shuffle)
    with pytest.raises(PreconditionViolation):
        deal(build_deck()[:-1], state)
    with pytest.raises(PreconditionViolation):
        deal(build_deck()[:-1] + [Card(Rank.KING, Suit.HEARTS)], state)

    dealt = deal(build_deck(), state, rng=no_shuffle)
    with pytest.raises(PreconditionViolation):
        deal(build_deck(), dealt)


def test_deal_respects_configured_hand_size(no_shuffle):
    state = initial_state(["A", "B"], rng=no_shuffle, rules=RuleSet(hand_size=4, packet_size=2))
    dealt = deal(build_deck(), state, rng=no_shuffle)
    assert len(dealt.hand_of("A")) == 4
    assert len(dealt.stock) == 12


def test_start_next_round_passes_the_deal(make_state):
    finished = make_state(([], []), phase=Phase.ROUND_SCORING, scores=(5, 3), trump=Suit.CLUBS)

    fresh = start_next_round(finished)

    assert fresh.phase is Phase.DEALING
    assert fresh.players == ("B", "A")
    assert fresh.dealer == "A"
    assert fresh.current_player == "B"
    assert fresh.scores() == {"A": 5, "B": 3}
    assert fresh.trump is None
    assert fresh.round_number == 2
    assert all(not player_state.tricks_won for player_state in fresh.player_states)


def test_start_next_round_only_after_scoring(make_state):
    state = make_state(([Card(Rank.KING, Suit.CLUBS)], [Card(Rank.NINE, Suit.CLUBS)]))
    with pytest.raises(PreconditionViolation):
        start_next_round(state)
    with pytest.raises(PreconditionViolation):
        start_next_round(replace(state, phase=Phase.GAME_END))


def test_malformed_state_rejected(make_state):
    state = make_state(
        ([Card(Rank.KING, Suit.CLUBS)], [Card(Rank.NINE, Suit.CLUBS)]),
    )
    duplicated = state.with_player_state(
        "B", replace(state.player_state("B"), hand=frozenset({Card(Rank.NINE, Suit.CLUBS), Card(Rank.KING, Suit.CLUBS)}))
    )
    with pytest.raises(PreconditionViolation):
        get_valid_moves(duplicated)

    missing = state.with_player_state("A", replace(state.player_state("A"), hand=frozenset()))
    with pytest.raises(PreconditionViolation):
        get_valid_moves(missing)
