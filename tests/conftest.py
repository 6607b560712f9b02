"""Shared fixtures.

The fixtures deal the unshuffled deck with seat 3 dealing, so every hand is
known in advance:

* seat 0: red 1 6 11, yellow 2 7 12, green 2 6 10 14, black 4 8 12
* seat 1: red 2 7 12, yellow 3 8 13, green 3 7 11, black 1 5 9 13
* seat 2: red 3 8 13, yellow 4 9 14, green 4 8 12, black 2 6 10 14
* seat 3: red 4 9 14, yellow 5 10, green 1 5 9 13, black 3 7 11, bird
* nest: red 5 10, yellow 1 6 11
"""

import pytest

from rook.cards import Card, Suit
from rook.deck import build_deck
from rook.game import (
    begin_nest_selection,
    call_partner,
    deal,
    declare_trump,
    exchange_nest,
    new_game,
    pass_bid,
    place_bid,
    start_round,
)

NAMES = ["North", "East", "South", "West"]


def _ok(transition):
    assert transition.applied, transition.reason
    return transition.state


@pytest.fixture
def dealt():
    state = new_game(NAMES)
    state = _ok(start_round(state, deck=build_deck()))
    return _ok(deal(state))


@pytest.fixture
def won_by_north(dealt):
    """Seat 0 opens at 40 and everyone else passes."""
    state = _ok(place_bid(dealt, 0, 40))
    for seat in (1, 2, 3):
        state = _ok(pass_bid(state, seat))
    return state


@pytest.fixture
def playing(won_by_north):
    """Seat 0 keeps red 10 for red 1, names green trump and calls black 14 (held by seat 2)."""
    state = _ok(begin_nest_selection(won_by_north))
    state = _ok(exchange_nest(state, 0, add=[Card(Suit.RED, 10)], discard=[Card(Suit.RED, 1)]))
    state = _ok(declare_trump(state, 0, Suit.GREEN))
    return _ok(call_partner(state, 0, Card(Suit.BLACK, 14)))
