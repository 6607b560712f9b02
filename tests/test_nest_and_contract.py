import pytest

from rook.cards import BIRD, Card, Suit
from rook.contract import HiddenPartner, NoPartner, Team, public_partner, team_assignment
from rook.game import begin_nest_selection, call_partner, declare_trump, exchange_nest
from rook.nest import InvalidNestExchange, exchange_nest as exchange_nest_cards
from rook.state import GamePhase

R, Y, G, B = Suit.RED, Suit.YELLOW, Suit.GREEN, Suit.BLACK


def _hand():
    return [Card(R, rank) for rank in range(1, 14)]


def _nest():
    return [Card(Y, 1), Card(Y, 5), Card(Y, 10), Card(G, 2), BIRD]


def test_exchange_conserves_cards():
    nest = _nest()
    hand = _hand() + nest
    new_hand, new_nest = exchange_nest_cards(hand, nest, add=[BIRD, Card(Y, 10)], discard=[Card(R, 1), Card(R, 2)])
    assert len(new_hand) == 13
    assert len(new_nest) == 5
    assert BIRD in new_hand and Card(R, 1) in new_nest
    assert set(new_hand) | set(new_nest) == set(hand)


def test_exchange_of_nothing_keeps_the_original_hand():
    nest = _nest()
    new_hand, new_nest = exchange_nest_cards(_hand() + nest, nest, add=[], discard=[])
    assert new_hand == _hand()
    assert new_nest == nest


@pytest.mark.parametrize(
    "add, discard",
    [
        ([BIRD], []),
        ([BIRD, Card(Y, 1), Card(Y, 5), Card(Y, 10)], [Card(R, 1), Card(R, 2), Card(R, 3), Card(R, 4)]),
        ([Card(B, 9)], [Card(R, 1)]),
        ([BIRD], [Card(Y, 1)]),
        ([BIRD, BIRD], [Card(R, 1), Card(R, 2)]),
    ],
)
def test_invalid_exchanges(add, discard):
    nest = _nest()
    with pytest.raises(InvalidNestExchange):
        exchange_nest_cards(_hand() + nest, nest, add=add, discard=discard)


def test_nest_selection_flow(won_by_north):
    state = begin_nest_selection(won_by_north).state
    assert state.phase is GamePhase.NEST_SELECTION
    assert len(state.player(0).hand) == 18

    assert not exchange_nest(state, 1, [], []).applied
    refused = exchange_nest(state, 0, [Card(R, 5)], [Card(R, 10)])
    assert not refused.applied

    state = exchange_nest(state, 0, [Card(R, 5)], [Card(B, 4)]).state
    assert state.phase is GamePhase.TRUMP_SELECTION
    assert len(state.player(0).hand) == 13
    assert len(state.nest) == 5
    assert Card(B, 4) in state.nest


def test_trump_must_be_an_ordinary_suit(won_by_north):
    state = begin_nest_selection(won_by_north).state
    state = exchange_nest(state, 0, [], []).state
    assert not declare_trump(state, 0, Suit.BIRD).applied
    assert not declare_trump(state, 2, Suit.RED).applied
    state = declare_trump(state, 0, Suit.RED).state
    assert state.trump is Suit.RED
    assert state.phase is GamePhase.PARTNER_SELECTION


def _ready_to_call(won_by_north):
    state = begin_nest_selection(won_by_north).state
    state = exchange_nest(state, 0, [Card(R, 10)], [Card(R, 1)]).state
    return declare_trump(state, 0, G).state


def test_partner_call_is_secret(won_by_north):
    state = call_partner(_ready_to_call(won_by_north), 0, Card(B, 14)).state
    assert state.phase is GamePhase.PLAYING
    assert state.partner == HiddenPartner(2)
    assert public_partner(state.partner) is None
    assert all(player.team is None for player in state.players)
    assert state.current_player == 0
    assert state.current_trick.leader == 0


def test_partner_call_rejections(won_by_north):
    state = _ready_to_call(won_by_north)
    assert not call_partner(state, 0, Card(R, 6)).applied
    assert not call_partner(state, 0, Card(R, 1)).applied
    assert not call_partner(state, 1, Card(B, 14)).applied


def test_calling_a_card_left_in_the_nest_means_playing_alone(won_by_north):
    state = call_partner(_ready_to_call(won_by_north), 0, Card(Y, 6)).state
    assert state.partner == NoPartner()
    assert state.player(0).team is Team.A
    assert [player.team for player in state.players[1:]] == [Team.B] * 3


def test_team_assignment():
    assert team_assignment(1, 3) == {0: Team.B, 1: Team.A, 2: Team.B, 3: Team.A}
    assert team_assignment(2, None) == {0: Team.B, 1: Team.B, 2: Team.A, 3: Team.B}
