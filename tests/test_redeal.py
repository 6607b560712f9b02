from rook.cards import Card, Suit
from rook.deck import build_deck
from rook.game import call_redeal, deal, place_bid
from rook.state import GamePhase


def _pointless_hand():
    ranks = (1, 2, 3, 4, 6, 7, 8, 9, 11, 12, 13)
    return [Card(Suit.RED, rank) for rank in ranks] + [Card(Suit.YELLOW, 2), Card(Suit.YELLOW, 3)]


def test_redeal_refused_while_holding_points(dealt):
    transition = call_redeal(dealt, 0)
    assert not transition.applied
    assert "point cards" in transition.reason
    assert transition.state is dealt


def test_redeal_restarts_the_round_from_dealing(dealt):
    state = place_bid(dealt, 0, 40).state
    state.player(2).hand = _pointless_hand()

    transition = call_redeal(state, 2, deck=build_deck())
    assert transition.applied
    redealt = transition.state
    assert redealt.phase is GamePhase.DEALING
    assert redealt.dealer == dealt.dealer
    assert redealt.round_number == dealt.round_number
    assert redealt.current_player == 0
    assert redealt.auction is None
    assert all(not player.hand for player in redealt.players)
    assert len(redealt.deck) == 57

    state = deal(redealt).state
    assert state.phase is GamePhase.BIDDING
    assert state.auction.history == []
    assert [len(player.hand) for player in state.players] == [13] * 4


def test_redeal_only_during_bidding(won_by_north):
    won_by_north.player(1).hand = _pointless_hand()
    assert not call_redeal(won_by_north, 1).applied
