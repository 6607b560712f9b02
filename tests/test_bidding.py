import pytest

from rook.bidding import AlreadyPassed, Auction, BidNotAllowed, BiddingError, validate_bid
from rook.errors import TurnViolation
from rook.game import pass_bid, place_bid
from rook.state import GamePhase


def test_validate_bid_limits_and_increment():
    validate_bid(40, None)
    validate_bid(120, 115)
    for amount, current in [(35, None), (125, None), (42, None), (50, 50), (45, 50)]:
        with pytest.raises(BidNotAllowed):
            validate_bid(amount, current)


def test_turn_order_skips_passed_players():
    auction = Auction(starting_player=0)
    auction.bid(0, 40)
    auction.pass_bid(1)
    auction.bid(2, 45)
    auction.pass_bid(3)
    assert auction.current_player == 0

    auction.bid(0, 50)
    assert auction.current_player == 2
    auction.pass_bid(2)

    assert auction.is_complete()
    result = auction.result()
    assert (result.player, result.amount) == (0, 50)
    assert [(entry.player, entry.action, entry.amount) for entry in auction.history] == [
        (0, "bid", 40),
        (1, "pass", None),
        (2, "bid", 45),
        (3, "pass", None),
        (0, "bid", 50),
        (2, "pass", None),
    ]


def test_passed_player_cannot_act_again():
    auction = Auction(starting_player=0)
    auction.pass_bid(0)
    with pytest.raises(AlreadyPassed):
        auction.bid(0, 40)


def test_out_of_turn_bid_is_refused():
    auction = Auction(starting_player=0)
    with pytest.raises(TurnViolation):
        auction.bid(1, 40)


def test_last_player_is_forced_to_bid():
    auction = Auction(starting_player=1)
    for seat in (1, 2, 3):
        auction.pass_bid(seat)
    assert auction.current_player == 0
    assert auction.is_forced(0)
    with pytest.raises(BidNotAllowed):
        auction.pass_bid(0)

    auction.bid(0, 40)
    assert auction.is_complete()
    assert auction.result().player == 0


def test_result_before_completion_raises():
    auction = Auction(starting_player=0)
    with pytest.raises(BiddingError):
        auction.result()


def test_rejected_bid_leaves_state_untouched(dealt):
    transition = place_bid(dealt, 1, 40)
    assert not transition.applied
    assert transition.state is dealt
    assert "turn" in transition.reason

    transition = place_bid(dealt, 0, 42)
    assert not transition.applied
    assert dealt.auction.history == []


def test_state_machine_reaches_bidding_complete(won_by_north):
    assert won_by_north.phase is GamePhase.BIDDING_COMPLETE
    assert won_by_north.high_bidder == 0
    assert won_by_north.current_bid.amount == 40
    assert won_by_north.current_player == 0


def test_forced_bidder_through_the_state_machine(dealt):
    state = dealt
    for seat in (0, 1, 2):
        state = pass_bid(state, seat).state
    assert state.phase is GamePhase.BIDDING
    assert state.current_player == 3

    refused = pass_bid(state, 3)
    assert not refused.applied

    state = place_bid(state, 3, 40).state
    assert state.phase is GamePhase.BIDDING_COMPLETE
    assert state.high_bidder == 3


def test_no_bidding_after_completion(won_by_north):
    transition = place_bid(won_by_north, 0, 45)
    assert not transition.applied
