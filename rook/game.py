"""High-level game orchestration for Rook.

Every operation takes the current :class:`GameState` and returns a
:class:`Transition`. Accepted intents produce a new state; rejected intents
return the original state untouched together with the reason. The state is
never shared between transitions, so a host can keep any earlier state around
for replay or undo.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from random import Random
from typing import Callable, List, Optional, Sequence

from .bidding import Auction, RedealNotAllowed, next_seat
from .cards import Card, Suit
from .contract import (
    HiddenPartner,
    NoPartner,
    Team,
    partner_seat,
    resolve_partner_call,
    reveal,
    Unresolved,
    team_assignment,
    validate_trump,
)
from .deck import NEST_SIZE, SEATS, build_deck, deal as deal_cards, has_point_cards, shuffle_deck
from .errors import PhaseViolation, RuleViolation, TurnViolation
from .mechanics import is_renege, legal_moves, legal_responses
from .nest import exchange_nest as exchange_nest_cards
from .rules_schema import RuleSet
from .scoring import RoundScoreResult, find_winners, score_renege_penalty, score_round, team_captured_points
from .state import GamePhase, GameState, Player, RenegeInfo, RoundHistory
from .trick import Trick, resolve_winner

logger = logging.getLogger(__name__)


class InvalidPlay(RuleViolation):
    """Raised when an illegal card play is attempted."""


class InvalidRenegeAction(RuleViolation):
    """Raised when a renege correction or penalty does not apply."""


@dataclass(frozen=True)
class Transition:
    state: GameState
    applied: bool
    reason: Optional[str] = None
    renege: Optional[RenegeInfo] = None

    def __bool__(self) -> bool:
        return self.applied


def _transition(state: GameState, intent: str, apply: Callable[[GameState], Optional[RenegeInfo]]) -> Transition:
    draft = copy.deepcopy(state)
    try:
        renege = apply(draft)
    except RuleViolation as exc:
        logger.info("Rejected %s during %s: %s", intent, state.phase, exc)
        return Transition(state=state, applied=False, reason=str(exc))
    logger.debug("Applied %s; phase is now %s", intent, draft.phase)
    return Transition(state=draft, applied=True, renege=renege)


def _ensure_phase(state: GameState, *expected: GamePhase) -> None:
    if state.phase not in expected:
        names = ", ".join(str(phase) for phase in expected)
        raise PhaseViolation(f"Action not allowed in phase {state.phase}. Expected {names}.")


def _ensure_seat(seat: int) -> None:
    if seat not in range(SEATS):
        raise TurnViolation(f"Seat {seat!r} is not at the table.")


def _ensure_turn(state: GameState, seat: int) -> None:
    _ensure_seat(seat)
    if seat != state.current_player:
        raise TurnViolation("Not this player's turn.")


def _ensure_high_bidder(state: GameState, seat: int) -> int:
    _ensure_seat(seat)
    bidder = state.high_bidder
    if bidder is None or seat != bidder:
        raise TurnViolation("Only the high bidder may do this.")
    return bidder


# Game and round lifecycle ----------------------------------------------


def new_game(player_names: Sequence[str], rules: Optional[RuleSet] = None) -> GameState:
    """Seat four players and return the ``setup`` state.

    The first dealer is seat 3, so seat 0 opens the bidding in round one.
    """
    names = list(player_names)
    if len(names) != SEATS:
        raise ValueError(f"Rook needs exactly {SEATS} players, got {len(names)}.")
    players = [Player(seat=seat, name=name) for seat, name in enumerate(names)]
    state = GameState(players=players, rules=rules or RuleSet(), dealer=SEATS - 1)
    state.scores = {player.seat: 0 for player in players}
    state.current_player = state.first_bidder
    return state


def _reset_round(state: GameState, deck: Optional[Sequence[Card]], rng: Optional[Random]) -> None:
    for player in state.players:
        player.team = None
        player.hand = []
        player.captured_tricks = []
    state.deck = list(deck) if deck is not None else shuffle_deck(build_deck(), rng)
    state.nest = []
    state.discards = []
    state.auction = None
    state.trump = None
    state.called_card = None
    state.partner = Unresolved()
    state.current_trick = None
    state.completed_tricks = []
    state.trick_completed = False
    state.reneges = []
    state.round_scores = {Team.A: 0, Team.B: 0}
    state.current_player = state.first_bidder
    state.phase = GamePhase.DEALING


def start_round(state: GameState, *, deck: Optional[Sequence[Card]] = None, rng: Optional[Random] = None) -> Transition:
    """Open the next round with a freshly shuffled deck (or the one supplied).

    After the first round the deal passes one seat clockwise.
    """

    def apply(draft: GameState) -> None:
        _ensure_phase(draft, GamePhase.SETUP, GamePhase.ROUND_END)
        if draft.phase is GamePhase.ROUND_END:
            draft.dealer = next_seat(draft.dealer)
        draft.round_number += 1
        _reset_round(draft, deck, rng)

    return _transition(state, "start_round", apply)


def deal(state: GameState) -> Transition:
    def apply(draft: GameState) -> None:
        _ensure_phase(draft, GamePhase.DEALING)
        hands, nest = deal_cards(draft.deck, draft.dealer)
        for player, hand in zip(draft.players, hands):
            player.hand = hand
        draft.nest = nest
        draft.deck = []
        draft.auction = Auction(starting_player=draft.first_bidder, rules=draft.rules)
        draft.current_player = draft.first_bidder
        draft.phase = GamePhase.BIDDING

    return _transition(state, "deal", apply)


# Bidding ----------------------------------------------------------------


def _sync_auction(state: GameState) -> None:
    assert state.auction is not None
    state.current_player = state.auction.current_player
    if state.auction.is_complete():
        bid = state.auction.result()
        logger.info("Seat %s won the bidding at %s", bid.player, bid.amount)
        state.phase = GamePhase.BIDDING_COMPLETE


def place_bid(state: GameState, seat: int, amount: int) -> Transition:
    def apply(draft: GameState) -> None:
        _ensure_phase(draft, GamePhase.BIDDING)
        _ensure_seat(seat)
        assert draft.auction is not None
        draft.auction.bid(seat, amount)
        _sync_auction(draft)

    return _transition(state, "place_bid", apply)


def pass_bid(state: GameState, seat: int) -> Transition:
    def apply(draft: GameState) -> None:
        _ensure_phase(draft, GamePhase.BIDDING)
        _ensure_seat(seat)
        assert draft.auction is not None
        draft.auction.pass_bid(seat)
        _sync_auction(draft)

    return _transition(state, "pass_bid", apply)


def call_redeal(
    state: GameState,
    seat: int,
    *,
    deck: Optional[Sequence[Card]] = None,
    rng: Optional[Random] = None,
) -> Transition:
    """Throw in a hand without counters and restart the round from dealing.

    The dealer, the first bidder and the round number stay the same.
    """

    def apply(draft: GameState) -> None:
        _ensure_phase(draft, GamePhase.BIDDING)
        _ensure_seat(seat)
        if has_point_cards(draft.player(seat).hand):
            raise RedealNotAllowed("Cannot call a redeal while holding point cards.")
        logger.info("Seat %s called a redeal", seat)
        _reset_round(draft, deck, rng)

    return _transition(state, "call_redeal", apply)


# Contract ---------------------------------------------------------------


def begin_nest_selection(state: GameState) -> Transition:
    """Hand the nest to the high bidder."""

    def apply(draft: GameState) -> None:
        _ensure_phase(draft, GamePhase.BIDDING_COMPLETE)
        bidder = draft.high_bidder
        assert bidder is not None
        draft.player(bidder).hand.extend(draft.nest)
        draft.current_player = bidder
        draft.phase = GamePhase.NEST_SELECTION

    return _transition(state, "begin_nest_selection", apply)


def exchange_nest(state: GameState, seat: int, add: Sequence[Card], discard: Sequence[Card]) -> Transition:
    def apply(draft: GameState) -> None:
        _ensure_phase(draft, GamePhase.NEST_SELECTION)
        bidder = _ensure_high_bidder(draft, seat)
        player = draft.player(bidder)
        player.hand, draft.nest = exchange_nest_cards(
            player.hand,
            draft.nest,
            add=add,
            discard=discard,
            max_take=draft.rules.nest_selectable_cards,
        )
        draft.discards = list(discard)
        draft.phase = GamePhase.TRUMP_SELECTION

    return _transition(state, "exchange_nest", apply)


def declare_trump(state: GameState, seat: int, suit: Suit) -> Transition:
    def apply(draft: GameState) -> None:
        _ensure_phase(draft, GamePhase.TRUMP_SELECTION)
        _ensure_high_bidder(draft, seat)
        if len(draft.nest) != NEST_SIZE:
            raise PhaseViolation("Must finish the nest exchange before declaring trump.")
        draft.trump = validate_trump(suit)
        draft.phase = GamePhase.PARTNER_SELECTION

    return _transition(state, "declare_trump", apply)


def _assign_teams(state: GameState) -> None:
    bidder = state.high_bidder
    assert bidder is not None
    for seat, team in team_assignment(bidder, partner_seat(state.partner)).items():
        state.player(seat).team = team


def call_partner(state: GameState, seat: int, card: Card) -> Transition:
    """Name the partner card. The high bidder then leads the first trick."""

    def apply(draft: GameState) -> None:
        _ensure_phase(draft, GamePhase.PARTNER_SELECTION)
        bidder = _ensure_high_bidder(draft, seat)
        if draft.trump is None:
            raise PhaseViolation("Must declare trump before calling a partner.")
        draft.partner = resolve_partner_call(card, bidder=bidder, hands=draft.hands(), discarded=draft.discards)
        draft.called_card = card
        if isinstance(draft.partner, NoPartner):
            logger.info("Called card %s is out of play; seat %s plays alone", card, bidder)
            _assign_teams(draft)
        draft.current_player = bidder
        draft.current_trick = Trick(leader=bidder)
        draft.phase = GamePhase.PLAYING

    return _transition(state, "call_partner", apply)


# Trick play -------------------------------------------------------------


def legal_cards(state: GameState, seat: int) -> List[Card]:
    """Read-only legal-move query for ``seat`` against the trick on the table.

    Empty unless ``seat`` is the player on turn.
    """
    if state.phase is not GamePhase.PLAYING or state.trick_completed or state.current_trick is None:
        return []
    if seat != state.current_player or state.current_trick.card_of(seat) is not None:
        return []
    return legal_moves(state.player(seat).hand, state.current_trick, state.trump)


def _reveal_if_called(state: GameState, card: Card) -> None:
    if card == state.called_card and isinstance(state.partner, HiddenPartner):
        state.partner = reveal(state.partner)
        logger.info("Partner revealed: seat %s", state.partner.seat)
        _assign_teams(state)


def play_card(state: GameState, seat: int, card: Card) -> Transition:
    def apply(draft: GameState) -> Optional[RenegeInfo]:
        _ensure_phase(draft, GamePhase.PLAYING)
        if draft.trick_completed:
            raise PhaseViolation("The completed trick must be cleared first.")
        _ensure_turn(draft, seat)
        player = draft.player(seat)
        if card not in player.hand:
            raise InvalidPlay("Card not present in hand.")

        trick = draft.current_trick
        assert trick is not None
        lead = trick.lead_card()
        renege = None
        if lead is not None and is_renege(card, player.hand, lead, draft.trump):
            if draft.rules.renege_policy == "reject":
                raise InvalidPlay(f"Card {card} is not legal in this context.")
            correct = legal_responses(player.hand, lead, draft.trump)
            renege = RenegeInfo(
                player=seat,
                trick_index=len(draft.completed_tricks),
                card_played=card,
                correct_cards=tuple(c for c in correct if c != card),
            )
            draft.reneges.append(renege)
            logger.warning("Renege by seat %s: played %s against %s", seat, card, lead)

        player.hand.remove(card)
        trick.add_play(seat, card)
        _reveal_if_called(draft, card)

        if trick.is_full():
            _complete_trick(draft)
        else:
            draft.current_player = next_seat(seat)
        return renege

    return _transition(state, "play_card", apply)


def _complete_trick(state: GameState) -> None:
    trick = state.current_trick
    assert trick is not None
    winner = resolve_winner(trick, state.trump)
    trick.winner = winner
    state.player(winner).captured_tricks.append(trick.cards())
    state.completed_tricks.append(trick)
    state.current_player = winner

    if all(not player.hand for player in state.players):
        state.player(winner).captured_tricks.append(list(state.nest))
        _settle_round(state)
    else:
        state.trick_completed = True


def clear_trick(state: GameState) -> Transition:
    """Release the completed trick so the winner can lead the next one."""

    def apply(draft: GameState) -> None:
        _ensure_phase(draft, GamePhase.PLAYING)
        if not draft.trick_completed:
            raise PhaseViolation("There is no completed trick to clear.")
        draft.current_trick = Trick(leader=draft.current_player)
        draft.trick_completed = False

    return _transition(state, "clear_trick", apply)


# Renege handling --------------------------------------------------------


def correct_renege(state: GameState, seat: int, card: Card) -> Transition:
    """Take back a reneged card and play a legal one while the trick is still open."""

    def apply(draft: GameState) -> None:
        _ensure_phase(draft, GamePhase.PLAYING)
        _ensure_seat(seat)
        trick_index = len(draft.completed_tricks)
        pending = [
            info for info in draft.reneges if info.player == seat and info.trick_index == trick_index
        ]
        if not pending or draft.trick_completed:
            raise InvalidRenegeAction("No renege to correct for this player in the open trick.")
        info = pending[-1]
        if info.card_played == draft.called_card:
            raise InvalidRenegeAction("The called card has been shown; the partner reveal stands.")
        player = draft.player(seat)
        if card not in player.hand:
            raise InvalidRenegeAction("Correction card not present in hand.")

        trick = draft.current_trick
        assert trick is not None
        lead = trick.lead_card()
        assert lead is not None
        hand_before = player.hand + [info.card_played]
        if is_renege(card, hand_before, lead, draft.trump):
            raise InvalidRenegeAction(f"Card {card} would still be a renege.")

        player.hand.remove(card)
        player.hand.append(trick.replace_play(seat, card))
        draft.reneges.remove(info)
        _reveal_if_called(draft, card)

    return _transition(state, "correct_renege", apply)


def apply_renege_penalty(state: GameState, seat: int) -> Transition:
    """End the round at once, charging the bid to the side that reneged."""

    def apply(draft: GameState) -> None:
        _ensure_phase(draft, GamePhase.PLAYING)
        _ensure_seat(seat)
        if not any(info.player == seat for info in draft.reneges):
            raise InvalidRenegeAction(f"Seat {seat} has no recorded renege this round.")

        draft.partner = reveal(draft.partner)
        _assign_teams(draft)
        offending = draft.player(seat).team
        assert offending is not None
        opposing = [player.seat for player in draft.players if player.team is not offending]
        assert draft.auction is not None
        contract = draft.auction.result()

        result = score_renege_penalty(
            teams={player.seat: player.team for player in draft.players},
            offending_team=offending,
            bid_amount=contract.amount,
            opposing_points=team_captured_points(draft.completed_tricks, opposing),
            prior_scores=draft.scores,
        )
        logger.info("Renege penalty applied against %s (seat %s)", offending, seat)
        draft.reneges = []
        _record_settlement(draft, result, renege_penalty=True)

    return _transition(state, "apply_renege_penalty", apply)


# Settlement -------------------------------------------------------------


def _settle_round(state: GameState) -> None:
    state.partner = reveal(state.partner)
    _assign_teams(state)
    assert state.auction is not None
    contract = state.auction.result()
    last_winner = state.completed_tricks[-1].winner
    captured = {
        team: team_captured_points(state.completed_tricks, state.team_members(team), state.nest, last_winner)
        for team in Team
    }
    result = score_round(
        teams={player.seat: player.team for player in state.players},
        captured=captured,
        bidding_team=state.player(contract.player).team,
        bid_amount=contract.amount,
        prior_scores=state.scores,
    )
    _record_settlement(state, result, renege_penalty=False)


def _record_settlement(state: GameState, result: RoundScoreResult, *, renege_penalty: bool) -> None:
    assert state.auction is not None
    contract = state.auction.result()
    state.scores = dict(result.new_scores)
    state.round_scores = dict(result.round_scores)
    state.score_history.append(
        RoundHistory(
            round_number=state.round_number,
            player_scores=dict(result.new_scores),
            round_deltas=dict(result.deltas),
            bid_amount=contract.amount,
            bidder=contract.player,
            bid_made=result.bid_made,
            renege_penalty=renege_penalty,
        )
    )
    state.current_trick = None
    state.trick_completed = False
    state.winners = find_winners(state.scores, state.rules.winning_score, state.rules.winner_tie_policy)
    state.phase = GamePhase.GAME_END if state.winners else GamePhase.ROUND_END
    logger.info(
        "Round %s settled: %s; scores %s",
        state.round_number,
        {str(team): score for team, score in state.round_scores.items()},
        state.scores,
    )
