"""Convenience service layer for UI and agents."""

from __future__ import annotations

from dataclasses import dataclass
from random import Random
from typing import Optional, Sequence

from .cards import Card, Suit, card_label, serialize_card
from .contract import public_partner
from .game import (
    Transition,
    apply_renege_penalty,
    begin_nest_selection,
    call_partner,
    call_redeal,
    clear_trick,
    correct_renege,
    deal,
    declare_trump,
    exchange_nest,
    legal_cards,
    new_game,
    pass_bid,
    place_bid,
    play_card,
    start_round,
)
from .intents import Intent, apply_intent
from .rules_schema import RuleSet
from .scoring import trick_points
from .state import GamePhase, GameState
from .trick import Trick


@dataclass
class TrickPlayView:
    player: int
    card: dict
    label: str


@dataclass
class TrickView:
    leader: int
    plays: list[TrickPlayView]
    winner: Optional[int]


@dataclass
class PlayerView:
    seat: int
    name: str
    team: Optional[str]
    hand_size: int
    captured_points: int


@dataclass
class GameView:
    phase: str
    perspective: int
    round_number: int
    dealer: int
    current_player: int
    players: list[PlayerView]
    hand: list[dict]
    hand_labels: list[str]
    legal_moves: list[dict]
    current_bid: Optional[dict]
    high_bidder: Optional[int]
    bidding_history: list[dict]
    passed_players: list[int]
    deck_size: int
    nest: list[dict]
    nest_size: int
    trump: Optional[str]
    called_card: Optional[dict]
    partner: Optional[int]
    trick: Optional[TrickView]
    trick_completed: bool
    completed_tricks: int
    pending_reneges: list[dict]
    scores: dict[int, int]
    round_scores: dict[str, int]
    winners: list[int]


class GameService:
    """Owns one game's state for a host process and applies intents in order.

    Views never expose the undealt deck, other players' hands or a partner who
    has not been revealed yet.
    """

    def __init__(
        self,
        player_names: Sequence[str] = ("North", "East", "South", "West"),
        *,
        rules: Optional[RuleSet] = None,
        rng: Optional[Random] = None,
        state: Optional[GameState] = None,
    ) -> None:
        self.state = state or new_game(player_names, rules)
        self.rng = rng
        self.last_transition: Optional[Transition] = None

    # Actions -----------------------------------------------------------

    def _commit(self, transition: Transition, perspective: int) -> GameView:
        self.last_transition = transition
        self.state = transition.state
        return self.get_view(perspective)

    def apply(self, intent: Intent, perspective: int = 0) -> GameView:
        return self._commit(apply_intent(self.state, intent), perspective)

    def start_round(self, deck: Optional[Sequence[Card]] = None) -> GameView:
        """Open the next round and deal it."""
        view = self._commit(start_round(self.state, deck=deck, rng=self.rng), 0)
        if self.last_transition.applied:
            view = self._commit(deal(self.state), 0)
        return view

    def place_bid(self, player: int, amount: int) -> GameView:
        return self._commit(place_bid(self.state, player, amount), player)

    def pass_bid(self, player: int) -> GameView:
        return self._commit(pass_bid(self.state, player), player)

    def call_redeal(self, player: int, deck: Optional[Sequence[Card]] = None) -> GameView:
        view = self._commit(call_redeal(self.state, player, deck=deck, rng=self.rng), player)
        if self.last_transition.applied:
            view = self._commit(deal(self.state), player)
        return view

    def take_nest(self) -> GameView:
        transition = begin_nest_selection(self.state)
        bidder = transition.state.high_bidder
        return self._commit(transition, bidder if bidder is not None else 0)

    def exchange_nest(self, player: int, add: Sequence[Card], discard: Sequence[Card]) -> GameView:
        return self._commit(exchange_nest(self.state, player, add, discard), player)

    def declare_trump(self, player: int, suit: Suit) -> GameView:
        return self._commit(declare_trump(self.state, player, suit), player)

    def call_partner(self, player: int, card: Card) -> GameView:
        return self._commit(call_partner(self.state, player, card), player)

    def play_card(self, player: int, card: Card) -> GameView:
        return self._commit(play_card(self.state, player, card), player)

    def clear_trick(self) -> GameView:
        return self._commit(clear_trick(self.state), self.state.current_player)

    def correct_renege(self, player: int, card: Card) -> GameView:
        return self._commit(correct_renege(self.state, player, card), player)

    def apply_renege_penalty(self, player: int) -> GameView:
        return self._commit(apply_renege_penalty(self.state, player), player)

    # Views -------------------------------------------------------------

    def get_view(self, perspective: int = 0) -> GameView:
        state = self.state
        auction = state.auction
        hand = state.player(perspective).hand
        legal = legal_cards(state, perspective) if perspective == state.current_player else []
        show_nest = state.phase is GamePhase.NEST_SELECTION and perspective == state.high_bidder
        current_bid = state.current_bid

        return GameView(
            phase=str(state.phase),
            perspective=perspective,
            round_number=state.round_number,
            dealer=state.dealer,
            current_player=state.current_player,
            players=[
                PlayerView(
                    seat=player.seat,
                    name=player.name,
                    team=str(player.team) if player.team else None,
                    hand_size=len(player.hand),
                    captured_points=sum(trick_points(pile) for pile in player.captured_tricks),
                )
                for player in state.players
            ],
            hand=[serialize_card(card) for card in hand],
            hand_labels=[card_label(card) for card in hand],
            legal_moves=[serialize_card(card) for card in legal],
            current_bid={"player": current_bid.player, "amount": current_bid.amount} if current_bid else None,
            high_bidder=state.high_bidder,
            bidding_history=[
                {"player": entry.player, "action": entry.action, "amount": entry.amount}
                for entry in (auction.history if auction else [])
            ],
            passed_players=sorted(auction.passed) if auction else [],
            deck_size=len(state.deck),
            nest=[serialize_card(card) for card in state.nest] if show_nest else [],
            nest_size=len(state.nest),
            trump=str(state.trump) if state.trump else None,
            called_card=serialize_card(state.called_card) if state.called_card else None,
            partner=public_partner(state.partner),
            trick=self._trick_view(state.current_trick),
            trick_completed=state.trick_completed,
            completed_tricks=len(state.completed_tricks),
            pending_reneges=[
                {"player": info.player, "trick_index": info.trick_index, "card": serialize_card(info.card_played)}
                for info in state.reneges
            ],
            scores=dict(state.scores),
            round_scores={str(team): score for team, score in state.round_scores.items()},
            winners=list(state.winners),
        )

    # Helpers -----------------------------------------------------------

    def _trick_view(self, trick: Optional[Trick]) -> Optional[TrickView]:
        if trick is None or trick.is_empty():
            return None
        return TrickView(
            leader=trick.leader,
            plays=[TrickPlayView(player=p, card=serialize_card(c), label=card_label(c)) for p, c in trick.plays],
            winner=trick.winner,
        )
