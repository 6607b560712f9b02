"""Typed intents and a single dispatcher for the state machine.

Hosts and bots that queue actions can describe them as data and apply them
with :func:`apply_intent`; the result is identical to calling the matching
function in :mod:`rook.game` directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple, Union

from .cards import Card, Suit
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
    pass_bid,
    place_bid,
    play_card,
    start_round,
)
from .state import GameState


@dataclass(frozen=True)
class StartRound:
    deck: Optional[Tuple[Card, ...]] = None


@dataclass(frozen=True)
class Deal:
    pass


@dataclass(frozen=True)
class PlaceBid:
    seat: int
    amount: int


@dataclass(frozen=True)
class PassBid:
    seat: int


@dataclass(frozen=True)
class CallRedeal:
    seat: int
    deck: Optional[Tuple[Card, ...]] = None


@dataclass(frozen=True)
class BeginNestSelection:
    pass


@dataclass(frozen=True)
class ExchangeNest:
    seat: int
    add: Tuple[Card, ...] = ()
    discard: Tuple[Card, ...] = ()


@dataclass(frozen=True)
class DeclareTrump:
    seat: int
    suit: Suit


@dataclass(frozen=True)
class CallPartner:
    seat: int
    card: Card


@dataclass(frozen=True)
class PlayCard:
    seat: int
    card: Card


@dataclass(frozen=True)
class ClearTrick:
    pass


@dataclass(frozen=True)
class CorrectRenege:
    seat: int
    card: Card


@dataclass(frozen=True)
class ApplyRenegePenalty:
    seat: int


Intent = Union[
    StartRound,
    Deal,
    PlaceBid,
    PassBid,
    CallRedeal,
    BeginNestSelection,
    ExchangeNest,
    DeclareTrump,
    CallPartner,
    PlayCard,
    ClearTrick,
    CorrectRenege,
    ApplyRenegePenalty,
]


_HANDLERS: Dict[type, Callable[[GameState, Intent], Transition]] = {
    StartRound: lambda state, intent: start_round(state, deck=intent.deck),
    Deal: lambda state, intent: deal(state),
    PlaceBid: lambda state, intent: place_bid(state, intent.seat, intent.amount),
    PassBid: lambda state, intent: pass_bid(state, intent.seat),
    CallRedeal: lambda state, intent: call_redeal(state, intent.seat, deck=intent.deck),
    BeginNestSelection: lambda state, intent: begin_nest_selection(state),
    ExchangeNest: lambda state, intent: exchange_nest(state, intent.seat, intent.add, intent.discard),
    DeclareTrump: lambda state, intent: declare_trump(state, intent.seat, intent.suit),
    CallPartner: lambda state, intent: call_partner(state, intent.seat, intent.card),
    PlayCard: lambda state, intent: play_card(state, intent.seat, intent.card),
    ClearTrick: lambda state, intent: clear_trick(state),
    CorrectRenege: lambda state, intent: correct_renege(state, intent.seat, intent.card),
    ApplyRenegePenalty: lambda state, intent: apply_renege_penalty(state, intent.seat),
}


def apply_intent(state: GameState, intent: Intent) -> Transition:
    try:
        handler = _HANDLERS[type(intent)]
    except KeyError as exc:
        raise TypeError(f"Unknown intent: {intent!r}") from exc
    return handler(state, intent)
