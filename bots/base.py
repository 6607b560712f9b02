"""Common bot strategy interfaces."""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

from rook.cards import Card, ORDINARY_SUITS, Suit
from rook.deck import build_deck
from rook.game import legal_cards
from rook.state import GameState


class BotStrategy:
    """Base class for bot policies.

    Bots only look at the state and answer with the payload of a public
    intent; the arena submits it like any other player would.
    """

    name: str = "BaseBot"

    def on_round_start(self, state: GameState, player: int) -> None:
        """Optional hook invoked after each deal."""
        return None

    def offer_bid(self, state: GameState, player: int) -> Optional[int]:
        """Return a bid amount, or None to pass.

        The last player left standing with no bid on the table must bid.
        """
        assert state.auction is not None
        if state.auction.is_forced(player):
            return state.rules.min_bid
        return None

    def select_nest(self, state: GameState, player: int) -> Tuple[Sequence[Card], Sequence[Card]]:
        """Return (cards to keep from the nest, cards to discard from the original hand)."""
        return (), ()

    def choose_trump(self, state: GameState, player: int) -> Suit:
        return ORDINARY_SUITS[0]

    def call_partner(self, state: GameState, player: int) -> Card:
        """Name a card that is neither in hand nor buried in the nest."""
        unavailable = set(state.player(player).hand) | set(state.nest)
        return next(card for card in build_deck() if card not in unavailable)

    def play_card(self, state: GameState, player: int) -> Card:
        legal = legal_cards(state, player)
        if not legal:
            raise RuntimeError("No legal plays available for bot.")
        return legal[0]
