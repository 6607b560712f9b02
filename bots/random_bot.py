"""Random baseline bot that drives the engine through legal intents."""

from __future__ import annotations

import random
from typing import Optional, Sequence, Tuple

from rook.bidding import BidNotAllowed, validate_bid
from rook.cards import Card, ORDINARY_SUITS, Suit
from rook.deck import build_deck
from rook.game import legal_cards
from rook.state import GameState

from .base import BotStrategy


class RandomBot(BotStrategy):
    name = "Random"

    def __init__(self, seed: Optional[int] = None, bid_chance: float = 0.4) -> None:
        self._rng = random.Random(seed)
        self.bid_chance = bid_chance

    def _legal_bids(self, state: GameState) -> list[int]:
        assert state.auction is not None
        rules = state.rules
        amounts = []
        for amount in range(rules.min_bid, rules.max_bid + 1, rules.bid_increment):
            try:
                validate_bid(amount, state.auction.highest_bid, rules)
            except BidNotAllowed:
                continue
            amounts.append(amount)
        return amounts

    def offer_bid(self, state: GameState, player: int) -> Optional[int]:
        assert state.auction is not None
        legal = self._legal_bids(state)
        forced = state.auction.is_forced(player)
        if not legal or (not forced and self._rng.random() >= self.bid_chance):
            return None
        # Stay near the bottom of the range so most auctions close quickly.
        return self._rng.choice(legal[:3])

    def select_nest(self, state: GameState, player: int) -> Tuple[Sequence[Card], Sequence[Card]]:
        nest = list(state.nest)
        original = [card for card in state.player(player).hand if card not in nest]
        count = self._rng.randint(0, min(state.rules.nest_selectable_cards, len(nest)))
        return self._rng.sample(nest, count), self._rng.sample(original, count)

    def choose_trump(self, state: GameState, player: int) -> Suit:
        return self._rng.choice(ORDINARY_SUITS)

    def call_partner(self, state: GameState, player: int) -> Card:
        unavailable = set(state.player(player).hand) | set(state.nest)
        candidates = [card for card in build_deck() if card not in unavailable]
        return self._rng.choice(candidates)

    def play_card(self, state: GameState, player: int) -> Card:
        legal = legal_cards(state, player)
        if not legal:
            raise RuntimeError("No legal plays available for bot.")
        return self._rng.choice(legal)
