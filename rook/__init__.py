"""Rules engine package for four-player partnership Rook."""

__all__ = [
    "cards",
    "deck",
    "errors",
    "bidding",
    "nest",
    "contract",
    "trick",
    "mechanics",
    "scoring",
    "state",
    "game",
    "intents",
    "rules_schema",
    "service",
]
