"""Validation schema for Rook rules configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .deck import NEST_SIZE


class RuleSet(BaseModel):
    model_config = ConfigDict(frozen=True)

    winning_score: int = Field(500, gt=0, description="Individual score that ends the game.")
    min_bid: int = Field(40, gt=0, description="Lowest opening bid.")
    max_bid: int = Field(120, gt=0, description="Highest bid allowed.")
    bid_increment: int = Field(5, gt=0, description="Every bid must be a multiple of this step.")
    nest_selectable_cards: int = Field(
        3,
        ge=0,
        le=NEST_SIZE,
        description="How many nest cards the high bidder may keep.",
    )
    renege_policy: Literal["flag", "reject"] = Field(
        "flag",
        description="'flag' accepts an illegal card and records the renege; 'reject' refuses it.",
    )
    winner_tie_policy: Literal["shared", "lowest_seat"] = Field(
        "shared",
        description="How to pick the winner when several players top the winning score with equal totals.",
    )

    @model_validator(mode="after")
    def validate_bid_range(self) -> "RuleSet":
        if self.min_bid > self.max_bid:
            raise ValueError("min_bid cannot exceed max_bid.")
        if self.min_bid % self.bid_increment or self.max_bid % self.bid_increment:
            raise ValueError("Bid limits must be multiples of bid_increment.")
        return self


DEFAULT_RULES = RuleSet()


def load_rules(path: Union[str, Path]) -> RuleSet:
    """Read a JSON rules file; missing keys fall back to the defaults."""
    return RuleSet.model_validate_json(Path(path).read_text(encoding="utf-8"))
