"""Shared rejection types for the rules engine."""

from __future__ import annotations


class RuleViolation(ValueError):
    """Base class for intents rejected by the rules.

    The state machine turns these into rejected transitions instead of letting
    them propagate.
    """


class TurnViolation(RuleViolation):
    """Raised when a player acts out of turn."""


class PhaseViolation(RuleViolation):
    """Raised when an intent is submitted outside its phase."""
