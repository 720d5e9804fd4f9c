"""Structured analysis of Pokemon TCG Live game logs."""

from .analyzer import analyze, preview_identity, segment_turns
from .data.prizes import derive_prize_path
from .data.models import GameSummary, GameTurn, IdentityPreview, PlayerIdentity

__all__ = [
    "analyze",
    "preview_identity",
    "segment_turns",
    "derive_prize_path",
    "GameSummary",
    "GameTurn",
    "IdentityPreview",
    "PlayerIdentity",
]
