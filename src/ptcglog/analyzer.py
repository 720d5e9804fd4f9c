"""Entry points for analyzing TCG Live game logs.

Every function here is pure: it reads the log text and returns fresh
records, so calls can run side by side without coordination.
"""
import logging
from typing import List, Optional

from .catalog.archetypes import ArchetypeClassifier
from .catalog.loader import default_catalog
from .catalog.models import Catalog
from .config import AnalyzerConfig
from .data.extractor import EventExtractor
from .data.identity import resolve_identity
from .data.lines import classify_log
from .data.models import GameSummary, GameTurn, IdentityPreview, Side
from .data.prizes import derive_prize_path
from .data.summary import build_summary
from .data.turns import TurnSegmenter

logger = logging.getLogger(__name__)


def _require_text(raw_log) -> str:
    if not isinstance(raw_log, str):
        raise TypeError(f"raw_log must be str, got {type(raw_log).__name__}")
    return raw_log


def analyze(
    raw_log: str,
    swap_players: bool = False,
    user_archetype: Optional[str] = None,
    opponent_archetype: Optional[str] = None,
    preferred_username: Optional[str] = None,
    user_main_attacker: Optional[str] = None,
    opponent_main_attacker: Optional[str] = None,
    date: Optional[str] = None,
    catalog: Optional[Catalog] = None,
    config: Optional[AnalyzerConfig] = None,
) -> GameSummary:
    """Analyze a full game log.

    Args:
        raw_log: Log text as exported by the client
        swap_players: Analyze from the other player's point of view
        user_archetype: Archetype override for the user's deck
        opponent_archetype: Archetype override for the opponent's deck
        preferred_username: Name to treat as the user when it appears in the log
        user_main_attacker: Main attacker override for the user
        opponent_main_attacker: Main attacker override for the opponent
        date: Game date; defaults to today
        catalog: ACE SPEC and archetype data; defaults to the built-in catalog
        config: Analysis thresholds

    Returns:
        GameSummary (degenerate but valid for empty or garbled logs)
    """
    raw_log = _require_text(raw_log)
    catalog = default_catalog() if catalog is None else catalog
    config = config or AnalyzerConfig()

    lines = classify_log(raw_log)
    identity = resolve_identity(lines, preferred_username)
    if swap_players:
        identity = identity.swapped()

    result = EventExtractor(identity, catalog, config).extract(lines)

    winner = result.winner_side()
    if winner == Side.USER:
        prize_path = derive_prize_path(raw_log, identity.username)
    elif winner == Side.OPPONENT:
        prize_path = derive_prize_path(raw_log, identity.opponent)
    else:
        prize_path = []

    summary = build_summary(
        raw_log,
        result,
        ArchetypeClassifier(catalog),
        prize_path=prize_path,
        user_archetype=user_archetype,
        opponent_archetype=opponent_archetype,
        user_main_attacker=user_main_attacker,
        opponent_main_attacker=opponent_main_attacker,
        date=date,
        config=config,
    )
    logger.debug(
        f"Analyzed game {summary.id}: {summary.username} vs {summary.opponent}, "
        f"{summary.turns} turns, user_won={summary.user_won}"
    )
    return summary


def preview_identity(
    raw_log: str,
    preferred_username: Optional[str] = None,
    catalog: Optional[Catalog] = None,
    config: Optional[AnalyzerConfig] = None,
) -> IdentityPreview:
    """Players, main attackers and suggested archetypes for confirmation."""
    raw_log = _require_text(raw_log)
    catalog = default_catalog() if catalog is None else catalog

    lines = classify_log(raw_log)
    identity = resolve_identity(lines, preferred_username)
    result = EventExtractor(identity, catalog, config).extract(lines)

    user_main = result.main_attacker(Side.USER)
    opponent_main = result.main_attacker(Side.OPPONENT)
    user_units = result.observed_units(Side.USER)
    opponent_units = result.observed_units(Side.OPPONENT)
    suggested_user, suggested_opponent = ArchetypeClassifier(catalog).infer_for_summary(
        user_main,
        [n for n in user_units if n != user_main],
        opponent_main,
        [n for n in opponent_units if n != opponent_main],
    )

    return IdentityPreview(
        username=identity.username,
        opponent=identity.opponent,
        suggested_user_archetype=suggested_user,
        suggested_opponent_archetype=suggested_opponent,
        user_main_attacker=user_main,
        opponent_main_attacker=opponent_main,
        all_user_pokemon=user_units,
        all_opponent_pokemon=opponent_units,
    )


def segment_turns(
    raw_log: str,
    preferred_username: Optional[str] = None,
    swap_players: bool = False,
) -> List[GameTurn]:
    """Turn-by-turn replay of a log; setup is turn 0."""
    raw_log = _require_text(raw_log)
    identity = resolve_identity(classify_log(raw_log), preferred_username)
    if swap_players:
        identity = identity.swapped()
    return TurnSegmenter(identity).segment(raw_log)
