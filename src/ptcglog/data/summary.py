"""Fold extraction results into a GameSummary."""
import hashlib
import logging
from datetime import date as date_cls
from typing import List, Optional

from ..catalog.archetypes import ArchetypeClassifier
from ..config import AnalyzerConfig
from .extractor import ExtractionResult
from .models import ActionPackedTurns, GameSummary, Side, Tag

logger = logging.getLogger(__name__)

TAG_COLORS = {
    "Win": "#90EE90",
    "Loss": "#FFA07A",
    "Slow": "#A9A9A9",
    "Speedy": "#FFD700",
    "Heavy Hitter": "#FF4500",
    "Bench Slap": "#4169E1",
    "Bench Brawl": "#32CD32",
    "Weakness": "#FF69B4",
    "Action Packed": "#9932CC",
    "Went First": "#E6E6FA",
}


def generate_game_id(raw_log: str) -> str:
    """Generate stable game ID from log content."""
    return hashlib.sha256(raw_log.encode()).hexdigest()[:12]


def generate_tags(summary: GameSummary, config: Optional[AnalyzerConfig] = None) -> List[Tag]:
    """Derive display tags from a summary."""
    config = config or AnalyzerConfig()
    texts = ["Win" if summary.user_won else "Loss"]

    if summary.turns > config.slow_turns:
        texts.append("Slow")
    elif summary.turns <= config.speedy_turns:
        texts.append("Speedy")

    if summary.high_damage_attack_count > config.heavy_hitter_attacks:
        texts.append("Heavy Hitter")
    if summary.bench_knockouts > 0:
        texts.append("Bench Slap")
    if summary.total_benched_pokemon > config.bench_brawl_plays:
        texts.append("Bench Brawl")
    if summary.weakness_bonus:
        texts.append("Weakness")
    if summary.action_packed_turns.user > 1 and summary.action_packed_turns.opponent > 1:
        texts.append("Action Packed")
    if summary.went_first:
        texts.append("Went First")

    return [Tag(text=t, color=TAG_COLORS[t]) for t in texts]


def _resolve_archetype(
    classifier: ArchetypeClassifier,
    override: Optional[str],
    main: str,
    others: List[str],
) -> Optional[str]:
    if override and override.strip():
        return classifier.canonicalize(override) or override.strip()
    return classifier.classify(main, others)


def build_summary(
    raw_log: str,
    result: ExtractionResult,
    classifier: ArchetypeClassifier,
    prize_path: Optional[List[str]] = None,
    user_archetype: Optional[str] = None,
    opponent_archetype: Optional[str] = None,
    user_main_attacker: Optional[str] = None,
    opponent_main_attacker: Optional[str] = None,
    date: Optional[str] = None,
    config: Optional[AnalyzerConfig] = None,
) -> GameSummary:
    """Assemble the GameSummary for one analysis run."""
    state = result.state
    identity = result.identity

    user_main = user_main_attacker or result.main_attacker(Side.USER)
    opponent_main = opponent_main_attacker or result.main_attacker(Side.OPPONENT)
    user_others = [n for n in result.observed_units(Side.USER) if n != user_main]
    opponent_others = [n for n in result.observed_units(Side.OPPONENT) if n != opponent_main]

    summary = GameSummary(
        id=generate_game_id(raw_log),
        date=date or date_cls.today().isoformat(),
        username=identity.username,
        opponent=identity.opponent,
        user_main_attacker=user_main,
        opponent_main_attacker=opponent_main,
        user_other_pokemon=user_others,
        opponent_other_pokemon=opponent_others,
        turns=result.turns,
        turn_count=state.raw_turn_count,
        user_won=state.user_won,
        damage_dealt=result.damage_dealt(Side.USER),
        user_prize_cards_taken=state.user_prizes,
        opponent_prize_cards_taken=state.opponent_prizes,
        raw_log=raw_log,
        went_first=identity.went_first,
        user_conceded=state.user_conceded,
        opponent_conceded=state.opponent_conceded,
        high_damage_attack_count=state.high_damage_attack_count,
        bench_knockouts=state.bench_knockouts,
        total_benched_pokemon=state.total_benched_pokemon,
        weakness_bonus=state.weakness_bonus,
        action_packed_turns=ActionPackedTurns(**state.action_packed.model_dump()),
        user_ace_specs=list(state.user_ace_specs),
        opponent_ace_specs=list(state.opponent_ace_specs),
        winner_prize_path=list(prize_path or []),
        user_archetype=_resolve_archetype(classifier, user_archetype, user_main, user_others),
        opponent_archetype=_resolve_archetype(classifier, opponent_archetype, opponent_main, opponent_others),
    )
    summary.tags = generate_tags(summary, config)
    return summary
