"""Consistency checks for analyzed games."""
import logging
from dataclasses import dataclass
from typing import List
from pathlib import Path

from .lines import classify_log
from .models import GameSummary

logger = logging.getLogger(__name__)

MAX_PRIZE_CARDS = 6

@dataclass
class ValidationResult:
    """Result of validating a single game."""
    game_id: str
    valid: bool
    errors: List[str]
    warnings: List[str]

@dataclass
class ValidationReport:
    """Aggregate validation report."""
    total_games: int
    valid_games: int
    invalid_games: int
    error_counts: dict[str, int]
    warning_counts: dict[str, int]

class SummaryValidator:
    """Validator for GameSummary records."""

    def __init__(self, max_prizes: int = MAX_PRIZE_CARDS):
        self.max_prizes = max_prizes

    def validate(self, summary: GameSummary) -> ValidationResult:
        """Validate a single analyzed game."""
        errors = []
        warnings = []

        # Turn count must follow from the raw log
        max_turn = max(
            (l.turn or 0 for l in classify_log(summary.raw_log) if l.is_turn_marker),
            default=0,
        )
        if summary.turns != (max_turn + 1) // 2:
            errors.append("turn_count_mismatch")

        if summary.user_prize_cards_taken > self.max_prizes:
            errors.append("prize_count_exceeded_user")
        if summary.opponent_prize_cards_taken > self.max_prizes:
            errors.append("prize_count_exceeded_opponent")

        if summary.damage_dealt < 0:
            errors.append("negative_damage")

        if summary.user_won and summary.user_conceded:
            errors.append("conceded_and_won")
        if summary.user_conceded and summary.opponent_conceded:
            errors.append("both_conceded")

        if not summary.username or not summary.opponent:
            warnings.append("missing_players")

        if summary.turns == 0:
            warnings.append("no_turns")

        if summary.user_main_attacker == "None" and summary.opponent_main_attacker == "None":
            warnings.append("no_main_attacker")

        winner_prizes = (
            summary.user_prize_cards_taken if summary.user_won
            else summary.opponent_prize_cards_taken
        )
        if len(summary.winner_prize_path) > winner_prizes:
            warnings.append("prize_path_exceeds_prizes")

        return ValidationResult(
            game_id=summary.id,
            valid=len(errors) == 0,
            errors=errors,
            warnings=warnings,
        )

    def validate_file(self, path: Path) -> ValidationReport:
        """Validate all games in a JSONL file."""
        results = []

        with open(path) as f:
            for line in f:
                if not line.strip():
                    continue
                try:
                    summary = GameSummary.model_validate_json(line)
                    results.append(self.validate(summary))
                except ValueError as e:
                    logger.warning(f"Unreadable summary in {path}: {e}")
                    results.append(ValidationResult(
                        game_id="unknown",
                        valid=False,
                        errors=["parse_error"],
                        warnings=[],
                    ))

        # Aggregate
        error_counts: dict[str, int] = {}
        warning_counts: dict[str, int] = {}

        for r in results:
            for e in r.errors:
                error_counts[e] = error_counts.get(e, 0) + 1
            for w in r.warnings:
                warning_counts[w] = warning_counts.get(w, 0) + 1

        return ValidationReport(
            total_games=len(results),
            valid_games=sum(1 for r in results if r.valid),
            invalid_games=sum(1 for r in results if not r.valid),
            error_counts=error_counts,
            warning_counts=warning_counts,
        )
