"""Aggregate matchup win rates and prize paths over analyzed games."""
import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Optional
from pathlib import Path

from ..catalog.archetypes import ArchetypeClassifier
from ..catalog.loader import default_catalog
from ..catalog.models import Catalog
from ..data.lines import normalize_name
from ..data.models import GameSummary
from ..data.prizes import derive_prize_path
from .metrics import WinRate, compute_winrate

logger = logging.getLogger(__name__)

MIN_PATH_WINS = 2
MIN_PATH_SHARE = 0.12
NO_PATH = "(no prize path recorded)"
UNKNOWN_ARCHETYPE = "__unknown__"

@dataclass
class PrizePathStat:
    """How often a deck won along one prize path."""
    key: str
    sequence: List[str]
    count: int
    percent_of_wins: float

@dataclass
class MatchupRow:
    """A deck's record against one opposing archetype."""
    opponent_id: Optional[str]
    global_games: int
    global_wins: int
    personal_games: int
    personal_wins: int
    winrate: WinRate
    top_paths: List[PrizePathStat] = field(default_factory=list)
    all_paths: List[PrizePathStat] = field(default_factory=list)

class MatchupAggregator:
    """Aggregate analyzed games into matchup rows for one deck."""

    def __init__(self, catalog: Optional[Catalog] = None):
        self.games: List[GameSummary] = []
        self.classifier = ArchetypeClassifier(default_catalog() if catalog is None else catalog)

    def add_game(self, summary: GameSummary) -> None:
        """Add a game to aggregate."""
        self.games.append(summary)

    def load_from_jsonl(self, path: Path) -> None:
        """Load all games from a JSONL file of summaries."""
        with open(path) as f:
            for line in f:
                if line.strip():
                    self.add_game(GameSummary.model_validate_json(line))
        logger.info(f"Loaded {len(self.games)} games from {path}")

    def side_archetype(self, game: GameSummary, user_side: bool) -> Optional[str]:
        """Stored archetype if recognized, else inferred from the Pokemon."""
        stored = game.user_archetype if user_side else game.opponent_archetype
        canonical = self.classifier.canonicalize(stored)
        if canonical:
            return canonical
        if user_side:
            return self.classifier.classify(game.user_main_attacker, game.user_other_pokemon)
        return self.classifier.classify(game.opponent_main_attacker, game.opponent_other_pokemon)

    def _prize_sequence(self, game: GameSummary, deck_on_user_side: bool) -> List[str]:
        winner = game.username if deck_on_user_side else game.opponent
        derived = derive_prize_path(game.raw_log, winner)
        if derived:
            return derived
        if game.winner_prize_path:
            return list(game.winner_prize_path)
        return [NO_PATH]

    def compute_matchups(self, deck_id: str, username: Optional[str] = None) -> List[MatchupRow]:
        """Compute matchup rows for a deck archetype.

        Args:
            deck_id: Archetype ID of the deck to report on
            username: Games where this player piloted the deck count as personal

        Returns:
            Rows sorted by number of games, most played first
        """
        username_norm = normalize_name(username or "")
        games_by_opp: Dict[str, int] = defaultdict(int)
        wins_by_opp: Dict[str, int] = defaultdict(int)
        personal_games: Dict[str, int] = defaultdict(int)
        personal_wins: Dict[str, int] = defaultdict(int)
        paths: Dict[str, Dict[str, List]] = defaultdict(dict)
        opponent_ids: Dict[str, Optional[str]] = {}

        for game in self.games:
            user_id = self.side_archetype(game, user_side=True)
            opp_id = self.side_archetype(game, user_side=False)
            if deck_id not in (user_id, opp_id):
                continue

            deck_on_user_side = user_id == deck_id
            opponent_id = opp_id if deck_on_user_side else user_id
            key = opponent_id or UNKNOWN_ARCHETYPE
            opponent_ids[key] = opponent_id
            deck_won = game.user_won if deck_on_user_side else not game.user_won

            games_by_opp[key] += 1
            if deck_won:
                wins_by_opp[key] += 1

            if username_norm and deck_on_user_side and normalize_name(game.username) == username_norm:
                personal_games[key] += 1
                if deck_won:
                    personal_wins[key] += 1

            if deck_won:
                seq = self._prize_sequence(game, deck_on_user_side)
                path_key = " → ".join(seq)
                if path_key in paths[key]:
                    paths[key][path_key][1] += 1
                else:
                    paths[key][path_key] = [seq, 1]

        rows = []
        for key, total in games_by_opp.items():
            wins = wins_by_opp[key]
            all_paths = sorted(
                (
                    PrizePathStat(
                        key=path_key,
                        sequence=seq,
                        count=count,
                        percent_of_wins=(count / wins) * 100 if wins > 0 else 0.0,
                    )
                    for path_key, (seq, count) in paths[key].items()
                ),
                key=lambda p: -p.count,
            )
            top_paths = [
                p for p in all_paths
                if wins >= MIN_PATH_WINS and p.count >= MIN_PATH_WINS and p.count / wins >= MIN_PATH_SHARE
            ]
            rows.append(MatchupRow(
                opponent_id=opponent_ids[key],
                global_games=total,
                global_wins=wins,
                personal_games=personal_games[key],
                personal_wins=personal_wins[key],
                winrate=compute_winrate(wins, total),
                top_paths=top_paths,
                all_paths=all_paths,
            ))

        return sorted(rows, key=lambda r: -r.global_games)
