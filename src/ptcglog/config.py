"""Global configuration for the ptcglog project."""

import os
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class AnalyzerConfig:
    """Configuration for log analysis."""

    high_damage_threshold: int = 240
    action_packed_bullets: int = 12
    slow_turns: int = 10  # "Slow" when turns exceed this
    speedy_turns: int = 3  # "Speedy" when turns are at most this
    heavy_hitter_attacks: int = 1
    bench_brawl_plays: int = 15
    board_presence: str = "line"  # "line" or "turn"
    max_log_chars: int = 300_000


@dataclass
class Config:
    """Global configuration container."""

    analyzer: AnalyzerConfig = field(default_factory=AnalyzerConfig)

    # Environment variables
    catalog_path: Optional[str] = field(
        default_factory=lambda: os.getenv("PTCGLOG_CATALOG")
    )
    username: Optional[str] = field(
        default_factory=lambda: os.getenv("PTCGLOG_USERNAME")
    )


# Global config instance
config = Config()
