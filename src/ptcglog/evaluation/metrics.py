"""Win-rate metrics."""
import math
from dataclasses import dataclass

Z_SCORES = {0.90: 1.645, 0.95: 1.96, 0.99: 2.576}

@dataclass
class WinRate:
    """Win rate with a Wilson score interval."""
    wins: int
    total: int
    rate: float
    ci_low: float
    ci_high: float

def compute_confidence_interval(
    wins: int,
    total: int,
    confidence: float = 0.95,
) -> tuple[float, float]:
    """Compute confidence interval for winrate.

    Uses Wilson score interval.
    """
    if total == 0:
        return (0.0, 1.0)

    z = Z_SCORES.get(confidence, 1.96)
    p = wins / total
    n = total

    denominator = 1 + z**2 / n
    center = (p + z**2 / (2 * n)) / denominator
    spread = z * math.sqrt((p * (1 - p) + z**2 / (4 * n)) / n) / denominator

    return (max(0, center - spread), min(1, center + spread))

def compute_winrate(wins: int, total: int, confidence: float = 0.95) -> WinRate:
    ci_low, ci_high = compute_confidence_interval(wins, total, confidence)
    return WinRate(
        wins=wins,
        total=total,
        rate=wins / total if total > 0 else 0.0,
        ci_low=ci_low,
        ci_high=ci_high,
    )
