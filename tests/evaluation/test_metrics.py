"""Tests for win-rate metrics."""
import pytest

from ptcglog.evaluation.metrics import compute_confidence_interval, compute_winrate

def test_confidence_interval():
    ci_low, ci_high = compute_confidence_interval(wins=70, total=100)

    # 70% winrate should have CI containing 0.70
    assert ci_low < 0.70 < ci_high
    assert ci_low > 0.5  # Significantly above 50%

def test_confidence_interval_small_sample():
    ci_low, ci_high = compute_confidence_interval(wins=7, total=10)

    # Small sample should have wider CI
    assert ci_high - ci_low > 0.2

def test_confidence_interval_no_games():
    assert compute_confidence_interval(0, 0) == (0.0, 1.0)

def test_wider_interval_at_higher_confidence():
    low95, high95 = compute_confidence_interval(30, 50, confidence=0.95)
    low99, high99 = compute_confidence_interval(30, 50, confidence=0.99)
    assert high99 - low99 > high95 - low95

def test_compute_winrate():
    wr = compute_winrate(3, 4)
    assert wr.rate == 0.75
    assert wr.ci_low < 0.75 < wr.ci_high
    assert compute_winrate(0, 0).rate == 0.0
