"""Tests for summary assembly and tags."""
import pytest
from ptcglog.config import AnalyzerConfig
from ptcglog.data.models import ActionPackedTurns, GameSummary
from ptcglog.data.summary import generate_game_id, generate_tags

def _summary(**kwargs):
    return GameSummary(id="test", date="2024-01-01", **kwargs)

def _texts(summary, config=None):
    return [t.text for t in generate_tags(summary, config)]

def test_win_loss_tags():
    assert _texts(_summary(user_won=True, turns=5, went_first=False)) == ["Win"]
    assert _texts(_summary(user_won=False, turns=5, went_first=False)) == ["Loss"]

def test_speed_tags_are_exclusive():
    assert "Slow" in _texts(_summary(turns=11, went_first=False))
    assert "Speedy" in _texts(_summary(turns=3, went_first=False))
    texts = _texts(_summary(turns=10, went_first=False))
    assert "Slow" not in texts and "Speedy" not in texts

def test_threshold_tags():
    summary = _summary(
        turns=6,
        high_damage_attack_count=2,
        bench_knockouts=1,
        total_benched_pokemon=16,
        weakness_bonus=True,
        action_packed_turns=ActionPackedTurns(user=2, opponent=2),
        went_first=True,
    )
    assert _texts(summary) == [
        "Loss", "Heavy Hitter", "Bench Slap", "Bench Brawl",
        "Weakness", "Action Packed", "Went First",
    ]

def test_action_packed_needs_both_sides():
    summary = _summary(turns=6, went_first=False, action_packed_turns=ActionPackedTurns(user=5, opponent=1))
    assert "Action Packed" not in _texts(summary)

def test_tag_colors():
    tags = generate_tags(_summary(user_won=True, turns=5, went_first=True))
    assert tags[0].color == "#90EE90"
    assert tags[-1].color == "#E6E6FA"

def test_configurable_thresholds():
    config = AnalyzerConfig(slow_turns=4)
    assert "Slow" in _texts(_summary(turns=5, went_first=False), config)

def test_game_id_is_stable():
    assert generate_game_id("abc") == generate_game_id("abc")
    assert generate_game_id("abc") != generate_game_id("abd")
    assert len(generate_game_id("")) == 12
