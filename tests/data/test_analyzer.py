"""End-to-end tests for the public entry points."""
import math
import re

import pytest
from ptcglog import analyze, derive_prize_path, preview_identity, segment_turns
from ptcglog.catalog.models import Catalog

def test_end_to_end_scenario(minimal_log):
    summary = analyze(minimal_log)

    assert summary.username == "Alice"
    assert summary.opponent == "Bob"
    assert summary.user_won
    assert summary.turns == 2
    assert summary.user_prize_cards_taken == 1
    assert summary.user_main_attacker == "Pikachu"
    assert summary.winner_prize_path == ["Eevee"]
    assert summary.raw_log == minimal_log

def test_empty_input_degeneracy():
    summary = analyze("")

    assert summary.turns == 0
    assert not summary.user_won
    assert summary.username == ""
    assert summary.opponent == ""
    assert summary.user_other_pokemon == []
    assert summary.opponent_other_pokemon == []
    assert summary.user_ace_specs == []
    assert summary.winner_prize_path == []
    assert summary.user_main_attacker == "None"

def test_garbled_input_does_not_raise():
    summary = analyze("\n\n???\n- • -\nTurn #x\nwins conceded")
    assert summary.turns == 0

def test_non_text_is_a_programmer_error():
    with pytest.raises(TypeError):
        analyze(None)

def test_pov_symmetry(full_log):
    normal = analyze(full_log)
    swapped = analyze(full_log, swap_players=True)

    assert (swapped.username, swapped.opponent) == (normal.opponent, normal.username)
    assert swapped.went_first == (not normal.went_first)
    assert normal.user_won and not swapped.user_won
    assert swapped.user_conceded

@pytest.mark.parametrize("max_turn", [0, 1, 2, 5, 12])
def test_turn_count_invariant(max_turn):
    log = "\n".join(f"Turn # {k}" for k in range(1, max_turn + 1))
    assert analyze(log).turns == math.ceil(max_turn / 2)

def test_full_game_summary(full_log):
    summary = analyze(full_log, date="2024-05-01")

    assert summary.date == "2024-05-01"
    assert summary.username == "Ash"
    assert not summary.went_first
    assert summary.opponent_conceded
    assert summary.user_main_attacker == "Pikachu"
    assert summary.user_other_pokemon == ["Charmander"]
    assert summary.opponent_main_attacker == "Squirtle"
    assert summary.opponent_other_pokemon == ["Eevee", "Bulbasaur"]
    assert summary.opponent_ace_specs == ["Prime Catcher"]
    assert summary.user_ace_specs == []
    assert summary.winner_prize_path == ["Eevee"]
    assert [t.text for t in summary.tags] == ["Win", "Speedy", "Heavy Hitter", "Weakness"]

def test_swapped_prize_path_follows_winner(full_log):
    summary = analyze(full_log, swap_players=True)
    assert summary.winner_prize_path == ["Eevee"]

def test_archetypes_inferred_and_overridden(full_log, small_catalog):
    summary = analyze(full_log, catalog=small_catalog)
    assert summary.user_archetype == "pikachu-charmander"
    assert summary.opponent_archetype == "eevee-squirtle"

    summary = analyze(full_log, catalog=small_catalog, user_archetype="Pika Box", opponent_archetype="Mystery Deck")
    assert summary.user_archetype == "pikachu-box"
    assert summary.opponent_archetype == "Mystery Deck"

def test_main_attacker_override(full_log):
    summary = analyze(full_log, user_main_attacker="Charmander")
    assert summary.user_main_attacker == "Charmander"
    assert summary.user_other_pokemon == ["Pikachu"]

def test_analysis_is_stable(full_log):
    first = analyze(full_log, date="2024-05-01")
    second = analyze(full_log, date="2024-05-01")
    assert first == second

def test_preview_identity(full_log, small_catalog):
    preview = preview_identity(full_log, catalog=small_catalog)

    assert preview.username == "Ash"
    assert preview.opponent == "Gary"
    assert preview.suggested_user_archetype == "pikachu-charmander"
    assert preview.suggested_opponent_archetype == "eevee-squirtle"
    assert preview.all_user_pokemon == ["Pikachu", "Charmander"]
    assert preview_identity(full_log, catalog=small_catalog) == preview

def test_preview_identity_preferred_username(full_log):
    preview = preview_identity(full_log, preferred_username="GARY")
    assert (preview.username, preview.opponent) == ("Gary", "Ash")

def test_segment_turns_entry_point(full_log):
    turns = segment_turns(full_log)
    swapped = segment_turns(full_log, swap_players=True)

    assert [t.turn_number for t in turns] == [0, 1, 2]
    assert turns[1].user_actions == swapped[1].opponent_actions

def test_derive_prize_path_entry_point(minimal_log):
    assert derive_prize_path(minimal_log, "Alice") == ["Eevee"]

BOSS_LOG = """Alice drew 7 cards for the opening hand.
Bob drew 7 cards for the opening hand.
Alice played Pikachu to the Active Spot.
Bob played Eevee to the Active Spot.
Bob played Squirtle to the Bench.
Turn # 1 - Alice's Turn
Alice played Boss's Orders.
- Bob's Squirtle is now in the Active Spot.
Alice's Pikachu used Zap on Bob's Squirtle for 30 damage."""

def test_catalog_without_rules_is_used():
    log = """Alice drew 7 cards for the opening hand.
Bob drew 7 cards for the opening hand.
Turn # 1 - Alice's Turn
Alice played Foo Card.
Alice played Master Ball."""
    summary = analyze(log, catalog=Catalog(ace_specs=("Foo Card",)))

    assert summary.user_ace_specs == ["Foo Card"]
    assert summary.user_archetype is None

def test_forced_switch_belongs_to_named_owner():
    summary = analyze(BOSS_LOG)

    assert summary.user_main_attacker == "Pikachu"
    assert summary.user_other_pokemon == []
    opponent_units = [summary.opponent_main_attacker, *summary.opponent_other_pokemon]
    assert sorted(opponent_units) == ["Eevee", "Squirtle"]
