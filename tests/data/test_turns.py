"""Tests for turn segmentation."""
import pytest
from ptcglog.data.models import PlayerIdentity
from ptcglog.data.turns import TurnSegmenter

ASH = PlayerIdentity(username="Ash", opponent="Gary")

def test_minimal_turns(minimal_log):
    turns = TurnSegmenter(PlayerIdentity(username="Alice", opponent="Bob")).segment(minimal_log)

    assert [t.turn_number for t in turns] == [0, 1, 2]
    assert turns[0].user_actions == ["drew 7 cards for the opening hand."]
    assert turns[0].opponent_actions == ["drew 7 cards for the opening hand."]
    assert turns[1].user_actions == ["played Pikachu to the Active Spot."]
    assert turns[1].opponent_actions == ["played Eevee to the Active Spot."]
    assert turns[2].user_actions == [
        "Pikachu used Thunder Shock for 30 damage.",
        "took a Prize card.",
        "You won by taking all prize cards",
    ]

def test_half_turns_merge_into_game_turns(full_log):
    turns = TurnSegmenter(ASH).segment(full_log)

    assert [t.turn_number for t in turns] == [0, 1, 2]
    turn1 = turns[1]
    assert "played Prime Catcher." in turn1.opponent_actions
    assert "Gary's Eevee is now in the Active Spot." in turn1.opponent_actions
    assert "Pikachu used Thunderbolt on Gary's Eevee for 250 damage." in turn1.user_actions
    assert "It's super effective!" in turn1.user_actions

def test_setup_bucket(full_log):
    setup = TurnSegmenter(ASH).segment(full_log)[0]
    assert setup.turn_number == 0
    assert "chose heads for the opening coin flip." in setup.user_actions
    assert "decided to go first." in setup.opponent_actions
    assert "Setup" not in setup.user_actions + setup.opponent_actions

def test_concession_messages(full_log):
    final = TurnSegmenter(ASH).segment(full_log)[-1]
    assert final.opponent_actions[-1] == "Opponent conceded the game"
    assert final.user_actions[-1] == "You won by opponent's concession"

def test_concession_messages_swapped(full_log):
    final = TurnSegmenter(ASH.swapped()).segment(full_log)[-1]
    assert final.user_actions[-1] == "You conceded the game"
    assert final.opponent_actions[-1] == "Opponent won by your concession"

def test_no_turn_markers():
    turns = TurnSegmenter(ASH).segment("Ash drew 7 cards for the opening hand.")
    assert len(turns) == 1
    assert turns[0].turn_number == 0

def test_empty_log():
    assert TurnSegmenter(PlayerIdentity()).segment("") == []

def test_forced_switch_goes_to_named_owner():
    log = """Alice drew 7 cards for the opening hand.
Bob drew 7 cards for the opening hand.
Turn # 1 - Alice's Turn
Alice played Boss's Orders.
- Bob's Squirtle is now in the Active Spot."""
    turns = TurnSegmenter(PlayerIdentity(username="Alice", opponent="Bob")).segment(log)

    assert turns[1].user_actions == ["played Boss's Orders."]
    assert turns[1].opponent_actions == ["Bob's Squirtle is now in the Active Spot."]
