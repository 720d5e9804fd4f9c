"""Tests for matchup aggregation."""
import pytest
from ptcglog import analyze
from ptcglog.catalog.models import Catalog
from ptcglog.evaluation.aggregator import NO_PATH, MatchupAggregator

@pytest.fixture
def aggregator(full_log, small_catalog):
    agg = MatchupAggregator(small_catalog)
    agg.add_game(analyze(full_log, catalog=small_catalog))
    agg.add_game(analyze(full_log, catalog=small_catalog, swap_players=True))
    return agg

def test_compute_matchups(aggregator):
    rows = aggregator.compute_matchups("pikachu-charmander")

    assert len(rows) == 1
    row = rows[0]
    assert row.opponent_id == "eevee-squirtle"
    assert row.global_games == 2
    assert row.global_wins == 2
    assert row.winrate.rate == 1.0

def test_prize_paths(aggregator):
    row = aggregator.compute_matchups("pikachu-charmander")[0]

    assert len(row.all_paths) == 1
    assert row.all_paths[0].sequence == ["Eevee"]
    assert row.all_paths[0].count == 2
    assert row.all_paths[0].percent_of_wins == 100.0
    assert row.top_paths == row.all_paths

def test_losing_side(aggregator):
    row = aggregator.compute_matchups("eevee-squirtle")[0]
    assert row.global_games == 2
    assert row.global_wins == 0
    assert row.all_paths == []

def test_personal_games(aggregator):
    row = aggregator.compute_matchups("pikachu-charmander", username="ash")[0]
    assert row.personal_games == 1
    assert row.personal_wins == 1

def test_single_win_has_no_top_path(full_log, small_catalog):
    agg = MatchupAggregator(small_catalog)
    agg.add_game(analyze(full_log, catalog=small_catalog))

    row = agg.compute_matchups("pikachu-charmander")[0]
    assert len(row.all_paths) == 1
    assert row.top_paths == []

def test_missing_path_placeholder(small_catalog):
    log = """Ash drew 7 cards for the opening hand.
Gary drew 7 cards for the opening hand.
Ash played Pikachu to the Active Spot.
Ash played Charmander onto the Bench.
Gary played Eevee to the Active Spot.
Gary played Squirtle to the Bench.
Turn # 1 - Ash's Turn
Gary conceded. Ash wins."""
    agg = MatchupAggregator(small_catalog)
    agg.add_game(analyze(log, catalog=small_catalog))

    row = agg.compute_matchups("pikachu-charmander")[0]
    assert row.all_paths[0].sequence == [NO_PATH]

def test_load_from_jsonl(tmp_path, full_log, small_catalog):
    path = tmp_path / "games.jsonl"
    path.write_text(analyze(full_log, catalog=small_catalog).model_dump_json() + "\n\n")

    agg = MatchupAggregator(small_catalog)
    agg.load_from_jsonl(path)

    assert len(agg.games) == 1
    assert agg.compute_matchups("pikachu-charmander")[0].global_wins == 1

def test_empty_catalog_is_kept(full_log):
    agg = MatchupAggregator(Catalog(ace_specs=()))
    assert agg.classifier.rules == ()

    agg.add_game(analyze(full_log, catalog=Catalog(ace_specs=())))
    assert agg.compute_matchups("pikachu-charmander") == []
