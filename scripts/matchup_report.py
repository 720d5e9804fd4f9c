#!/usr/bin/env python
"""Print win rates and prize paths for one deck archetype."""
import argparse
from pathlib import Path

from dotenv import load_dotenv

from ptcglog.catalog.loader import get_catalog
from ptcglog.config import Config
from ptcglog.evaluation.aggregator import MatchupAggregator

def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("input", help="Game summaries JSONL")
    parser.add_argument("--deck", required=True, help="Archetype ID or name")
    parser.add_argument("--username", help="Count your own games separately")
    parser.add_argument("--catalog", help="Catalog JSON file")
    args = parser.parse_args()

    load_dotenv()
    config = Config()

    aggregator = MatchupAggregator(get_catalog(args.catalog or config.catalog_path))
    deck_id = aggregator.classifier.canonicalize(args.deck)
    if deck_id is None:
        parser.error(f"Unknown archetype: {args.deck}")

    aggregator.load_from_jsonl(Path(args.input))
    rows = aggregator.compute_matchups(deck_id, username=args.username or config.username)

    print(f"\n=== {aggregator.classifier.format_label(deck_id)} ===\n")
    for row in rows:
        label = aggregator.classifier.format_label(row.opponent_id)
        wr = row.winrate
        print(f"vs {label}: {row.global_wins}/{row.global_games} "
              f"({wr.rate:.1%}, 95% CI {wr.ci_low:.1%}-{wr.ci_high:.1%})")
        if row.personal_games:
            print(f"  personal: {row.personal_wins}/{row.personal_games}")
        for path in row.top_paths:
            print(f"  {path.key}  [{path.count}, {path.percent_of_wins:.0f}% of wins]")

if __name__ == "__main__":
    main()
