#!/usr/bin/env python
"""Print the turn-by-turn replay of a game log."""
import argparse
from pathlib import Path

from ptcglog.analyzer import segment_turns

def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("log", help="Game log text file")
    parser.add_argument("--username", help="Your in-game name (point of view)")
    parser.add_argument("--swap", action="store_true", help="Show the other player's point of view")
    args = parser.parse_args()

    raw_log = Path(args.log).read_text(encoding="utf-8", errors="replace")
    turns = segment_turns(raw_log, preferred_username=args.username, swap_players=args.swap)

    for turn in turns:
        print(f"\n=== {'Setup' if turn.turn_number == 0 else f'Turn {turn.turn_number}'} ===")
        for action in turn.user_actions:
            print(f"  [you] {action}")
        for action in turn.opponent_actions:
            print(f"  [opp] {action}")

if __name__ == "__main__":
    main()
