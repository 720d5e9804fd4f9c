#!/usr/bin/env python
"""Validate analyzed game summaries."""
import argparse
from pathlib import Path

from ptcglog.data.validation import SummaryValidator

def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("input", help="Game summaries JSONL")
    args = parser.parse_args()

    validator = SummaryValidator()
    report = validator.validate_file(Path(args.input))

    print(f"\n=== Validation Report ===")
    print(f"Total games: {report.total_games}")
    if report.total_games:
        print(f"Valid games: {report.valid_games} ({100*report.valid_games/report.total_games:.1f}%)")
    print(f"Invalid games: {report.invalid_games}")

    if report.error_counts:
        print(f"\nErrors:")
        for error, count in sorted(report.error_counts.items(), key=lambda x: -x[1]):
            print(f"  {error}: {count}")

    if report.warning_counts:
        print(f"\nWarnings:")
        for warning, count in sorted(report.warning_counts.items(), key=lambda x: -x[1]):
            print(f"  {warning}: {count}")

if __name__ == "__main__":
    main()
