#!/usr/bin/env python
"""Analyze a directory of exported game logs into summaries."""
import argparse
import logging
from pathlib import Path

from dotenv import load_dotenv
from tqdm import tqdm

from ptcglog.analyzer import analyze
from ptcglog.catalog.loader import get_catalog
from ptcglog.config import Config

logger = logging.getLogger(__name__)

def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("input", help="Directory of .txt game logs")
    parser.add_argument("--output", help="Output JSONL file")
    parser.add_argument("--username", help="Your in-game name (point of view)")
    parser.add_argument("--catalog", help="Catalog JSON file")
    args = parser.parse_args()

    load_dotenv()
    logging.basicConfig(level=logging.INFO)
    config = Config()

    input_dir = Path(args.input)
    output_path = Path(args.output) if args.output else input_dir / "summaries.jsonl"
    username = args.username or config.username
    catalog = get_catalog(args.catalog or config.catalog_path)
    max_chars = config.analyzer.max_log_chars

    success = 0
    skipped = 0
    failed = 0

    with open(output_path, "w") as f_out:
        for log_file in tqdm(sorted(input_dir.glob("*.txt")), desc="Analyzing"):
            try:
                raw_log = log_file.read_text(encoding="utf-8", errors="replace")
            except OSError as e:
                logger.warning(f"Could not read {log_file.name}: {e}")
                failed += 1
                continue

            if len(raw_log) > max_chars:
                logger.warning(f"Skipping {log_file.name}: {len(raw_log)} chars exceeds {max_chars}")
                skipped += 1
                continue

            summary = analyze(
                raw_log,
                preferred_username=username,
                catalog=catalog,
                config=config.analyzer,
            )
            f_out.write(summary.model_dump_json() + "\n")
            success += 1

    print(f"Analyzed {success} games, {skipped} skipped, {failed} failed")

if __name__ == "__main__":
    main()
