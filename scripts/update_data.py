#!/usr/bin/env python3
"""
Data Update Script for Lotto Weekly AI

1. Loads the existing draw history (if any)
2. Fetches the latest results from Lottolyzer
3. Validates and merges new draws by draw number
4. Writes the CSV back, oldest first

Usage: python scripts/update_data.py [--csv PATH] [--pages N]
"""
import argparse
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv

from lotto_ai.config import CSV_PATH
from lotto_ai.loader import merge_draws, parse_csv, save_draws
from lotto_ai.scraper import fetch_latest_draws


def update_pipeline(csv_path: str, pages: int = 1) -> int:
    """Merge freshly scraped draws into ``csv_path``; returns how many were added."""
    print("=" * 60)
    print("LOTTO WEEKLY AI - DATA UPDATE")
    print("=" * 60)

    existing = parse_csv(csv_path) if os.path.exists(csv_path) else []
    print(f"Current dataset: {len(existing)} draws")
    if existing:
        print(f"  Last draw: #{existing[-1].sequence_id} ({existing[-1].date or 'no date'})")

    fetched = fetch_latest_draws(pages=pages)
    if not fetched:
        print("\nCould not fetch new results. Data unchanged.")
        return 0

    merged = merge_draws(existing, fetched)
    added = len(merged) - len(existing)
    if added:
        save_draws(merged, csv_path)
        print(f"\n✓ Added {added} new draw(s) to dataset")
        print(f"  Dataset now has {len(merged)} draws")
    else:
        print("\nNo new draws to add (all already in dataset)")
    return added


def main(argv=None):
    load_dotenv()
    parser = argparse.ArgumentParser(description="Fetch latest Lotto results into the CSV history")
    parser.add_argument("--csv", default=None, help="Draw history CSV (default: data/lotto.csv)")
    parser.add_argument("--pages", type=int, default=1, help="History pages to fetch")
    args = parser.parse_args(argv)

    csv_path = args.csv or os.environ.get("LOTTO_CSV_PATH") or CSV_PATH
    update_pipeline(csv_path, args.pages)


if __name__ == "__main__":
    main()
