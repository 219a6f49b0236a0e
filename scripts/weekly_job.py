#!/usr/bin/env python3
"""
Lotto Weekly AI - Report Job

Runs after the Monday and Friday morning schedule (Israel time) or on a
manual trigger:

1. SCHEDULE - Skips scheduled runs outside the report window
2. LOAD     - Reads the newest draws from data/lotto.csv
3. ANALYZE  - Runs the statistics engine and draw pattern analysis
4. SUMMARIZE - Asks Gemini for a short summary (optional)
5. NOTIFY   - Posts the report to Telegram

Environment: GEMINI_API_KEY, TELEGRAM_BOT_TOKEN, TELEGRAM_CHAT_ID (or
ADMIN_CHAT_ID), GITHUB_EVENT_NAME, LOTTO_CSV_PATH. A .env file is read if
present.

Usage: python scripts/weekly_job.py [--csv PATH] [--last N] [--window N] [--force] [--dry-run]
"""
import argparse
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv

from lotto_ai import gemini, telegram
from lotto_ai.config import CSV_PATH, LAST_N_DRAWS, MIN_DRAWS
from lotto_ai.errors import LottoError
from lotto_ai.loader import load_draws
from lotto_ai.patterns import pattern_summary
from lotto_ai.report import build_error_message, build_final_message, format_stats_message
from lotto_ai.schedule import now_in_israel, should_run
from lotto_ai.stats import StatsConfig, compute


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Lotto statistics report to Telegram")
    parser.add_argument("--csv", default=None, help="Draw history CSV (default: data/lotto.csv)")
    parser.add_argument("--last", type=int, default=LAST_N_DRAWS, help="Use the newest N draws")
    parser.add_argument("--window", type=int, default=200, help="Recent window size for hot/cold")
    parser.add_argument("--pairs", type=int, default=15, help="Number of top pairs to report")
    parser.add_argument("--force", action="store_true", help="Run outside the report window")
    parser.add_argument("--dry-run", action="store_true", help="Print the report instead of sending it")
    return parser.parse_args(argv)


def credentials():
    token = os.environ.get("TELEGRAM_BOT_TOKEN")
    chat_id = os.environ.get("TELEGRAM_CHAT_ID") or os.environ.get("ADMIN_CHAT_ID")
    return token, chat_id


def run_job(args) -> int:
    now = now_in_israel()

    print("=" * 60)
    print("LOTTO WEEKLY AI")
    print("=" * 60)

    # Step 1: Schedule
    print(f"[STEP 1] Now: {now.strftime('%Y-%m-%d %H:%M (%A)')}")
    if not should_run(now, os.environ.get("GITHUB_EVENT_NAME"), args.force):
        print(f"Not scheduled time ({now.strftime('%A %H:%M')}).")
        return 0

    # Step 2: Load
    print(f"\n{'-' * 50}")
    print("[STEP 2] Loading draw history...")
    csv_path = args.csv or os.environ.get("LOTTO_CSV_PATH") or CSV_PATH
    draws = load_draws(csv_path, last_n=args.last, min_draws=MIN_DRAWS)
    print(f"  Using last draws: {len(draws)} (latest #{draws[0].sequence_id})")

    # Step 3: Analyze
    print(f"\n{'-' * 50}")
    print("[STEP 3] Computing statistics...")
    config = StatsConfig(recent_window_size=args.window, top_pair_count=args.pairs)
    digest = compute(draws, config)
    patterns = pattern_summary(draws, config.max_number)
    print(format_stats_message(digest))

    # Step 4: Summarize
    print(f"\n{'-' * 50}")
    print("[STEP 4] Requesting Gemini summary...")
    ai_text = gemini.summarize(digest, os.environ.get("GEMINI_API_KEY"), patterns)

    # Step 5: Notify
    print(f"\n{'-' * 50}")
    print("[STEP 5] Sending report...")
    message = build_final_message(digest, patterns, ai_text, now=now)
    if args.dry_run:
        print(message)
        return 0

    token, chat_id = credentials()
    if telegram.send_message(message, token, chat_id):
        print("  Sent Telegram message.")
    return 0


def main(argv=None) -> int:
    load_dotenv()
    args = parse_args(argv)
    try:
        return run_job(args)
    except LottoError as e:
        print(f"Job failed: {e}")
        if not args.dry_run:
            token, chat_id = credentials()
            try:
                telegram.send_message(build_error_message(e), token, chat_id)
            except LottoError as notify_error:
                print(f"[Telegram] Could not send failure notice: {notify_error}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
