"""
Crestora data sync - Main Entry Points.

Two independent commands:
  crestora-sync     fetch the public API into the local JSON snapshots
  crestora-rerank   recompute round ranks in team-scores.json
"""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import List, Optional

from .config import CONFIG
from .data_fetcher import PublicAPIClient
from .display import display_error, display_files_table, display_rank_summary
from .errors import SyncError
from .logger import format_rerank_log, format_sync_log, log_run
from .ranking import update_round_ranks
from .storage import TEAM_SCORES_FILE
from .sync import sync_public_data


def build_parser(description: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument(
        "--data-dir",
        type=str,
        default=None,
        help=f"Directory holding the JSON snapshots (default: {CONFIG['data_dir']})"
    )
    parser.add_argument(
        "--no-log",
        action="store_true",
        help="Disable the run log"
    )
    return parser


def sync_main(argv: Optional[List[str]] = None) -> int:
    """Sync entry point."""
    args = build_parser("Sync local JSON data from the Crestora public API").parse_args(argv)
    data_dir = Path(args.data_dir or CONFIG["data_dir"])

    concurrency = CONFIG["team_score_concurrency"]
    client = PublicAPIClient(max_workers=concurrency)

    try:
        result = asyncio.run(sync_public_data(client, data_dir, concurrency=concurrency))
    except SyncError as e:
        display_error(f"Sync failed: {e}")
        if not args.no_log:
            log_run(
                format_sync_log(
                    e.partial_result, client.base_url, client.get_all_errors(), error=str(e)
                ),
                CONFIG["log_dir"]
            )
        return 1
    finally:
        client.close()

    display_files_table(result.written)
    if not args.no_log:
        log_run(
            format_sync_log(result, client.base_url, client.get_all_errors()),
            CONFIG["log_dir"]
        )
    return 0


def rerank_main(argv: Optional[List[str]] = None) -> int:
    """Round rank recalculation entry point."""
    args = build_parser("Recompute round ranks in team-scores.json").parse_args(argv)
    path = Path(args.data_dir or CONFIG["data_dir"]) / TEAM_SCORES_FILE

    try:
        summary = update_round_ranks(path)
    except SyncError as e:
        display_error(f"Error updating round ranks: {e}")
        if not args.no_log:
            log_run(format_rerank_log(None, str(path), error=str(e)), CONFIG["log_dir"])
        return 1

    display_rank_summary(str(path), summary)
    if not args.no_log:
        log_run(format_rerank_log(summary, str(path)), CONFIG["log_dir"])
    return 0


if __name__ == "__main__":
    sys.exit(sync_main())
