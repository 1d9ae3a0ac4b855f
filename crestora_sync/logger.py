"""
Run logging for the Crestora data sync.

JSON-lines format with daily log rotation; one entry per sync or
rank recalculation run.
"""

import json
import os
from dataclasses import asdict
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .config import get_config_hash
from .ranking import RankSummary
from .sync import SyncResult

LOG_VERSION = "1.0.0"


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def get_log_path(base_dir: str = "logs", kind: str = "sync") -> str:
    """Get log file path for today."""
    os.makedirs(base_dir, exist_ok=True)
    date_str = datetime.now().strftime("%Y-%m-%d")
    return os.path.join(base_dir, f"{kind}_{date_str}.jsonl")


def format_sync_log(
    result: Optional[SyncResult],
    base_url: str,
    api_errors: List[Dict],
    error: Optional[str] = None
) -> Dict[str, Any]:
    """
    Format a sync run for logging.

    result is None when the run failed before anything was fetched, or
    the partial result when it failed after writing some files.
    """
    entry: Dict[str, Any] = {
        "log_version": LOG_VERSION,
        "config_hash": get_config_hash(),
        "timestamp": utc_timestamp(),
        "kind": "sync",
        "status": "failed" if error else "ok",
        "base_url": base_url,
        "counts": {},
        "written": {},
        "failed_team_ids": [],
        "api_errors": api_errors,
        "error": error,
    }
    if result is not None:
        entry["counts"] = dict(result.counts)
        entry["written"] = dict(result.written)
        entry["failed_team_ids"] = list(result.failed_team_ids)
    return entry


def format_rerank_log(
    summary: Optional[RankSummary],
    path: str,
    error: Optional[str] = None
) -> Dict[str, Any]:
    """Format a rank recalculation run for logging."""
    return {
        "log_version": LOG_VERSION,
        "config_hash": get_config_hash(),
        "timestamp": utc_timestamp(),
        "kind": "rerank",
        "status": "failed" if error else "ok",
        "path": path,
        "summary": asdict(summary) if summary is not None else None,
        "error": error,
    }


def log_run(entry: Dict[str, Any], log_dir: str = "logs") -> str:
    """
    Append a run entry to today's JSON-lines log file.

    Creates new file for each day (daily rotation). Returns the path.
    """
    log_path = get_log_path(log_dir, entry.get("kind", "sync"))

    with open(log_path, "a") as f:
        f.write(json.dumps(entry) + "\n")

    return log_path
