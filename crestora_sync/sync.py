"""
Public data sync.

Pulls teams, rounds, rolling events and the leaderboard from the public
API, then every team's score list, and writes the JSON snapshots the
website reads. The four collection fetches are all-or-nothing: if any of
them fails nothing is written. Each snapshot file is written on its own,
so a failure while writing a later file leaves earlier ones in place.
"""

import asyncio
from collections import deque
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional

from .data_fetcher import PublicAPIClient
from .display import (
    display_fetch_counts,
    display_progress_done,
    display_progress_tick,
    display_sync_start,
    display_team_score_warning,
    display_team_statuses,
    display_written,
)
from .errors import FileSystemError, SyncError
from .model import count_team_statuses, map_rolling_event, map_round
from .storage import (
    EVENT_DATA_FILE,
    LEADERBOARD_FILE,
    TEAM_SCORES_FILE,
    TEAMS_FILE,
    read_json_or_default,
    write_json,
)


@dataclass
class SyncResult:
    """What a sync run fetched and wrote."""
    base_url: str
    counts: Dict[str, int]
    written: Dict[str, int] = field(default_factory=dict)
    failed_team_ids: List[str] = field(default_factory=list)


def unique_team_ids(teams: Iterable[Any]) -> List[str]:
    """Team ids in first-seen order, without blanks or duplicates."""
    ids = []
    for team in teams:
        team_id = team.get("team_id") if isinstance(team, dict) else None
        if team_id:
            ids.append(team_id)
    return list(dict.fromkeys(ids))


async def fetch_all_team_scores(
    client: PublicAPIClient,
    team_ids: List[str],
    concurrency: int,
    on_failure: Optional[Callable[[str, Exception], None]] = None
) -> Dict[str, List[Any]]:
    """
    Fetch every team's scores with a fixed pool of workers.

    Workers share one queue of team ids. popleft() runs between awaits on
    the event loop thread, so each id goes to exactly one worker and each
    key of the result is written by one worker only. A failed team gets
    an empty list; the batch carries on.
    """
    queue = deque(team_ids)
    team_scores: Dict[str, List[Any]] = {team_id: [] for team_id in team_ids}

    async def worker() -> None:
        while queue:
            team_id = queue.popleft()
            try:
                team_scores[team_id] = await client.fetch_team_scores(team_id)
                display_progress_tick()
            except SyncError as e:
                client.record_error(f"scores:{team_id}", e)
                team_scores[team_id] = []
                if on_failure:
                    on_failure(team_id, e)

    workers = max(1, min(concurrency, len(team_ids)))
    await asyncio.gather(*(worker() for _ in range(workers)))
    display_progress_done()
    return team_scores


def build_event_data(
    current: Any,
    rounds: List[Dict],
    rolling_events: List[Dict]
) -> Dict[str, Any]:
    """
    Merge fresh rounds and rolling events with the on-disk event block.

    Only `event` carries over from the existing file; it is local-only
    and the API never supplies it.
    """
    event = current.get("event") if isinstance(current, dict) else None
    return {
        "event": event or {},
        "rounds": [map_round(r) for r in rounds],
        "rolling_events": [map_rolling_event(ev) for ev in rolling_events],
    }


def _write(result: SyncResult, path: Path, payload: Any) -> None:
    size = write_json(path, payload)
    result.written[str(path)] = size
    display_written(str(path), size)


async def sync_public_data(
    client: PublicAPIClient,
    data_dir: Path,
    concurrency: int = 10
) -> SyncResult:
    """
    Run a full sync into data_dir.

    Raises SyncError if any collection fetch or any file write fails. A
    failure after the collections were fetched carries what was already
    written as `partial_result`.
    """
    data_dir = Path(data_dir)
    display_sync_start(client.base_url)

    try:
        data_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FileSystemError(data_dir, str(e)) from e

    teams, rounds, rolling_events, leaderboard = await asyncio.gather(
        client.fetch_teams(),
        client.fetch_rounds(),
        client.fetch_rolling_events(),
        client.fetch_leaderboard(),
    )

    leaderboard_rows = leaderboard.get("leaderboard") if isinstance(leaderboard, dict) else None
    result = SyncResult(
        base_url=client.base_url,
        counts={
            "teams": len(teams),
            "rounds": len(rounds),
            "rolling_events": len(rolling_events),
            "leaderboard": len(leaderboard_rows) if isinstance(leaderboard_rows, list) else 0,
        },
    )
    display_fetch_counts(result.counts)
    display_team_statuses({
        status.value: count for status, count in count_team_statuses(teams).items()
    })

    def on_failure(team_id: str, error: Exception) -> None:
        result.failed_team_ids.append(team_id)
        display_team_score_warning(team_id, error)

    try:
        _write(result, data_dir / TEAMS_FILE, {"teams": teams})
        _write(result, data_dir / LEADERBOARD_FILE, leaderboard)

        event_data_path = data_dir / EVENT_DATA_FILE
        current = read_json_or_default(event_data_path, {"event": {}})
        _write(result, event_data_path, build_event_data(current, rounds, rolling_events))

        team_scores = await fetch_all_team_scores(
            client, unique_team_ids(teams), concurrency, on_failure=on_failure
        )
        _write(result, data_dir / TEAM_SCORES_FILE, {"team_scores": team_scores})
    except SyncError as e:
        e.partial_result = result
        raise

    return result
