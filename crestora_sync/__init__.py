"""Crestora public data sync and round rank recalculation."""

from .config import CONFIG
from .data_fetcher import PublicAPIClient
from .errors import (
    DecodeError,
    FileSystemError,
    MissingFileError,
    RemoteFetchError,
    SyncError,
)
from .model import TeamStatus, map_rolling_event, map_round
from .ranking import RankSummary, recalculate_round_ranks, update_round_ranks
from .sync import SyncResult, sync_public_data

__version__ = "1.0.0"
__all__ = [
    "CONFIG",
    "PublicAPIClient",
    "SyncError",
    "RemoteFetchError",
    "DecodeError",
    "FileSystemError",
    "MissingFileError",
    "TeamStatus",
    "map_round",
    "map_rolling_event",
    "RankSummary",
    "recalculate_round_ranks",
    "update_round_ranks",
    "SyncResult",
    "sync_public_data",
]
