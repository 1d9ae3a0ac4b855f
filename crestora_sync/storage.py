"""
Local JSON snapshot storage.

The website reads these files directly, so field names and layout are
fixed. Writes land on a temp file first and replace the target in one
step, so a reader never sees a half-written snapshot.
"""

import json
from pathlib import Path
from typing import Any, Union

from .display import display_warning
from .errors import DecodeError, FileSystemError, MissingFileError

TEAMS_FILE = "teams.json"
LEADERBOARD_FILE = "leaderboard.json"
EVENT_DATA_FILE = "eventData.json"
TEAM_SCORES_FILE = "team-scores.json"

PathLike = Union[str, Path]


def dumps(payload: Any) -> str:
    """Serialize with 2-space indentation, no trailing newline."""
    return json.dumps(payload, indent=2, ensure_ascii=False)


def write_json(path: PathLike, payload: Any) -> int:
    """
    Atomically overwrite path with payload as pretty-printed JSON.

    Returns the number of bytes written.
    """
    path = Path(path)
    data = dumps(payload).encode("utf-8")
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    try:
        with tmp_path.open("wb") as fh:
            fh.write(data)
        tmp_path.replace(path)
    except OSError as e:
        tmp_path.unlink(missing_ok=True)
        raise FileSystemError(path, str(e)) from e
    return len(data)


def read_json(path: PathLike) -> Any:
    """Load a JSON file, mapping failures onto the sync error types."""
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as fh:
            raw = fh.read()
    except FileNotFoundError as e:
        raise MissingFileError(path, "no such file") from e
    except OSError as e:
        raise FileSystemError(path, str(e)) from e

    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise DecodeError(str(path), str(e)) from e


def read_json_or_default(path: PathLike, default: Any) -> Any:
    """
    Load a JSON file, falling back to default when it is missing or
    malformed. Other filesystem errors still raise.
    """
    try:
        return read_json(path)
    except MissingFileError:
        return default
    except DecodeError as e:
        display_warning(f"{e}. Using defaults.")
        return default
