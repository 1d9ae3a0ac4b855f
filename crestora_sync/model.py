"""
Record model for the Crestora public dataset.

Projections that normalize remote round and rolling event records into
the shape the website reads from eventData.json, plus team status parsing.
The defaults here are load-bearing for the display layer; keep them exact.
"""

from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple

# Marks a key that must be left out of the output record entirely
OMIT = object()


class TeamStatus(Enum):
    """Lifecycle status of a team."""
    ACTIVE = "ACTIVE"
    ELIMINATED = "ELIMINATED"
    COMPLETED = "COMPLETED"
    OTHER = "OTHER"

    @classmethod
    def parse(cls, value: Any) -> "TeamStatus":
        """Parse a remote status string, case-insensitively."""
        if not isinstance(value, str):
            return cls.OTHER
        try:
            return cls(value.strip().upper())
        except ValueError:
            return cls.OTHER


def coalesce(value: Any, default: Any) -> Any:
    """Return value unless it is None."""
    return default if value is None else value


def present(record: Dict[str, Any], key: str) -> Any:
    """Value of key, or OMIT when the key is absent."""
    return record.get(key, OMIT)


def dropped_if_none(value: Any) -> Any:
    """Value, or OMIT when it is None."""
    return OMIT if value is None else value


def build_record(fields: Iterable[Tuple[str, Any]]) -> Dict[str, Any]:
    """Build an ordered record, skipping OMIT values."""
    return {key: value for key, value in fields if value is not OMIT}


def round_id_string(value: Any) -> str:
    if value is OMIT:
        return "undefined"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def map_round(round_data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Project a remote round onto the local Round schema.

    `type` falls back to `mode`, then to "Offline". Optional text fields
    default to None, `is_wildcard` to False and `criteria` to [].
    `id` is always a string: a missing id becomes "undefined" and a null
    one "null", which is what the website snapshot has always held.
    """
    round_id = present(round_data, "id")
    return build_record([
        ("id", round_id_string(round_id)),
        ("round_number", present(round_data, "round_number")),
        ("name", present(round_data, "name")),
        ("mode", dropped_if_none(round_data.get("mode"))),
        ("club", present(round_data, "club")),
        ("type", coalesce(round_data.get("type"), coalesce(round_data.get("mode"), "Offline"))),
        ("date", present(round_data, "date")),
        ("description", present(round_data, "description")),
        ("extended_description", round_data.get("extended_description")),
        ("form_link", round_data.get("form_link")),
        ("contact", round_data.get("contact")),
        ("venue", round_data.get("venue")),
        ("status", present(round_data, "status")),
        ("round_code", dropped_if_none(round_data.get("round_code"))),
        ("is_evaluated", round_data.get("is_evaluated")),
        ("is_frozen", round_data.get("is_frozen")),
        ("is_wildcard", coalesce(round_data.get("is_wildcard"), False)),
        ("criteria", coalesce(round_data.get("criteria"), [])),
        ("max_score", round_data.get("max_score")),
        ("min_score", round_data.get("min_score")),
        ("avg_score", round_data.get("avg_score")),
        ("created_at", dropped_if_none(round_data.get("created_at"))),
        ("updated_at", dropped_if_none(round_data.get("updated_at"))),
    ])


def map_rolling_event(event: Dict[str, Any]) -> Dict[str, Any]:
    """Project a remote rolling event onto the local RollingEvent schema."""
    event_id = present(event, "id")
    if event_id is not OMIT and event_id is not None:
        event_id = str(event_id)
    return build_record([
        ("id", event_id),
        ("event_id", event.get("event_id")),
        ("event_code", event.get("event_code")),
        ("name", present(event, "name")),
        ("type", present(event, "type")),
        ("club", present(event, "club")),
        ("date", coalesce(event.get("date"), "")),
        ("start_date", event.get("start_date")),
        ("end_date", event.get("end_date")),
        ("venue", event.get("venue")),
        ("description", present(event, "description")),
        ("extended_description", event.get("extended_description")),
        ("form_link", event.get("form_link")),
        ("contact", event.get("contact")),
        ("status", coalesce(event.get("status"), "upcoming")),
        ("created_at", dropped_if_none(event.get("created_at"))),
        ("updated_at", dropped_if_none(event.get("updated_at"))),
    ])


def annotate_score(score: Any) -> Any:
    """Copy the remote `rank` of a score record into `round_rank`."""
    if not isinstance(score, dict):
        return score
    annotated = dict(score)
    if "rank" in score:
        annotated["round_rank"] = score["rank"]
    else:
        # No remote rank: no round_rank key at all
        annotated.pop("round_rank", None)
    return annotated


def count_team_statuses(teams: List[Dict[str, Any]]) -> Dict[TeamStatus, int]:
    """Count teams per lifecycle status, in enum order."""
    counts = {status: 0 for status in TeamStatus}
    for team in teams:
        status: Optional[Any] = team.get("status") if isinstance(team, dict) else None
        counts[TeamStatus.parse(status)] += 1
    return counts
