"""
Round rank recalculation.

Recomputes `round_rank` for every score record in team-scores.json from
the raw scores, using standard competition ranking: equal scores share a
rank and the next lower score takes its 1-based position (50, 50, 30 ->
1, 1, 3). Scores <= 0 are unscored or disqualified; they never get a new
rank and keep whatever round_rank they already had.
"""

from collections import defaultdict
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from .errors import DecodeError
from .storage import read_json, write_json

# (numeric score, the record stored in the team's score list)
RankEntry = Tuple[float, Dict[str, Any]]


@dataclass
class RankSummary:
    """Outcome of a recalculation run."""
    rounds_ranked: int
    scores_ranked: int
    scores_skipped: int
    ranks_changed: int
    bytes_written: Optional[int] = None


def qualifying_score(value: Any) -> Optional[float]:
    """
    Return the score as a float if it takes part in ranking.

    Numeric strings are coerced; None, booleans and anything not
    numeric are excluded, as are scores <= 0.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, str):
        try:
            value = float(value)
        except ValueError:
            return None
    if not isinstance(value, (int, float)):
        return None
    return float(value) if value > 0 else None


def round_key(round_id: Any) -> Optional[str]:
    """Bucket key for a round id; 1 and "1" are the same round."""
    return None if round_id is None else str(round_id)


def group_scores_by_round(
    team_scores: Dict[str, List[Any]]
) -> Tuple[Dict[Optional[str], List[RankEntry]], int]:
    """
    Bucket qualifying score records by round.

    Returns the buckets and the number of records left out. Every round
    seen gets a bucket, even if none of its scores qualify.
    """
    rounds: Dict[Optional[str], List[RankEntry]] = defaultdict(list)
    skipped = 0

    for team_id, scores in team_scores.items():
        if not isinstance(scores, list):
            raise DecodeError(
                "team_scores", f"scores for team {team_id!r} are not a list"
            )
        for record in scores:
            if not isinstance(record, dict):
                skipped += 1
                continue
            bucket = rounds[round_key(record.get("round_id"))]
            score = qualifying_score(record.get("score"))
            if score is None:
                skipped += 1
                continue
            bucket.append((score, record))

    return dict(rounds), skipped


def assign_competition_ranks(entries: List[RankEntry]) -> int:
    """
    Rank one round's entries in place, highest score first.

    Writes round_rank onto the stored records themselves and returns how
    many of them changed value.
    """
    ordered = sorted(entries, key=lambda entry: entry[0], reverse=True)
    changed = 0
    current_rank = 1

    for i, (score, record) in enumerate(ordered):
        if i > 0 and score < ordered[i - 1][0]:
            current_rank = i + 1
        if record.get("round_rank") != current_rank:
            changed += 1
        record["round_rank"] = current_rank

    return changed


def recalculate_round_ranks(team_scores: Dict[str, List[Any]]) -> RankSummary:
    """Recompute round_rank across all rounds of a team score mapping."""
    rounds, skipped = group_scores_by_round(team_scores)

    rounds_ranked = 0
    scores_ranked = 0
    changed = 0
    for entries in rounds.values():
        if not entries:
            continue
        changed += assign_competition_ranks(entries)
        rounds_ranked += 1
        scores_ranked += len(entries)

    return RankSummary(
        rounds_ranked=rounds_ranked,
        scores_ranked=scores_ranked,
        scores_skipped=skipped,
        ranks_changed=changed,
    )


def load_team_scores(path: Union[str, Path]) -> Dict[str, List[Any]]:
    """Read team-scores.json and return its team_scores mapping."""
    data = read_json(path)
    team_scores = data.get("team_scores") if isinstance(data, dict) else None
    if not isinstance(team_scores, dict):
        raise DecodeError(str(path), "expected an object with a team_scores mapping")
    return team_scores


def update_round_ranks(path: Union[str, Path]) -> RankSummary:
    """
    Recalculate ranks in team-scores.json and rewrite it in place.

    Any load or parse failure raises before the file is touched.
    """
    team_scores = load_team_scores(path)
    summary = recalculate_round_ranks(team_scores)
    summary.bytes_written = write_json(path, {"team_scores": team_scores})
    return summary
