"""
Data fetching client for the Crestora public API.

Handles HTTP communication with the /api/public endpoints. Requests run
on the client's own thread pool, sized to the team score concurrency,
with one requests.Session per worker thread.
"""

import asyncio
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import requests

from .config import CONFIG
from .errors import DecodeError, RemoteFetchError
from .model import annotate_score


@dataclass
class APIError:
    """Represents an API error for logging."""
    source: str
    code: int
    message: str
    timestamp: str


def list_field(payload: Any, key: str) -> List[Any]:
    """Return payload[key] if it is a list, else an empty list."""
    if isinstance(payload, dict) and isinstance(payload.get(key), list):
        return payload[key]
    return []


class PublicAPIClient:
    """Client for the Crestora public API."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        max_workers: Optional[int] = None
    ):
        self.base_url = (base_url or CONFIG["api_base_url"]).rstrip("/")
        self.timeout = timeout or CONFIG["request_timeout_sec"]
        self.max_workers = max(1, max_workers or CONFIG["team_score_concurrency"])
        self.executor = ThreadPoolExecutor(
            max_workers=self.max_workers, thread_name_prefix="crestora-fetch"
        )
        self._local = threading.local()
        self._sessions: List[requests.Session] = []
        self._sessions_lock = threading.Lock()
        self.errors: List[APIError] = []

    @property
    def session(self) -> requests.Session:
        """The calling thread's Session; Sessions are never shared across threads."""
        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            session.headers["Accept"] = "application/json"
            self._local.session = session
            with self._sessions_lock:
                self._sessions.append(session)
        return session

    def close(self) -> None:
        """Stop the worker threads and close their sessions."""
        self.executor.shutdown(wait=True)
        with self._sessions_lock:
            for session in self._sessions:
                session.close()
            self._sessions = []

    def _request(self, endpoint: str, params: Optional[Dict] = None) -> Any:
        """
        Make a single GET request and decode the JSON body.

        No retries: a non-2xx status raises RemoteFetchError, an
        unparseable body raises DecodeError.
        """
        url = f"{self.base_url}/{endpoint.lstrip('/')}"

        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise RemoteFetchError(url, 0, str(e)) from e

        if not 200 <= response.status_code < 300:
            raise RemoteFetchError(url, response.status_code, response.text)

        try:
            return response.json()
        except ValueError as e:
            raise DecodeError(url, str(e)) from e

    def record_error(self, source: str, error: Exception) -> None:
        """Keep a non-fatal error for the run log."""
        self.errors.append(APIError(
            source=source,
            code=getattr(error, "status", 0),
            message=str(error)[:200],
            timestamp=datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")
        ))

    def get_all_errors(self) -> List[Dict]:
        """Get recorded API errors as plain dicts."""
        return [
            {
                "source": e.source,
                "code": e.code,
                "message": e.message,
                "timestamp": e.timestamp
            }
            for e in self.errors
        ]

    async def fetch_collection(self, endpoint: str, params: Optional[Dict] = None) -> Any:
        """Fetch one endpoint on the client's pool without blocking the event loop."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self.executor, self._request, endpoint, params)

    def _paging(self) -> Dict[str, int]:
        return {"skip": 0, "limit": CONFIG["collection_page_limit"]}

    async def fetch_teams(self) -> List[Dict]:
        """Get all teams in a single page."""
        data = await self.fetch_collection("teams", self._paging())
        return list_field(data, "teams")

    async def fetch_rounds(self) -> List[Dict]:
        """Get all rounds."""
        data = await self.fetch_collection("rounds", self._paging())
        return list_field(data, "rounds")

    async def fetch_rolling_events(self) -> List[Dict]:
        """Get all rolling events."""
        data = await self.fetch_collection("rolling-events", self._paging())
        return list_field(data, "rolling_events")

    async def fetch_leaderboard(self) -> Any:
        """
        Get the remote leaderboard payload.

        Returned verbatim: {leaderboard, total_teams, displayed_teams}.
        """
        return await self.fetch_collection(
            "leaderboard", {"limit": CONFIG["leaderboard_limit"]}
        )

    async def fetch_team_scores(self, team_id: str) -> List[Any]:
        """Get a team's scores with round_rank seeded from the remote rank."""
        data = await self.fetch_collection(f"teams/{team_id}/scores")
        return [annotate_score(score) for score in list_field(data, "scores")]
