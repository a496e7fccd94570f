"""MLB Stats API client.

This module provides functionality to:
- Fetch teams, rosters, standings, schedules and player statistics
- Search players by name
- Resolve team abbreviations to team ids

Every failure (transport, non-success status, undecodable body) surfaces as a
single ``FetchError`` carrying a message. There is no retry: callers decide
whether to ask again.
"""

import logging
import threading
from typing import Optional, TypeVar

import httpx
from pydantic import BaseModel

from mlbcli.models import (
    PlayerSearchResponse,
    PlayerStatsResponse,
    RosterEntry,
    RosterResponse,
    ScheduleResponse,
    StandingsResponse,
    Team,
    TeamsResponse,
    get_team_id,
)


logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

DEFAULT_BASE_URL = "https://statsapi.mlb.com/api/v1"
DEFAULT_TIMEOUT = 10.0

# sportId=1 is Major League Baseball; 103/104 are the AL and NL
MLB_SPORT_ID = 1
LEAGUE_IDS = "103,104"
PLAYER_STAT_TYPES = "yearByYear,career"


class FetchError(Exception):
    """A request to the data provider failed."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnknownTeamError(ValueError):
    """A team abbreviation or id could not be resolved."""


def resolve_team_id(value: str) -> int:
    """Resolve a team abbreviation (e.g. ``LAD``) or numeric id to a team id.

    Raises:
        UnknownTeamError: If the value is neither a number nor a known abbreviation.
    """
    text = value.strip()
    if text.isdigit():
        return int(text)

    team_id = get_team_id(text)
    if team_id is None:
        raise UnknownTeamError(
            f"unknown team: {value} (use team abbreviation like LAD, NYY, or team ID)"
        )
    return team_id


class MLBClient:
    """Client for the MLB Stats API."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """Initialize the client.

        Args:
            base_url: API root, defaults to the public MLB Stats API.
            timeout: Per-request timeout in seconds.
        """
        self.base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")
        self.timeout = timeout
        self._client: Optional[httpx.Client] = None
        self._lock = threading.Lock()

    @property
    def client(self) -> httpx.Client:
        """Get or create HTTP client."""
        # Workers may race on first use
        with self._lock:
            if self._client is None:
                self._client = httpx.Client(
                    base_url=self.base_url,
                    headers={
                        "Accept": "application/json",
                        "User-Agent": "mlb-cli",
                    },
                    timeout=self.timeout,
                    follow_redirects=True,
                )
            return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        with self._lock:
            if self._client:
                self._client.close()
                self._client = None

    def __enter__(self) -> "MLBClient":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def _get(self, path: str, model: type[M], params: Optional[dict] = None) -> M:
        """GET ``path`` and decode the body into ``model``.

        Raises:
            FetchError: On transport errors, non-200 statuses or decode failures.
        """
        logger.debug("GET %s params=%s", path, params)
        try:
            response = self.client.get(path, params=params)
        except httpx.HTTPError as e:
            logger.warning("Request to %s failed: %s", path, e)
            raise FetchError(f"request failed: {e}") from e

        if response.status_code != 200:
            logger.warning("Request to %s returned status %d", path, response.status_code)
            raise FetchError(f"API returned status {response.status_code}")

        try:
            return model.model_validate(response.json())
        except ValueError as e:
            logger.warning("Could not decode response from %s: %s", path, e)
            raise FetchError(f"failed to parse response: {e}") from e

    def get_teams(self) -> list[Team]:
        """Fetch all MLB teams."""
        return self._get("/teams", TeamsResponse, params={"sportId": MLB_SPORT_ID}).teams

    def get_roster(self, team_id: int | str) -> list[RosterEntry]:
        """Fetch the active roster of a team."""
        response = self._get(
            f"/teams/{team_id}/roster",
            RosterResponse,
            params={"rosterType": "active"},
        )
        return response.roster

    def get_player_stats(self, person_id: int | str) -> PlayerStatsResponse:
        """Fetch year-by-year and career hitting/pitching stats of a player."""
        return self._get(
            f"/people/{person_id}",
            PlayerStatsResponse,
            params={"hydrate": f"stats(group=[hitting,pitching],type=[{PLAYER_STAT_TYPES}])"},
        )

    def get_standings(self, season: str) -> StandingsResponse:
        """Fetch regular season division standings for both leagues."""
        return self._get(
            "/standings",
            StandingsResponse,
            params={
                "leagueId": LEAGUE_IDS,
                "season": season,
                "standingsTypes": "regularSeason",
            },
        )

    def get_schedule(self, date: Optional[str] = None) -> ScheduleResponse:
        """Fetch games for a ``YYYY-MM-DD`` date (the API defaults to today)."""
        params: dict = {"sportId": MLB_SPORT_ID}
        if date:
            params["date"] = date
        return self._get("/schedule", ScheduleResponse, params=params)

    def search_player(self, name: str) -> PlayerSearchResponse:
        """Search players by (partial) name."""
        return self._get(
            "/people/search",
            PlayerSearchResponse,
            params={"names": name, "sportId": MLB_SPORT_ID},
        )
