"""Shared fixtures: sample MLB Stats API payloads and a canned client."""

from typing import Optional

import pytest

from mlbcli.api import FetchError
from mlbcli.models import (
    PlayerSearchResponse,
    PlayerStatsResponse,
    RosterResponse,
    ScheduleResponse,
    StandingsResponse,
    TeamsResponse,
)


TEAMS_JSON = {
    "copyright": "Copyright 2024 MLB Advanced Media, L.P.",
    "teams": [
        {
            "id": 119,
            "name": "Los Angeles Dodgers",
            "abbreviation": "LAD",
            "division": {"id": 203, "name": "National League West"},
            "league": {"id": 104, "name": "National League"},
            "venue": {"id": 22, "name": "Dodger Stadium"},
        },
        {
            "id": 147,
            "name": "New York Yankees",
            "abbreviation": "NYY",
            "division": {"id": 201, "name": "American League East"},
            "league": {"id": 103, "name": "American League"},
            "venue": {"id": 3313, "name": "Yankee Stadium"},
        },
        {
            "id": 137,
            "name": "San Francisco Giants",
            "abbreviation": "SF",
            "division": {"id": 203, "name": "National League West"},
            "league": {"id": 104, "name": "National League"},
            "venue": {"id": 2395, "name": "Oracle Park"},
        },
    ],
}

ROSTER_JSON = {
    "roster": [
        {
            "person": {"id": 660271, "fullName": "Shohei Ohtani"},
            "jerseyNumber": "17",
            "position": {"abbreviation": "TWP"},
            "status": {"code": "A", "description": "Active"},
        },
        {
            "person": {"id": 605141, "fullName": "Mookie Betts"},
            "jerseyNumber": "50",
            "position": {"abbreviation": "SS"},
            "status": {"code": "A", "description": "Active"},
        },
        {
            "person": {"id": 518692, "fullName": "Freddie Freeman"},
            "jerseyNumber": "5",
            "position": {"abbreviation": "1B"},
            "status": {"code": "A", "description": "Active"},
        },
    ],
}

STANDINGS_JSON = {
    "records": [
        {
            "division": {"id": 203, "name": "National League West"},
            "teamRecords": [
                {
                    "team": {"id": 119, "name": "Los Angeles Dodgers"},
                    "wins": 98,
                    "losses": 64,
                    "winningPercentage": ".605",
                    "gamesBack": "-",
                    "divisionRank": "1",
                    "streak": {"streakCode": "W3"},
                },
                {
                    "team": {"id": 135, "name": "San Diego Padres"},
                    "wins": 93,
                    "losses": 69,
                    "winningPercentage": ".574",
                    "gamesBack": "5.0",
                    "divisionRank": "2",
                    "streak": {"streakCode": "L1"},
                },
            ],
        },
        {
            "division": {"id": 201, "name": "American League East"},
            "teamRecords": [
                {
                    "team": {"id": 147, "name": "New York Yankees"},
                    "wins": 94,
                    "losses": 68,
                    "winningPercentage": ".580",
                    "gamesBack": "-",
                    "divisionRank": "1",
                    "streak": {"streakCode": "W1"},
                },
            ],
        },
    ],
}

SCHEDULE_JSON = {
    "dates": [
        {
            "date": "2024-07-04",
            "games": [
                {
                    "gamePk": 745001,
                    "gameDate": "2024-07-04T17:05:00Z",
                    "status": {"detailedState": "Final"},
                    "teams": {
                        "away": {"team": {"name": "New York Mets"}, "score": 6},
                        "home": {"team": {"name": "Washington Nationals"}, "score": 2},
                    },
                    "venue": {"name": "Nationals Park"},
                },
                {
                    "gamePk": 745002,
                    "gameDate": "2024-07-05T01:40:00Z",
                    "status": {"detailedState": "Scheduled"},
                    "teams": {
                        "away": {"team": {"name": "Los Angeles Dodgers"}},
                        "home": {"team": {"name": "Arizona Diamondbacks"}},
                    },
                    "venue": {"name": "Chase Field"},
                },
            ],
        },
    ],
}

PLAYER_STATS_JSON = {
    "people": [
        {
            "id": 660271,
            "fullName": "Shohei Ohtani",
            "stats": [
                {
                    "type": {"displayName": "yearByYear"},
                    "group": {"displayName": "hitting"},
                    "splits": [
                        {"season": "2023", "stat": {"avg": ".304", "homeRuns": 44, "rbi": 95}},
                        {"season": "2024", "stat": {"avg": ".310", "homeRuns": 54, "rbi": 130}},
                    ],
                },
                {
                    "type": {"displayName": "career"},
                    "group": {"displayName": "hitting"},
                    "splits": [{"stat": {"avg": ".282", "homeRuns": 225, "rbi": 567}}],
                },
                {
                    "type": {"displayName": "yearByYear"},
                    "group": {"displayName": "pitching"},
                    "splits": [{"season": "2023", "stat": {"era": "3.14", "wins": 10}}],
                },
                {
                    "type": {"displayName": "career"},
                    "group": {"displayName": "pitching"},
                    "splits": [{"stat": {"era": "3.01", "wins": 38}}],
                },
            ],
        },
    ],
}

SEARCH_JSON = {
    "people": [
        {
            "id": 660271,
            "fullName": "Shohei Ohtani",
            "primaryPosition": {"abbreviation": "TWP"},
            "currentTeam": {"name": "Los Angeles Dodgers"},
            "batSide": {"code": "L"},
            "pitchHand": {"code": "R"},
            "birthDate": "1994-07-05",
            "height": "6' 4\"",
            "weight": 210,
            "active": True,
        },
    ],
}


@pytest.fixture
def teams():
    return TeamsResponse.model_validate(TEAMS_JSON).teams


@pytest.fixture
def roster():
    return RosterResponse.model_validate(ROSTER_JSON).roster


@pytest.fixture
def standings():
    return StandingsResponse.model_validate(STANDINGS_JSON)


@pytest.fixture
def schedule():
    return ScheduleResponse.model_validate(SCHEDULE_JSON)


@pytest.fixture
def player_stats():
    return PlayerStatsResponse.model_validate(PLAYER_STATS_JSON)


@pytest.fixture
def search_results():
    return PlayerSearchResponse.model_validate(SEARCH_JSON)


class FakeClient:
    """Stands in for ``MLBClient`` and returns the sample payloads.

    Set ``fail`` to a resource name ("teams", "roster", ...) to make that
    fetch raise ``FetchError``.
    """

    def __init__(self, fail: Optional[str] = None):
        self.fail = fail
        self.calls: list[tuple[str, Optional[str]]] = []
        self.closed = False

    def _record(self, name: str, key=None) -> None:
        self.calls.append((name, key))
        if self.fail == name:
            raise FetchError("API returned status 500")

    def get_teams(self):
        self._record("teams")
        return TeamsResponse.model_validate(TEAMS_JSON).teams

    def get_roster(self, team_id):
        self._record("roster", team_id)
        return RosterResponse.model_validate(ROSTER_JSON).roster

    def get_player_stats(self, person_id):
        self._record("player-stats", person_id)
        return PlayerStatsResponse.model_validate(PLAYER_STATS_JSON)

    def get_standings(self, season):
        self._record("standings", season)
        return StandingsResponse.model_validate(STANDINGS_JSON)

    def get_schedule(self, date=None):
        self._record("schedule", date)
        return ScheduleResponse.model_validate(SCHEDULE_JSON)

    def search_player(self, name):
        self._record("search", name)
        return PlayerSearchResponse.model_validate(SEARCH_JSON)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_client() -> FakeClient:
    return FakeClient()
