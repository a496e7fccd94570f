"""Pydantic schemas for MLB Stats API payloads."""

from dataclasses import dataclass
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


FINAL_STATES = ("Final", "Game Over")


class APIModel(BaseModel):
    """Base model mapping snake_case fields to the API's camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class NamedRef(APIModel):
    """A nested object that only carries a display name."""

    name: str = ""


class CodeRef(APIModel):
    """A nested object that only carries a short code (e.g. bat side)."""

    code: str = ""


# =============================================================================
# Teams
# =============================================================================


class Team(APIModel):
    """An MLB team."""

    id: int
    name: str = ""
    abbreviation: str = ""
    division: NamedRef = Field(default_factory=NamedRef)
    league: NamedRef = Field(default_factory=NamedRef)
    venue: NamedRef = Field(default_factory=NamedRef)


class TeamsResponse(APIModel):
    teams: list[Team] = Field(default_factory=list)


# =============================================================================
# Rosters
# =============================================================================


class Person(APIModel):
    id: int
    full_name: str = ""


class Position(APIModel):
    abbreviation: str = ""


class RosterStatus(APIModel):
    description: str = ""


class RosterEntry(APIModel):
    """A single player on a team's active roster."""

    person: Person
    position: Position = Field(default_factory=Position)
    jersey_number: str = ""
    status: RosterStatus = Field(default_factory=RosterStatus)


class RosterResponse(APIModel):
    roster: list[RosterEntry] = Field(default_factory=list)


# =============================================================================
# Standings
# =============================================================================


class Streak(APIModel):
    streak_code: str = ""


class TeamRecord(APIModel):
    """A team's line in a division table."""

    team: NamedRef = Field(default_factory=NamedRef)
    wins: int = 0
    losses: int = 0
    winning_percentage: str = ""
    games_back: str = ""
    division_rank: str = ""
    streak: Streak = Field(default_factory=Streak)


class StandingsRecord(APIModel):
    """Standings of one division."""

    division: NamedRef = Field(default_factory=NamedRef)
    team_records: list[TeamRecord] = Field(default_factory=list)


class StandingsResponse(APIModel):
    records: list[StandingsRecord] = Field(default_factory=list)

    @property
    def team_count(self) -> int:
        """Total number of team lines across all divisions."""
        return sum(len(record.team_records) for record in self.records)


# =============================================================================
# Schedule
# =============================================================================


class GameStatus(APIModel):
    detailed_state: str = ""


class GameTeam(APIModel):
    team: NamedRef = Field(default_factory=NamedRef)
    score: Optional[int] = None


class GameTeams(APIModel):
    away: GameTeam = Field(default_factory=GameTeam)
    home: GameTeam = Field(default_factory=GameTeam)


class ScheduleGame(APIModel):
    """A single scheduled or played game."""

    game_pk: int
    game_date: str = ""
    status: GameStatus = Field(default_factory=GameStatus)
    teams: GameTeams = Field(default_factory=GameTeams)
    venue: NamedRef = Field(default_factory=NamedRef)

    @property
    def is_final(self) -> bool:
        return self.status.detailed_state in FINAL_STATES

    @property
    def matchup(self) -> str:
        return f"{self.teams.away.team.name} @ {self.teams.home.team.name}"

    @property
    def score(self) -> str:
        """Away - home score for finished games, "-" otherwise."""
        if not self.is_final:
            return "-"
        return f"{self.teams.away.score or 0} - {self.teams.home.score or 0}"


class ScheduleDate(APIModel):
    date: str = ""
    games: list[ScheduleGame] = Field(default_factory=list)


class ScheduleResponse(APIModel):
    dates: list[ScheduleDate] = Field(default_factory=list)

    @property
    def game_count(self) -> int:
        """Total number of games across all dates."""
        return sum(len(day.games) for day in self.dates)


# =============================================================================
# People and statistics
# =============================================================================


class Player(APIModel):
    """A player as returned by the people search endpoint."""

    id: int
    full_name: str = ""
    primary_position: Position = Field(default_factory=Position)
    current_team: NamedRef = Field(default_factory=NamedRef)
    bat_side: CodeRef = Field(default_factory=CodeRef)
    pitch_hand: CodeRef = Field(default_factory=CodeRef)
    birth_date: str = ""
    height: str = ""
    weight: Optional[int] = None
    active: bool = False


class PlayerSearchResponse(APIModel):
    people: list[Player] = Field(default_factory=list)


class StatGroupName(APIModel):
    display_name: str = ""


class StatSplit(APIModel):
    """Statistics for one season, or career totals when ``season`` is empty."""

    season: str = ""
    stat: dict[str, Any] = Field(default_factory=dict)

    @property
    def is_career(self) -> bool:
        return self.season == ""


class StatGroup(APIModel):
    group: StatGroupName = Field(default_factory=StatGroupName)
    splits: list[StatSplit] = Field(default_factory=list)


# Columns shown for each stat group: (label, API key)
STAT_COLUMNS: dict[str, list[tuple[str, str]]] = {
    "hitting": [
        ("AVG", "avg"),
        ("HR", "homeRuns"),
        ("RBI", "rbi"),
        ("H", "hits"),
        ("AB", "atBats"),
        ("R", "runs"),
        ("OBP", "obp"),
        ("SLG", "slg"),
        ("OPS", "ops"),
        ("SB", "stolenBases"),
        ("BB", "baseOnBalls"),
        ("SO", "strikeOuts"),
    ],
    "pitching": [
        ("ERA", "era"),
        ("W", "wins"),
        ("L", "losses"),
        ("G", "gamesPlayed"),
        ("GS", "gamesStarted"),
        ("SV", "saves"),
        ("IP", "inningsPitched"),
        ("SO", "strikeOuts"),
        ("BB", "baseOnBalls"),
        ("WHIP", "whip"),
        ("K/9", "strikeoutsPer9Inn"),
        ("BB/9", "walksPer9Inn"),
    ],
}


def stat_value(stat: dict[str, Any], key: str) -> str:
    """Format a single stat value, "-" when the API omitted it."""
    if key in stat:
        return str(stat[key])
    return "-"


@dataclass
class StatSummary:
    """Most recent season and career line of one stat group."""

    group: str
    season: Optional[str] = None
    season_stat: Optional[dict[str, Any]] = None
    career_stat: Optional[dict[str, Any]] = None


class PlayerWithStats(APIModel):
    id: Optional[int] = None
    full_name: str = ""
    stats: list[StatGroup] = Field(default_factory=list)

    def stat_summaries(self) -> list[StatSummary]:
        """Consolidate splits per group, hitting first, then pitching.

        Season splits keep only the most recent season; the split without a
        season is the career line. Groups without any split are skipped.
        """
        by_group: dict[str, StatSummary] = {}
        for stat_group in self.stats:
            if not stat_group.splits:
                continue
            name = stat_group.group.display_name
            summary = by_group.setdefault(name, StatSummary(group=name))
            for split in stat_group.splits:
                if split.is_career:
                    summary.career_stat = split.stat
                elif summary.season is None or split.season > summary.season:
                    summary.season = split.season
                    summary.season_stat = split.stat

        return [
            by_group[name]
            for name in STAT_COLUMNS
            if name in by_group
            and (by_group[name].season_stat is not None or by_group[name].career_stat is not None)
        ]


class PlayerStatsResponse(APIModel):
    people: list[PlayerWithStats] = Field(default_factory=list)

    @property
    def player(self) -> Optional[PlayerWithStats]:
        return self.people[0] if self.people else None
