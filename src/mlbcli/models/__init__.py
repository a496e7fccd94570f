"""Data models for mlb-cli."""

from .schemas import (
    STAT_COLUMNS,
    Player,
    PlayerSearchResponse,
    PlayerStatsResponse,
    PlayerWithStats,
    RosterEntry,
    RosterResponse,
    ScheduleGame,
    ScheduleResponse,
    StandingsResponse,
    StatSummary,
    Team,
    TeamRecord,
    TeamsResponse,
    stat_value,
)
from .teams import TEAM_ABBREVIATIONS, get_team_id

__all__ = [
    "STAT_COLUMNS",
    "Player",
    "PlayerSearchResponse",
    "PlayerStatsResponse",
    "PlayerWithStats",
    "RosterEntry",
    "RosterResponse",
    "ScheduleGame",
    "ScheduleResponse",
    "StandingsResponse",
    "StatSummary",
    "TEAM_ABBREVIATIONS",
    "Team",
    "TeamRecord",
    "TeamsResponse",
    "get_team_id",
    "stat_value",
]
