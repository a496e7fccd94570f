"""MLB Stats API access for mlb-cli."""

from .client import FetchError, MLBClient, UnknownTeamError, resolve_team_id

__all__ = [
    "FetchError",
    "MLBClient",
    "UnknownTeamError",
    "resolve_team_id",
]
