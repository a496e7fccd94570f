"""Run browser load requests against the MLB Stats API client."""

import logging
from typing import Any

from mlbcli.api import FetchError, MLBClient
from mlbcli.tui.navigation import LoadCompleted, LoadRequest, ResourceKind


logger = logging.getLogger(__name__)


def fetch_payload(client: MLBClient, request: LoadRequest) -> Any:
    """Perform the fetch described by ``request`` and return the decoded payload.

    Raises:
        FetchError: If the API call fails.
    """
    kind = request.kind
    if kind is ResourceKind.TEAMS:
        return client.get_teams()
    if kind is ResourceKind.ROSTER:
        return client.get_roster(request.key)
    if kind is ResourceKind.PLAYER_STATS:
        return client.get_player_stats(request.key)
    if kind is ResourceKind.STANDINGS:
        return client.get_standings(request.key)
    if kind is ResourceKind.SCHEDULE:
        return client.get_schedule(request.key)
    raise ValueError(f"Unknown resource kind: {kind}")


def run_load(client: MLBClient, request: LoadRequest) -> LoadCompleted:
    """Fetch ``request`` and wrap the outcome as exactly one completion event."""
    try:
        payload = fetch_payload(client, request)
    except FetchError as e:
        return LoadCompleted(request, error=e.message)
    except Exception as e:
        # Anything else still has to clear the busy state in the browser
        logger.exception("Unexpected error loading %s", request.kind.value)
        return LoadCompleted(request, error=f"unexpected error: {e}")

    logger.debug("Loaded %s (%s)", request.kind.value, request.key)
    return LoadCompleted(request, payload=payload)
