"""Tests for running browser load requests."""

import pytest

from mlbcli.tui.loader import fetch_payload, run_load
from mlbcli.tui.navigation import LoadRequest, ResourceKind


class TestFetchPayload:
    """Tests for dispatching a request to the client."""

    @pytest.mark.parametrize(
        "request_, call",
        [
            (LoadRequest(ResourceKind.TEAMS), ("teams", None)),
            (LoadRequest(ResourceKind.ROSTER, "119"), ("roster", "119")),
            (LoadRequest(ResourceKind.PLAYER_STATS, "660271"), ("player-stats", "660271")),
            (LoadRequest(ResourceKind.STANDINGS, "2024"), ("standings", "2024")),
            (LoadRequest(ResourceKind.SCHEDULE, "2024-07-04"), ("schedule", "2024-07-04")),
        ],
    )
    def test_calls_matching_fetch(self, fake_client, request_, call) -> None:
        """Test that each resource kind calls its client method."""
        fetch_payload(fake_client, request_)
        assert fake_client.calls == [call]


class TestRunLoad:
    """Tests for wrapping fetch outcomes as completion events."""

    def test_success(self, fake_client, teams) -> None:
        """Test that a successful fetch carries the payload."""
        request = LoadRequest(ResourceKind.TEAMS)
        completed = run_load(fake_client, request)
        assert completed.ok
        assert completed.request == request
        assert completed.payload == teams

    def test_fetch_error_becomes_error_event(self, fake_client) -> None:
        """Test that a FetchError becomes an error completion."""
        fake_client.fail = "roster"
        completed = run_load(fake_client, LoadRequest(ResourceKind.ROSTER, "119"))
        assert not completed.ok
        assert completed.error == "API returned status 500"
        assert completed.payload is None

    def test_unexpected_exception_is_reported(self, fake_client) -> None:
        """Any crash still yields exactly one error completion."""

        def explode(*args):
            raise RuntimeError("kaboom")

        fake_client.get_standings = explode
        completed = run_load(fake_client, LoadRequest(ResourceKind.STANDINGS, "2024"))
        assert not completed.ok
        assert completed.error == "unexpected error: kaboom"
