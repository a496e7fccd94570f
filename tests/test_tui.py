"""Tests for the MLB browser TUI application."""

import pytest

from mlbcli.config import MLBConfig
from mlbcli.tui import MLBApp
from mlbcli.tui.navigation import ResourceKind, Tab, View


def make_app(client) -> MLBApp:
    return MLBApp(client=client, season="2024", schedule_date="2024-07-04", config=MLBConfig())


async def settle(app: MLBApp, pilot) -> None:
    """Wait for running loads and the resulting dispatches."""
    await app.workers.wait_for_complete()
    await pilot.pause()
    await pilot.pause()


class TestTUIModule:
    """Tests for TUI module imports."""

    def test_import_mlb_app(self) -> None:
        """Test that MLBApp can be imported."""
        assert MLBApp is not None

    def test_app_class_attributes(self) -> None:
        """Test that MLBApp defines its title, bindings and CSS."""
        assert hasattr(MLBApp, "TITLE")
        assert hasattr(MLBApp, "BINDINGS")
        assert hasattr(MLBApp, "CSS")

    def test_app_bindings(self) -> None:
        """Every browser key has a binding."""
        keys = set()
        for binding in MLBApp.BINDINGS:
            keys.update(key.strip() for key in binding.key.split(","))
        for key in ("q", "ctrl+c", "up", "k", "down", "j", "enter",
                    "backspace", "escape", "slash", "tab", "shift+tab", "r"):
            assert key in keys


class TestBrowser:
    """Tests driving the running app with a pilot."""

    @pytest.mark.asyncio
    async def test_loads_teams_on_start(self, fake_client) -> None:
        """Test that the team list loads when the app starts."""
        app = make_app(fake_client)
        async with app.run_test(size=(100, 40)) as pilot:
            await settle(app, pilot)
            assert fake_client.calls[0] == ("teams", None)
            assert app.navigation.view is View.TEAMS
            assert not app.navigation.loading
            assert len(app.navigation.payloads.teams) == 3

    @pytest.mark.asyncio
    async def test_keys_reach_bindings_on_start(self, fake_client) -> None:
        """Test that the hidden filter input does not take focus on start."""
        app = make_app(fake_client)
        async with app.run_test(size=(100, 40)) as pilot:
            await settle(app, pilot)
            assert app.focused is None

            await pilot.press("j")
            await pilot.pause()
            assert app.navigation.cursor == 1
            assert not app.navigation.filter_mode

            await pilot.press("q")
            await pilot.pause()
            assert app.navigation.done

    @pytest.mark.asyncio
    async def test_focus_released_after_filter(self, fake_client) -> None:
        """Test that confirming the filter hands keys back to the bindings."""
        app = make_app(fake_client)
        async with app.run_test(size=(100, 40)) as pilot:
            await settle(app, pilot)
            await pilot.press("slash", "y", "enter")
            await pilot.pause()
            assert app.focused is None
            assert app.navigation.filter_state.text == "y"

            await pilot.press("enter")
            await settle(app, pilot)
            assert app.navigation.view is View.ROSTER

    @pytest.mark.asyncio
    async def test_drill_down_and_back(self, fake_client) -> None:
        """Test drilling from a team to a player and back again."""
        app = make_app(fake_client)
        async with app.run_test(size=(100, 40)) as pilot:
            await settle(app, pilot)

            await pilot.press("j", "enter")
            await settle(app, pilot)
            assert app.navigation.view is View.ROSTER
            assert ("roster", "147") in fake_client.calls

            await pilot.press("enter")
            await settle(app, pilot)
            assert app.navigation.view is View.PLAYER
            assert app.navigation.payloads.player_stats is not None

            await pilot.press("backspace", "escape")
            await pilot.pause()
            assert app.navigation.view is View.TEAMS
            assert app.navigation.history == ()

    @pytest.mark.asyncio
    async def test_tab_switch_loads_standings(self, fake_client) -> None:
        """Test that tab loads standings and shift+tab returns."""
        app = make_app(fake_client)
        async with app.run_test(size=(100, 40)) as pilot:
            await settle(app, pilot)
            await pilot.press("tab")
            await settle(app, pilot)
            assert app.navigation.tab is Tab.STANDINGS
            assert ("standings", "2024") in fake_client.calls
            assert app.navigation.payloads.get(ResourceKind.STANDINGS) is not None

            await pilot.press("shift+tab")
            await pilot.pause()
            assert app.navigation.tab is Tab.TEAMS

    @pytest.mark.asyncio
    async def test_filter_typing(self, fake_client) -> None:
        """Test typing, confirming and cancelling a filter."""
        app = make_app(fake_client)
        async with app.run_test(size=(100, 40)) as pilot:
            await settle(app, pilot)

            await pilot.press("slash")
            await pilot.pause()
            assert app.navigation.filter_mode

            await pilot.press("g", "i", "a", "n", "t", "s")
            await pilot.pause()
            assert app.navigation.filter_state.text == "giants"
            assert app.navigation.filter_state.matches == (2,)

            await pilot.press("enter")
            await pilot.pause()
            assert not app.navigation.filter_mode
            assert app.navigation.filter_state.matches == (2,)

            await pilot.press("slash")
            await pilot.pause()
            await pilot.press("escape")
            await pilot.pause()
            assert not app.navigation.filter_mode
            assert app.navigation.filter_state.matches is None

    @pytest.mark.asyncio
    async def test_error_then_refresh(self, fake_client) -> None:
        """Test that a failed load shows an error until refresh succeeds."""
        fake_client.fail = "teams"
        app = make_app(fake_client)
        async with app.run_test(size=(100, 40)) as pilot:
            await settle(app, pilot)
            assert app.navigation.error == "API returned status 500"
            assert not app.navigation.loading

            fake_client.fail = None
            await pilot.press("r")
            await settle(app, pilot)
            assert app.navigation.error is None
            assert app.navigation.payloads.teams is not None

    @pytest.mark.asyncio
    async def test_quit(self, fake_client) -> None:
        """Test that q quits and closes the client."""
        app = make_app(fake_client)
        async with app.run_test(size=(100, 40)) as pilot:
            await settle(app, pilot)
            await pilot.press("q")
            await pilot.pause()
            assert app.navigation.done
        assert fake_client.closed
