"""Main MLB browser TUI application."""

import logging
from datetime import date
from typing import Optional

from textual import events, on, work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Header, Input, Static

from mlbcli.api import MLBClient
from mlbcli.config import MLBConfig
from mlbcli.tui.loader import run_load
from mlbcli.tui.navigation import (
    Action,
    Event,
    FilterCancelled,
    FilterChanged,
    FilterConfirmed,
    KeyPressed,
    LoadRequest,
    NavigationState,
    Resize,
    Tick,
    initial_state,
    transition,
)
from mlbcli.tui.render import render_frame


logger = logging.getLogger(__name__)

# Seconds between spinner frames
TICK_INTERVAL = 0.1


class MLBApp(App):
    """Interactive browser for teams, rosters, players, standings and schedules.

    All state lives in ``self.navigation``. Keys, resizes, ticks and finished
    loads are turned into events and handed to ``dispatch``, the only place
    that replaces it.
    """

    TITLE = "⚾ MLB CLI"
    SUB_TITLE = "MLB Stats Browser"
    # Keys go to the app bindings until the filter input is opened
    AUTO_FOCUS = None

    CSS = """
    Screen {
        layout: vertical;
    }

    #frame {
        height: 1fr;
        padding: 0 1;
    }

    #filter-input {
        dock: bottom;
        display: none;
    }

    #filter-input.active {
        display: block;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit", show=True),
        Binding("ctrl+c", "quit", "Quit", show=False, priority=True),
        Binding("up,k", "move_up", "Up", show=False),
        Binding("down,j", "move_down", "Down", show=False),
        Binding("enter", "select", "Select", show=False),
        Binding("backspace,escape", "back", "Back", show=False),
        Binding("slash", "filter", "Filter", show=False),
        # Priority so the screen's focus cycling never sees them
        Binding("tab", "next_tab", "Next Tab", show=False, priority=True),
        Binding("shift+tab", "prev_tab", "Previous Tab", show=False, priority=True),
        Binding("r", "refresh", "Refresh", show=False),
    ]

    def __init__(
        self,
        client: Optional[MLBClient] = None,
        season: Optional[str] = None,
        schedule_date: Optional[str] = None,
        config: Optional[MLBConfig] = None,
    ):
        super().__init__()
        if config is None:
            config = MLBConfig.load()
        self._config = config
        self.theme = config.theme

        if client is None:
            client = MLBClient(base_url=config.base_url, timeout=config.timeout)
        self.client = client

        today = date.today()
        self.season = season or config.season or str(today.year)
        self.schedule_date = schedule_date or today.isoformat()
        self.navigation: Optional[NavigationState] = None

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static("", id="frame")
        yield Input(placeholder="Filter...", id="filter-input")

    def on_mount(self) -> None:
        self.navigation, requests = initial_state(self.season, self.schedule_date)
        self.navigation, _ = transition(self.navigation, Resize(self.size.width, self.size.height))
        for request in requests:
            self.start_load(request)
        self.set_interval(TICK_INTERVAL, self._tick)
        self.refresh_frame()

    def on_unmount(self) -> None:
        self.client.close()

    def dispatch(self, event: Event) -> None:
        """Apply one event to the navigation state and act on the result."""
        if self.navigation is None:
            return

        self.navigation, requests = transition(self.navigation, event)
        for request in requests:
            self.start_load(request)

        if self.navigation.done:
            self.exit()
            return
        self._sync_filter_input()
        self.refresh_frame()

    def refresh_frame(self) -> None:
        self.query_one("#frame", Static).update(render_frame(self.navigation))

    def _sync_filter_input(self) -> None:
        """Show the filter input only while the filter is being edited."""
        filter_input = self.query_one("#filter-input", Input)
        text = self.navigation.filter_state.text

        if self.navigation.filter_mode:
            if not filter_input.has_class("active"):
                filter_input.add_class("active")
                filter_input.value = text
                filter_input.focus()
            elif filter_input.value != text:
                # A reload replaced the list and dropped the filter
                filter_input.value = text
        elif filter_input.has_class("active"):
            filter_input.remove_class("active")
            self.set_focus(None)

    def _tick(self) -> None:
        if self.navigation is not None and self.navigation.loading:
            self.dispatch(Tick())

    # =========================================================================
    # Loading
    # =========================================================================

    @work(thread=True)
    def start_load(self, request: LoadRequest) -> None:
        """Fetch one resource off the event loop and report back."""
        logger.debug("Starting load of %s (%s)", request.kind.value, request.key)
        completed = run_load(self.client, request)
        self.call_from_thread(self.dispatch, completed)

    # =========================================================================
    # Events
    # =========================================================================

    def on_resize(self, event: events.Resize) -> None:
        self.dispatch(Resize(event.size.width, event.size.height))

    @on(Input.Changed, "#filter-input")
    def on_filter_changed(self, event: Input.Changed) -> None:
        if self.navigation is not None and self.navigation.filter_mode:
            self.dispatch(FilterChanged(event.value))

    @on(Input.Submitted, "#filter-input")
    def on_filter_submitted(self, event: Input.Submitted) -> None:
        self.dispatch(FilterConfirmed())

    # =========================================================================
    # Actions
    # =========================================================================

    def action_quit(self) -> None:
        self.dispatch(KeyPressed(Action.QUIT))

    def action_move_up(self) -> None:
        self.dispatch(KeyPressed(Action.UP))

    def action_move_down(self) -> None:
        self.dispatch(KeyPressed(Action.DOWN))

    def action_select(self) -> None:
        self.dispatch(KeyPressed(Action.SELECT))

    def action_back(self) -> None:
        """Go back a level, or cancel the filter while editing it."""
        if self.navigation is not None and self.navigation.filter_mode:
            self.dispatch(FilterCancelled())
        else:
            self.dispatch(KeyPressed(Action.BACK))

    def action_filter(self) -> None:
        self.dispatch(KeyPressed(Action.FILTER))

    def action_next_tab(self) -> None:
        self.dispatch(KeyPressed(Action.NEXT_TAB))

    def action_prev_tab(self) -> None:
        self.dispatch(KeyPressed(Action.PREV_TAB))

    def action_refresh(self) -> None:
        self.dispatch(KeyPressed(Action.REFRESH))
