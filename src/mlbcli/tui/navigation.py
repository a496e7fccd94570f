"""Navigation state machine for the interactive browser.

The browser state is an immutable ``NavigationState``. Every input (a key,
a resize, a finished fetch, a spinner tick) is an event, and
``transition(state, event)`` returns the next state together with the fetches
that should be started. Nothing here performs I/O: the app runs the returned
``LoadRequest``s in the background and feeds their outcome back in as
``LoadCompleted`` events.

Per-view data lives in a screen object (``TeamsScreen``, ``RosterScreen``,
``PlayerScreen``, ``StandingsScreen``, ``ScheduleScreen``) so a view only
carries the cursor and filter it actually uses.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable, ClassVar, Optional, Sequence, Union

from mlbcli.models import (
    PlayerStatsResponse,
    RosterEntry,
    ScheduleResponse,
    StandingsResponse,
    Team,
)
from mlbcli.tui.lists import filter_indices, viewport_window, visible_rows


# Lines taken by title, tabs, breadcrumb, table header, filter and help
CHROME_ROWS = 12


class View(str, Enum):
    """Screens of the browser."""

    TEAMS = "teams"
    ROSTER = "roster"
    PLAYER = "player"
    STANDINGS = "standings"
    SCHEDULE = "schedule"


class Tab(str, Enum):
    """Top-level browsing contexts."""

    TEAMS = "teams"
    STANDINGS = "standings"
    SCHEDULE = "schedule"


class ResourceKind(str, Enum):
    """Unit of fetching and caching."""

    TEAMS = "teams"
    ROSTER = "roster"
    PLAYER_STATS = "player-stats"
    STANDINGS = "standings"
    SCHEDULE = "schedule"


class Action(str, Enum):
    """Semantic key actions outside of filter editing."""

    UP = "up"
    DOWN = "down"
    SELECT = "select"
    BACK = "back"
    FILTER = "filter"
    NEXT_TAB = "next_tab"
    PREV_TAB = "prev_tab"
    REFRESH = "refresh"
    QUIT = "quit"


TAB_ORDER: tuple[Tab, ...] = (Tab.TEAMS, Tab.STANDINGS, Tab.SCHEDULE)

TAB_LABELS: dict[Tab, str] = {
    Tab.TEAMS: "Teams",
    Tab.STANDINGS: "Standings",
    Tab.SCHEDULE: "Schedule",
}

TAB_DEFAULT_VIEW: dict[Tab, View] = {
    Tab.TEAMS: View.TEAMS,
    Tab.STANDINGS: View.STANDINGS,
    Tab.SCHEDULE: View.SCHEDULE,
}

TAB_RESOURCE: dict[Tab, ResourceKind] = {
    Tab.TEAMS: ResourceKind.TEAMS,
    Tab.STANDINGS: ResourceKind.STANDINGS,
    Tab.SCHEDULE: ResourceKind.SCHEDULE,
}

# String fields the live filter matches against, per list view
FILTER_FIELDS: dict[View, tuple[Callable[[Any], str], ...]] = {
    View.TEAMS: (
        lambda team: team.name,
        lambda team: team.abbreviation,
    ),
    View.ROSTER: (
        lambda entry: entry.person.full_name,
        lambda entry: entry.position.abbreviation,
    ),
}


# =============================================================================
# Load requests and events
# =============================================================================


@dataclass(frozen=True)
class LoadRequest:
    """A fetch the app should run in the background.

    ``key`` is the team id (roster), person id (player stats), season
    (standings) or ``YYYY-MM-DD`` date (schedule); teams need none.
    """

    kind: ResourceKind
    key: Optional[str] = None


@dataclass(frozen=True)
class Resize:
    width: int
    height: int


@dataclass(frozen=True)
class KeyPressed:
    action: Action


@dataclass(frozen=True)
class FilterChanged:
    text: str


@dataclass(frozen=True)
class FilterConfirmed:
    pass


@dataclass(frozen=True)
class FilterCancelled:
    pass


@dataclass(frozen=True)
class LoadCompleted:
    """Outcome of one ``LoadRequest``: a payload or an error message."""

    request: LoadRequest
    payload: Any = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class Tick:
    pass


Event = Union[
    Resize,
    KeyPressed,
    FilterChanged,
    FilterConfirmed,
    FilterCancelled,
    LoadCompleted,
    Tick,
]


# =============================================================================
# State
# =============================================================================


@dataclass(frozen=True)
class FilterState:
    """Live filter of a list view.

    ``matches`` is ``None`` when no filter applies (full list) and a possibly
    empty tuple of item indices when one does.
    """

    text: str = ""
    matches: Optional[tuple[int, ...]] = None

    @property
    def active(self) -> bool:
        return self.matches is not None


NO_FILTER = FilterState()


@dataclass(frozen=True)
class ListScreen:
    """A filterable list view."""

    view: ClassVar[View]

    cursor: int = 0
    filter_state: FilterState = NO_FILTER


@dataclass(frozen=True)
class TeamsScreen(ListScreen):
    view: ClassVar[View] = View.TEAMS


@dataclass(frozen=True)
class RosterScreen(ListScreen):
    view: ClassVar[View] = View.ROSTER


@dataclass(frozen=True)
class TableScreen:
    """A read-only table with a row cursor."""

    view: ClassVar[View]

    cursor: int = 0


@dataclass(frozen=True)
class StandingsScreen(TableScreen):
    view: ClassVar[View] = View.STANDINGS


@dataclass(frozen=True)
class ScheduleScreen(TableScreen):
    view: ClassVar[View] = View.SCHEDULE


@dataclass(frozen=True)
class PlayerScreen:
    view: ClassVar[View] = View.PLAYER


Screen = Union[TeamsScreen, RosterScreen, PlayerScreen, StandingsScreen, ScheduleScreen]

SCREEN_TYPES: dict[View, type] = {
    View.TEAMS: TeamsScreen,
    View.ROSTER: RosterScreen,
    View.PLAYER: PlayerScreen,
    View.STANDINGS: StandingsScreen,
    View.SCHEDULE: ScheduleScreen,
}


def fresh_screen(view: View) -> Screen:
    """A screen for ``view`` with cursor 0 and no filter."""
    return SCREEN_TYPES[view]()


@dataclass(frozen=True)
class Payloads:
    """Cached fetch results, one slot per resource kind. ``None`` = not loaded."""

    teams: Optional[list[Team]] = None
    roster: Optional[list[RosterEntry]] = None
    player_stats: Optional[PlayerStatsResponse] = None
    standings: Optional[StandingsResponse] = None
    schedule: Optional[ScheduleResponse] = None

    _SLOTS: ClassVar[dict[ResourceKind, str]] = {
        ResourceKind.TEAMS: "teams",
        ResourceKind.ROSTER: "roster",
        ResourceKind.PLAYER_STATS: "player_stats",
        ResourceKind.STANDINGS: "standings",
        ResourceKind.SCHEDULE: "schedule",
    }

    def get(self, kind: ResourceKind) -> Any:
        return getattr(self, self._SLOTS[kind])

    def store(self, kind: ResourceKind, value: Any) -> "Payloads":
        return replace(self, **{self._SLOTS[kind]: value})


@dataclass(frozen=True)
class Selection:
    """The drill-down chain: selected team, then selected roster entry."""

    team: Optional[Team] = None
    player: Optional[RosterEntry] = None


@dataclass(frozen=True)
class NavigationState:
    """Complete state of the browser."""

    screen: Screen = field(default_factory=TeamsScreen)
    tab: Tab = Tab.TEAMS
    history: tuple[View, ...] = ()
    filter_mode: bool = False
    loading: bool = True
    error: Optional[str] = None
    payloads: Payloads = field(default_factory=Payloads)
    selection: Selection = field(default_factory=Selection)
    width: int = 80
    height: int = 24
    spinner_frame: int = 0
    season: str = ""
    schedule_date: str = ""
    done: bool = False

    @property
    def view(self) -> View:
        return self.screen.view

    @property
    def cursor(self) -> int:
        if isinstance(self.screen, (ListScreen, TableScreen)):
            return self.screen.cursor
        return 0

    @property
    def filter_state(self) -> FilterState:
        if isinstance(self.screen, ListScreen):
            return self.screen.filter_state
        return NO_FILTER

    def list_items(self) -> Sequence[Any]:
        """Underlying collection of the current list view (empty if none)."""
        if self.view is View.TEAMS:
            return self.payloads.teams or []
        if self.view is View.ROSTER:
            return self.payloads.roster or []
        return []

    @property
    def list_length(self) -> int:
        """Size of the full (unfiltered) list of the current view."""
        if self.view in (View.TEAMS, View.ROSTER):
            return len(self.list_items())
        if self.view is View.STANDINGS and self.payloads.standings is not None:
            return self.payloads.standings.team_count
        if self.view is View.SCHEDULE and self.payloads.schedule is not None:
            return self.payloads.schedule.game_count
        return 0

    @property
    def effective_length(self) -> int:
        """Length of the list the cursor moves in (filtered when a filter applies)."""
        matches = self.filter_state.matches
        if matches is not None:
            return len(matches)
        return self.list_length

    def visible_indices(self) -> tuple[int, ...]:
        """Actual item indices of the effective list, in display order."""
        matches = self.filter_state.matches
        if matches is not None:
            return matches
        return tuple(range(self.list_length))

    def actual_index(self) -> int:
        """Index into the underlying collection of the row under the cursor."""
        matches = self.filter_state.matches
        if matches is not None and self.cursor < len(matches):
            return matches[self.cursor]
        return self.cursor

    @property
    def visible_rows(self) -> int:
        return visible_rows(self.height, CHROME_ROWS)

    def window(self) -> tuple[int, int]:
        """``[start, end)`` of the effective list currently on screen."""
        return viewport_window(self.effective_length, self.visible_rows, self.cursor)

    def breadcrumb(self) -> list[str]:
        """Path of the current view, e.g. Teams > Dodgers > Roster > player."""
        if self.view is View.STANDINGS:
            return ["Standings"]
        if self.view is View.SCHEDULE:
            return ["Schedule"]

        parts = ["Teams"]
        if self.view in (View.ROSTER, View.PLAYER):
            if self.selection.team is not None:
                parts.append(self.selection.team.name)
            parts.append("Roster")
        if self.view is View.PLAYER and self.selection.player is not None:
            parts.append(self.selection.player.person.full_name)
        return parts


Transition = tuple[NavigationState, list[LoadRequest]]


def initial_state(season: str, schedule_date: str) -> Transition:
    """Start on the Teams tab with the team list loading."""
    state = NavigationState(season=season, schedule_date=schedule_date)
    return state, [LoadRequest(ResourceKind.TEAMS)]


# =============================================================================
# Transition
# =============================================================================


def transition(state: NavigationState, event: Event) -> Transition:
    """Apply one event and return the next state plus fetches to start."""
    if state.done:
        return state, []

    if isinstance(event, Resize):
        return replace(state, width=event.width, height=event.height), []
    if isinstance(event, Tick):
        if state.loading:
            return replace(state, spinner_frame=state.spinner_frame + 1), []
        return state, []
    if isinstance(event, LoadCompleted):
        return _complete_load(state, event), []
    if isinstance(event, KeyPressed):
        if state.filter_mode and event.action is not Action.QUIT:
            return state, []
        return _ACTIONS[event.action](state)
    if isinstance(event, FilterChanged):
        return _change_filter(state, event.text), []
    if isinstance(event, FilterConfirmed):
        return replace(state, filter_mode=False), []
    if isinstance(event, FilterCancelled):
        return _cancel_filter(state), []

    raise TypeError(f"Unknown event: {event!r}")


def _with_cursor(state: NavigationState, cursor: int) -> NavigationState:
    if isinstance(state.screen, (ListScreen, TableScreen)):
        return replace(state, screen=replace(state.screen, cursor=cursor))
    return state


def _move_cursor(state: NavigationState, delta: int) -> Transition:
    length = state.effective_length
    if length == 0:
        return state, []
    return _with_cursor(state, (state.cursor + delta) % length), []


def _request_for_view(state: NavigationState) -> Optional[LoadRequest]:
    """The fetch backing the current view, or None when a selection is missing."""
    view = state.view
    if view is View.TEAMS:
        return LoadRequest(ResourceKind.TEAMS)
    if view is View.ROSTER:
        if state.selection.team is None:
            return None
        return LoadRequest(ResourceKind.ROSTER, str(state.selection.team.id))
    if view is View.PLAYER:
        if state.selection.player is None:
            return None
        return LoadRequest(ResourceKind.PLAYER_STATS, str(state.selection.player.person.id))
    if view is View.STANDINGS:
        return LoadRequest(ResourceKind.STANDINGS, state.season)
    return LoadRequest(ResourceKind.SCHEDULE, state.schedule_date)


def _select(state: NavigationState) -> Transition:
    if state.view not in (View.TEAMS, View.ROSTER) or state.effective_length == 0:
        return state, []

    items = state.list_items()
    index = state.actual_index()
    if index >= len(items):
        return state, []
    chosen = items[index]

    if state.view is View.TEAMS:
        selection = Selection(team=chosen)
        screen: Screen = RosterScreen()
        request = LoadRequest(ResourceKind.ROSTER, str(chosen.id))
    else:
        selection = replace(state.selection, player=chosen)
        screen = PlayerScreen()
        request = LoadRequest(ResourceKind.PLAYER_STATS, str(chosen.person.id))

    new_state = replace(
        state,
        selection=selection,
        payloads=state.payloads.store(ResourceKind.PLAYER_STATS, None),
        history=state.history + (state.view,),
        screen=screen,
        loading=True,
    )
    return new_state, [request]


def _back(state: NavigationState) -> Transition:
    if not state.history:
        return state, []
    return replace(
        state,
        screen=fresh_screen(state.history[-1]),
        history=state.history[:-1],
    ), []


def _enter_filter(state: NavigationState) -> Transition:
    if not isinstance(state.screen, ListScreen):
        return state, []
    return replace(state, filter_mode=True), []


def _switch_tab(state: NavigationState, step: int) -> Transition:
    tab = TAB_ORDER[(TAB_ORDER.index(state.tab) + step) % len(TAB_ORDER)]
    new_state = replace(
        state,
        tab=tab,
        screen=fresh_screen(TAB_DEFAULT_VIEW[tab]),
        history=(),
        filter_mode=False,
    )
    if new_state.payloads.get(TAB_RESOURCE[tab]) is not None:
        return new_state, []

    request = _request_for_view(new_state)
    return replace(new_state, loading=True), [request] if request else []


def _refresh(state: NavigationState) -> Transition:
    request = _request_for_view(state)
    if request is None:
        return state, []
    return replace(state, loading=True, error=None), [request]


def _quit(state: NavigationState) -> Transition:
    return replace(state, done=True), []


_ACTIONS: dict[Action, Callable[[NavigationState], Transition]] = {
    Action.UP: lambda state: _move_cursor(state, -1),
    Action.DOWN: lambda state: _move_cursor(state, 1),
    Action.SELECT: _select,
    Action.BACK: _back,
    Action.FILTER: _enter_filter,
    Action.NEXT_TAB: lambda state: _switch_tab(state, 1),
    Action.PREV_TAB: lambda state: _switch_tab(state, -1),
    Action.REFRESH: _refresh,
    Action.QUIT: _quit,
}


def _change_filter(state: NavigationState, text: str) -> NavigationState:
    screen = state.screen
    if not state.filter_mode or not isinstance(screen, ListScreen):
        return state

    matches = filter_indices(state.list_items(), FILTER_FIELDS[screen.view], text)
    cursor = screen.cursor if matches == screen.filter_state.matches else 0
    return replace(
        state,
        screen=replace(screen, cursor=cursor, filter_state=FilterState(text, matches)),
    )


def _cancel_filter(state: NavigationState) -> NavigationState:
    state = replace(state, filter_mode=False)
    screen = state.screen
    if not isinstance(screen, ListScreen) or screen.filter_state == NO_FILTER:
        return state
    cursor = 0 if screen.filter_state.active else screen.cursor
    return replace(state, screen=replace(screen, cursor=cursor, filter_state=NO_FILTER))


# Screen reset when a list it shows has been replaced by fresh data
_RESET_ON_LOAD: dict[ResourceKind, type] = {
    ResourceKind.TEAMS: TeamsScreen,
    ResourceKind.ROSTER: RosterScreen,
    ResourceKind.STANDINGS: StandingsScreen,
    ResourceKind.SCHEDULE: ScheduleScreen,
}


def _complete_load(state: NavigationState, event: LoadCompleted) -> NavigationState:
    if not event.ok:
        return replace(state, loading=False, error=event.error)

    kind = event.request.kind
    screen = state.screen
    screen_type = _RESET_ON_LOAD.get(kind)
    if screen_type is not None and type(screen) is screen_type:
        screen = screen_type()

    return replace(
        state,
        payloads=state.payloads.store(kind, event.payload),
        loading=False,
        error=None,
        screen=screen,
    )
