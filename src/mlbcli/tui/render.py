"""Text frame rendering for the interactive browser.

Functions here only read a ``NavigationState`` and return Rich console markup;
the Textual app puts the result into a ``Static``.
"""

from typing import Any, Callable, Sequence

from rich.markup import escape

from mlbcli.models import STAT_COLUMNS, stat_value
from mlbcli.tui.navigation import TAB_LABELS, TAB_ORDER, NavigationState, View


SPINNER_FRAMES = "⣾⣽⣻⢿⡿⣟⣯⣷"

HELP_TEXT: dict[View, str] = {
    View.TEAMS: "↑/↓: Navigate  Enter: View Roster  Tab: Switch View  /: Filter  r: Refresh  q: Quit",
    View.ROSTER: "↑/↓: Navigate  Enter: Player Stats  Backspace: Back  /: Filter  r: Refresh  q: Quit",
    View.PLAYER: "Backspace: Back  r: Refresh  q: Quit",
    View.STANDINGS: "↑/↓: Navigate  Tab: Switch View  r: Refresh  q: Quit",
    View.SCHEDULE: "↑/↓: Navigate  Tab: Switch View  r: Refresh  q: Quit",
}

# Stats shown per line in the player view
STATS_PER_LINE = 3


def render_frame(state: NavigationState) -> str:
    """Render the whole browser frame."""
    parts = [
        render_tabs(state),
        render_breadcrumb(state),
        render_body(state),
        render_filter(state),
        render_help(state),
    ]
    return "\n".join(part for part in parts if part)


def render_tabs(state: NavigationState) -> str:
    tabs = []
    for tab in TAB_ORDER:
        label = f" {TAB_LABELS[tab]} "
        if tab is state.tab:
            tabs.append(f"[bold reverse]{label}[/]")
        else:
            tabs.append(f"[dim]{label}[/]")
    return " ".join(tabs) + "\n"


def render_breadcrumb(state: NavigationState) -> str:
    return "[italic]" + escape(" > ".join(state.breadcrumb())) + "[/]"


def render_body(state: NavigationState) -> str:
    if state.loading:
        spinner = SPINNER_FRAMES[state.spinner_frame % len(SPINNER_FRAMES)]
        return f"\n{spinner} Loading...\n"
    if state.error is not None:
        return f"\n[bold red]✗ Error: {escape(state.error)}[/]\n\nPress 'r' to retry\n"
    return _RENDERERS[state.view](state)


def render_filter(state: NavigationState) -> str:
    if state.filter_mode or not state.filter_state.text:
        return ""
    return f"[yellow]Filter: {escape(state.filter_state.text)}  (/ to edit, then esc to clear)[/]"


def render_help(state: NavigationState) -> str:
    return f"\n[dim]{HELP_TEXT[state.view]}[/]"


def _row(line: str, selected: bool) -> str:
    if selected:
        return f"[bold reverse]{escape(line)}[/]"
    return escape(line)


def _render_list(
    state: NavigationState,
    items: Sequence[Any],
    header: str,
    format_row: Callable[[Any], str],
    noun: str,
) -> str:
    """Render the viewport slice of a filterable list with a scroll indicator."""
    if state.filter_state.active and state.effective_length == 0:
        return f"[dim]No matches for '{escape(state.filter_state.text)}'[/]"

    indices = state.visible_indices()
    start, end = state.window()
    lines = [f"[bold underline]{escape(header)}[/]"]
    for position in range(start, end):
        index = indices[position]
        if index >= len(items):
            continue
        lines.append(_row(format_row(items[index]), position == state.cursor))

    if len(indices) > state.visible_rows:
        lines.append(f"\n[dim]  Showing {start + 1}-{end} of {len(indices)} {noun}[/]")
    return "\n".join(lines)


def render_teams(state: NavigationState) -> str:
    teams = state.payloads.teams
    if not teams:
        return "[dim]No teams found[/]"
    return _render_list(
        state,
        teams,
        f"{'ABBR':<5} {'TEAM':<25} {'DIVISION':<25}",
        lambda team: f"{team.abbreviation:<5} {team.name:<25} {team.division.name:<25}",
        "teams",
    )


def render_roster(state: NavigationState) -> str:
    roster = state.payloads.roster
    if not roster:
        return "[dim]No players found[/]"
    return _render_list(
        state,
        roster,
        f"{'#':<4} {'NAME':<25} {'POS':<6} {'STATUS':<15}",
        lambda entry: (
            f"{entry.jersey_number:<4} {entry.person.full_name:<25} "
            f"{entry.position.abbreviation:<6} {entry.status.description:<15}"
        ),
        "players",
    )


def _stat_lines(group: str, stat: dict) -> list[str]:
    columns = STAT_COLUMNS[group]
    lines = []
    for offset in range(0, len(columns), STATS_PER_LINE):
        cells = [
            f"{label + ':':<6}{stat_value(stat, key):<8}"
            for label, key in columns[offset:offset + STATS_PER_LINE]
        ]
        lines.append("    " + "  ".join(cells).rstrip())
    return lines


def render_player(state: NavigationState) -> str:
    entry = state.selection.player
    if entry is None:
        return "[dim]No player selected[/]"

    lines = [
        f"[bold]{escape(entry.person.full_name)}[/]",
        "",
        f"  ID:       {entry.person.id}",
        f"  Number:   #{escape(entry.jersey_number)}",
        f"  Position: {escape(entry.position.abbreviation)}",
        f"  Status:   {escape(entry.status.description)}",
    ]

    stats = state.payloads.player_stats
    player = stats.player if stats is not None else None
    if player is not None:
        for summary in player.stat_summaries():
            lines += ["", f"[bold]{escape(summary.group)} Stats[/]"]
            if summary.season_stat is not None:
                lines += ["", f"  {summary.season} Season:"]
                lines += [escape(line) for line in _stat_lines(summary.group, summary.season_stat)]
            if summary.career_stat is not None:
                lines += ["", "  Career:"]
                lines += [escape(line) for line in _stat_lines(summary.group, summary.career_stat)]

    lines += ["", "[dim]Press backspace to go back[/]"]
    return "\n".join(lines)


def render_standings(state: NavigationState) -> str:
    standings = state.payloads.standings
    if standings is None or not standings.records:
        return "[dim]No standings data[/]"

    lines = []
    position = 0
    for record in standings.records:
        lines.append(f"[bold]{escape(record.division.name)}[/]")
        lines.append(f"[bold underline]{'#':<3} {'TEAM':<22} {'W':>4} {'L':>4} {'PCT':>7} {'GB':>6}[/]")
        for team_record in record.team_records:
            games_back = "—" if team_record.games_back == "-" else team_record.games_back
            line = (
                f"{team_record.division_rank:<3} {team_record.team.name:<22} "
                f"{team_record.wins:>4} {team_record.losses:>4} "
                f"{team_record.winning_percentage:>7} {games_back:>6}"
            )
            lines.append(_row(line, position == state.cursor))
            position += 1
        lines.append("")
    return "\n".join(lines)


def render_schedule(state: NavigationState) -> str:
    schedule = state.payloads.schedule
    if schedule is None or not schedule.dates:
        return "[dim]No games scheduled[/]"

    lines = []
    position = 0
    for day in schedule.dates:
        lines.append(f"[bold]📅 {escape(day.date)}[/]")
        for game in day.games:
            status = game.status.detailed_state
            if game.is_final:
                line = f"{game.matchup:<40}  {game.score}  [{status}]"
            else:
                line = f"{game.matchup:<40}  [{status}]"
            lines.append(_row(line, position == state.cursor))
            position += 1
        lines.append("")
    return "\n".join(lines)


_RENDERERS: dict[View, Callable[[NavigationState], str]] = {
    View.TEAMS: render_teams,
    View.ROSTER: render_roster,
    View.PLAYER: render_player,
    View.STANDINGS: render_standings,
    View.SCHEDULE: render_schedule,
}
