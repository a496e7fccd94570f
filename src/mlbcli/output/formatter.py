"""Output formatting for the non-interactive commands.

Tables are aligned plain text written with ``click.echo``; ``json`` mode
dumps the decoded API payload with the API's camelCase keys.
"""

from enum import Enum
from typing import Optional, Sequence

import click
from pydantic import BaseModel

from mlbcli.models import (
    STAT_COLUMNS,
    PlayerSearchResponse,
    PlayerStatsResponse,
    RosterEntry,
    RosterResponse,
    ScheduleResponse,
    StandingsResponse,
    Team,
    TeamsResponse,
)


class OutputFormat(str, Enum):
    TABLE = "table"
    WIDE = "wide"
    JSON = "json"


def parse_format(value: Optional[str]) -> OutputFormat:
    """Map a format name to an ``OutputFormat``; unknown names mean table."""
    try:
        return OutputFormat((value or "").lower())
    except ValueError:
        return OutputFormat.TABLE


def format_table(headers: Sequence[str], rows: Sequence[Sequence[object]], padding: int = 2) -> list[str]:
    """Align ``rows`` under ``headers`` in left-justified columns."""
    cells = [[str(cell) for cell in row] for row in rows]
    widths = [len(header) for header in headers]
    for row in cells:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    def line(values: Sequence[str]) -> str:
        return (" " * padding).join(
            value.ljust(width) for value, width in zip(values, widths)
        ).rstrip()

    return [line(list(headers))] + [line(row) for row in cells]


class Formatter:
    """Prints API results as table, wide table or JSON."""

    def __init__(self, fmt: OutputFormat = OutputFormat.TABLE):
        self.format = fmt

    @property
    def wide(self) -> bool:
        return self.format is OutputFormat.WIDE

    def _print_json(self, model: BaseModel) -> None:
        click.echo(model.model_dump_json(by_alias=True, indent=2))

    def _print_table(
        self,
        headers: Sequence[str],
        rows: Sequence[Sequence[object]],
        rule_width: Optional[int] = None,
    ) -> None:
        lines = format_table(headers, rows)
        click.echo(lines[0])
        if rule_width:
            click.echo("─" * rule_width)
        for line in lines[1:]:
            click.echo(line)

    def print_teams(self, teams: list[Team]) -> None:
        if self.format is OutputFormat.JSON:
            self._print_json(TeamsResponse(teams=teams))
            return

        click.echo()
        click.echo("⚾ MLB Teams")
        click.echo("─" * 70)

        if self.wide:
            headers = ["ID", "ABBR", "NAME", "DIVISION", "LEAGUE", "VENUE"]
            rows = [
                [t.id, t.abbreviation, t.name, t.division.name, t.league.name, t.venue.name]
                for t in teams
            ]
        else:
            headers = ["ABBR", "NAME", "DIVISION"]
            rows = [[t.abbreviation, t.name, t.division.name] for t in teams]
        self._print_table(headers, rows, rule_width=70)

    def print_standings(self, standings: StandingsResponse, season: str) -> None:
        if self.format is OutputFormat.JSON:
            self._print_json(standings)
            return

        click.echo(f"\n⚾ MLB Standings - {season}")

        for record in standings.records:
            click.echo(f"\n{record.division.name}")
            click.echo("─" * 75)
            rows = []
            for tr in record.team_records:
                games_back = "—" if tr.games_back == "-" else tr.games_back
                row = [tr.division_rank, tr.team.name, tr.wins, tr.losses,
                       tr.winning_percentage, games_back, tr.streak.streak_code]
                rows.append(row)
            self._print_table(["#", "TEAM", "W", "L", "PCT", "GB", "STREAK"], rows)

    def print_schedule(self, schedule: ScheduleResponse, date: str) -> None:
        if self.format is OutputFormat.JSON:
            self._print_json(schedule)
            return

        click.echo(f"\n⚾ MLB Games - {date}")
        click.echo("─" * 80)

        if not schedule.dates:
            click.echo("No games scheduled for this date.")
            return

        games = [game for day in schedule.dates for game in day.games]
        if self.wide:
            rows = [
                [g.game_pk, g.matchup, g.score, g.status.detailed_state, g.venue.name]
                for g in games
            ]
            self._print_table(["GAME ID", "MATCHUP", "SCORE", "STATUS", "VENUE"], rows, rule_width=80)
            return

        rows = [
            [g.matchup, g.score if g.is_final else "", f"[{g.status.detailed_state}]"]
            for g in games
        ]
        # Plain mode has no header line
        for line in format_table(["", "", ""], rows)[1:]:
            click.echo(line)

    def print_roster(self, roster: list[RosterEntry], team_id: int | str) -> None:
        if self.format is OutputFormat.JSON:
            self._print_json(RosterResponse(roster=roster))
            return

        click.echo(f"\n⚾ Active Roster (Team ID: {team_id})")
        click.echo("─" * 65)

        if self.wide:
            headers = ["#", "ID", "NAME", "POS", "STATUS"]
            rows = [
                [r.jersey_number, r.person.id, r.person.full_name,
                 r.position.abbreviation, r.status.description]
                for r in roster
            ]
        else:
            headers = ["#", "NAME", "POS", "STATUS"]
            rows = [
                [r.jersey_number, r.person.full_name, r.position.abbreviation, r.status.description]
                for r in roster
            ]
        self._print_table(headers, rows, rule_width=65)

    def print_player(self, players: PlayerSearchResponse, search_name: str) -> None:
        if self.format is OutputFormat.JSON:
            self._print_json(players)
            return

        click.echo(f'\n⚾ Player Search: "{search_name}"')
        click.echo("─" * 70)

        if not players.people:
            click.echo("No players found.")
            return

        for p in players.people:
            status = "Active" if p.active else "Inactive"
            team = p.current_team.name or "Free Agent"
            weight = f"{p.weight} lbs" if p.weight else "-"

            click.echo(f"\n{p.full_name} (ID: {p.id})")
            click.echo(f"  Position: {p.primary_position.abbreviation} | Team: {team} | Status: {status}")
            click.echo(
                f"  Bats: {p.bat_side.code} | Throws: {p.pitch_hand.code} | "
                f"Height: {p.height} | Weight: {weight}"
            )
            if self.wide and p.birth_date:
                click.echo(f"  Born: {p.birth_date}")

        click.echo(f"\n💡 Tip: Use 'mlb describe stats {players.people[0].id}' to see career stats")

    def print_stats(self, stats: PlayerStatsResponse, season: Optional[str] = None) -> None:
        """Print every split of every stat group.

        With ``season`` only that season's splits and the career line are shown.
        """
        if self.format is OutputFormat.JSON:
            self._print_json(stats)
            return

        player = stats.player
        if player is None:
            click.echo("Player not found.")
            return

        click.echo(f"\n⚾ Stats for {player.full_name}")

        for stat_group in player.stats:
            if not stat_group.splits:
                continue

            group_name = stat_group.group.display_name
            click.echo(f"\n{group_name} Stats:")
            click.echo("─" * 80)

            for split in stat_group.splits:
                if season and not split.is_career and split.season != season:
                    continue

                click.echo(f"\n  {split.season or 'Career'}:")
                for label, key in STAT_COLUMNS.get(group_name, []):
                    if key in split.stat:
                        click.echo(f"    {label + ':':<8} {split.stat[key]}")
