"""Click CLI for mlb-cli."""

from dataclasses import asdict, dataclass
from datetime import date, datetime
from typing import Optional

import click
from trogon import tui

from mlbcli import __version__
from mlbcli.api import FetchError, MLBClient, UnknownTeamError, resolve_team_id
from mlbcli.config import MLBConfig
from mlbcli.logging import setup_logging
from mlbcli.output import Formatter, parse_format


# Filled in by release builds
GIT_COMMIT = "none"
BUILD_DATE = "unknown"


@dataclass
class CLIContext:
    """Objects shared by every command of one invocation."""

    config: MLBConfig
    client: MLBClient
    formatter: Formatter


pass_cli_context = click.make_pass_decorator(CLIContext)


def fail(message: str) -> None:
    """Print an error to stderr and exit with status 1."""
    click.echo(f"Error: {message}", err=True)
    raise SystemExit(1)


def validate_date(ctx: click.Context, param: click.Parameter, value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    try:
        datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        raise click.BadParameter(f"'{value}' is not a date in YYYY-MM-DD format")
    return value


def validate_season(ctx: click.Context, param: click.Parameter, value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    if not (value.isdigit() and len(value) == 4):
        raise click.BadParameter(f"'{value}' is not a season year like 2024")
    return value


def current_season(config: MLBConfig) -> str:
    return config.season or str(date.today().year)


class AliasedGroup(click.Group):
    """A command group whose subcommands also answer to short names."""

    def __init__(self, *args, aliases: Optional[dict[str, str]] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.aliases = aliases or {}

    def get_command(self, ctx: click.Context, cmd_name: str) -> Optional[click.Command]:
        return super().get_command(ctx, self.aliases.get(cmd_name, cmd_name))

    def resolve_command(self, ctx: click.Context, args: list[str]):
        # Report the canonical name, not the alias that was typed
        _, cmd, args = super().resolve_command(ctx, args)
        return (cmd.name if cmd else None), cmd, args


ROOT_ALIASES = {"g": "get", "d": "describe", "desc": "describe"}

GET_ALIASES = {
    "team": "teams",
    "t": "teams",
    "standing": "standings",
    "stand": "standings",
    "st": "standings",
    "games": "schedule",
    "sched": "schedule",
    "sc": "schedule",
    "rosters": "roster",
    "r": "roster",
}

DESCRIBE_ALIASES = {"players": "player", "p": "player", "stat": "stats", "s": "stats"}


@tui()
@click.group(cls=AliasedGroup, aliases=ROOT_ALIASES, invoke_without_command=True)
@click.version_option(version=__version__, prog_name="mlb")
@click.option("--output", "-o", default=None, help="Output format: table, wide, or json")
@click.option("--api-url", envvar="MLB_API_URL", default=None, help="MLB Stats API base URL")
@click.option("--verbose", "-v", is_flag=True, help="Log requests to stderr")
@click.option("--season", default=None, callback=validate_season,
              help="Browser standings season (default: current year)")
@click.option("--date", "schedule_date", default=None, callback=validate_date,
              help="Browser schedule date, YYYY-MM-DD (default: today)")
@click.pass_context
def cli(
    ctx: click.Context,
    output: Optional[str],
    api_url: Optional[str],
    verbose: bool,
    season: Optional[str],
    schedule_date: Optional[str],
) -> None:
    """mlb - MLB statistics from the command line.

    Running 'mlb' without a command launches the interactive browser.

    Quick start:
        mlb                               Launch the interactive browser
        mlb get teams                     List all MLB teams
        mlb get standings --season 2024   Standings for 2024
        mlb get schedule                  Today's games
        mlb get roster --team LAD         Dodgers roster
        mlb describe player "Shohei Ohtani"
        mlb describe stats 660271
    """
    config = MLBConfig.load()
    browsing = ctx.invoked_subcommand is None

    if browsing:
        # The browser owns the terminal: file logging only
        setup_logging(config.log_level, config.log_file)
    else:
        level = "DEBUG" if verbose else config.log_level
        setup_logging(level, config.log_file, console=verbose)

    client = ctx.with_resource(
        MLBClient(base_url=api_url or config.base_url, timeout=config.timeout)
    )
    formatter = Formatter(parse_format(output or config.output_format))
    ctx.obj = CLIContext(config=config, client=client, formatter=formatter)

    if browsing:
        from mlbcli.tui import MLBApp
        app = MLBApp(
            client=client,
            season=season or config.season,
            schedule_date=schedule_date,
            config=config,
        )
        app.run()


# =============================================================================
# Get Commands - List resources
# =============================================================================


@cli.group(cls=AliasedGroup, aliases=GET_ALIASES)
def get() -> None:
    """Display one or more resources.

    Available resources: teams (t), standings (st), schedule (sc), roster (r).
    Alias: g.
    """
    pass


@get.command("teams")
@pass_cli_context
def get_teams(obj: CLIContext) -> None:
    """List all MLB teams with their abbreviations and divisions."""
    try:
        teams = obj.client.get_teams()
    except FetchError as e:
        fail(f"failed to get teams: {e.message}")
    obj.formatter.print_teams(teams)


@get.command("standings")
@click.option("--season", "-s", default=None, callback=validate_season,
              help="Season year (default: current year)")
@pass_cli_context
def get_standings(obj: CLIContext, season: Optional[str]) -> None:
    """Display division standings for a season.

    Examples:
        mlb get standings
        mlb get standings --season 2024
    """
    season = season or current_season(obj.config)
    try:
        standings = obj.client.get_standings(season)
    except FetchError as e:
        fail(f"failed to get standings: {e.message}")
    obj.formatter.print_standings(standings, season)


@get.command("schedule")
@click.option("--date", "-d", "schedule_date", default=None, callback=validate_date,
              help="Date in YYYY-MM-DD format (default: today)")
@pass_cli_context
def get_schedule(obj: CLIContext, schedule_date: Optional[str]) -> None:
    """Show games for a specific date.

    Examples:
        mlb get schedule
        mlb get schedule --date 2024-10-15
    """
    schedule_date = schedule_date or date.today().isoformat()
    try:
        schedule = obj.client.get_schedule(schedule_date)
    except FetchError as e:
        fail(f"failed to get schedule: {e.message}")
    obj.formatter.print_schedule(schedule, schedule_date)


@get.command("roster")
@click.option("--team", "-t", required=True, help="Team abbreviation (e.g. LAD, NYY) or team ID")
@pass_cli_context
def get_roster(obj: CLIContext, team: str) -> None:
    """Display a team's active roster.

    Examples:
        mlb get roster --team LAD
        mlb get roster -t 119
    """
    try:
        team_id = resolve_team_id(team)
    except UnknownTeamError as e:
        fail(str(e))

    try:
        roster = obj.client.get_roster(team_id)
    except FetchError as e:
        fail(f"failed to get roster: {e.message}")
    obj.formatter.print_roster(roster, team_id)


# =============================================================================
# Describe Commands - Player details
# =============================================================================


@cli.group(cls=AliasedGroup, aliases=DESCRIBE_ALIASES)
def describe() -> None:
    """Show detailed information about a player.

    Available resources: player (p), stats (s). Aliases: d, desc.
    """
    pass


@describe.command("player")
@click.argument("name", nargs=-1, required=True)
@pass_cli_context
def describe_player(obj: CLIContext, name: tuple[str, ...]) -> None:
    """Search for a player by name.

    The search is case-insensitive and supports partial names.

    Examples:
        mlb describe player "Shohei Ohtani"
        mlb describe player ohtani
    """
    search_name = " ".join(name)
    try:
        players = obj.client.search_player(search_name)
    except FetchError as e:
        fail(f"failed to search player: {e.message}")
    obj.formatter.print_player(players, search_name)


@describe.command("stats")
@click.argument("player_id")
@click.option("--season", "-s", default=None, callback=validate_season,
              help="Only show this season (plus career totals)")
@pass_cli_context
def describe_stats(obj: CLIContext, player_id: str, season: Optional[str]) -> None:
    """Display season and career statistics for a player.

    PLAYER_ID comes from 'mlb describe player'.
    """
    if not player_id.isdigit():
        fail(f"player id must be numeric, got '{player_id}'")
    try:
        stats = obj.client.get_player_stats(player_id)
    except FetchError as e:
        fail(f"failed to get stats: {e.message}")
    obj.formatter.print_stats(stats, season)


# =============================================================================
# Version and Config Commands
# =============================================================================


@cli.command()
def version() -> None:
    """Print version, git commit and build date."""
    click.echo("MLB CLI")
    click.echo(f"  Version:    {__version__}")
    click.echo(f"  Git Commit: {GIT_COMMIT}")
    click.echo(f"  Built:      {BUILD_DATE}")


@cli.group("config")
def config_group() -> None:
    """View and change persistent settings."""
    pass


@config_group.command("show")
@pass_cli_context
def config_show(obj: CLIContext) -> None:
    """Show the current settings."""
    click.echo(f"Config file: {MLBConfig.get_config_path()}")
    for key, value in asdict(obj.config).items():
        click.echo(f"  {key}: {value}")


@config_group.command("set")
@click.argument("key")
@click.argument("value")
@pass_cli_context
def config_set(obj: CLIContext, key: str, value: str) -> None:
    """Set KEY to VALUE and save.

    Examples:
        mlb config set theme nord
        mlb config set output_format wide
        mlb config set log_file ~/.mlbcli/mlb.log
    """
    try:
        obj.config.set_value(key, value)
    except KeyError:
        fail(f"unknown setting '{key}'")
    except ValueError as e:
        fail(f"invalid value for {key}: {e}")
    obj.config.save()
    click.echo(click.style(f"✓ {key} = {getattr(obj.config, key)}", fg="green"))


@config_group.command("reset")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
@pass_cli_context
def config_reset(obj: CLIContext, yes: bool) -> None:
    """Reset all settings to their defaults."""
    if not yes:
        click.confirm("Reset all settings to defaults?", abort=True)
    obj.config.reset()
    obj.config.save()
    click.echo(click.style("✓ Settings reset", fg="green"))


def main() -> None:
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
