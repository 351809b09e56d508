from typing import Annotated

import typer

from best_ball_rosters.cli._logging import configure_logging
from best_ball_rosters.cli._output import (
    console,
    print_adp_entries,
    print_adp_summary,
    print_associations,
    print_error,
    print_exposures,
    print_rosters,
    print_search_results,
    print_stacks,
    print_value_rankings,
)
from best_ball_rosters.data.protocol import DataSourceError
from best_ball_rosters.domain.filters import (
    AnalysisSortField,
    CountRange,
    FilterOptions,
    RosterSortField,
    SortDirection,
    SortOptions,
)
from best_ball_rosters.domain.roster import EnrichedRoster
from best_ball_rosters.services.associations import analyze_associations, filter_and_sort_associations, find_player
from best_ball_rosters.services.container import ServiceConfig, ServiceContainer, get_container, set_container
from best_ball_rosters.services.exposure import analyze_exposure, filter_and_sort_exposures, search_exposures
from best_ball_rosters.services.filters import apply_filters, search_players, sort_rosters
from best_ball_rosters.services.player_matching import top_value_rosters
from best_ball_rosters.services.stacks import analyze_stacks, filter_and_sort_stacks

app = typer.Typer(name="bbr", help="Best ball roster analysis: stacks, exposure and player associations")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable DEBUG logging")] = False,
    config_path: Annotated[str, typer.Option("--config", help="Path to a YAML config file")] = "config.yaml",
) -> None:
    """Analyze a pool of drafted best ball rosters."""
    configure_logging(verbose=verbose)

    from best_ball_rosters.services.container import _container

    # A container set beforehand (e.g. by tests) is used as is
    if _container is None:
        set_container(ServiceContainer(ServiceConfig(config_path=config_path)))
    ctx.call_on_close(get_container().close)

    if ctx.invoked_subcommand is None:
        raise typer.Exit()


_TeamOpt = Annotated[list[str] | None, typer.Option("--team", "-t", help="Team abbreviation (repeatable)")]
_LimitOpt = Annotated[int, typer.Option("--limit", "-n", help="Maximum rows to show")]
_AnalysisSortOpt = Annotated[AnalysisSortField, typer.Option("--sort", help="Sort field")]
_AscendingOpt = Annotated[bool, typer.Option("--asc/--desc", help="Sort direction")]


def _direction(ascending: bool) -> SortDirection:
    return SortDirection.ASC if ascending else SortDirection.DESC


def _upper(values: list[str] | None) -> tuple[str, ...]:
    return tuple(v.strip().upper() for v in values or ())


def _load_rosters() -> list[EnrichedRoster]:
    try:
        return get_container().enriched_rosters()
    except DataSourceError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def _parse_bound(raw: str) -> int | None:
    raw = raw.strip()
    return int(raw) if raw else None


def _parse_counts(raw_counts: list[str] | None) -> dict[str, CountRange]:
    """Parse ``POS=MIN:MAX`` items; either bound may be blank and ``POS=N`` means exactly N.

    Raises:
        ValueError: On malformed items or invalid bounds.
    """
    counts: dict[str, CountRange] = {}
    for item in raw_counts or []:
        position, sep, bounds = item.partition("=")
        if not sep or not position.strip():
            raise ValueError(f"Expected POS=MIN:MAX, got '{item}'")
        low, colon, high = bounds.partition(":")
        if not colon:
            high = low
        counts[position.strip().upper()] = CountRange(min=_parse_bound(low), max=_parse_bound(high))
    return counts


def _size_range(low: int | None, high: int | None) -> CountRange | None:
    if low is None and high is None:
        return None
    return CountRange(min=low, max=high)


@app.command()
def rosters(
    team: _TeamOpt = None,
    player: Annotated[list[str] | None, typer.Option("--player", "-p", help="Player name (repeatable)")] = None,
    position: Annotated[list[str] | None, typer.Option("--position", help="Roster slot position (repeatable)")] = None,
    stack_min: Annotated[int | None, typer.Option("--stack-min", help="Smallest allowed largest stack")] = None,
    stack_max: Annotated[int | None, typer.Option("--stack-max", help="Largest allowed largest stack")] = None,
    count: Annotated[
        list[str] | None, typer.Option("--count", help="Position count bound as POS=MIN:MAX (repeatable)")
    ] = None,
    sort: Annotated[RosterSortField, typer.Option("--sort", help="Sort field")] = RosterSortField.LINEUP_ID,
    ascending: _AscendingOpt = True,
    limit: _LimitOpt = 25,
) -> None:
    """List rosters matching every given filter."""
    try:
        filters = FilterOptions(
            teams=_upper(team),
            players=tuple(player or ()),
            positions=_upper(position),
            stack_size=_size_range(stack_min, stack_max),
            position_counts=_parse_counts(count),
        )
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    pool = _load_rosters()
    matched = sort_rosters(apply_filters(pool, filters), SortOptions(field=sort, direction=_direction(ascending)))
    console.print(f"[bold]{len(matched)}[/bold] of {len(pool)} rosters match")
    print_rosters(matched[:limit])


@app.command()
def values(top: Annotated[int, typer.Option("--top", help="Number of rosters to show")] = 10) -> None:
    """Rank rosters by total ADP, lowest first."""
    print_value_rankings(top_value_rosters(_load_rosters(), top))


@app.command()
def stacks(
    team: _TeamOpt = None,
    min_size: Annotated[int | None, typer.Option("--min-size", help="Smallest stack to enumerate")] = None,
    max_size: Annotated[int | None, typer.Option("--max-size", help="Largest stack to enumerate")] = None,
    size: Annotated[int | None, typer.Option("--size", help="Only show stacks of this size")] = None,
    sort: _AnalysisSortOpt = AnalysisSortField.FREQUENCY,
    ascending: _AscendingOpt = False,
    limit: _LimitOpt = 25,
) -> None:
    """Same-team player combinations and how often they were drafted."""
    settings = get_container().analysis_settings
    pool = _load_rosters()
    try:
        analysis = analyze_stacks(
            pool,
            min_size=min_size if min_size is not None else settings.stack_min_size,
            max_size=max_size if max_size is not None else settings.stack_max_size,
        )
        size_range = _size_range(size, size)
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    result = filter_and_sort_stacks(analysis, size_range, _upper(team), sort, _direction(ascending))
    print_stacks(result[:limit], analysis.total_rosters)


@app.command()
def associations(
    player: Annotated[str, typer.Argument(help="Player name or part of it")],
    team: _TeamOpt = None,
    sort: _AnalysisSortOpt = AnalysisSortField.FREQUENCY,
    ascending: _AscendingOpt = False,
    limit: _LimitOpt = 25,
) -> None:
    """Players most often drafted alongside PLAYER."""
    pool = _load_rosters()
    searched = find_player(pool, player)
    if searched is None:
        print_error(f"No player matching '{player}'")
        raise typer.Exit(code=1)

    analysis = analyze_associations(pool, searched)
    if analysis is None:
        console.print(f"No rosters contain {searched.full_name}.")
        return
    result = filter_and_sort_associations(analysis, _upper(team), sort, _direction(ascending))
    print_associations(analysis, result[:limit])


@app.command()
def exposure(
    team: _TeamOpt = None,
    player: Annotated[str, typer.Option("--player", "-p", help="Only players whose name contains this")] = "",
    sort: _AnalysisSortOpt = AnalysisSortField.FREQUENCY,
    ascending: _AscendingOpt = False,
    limit: _LimitOpt = 25,
) -> None:
    """Share of rosters containing each player."""
    analysis = analyze_exposure(_load_rosters())
    result = filter_and_sort_exposures(analysis, _upper(team), player, sort, _direction(ascending))
    print_exposures(result[:limit], analysis.total_rosters)


@app.command()
def search(
    query: Annotated[str, typer.Argument(help="Part of a player's name")],
    by_exposure: Annotated[bool, typer.Option("--exposure", help="Count rosters instead of occurrences")] = False,
) -> None:
    """Find players in the roster pool by name."""
    settings = get_container().analysis_settings
    pool = _load_rosters()
    if by_exposure:
        results = search_exposures(
            analyze_exposure(pool), query, settings.search_limit, settings.search_min_query_length
        )
    else:
        results = search_players(pool, query, settings.search_limit, settings.search_min_query_length)
    print_search_results(results)


@app.command()
def adp(
    position: Annotated[str | None, typer.Option("--position", help="Top players at this position")] = None,
    query: Annotated[str | None, typer.Option("--query", "-q", help="Search by player name or team")] = None,
    top: Annotated[int, typer.Option("--top", help="Rows to show with --position")] = 10,
) -> None:
    """Inspect the loaded ADP table."""
    side_tables = get_container().side_tables
    try:
        side_tables.load_adp()
    except DataSourceError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if position is not None:
        print_adp_entries(side_tables.top_adp_by_position(position.strip().upper(), top))
    elif query is not None:
        print_adp_entries(side_tables.search_adp(query))
    else:
        print_adp_summary(side_tables.adp_summary())
