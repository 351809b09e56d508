from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

from best_ball_rosters.domain.adp import MISSING_ADP

if TYPE_CHECKING:
    from best_ball_rosters.domain.adp import ADPEntry
    from best_ball_rosters.domain.association import PlayerAssociation, PlayerAssociationsAnalysis
    from best_ball_rosters.domain.exposure import PlayerExposure
    from best_ball_rosters.domain.filters import PlayerSearchResult
    from best_ball_rosters.domain.player import EnrichedPlayer
    from best_ball_rosters.domain.roster import EnrichedRoster
    from best_ball_rosters.domain.stack import Stack
    from best_ball_rosters.repos.side_tables import ADPSummary

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


def print_error(message: str) -> None:
    err_console.print(f"[red bold]Error:[/red bold] {message}")


def _format_adp(adp: float | None) -> str:
    if adp is None or adp <= 0 or adp >= MISSING_ADP:
        return "-"
    return f"{adp:.1f}"


def _player_label(player: EnrichedPlayer) -> str:
    return f"{player.full_name} ({player.actual_position}, {player.actual_team})"


def print_rosters(rosters: list[EnrichedRoster]) -> None:
    if not rosters:
        return
    table = Table(show_edge=False, pad_edge=False)
    table.add_column("Lineup", justify="right")
    table.add_column("Name")
    table.add_column("Avg ADP", justify="right")
    table.add_column("Players")
    for roster in rosters:
        players = ", ".join(f"{p.full_name} {p.actual_position}" for p in roster.players)
        table.add_row(str(roster.lineup_id), roster.name, _format_adp(roster.average_adp), players)
    console.print(table)


def print_value_rankings(rosters: list[EnrichedRoster]) -> None:
    if not rosters:
        console.print("No rosters have ADP data.")
        return
    table = Table(show_edge=False, pad_edge=False)
    table.add_column("#", justify="right")
    table.add_column("Lineup", justify="right")
    table.add_column("Name")
    table.add_column("Total ADP", justify="right")
    table.add_column("Avg ADP", justify="right")
    for rank, roster in enumerate(rosters, start=1):
        table.add_row(
            str(rank),
            str(roster.lineup_id),
            roster.name,
            f"{roster.total_adp:.1f}",
            _format_adp(roster.average_adp),
        )
    console.print(table)


def print_stacks(stacks: list[Stack], total_rosters: int) -> None:
    if not stacks:
        console.print("No stacks found.")
        return
    console.print(f"[bold]{len(stacks)}[/bold] stacks across {total_rosters} rosters")
    table = Table(show_edge=False, pad_edge=False)
    table.add_column("Team")
    table.add_column("Size", justify="right")
    table.add_column("Players")
    table.add_column("Count", justify="right")
    table.add_column("%", justify="right")
    table.add_column("Avg ADP", justify="right")
    for stack in stacks:
        table.add_row(
            stack.team,
            str(stack.size),
            ", ".join(stack.player_names),
            str(stack.frequency),
            f"{stack.percentage:.1f}",
            _format_adp(stack.average_adp),
        )
    console.print(table)


def print_associations(analysis: PlayerAssociationsAnalysis, associations: list[PlayerAssociation]) -> None:
    searched = analysis.searched_player
    console.print(f"[bold]{_player_label(searched)}[/bold] appears in {analysis.searched_player_rosters} rosters")
    if not associations:
        console.print("No associated players match the current filters.")
        return
    table = Table(show_edge=False, pad_edge=False)
    table.add_column("Player")
    table.add_column("Pos")
    table.add_column("Team")
    table.add_column("Shared", justify="right")
    table.add_column("%", justify="right")
    table.add_column("ADP", justify="right")
    for a in associations:
        table.add_row(
            a.player.full_name,
            a.player.actual_position,
            a.player.actual_team,
            str(a.shared_rosters),
            f"{a.shared_percentage:.1f}",
            _format_adp(a.average_adp),
        )
    console.print(table)


def print_exposures(exposures: list[PlayerExposure], total_rosters: int) -> None:
    if not exposures:
        console.print("No players match the current filters.")
        return
    console.print(f"Exposure across [bold]{total_rosters}[/bold] rosters")
    table = Table(show_edge=False, pad_edge=False)
    table.add_column("Player")
    table.add_column("Pos")
    table.add_column("Team")
    table.add_column("Rosters", justify="right")
    table.add_column("%", justify="right")
    table.add_column("ADP", justify="right")
    for e in exposures:
        table.add_row(
            e.player.full_name,
            e.player.actual_position,
            e.player.actual_team,
            str(e.roster_count),
            f"{e.exposure_percentage:.1f}",
            _format_adp(e.average_adp),
        )
    console.print(table)


def print_search_results(results: list[PlayerSearchResult]) -> None:
    if not results:
        console.print("No matching players.")
        return
    table = Table(show_edge=False, pad_edge=False)
    table.add_column("Player")
    table.add_column("Pos")
    table.add_column("Team")
    table.add_column("Count", justify="right")
    for r in results:
        table.add_row(r.name, r.position, r.team, str(r.count))
    console.print(table)


def print_adp_entries(entries: list[ADPEntry]) -> None:
    if not entries:
        console.print("No ADP entries found.")
        return
    table = Table(show_edge=False, pad_edge=False)
    table.add_column("Player")
    table.add_column("Pos")
    table.add_column("Team")
    table.add_column("ADP", justify="right")
    for entry in entries:
        table.add_row(entry.name, entry.position, entry.team, _format_adp(entry.adp))
    console.print(table)


def print_adp_summary(summary: ADPSummary | None) -> None:
    if summary is None:
        console.print("No ADP data loaded.")
        return
    console.print(f"[bold]{summary.total_players}[/bold] players, average ADP {summary.average_adp}")
    table = Table(show_edge=False, pad_edge=False)
    table.add_column("Pos")
    table.add_column("Players", justify="right")
    table.add_column("Avg ADP", justify="right")
    table.add_column("Top Player")
    for p in summary.positions:
        table.add_row(p.position, str(p.count), f"{p.average_adp}", f"{p.top_player.name} ({p.top_player.adp:.1f})")
    console.print(table)
