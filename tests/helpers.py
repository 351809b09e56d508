from best_ball_rosters.domain.adp import ADPEntry
from best_ball_rosters.domain.draftable import BYE_WEEK_ATTRIBUTE, DraftablePlayer, PlayerAttribute
from best_ball_rosters.domain.player import EnrichedPlayer, Player
from best_ball_rosters.domain.roster import EnrichedRoster, Roster
from best_ball_rosters.services.player_matching import build_enriched_roster


def make_player(
    player_id: int = 1,
    first: str = "Test",
    last: str = "Player",
    *,
    position: str = "WR",
    team: str = "KC",
    opponent: str = "",
    image_url: str = "",
) -> Player:
    return Player(
        player_id=player_id,
        name_first=first,
        name_last=last,
        position=position,
        team=team,
        opponent=opponent,
        image_url=image_url,
    )


def make_enriched(
    player_id: int = 1,
    first: str = "Test",
    last: str = "Player",
    *,
    position: str = "WR",
    team: str = "KC",
    actual_position: str | None = None,
    actual_team: str | None = None,
    adp: float | None = None,
) -> EnrichedPlayer:
    """Enriched player whose true position/team default to the roster values."""
    return EnrichedPlayer(
        player=make_player(player_id, first, last, position=position, team=team),
        actual_position=actual_position or position,
        actual_team=actual_team or team,
        image_url="",
        adp=adp,
        adp_rank=round(adp) if adp is not None else None,
    )


def make_roster(lineup_id: int, players: list[Player], *, group_id: int | None = 100) -> Roster:
    return Roster(
        lineup_id=lineup_id,
        name=f"Lineup {lineup_id}",
        players=tuple(players),
        contest_draft_group_id=group_id,
    )


def make_enriched_roster(lineup_id: int, players: list[EnrichedPlayer]) -> EnrichedRoster:
    roster = make_roster(lineup_id, [p.player for p in players])
    return build_enriched_roster(roster, players)


def make_adp_entry(name: str, adp: float, *, position: str = "WR", team: str = "KC", adp_id: str = "") -> ADPEntry:
    return ADPEntry(id=adp_id or name.lower().replace(" ", "-"), name=name, position=position, adp=adp, team=team)


def make_draftable(
    player_id: int,
    first: str = "Test",
    last: str = "Player",
    *,
    position: str = "WR",
    team: str = "KC",
    image_url: str = "",
    bye_week: str | None = None,
) -> DraftablePlayer:
    attributes = (PlayerAttribute(name=BYE_WEEK_ATTRIBUTE, value=bye_week),) if bye_week is not None else ()
    return DraftablePlayer(
        player_id=player_id,
        draftable_id=player_id * 10,
        name_first=first,
        name_last=last,
        display_name=f"{first} {last}",
        position=position,
        team=team,
        image_url=image_url,
        attributes=attributes,
    )
