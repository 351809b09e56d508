from dataclasses import dataclass

BYE_WEEK_ATTRIBUTE = "ByeWeek"


@dataclass(frozen=True)
class PlayerAttribute:
    name: str
    value: str


@dataclass(frozen=True)
class DraftablePlayer:
    """Draft-pool metadata for a player; source of truth for true position and team.

    ``player_id`` shares the identity space of roster players.
    """

    player_id: int
    draftable_id: int
    name_first: str
    name_last: str
    display_name: str
    position: str
    team: str
    image_url: str = ""
    attributes: tuple[PlayerAttribute, ...] = ()

    def attribute(self, name: str) -> str | None:
        return next((a.value for a in self.attributes if a.name == name), None)

    @property
    def bye_week(self) -> str | None:
        return self.attribute(BYE_WEEK_ATTRIBUTE)
