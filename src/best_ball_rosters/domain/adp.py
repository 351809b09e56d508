from dataclasses import dataclass

# ADP assigned to entries whose value is missing or unparseable
MISSING_ADP = 999.0


@dataclass(frozen=True)
class ADPEntry:
    """A single player's ADP entry.

    Attributes:
        id: Identifier used by the ADP provider.
        name: The player's name as listed in the ADP source.
        position: Position as listed by the provider.
        adp: Average draft position; lower means drafted earlier.
        team: Team abbreviation.
    """

    id: str
    name: str
    position: str
    adp: float
    team: str
