from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, NamedTuple

DEFAULT_HP = 200
DEFAULT_POWER = 3


class Coord(NamedTuple):
    """Grid square as (row, col). Tuple ordering is reading order."""
    row: int
    col: int


class Faction(Enum):
    """One of the two opposing sides; the value is its map symbol."""
    ELF = "E"
    GOBLIN = "G"

    def other(self) -> "Faction":
        return Faction.GOBLIN if self is Faction.ELF else Faction.ELF

    @property
    def symbol(self) -> str:
        return self.value


@dataclass
class Unit:
    id: str
    faction: Faction
    pos: Coord
    hp: int = DEFAULT_HP
    power: int = DEFAULT_POWER


@dataclass
class Event:
    kind: str
    round: int
    data: Dict = field(default_factory=dict)
