from typing import Dict, Iterable, Iterator, List, Optional
import numpy as np
from .model import Coord, Faction, Unit


class Battlefield:
    """Static walls plus the live units, keyed by position.

    Walls are a boolean grid (True = impassable) that never changes after
    parsing. Units are mutated in place by the round engine and removed the
    moment they die.
    """

    def __init__(self, walls: np.ndarray, units: Iterable[Unit] = ()):
        self.walls = np.asarray(walls, dtype=bool)
        self._units: Dict[Coord, Unit] = {}
        self._by_id: Dict[str, Unit] = {}
        for u in units:
            self.place(u)

    @property
    def height(self) -> int:
        """Number of rows in the grid."""
        return int(self.walls.shape[0])

    @property
    def width(self) -> int:
        """Number of columns in the grid."""
        return int(self.walls.shape[1])

    @staticmethod
    def adjacent(c: Coord) -> List[Coord]:
        """Neighbours in reading order: north, west, east, south."""
        r, col = c
        return [Coord(r - 1, col), Coord(r, col - 1), Coord(r, col + 1), Coord(r + 1, col)]

    def in_bounds(self, c: Coord) -> bool:
        """True iff c lies inside the grid."""
        return 0 <= c[0] < self.height and 0 <= c[1] < self.width

    def is_wall(self, c: Coord) -> bool:
        if not self.in_bounds(c):
            raise IndexError(f"{tuple(c)} is outside the {self.height}x{self.width} grid")
        return bool(self.walls[c[0], c[1]])

    def is_open(self, c: Coord) -> bool:
        """True iff the square is neither a wall nor occupied."""
        return not self.is_wall(c) and c not in self._units

    def unit_at(self, c: Coord) -> Optional[Unit]:
        """Unit standing on c, or None."""
        return self._units.get(c)

    def get(self, unit_id: str) -> Optional[Unit]:
        """Look up a living unit by id; None once it has died."""
        return self._by_id.get(unit_id)

    def units(self) -> List[Unit]:
        """Living units in reading order of their positions."""
        return [self._units[c] for c in sorted(self._units)]

    def units_of(self, faction: Faction) -> Iterator[Unit]:
        """Living units of one faction in reading order."""
        return (u for u in self.units() if u.faction is faction)

    def count(self, faction: Faction) -> int:
        """Number of living units of faction."""
        return sum(1 for u in self._units.values() if u.faction is faction)

    def is_battle_over(self) -> bool:
        return self.count(Faction.ELF) == 0 or self.count(Faction.GOBLIN) == 0

    def enemies_adjacent(self, c: Coord, enemy: Faction) -> List[Unit]:
        found = []
        for n in self.adjacent(c):
            u = self._units.get(n)
            if u is not None and u.faction is enemy:
                found.append(u)
        return found

    def total_hp(self) -> int:
        return sum(u.hp for u in self._units.values())

    def place(self, unit: Unit) -> None:
        if self.is_wall(unit.pos):
            raise ValueError(f"cannot place {unit.id} on a wall at {tuple(unit.pos)}")
        if unit.pos in self._units:
            raise ValueError(f"{tuple(unit.pos)} is already occupied by {self._units[unit.pos].id}")
        if unit.id in self._by_id:
            raise ValueError(f"duplicate unit id {unit.id}")
        self._units[unit.pos] = unit
        self._by_id[unit.id] = unit

    def move_unit(self, src: Coord, dst: Coord) -> Unit:
        if not self.is_open(dst):
            raise ValueError(f"cannot move onto {tuple(dst)}: square is not open")
        u = self._units.pop(src)
        u.pos = Coord(*dst)
        self._units[u.pos] = u
        return u

    def apply_damage(self, c: Coord, amount: int) -> bool:
        """Damage the unit at c; remove it and return True if it died."""
        if amount < 0:
            raise ValueError("damage cannot be negative")
        u = self._units[c]
        u.hp -= amount
        if u.hp <= 0:
            self.remove_unit(c)
            return True
        return False

    def remove_unit(self, c: Coord) -> Unit:
        u = self._units.pop(c)
        del self._by_id[u.id]
        return u
