"""Turn a textual cavern map into a Battlefield."""

import textwrap
from typing import Dict, List, Optional
import numpy as np
from .battlefield import Battlefield
from .model import DEFAULT_HP, DEFAULT_POWER, Coord, Faction, Unit

WALL = "#"
SYMBOLS = {f.symbol: f for f in Faction}


class MapError(ValueError):
    """The map text cannot describe a valid battle."""


def _grid_lines(text: str) -> List[str]:
    lines = [line.rstrip() for line in textwrap.dedent(text).splitlines()]
    while lines and not lines[0]:
        lines.pop(0)
    while lines and not lines[-1]:
        lines.pop()
    return lines


def parse_map(text: str, hp: int = DEFAULT_HP,
              powers: Optional[Dict[Faction, int]] = None) -> Battlefield:
    """Build a fresh battlefield from map text.

    `#` is a wall, `E` and `G` are elf and goblin units, anything else is
    open floor. Every unit starts with `hp`; attack power comes from
    `powers` per faction, defaulting to DEFAULT_POWER.
    """
    powers = powers or {}
    lines = _grid_lines(text)
    if not lines:
        raise MapError("map is empty")
    width = len(lines[0])
    for r, line in enumerate(lines):
        if len(line) != width:
            raise MapError(f"row {r} has width {len(line)}, expected {width}")

    walls = np.zeros((len(lines), width), dtype=bool)
    units: List[Unit] = []
    counters = {f: 0 for f in Faction}
    for r, line in enumerate(lines):
        for c, ch in enumerate(line):
            if ch == WALL:
                walls[r, c] = True
            elif ch in SYMBOLS:
                faction = SYMBOLS[ch]
                counters[faction] += 1
                units.append(Unit(id=f"{ch}{counters[faction]}", faction=faction,
                                  pos=Coord(r, c), hp=hp,
                                  power=powers.get(faction, DEFAULT_POWER)))

    border = np.concatenate([walls[0, :], walls[-1, :], walls[:, 0], walls[:, -1]])
    if not border.all():
        raise MapError("map must be enclosed by walls")
    for faction, n in counters.items():
        if n == 0:
            raise MapError(f"map has no {faction.name.lower()} units")
    return Battlefield(walls, units)
