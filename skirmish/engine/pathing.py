"""Breadth-first movement and target selection on the cavern grid."""

from typing import List, Optional, Tuple
import numpy as np
from .battlefield import Battlefield
from .model import Coord, Faction

UNREACHED = -1


def _expand(bf: Battlefield, frontier: List[Coord], dist: np.ndarray, d: int) -> List[Coord]:
    """Visit the open, unvisited neighbours of frontier at distance d."""
    nxt: List[Coord] = []
    for c in frontier:
        for n in bf.adjacent(c):
            if dist[n.row, n.col] == UNREACHED and bf.is_open(n):
                dist[n.row, n.col] = d
                nxt.append(n)
    return nxt


def nearest_in_range(bf: Battlefield, start: Coord, enemy: Faction) -> Optional[Tuple[Coord, int]]:
    """Find the closest square next to an enemy, reachable from start.

    Squares are visited level by level; the first level holding any square
    adjacent to an enemy wins, and within it the square first in reading
    order. Returns (square, distance) or None when no enemy is reachable.
    """
    dist = np.full(bf.walls.shape, UNREACHED, dtype=np.int64)
    dist[start.row, start.col] = 0
    frontier = [start]
    d = 0
    while frontier:
        in_range = [c for c in frontier if bf.enemies_adjacent(c, enemy)]
        if in_range:
            return min(in_range), d
        d += 1
        frontier = _expand(bf, frontier, dist, d)
    return None


def distances_from(bf: Battlefield, origin: Coord, limit: Optional[int] = None) -> np.ndarray:
    """Open-square BFS distances from origin; unreachable squares are -1."""
    dist = np.full(bf.walls.shape, UNREACHED, dtype=np.int64)
    dist[origin.row, origin.col] = 0
    frontier = [origin]
    d = 0
    while frontier and (limit is None or d < limit):
        d += 1
        frontier = _expand(bf, frontier, dist, d)
    return dist


def next_step(bf: Battlefield, start: Coord, enemy: Faction) -> Optional[Coord]:
    """First step of the move from start toward the nearest enemy, if any.

    The destination is chosen by nearest_in_range. Among all shortest paths
    to it, the step taken is the neighbour of start first in reading order,
    found by tracing distances back from the destination.
    """
    found = nearest_in_range(bf, start, enemy)
    if found is None:
        return None
    target, d = found
    if d == 0:
        # already in range, no move
        return None
    back = distances_from(bf, target, limit=d - 1)
    for n in bf.adjacent(start):
        if back[n.row, n.col] == d - 1 and bf.is_open(n):
            return n
    raise RuntimeError(f"no shortest path from {tuple(start)} to {tuple(target)}")


def choose_target(bf: Battlefield, pos: Coord, enemy: Faction) -> Optional[Coord]:
    """Adjacent enemy with the fewest hit points, ties by reading order."""
    candidates = bf.enemies_adjacent(pos, enemy)
    if not candidates:
        return None
    return min(candidates, key=lambda u: (u.hp, u.pos)).pos
