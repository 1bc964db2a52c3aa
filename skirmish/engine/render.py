from .battlefield import Battlefield
from .model import Coord


def render(bf: Battlefield) -> str:
    """Draw the grid, listing each row's units and their hit points."""
    rows = []
    for r in range(bf.height):
        cells = []
        tags = []
        for c in range(bf.width):
            u = bf.unit_at(Coord(r, c))
            if bf.walls[r, c]:
                cells.append("#")
            elif u is not None:
                cells.append(u.faction.symbol)
                tags.append(f"{u.faction.symbol}({u.hp})")
            else:
                cells.append(".")
        line = "".join(cells)
        if tags:
            line += "   " + ", ".join(tags)
        rows.append(line)
    return "\n".join(rows)
