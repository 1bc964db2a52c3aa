"""Map parsing, rendering and configuration validation."""
import pytest
from pydantic import ValidationError
from skirmish.api.schemas import BattleConfig
from skirmish.engine.model import Coord, Faction
from skirmish.engine.parser import MapError, parse_map
from skirmish.engine.render import render
from battle_maps import FIRST


def test_parse_units_and_walls():
    bf = parse_map(FIRST, hp=50, powers={Faction.ELF: 7})
    assert (bf.height, bf.width) == (7, 7)
    assert bf.walls[0].all() and bf.walls[3, 2]
    assert [u.id for u in bf.units()] == ["G1", "E1", "G2", "G3", "G4", "E2"]
    assert bf.unit_at(Coord(2, 4)).faction is Faction.ELF
    assert all(u.hp == 50 for u in bf.units())
    assert {u.power for u in bf.units_of(Faction.ELF)} == {7}
    assert {u.power for u in bf.units_of(Faction.GOBLIN)} == {3}


def test_unknown_symbols_are_floor():
    bf = parse_map("""
        #####
        #E?G#
        #####
    """)
    assert bf.is_open(Coord(1, 2))


@pytest.mark.parametrize("text,message", [
    ("", "empty"),
    ("#####\n#E.G#\n####\n", "width"),
    ("#####\n#E.G.\n#####\n", "enclosed"),
    ("#####\n#E..#\n#####\n", "goblin"),
    ("#####\n#G..#\n#####\n", "elf"),
])
def test_malformed_maps_are_rejected(text, message):
    with pytest.raises(MapError, match=message):
        parse_map(text)


def test_render_lists_hit_points_per_row():
    bf = parse_map(FIRST)
    bf.get("G2").hp = 131
    assert render(bf) == "\n".join([
        "#######",
        "#.G...#   G(200)",
        "#...EG#   E(200), G(131)",
        "#.#.#G#   G(200)",
        "#..G#E#   G(200), E(200)",
        "#.....#",
        "#######",
    ])


def test_config_validation():
    with pytest.raises(ValidationError):
        BattleConfig(elf_power=0)
    with pytest.raises(ValidationError):
        BattleConfig(hp=-1)
    cfg = BattleConfig(goblin_power=5).with_power(Faction.ELF, 9)
    assert cfg.powers() == {Faction.ELF: 9, Faction.GOBLIN: 5}
    assert BattleConfig(guard="E").guard is Faction.ELF
