"""Attack power search for a flawless elf victory."""
import pytest
from skirmish.api.schemas import BattleConfig
from skirmish.engine.model import Faction
from skirmish.runtime.search import NoBloodlessVictory, find_bloodless_power
from battle_maps import FIRST, FLAWLESS


@pytest.mark.parametrize("text,power,rounds,hp_left", FLAWLESS)
def test_canonical_searches(text, power, rounds, hp_left):
    found = find_bloodless_power(text)
    assert found.power == power
    assert (found.report.rounds, found.report.hp_left) == (rounds, hp_left)
    assert found.report.flawless(Faction.ELF)


def test_search_scans_upward_from_one_above_base_power():
    found = find_bloodless_power(FIRST)
    assert found.trials == 15 - 3
    assert found.faction is Faction.ELF
    assert found.report.score == 4988


def test_search_starts_above_configured_power():
    found = find_bloodless_power(FIRST, config=BattleConfig(elf_power=14))
    assert found.power == 15
    assert found.trials == 1


def test_search_gives_up_once_every_hit_kills():
    with pytest.raises(NoBloodlessVictory):
        find_bloodless_power("""
            ####
            #GE#
            ####
        """, config=BattleConfig(hp=10, goblin_power=10))
