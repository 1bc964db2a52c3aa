"""Full battles driven to completion."""
import pytest
from skirmish.api.schemas import BattleConfig
from skirmish.engine.model import Faction
from skirmish.runtime.runner import Stalemate, run_battle
from battle_maps import BATTLES, FIRST


@pytest.mark.parametrize("text,rounds,hp_left", BATTLES)
def test_canonical_battles(text, rounds, hp_left):
    report = run_battle(text)
    assert (report.rounds, report.hp_left) == (rounds, hp_left)
    assert report.score == rounds * hp_left
    assert not report.guard_tripped


def test_first_battle_outcome():
    report = run_battle(FIRST)
    assert report.score == 27730
    assert report.winner is Faction.GOBLIN
    assert report.losses == {Faction.ELF: 2, Faction.GOBLIN: 0}


def test_round_hook_sees_every_completed_round():
    seen = []
    report = run_battle(FIRST, on_round=lambda n, bf, evts: seen.append((n, bf.total_hp())))
    assert [n for n, _ in seen] == list(range(1, report.rounds + 1))
    totals = [hp for _, hp in seen]
    assert totals == sorted(totals, reverse=True)


def test_score_counts_hit_points_right_after_final_kill():
    report = run_battle("""
        ######
        #EG.E#
        ######
    """, BattleConfig(elf_power=200))
    assert report.rounds == 0
    assert report.hp_left == 400
    assert report.winner is Faction.ELF


def test_guard_stops_the_battle():
    report = run_battle(FIRST, BattleConfig(guard=Faction.ELF))
    assert report.guard_tripped
    assert report.losses[Faction.ELF] == 1
    assert report.winner is None
    assert not report.flawless(Faction.ELF)


def test_sealed_off_factions_are_a_stalemate():
    with pytest.raises(Stalemate):
        run_battle("""
            #####
            #E#G#
            #####
        """)


def test_round_hook_receives_that_rounds_events():
    rounds = {}
    run_battle(FIRST, on_round=lambda n, bf, evts: rounds.setdefault(n, evts))
    assert all(e.round == n for n, evts in rounds.items() for e in evts)
    assert all(evts[-1].kind == "RoundCompleted" for evts in rounds.values())
    kills = [e.data["unit_id"] for evts in rounds.values() for e in evts if e.kind == "Destroyed"]
    assert len(kills) == 2
    assert all(uid.startswith("E") for uid in kills)
