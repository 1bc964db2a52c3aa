"""Search for the smallest attack power that wins a battle without losses."""

import logging
from dataclasses import dataclass
from typing import Optional
from skirmish.api.schemas import BattleConfig
from skirmish.engine.model import Faction
from .runner import BattleReport, run_battle

log = logging.getLogger(__name__)


class NoBloodlessVictory(RuntimeError):
    """No attack power lets the protected faction win without a loss."""


@dataclass
class SearchResult:
    faction: Faction
    power: int
    report: BattleReport
    trials: int


def find_bloodless_power(text: str, protected: Faction = Faction.ELF,
                         config: Optional[BattleConfig] = None) -> SearchResult:
    """Scan attack power upward until `protected` wins with zero losses.

    Each trial simulates from a fresh battlefield and aborts on the first
    death in the protected faction. Winning without losses is not known to
    be monotone in attack power, so every value is tried in order starting
    one above the configured power. Once power reaches the starting hit
    points every hit kills, and raising it further cannot change the battle.
    """
    base = config or BattleConfig()
    power = base.power_of(protected) + 1
    trials = 0
    while True:
        trials += 1
        cfg = base.with_power(protected, power).model_copy(update={"guard": protected})
        report = run_battle(text, cfg)
        if report.flawless(protected):
            log.info("%s win without losses at attack power %d after %d trials",
                     protected.name.lower(), power, trials)
            return SearchResult(faction=protected, power=power, report=report, trials=trials)
        log.info("Attack power %d rejected after %d rounds", power, report.rounds)
        if power >= base.hp:
            raise NoBloodlessVictory(
                f"{protected.name.lower()} cannot win without losses at any attack power")
        power += 1
