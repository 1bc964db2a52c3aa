import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional
from skirmish.api.schemas import BattleConfig
from skirmish.engine.battlefield import Battlefield
from skirmish.engine.engine import Engine, RoundOutcome
from skirmish.engine.model import Event, Faction
from skirmish.engine.parser import parse_map
from .eventlog import EventLog

log = logging.getLogger(__name__)

RoundHook = Callable[[int, Battlefield, List[Event]], None]

# Events that change the battlefield; a round without any of them repeats forever.
_ACTIVE_KINDS = {"UnitMoved", "Attack"}


class Stalemate(RuntimeError):
    """Neither faction can reach the other, so the battle never ends."""


@dataclass
class BattleReport:
    rounds: int
    hp_left: int
    winner: Optional[Faction] = None
    losses: Dict[Faction, int] = field(default_factory=dict)
    guard_tripped: bool = False

    @property
    def score(self) -> int:
        return self.rounds * self.hp_left

    def flawless(self, faction: Faction) -> bool:
        """True if faction won without losing a single unit."""
        return self.winner is faction and self.losses.get(faction, 0) == 0


class Runner:
    """Drives the engine round after round until the battle is decided."""

    def __init__(self, engine: Engine, on_round: Optional[RoundHook] = None):
        self.engine = engine
        self.on_round = on_round
        self.events = EventLog()
        bf = engine.snapshot()
        self._initial = {f: bf.count(f) for f in Faction}

    def run(self) -> BattleReport:
        """Step until a round fails to complete, then summarise."""
        while True:
            result = self.engine.step()
            self.events.record(result.events)
            if not result.completed:
                break
            if not any(e.kind in _ACTIVE_KINDS for e in result.events):
                raise Stalemate(f"nothing happened in round {self.engine.rounds}")
            if self.on_round:
                n = self.engine.rounds
                self.on_round(n, self.engine.snapshot(), self.events.for_round(n))
        return self.report(result.outcome)

    def report(self, outcome: RoundOutcome) -> BattleReport:
        bf = self.engine.snapshot()
        winner = None
        if bf.is_battle_over():
            alive = [f for f in Faction if bf.count(f) > 0]
            winner = alive[0] if alive else None
        rep = BattleReport(
            rounds=self.engine.rounds,
            hp_left=bf.total_hp(),
            winner=winner,
            losses={f: self._initial[f] - bf.count(f) for f in Faction},
            guard_tripped=outcome is RoundOutcome.GUARD_TRIPPED,
        )
        if rep.guard_tripped:
            log.info("Battle aborted in round %d: %s unit lost",
                     self.engine.rounds + 1, self.engine.guard.name.lower())
        else:
            log.info("Battle over after %d full rounds: %s win with %d hp left (score %d)",
                     rep.rounds, winner.name.lower() if winner else "nobody", rep.hp_left, rep.score)
        return rep


def run_battle(text: str, config: Optional[BattleConfig] = None,
               on_round: Optional[RoundHook] = None) -> BattleReport:
    """Simulate the battle described by a map from a fresh battlefield."""
    config = config or BattleConfig()
    bf = parse_map(text, hp=config.hp, powers=config.powers())
    eng = Engine(bf, guard=config.guard)
    return Runner(eng, on_round=on_round).run()
