import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple
from .battlefield import Battlefield
from .model import Coord, Event, Faction, Unit
from .pathing import choose_target, next_step

log = logging.getLogger(__name__)


class RoundOutcome(Enum):
    """How a call to Engine.step() finished."""
    COMPLETED = "completed"          # every unit alive at round start took its turn
    BATTLE_ENDED = "battle_ended"    # a faction is gone and some unit never got its turn
    GUARD_TRIPPED = "guard_tripped"  # a unit of the guarded faction died


@dataclass
class RoundResult:
    outcome: RoundOutcome
    events: List[Event] = field(default_factory=list)

    @property
    def completed(self) -> bool:
        return self.outcome is RoundOutcome.COMPLETED


class Engine:
    """Pure, deterministic round engine.

    Each round every unit alive at the start takes one turn in reading order
    of its starting square: move toward the nearest enemy, then attack an
    adjacent one. Turns see the mutations of all earlier turns in the round.
    """

    def __init__(self, battlefield: Battlefield, guard: Optional[Faction] = None):
        self.battlefield = battlefield
        self.guard = guard
        self.rounds = 0
        self.guard_tripped = False

    def _move(self, unit: Unit) -> List[Event]:
        """Step unit one square toward the nearest reachable enemy."""
        step = next_step(self.battlefield, unit.pos, unit.faction.other())
        if step is None:
            return []
        src = unit.pos
        self.battlefield.move_unit(src, step)
        return [Event("UnitMoved", self.rounds + 1,
                      {"unit_id": unit.id, "from": tuple(src), "to": tuple(step)})]

    def _attack(self, unit: Unit) -> List[Event]:
        """Hit the weakest adjacent enemy, removing it if it dies."""
        target_pos = choose_target(self.battlefield, unit.pos, unit.faction.other())
        if target_pos is None:
            return []
        target = self.battlefield.unit_at(target_pos)
        died = self.battlefield.apply_damage(target_pos, unit.power)
        evts = [Event("Attack", self.rounds + 1,
                      {"attacker": unit.id, "target": target.id,
                       "dmg": unit.power, "hp": max(0, target.hp)})]
        if died:
            log.debug("Round %d: %s killed %s at %s", self.rounds + 1, unit.id, target.id, tuple(target_pos))
            evts.append(Event("Destroyed", self.rounds + 1,
                              {"unit_id": target.id, "faction": target.faction.symbol,
                               "killer": unit.id}))
            if target.faction is self.guard:
                self.guard_tripped = True
        return evts

    def _turn_order(self) -> List[Tuple[Coord, str]]:
        """Snapshot of (position, unit id) in reading order at round start."""
        return [(u.pos, u.id) for u in self.battlefield.units()]

    def step(self) -> RoundResult:
        """Run one round and report whether it completed."""
        evts: List[Event] = []
        if self.guard_tripped:
            return RoundResult(RoundOutcome.GUARD_TRIPPED, evts)
        if self.battlefield.is_battle_over():
            return RoundResult(RoundOutcome.BATTLE_ENDED, evts)

        for _, unit_id in self._turn_order():
            unit = self.battlefield.get(unit_id)
            if unit is None:
                continue  # killed earlier this round
            if self.guard_tripped:
                evts.append(Event("GuardTripped", self.rounds + 1, {"faction": self.guard.symbol}))
                return RoundResult(RoundOutcome.GUARD_TRIPPED, evts)
            if self.battlefield.is_battle_over():
                evts.append(Event("BattleEnded", self.rounds + 1, {"waiting": unit.id}))
                return RoundResult(RoundOutcome.BATTLE_ENDED, evts)

            if not self.battlefield.enemies_adjacent(unit.pos, unit.faction.other()):
                evts += self._move(unit)
            evts += self._attack(unit)

        if self.guard_tripped:
            evts.append(Event("GuardTripped", self.rounds + 1, {"faction": self.guard.symbol}))
            return RoundResult(RoundOutcome.GUARD_TRIPPED, evts)
        self.rounds += 1
        evts.append(Event("RoundCompleted", self.rounds, {"hp_left": self.battlefield.total_hp()}))
        return RoundResult(RoundOutcome.COMPLETED, evts)

    def snapshot(self) -> Battlefield:
        """Return the current battlefield."""
        return self.battlefield
