from typing import Dict, Optional
from pydantic import BaseModel, Field
from skirmish.engine.model import DEFAULT_HP, DEFAULT_POWER, Faction


class BattleConfig(BaseModel):
    """Tunables for one simulation run."""
    hp: int = Field(default=DEFAULT_HP, gt=0)
    elf_power: int = Field(default=DEFAULT_POWER, gt=0)
    goblin_power: int = Field(default=DEFAULT_POWER, gt=0)
    guard: Optional[Faction] = None  # abort as soon as a unit of this faction dies

    def power_of(self, faction: Faction) -> int:
        return self.elf_power if faction is Faction.ELF else self.goblin_power

    def powers(self) -> Dict[Faction, int]:
        return {f: self.power_of(f) for f in Faction}

    def with_power(self, faction: Faction, power: int) -> "BattleConfig":
        key = "elf_power" if faction is Faction.ELF else "goblin_power"
        return self.model_validate({**self.model_dump(), key: power})


class ReportOut(BaseModel):
    """Battle outcome schema."""
    rounds: int
    hp_left: int
    score: int
    winner: Optional[str] = None
    losses: Dict[str, int] = Field(default_factory=dict)
    guard_tripped: bool = False


class SearchOut(BaseModel):
    """Attack-power search schema."""
    faction: str
    power: int
    trials: int
    report: ReportOut
