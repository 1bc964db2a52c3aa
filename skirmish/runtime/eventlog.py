from typing import Dict, List
from skirmish.engine.model import Event


class EventLog:
    """Engine events grouped by the round they happened in."""

    def __init__(self):
        self._rounds: Dict[int, List[Event]] = {}

    def __len__(self) -> int:
        return sum(len(evts) for evts in self._rounds.values())

    def record(self, evts: List[Event]) -> None:
        """File each event under its round number."""
        for e in evts:
            self._rounds.setdefault(e.round, []).append(e)

    def for_round(self, n: int) -> List[Event]:
        """Events of round n, in the order they happened."""
        return list(self._rounds.get(n, []))

    def of_kind(self, kind: str) -> List[Event]:
        return [e for n in sorted(self._rounds) for e in self._rounds[n] if e.kind == kind]

    def kills(self, n: int) -> List[Event]:
        """Units destroyed during round n."""
        return [e for e in self.for_round(n) if e.kind == "Destroyed"]
