"""
Cavern skirmish command line.

Usage:
    skirmish map.txt                      # simulate with default attack power
    skirmish map.txt --show-rounds        # draw the battlefield after every round
    skirmish map.txt --search             # smallest elf power for a flawless win
    skirmish map.txt --elf-power 12 --stop-on-elf-death
    skirmish map.txt --json               # machine-readable outcome
"""

import argparse
import logging
import sys
from typing import List, Optional
from pydantic import ValidationError
from skirmish.engine.model import DEFAULT_HP, DEFAULT_POWER, Faction
from skirmish.engine.parser import MapError, parse_map
from skirmish.engine.render import render
from skirmish.runtime.runner import BattleReport, Stalemate, run_battle
from skirmish.runtime.search import NoBloodlessVictory, find_bloodless_power
from .schemas import BattleConfig, ReportOut, SearchOut


def _report_out(rep: BattleReport) -> ReportOut:
    return ReportOut(
        rounds=rep.rounds,
        hp_left=rep.hp_left,
        score=rep.score,
        winner=rep.winner.name.lower() if rep.winner else None,
        losses={f.name.lower(): n for f, n in rep.losses.items()},
        guard_tripped=rep.guard_tripped,
    )


def _show_round(n: int, bf, evts) -> None:
    print(f"After round {n}:\n\n{render(bf)}\n")
    kills = [e for e in evts if e.kind == "Destroyed"]
    for e in kills:
        print(f"  {e.data['unit_id']} killed by {e.data['killer']}")
    if kills:
        print()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="skirmish", description="Elves vs goblins cavern battle simulator")
    parser.add_argument("map", help="Path to the map file")
    parser.add_argument("--search", action="store_true",
                        help="Find the smallest elf attack power that wins without elf losses")
    parser.add_argument("--elf-power", type=int, default=DEFAULT_POWER,
                        help=f"Elf attack power (default: {DEFAULT_POWER})")
    parser.add_argument("--goblin-power", type=int, default=DEFAULT_POWER,
                        help=f"Goblin attack power (default: {DEFAULT_POWER})")
    parser.add_argument("--hp", type=int, default=DEFAULT_HP,
                        help=f"Starting hit points of every unit (default: {DEFAULT_HP})")
    parser.add_argument("--stop-on-elf-death", action="store_true",
                        help="Abort the battle as soon as any elf dies")
    parser.add_argument("--show-rounds", action="store_true",
                        help="Draw the battlefield and list kills after each round (ignored with --search)")
    parser.add_argument("--json", action="store_true", help="Print the outcome as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every kill")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        with open(args.map) as f:
            text = f.read()
    except OSError as e:
        print(f"skirmish: cannot read {args.map}: {e}", file=sys.stderr)
        return 2

    try:
        config = BattleConfig(
            hp=args.hp,
            elf_power=args.elf_power,
            goblin_power=args.goblin_power,
            guard=Faction.ELF if args.stop_on_elf_death else None,
        )
        initial = parse_map(text, hp=config.hp, powers=config.powers())
    except (ValidationError, MapError) as e:
        print(f"skirmish: {e}", file=sys.stderr)
        return 2

    hook = _show_round if args.show_rounds and not args.search else None
    if args.show_rounds and not args.search:
        print(f"Initial state:\n\n{render(initial)}\n")

    try:
        if args.search:
            found = find_bloodless_power(text, Faction.ELF, config)
            out = SearchOut(faction="elf", power=found.power, trials=found.trials,
                            report=_report_out(found.report))
            if args.json:
                print(out.model_dump_json(indent=2))
            else:
                rep = found.report
                print(f"Elf attack power {found.power}: {rep.score} "
                      f"({rep.rounds} rounds, {rep.hp_left} hp)")
            return 0

        rep = run_battle(text, config, on_round=hook)
    except (Stalemate, NoBloodlessVictory) as e:
        print(f"skirmish: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(_report_out(rep).model_dump_json(indent=2))
    elif rep.guard_tripped:
        print(f"An elf died in round {rep.rounds + 1}; battle aborted")
    else:
        print(f"Outcome: {rep.score} ({rep.rounds} rounds, {rep.hp_left} hp)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
