#!/usr/bin/env python3
"""
Hex Targeting Engine - Entry Point
═══════════════════════════════════════════════════════════════════════════

Rozstrzyga cel skilla dla jednego snapshotu albo sprawdza fixture'y.

Użycie:
    python main.py --arena arena3 --caster 9 --enemies 25 32 33 41 44
    python main.py --skill pandora --caster 5 --allies 1 2 9
    python main.py --scan frontmost --team enemy --caster 40 --allies 9 12
    python main.py --fixtures tests/fixtures      # uruchom fixture'y .md
    python main.py ... --show --trace output/trace.json

Wynik:
    - Wypisuje cel (albo brak celu) na konsolę
    - Opcjonalnie zapisuje ślad rozstrzygnięć do JSON
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))

from hextarget.core.arena import ArenaRegistry
from hextarget.core.config_loader import ConfigLoader
from hextarget.core.hex_grid import BOARD
from hextarget.core.occupancy import OccupancySnapshot, Team
from hextarget.core.resolver import TargetResolver
from hextarget.core.skills import SkillBook
from hextarget.core.targeting import Found, parse_scan_config
from hextarget.events.event_logger import EventLogger, EventType
from hextarget.harness.fixtures import load_fixtures


DATA_PATH = Path(__file__).parent / "data"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Hex Targeting Engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--skill", default="nara", help="Id skilla z skills.yaml (domyślnie: nara)")
    parser.add_argument("--scan", help="Strategia zamiast skilla (np. mirror, rearmost)")
    parser.add_argument("--arena", help="Klucz albo nazwa areny")
    parser.add_argument("--caster", type=int, help="Pole castera")
    parser.add_argument("--team", default="ally", help="Drużyna castera (ally/enemy)")
    parser.add_argument("--allies", type=int, nargs="*", default=[], help="Pola drużyny ally")
    parser.add_argument("--enemies", type=int, nargs="*", default=[], help="Pola drużyny enemy")
    parser.add_argument("--ally-summons", type=int, nargs="*", default=[], help="Summony ally")
    parser.add_argument("--enemy-summons", type=int, nargs="*", default=[], help="Summony enemy")
    parser.add_argument("--fixtures", help="Katalog z fixture'ami .md")
    parser.add_argument("--show", action="store_true", help="Pokaż planszę")
    parser.add_argument("--trace", help="Zapisz ślad rozstrzygnięć do pliku JSON")
    parser.add_argument("--data", default=str(DATA_PATH), help="Folder z plikami YAML")
    return parser


def run_single(args, loader: ConfigLoader, resolver: TargetResolver) -> int:
    """Jedno rozstrzygnięcie z argumentów CLI."""
    if args.caster is None:
        print("❌ Podaj --caster albo --fixtures")
        return 2

    team = Team.parse(args.team)
    if args.scan:
        config = parse_scan_config(args.scan)
        label = args.scan
    else:
        skill = SkillBook.from_loader(loader).get(args.skill)
        config = skill.scan
        label = f"{skill.name} ({skill.id})"

    allies = list(args.allies)
    enemies = list(args.enemies)
    own = allies if team is Team.ALLY else enemies
    if args.caster not in own:
        own.append(args.caster)
    snapshot = OccupancySnapshot.of(
        ally=allies,
        enemy=enemies,
        ally_summons=args.ally_summons,
        enemy_summons=args.enemy_summons,
    )
    arena = ArenaRegistry.from_loader(loader).find(args.arena) if args.arena else None

    print("=" * 60)
    print("HEX TARGETING ENGINE")
    print("=" * 60)
    print(f"Skill:  {label}")
    print(f"Caster: tile {args.caster} ({team.value}), symmetrical tile {BOARD.sym(args.caster)}")
    if arena is not None:
        print(f"Arena:  {arena.name}")
    print()

    result = resolver.resolve(snapshot, args.caster, team, config, arena=arena)

    if isinstance(result, Found):
        print(f"🎯 CEL: tile {result.tile} (method: {result.method}"
              + (f", ring {result.ring}" if result.ring is not None else "") + ")")
        if result.paired_tile is not None:
            print(f"   para: tile {result.paired_tile}")
        if result.extra_tiles:
            print(f"   kolejne cele: {list(result.extra_tiles)}")
    else:
        print("🚫 BRAK CELU")
    print(f"Sprawdzone pola: {list(result.examined)}")

    if args.show:
        marks = {tile: "A" for tile in allies}
        marks.update({tile: "E" for tile in enemies})
        marks.update({tile: "a" for tile in args.ally_summons})
        marks.update({tile: "e" for tile in args.enemy_summons})
        if arena is not None:
            marks.update({tile: "#" for tile in arena.impassable})
        marks[args.caster] = "C"
        if isinstance(result, Found):
            marks.update({tile: "*" for tile in result.tiles})
        print()
        print(BOARD.render(marks))

    return 0


def run_fixtures(args, loader: ConfigLoader, resolver: TargetResolver) -> int:
    """Sprawdza wszystkie fixture'y z katalogu; zwraca 1 przy błędzie."""
    fixtures = load_fixtures(args.fixtures)
    registry = ArenaRegistry.from_loader(loader)
    config = parse_scan_config(args.scan) if args.scan else SkillBook.from_loader(loader).get(args.skill).scan

    print("=" * 60)
    print(f"FIXTURES: {args.fixtures} ({len(fixtures)} plików)")
    print("=" * 60)

    failures = 0
    total = 0
    for fixture in fixtures:
        arena = registry.find(fixture.arena)
        print(f"\n{fixture.source}: {arena.name} - {fixture.test_id}")
        for case in fixture.cases:
            total += 1
            result = resolver.resolve(
                fixture.snapshot(case), case.caster_tile, Team.ALLY, config, arena=arena
            )
            actual = result.tile if isinstance(result, Found) else None
            mirror = BOARD.sym(case.caster_tile)
            ok = actual == case.expected_target and mirror == case.symmetrical_tile
            failures += 0 if ok else 1
            print(f"  {'✅' if ok else '❌'} tile {case.caster_tile}: "
                  f"sym {mirror} (expected {case.symmetrical_tile}), "
                  f"target {actual} (expected {case.expected_target})")

    print()
    print("-" * 60)
    print(f"Wynik: {total - failures}/{total} OK")
    return 1 if failures else 0


def main(argv=None):
    """Główna funkcja; zwraca kod wyjścia (0 ok, 1 błąd fixture'a, 2 złe dane)."""
    args = build_parser().parse_args(argv)

    loader = ConfigLoader(args.data)
    logger = EventLogger() if args.trace else None
    resolver = TargetResolver(logger=logger)

    try:
        if args.fixtures:
            code = run_fixtures(args, loader, resolver)
        else:
            code = run_single(args, loader, resolver)
    except KeyError as exc:
        print(f"❌ {exc.args[0] if exc.args else exc}")
        return 2
    except ValueError as exc:
        # InvalidTile, IllegalPlacement i ParseError też są ValueError
        print(f"❌ {exc}")
        return 2

    if logger is not None:
        logger.save(args.trace)
        print()
        print(f"📄 Ślad zapisany: {args.trace}")
        for event_type in EventType:
            count = len(logger.get_events_by_type(event_type))
            if count:
                print(f"  {event_type.name}: {count}")

    return code


if __name__ == "__main__":
    sys.exit(main())
