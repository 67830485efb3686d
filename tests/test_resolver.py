"""
Testy dla TargetResolver - walidacja, areny, skille z YAML i ślad zdarzeń.
"""

import pytest
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from hextarget.core.arena import ArenaRegistry
from hextarget.core.config_loader import ConfigLoader
from hextarget.core.errors import IllegalPlacement, InvalidTile
from hextarget.core.occupancy import OccupancySnapshot, Team
from hextarget.core.resolver import TargetResolver
from hextarget.core.skills import SkillBook
from hextarget.core.targeting import Found, NoTarget
from hextarget.events import EventLogger, EventType


DATA_PATH = Path(__file__).parent.parent / "data"


# ═══════════════════════════════════════════════════════════════════════════
# FIXTURES
# ═══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def loader():
    return ConfigLoader(str(DATA_PATH))


@pytest.fixture
def arenas(loader):
    return ArenaRegistry.from_loader(loader)


@pytest.fixture
def skills(loader):
    return SkillBook.from_loader(loader)


@pytest.fixture
def resolver():
    return TargetResolver()


# ═══════════════════════════════════════════════════════════════════════════
# TEST: PODSTAWY
# ═══════════════════════════════════════════════════════════════════════════

def test_resolve_mirror_on_arena(resolver, arenas):
    """Arena III: lustro 9 to 37 (puste), najbliższy wróg wokół 37 to 33."""
    arena = arenas.get("arena3")
    snapshot = OccupancySnapshot.of(ally=[9], enemy=[25, 32, 33, 41, 44])

    result = resolver.resolve(snapshot, 9, Team.ALLY, "symmetrical_mirror", arena=arena)

    assert isinstance(result, Found)
    assert result.tile == 33
    assert result.method == "mirror_ring"
    assert not set(result.examined) & arena.impassable


def test_resolve_accepts_plain_mapping(resolver):
    result = resolver.resolve({9: "ally", 37: "enemy"}, 9, "ally", "mirror")
    assert result.tile == 37


def test_resolve_enemy_caster(resolver, arenas):
    """Wróg na 37 celuje w sojusznika na swoim lustrze (9)."""
    snapshot = OccupancySnapshot.of(ally=[9, 16], enemy=[37])
    result = resolver.resolve(snapshot, 37, Team.ENEMY, "mirror", arena=arenas.get("arena3"))
    assert result == Found(9, method="mirror", ring=0, examined=(9,))


def test_resolve_does_not_modify_snapshot(resolver):
    snapshot = OccupancySnapshot.of(ally=[9], enemy=[33])
    before = dict(snapshot)
    resolver.resolve(snapshot, 9, Team.ALLY, "mirror")
    assert dict(snapshot) == before


def test_no_target_is_a_result_not_an_error(resolver, arenas):
    arena = arenas.get("arena3")
    snapshot = OccupancySnapshot.of(ally=[1])

    result = resolver.resolve(snapshot, 1, Team.ALLY, "mirror", arena=arena)

    assert isinstance(result, NoTarget)
    assert not set(result.examined) & arena.impassable
    assert len(result.examined) == 45 - len(arena.impassable)


# ═══════════════════════════════════════════════════════════════════════════
# TEST: WALIDACJA
# ═══════════════════════════════════════════════════════════════════════════

@pytest.mark.parametrize("bad", [0, 46, True, "9"])
def test_invalid_caster_tile(resolver, bad):
    with pytest.raises(InvalidTile):
        resolver.resolve({37: "enemy"}, bad, Team.ALLY, "mirror")


def test_invalid_snapshot_key(resolver):
    with pytest.raises(InvalidTile):
        resolver.resolve({50: "enemy"}, 9, Team.ALLY, "mirror")


def test_duplicate_tile_in_snapshot():
    with pytest.raises(ValueError, match="occupied twice"):
        OccupancySnapshot.of(ally=[9], enemy=[9])


def test_illegal_placement_on_arena(resolver, arenas):
    """Wróg na polu 1 (pole ally na Arena III)."""
    snapshot = OccupancySnapshot.of(ally=[9], enemy=[1, 33])
    with pytest.raises(IllegalPlacement) as excinfo:
        resolver.resolve(snapshot, 9, Team.ALLY, "mirror", arena=arenas.get("arena3"))
    assert excinfo.value.tile == 1
    assert "arena3" in str(excinfo.value)


def test_token_on_blocked_tile_is_illegal(resolver, arenas):
    snapshot = OccupancySnapshot.of(ally=[9], enemy=[34])
    with pytest.raises(IllegalPlacement):
        resolver.resolve(snapshot, 9, Team.ALLY, "mirror", arena=arenas.get("arena3"))


def test_unknown_team_and_strategy(resolver):
    with pytest.raises(ValueError):
        resolver.resolve({9: "ally"}, 9, "neutral", "mirror")
    with pytest.raises(ValueError):
        resolver.resolve({9: "ally"}, 9, Team.ALLY, "teleport")


# ═══════════════════════════════════════════════════════════════════════════
# TEST: EXCLUDE SELF / OWN TEAM
# ═══════════════════════════════════════════════════════════════════════════

def test_own_team_skips_caster_by_default(resolver):
    snapshot = OccupancySnapshot.of(ally=[16, 13])
    config = {"strategy": "frontmost", "target": "own"}
    assert resolver.resolve(snapshot, 16, Team.ALLY, config).tile == 13

    config["exclude_self"] = False
    assert resolver.resolve(snapshot, 16, Team.ALLY, config).tile == 16


def test_own_team_alone_has_no_target(resolver):
    snapshot = OccupancySnapshot.of(ally=[16], enemy=[30])
    result = resolver.resolve(snapshot, 16, Team.ALLY, {"strategy": "rearmost", "target": "own"})
    assert isinstance(result, NoTarget)


# ═══════════════════════════════════════════════════════════════════════════
# TEST: SKILLE Z YAML
# ═══════════════════════════════════════════════════════════════════════════

def test_pandora_targets_rearmost_ally(resolver, skills):
    """Rząd 1 = {1, 2}; rearmost ally to najmniejsze id."""
    snapshot = OccupancySnapshot.of(ally=[1, 2, 9])
    result = resolver.resolve(snapshot, 9, Team.ALLY, skills.get("pandora").scan)
    assert result.tile == 1


def test_bonnie_targets_rearmost_enemy(resolver, skills):
    """Rząd 15 = {44, 45}; rearmost enemy to największe id."""
    snapshot = OccupancySnapshot.of(ally=[9], enemy=[30, 44, 45])
    result = resolver.resolve(snapshot, 9, Team.ALLY, skills.get("bonnie").scan)
    assert result.tile == 45


def test_enemy_pandora_and_bonnie(resolver, skills):
    """Po stronie enemy: Pandora bierze największe id sojusznika, Bonnie najmniejsze wroga."""
    snapshot = OccupancySnapshot.of(ally=[1, 2, 20], enemy=[37, 44, 45])
    assert resolver.resolve(snapshot, 37, Team.ENEMY, skills.get("pandora").scan).tile == 45
    assert resolver.resolve(snapshot, 37, Team.ENEMY, skills.get("bonnie").scan).tile == 1


def test_isabella_targets_frontmost_ally(resolver, skills):
    snapshot = OccupancySnapshot.of(ally=[1, 9, 13, 16], enemy=[40])
    result = resolver.resolve(snapshot, 1, Team.ALLY, skills.get("isabella").scan)
    assert result.tile == 16


def test_ring_skills_and_summons(resolver, skills):
    """
    Caster na 23, summon sojusznika na 30 (pierścień 1), sojusznik na 37 (pierścień 2).

    cassadee / faramor widzą summony, galahad nie.
    """
    snapshot = OccupancySnapshot.of(ally=[23, 37], ally_summons=[30])

    assert resolver.resolve(snapshot, 23, Team.ALLY, skills.get("cassadee").scan).tile == 30
    assert resolver.resolve(snapshot, 23, Team.ALLY, skills.get("faramor").scan).tile == 30
    assert resolver.resolve(snapshot, 23, Team.ALLY, skills.get("galahad").scan).tile == 37


def test_faramor_only_adjacent(resolver, skills):
    snapshot = OccupancySnapshot.of(ally=[23, 37])
    assert not resolver.resolve(snapshot, 23, Team.ALLY, skills.get("faramor").scan)


def test_galahad_prefers_lower_id_in_ring(resolver, skills):
    """19 i 26 sąsiadują z 23; rearmost ally w pierścieniu bierze mniejsze id."""
    snapshot = OccupancySnapshot.of(ally=[23, 19, 26])
    result = resolver.resolve(snapshot, 23, Team.ALLY, skills.get("galahad").scan)
    assert result == Found(19, method="ring_id", ring=1, examined=(16, 19))

    result = resolver.resolve(snapshot.rotated(), 23, Team.ENEMY, skills.get("galahad").scan)
    assert result.tile == 27


def test_ravion_targets_two_rearmost_allies(resolver, skills):
    snapshot = OccupancySnapshot.of(ally=[9, 5, 1, 2], enemy=[40])
    result = resolver.resolve(snapshot, 9, Team.ALLY, skills.get("ravion").scan)
    assert result.tiles == (1, 2)


def test_ravion_skips_self(resolver, skills):
    snapshot = OccupancySnapshot.of(ally=[1, 30])
    result = resolver.resolve(snapshot, 1, Team.ALLY, skills.get("ravion").scan)
    assert result.tiles == (30,)


def test_vala_and_dunlingr_target_furthest(resolver, skills):
    """1 i 45 są równo odległe od 23; ally bierze mniejsze id, enemy większe."""
    snapshot = OccupancySnapshot.of(ally=[23, 1, 45], enemy=[16, 2, 44])
    assert resolver.resolve(snapshot, 23, Team.ALLY, skills.get("vala").scan).tile == 2
    assert resolver.resolve(snapshot, 23, Team.ALLY, skills.get("dunlingr").scan).tile == 1

    rotated = snapshot.rotated()
    assert resolver.resolve(rotated, 23, Team.ENEMY, skills.get("vala").scan).tile == 44
    assert resolver.resolve(rotated, 23, Team.ENEMY, skills.get("dunlingr").scan).tile == 45


def test_alna_targets_same_row(resolver, skills):
    snapshot = OccupancySnapshot.of(ally=[22, 23, 24, 30])
    result = resolver.resolve(snapshot, 23, Team.ALLY, skills.get("alna").scan)
    assert result.tile == 24
    assert result.method == "row_nearest"

    alone = OccupancySnapshot.of(ally=[23, 30])
    assert not resolver.resolve(alone, 23, Team.ALLY, skills.get("alna").scan)


def test_aliceth_falls_back_to_rings(resolver, skills):
    snapshot = OccupancySnapshot.of(ally=[23, 30, 16])
    result = resolver.resolve(snapshot, 23, Team.ALLY, skills.get("aliceth").scan)
    assert result.tile == 30
    assert result.method == "ring_id"

    snapshot = OccupancySnapshot.of(ally=[23, 22, 30])
    assert resolver.resolve(snapshot, 23, Team.ALLY, skills.get("aliceth").scan).tile == 22


def test_logger_records_extra_tiles(skills):
    logger = EventLogger()
    resolver = TargetResolver(logger=logger)
    snapshot = OccupancySnapshot.of(ally=[9, 5, 1, 2])

    resolver.resolve(snapshot, 9, Team.ALLY, skills.get("ravion").scan)

    found = logger.get_events_by_type(EventType.TARGET_FOUND)[0]
    assert found.target_tile == 1
    assert found.data["extra_tiles"] == [2]


def test_logger_records_ring_id_search(skills):
    logger = EventLogger()
    resolver = TargetResolver(logger=logger)
    snapshot = OccupancySnapshot.of(ally=[23, 19])

    resolver.resolve(snapshot, 23, Team.ALLY, skills.get("galahad").scan)

    types = [e.event_type for e in logger.events]
    assert types == [EventType.RESOLUTION_START, EventType.RING_SEARCH, EventType.TARGET_FOUND]
    assert logger.events[1].data == {"ring": 1}


def test_reinier_pair(resolver, skills):
    snapshot = OccupancySnapshot.of(ally=[9, 7, 6], enemy=[40, 39])
    result = resolver.resolve(snapshot, 9, Team.ALLY, skills.get("reinier").scan)
    assert (result.tile, result.paired_tile) == (7, 40)


# ═══════════════════════════════════════════════════════════════════════════
# TEST: EVENT LOGGER
# ═══════════════════════════════════════════════════════════════════════════

def test_logger_records_mirror_fallback():
    logger = EventLogger()
    resolver = TargetResolver(logger=logger)
    snapshot = OccupancySnapshot.of(ally=[9], enemy=[33])

    resolver.resolve(snapshot, 9, Team.ALLY, "mirror")

    types = [e.event_type for e in logger.events]
    assert types == [
        EventType.RESOLUTION_START,
        EventType.SYMMETRY_LOOKUP,
        EventType.RING_SEARCH,
        EventType.TARGET_FOUND,
    ]
    lookup = logger.events[1]
    assert lookup.data == {"mirror": 37, "hit": False}
    assert logger.events[-1].target_tile == 33
    assert all(e.seq == 1 for e in logger.events)


def test_logger_records_direct_hit_and_no_target():
    logger = EventLogger()
    resolver = TargetResolver(logger=logger)

    resolver.resolve(OccupancySnapshot.of(ally=[9], enemy=[37]), 9, Team.ALLY, "mirror")
    resolver.resolve(OccupancySnapshot.of(ally=[9]), 9, Team.ALLY, "rearmost")

    first = logger.get_events_for_resolution(1)
    assert [e.event_type for e in first] == [
        EventType.RESOLUTION_START,
        EventType.SYMMETRY_LOOKUP,
        EventType.TARGET_FOUND,
    ]
    assert first[1].data["hit"] is True

    second = logger.get_events_for_resolution(2)
    assert [e.event_type for e in second] == [EventType.RESOLUTION_START, EventType.NO_TARGET]
    assert logger.summary() == {"resolutions": 2, "found": 1, "no_target": 1}


def test_resolver_without_logger_logs_nothing(resolver):
    assert resolver.logger is None
    resolver.resolve({9: "ally", 37: "enemy"}, 9, Team.ALLY, "mirror")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
