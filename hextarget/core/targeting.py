"""
Strategie skanowania - deterministyczny wybór pola-celu dla skilla.

Każda strategia dostaje TargetView (zajętość + filtr kandydatów),
pole i drużynę castera oraz drużynę docelową, a zwraca Found albo
NoTarget. Brak celu to normalny wynik, nie wyjątek.

UŻYCIE:
═══════════════════════════════════════════════════════════════════

    # Z kodu
    config = ScanConfig(SymmetricalMirrorScan())
    result = TargetResolver().resolve(snapshot, 9, Team.ALLY, config)

    # Z YAML (skills.yaml)
    scan: "symmetrical_mirror"                # prosty string
    scan:                                     # rozszerzony format
      strategy: "rearmost"
      target: "own"
      exclude_self: true

STRATEGIE:
═══════════════════════════════════════════════════════════════════

    rear_front_row      - pierwszy rząd od końca planszy (rearmost/frontmost)
    ring_expansion      - najbliższy cel, pierścień po pierścieniu
    ring_id_order       - jak ring_expansion, ale w pierścieniu wg id
    symmetrical_mirror  - pole lustrzane, potem pierścienie wokół lustra
    adjacent_pair       - sojusznik obok castera, którego lustro to wróg
    distance            - najbliższy / najdalszy cel (remis: id wg drużyny)
    same_row            - najbliższy cel w tym samym rzędzie co caster

    Aliasy: rearmost, frontmost, row, ring, ring_id, mirror, pair,
            closest, furthest, row_nearest

PARAMETRY:
═══════════════════════════════════════════════════════════════════

    extreme (str): rear_front_row / ring_id_order - "rearmost" / "frontmost"
    count (int): rear_front_row - ile celów zebrać (domyślnie 1)
    max_distance (int): ring/ring_id/mirror - limit pierścieni (None = cała plansza)
    prefer (str): distance - "closest" / "furthest"
    ring_fallback (bool): same_row - gdy rząd pusty, ring_id_order (frontmost)
    origin_inclusive (bool): ring - czy pole startowe jest kandydatem
    target (str): "opposing" / "own" - drużyna względem castera
    include_summons (bool): czy summony/klony mogą być celem
    exclude_self (bool): czy caster może wybrać sam siebie
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, asdict
from enum import Enum
from functools import partial
from typing import Any, Callable, ClassVar, Dict, List, Optional, Tuple, Union

from .occupancy import Team, TargetView
from .perspective import (
    Extreme,
    neighbor_priority,
    ring_walk_order,
    row_order,
    row_scan_order,
    rows_from,
)


# ═══════════════════════════════════════════════════════════════════════════
# WYNIKI
# ═══════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Found:
    """
    Znaleziony cel.

    Attributes:
        tile: Wybrane pole
        paired_tile: Drugie pole pary (tylko adjacent_pair: sym(tile))
        method: Która ścieżka znalazła cel ("row", "ring", "ring_id",
            "mirror", "mirror_ring", "pair", "distance", "row_nearest")
        ring: Odległość celu od punktu startu (ring/mirror/distance),
            None dla skanu rzędów i par
        examined: Pola sprawdzone po kolei (debug)
        extra_tiles: Kolejne cele, gdy strategia zbiera ich kilka (count > 1)
    """
    tile: int
    paired_tile: Optional[int] = None
    method: str = ""
    ring: Optional[int] = None
    examined: Tuple[int, ...] = ()
    extra_tiles: Tuple[int, ...] = ()

    @property
    def tiles(self) -> Tuple[int, ...]:
        return (self.tile,) + self.extra_tiles

    def __bool__(self) -> bool:
        return True


@dataclass(frozen=True)
class NoTarget:
    """Wszyscy kandydaci wyczerpani bez trafienia."""
    examined: Tuple[int, ...] = ()

    def __bool__(self) -> bool:
        return False


TargetResult = Union[Found, NoTarget]


class DistancePreference(Enum):
    """Który koniec skali odległości wygrywa w skanie distance."""
    CLOSEST = "closest"
    FURTHEST = "furthest"

    @classmethod
    def parse(cls, value: Union[str, DistancePreference]) -> DistancePreference:
        if isinstance(value, DistancePreference):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown distance preference: {value!r} (expected 'closest' or 'furthest')")


# ═══════════════════════════════════════════════════════════════════════════
# ALGORYTMY
# ═══════════════════════════════════════════════════════════════════════════

def rear_front_row_scan(
    view: TargetView,
    side: Team,
    extreme: Extreme,
    target_team: Team,
    count: int = 1,
) -> TargetResult:
    """
    Skan rzędami od extreme_row(side, extreme) do przeciwnego końca.

    W rzędzie pola idą wg row_scan_order(side, extreme). Pierwszy
    kwalifikujący się token drużyny target_team wygrywa; przy count > 1
    skan zbiera do `count` trafień (kolejne trafienia w extra_tiles).
    """
    key = row_scan_order(side, extreme)
    order = [
        tile
        for row in rows_from(side, extreme)
        for tile in sorted(view.grid.row_tiles(row), key=key)
        if not view.is_blocked(tile)
    ]

    examined: List[int] = []
    hits: List[int] = []
    for tile in order:
        examined.append(tile)
        if view.holds(tile, target_team):
            hits.append(tile)
            if len(hits) == count:
                break

    if not hits:
        return NoTarget(tuple(examined))
    return Found(
        hits[0],
        method="row",
        examined=tuple(examined),
        extra_tiles=tuple(hits[1:]),
    )


def ring_expansion_scan(
    view: TargetView,
    origin: int,
    target_team: Team,
    side: Team,
    origin_inclusive: bool = False,
    max_distance: Optional[int] = None,
) -> TargetResult:
    """
    Najbliższy cel: pierścienie 1, 2, ... wokół origin.

    Pierścień 0 (samo origin) jest kandydatem tylko przy
    origin_inclusive=True. W pierścieniu kolejność to obchód
    ring_walk_order(side); remisów nie rozstrzyga wielkość id.
    Pola zablokowane są pomijane całkowicie.
    """
    grid = view.grid
    grid.validate(origin)
    start, clockwise = ring_walk_order(side)

    limit = grid.max_distance_from(origin)
    if max_distance is not None:
        limit = min(limit, max_distance)

    examined: List[int] = []
    for radius in range(0 if origin_inclusive else 1, limit + 1):
        for tile in grid.ring(origin, radius, start, clockwise):
            if view.is_blocked(tile):
                continue
            examined.append(tile)
            if view.holds(tile, target_team):
                return Found(tile, method="ring", ring=radius, examined=tuple(examined))

    return NoTarget(tuple(examined))


def ring_id_order_scan(
    view: TargetView,
    origin: int,
    target_team: Team,
    side: Team,
    extreme: Extreme = Extreme.FRONTMOST,
    max_distance: Optional[int] = None,
) -> TargetResult:
    """
    Pierścienie 1, 2, ... wokół origin, w pierścieniu pola wg id.

    Rearmost: ally rosnąco, enemy malejąco. Frontmost odwrotnie.
    Pole origin nigdy nie jest kandydatem.
    """
    grid = view.grid
    grid.validate(origin)
    ascending = (side is Team.ALLY) == (Extreme.parse(extreme) is Extreme.REARMOST)

    limit = grid.max_distance_from(origin)
    if max_distance is not None:
        limit = min(limit, max_distance)

    examined: List[int] = []
    for radius in range(1, limit + 1):
        for tile in sorted(grid.ring(origin, radius), reverse=not ascending):
            if view.is_blocked(tile):
                continue
            examined.append(tile)
            if view.holds(tile, target_team):
                return Found(tile, method="ring_id", ring=radius, examined=tuple(examined))

    return NoTarget(tuple(examined))


def distance_scan(
    view: TargetView,
    origin: int,
    target_team: Team,
    side: Team,
    prefer: Union[str, DistancePreference] = "closest",
) -> TargetResult:
    """
    Najbliższy albo najdalszy kwalifikujący się token drużyny target_team.

    Remis rozstrzyga id: ally bierze mniejsze, enemy większe.
    `examined` to wszyscy kandydaci w tej kolejności.
    """
    grid = view.grid
    grid.validate(origin)
    prefer = DistancePreference.parse(prefer)

    ordered = grid.tiles if side is Team.ALLY else tuple(reversed(grid.tiles))
    candidates = [tile for tile in ordered if view.holds(tile, target_team)]
    if not candidates:
        return NoTarget()

    sign = 1 if prefer is DistancePreference.CLOSEST else -1
    # min() zwraca pierwszy z remisujących, więc kolejność `ordered` jest tie-breakiem
    best = min(candidates, key=lambda tile: sign * grid.distance(origin, tile))
    return Found(
        best,
        method="distance",
        ring=grid.distance(origin, best),
        examined=tuple(candidates),
    )


def same_row_scan(
    view: TargetView,
    origin: int,
    target_team: Team,
    side: Team,
) -> TargetResult:
    """
    Najbliższy token drużyny target_team w tym samym rzędzie co origin.

    Remis: ally bierze większe id, enemy mniejsze (kolejność row_order).
    """
    grid = view.grid
    row = grid.row(origin)

    examined: List[int] = []
    best: Optional[int] = None
    for tile in sorted(grid.row_tiles(row), key=row_order(side)):
        if tile == origin or view.is_blocked(tile):
            continue
        examined.append(tile)
        if not view.holds(tile, target_team):
            continue
        if best is None or grid.distance(origin, tile) < grid.distance(origin, best):
            best = tile

    if best is None:
        return NoTarget(tuple(examined))
    return Found(
        best,
        method="row_nearest",
        ring=grid.distance(origin, best),
        examined=tuple(examined),
    )


def symmetrical_mirror_scan(
    view: TargetView,
    origin: int,
    target_team: Team,
    side: Team,
    max_distance: Optional[int] = None,
) -> TargetResult:
    """
    Pole lustrzane sym(origin); gdy puste - ring_expansion_scan wokół lustra.

    Pierścienie są liczone od pola lustrzanego, nie od castera.
    """
    mirror = view.grid.sym(origin)
    examined: List[int] = []

    if not view.is_blocked(mirror):
        examined.append(mirror)
        if view.holds(mirror, target_team):
            return Found(mirror, method="mirror", ring=0, examined=tuple(examined))

    fallback = ring_expansion_scan(
        view, mirror, target_team, side, max_distance=max_distance
    )
    examined.extend(fallback.examined)

    if isinstance(fallback, Found):
        return Found(
            fallback.tile,
            method="mirror_ring",
            ring=fallback.ring,
            examined=tuple(examined),
        )
    return NoTarget(tuple(examined))


def adjacent_pair_scan(
    view: TargetView,
    caster_tile: int,
    side: Team,
) -> TargetResult:
    """
    Sąsiad-sojusznik castera, którego pole lustrzane zajmuje wróg.

    Kierunki idą wg neighbor_priority(side); pierwszy kierunek
    spełniający oba warunki daje parę (n, sym(n)).
    """
    grid = view.grid
    grid.validate(caster_tile)
    examined: List[int] = []

    for direction in neighbor_priority(side):
        tile = grid.neighbor(caster_tile, direction)
        if tile is None:
            continue
        examined.append(tile)
        if not view.holds(tile, side):
            continue
        mirror = grid.sym(tile)
        if view.holds(mirror, side.opposing):
            return Found(tile, paired_tile=mirror, method="pair", examined=tuple(examined))

    return NoTarget(tuple(examined))


# ═══════════════════════════════════════════════════════════════════════════
# WARIANTY KONFIGURACJI
# ═══════════════════════════════════════════════════════════════════════════

def _as_count(value: Any, field_name: str, minimum: int) -> int:
    """Parametr liczbowy z YAML/JSON -> int >= minimum."""
    if isinstance(value, bool) or isinstance(value, float) and not value.is_integer():
        raise ValueError(f"{field_name} must be an integer, got {value!r}")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{field_name} must be an integer, got {value!r}")
    if number < minimum:
        raise ValueError(f"{field_name} must be >= {minimum}, got {number}")
    return number


def _as_limit(value: Any) -> Optional[int]:
    if value is None:
        return None
    return _as_count(value, "max_distance", 0)


@dataclass(frozen=True)
class ScanStrategy(ABC):
    """Bazowa klasa wariantów strategii (konfiguracja skilla)."""

    name: ClassVar[str] = ""

    @abstractmethod
    def scan(
        self,
        view: TargetView,
        caster_tile: int,
        caster_team: Team,
        target_team: Team,
    ) -> TargetResult:
        """
        Uruchamia strategię.

        Args:
            view: Przefiltrowana zajętość planszy
            caster_tile: Pole castera
            caster_team: Drużyna castera
            target_team: Drużyna, której tokeny są kandydatami

        Returns:
            Found albo NoTarget
        """

    def to_dict(self) -> Dict[str, Any]:
        data = {"strategy": self.name}
        for key, value in asdict(self).items():
            data[key] = value.value if isinstance(value, Enum) else value
        return data


@dataclass(frozen=True)
class RearFrontRowScan(ScanStrategy):
    """Rearmost/frontmost wg perspektywy drużyny docelowej."""

    name: ClassVar[str] = "rear_front_row"
    extreme: Extreme = Extreme.REARMOST
    count: int = 1

    def __post_init__(self):
        object.__setattr__(self, "extreme", Extreme.parse(self.extreme))
        object.__setattr__(self, "count", _as_count(self.count, "count", 1))

    def scan(self, view, caster_tile, caster_team, target_team) -> TargetResult:
        return rear_front_row_scan(
            view, target_team, self.extreme, target_team, count=self.count
        )


@dataclass(frozen=True)
class RingExpansionScan(ScanStrategy):
    """Najbliższy cel wokół castera."""

    name: ClassVar[str] = "ring_expansion"
    origin_inclusive: bool = False
    max_distance: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(self, "max_distance", _as_limit(self.max_distance))

    def scan(self, view, caster_tile, caster_team, target_team) -> TargetResult:
        return ring_expansion_scan(
            view,
            caster_tile,
            target_team,
            caster_team,
            origin_inclusive=self.origin_inclusive,
            max_distance=self.max_distance,
        )


@dataclass(frozen=True)
class SymmetricalMirrorScan(ScanStrategy):
    """Pole lustrzane castera z fallbackiem pierścieniowym."""

    name: ClassVar[str] = "symmetrical_mirror"
    max_distance: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(self, "max_distance", _as_limit(self.max_distance))

    def scan(self, view, caster_tile, caster_team, target_team) -> TargetResult:
        return symmetrical_mirror_scan(
            view, caster_tile, target_team, caster_team, max_distance=self.max_distance
        )


@dataclass(frozen=True)
class AdjacentPairScan(ScanStrategy):
    """Para sojusznik-obok-castera / wróg-na-jego-lustrze."""

    name: ClassVar[str] = "adjacent_pair"

    def scan(self, view, caster_tile, caster_team, target_team) -> TargetResult:
        return adjacent_pair_scan(view, caster_tile, caster_team)


@dataclass(frozen=True)
class RingIdOrderScan(ScanStrategy):
    """Pierścienie wokół castera, w pierścieniu kolejność id wg drużyny castera."""

    name: ClassVar[str] = "ring_id_order"
    extreme: Extreme = Extreme.FRONTMOST
    max_distance: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(self, "extreme", Extreme.parse(self.extreme))
        object.__setattr__(self, "max_distance", _as_limit(self.max_distance))

    def scan(self, view, caster_tile, caster_team, target_team) -> TargetResult:
        return ring_id_order_scan(
            view,
            caster_tile,
            target_team,
            caster_team,
            extreme=self.extreme,
            max_distance=self.max_distance,
        )


@dataclass(frozen=True)
class DistanceScan(ScanStrategy):
    """Najbliższy / najdalszy cel od castera."""

    name: ClassVar[str] = "distance"
    prefer: DistancePreference = DistancePreference.CLOSEST

    def __post_init__(self):
        object.__setattr__(self, "prefer", DistancePreference.parse(self.prefer))

    def scan(self, view, caster_tile, caster_team, target_team) -> TargetResult:
        return distance_scan(view, caster_tile, target_team, caster_team, prefer=self.prefer)


@dataclass(frozen=True)
class SameRowScan(ScanStrategy):
    """
    Najbliższy cel w rzędzie castera.

    Z ring_fallback=True pusty rząd przechodzi w ring_id_order (frontmost);
    examined zawiera wtedy pola obu etapów.
    """

    name: ClassVar[str] = "same_row"
    ring_fallback: bool = False

    def scan(self, view, caster_tile, caster_team, target_team) -> TargetResult:
        result = same_row_scan(view, caster_tile, target_team, caster_team)
        if result or not self.ring_fallback:
            return result

        fallback = ring_id_order_scan(view, caster_tile, target_team, caster_team)
        examined = result.examined + fallback.examined
        if isinstance(fallback, Found):
            return Found(
                fallback.tile,
                method=fallback.method,
                ring=fallback.ring,
                examined=examined,
            )
        return NoTarget(examined)


# ═══════════════════════════════════════════════════════════════════════════
# SCAN CONFIG
# ═══════════════════════════════════════════════════════════════════════════

class TargetRelation(Enum):
    """Drużyna docelowa względem castera."""
    OPPOSING = "opposing"
    OWN = "own"

    @classmethod
    def parse(cls, value: Union[str, TargetRelation]) -> TargetRelation:
        if isinstance(value, TargetRelation):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown target relation: {value!r} (expected 'opposing' or 'own')")

    def team_for(self, caster_team: Team) -> Team:
        return caster_team if self is TargetRelation.OWN else caster_team.opposing


@dataclass(frozen=True)
class ScanConfig:
    """
    Niemutowalna konfiguracja targetingu jednego skilla.

    Attributes:
        strategy: Wariant strategii
        target: Drużyna docelowa względem castera
        include_summons: Czy summony/klony są widoczne
        exclude_self: Czy pole castera jest wyłączone z kandydatów
    """
    strategy: ScanStrategy
    target: TargetRelation = TargetRelation.OPPOSING
    include_summons: bool = False
    exclude_self: bool = True

    def __post_init__(self):
        object.__setattr__(self, "target", TargetRelation.parse(self.target))

    def target_team(self, caster_team: Team) -> Team:
        return self.target.team_for(caster_team)

    def to_dict(self) -> Dict[str, Any]:
        data = self.strategy.to_dict()
        data.update(
            target=self.target.value,
            include_summons=self.include_summons,
            exclude_self=self.exclude_self,
        )
        return data


# ═══════════════════════════════════════════════════════════════════════════
# REGISTRY
# ═══════════════════════════════════════════════════════════════════════════

STRATEGY_REGISTRY: Dict[str, Callable[..., ScanStrategy]] = {
    "rear_front_row": RearFrontRowScan,
    "row": RearFrontRowScan,
    "rearmost": partial(RearFrontRowScan, extreme=Extreme.REARMOST),
    "frontmost": partial(RearFrontRowScan, extreme=Extreme.FRONTMOST),
    "ring_expansion": RingExpansionScan,
    "ring": RingExpansionScan,
    "ring_id_order": RingIdOrderScan,
    "ring_id": RingIdOrderScan,
    "symmetrical_mirror": SymmetricalMirrorScan,
    "mirror": SymmetricalMirrorScan,
    "adjacent_pair": AdjacentPairScan,
    "pair": AdjacentPairScan,
    "distance": DistanceScan,
    "closest": partial(DistanceScan, prefer=DistancePreference.CLOSEST),
    "furthest": partial(DistanceScan, prefer=DistancePreference.FURTHEST),
    "same_row": SameRowScan,
    "row_nearest": SameRowScan,
}

_CONFIG_KEYS = ("strategy", "target", "include_summons", "exclude_self")


def get_strategy(strategy_type: str, **kwargs: Any) -> ScanStrategy:
    """
    Tworzy strategię na podstawie nazwy.

    Raises:
        ValueError: Nieznana nazwa, nieznany parametr albo zła wartość parametru

    Example:
        >>> get_strategy("frontmost")
        RearFrontRowScan(extreme=<Extreme.FRONTMOST: 'frontmost'>, count=1)
        >>> get_strategy("ring", max_distance=1)
        RingExpansionScan(origin_inclusive=False, max_distance=1)
    """
    factory = STRATEGY_REGISTRY.get(str(strategy_type).lower())

    if factory is None:
        raise ValueError(f"Unknown strategy type: {strategy_type}. "
                         f"Available: {list(STRATEGY_REGISTRY.keys())}")

    try:
        return factory(**kwargs)
    except TypeError as exc:
        raise ValueError(f"Invalid parameters for strategy '{strategy_type}': {exc}") from exc


def parse_scan_config(config: Any) -> ScanConfig:
    """
    Parsuje blok `scan` z YAML do ScanConfig.

    Obsługuje dwa formaty:
    1. String: "symmetrical_mirror"
    2. Dict: {strategy: "frontmost", target: "own", exclude_self: true}

    Raises:
        ValueError: Brak/nieznana strategia albo zły typ konfiguracji
    """
    if isinstance(config, ScanConfig):
        return config

    if isinstance(config, str):
        return ScanConfig(get_strategy(config))

    if isinstance(config, dict):
        if "strategy" not in config:
            raise ValueError(f"Scan config is missing 'strategy': {config}")

        params = {k: v for k, v in config.items() if k not in _CONFIG_KEYS}
        return ScanConfig(
            strategy=get_strategy(config["strategy"], **params),
            target=config.get("target", TargetRelation.OPPOSING),
            include_summons=bool(config.get("include_summons", False)),
            exclude_self=bool(config.get("exclude_self", True)),
        )

    raise ValueError(f"Unsupported scan config: {config!r}")
