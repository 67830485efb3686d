"""
Areny - które z 45 pól są dostępne dla ally, enemy, a które zablokowane.

ArenaLayout to niemutowalny opis jednej areny (cztery rozłączne zbiory
pól). ArenaRegistry wczytuje wszystkie areny z arenas.yaml raz i oddaje
je po kluczu ("arena3") albo po nazwie ("Arena III").

Pola spoza wszystkich czterech zbiorów są na danej arenie nieużywane.
Resolver używa areny tylko do walidacji snapshotu i do wykluczenia pól
zablokowanych (zwykłych i zniszczalnych) z kandydatów.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional

from .errors import IllegalPlacement
from .hex_grid import BOARD
from .occupancy import OccupancySnapshot, Team


def _tile_set(values: Optional[Iterable[int]]) -> FrozenSet[int]:
    return frozenset(BOARD.validate(tile) for tile in (values or ()))


@dataclass(frozen=True)
class ArenaLayout:
    """
    Układ areny.

    Attributes:
        key: Klucz w arenas.yaml
        id: Numer areny
        name: Nazwa wyświetlana
        available_ally: Pola, na których może stać drużyna ally
        available_enemy: Pola, na których może stać drużyna enemy
        blocked: Pola zablokowane
        blocked_breakable: Pola zablokowane, możliwe do zniszczenia

    Raises:
        InvalidTile: Pole spoza 1..45
        ValueError: Zbiory nie są rozłączne
    """
    key: str
    id: int
    name: str
    available_ally: FrozenSet[int] = frozenset()
    available_enemy: FrozenSet[int] = frozenset()
    blocked: FrozenSet[int] = frozenset()
    blocked_breakable: FrozenSet[int] = frozenset()

    def __post_init__(self):
        groups = {
            "available_ally": _tile_set(self.available_ally),
            "available_enemy": _tile_set(self.available_enemy),
            "blocked": _tile_set(self.blocked),
            "blocked_breakable": _tile_set(self.blocked_breakable),
        }
        for attr, tiles in groups.items():
            object.__setattr__(self, attr, tiles)

        names = list(groups)
        for i, first in enumerate(names):
            for second in names[i + 1:]:
                overlap = groups[first] & groups[second]
                if overlap:
                    raise ValueError(
                        f"Arena '{self.key}': {first} and {second} overlap on "
                        f"tiles {sorted(overlap)}"
                    )

    @classmethod
    def from_dict(cls, data: Dict) -> ArenaLayout:
        return cls(
            key=data["key"],
            id=int(data.get("id", 0)),
            name=data.get("name", data["key"]),
            available_ally=data.get("available_ally"),
            available_enemy=data.get("available_enemy"),
            blocked=data.get("blocked"),
            blocked_breakable=data.get("blocked_breakable"),
        )

    @property
    def impassable(self) -> FrozenSet[int]:
        """Pola, które nigdy nie są celem."""
        return self.blocked | self.blocked_breakable

    def available_for(self, team: Team) -> FrozenSet[int]:
        return self.available_ally if Team.parse(team) is Team.ALLY else self.available_enemy

    def allows(self, tile: int, team: Team) -> bool:
        return BOARD.validate(tile) in self.available_for(team)

    def validate(self, snapshot: OccupancySnapshot) -> None:
        """
        Sprawdza, czy każdy token stoi na polu dostępnym dla swojej drużyny.

        Raises:
            IllegalPlacement: Pierwszy (najmniejsze id) token na złym polu
        """
        for tile in sorted(snapshot):
            occupant = snapshot[tile]
            if tile not in self.available_for(occupant.team):
                raise IllegalPlacement(tile, occupant.team.value, self.key)

    def to_dict(self) -> Dict:
        return {
            "key": self.key,
            "id": self.id,
            "name": self.name,
            "available_ally": sorted(self.available_ally),
            "available_enemy": sorted(self.available_enemy),
            "blocked": sorted(self.blocked),
            "blocked_breakable": sorted(self.blocked_breakable),
        }


class ArenaRegistry:
    """
    Niemutowalny zbiór aren wczytany raz przy starcie.

    Example:
        >>> registry = ArenaRegistry.from_loader(ConfigLoader("data/"))
        >>> registry.get("arena3").name
        'Arena III'
        >>> registry.find("Arena III").key
        'arena3'
    """

    def __init__(self, arenas: Iterable[ArenaLayout]):
        self._arenas: Dict[str, ArenaLayout] = {}
        for arena in arenas:
            if arena.key in self._arenas:
                raise ValueError(f"Duplicate arena key: {arena.key}")
            self._arenas[arena.key] = arena

    @classmethod
    def from_loader(cls, loader) -> ArenaRegistry:
        """Buduje registry z ConfigLoader (arenas.yaml)."""
        return cls(ArenaLayout.from_dict(data) for data in loader.load_all_arenas().values())

    def get(self, key: str) -> ArenaLayout:
        """
        Raises:
            KeyError: Nieznany klucz areny
        """
        if key not in self._arenas:
            raise KeyError(f"Unknown arena: '{key}'. Available: {self.keys()}")
        return self._arenas[key]

    def find(self, key_or_name: str) -> ArenaLayout:
        """Szuka po kluczu, potem po nazwie (bez rozróżniania wielkości liter)."""
        if key_or_name in self._arenas:
            return self._arenas[key_or_name]
        wanted = key_or_name.strip().lower()
        for arena in self._arenas.values():
            if arena.name.lower() == wanted:
                return arena
        raise KeyError(f"Unknown arena: '{key_or_name}'. Available: {self.keys()}")

    def keys(self) -> List[str]:
        return list(self._arenas)

    def __iter__(self) -> Iterator[ArenaLayout]:
        return iter(self._arenas.values())

    def __len__(self) -> int:
        return len(self._arenas)

    def __contains__(self, key: str) -> bool:
        return key in self._arenas
