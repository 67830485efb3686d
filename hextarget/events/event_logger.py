"""
System logowania rozstrzygnięć targetingu do formatu JSON.

Każde wywołanie TargetResolver.resolve() z podpiętym loggerem zostawia
ślad: kto castował, jaką strategią, które pola sprawdzono i co wybrano.
Log służy do debugowania konfiguracji skilli i do porównywania wyników
z fixture'ami.

TYPY ZDARZEŃ:
═══════════════════════════════════════════════════════════════════

    RESOLUTION_START
    ─────────────────────────────────────────────────────────────
    Początek rozstrzygnięcia.
    Data: caster_team, strategy (ScanConfig.to_dict), arena, occupancy

    SYMMETRY_LOOKUP
    ─────────────────────────────────────────────────────────────
    Sprawdzenie pola lustrzanego (symmetrical_mirror).
    Data: mirror, hit

    RING_SEARCH
    ─────────────────────────────────────────────────────────────
    Cel znaleziony przez przeszukiwanie pierścieni.
    Data: ring

    TARGET_FOUND
    ─────────────────────────────────────────────────────────────
    Wybrany cel.
    Data: method, paired_tile, examined

    NO_TARGET
    ─────────────────────────────────────────────────────────────
    Wszyscy kandydaci wyczerpani.
    Data: examined

FORMAT LOGU:
═══════════════════════════════════════════════════════════════════

{
    "metadata": {
        "version": "1.0",
        "grid": {"tiles": 45, "rows": 15},
        "timestamp": "2024-01-01T12:00:00"
    },
    "events": [
        {"seq": 1, "type": "RESOLUTION_START", "caster_tile": 9, "data": {...}},
        {"seq": 1, "type": "SYMMETRY_LOOKUP", "caster_tile": 9, "data": {"mirror": 37, "hit": false}},
        {"seq": 1, "type": "TARGET_FOUND", "caster_tile": 9, "target_tile": 33, "data": {...}}
    ],
    "summary": {"resolutions": 1, "found": 1, "no_target": 0}
}
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, List, Optional
from datetime import datetime
import json
from pathlib import Path


class EventType(Enum):
    """Typ zdarzenia w rozstrzyganiu celu."""
    RESOLUTION_START = auto()
    SYMMETRY_LOOKUP = auto()
    RING_SEARCH = auto()
    TARGET_FOUND = auto()
    NO_TARGET = auto()


@dataclass
class TraceEvent:
    """
    Pojedyncze zdarzenie.

    Attributes:
        seq (int): Numer rozstrzygnięcia (wszystkie zdarzenia jednego
            wywołania resolve() mają ten sam seq)
        event_type (EventType): Typ zdarzenia
        caster_tile (Optional[int]): Pole castera
        target_tile (Optional[int]): Pole celu (jeśli dotyczy)
        data (Dict): Dane specyficzne dla typu
    """
    seq: int
    event_type: EventType
    caster_tile: Optional[int] = None
    target_tile: Optional[int] = None
    data: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Serializuje zdarzenie do słownika."""
        result = {
            "seq": self.seq,
            "type": self.event_type.name,
        }

        if self.caster_tile is not None:
            result["caster_tile"] = self.caster_tile
        if self.target_tile is not None:
            result["target_tile"] = self.target_tile
        if self.data:
            result["data"] = self.data

        return result


class EventLogger:
    """
    Logger rozstrzygnięć.

    Example:
        >>> logger = EventLogger()
        >>> resolver = TargetResolver(logger=logger)
        >>> resolver.resolve(snapshot, 9, Team.ALLY, config)
        >>> logger.save("output/trace.json")
    """

    def __init__(self, tile_count: int = 45, row_count: int = 15):
        self.events: List[TraceEvent] = []
        self.metadata: Dict[str, Any] = {
            "version": "1.0",
            "grid": {"tiles": tile_count, "rows": row_count},
            "timestamp": datetime.now().isoformat(),
        }
        self.seq = 0

    # ─────────────────────────────────────────────────────────────────────────
    # LOGOWANIE OGÓLNE
    # ─────────────────────────────────────────────────────────────────────────

    def log(self, event: TraceEvent) -> None:
        self.events.append(event)

    def log_event(
        self,
        event_type: EventType,
        caster_tile: Optional[int] = None,
        target_tile: Optional[int] = None,
        **data: Any,
    ) -> TraceEvent:
        """
        Tworzy i loguje zdarzenie w bieżącym rozstrzygnięciu.

        Returns:
            TraceEvent: Utworzone zdarzenie
        """
        event = TraceEvent(
            seq=self.seq,
            event_type=event_type,
            caster_tile=caster_tile,
            target_tile=target_tile,
            data=dict(data),
        )
        self.log(event)
        return event

    # ─────────────────────────────────────────────────────────────────────────
    # POMOCNICZE METODY LOGOWANIA
    # ─────────────────────────────────────────────────────────────────────────

    def log_resolution_start(
        self,
        caster_tile: int,
        caster_team: str,
        strategy: Dict[str, Any],
        occupancy: Dict[int, str],
        arena: Optional[str] = None,
    ) -> None:
        """Otwiera nowe rozstrzygnięcie (kolejny seq)."""
        self.seq += 1
        self.log_event(
            EventType.RESOLUTION_START,
            caster_tile=caster_tile,
            caster_team=caster_team,
            strategy=strategy,
            arena=arena,
            occupancy={str(tile): value for tile, value in sorted(occupancy.items())},
        )

    def log_symmetry_lookup(self, caster_tile: int, mirror: int, hit: bool) -> None:
        self.log_event(
            EventType.SYMMETRY_LOOKUP,
            caster_tile=caster_tile,
            mirror=mirror,
            hit=hit,
        )

    def log_ring_search(self, caster_tile: int, target_tile: int, ring: int) -> None:
        self.log_event(
            EventType.RING_SEARCH,
            caster_tile=caster_tile,
            target_tile=target_tile,
            ring=ring,
        )

    def log_target_found(
        self,
        caster_tile: int,
        target_tile: int,
        method: str,
        examined: List[int],
        paired_tile: Optional[int] = None,
        extra_tiles: Optional[List[int]] = None,
    ) -> None:
        """Loguje wybrany cel (extra_tiles tylko gdy skan zebrał kilka celów)."""
        data: Dict[str, Any] = {"method": method, "paired_tile": paired_tile, "examined": list(examined)}
        if extra_tiles:
            data["extra_tiles"] = list(extra_tiles)
        self.log_event(
            EventType.TARGET_FOUND,
            caster_tile=caster_tile,
            target_tile=target_tile,
            **data,
        )

    def log_no_target(self, caster_tile: int, examined: List[int]) -> None:
        """Loguje brak celu."""
        self.log_event(
            EventType.NO_TARGET,
            caster_tile=caster_tile,
            examined=list(examined),
        )

    # ─────────────────────────────────────────────────────────────────────────
    # SERIALIZACJA
    # ─────────────────────────────────────────────────────────────────────────

    def summary(self) -> Dict[str, int]:
        return {
            "resolutions": self.seq,
            "found": len(self.get_events_by_type(EventType.TARGET_FOUND)),
            "no_target": len(self.get_events_by_type(EventType.NO_TARGET)),
        }

    def to_dict(self) -> Dict[str, Any]:
        """
        Serializuje cały log do słownika.

        Returns:
            Dict: Pełny log w formacie dla JSON
        """
        return {
            "metadata": self.metadata,
            "events": [e.to_dict() for e in self.events],
            "summary": self.summary(),
        }

    def save(self, filepath: str) -> None:
        """
        Zapisuje log do pliku JSON.

        Args:
            filepath: Ścieżka do pliku
        """
        path = Path(filepath)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w', encoding='utf-8') as f:
            json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    # ─────────────────────────────────────────────────────────────────────────
    # STATYSTYKI
    # ─────────────────────────────────────────────────────────────────────────

    def get_event_count(self) -> int:
        return len(self.events)

    def get_events_by_type(self, event_type: EventType) -> List[TraceEvent]:
        return [e for e in self.events if e.event_type == event_type]

    def get_events_for_resolution(self, seq: int) -> List[TraceEvent]:
        return [e for e in self.events if e.seq == seq]

    def clear(self) -> None:
        self.events.clear()
        self.seq = 0
