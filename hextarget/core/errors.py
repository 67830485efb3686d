"""
Wyjątki silnika targetingu.

InvalidTile i IllegalPlacement dziedziczą po ValueError, więc kod który
łapie ValueError (np. parsowanie konfiguracji) obsługuje je bez zmian.
Brak celu NIE jest wyjątkiem - to wynik NoTarget (patrz targeting.py).
"""

from __future__ import annotations
from typing import Any


class InvalidTile(ValueError):
    """Id hexa spoza zakresu 1..45 (albo nie-całkowite)."""

    def __init__(self, tile: Any, message: str = ""):
        self.tile = tile
        super().__init__(message or f"Invalid tile id: {tile!r} (expected 1..45)")


class IllegalPlacement(ValueError):
    """Token stoi na hexie, którego arena nie udostępnia jego drużynie."""

    def __init__(self, tile: int, team: Any, arena: str):
        self.tile = tile
        self.team = team
        self.arena = arena
        super().__init__(
            f"Tile {tile} is not available to team '{team}' in arena '{arena}'"
        )
