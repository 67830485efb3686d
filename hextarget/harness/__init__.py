"""
Harness module - fixture'y markdown dla testów targetingu.

Zawiera:
- parse_fixture / load_fixture / load_fixtures: Parser plików .md
- FixtureFile / FixtureCase: Sparsowane dane
- ParseError: Błąd formatu fixture'a
"""

from .fixtures import (
    FixtureCase,
    FixtureFile,
    ParseError,
    load_fixture,
    load_fixtures,
    parse_fixture,
)

__all__ = [
    "FixtureCase", "FixtureFile", "ParseError",
    "load_fixture", "load_fixtures", "parse_fixture",
]
