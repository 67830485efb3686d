"""
Testy dla CLI (main.py) - kody wyjścia i wypisywany wynik.
"""

import json

import pytest
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from main import main


FIXTURE_DIR = Path(__file__).parent / "fixtures"


# ═══════════════════════════════════════════════════════════════════════════
# TEST: POJEDYNCZE ROZSTRZYGNIĘCIE
# ═══════════════════════════════════════════════════════════════════════════

def test_skill_resolution(capsys):
    assert main(["--skill", "pandora", "--caster", "9", "--allies", "1", "2"]) == 0
    out = capsys.readouterr().out
    assert "CEL: tile 1" in out


def test_caster_listed_among_allies(capsys):
    """Caster podany też w --allies nie jest dodawany drugi raz."""
    assert main(["--skill", "pandora", "--caster", "9", "--allies", "1", "9"]) == 0
    assert "CEL: tile 1" in capsys.readouterr().out


def test_scan_with_enemy_caster(capsys):
    code = main(["--scan", "frontmost", "--team", "enemy", "--caster", "40",
                 "--allies", "9", "12"])
    assert code == 0
    assert "CEL: tile 12" in capsys.readouterr().out


def test_two_targets_and_board(capsys):
    code = main(["--skill", "ravion", "--caster", "9", "--allies", "1", "2", "5", "--show"])
    assert code == 0
    out = capsys.readouterr().out
    assert "kolejne cele: [2]" in out
    assert "C" in out


def test_no_target(capsys):
    assert main(["--caster", "9"]) == 0
    assert "BRAK CELU" in capsys.readouterr().out


def test_trace_is_saved(tmp_path, capsys):
    target = tmp_path / "trace.json"
    code = main(["--caster", "9", "--enemies", "37", "--trace", str(target)])
    assert code == 0

    with open(target, 'r', encoding='utf-8') as f:
        saved = json.load(f)
    assert saved["summary"]["found"] == 1


# ═══════════════════════════════════════════════════════════════════════════
# TEST: ZŁE DANE -> KOD 2
# ═══════════════════════════════════════════════════════════════════════════

@pytest.mark.parametrize("argv,message", [
    (["--caster", "9", "--allies", "9", "--enemies", "9"], "occupied twice"),
    (["--caster", "9", "--enemies", "30", "30"], "occupied twice"),
    (["--caster", "9", "--team", "neutral"], "neutral"),
    (["--scan", "teleport", "--caster", "9"], "Unknown strategy"),
    (["--caster", "46"], "46"),
    (["--skill", "merlin", "--caster", "9"], "Unknown skill"),
    (["--caster", "9", "--arena", "arena99"], "arena99"),
    (["--caster", "9", "--arena", "arena3", "--enemies", "1"], "arena3"),
    ([], "--caster"),
])
def test_bad_input_exits_with_2(argv, message, capsys):
    assert main(argv) == 2
    out = capsys.readouterr().out
    assert "❌" in out
    assert message in out


# ═══════════════════════════════════════════════════════════════════════════
# TEST: FIXTURE'Y
# ═══════════════════════════════════════════════════════════════════════════

def test_fixture_directory_passes(capsys):
    assert main(["--fixtures", str(FIXTURE_DIR)]) == 0
    out = capsys.readouterr().out
    assert "❌" not in out


def test_fixtures_with_wrong_scan_fail(capsys):
    assert main(["--fixtures", str(FIXTURE_DIR), "--scan", "rearmost"]) == 1


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
