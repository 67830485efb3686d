"""
Loader konfiguracji z automatycznym uzupełnianiem wartości domyślnych.

Pliki YAML w folderze data/:
- defaults.yaml: wartości bazowe (scan_defaults, arena_defaults)
- arenas.yaml: układy aren (pola ally / enemy / blocked / breakable)
- skills.yaml: konfiguracja targetingu skilli

Logika merge (jak w całym projekcie):
    1. Wczytaj defaults.yaml
    2. Wczytaj konkretną definicję (np. skill "nara")
    3. Brakujące klucze uzupełnij z defaults, definicja nadpisuje defaults

Przykład:
    defaults.yaml:
        scan_defaults:
            target: opposing
            include_summons: false

    skills.yaml:
        skills:
            pandora:
                scan:
                    strategy: rearmost
                    target: own       # nadpisuje default
                    # include_summons -> false z defaults

Użycie:
    >>> loader = ConfigLoader("data/")
    >>> loader.load_skill("pandora")["scan"]["include_summons"]
    False
"""

from __future__ import annotations
from pathlib import Path
from typing import Dict, Any, List, Optional
import yaml
import copy


class ConfigLoader:
    """
    Ładuje konfigurację z plików YAML z automatycznym merge defaults.

    Attributes:
        data_path (Path): Ścieżka do folderu data/
    """

    def __init__(self, data_path: str = "data/"):
        self.data_path = Path(data_path)
        self._defaults: Optional[Dict] = None
        self._arenas: Optional[Dict] = None
        self._skills: Optional[Dict] = None

    # ─────────────────────────────────────────────────────────────────────────
    # WCZYTYWANIE PLIKÓW
    # ─────────────────────────────────────────────────────────────────────────

    def _load_yaml(self, filename: str) -> Dict:
        """
        Wczytuje plik YAML.

        Raises:
            FileNotFoundError: Jeśli plik nie istnieje
        """
        filepath = self.data_path / filename
        with open(filepath, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f) or {}

    def get_defaults(self) -> Dict:
        """Zawartość defaults.yaml (cache'owana)."""
        if self._defaults is None:
            self._defaults = self._load_yaml("defaults.yaml")
        return self._defaults

    def get_scan_defaults(self) -> Dict:
        return self.get_defaults().get("scan_defaults", {})

    def get_arena_defaults(self) -> Dict:
        return self.get_defaults().get("arena_defaults", {})

    # ─────────────────────────────────────────────────────────────────────────
    # ARENY
    # ─────────────────────────────────────────────────────────────────────────

    def _get_all_arenas_raw(self) -> Dict:
        if self._arenas is None:
            data = self._load_yaml("arenas.yaml")
            self._arenas = data.get("arenas", {})
        return self._arenas

    def load_arena(self, arena_key: str) -> Dict:
        """
        Wczytuje układ areny z uzupełnionymi defaults.

        Raises:
            KeyError: Jeśli arena nie istnieje
        """
        arenas = self._get_all_arenas_raw()

        if arena_key not in arenas:
            raise KeyError(f"Arena '{arena_key}' not found in arenas.yaml")

        result = self._deep_merge(self.get_arena_defaults(), arenas[arena_key])
        result["key"] = arena_key
        return result

    def load_all_arenas(self) -> Dict[str, Dict]:
        return {key: self.load_arena(key) for key in self._get_all_arenas_raw()}

    def get_arena_keys(self) -> List[str]:
        return list(self._get_all_arenas_raw().keys())

    # ─────────────────────────────────────────────────────────────────────────
    # SKILLE
    # ─────────────────────────────────────────────────────────────────────────

    def _get_all_skills_raw(self) -> Dict:
        if self._skills is None:
            data = self._load_yaml("skills.yaml")
            self._skills = data.get("skills", {})
        return self._skills

    def load_skill(self, skill_id: str) -> Dict:
        """
        Wczytuje definicję skilla; blok `scan` dostaje scan_defaults.

        Skrócony zapis `scan: "mirror"` jest rozwijany do
        `scan: {strategy: "mirror"}` przed merge.

        Raises:
            KeyError: Jeśli skill nie istnieje
        """
        skills = self._get_all_skills_raw()

        if skill_id not in skills:
            raise KeyError(f"Skill '{skill_id}' not found in skills.yaml")

        skill_data = copy.deepcopy(skills[skill_id])
        if isinstance(skill_data.get("scan"), str):
            skill_data["scan"] = {"strategy": skill_data["scan"]}

        result = self._deep_merge({"scan": self.get_scan_defaults()}, skill_data)
        result["id"] = skill_id
        return result

    def load_all_skills(self) -> Dict[str, Dict]:
        return {sid: self.load_skill(sid) for sid in self._get_all_skills_raw()}

    def get_skill_ids(self) -> List[str]:
        return list(self._get_all_skills_raw().keys())

    # ─────────────────────────────────────────────────────────────────────────
    # HELPERY
    # ─────────────────────────────────────────────────────────────────────────

    @staticmethod
    def _deep_merge(base: Dict, override: Dict) -> Dict:
        """
        Głęboko łączy dwa słowniki; override wygrywa, nested dicts rekurencyjnie.
        """
        result = copy.deepcopy(base)

        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = ConfigLoader._deep_merge(result[key], value)
            else:
                result[key] = copy.deepcopy(value)

        return result

    def reload(self) -> None:
        """Czyści cache i wymusza ponowne wczytanie plików."""
        self._defaults = None
        self._arenas = None
        self._skills = None
