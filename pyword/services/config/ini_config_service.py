# pyword/services/config/ini_config_service.py
from __future__ import annotations

import configparser
from pathlib import Path
from typing import Dict, Mapping, Optional

from loguru import logger
from platformdirs import user_config_dir

from pyword.domain.interfaces import IConfigService
from pyword.utils.constants import DEFAULT_PARAGRAPH_STYLE, UNTITLED_NAME

# Values every section starts from; a config file only overrides what it names.
DEFAULTS: Dict[str, Dict[str, str]] = {
    "app": {"version": "0.0.0"},
    "documents": {
        "default_style": DEFAULT_PARAGRAPH_STYLE,
        "untitled_name": UNTITLED_NAME,
    },
    "logging": {"level": "INFO", "dir": ""},
}


class IniConfigService(IConfigService):
    r"""
    INI-backed configuration reader.

    Load order (first readable file wins):
      1. Explicit path provided at construction
      2. User config dir (e.g., ~/.config/PyWordViewer/config.ini or %APPDATA%\PyWordViewer\config.ini)
      3. Project default at <repo>/config/config.ini  (optional)

    Keys missing from the chosen file fall back to DEFAULTS.
    """

    DEFAULT_APP_DIR = "PyWordViewer"
    DEFAULT_FILE = "config.ini"

    def __init__(self, explicit_path: Optional[Path] = None, project_root: Optional[Path] = None):
        self._explicit_path = explicit_path
        self._project_root = project_root
        self._parser = self._fresh_parser()
        self._loaded_from: Optional[Path] = None

        for path in self.candidate_paths():
            if not path.is_file():
                continue
            try:
                with path.open("r", encoding="utf-8") as fh:
                    self._parser.read_file(fh)
            except (OSError, configparser.Error) as e:
                logger.warning("Ignoring unreadable config {}: {}", path, e)
                self._parser = self._fresh_parser()
                continue
            self._loaded_from = path
            logger.debug("Configuration loaded from {}", path)
            break

    @staticmethod
    def _fresh_parser() -> configparser.ConfigParser:
        parser = configparser.ConfigParser(interpolation=None)
        parser.read_dict(DEFAULTS)
        return parser

    def candidate_paths(self) -> list[Path]:
        paths: list[Path] = []
        if self._explicit_path:
            paths.append(self._explicit_path)
        paths.append(Path(user_config_dir(self.DEFAULT_APP_DIR)) / self.DEFAULT_FILE)
        if self._project_root:
            paths.append(self._project_root / "config" / self.DEFAULT_FILE)
        return paths

    # ----- IConfigService -----

    def get(self, section: str, key: str, default: Optional[str] = None) -> Optional[str]:
        if section not in self._parser:
            return default
        return self._parser[section].get(key, default)

    def get_path(self, section: str, key: str) -> Optional[Path]:
        """A user-expanded path, or None when the key is missing or blank."""
        raw = (self.get(section, key) or "").strip()
        return Path(raw).expanduser() if raw else None

    def as_dict(self) -> Mapping[str, Mapping[str, str]]:
        snap: Dict[str, Dict[str, str]] = {}
        for sect in self._parser.sections():
            snap[sect] = dict(self._parser[sect])
        return snap

    def app_version(self) -> str:
        return self.get("app", "version", "0.0.0") or "0.0.0"

    @property
    def loaded_from(self) -> Optional[Path]:
        """For diagnostics; None when running on defaults."""
        return self._loaded_from
