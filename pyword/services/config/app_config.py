from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from pyword.domain.interfaces import IConfigService
from pyword.services.config.ini_config_service import IniConfigService
from pyword.utils.constants import DEFAULT_PARAGRAPH_STYLE, UNTITLED_NAME

_VERSION_RE = re.compile(r"^v?(\d+\.\d+\.\d+)(?:[-+].*)?$", re.IGNORECASE)
_LOG_LEVELS = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}


def _project_root_fallback() -> Path:
    # app_config.py -> pyword/services/config/app_config.py
    return Path(__file__).resolve().parents[3]


@dataclass(frozen=True)
class AppConfig:
    """
    Typed view over the INI configuration.

    [documents] default_style, untitled_name
    [logging]   level, dir
    [app]       version
    """

    ini: IConfigService

    @property
    def default_style(self) -> str:
        return (self.ini.get("documents", "default_style") or "").strip() or DEFAULT_PARAGRAPH_STYLE

    @property
    def untitled_name(self) -> str:
        return (self.ini.get("documents", "untitled_name") or "").strip() or UNTITLED_NAME

    @property
    def log_level(self) -> str:
        level = (self.ini.get("logging", "level") or "").strip().upper()
        return level if level in _LOG_LEVELS else "INFO"

    @property
    def log_dir(self) -> Path | None:
        return self.ini.get_path("logging", "dir")

    @property
    def loaded_from(self) -> Path | None:
        return self.ini.loaded_from

    def get_version(self) -> str:
        v = (self.ini.app_version() or "").strip()
        if not v:
            return "0.0.0"
        m = _VERSION_RE.match(v)
        return m.group(1) if m else v

    def as_dict(self) -> Mapping[str, Mapping[str, str]]:
        return self.ini.as_dict()


def build_app_config(
    *, explicit_ini: Path | None = None, project_root: Path | None = None
) -> AppConfig:
    root = project_root or _project_root_fallback()
    return AppConfig(ini=IniConfigService(explicit_path=explicit_ini, project_root=root))
