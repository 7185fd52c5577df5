from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path

from pylenient.domain.interfaces import IConfigService
from pylenient.services.config.ini_config_service import IniConfigService
from pylenient.utils.constants import (
    DEFAULT_JSON_INDENT,
    LANGUAGE_JS,
    LANGUAGE_JSON,
    LENIENT_JS_SCOPE,
    LENIENT_JSON_SCOPE,
)

SECTION = "lenient"


def _project_root_fallback() -> Path:
    """
    Best-effort project root resolution that also works in PyInstaller:
      - PyInstaller onefile/onedir uses sys._MEIPASS as bundle root
      - dev mode uses this file location to walk upward
    """
    meipass = getattr(sys, "_MEIPASS", None)  # type: ignore[attr-defined]
    if meipass:
        return Path(meipass)

    # lenient_config.py -> pylenient/services/config/lenient_config.py
    return Path(__file__).resolve().parents[3]


@dataclass(frozen=True)
class LenientConfig:
    """
    Settings of the lenient transcoding plugin ([lenient] section).

      js_scope / json_scope  grammar scopes that switch a document to lenient
      json_indent            indent of JSON written in either dialect
      reload_on_switch       re-read unmodified files after a handle swap
    """

    js_scope: str = LENIENT_JS_SCOPE
    json_scope: str = LENIENT_JSON_SCOPE
    json_indent: int = DEFAULT_JSON_INDENT
    reload_on_switch: bool = True

    @classmethod
    def from_service(cls, cfg: IConfigService) -> LenientConfig:
        return cls(
            js_scope=(cfg.get(SECTION, "js_scope", None) or LENIENT_JS_SCOPE).strip(),
            json_scope=(cfg.get(SECTION, "json_scope", None) or LENIENT_JSON_SCOPE).strip(),
            json_indent=max(1, cfg.get_int(SECTION, "json_indent", DEFAULT_JSON_INDENT) or DEFAULT_JSON_INDENT),
            reload_on_switch=bool(cfg.get_bool(SECTION, "reload_on_switch", True)),
        )

    def scope_languages(self) -> dict[str, str]:
        return {self.js_scope: LANGUAGE_JS, self.json_scope: LANGUAGE_JSON}


def build_lenient_config(
    *, explicit_ini: Path | None = None, project_root: Path | None = None
) -> LenientConfig:
    root = project_root or _project_root_fallback()
    return LenientConfig.from_service(IniConfigService(explicit_path=explicit_ini, project_root=root))
