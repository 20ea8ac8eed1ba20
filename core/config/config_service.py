"""Typed, layered configuration loader with precedence handling."""
from __future__ import annotations

import os
import configparser
from dataclasses import dataclass, fields
from pathlib import Path
from threading import RLock
from typing import Any, Dict, Optional, Tuple

# --------------------------------------------------------------------------- #
#  Paths & default definitions
# --------------------------------------------------------------------------- #

def _find_project_root() -> Path:
    here = Path(__file__).resolve()
    for parent in here.parents:
        if (parent / "core").is_dir():
            return parent
    return here.parent

PROJECT_ROOT = _find_project_root()
CONFIG_DIR = PROJECT_ROOT / "core" / "config"
DEFAULTS_INI = CONFIG_DIR / "defaults.ini"
MACHINE_INI = CONFIG_DIR / "config.ini"

ENV_PREFIX = "DOCSEAL_"


_DEFAULTS: Dict[str, Dict[str, Any]] = {
    "Database": {
        "documents": (PROJECT_ROOT / "databases" / "documents.db").as_posix(),
        "logging": (PROJECT_ROOT / "databases" / "logs.db").as_posix(),
    },
    "General": {
        "app_name": "DocSeal",
        "version": "1.0.0",
    },
    "Signing": {
        "debug_outline": "false",
        "outline_color": "#FF0000",
        "outline_width": "1.0",
        "outline_opacity": "0.8",
    },
}


# --------------------------------------------------------------------------- #
#  Datamodels
# --------------------------------------------------------------------------- #

@dataclass
class DatabaseConfig:
    documents: Path
    logging: Path


@dataclass
class GeneralConfig:
    app_name: str = "DocSeal"
    version: str = ""


@dataclass
class SigningConfig:
    debug_outline: bool = False
    outline_color: str = "#FF0000"
    outline_width: float = 1.0
    outline_opacity: float = 0.8


# --------------------------------------------------------------------------- #
#  Helpers
# --------------------------------------------------------------------------- #

def _cp_to_dict(cp: configparser.ConfigParser) -> Dict[str, Dict[str, Any]]:
    data: Dict[str, Dict[str, Any]] = {}
    for section in cp.sections():
        data[section] = {k: v for k, v in cp.items(section)}
    return data


def _read_ini(path: Path) -> Dict[str, Dict[str, Any]]:
    cp = configparser.ConfigParser()
    cp.read(path, encoding="utf-8")
    return _cp_to_dict(cp)


def _apply(target: Dict[str, Dict[str, Any]], source: Dict[str, Dict[str, Any]],
           layer: str, origin: str,
           sources: Dict[Tuple[str, str], Dict[str, str]]) -> None:
    for section, items in source.items():
        sec = target.setdefault(section, {})
        for key, value in items.items():
            sec[key] = value
            sources[(section, key)] = {"layer": layer, "source": origin}


# Dataclass annotations are strings under ``from __future__ import annotations``.
_TYPES: Dict[str, type] = {"Path": Path, "bool": bool, "int": int, "float": float, "str": str}


def _cast(value: Any, typ: Any) -> Any:
    if isinstance(typ, str):
        typ = _TYPES.get(typ, str)
    if typ is Path:
        return Path(str(value)).expanduser()
    if typ is bool:
        if isinstance(value, bool):
            return value
        return str(value).strip().lower() in {"1", "true", "yes", "on"}
    if typ is int:
        return int(value)
    if typ is float:
        return float(value)
    return typ(value)


def _build_dataclass(cls: type, data: Dict[str, Any]) -> Any:
    kwargs = {}
    for field in fields(cls):
        val = data.get(field.name, field.default)
        kwargs[field.name] = _cast(val, field.type)
    return cls(**kwargs)


def _env_overlays(environ: Optional[Dict[str, str]] = None) -> Dict[str, Dict[str, Any]]:
    result: Dict[str, Dict[str, Any]] = {}
    for env_key, value in (os.environ if environ is None else environ).items():
        if not env_key.startswith(ENV_PREFIX):
            continue
        remainder = env_key[len(ENV_PREFIX):]
        parts = remainder.split("__", 1)
        if len(parts) != 2:
            continue
        section, key = parts
        section = section.title()
        key = key.lower()
        result.setdefault(section, {})[key] = value
    return result


def _user_config_path() -> Path:
    if os.name == "nt":
        appdata = os.environ.get("APPDATA") or (Path.home() / "AppData" / "Roaming")
        return Path(appdata) / "DocSeal" / "config.ini"
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")) / "docseal" / "config.ini"


# --------------------------------------------------------------------------- #
#  ConfigService
# --------------------------------------------------------------------------- #


class ConfigService:
    """Facade merging layered configuration with type safety.

    ``environ`` and ``ini_paths`` exist so tests can build an isolated
    instance; by default the process environment and the standard INI
    locations are used.
    """

    def __init__(self, *, environ: Optional[Dict[str, str]] = None,
                 ini_paths: Optional[Tuple[Path, ...]] = None) -> None:
        self._lock = RLock()
        self._environ = environ
        self._ini_paths = ini_paths
        self.reload()

    # ------------------------------------------------------------------ #
    def _ini_layers(self) -> Tuple[Tuple[str, Path], ...]:
        if self._ini_paths is not None:
            return tuple((f"ini[{i}]", p) for i, p in enumerate(self._ini_paths))
        return (
            ("defaults.ini", DEFAULTS_INI),
            ("machine", MACHINE_INI),
            ("user", _user_config_path()),
        )

    def reload(self) -> None:
        with self._lock:
            merged: Dict[str, Dict[str, Any]] = {}
            sources: Dict[Tuple[str, str], Dict[str, str]] = {}

            # Layer 0: embedded defaults
            _apply(merged, _DEFAULTS, "code", "embedded", sources)

            layers = self._ini_layers()

            # Layer 1: defaults.ini (first file)
            head, rest = layers[:1], layers[1:]
            for layer, path in head:
                if path.exists():
                    _apply(merged, _read_ini(path), layer, str(path), sources)

            # Layer 2: environment variables
            _apply(merged, _env_overlays(self._environ), "env", "os.environ", sources)

            # Layer 3+: machine config, user overrides
            for layer, path in rest:
                if path.exists():
                    _apply(merged, _read_ini(path), layer, str(path), sources)

            self._merged = merged
            self._sources = sources

            self.database = _build_dataclass(DatabaseConfig, merged.get("Database", {}))
            self.general = _build_dataclass(GeneralConfig, merged.get("General", {}))
            self.signing = _build_dataclass(SigningConfig, merged.get("Signing", {}))

    # ------------------------------------------------------------------ #
    def get(self, section: str, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._merged.get(section, {}).get(key, default)

    def source_of(self, section: str, key: str) -> Optional[Dict[str, str]]:
        """Return ``{"layer": ..., "source": ...}`` for the winning value."""
        with self._lock:
            return self._sources.get((section, key))


config_service: ConfigService = ConfigService()
