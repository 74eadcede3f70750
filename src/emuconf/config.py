"""Tool configuration read from layered TOML files.

This is the configuration of emuconf itself (where the emulator user
directory lives, how chatty logging is), not the emulator settings that
``emuconf.settings`` edits.

Dataclasses decorated with ``@configurable`` are registered by section
name; ``load()`` merges code defaults → global TOML → local TOML.

Config files:
    ~/.config/emuconf/config.toml   global (user-wide)
    .emuconf/config.toml            local  (per working directory)
"""

from __future__ import annotations

import dataclasses
import pathlib
import tomllib
from typing import Any, TypeVar

T = TypeVar("T")

_REGISTRY: dict[str, type] = {}


# ---------------------------------------------------------------------------
# Decorator
# ---------------------------------------------------------------------------

def configurable(section: str):
    """Class decorator — register a dataclass as a configurable section."""

    def decorator(cls: type[T]) -> type[T]:
        _REGISTRY[section] = cls
        return cls

    return decorator


@configurable("paths")
@dataclasses.dataclass
class PathsConfig:
    # Emulator user directory holding Config/ and GameSettings/
    user_dir: str = "~/.local/share/dolphin-emu"
    # Read-only system directory with per-revision game defaults
    sys_dir: str = ""


@configurable("logging")
@dataclasses.dataclass
class LoggingConfig:
    level: str = "WARNING"


# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------

def _global_path() -> pathlib.Path:
    return pathlib.Path.home() / ".config" / "emuconf" / "config.toml"


def _local_path(root: pathlib.Path) -> pathlib.Path:
    return root / ".emuconf" / "config.toml"


def _find_root(root: pathlib.Path | None = None) -> pathlib.Path:
    return root if root is not None else pathlib.Path.cwd()


# ---------------------------------------------------------------------------
# TOML I/O
# ---------------------------------------------------------------------------

def _load_toml(path: pathlib.Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        return tomllib.loads(path.read_text())
    except (OSError, tomllib.TOMLDecodeError):
        return {}


def _section_class(section: str) -> type:
    cls = _REGISTRY.get(section)
    if cls is None:
        raise KeyError(f"Unknown config section: {section}")
    return cls


# ---------------------------------------------------------------------------
# Core API
# ---------------------------------------------------------------------------

def load(section: str, root: pathlib.Path | None = None) -> Any:
    """Load a config section, merging defaults → global → local."""
    cls = _section_class(section)
    root = _find_root(root)

    global_data = _load_toml(_global_path()).get(section, {})
    local_data = _load_toml(_local_path(root)).get(section, {})
    merged = {**global_data, **local_data}

    valid_fields = {f.name for f in dataclasses.fields(cls)}
    return cls(**{k: v for k, v in merged.items() if k in valid_fields})


def get_effective(
    section: str,
    key: str,
    root: pathlib.Path | None = None,
) -> Any:
    """Get the effective value for a single config key."""
    return getattr(load(section, root), key)
