"""Precedence-ordered configuration layers.

Settings that have moved off the sectioned files live here. Each layer maps
``ConfigLocation`` to a string value and ``get()`` returns the value from the
highest-precedence layer that has one:

    BASE < GLOBAL_GAME < LOCAL_GAME

GLOBAL_GAME holds the shipped per-revision defaults for the loaded game and
is never written. LOCAL_GAME holds the user's overrides for that game.
BASE_OR_CURRENT is a write selector, not a storage tier; it resolves to
BASE.

Files:
    <user_dir>/Config/Layers/Base.toml
    <user_dir>/GameSettings/<game_id>.layer.toml
    <sys_dir>/GameSettings/<game_id>r<revision>.toml  (or <game_id>.toml)
"""

from __future__ import annotations

import enum
import logging
import pathlib
import tomllib
from typing import NamedTuple

import tomli_w

logger = logging.getLogger("emuconf.layers")


class LayerStateError(RuntimeError):
    """A game layer was written or saved while no game is loaded."""


class Layer(enum.Enum):
    BASE_OR_CURRENT = "base-or-current"
    BASE = "base"
    GLOBAL_GAME = "global-game"
    LOCAL_GAME = "local-scoped"


_PRECEDENCE = (Layer.LOCAL_GAME, Layer.GLOBAL_GAME, Layer.BASE)


class ConfigLocation(NamedTuple):
    system: str
    section: str
    key: str


def _resolve(layer: Layer) -> Layer:
    return Layer.BASE if layer is Layer.BASE_OR_CURRENT else layer


def _read_layer(path: pathlib.Path) -> dict[ConfigLocation, str]:
    if not path.exists():
        return {}
    with path.open("rb") as f:
        data = tomllib.load(f)
    values: dict[ConfigLocation, str] = {}
    for system, sections in data.items():
        if not isinstance(sections, dict):
            continue
        for section, keys in sections.items():
            if not isinstance(keys, dict):
                continue
            for key, value in keys.items():
                values[ConfigLocation(system, section, key)] = str(value)
    return values


def _write_layer(path: pathlib.Path, values: dict[ConfigLocation, str]) -> None:
    data: dict[str, dict[str, dict[str, str]]] = {}
    for loc, value in sorted(values.items()):
        data.setdefault(loc.system, {}).setdefault(loc.section, {})[loc.key] = value
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(tomli_w.dumps(data).encode())


class LayerEngine:
    """File-backed layer store shared by every settings session."""

    def __init__(
        self,
        user_dir: str | pathlib.Path,
        sys_dir: str | pathlib.Path | None = None,
    ) -> None:
        self.user_dir = pathlib.Path(user_dir).expanduser()
        self.sys_dir = pathlib.Path(sys_dir).expanduser() if sys_dir else None
        self._layers: dict[Layer, dict[ConfigLocation, str]] = {
            Layer.BASE: _read_layer(self.base_path()),
        }
        self._game: tuple[str, int] | None = None

    # -- paths --------------------------------------------------------------

    def base_path(self) -> pathlib.Path:
        return self.user_dir / "Config" / "Layers" / "Base.toml"

    def local_game_path(self, game_id: str) -> pathlib.Path:
        return self.user_dir / "GameSettings" / f"{game_id}.layer.toml"

    def global_game_path(self, game_id: str, revision: int) -> pathlib.Path | None:
        if self.sys_dir is None:
            return None
        game_dir = self.sys_dir / "GameSettings"
        revised = game_dir / f"{game_id}r{revision}.toml"
        return revised if revised.exists() else game_dir / f"{game_id}.toml"

    # -- game layers --------------------------------------------------------

    @property
    def loaded_game(self) -> tuple[str, int] | None:
        """``(game_id, revision)`` of the loaded game layers, if any."""
        return self._game

    def load_game_layers(self, game_id: str, revision: int) -> None:
        """Load GLOBAL_GAME and LOCAL_GAME for *game_id*, replacing any others."""
        global_path = self.global_game_path(game_id, revision)
        global_values = _read_layer(global_path) if global_path is not None else {}
        local_values = _read_layer(self.local_game_path(game_id))

        self._layers[Layer.GLOBAL_GAME] = global_values
        self._layers[Layer.LOCAL_GAME] = local_values
        self._game = (game_id, revision)
        logger.debug("Loaded game layers for %s (revision %d)", game_id, revision)

    def unload_game_layers(self) -> None:
        self._layers.pop(Layer.GLOBAL_GAME, None)
        self._layers.pop(Layer.LOCAL_GAME, None)
        if self._game is not None:
            logger.debug("Unloaded game layers for %s", self._game[0])
        self._game = None

    # -- values -------------------------------------------------------------

    def _writable(self, layer: Layer) -> dict[ConfigLocation, str]:
        layer = _resolve(layer)
        if layer is Layer.GLOBAL_GAME:
            raise ValueError("The global game layer is read-only")
        if layer not in self._layers:
            raise LayerStateError(f"Layer {layer.value} is not loaded")
        return self._layers[layer]

    def get(
        self, location: ConfigLocation, default: str | None = None
    ) -> str | None:
        for layer in _PRECEDENCE:
            values = self._layers.get(layer)
            if values is not None and location in values:
                return values[location]
        return default

    def get_from(self, layer: Layer, location: ConfigLocation) -> str | None:
        return self._layers.get(_resolve(layer), {}).get(location)

    def set(self, layer: Layer, location: ConfigLocation, value: str) -> None:
        self._writable(layer)[location] = value

    def delete(self, layer: Layer, location: ConfigLocation) -> bool:
        return self._writable(layer).pop(location, None) is not None

    def save(self, layer: Layer) -> None:
        """Persist *layer* to its file."""
        values = self._writable(layer)
        if _resolve(layer) is Layer.BASE:
            path = self.base_path()
        else:
            if self._game is None:
                raise LayerStateError("No game is loaded")
            path = self.local_game_path(self._game[0])
        _write_layer(path, values)
        logger.debug("Saved %s layer to %s", _resolve(layer).value, path)
