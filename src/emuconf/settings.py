"""Settings session: global emulator settings or one game's overrides.

A ``Settings`` object is either empty (never loaded), global (the four
global settings files), or game-specific (one game settings file plus the
game's layers in the ``LayerEngine``). Call ``load_settings()`` to pick the
mode, edit through ``get_section()``, ``save_settings()`` to persist, and
``close()`` when done so game layers are released::

    with Settings(settings_file, engine, hooks) as settings:
        settings.load_settings(game_id="GALE01", revision=2)
        settings.get_section(FILE_GFX, "Settings").set_boolean("wideScreenHack", True)
        settings.save_settings()
"""

from __future__ import annotations

import dataclasses
import logging
from typing import TYPE_CHECKING, Any

import emuconf.host
import emuconf.layers
import emuconf.sections
import emuconf.settings_file
import emuconf.store

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger("emuconf.settings")

# In-memory key of the single game settings store. Never a file name.
GAME_SETTINGS_PLACEHOLDER_FILE_NAME = ""

CONFIG_FILES = (
    emuconf.settings_file.FILE_DOLPHIN,
    emuconf.settings_file.FILE_GFX,
    emuconf.settings_file.FILE_LOGGER,
    emuconf.settings_file.FILE_WIIMOTE,
)


class SettingsStateError(RuntimeError):
    """A settings session was used in a way its current mode does not allow."""


@dataclasses.dataclass(frozen=True)
class BooleanSetting:
    file: str
    section: str
    key: str
    default: bool = False

    def get_boolean(self, settings: Settings) -> bool:
        return settings.get_section(self.file, self.section).get_boolean(
            self.key, self.default
        )

    def set_boolean(self, settings: Settings, value: bool) -> None:
        settings.get_section(self.file, self.section).set_boolean(self.key, value)


MAIN_RECURSIVE_ISO_PATHS = BooleanSetting(
    emuconf.settings_file.FILE_DOLPHIN,
    emuconf.sections.SECTION_INI_GENERAL,
    "RecursiveISOPaths",
)

# Only ever written by old releases that copied the global files wholesale
# into game settings files.
_LEGACY_GLOBAL_ONLY_KEY = "ThemeName"


@dataclasses.dataclass
class _GlobalState:
    files: dict[str, emuconf.store.IniFile]


@dataclasses.dataclass
class _GameState:
    game_id: str
    revision: int
    # None until the game settings file has been read successfully
    ini: emuconf.store.IniFile | None = None
    released: bool = False


class Settings:
    """One editing session over global settings or one game's settings."""

    def __init__(
        self,
        settings_file: emuconf.settings_file.SettingsFile,
        engine: emuconf.layers.LayerEngine,
        hooks: emuconf.host.HostHooks | None = None,
    ) -> None:
        self.settings_file = settings_file
        self.engine = engine
        self.hooks = hooks if hooks is not None else emuconf.host.HostHooks()
        self._state: _GlobalState | _GameState | None = None
        self._loaded_recursive_iso_paths_value = False

    def __enter__(self) -> Settings:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    # -- mode ---------------------------------------------------------------

    @property
    def game_id(self) -> str:
        return self._state.game_id if isinstance(self._state, _GameState) else ""

    @property
    def revision(self) -> int:
        return self._state.revision if isinstance(self._state, _GameState) else 0

    def is_game_specific(self) -> bool:
        return isinstance(self._state, _GameState) and bool(self._state.game_id)

    def get_write_layer(self) -> emuconf.layers.Layer:
        if self.is_game_specific():
            return emuconf.layers.Layer.LOCAL_GAME
        return emuconf.layers.Layer.BASE_OR_CURRENT

    def is_empty(self) -> bool:
        return self._state is None

    @property
    def ini_files(self) -> Mapping[str, emuconf.store.IniFile]:
        """Loaded stores by name; the game store sits under the placeholder key."""
        if isinstance(self._state, _GameState):
            if self._state.ini is None:
                return {}
            return {GAME_SETTINGS_PLACEHOLDER_FILE_NAME: self._state.ini}
        if isinstance(self._state, _GlobalState):
            return dict(self._state.files)
        return {}

    # -- section access -----------------------------------------------------

    def _game_specific_file(self) -> emuconf.store.IniFile:
        if not isinstance(self._state, _GameState):
            raise SettingsStateError("Settings are not game-specific")
        if self._state.ini is None:
            raise SettingsStateError(
                f"Game settings for {self._state.game_id} failed to load"
            )
        return self._state.ini

    def get_section(self, file_name: str, section_name: str) -> emuconf.store.Section:
        """Return the named section, creating it if absent.

        For game settings *file_name* is ignored and *section_name* is
        translated to the game settings spelling.
        """
        if isinstance(self._state, _GameState):
            return self._game_specific_file().get_or_create_section(
                emuconf.sections.map_section_name_from_ini(section_name)
            )
        if isinstance(self._state, _GlobalState):
            return self._state.files[file_name].get_or_create_section(section_name)
        raise SettingsStateError("Settings have not been loaded")

    # -- load ---------------------------------------------------------------

    def load_settings(self, game_id: str = "", revision: int = 0) -> None:
        """Load global settings, or the settings of *game_id* when given."""
        if game_id and self.hooks.is_emulation_active():
            # The running core holds its own copy of the game layers
            raise SettingsStateError("Attempted to load game settings while emulating")

        if isinstance(self._state, _GameState) and not self._state.released:
            self.close()

        if game_id:
            # Mode is set before the layers load so close() can always unload
            state = _GameState(game_id, revision)
            self._state = state
            self.engine.load_game_layers(game_id, revision)
            state.ini = self.settings_file.read_custom_game_settings(game_id)
        else:
            self._state = None
            files = {
                file_name: self.settings_file.read_file(file_name)
                for file_name in CONFIG_FILES
            }
            self._state = _GlobalState(files)

        self._loaded_recursive_iso_paths_value = MAIN_RECURSIVE_ISO_PATHS.get_boolean(self)
        logger.debug(
            "Loaded %s settings",
            f"game {game_id} (revision {revision})" if game_id else "global",
        )

    def load_game_settings(self, game_id: str, revision: int) -> None:
        if not game_id:
            raise ValueError("game_id must not be empty")
        self.load_settings(game_id, revision)

    def load_wiimote_profile(self, game_id: str, pad_id: int) -> bool:
        return self.settings_file.read_wiimote_profile(
            game_id, self._game_specific_file(), pad_id
        )

    # -- save ---------------------------------------------------------------

    def save_settings(self, context: Any = None) -> None:
        """Persist the loaded stores and notify the host."""
        if isinstance(self._state, _GameState):
            if self._state.released:
                raise SettingsStateError("Game settings were already closed")
            self.settings_file.save_custom_game_settings(
                self._state.game_id, self._game_specific_file()
            )
            self.engine.save(emuconf.layers.Layer.LOCAL_GAME)
            logger.info("Saved settings for %s", self._state.game_id)
            return

        if not isinstance(self._state, _GlobalState):
            raise SettingsStateError("Settings have not been loaded")

        for file_name, ini in self._state.files.items():
            self.settings_file.save_file(file_name, ini)
        self.engine.save(emuconf.layers.Layer.BASE_OR_CURRENT)
        logger.info("Saved settings to config files")

        if not self.hooks.is_emulation_active():
            # Consumers of the sectioned files only re-read them on request
            self.hooks.reload_config()
            self.hooks.reload_wiimote_config()

        self.hooks.reload_logger_config()
        self.hooks.update_adapter_scan()

        if self._loaded_recursive_iso_paths_value != MAIN_RECURSIVE_ISO_PATHS.get_boolean(self):
            logger.debug("RecursiveISOPaths changed; requesting library rescan")
            self.hooks.start_library_rescan(context)

    # -- reset --------------------------------------------------------------

    def clear_settings(self) -> None:
        """Empty every loaded store, keeping the mode and the store names."""
        if isinstance(self._state, _GameState):
            if self._state.ini is not None:
                self._state.ini = emuconf.store.IniFile()
        elif isinstance(self._state, _GlobalState):
            for file_name in self._state.files:
                self._state.files[file_name] = emuconf.store.IniFile()

    def game_ini_contains_junk(self) -> bool:
        """Detect a game settings file that is a stale copy of the global files.

        Older releases saved game settings by copying in most of the global
        files. Such a file pins global values per game, and the copied lines
        cannot be told apart from the user's own, so callers should discard
        the whole file when this returns True.

        ``Interface/ThemeName`` only ever existed in the global file. A user
        who set it by hand in a game file gets a false positive.
        """
        if not self.is_game_specific():
            return False

        return self.get_section(
            emuconf.settings_file.FILE_DOLPHIN, emuconf.sections.SECTION_INI_INTERFACE
        ).exists(_LEGACY_GLOBAL_ONLY_KEY)

    # -- close --------------------------------------------------------------

    def close(self) -> None:
        """Release the game layers; does nothing for global settings."""
        if isinstance(self._state, _GameState) and not self._state.released:
            self._state.released = True
            self.engine.unload_game_layers()
