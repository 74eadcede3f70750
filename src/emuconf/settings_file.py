"""Read and write ``IniFile`` stores as TOML files under the user directory.

Layout:
    <user_dir>/Config/<name>.toml                     global settings files
    <user_dir>/GameSettings/<game_id>.toml            per-game overrides
    <user_dir>/Config/Profiles/Wiimote/<name>.toml    controller profiles

A missing file reads as an empty store. Malformed TOML and OS errors
propagate to the caller.
"""

from __future__ import annotations

import logging
import pathlib
import tomllib

import tomli_w

import emuconf.sections
import emuconf.store

logger = logging.getLogger("emuconf.settings_file")

FILE_DOLPHIN = "Dolphin"
FILE_GFX = "GFX"
FILE_LOGGER = "Logger"
FILE_WIIMOTE = "WiimoteNew"

_EXTENSION = ".toml"


class SettingsFile:
    """File-backed store collaborator rooted at an emulator user directory."""

    def __init__(self, user_dir: str | pathlib.Path) -> None:
        self.user_dir = pathlib.Path(user_dir).expanduser()

    # -- paths --------------------------------------------------------------

    def settings_path(self, name: str) -> pathlib.Path:
        return self.user_dir / "Config" / f"{name}{_EXTENSION}"

    def custom_game_settings_path(self, game_id: str) -> pathlib.Path:
        return self.user_dir / "GameSettings" / f"{game_id}{_EXTENSION}"

    def wiimote_profile_path(self, profile: str) -> pathlib.Path:
        return self.user_dir / "Config" / "Profiles" / "Wiimote" / f"{profile}{_EXTENSION}"

    # -- TOML I/O -----------------------------------------------------------

    def _read(self, path: pathlib.Path) -> emuconf.store.IniFile:
        if not path.exists():
            logger.debug("Settings file not found: %s", path)
            return emuconf.store.IniFile()
        with path.open("rb") as f:
            data = tomllib.load(f)
        return emuconf.store.IniFile.from_dict(data)

    def _write(self, path: pathlib.Path, ini: emuconf.store.IniFile) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(tomli_w.dumps(ini.to_dict()).encode())
        logger.debug("Wrote %s", path)

    # -- collaborator API ---------------------------------------------------

    def read_file(self, name: str) -> emuconf.store.IniFile:
        return self._read(self.settings_path(name))

    def save_file(self, name: str, ini: emuconf.store.IniFile) -> None:
        self._write(self.settings_path(name), ini)

    def read_custom_game_settings(self, game_id: str) -> emuconf.store.IniFile:
        return self._read(self.custom_game_settings_path(game_id))

    def save_custom_game_settings(
        self, game_id: str, ini: emuconf.store.IniFile
    ) -> None:
        self._write(self.custom_game_settings_path(game_id), ini)

    def read_wiimote_profile(
        self, game_id: str, ini: emuconf.store.IniFile, pad_id: int
    ) -> bool:
        """Copy profile ``<game_id>_Wii<pad_id>`` into ``Wiimote<pad_id + 1>``.

        Returns False (leaving *ini* untouched) when the profile does not
        exist.
        """
        profile_path = self.wiimote_profile_path(f"{game_id}_Wii{pad_id}")
        if not profile_path.exists():
            logger.debug("No Wiimote profile at %s", profile_path)
            return False

        profile = self._read(profile_path).get_section(emuconf.sections.SECTION_PROFILE)
        target = ini.get_or_create_section(f"{emuconf.sections.SECTION_WIIMOTE}{pad_id + 1}")
        if profile is not None:
            for key, value in profile.items():
                target.set_string(key, value)
        return True
