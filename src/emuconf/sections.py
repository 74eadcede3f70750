"""Section names shared by the global settings files and game settings files.

Game settings files keep the graphics sections under a ``Video_`` prefix so
they do not collide with the core sections living in the same file.
"""

from __future__ import annotations

SECTION_INI_GENERAL = "General"
SECTION_INI_CORE = "Core"
SECTION_INI_INTERFACE = "Interface"

SECTION_LOGGER_LOGS = "Logs"
SECTION_LOGGER_OPTIONS = "Options"

SECTION_GFX_HARDWARE = "Hardware"
SECTION_GFX_SETTINGS = "Settings"
SECTION_GFX_ENHANCEMENTS = "Enhancements"
SECTION_GFX_HACKS = "Hacks"
SECTION_STEREOSCOPY = "Stereoscopy"
SECTION_GAME_SPECIFIC = "GameSpecific"

SECTION_PROFILE = "Profile"
SECTION_WIIMOTE = "Wiimote"

_SECTIONS_MAP: dict[str, str] = {
    SECTION_GFX_HARDWARE: "Video_Hardware",
    SECTION_GFX_SETTINGS: "Video_Settings",
    SECTION_GFX_ENHANCEMENTS: "Video_Enhancements",
    SECTION_STEREOSCOPY: "Video_Stereoscopy",
    SECTION_GFX_HACKS: "Video_Hacks",
    SECTION_GAME_SPECIFIC: "Video",
}

_REVERSE_SECTIONS_MAP: dict[str, str] = {v: k for k, v in _SECTIONS_MAP.items()}


def map_section_name_from_ini(general_section_name: str) -> str:
    """Translate a global section name to its game settings spelling."""
    return _SECTIONS_MAP.get(general_section_name, general_section_name)


def map_section_name_to_ini(game_section_name: str) -> str:
    """Translate a game settings section name back to the global spelling."""
    return _REVERSE_SECTIONS_MAP.get(game_section_name, game_section_name)
