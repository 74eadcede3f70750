"""Tests for emuconf.sections — global ↔ game section name mapping."""

from __future__ import annotations

import pytest

import emuconf.sections


class TestMapSectionName:
    @pytest.mark.parametrize(
        ("general", "game"),
        [
            ("Hardware", "Video_Hardware"),
            ("Settings", "Video_Settings"),
            ("Enhancements", "Video_Enhancements"),
            ("Stereoscopy", "Video_Stereoscopy"),
            ("Hacks", "Video_Hacks"),
            ("GameSpecific", "Video"),
        ],
    )
    def test_graphics_sections_are_prefixed(self, general: str, game: str) -> None:
        assert emuconf.sections.map_section_name_from_ini(general) == game
        assert emuconf.sections.map_section_name_to_ini(game) == general

    @pytest.mark.parametrize("name", ["Core", "Interface", "General", "Wiimote1", ""])
    def test_other_sections_pass_through(self, name: str) -> None:
        assert emuconf.sections.map_section_name_from_ini(name) == name
        assert emuconf.sections.map_section_name_to_ini(name) == name
