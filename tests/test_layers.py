"""Tests for emuconf.layers — precedence, game layers, persistence."""

from __future__ import annotations

import pathlib

import pytest

import emuconf.layers

_Layer = emuconf.layers.Layer
_LOC = emuconf.layers.ConfigLocation("GFX", "Settings", "ShowFPS")


class TestPrecedence:
    def test_base_value(self, engine) -> None:
        engine.set(_Layer.BASE, _LOC, "False")
        assert engine.get(_LOC) == "False"

    def test_default_when_unset(self, engine) -> None:
        assert engine.get(_LOC) is None
        assert engine.get(_LOC, "x") == "x"

    def test_local_game_beats_global_game_beats_base(
        self, engine, sys_dir: pathlib.Path, write_toml
    ) -> None:
        write_toml(
            sys_dir / "GameSettings" / "GALE01r0.toml",
            "[GFX.Settings]\nShowFPS = 'global-game'\n",
        )
        engine.set(_Layer.BASE, _LOC, "base")
        engine.load_game_layers("GALE01", 0)
        assert engine.get(_LOC) == "global-game"
        engine.set(_Layer.LOCAL_GAME, _LOC, "local")
        assert engine.get(_LOC) == "local"
        assert engine.get_from(_Layer.BASE, _LOC) == "base"

    def test_base_or_current_writes_base(self, engine) -> None:
        engine.set(_Layer.BASE_OR_CURRENT, _LOC, "True")
        assert engine.get_from(_Layer.BASE, _LOC) == "True"


class TestGameLayers:
    def test_revision_specific_defaults(self, engine, sys_dir, write_toml) -> None:
        write_toml(sys_dir / "GameSettings" / "GALE01.toml", "[GFX.Settings]\nShowFPS = 'any'\n")
        write_toml(sys_dir / "GameSettings" / "GALE01r2.toml", "[GFX.Settings]\nShowFPS = 'r2'\n")
        engine.load_game_layers("GALE01", 2)
        assert engine.get(_LOC) == "r2"
        engine.load_game_layers("GALE01", 1)
        assert engine.get(_LOC) == "any"

    def test_unload_drops_game_values(self, engine) -> None:
        engine.load_game_layers("GALE01", 0)
        engine.set(_Layer.LOCAL_GAME, _LOC, "local")
        engine.unload_game_layers()
        assert engine.loaded_game is None
        assert engine.get(_LOC) is None

    def test_write_without_game_loaded(self, engine) -> None:
        with pytest.raises(emuconf.layers.LayerStateError, match="not loaded"):
            engine.set(_Layer.LOCAL_GAME, _LOC, "x")
        with pytest.raises(emuconf.layers.LayerStateError):
            engine.save(_Layer.LOCAL_GAME)

    def test_save_after_unload(self, engine) -> None:
        engine.load_game_layers("GALE01", 0)
        engine.set(_Layer.LOCAL_GAME, _LOC, "local")
        engine.unload_game_layers()
        with pytest.raises(emuconf.layers.LayerStateError):
            engine.save(_Layer.LOCAL_GAME)
        assert not engine.local_game_path("GALE01").exists()

    def test_state_error_is_runtime_error(self) -> None:
        assert issubclass(emuconf.layers.LayerStateError, RuntimeError)

    def test_global_game_is_read_only(self, engine) -> None:
        engine.load_game_layers("GALE01", 0)
        with pytest.raises(ValueError):
            engine.set(_Layer.GLOBAL_GAME, _LOC, "x")

    def test_works_without_sys_dir(self, user_dir) -> None:
        engine = emuconf.layers.LayerEngine(user_dir)
        engine.load_game_layers("GALE01", 0)
        assert engine.loaded_game == ("GALE01", 0)


class TestSave:
    def test_base_round_trip(self, engine, user_dir) -> None:
        engine.set(_Layer.BASE, _LOC, "True")
        engine.save(_Layer.BASE_OR_CURRENT)
        assert emuconf.layers.LayerEngine(user_dir).get(_LOC) == "True"

    def test_local_game_round_trip(self, engine, user_dir) -> None:
        engine.load_game_layers("GALE01", 0)
        engine.set(_Layer.LOCAL_GAME, _LOC, "True")
        engine.save(_Layer.LOCAL_GAME)
        assert (user_dir / "GameSettings" / "GALE01.layer.toml").exists()

        other = emuconf.layers.LayerEngine(user_dir)
        assert other.get(_LOC) is None
        other.load_game_layers("GALE01", 0)
        assert other.get(_LOC) == "True"

    def test_delete(self, engine) -> None:
        engine.set(_Layer.BASE, _LOC, "True")
        assert engine.delete(_Layer.BASE, _LOC) is True
        assert engine.delete(_Layer.BASE, _LOC) is False
