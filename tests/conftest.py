"""Shared test fixtures for emuconf tests."""

from __future__ import annotations

import pathlib
from unittest.mock import MagicMock

import pytest

import emuconf.config
import emuconf.host
import emuconf.layers
import emuconf.settings
import emuconf.settings_file


@pytest.fixture(autouse=True)
def _isolate_global_config(tmp_path: pathlib.Path, monkeypatch: pytest.MonkeyPatch):
    """Keep tests away from ~/.config/emuconf/config.toml."""
    global_toml = tmp_path / "global_config" / "config.toml"
    monkeypatch.setattr(emuconf.config, "_global_path", lambda: global_toml)


@pytest.fixture
def user_dir(tmp_path: pathlib.Path) -> pathlib.Path:
    path = tmp_path / "user"
    path.mkdir()
    return path


@pytest.fixture
def sys_dir(tmp_path: pathlib.Path) -> pathlib.Path:
    path = tmp_path / "sys"
    (path / "GameSettings").mkdir(parents=True)
    return path


@pytest.fixture
def settings_file(user_dir: pathlib.Path) -> emuconf.settings_file.SettingsFile:
    return emuconf.settings_file.SettingsFile(user_dir)


@pytest.fixture
def engine(user_dir: pathlib.Path, sys_dir: pathlib.Path) -> emuconf.layers.LayerEngine:
    return emuconf.layers.LayerEngine(user_dir, sys_dir)


@pytest.fixture
def hooks() -> emuconf.host.HostHooks:
    """HostHooks whose callbacks are all mocks; emulation is not running."""
    return emuconf.host.HostHooks(
        is_emulation_active=MagicMock(return_value=False),
        reload_config=MagicMock(),
        reload_wiimote_config=MagicMock(),
        reload_logger_config=MagicMock(),
        update_adapter_scan=MagicMock(),
        start_library_rescan=MagicMock(),
    )


@pytest.fixture
def make_settings(settings_file, engine, hooks):
    """Factory for Settings sessions sharing the same files, engine and hooks."""

    def _create() -> emuconf.settings.Settings:
        return emuconf.settings.Settings(settings_file, engine, hooks)

    return _create


@pytest.fixture
def write_toml():
    """Write raw TOML text to a path, creating parent directories."""

    def _write(path: pathlib.Path, text: str) -> pathlib.Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text)
        return path

    return _write
