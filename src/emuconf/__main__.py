"""emuconf CLI — inspect and edit emulator settings files.

Usage:
    emuconf [--game ID [--revision N]] show
    emuconf [--game ID] get <file> <section> <key>
    emuconf [--game ID] set <file> <section> <key> <value>
    emuconf [--game ID] unset <file> <section> <key>
    emuconf [--game ID] clear         Wipe every loaded file and save
    emuconf --game ID check-junk      Exit 2 if the game file is a stale global copy

Global options:
    --user-dir D    Emulator user directory (default: [paths] user_dir)
    --sys-dir D     System directory with shipped game defaults
    --config-root D Directory holding .emuconf/config.toml (default: cwd)
"""

from __future__ import annotations

import argparse
import logging
import pathlib
import sys

import emuconf.config
import emuconf.host
import emuconf.layers
import emuconf.settings
import emuconf.settings_file

logger = logging.getLogger("emuconf")


def _configure_logging(root: pathlib.Path) -> None:
    level = emuconf.config.get_effective("logging", "level", root)
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )


def _open_settings(args: argparse.Namespace) -> emuconf.settings.Settings:
    paths = emuconf.config.load("paths", args.config_root)
    user_dir = args.user_dir or paths.user_dir
    sys_dir = args.sys_dir or paths.sys_dir or None
    hooks = emuconf.host.HostHooks(
        start_library_rescan=emuconf.host.run_detached(
            lambda context: logger.info("Game library rescan requested"),
            "library-rescan",
        ),
    )
    settings = emuconf.settings.Settings(
        emuconf.settings_file.SettingsFile(user_dir),
        emuconf.layers.LayerEngine(user_dir, sys_dir),
        hooks,
    )
    return settings


def _cmd_show(settings: emuconf.settings.Settings) -> int:
    for file_name, ini in sorted(settings.ini_files.items()):
        label = file_name or settings.game_id
        for section in ini:
            if not len(section):
                continue
            print(f"[{label}/{section.name}]")
            for key, value in section.items():
                print(f"  {key} = {value}")
            print()
    return 0


def _cmd_get(settings: emuconf.settings.Settings, args: argparse.Namespace) -> int:
    try:
        section = settings.get_section(args.file, args.section)
    except KeyError:
        print(f"Unknown settings file: {args.file}", file=sys.stderr)
        return 1
    if not section.exists(args.key):
        print(f"{args.section}/{args.key} is not set", file=sys.stderr)
        return 1
    print(section.get_string(args.key))
    return 0


def _cmd_set(settings: emuconf.settings.Settings, args: argparse.Namespace) -> int:
    try:
        section = settings.get_section(args.file, args.section)
    except KeyError:
        print(f"Unknown settings file: {args.file}", file=sys.stderr)
        return 1
    section.set_string(args.key, args.value)
    settings.save_settings()
    print(f"Set {args.section}/{args.key} = {args.value}")
    return 0


def _cmd_unset(settings: emuconf.settings.Settings, args: argparse.Namespace) -> int:
    try:
        section = settings.get_section(args.file, args.section)
    except KeyError:
        print(f"Unknown settings file: {args.file}", file=sys.stderr)
        return 1
    if section.delete(args.key):
        settings.save_settings()
        print(f"Removed {args.section}/{args.key}")
    return 0


def _cmd_clear(settings: emuconf.settings.Settings) -> int:
    settings.clear_settings()
    settings.save_settings()
    print("Cleared " + (settings.game_id or "global settings"))
    return 0


def _cmd_check_junk(settings: emuconf.settings.Settings) -> int:
    if not settings.is_game_specific():
        print("check-junk requires --game", file=sys.stderr)
        return 1
    if settings.game_ini_contains_junk():
        print(f"{settings.game_id}: contains copied global settings; delete and recreate it")
        return 2
    print(f"{settings.game_id}: ok")
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="emuconf",
        description="Inspect and edit emulator settings files.",
    )
    parser.add_argument("--user-dir", default="")
    parser.add_argument("--sys-dir", default="")
    parser.add_argument("--config-root", type=pathlib.Path, default=pathlib.Path.cwd())
    parser.add_argument("--game", default="", help="Game ID for per-game settings")
    parser.add_argument("--revision", type=int, default=0)
    sub = parser.add_subparsers(dest="subcmd")

    sub.add_parser("show", help="Print every non-empty section")

    for name, help_text in (
        ("get", "Print one value"),
        ("set", "Write one value"),
        ("unset", "Remove one value"),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("file", help="Settings file, e.g. Dolphin or GFX")
        p.add_argument("section")
        p.add_argument("key")
        if name == "set":
            p.add_argument("value")

    sub.add_parser("clear", help="Wipe every loaded file and save")
    sub.add_parser("check-junk", help="Detect a game file copied from global settings")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point for ``emuconf``."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.subcmd is None:
        parser.print_help()
        return 1

    _configure_logging(args.config_root)

    with _open_settings(args) as settings:
        settings.load_settings(args.game or "", args.revision)
        if args.subcmd == "show":
            return _cmd_show(settings)
        elif args.subcmd == "get":
            return _cmd_get(settings, args)
        elif args.subcmd == "set":
            return _cmd_set(settings, args)
        elif args.subcmd == "unset":
            return _cmd_unset(settings, args)
        elif args.subcmd == "clear":
            return _cmd_clear(settings)
        elif args.subcmd == "check-junk":
            return _cmd_check_junk(settings)
    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
