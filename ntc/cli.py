from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict

from .config.load import YamlSettingsStore
from .config.model import Settings
from .errors import NtcUserError
from .version import tool_version

# CLI toggle name → Settings field
TOGGLES: Dict[str, str] = {
    "render-all": "render_all_transclusions",
    "shift-headings": "shift_headings",
}

_ON_OFF = {"on": True, "off": False}


def _setup_logging() -> None:
    log = logging.getLogger("ntc")
    if log.handlers:
        return
    log.setLevel(logging.DEBUG if os.environ.get("NTC_DEBUG") else logging.WARNING)
    h = logging.StreamHandler()
    h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    log.addHandler(h)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="ntc",
        description="Native transclusion settings",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    sub = p.add_subparsers(dest="cmd", required=True)

    sp_settings = sub.add_parser("settings", help="Show or change the transclusion toggles (JSON)")
    settings_sub = sp_settings.add_subparsers(dest="action", required=True)

    def add_root(sp: argparse.ArgumentParser) -> None:
        sp.add_argument(
            "--root",
            type=Path,
            default=None,
            help="directory holding .ntc/settings.yaml (default: current directory)",
        )

    sp_show = settings_sub.add_parser("show", help="current settings merged with defaults")
    add_root(sp_show)

    sp_set = settings_sub.add_parser("set", help="change one toggle and persist it immediately")
    sp_set.add_argument("toggle", choices=sorted(TOGGLES), help="which toggle to change")
    sp_set.add_argument("value", choices=sorted(_ON_OFF), help="new state")
    add_root(sp_set)

    return p


def _dumps(data: Dict[str, Any]) -> str:
    return json.dumps(data, ensure_ascii=False, indent=2) + "\n"


def _store(ns: argparse.Namespace) -> YamlSettingsStore:
    root = ns.root if ns.root is not None else Path.cwd()
    return YamlSettingsStore(root)


def main(argv: list[str] | None = None) -> int:
    ns = _build_parser().parse_args(argv)
    _setup_logging()

    try:
        if ns.cmd == "settings":
            store = _store(ns)
            settings: Settings = store.load()
            if ns.action == "set":
                settings = settings.with_toggle(TOGGLES[ns.toggle], _ON_OFF[ns.value])
                store.save(settings)
            sys.stdout.write(_dumps(settings.to_dict()))
            return 0

    except NtcUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
