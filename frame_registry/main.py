"""
Command line entry point for storing and erasing display settings.
"""

from __future__ import annotations

import argparse
import ast
import sys
from dataclasses import replace
from typing import Any, Dict, Iterable, Optional, Sequence

from . import logger as app_logger
from .config import RegistryConfig
from .host import MappingHost
from .persistence import SettingsPersister, StoreReport

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_UNAVAILABLE = 2

_LOGGER = app_logger.get_logger()


def _parse_assignments(items: Iterable[str]) -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    for item in items:
        name, sep, raw = item.partition("=")
        if not sep or not name.strip():
            raise argparse.ArgumentTypeError(f"Expected NAME=VALUE, got {item!r}")
        try:
            value = ast.literal_eval(raw)
        except (ValueError, SyntaxError):
            value = raw
        values[name.strip()] = value
    return values


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="frame-registry",
        description="Store, erase or inspect window display settings in the Windows registry.",
    )
    ap.add_argument("command", choices=["store", "clean", "status", "show"])
    ap.add_argument("--root", default=None, help="Registry key holding the settings.")
    ap.add_argument("--global", dest="globals", action="append", default=[], metavar="NAME=VALUE",
                    help="Host global setting, e.g. tool-bar-mode=True.")
    ap.add_argument("--param", dest="params", action="append", default=[], metavar="NAME=VALUE",
                    help="Window parameter, e.g. width=800.")
    return ap


def _exit_code(report: StoreReport) -> int:
    if report.store_unavailable:
        return EXIT_UNAVAILABLE
    return EXIT_OK if report.ok else EXIT_FAILED


def main(argv: Optional[Sequence[str]] = None, *, runner=None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(sys.argv[1:] if argv is None else argv))
    try:
        host = MappingHost(globals=_parse_assignments(args.globals), parameters=_parse_assignments(args.params))
    except argparse.ArgumentTypeError as exc:
        parser.error(str(exc))

    config = RegistryConfig.from_environment()
    if args.root:
        config = replace(config, root=args.root)
    persister = SettingsPersister.create(host, config=config, runner=runner)

    if args.command == "store":
        return _exit_code(persister.store_all())
    if args.command == "clean":
        return _exit_code(persister.clean_all())
    if args.command == "status":
        stored = persister.is_stored()
        print("stored" if stored else "not stored")
        if persister.store.store_unavailable:
            return EXIT_UNAVAILABLE
        return EXIT_OK

    values = persister.read_stored()
    for key in persister.table.keys():
        if key in values:
            print(f"{key} = {values[key]}")
    if persister.store.store_unavailable:
        _LOGGER.error("Registry store {} is unavailable.", config.root)
        return EXIT_UNAVAILABLE
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
