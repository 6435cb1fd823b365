"""CLI entry point for globaldefs."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
import sys
from typing import Sequence

from globaldefs.config.loader import (
    DEFAULT_SETTINGS_PATH,
    initialize_settings,
    load_global_defs,
    load_settings,
)
from globaldefs.core.logging import configure_logging
from globaldefs.core.parser import GlobalDefsParser


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="globaldefs")
    subparsers = parser.add_subparsers(dest="command", required=True)

    init_parser = subparsers.add_parser("init", help="Create starter settings")
    init_parser.add_argument("--settings", type=Path, default=Path("./config/globaldefs.yml"))
    init_parser.add_argument("--force", action="store_true")

    check_parser = subparsers.add_parser("check", help="Parse the global_defs section of a configuration file")
    check_parser.add_argument("config", type=Path)
    check_parser.add_argument("--settings", type=Path, default=DEFAULT_SETTINGS_PATH)
    check_parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit non-zero when any diagnostic was emitted",
    )

    vocabulary_parser = subparsers.add_parser("vocabulary", help="List directives for the feature profile")
    vocabulary_parser.add_argument("--settings", type=Path, default=DEFAULT_SETTINGS_PATH)

    return parser


def cmd_init(settings_path: Path, force: bool) -> int:
    initialize_settings(settings_path, force=force)
    print(f"wrote settings: {settings_path}")
    return 0


def cmd_check(config_path: Path, *, settings_path: Path, strict: bool) -> int:
    settings = load_settings(settings_path)
    configure_logging(settings.logging)
    result = load_global_defs(config_path, settings)
    print(json.dumps(result.as_dict(), indent=2))
    if strict and result.diagnostics:
        return 1
    return 0


def cmd_vocabulary(settings_path: Path) -> int:
    settings = load_settings(settings_path)
    parser = GlobalDefsParser(settings.features, service_name=settings.logging.service_name)
    print(json.dumps({"count": len(parser.registry), "directives": parser.registry.names()}, indent=2))
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        if args.command == "init":
            return cmd_init(args.settings, args.force)
        if args.command == "check":
            return cmd_check(args.config, settings_path=args.settings, strict=args.strict)
        if args.command == "vocabulary":
            return cmd_vocabulary(args.settings)
    except (OSError, ValueError) as exc:
        print(f"globaldefs: error: {exc}", file=sys.stderr)
        return 2

    parser.error(f"unknown command: {args.command}")
    return 2
