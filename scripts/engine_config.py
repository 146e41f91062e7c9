#!/usr/bin/env python3
"""Utility helpers for managing engine settings profiles."""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from dotenv import load_dotenv

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

load_dotenv()

from fgos_engine.config import EngineConfigLoader, EngineSettings, load_engine_settings


def handle_init(args: argparse.Namespace) -> None:
    loader = EngineConfigLoader(base_path=Path(args.directory) if args.directory else None)
    output = loader.path_for(args.profile)
    if output.exists() and not args.force:
        raise SystemExit(f"Profile {output} already exists. Use --force to overwrite.")
    output.parent.mkdir(parents=True, exist_ok=True)
    template = EngineSettings().model_dump(mode="json")
    output.write_text(json.dumps(template, indent=2), encoding="utf-8")
    print(f"Wrote template to {output}")


def handle_show(args: argparse.Namespace) -> None:
    settings = load_engine_settings(
        profile=args.profile,
        base_path=Path(args.directory) if args.directory else None,
    )
    print(json.dumps(settings.model_dump(mode="json"), indent=2))


def main() -> None:
    parser = argparse.ArgumentParser(description="Engine settings utilities")
    subparsers = parser.add_subparsers(dest="command")

    init_parser = subparsers.add_parser("init", help="Create a settings profile from the defaults")
    init_parser.add_argument("profile", help="Profile name")
    init_parser.add_argument("--directory", help="Profile directory")
    init_parser.add_argument("--force", action="store_true", help="Overwrite existing file")
    init_parser.set_defaults(func=handle_init)

    show_parser = subparsers.add_parser("show", help="Print the resolved settings for a profile")
    show_parser.add_argument("profile", nargs="?", help="Profile name (defaults to FGOS_ENGINE_PROFILE)")
    show_parser.add_argument("--directory", help="Profile directory")
    show_parser.set_defaults(func=handle_show)

    args = parser.parse_args()
    if not hasattr(args, "func"):
        parser.print_help()
        return
    args.func(args)


if __name__ == "__main__":
    main()
