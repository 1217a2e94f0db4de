"""Command line adapter: parse text or annotation files and print envelopes."""
from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Sequence

from dotenv import load_dotenv

from whowhere.envelope import STATUS_OK, to_json
from whowhere.parse_manager import ParseManager
from whowhere.settings import ParserConfig


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Find the people and places mentioned in a text"
    )
    parser.add_argument(
        "--gazetteer",
        type=Path,
        help="Gazetteer file (GeoNames dump or JSON list); overrides WHOWHERE_GAZETTEER_PATH",
    )
    parser.add_argument(
        "--fuzzy",
        action="store_true",
        default=None,
        help="Enable fuzzy gazetteer matching",
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="File to write the JSON result to (default: stdout)",
    )
    parser.add_argument(
        "--pretty",
        action="store_true",
        help="Indent the JSON output",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level (DEBUG, INFO, WARNING, ERROR). Default: WARNING",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    text = subparsers.add_parser("text", help="Extract and resolve entities from text")
    text.add_argument("text", help="Text to parse ('-' reads stdin)")

    nlp = subparsers.add_parser(
        "nlp", help="Resolve entities from a pre-computed annotation JSON file"
    )
    nlp.add_argument("path", help="Annotation JSON file ('-' reads stdin)")

    return parser.parse_args(argv)


def _configure_logging(level_name: str | None) -> None:
    level = getattr(logging, str(level_name).upper(), logging.WARNING) if level_name else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )


def _read_input(value: str, *, is_path: bool) -> str:
    if value == "-":
        return sys.stdin.read()
    if not is_path:
        return value
    path = Path(value)
    if not path.exists():
        raise FileNotFoundError(f"Annotation file not found: {path}")
    return path.read_text(encoding="utf-8")


def _build_config(args: argparse.Namespace) -> ParserConfig:
    config = ParserConfig.from_env()
    if args.gazetteer is not None:
        config = replace(config, gazetteer_path=str(args.gazetteer))
    if args.fuzzy is not None:
        config = replace(config, fuzzy=args.fuzzy)
    return config


def _write_output(envelope: dict[str, Any], args: argparse.Namespace) -> None:
    rendered = to_json(envelope, pretty=args.pretty)
    if args.output:
        args.output.write_text(rendered + "\n", encoding="utf-8")
    else:
        sys.stdout.write(rendered + "\n")


def run(args: argparse.Namespace, manager: ParseManager | None = None) -> int:
    load_dotenv()
    _configure_logging(args.log_level)
    log = logging.getLogger("whowhere.cli")

    manager = manager or ParseManager.from_config(_build_config(args))
    if args.command == "text":
        envelope = manager.parse_from_text(_read_input(args.text, is_path=False))
    else:
        envelope = manager.parse_from_nlp_json(_read_input(args.path, is_path=True))

    _write_output(envelope, args)
    manager.log_stats()
    if envelope["status"] != STATUS_OK:
        log.warning("Parse failed: %s", envelope.get("details"))
        return 1
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    return run(_parse_args(argv))


if __name__ == "__main__":  # pragma: no cover - manual entry point
    raise SystemExit(main())
