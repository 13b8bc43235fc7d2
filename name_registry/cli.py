from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

import yaml
from pydantic import ValidationError

from .commands import doctor as cmd_doctor
from .commands import uniquify as cmd_uniquify
from .config import load_settings
from .models import NameRegistryError
from .registry import NameRegistry

LOG_FORMAT = "%(levelname).1s | %(name)s | %(message)s"

C_RESET = "\033[0m"
LEVEL_COLORS = {
    logging.DEBUG: "\033[36m",  # Cyan
    logging.INFO: "\033[37m",  # Light gray
    logging.WARNING: "\033[33m",  # Yellow
    logging.ERROR: "\033[31m",  # Red
    logging.CRITICAL: "\033[35m",  # Magenta
}

logger = logging.getLogger(__name__)


class ColorFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        color = LEVEL_COLORS.get(record.levelno)
        if not color:
            return message
        return f"{color}{message}{C_RESET}"


class WarningBufferHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.WARNING)
        self.records: list[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
        except Exception:  # pragma: no cover
            msg = record.getMessage()
        self.records.append(msg)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="name-registry", description="Assign collision-free names"
    )
    parser.add_argument("--config", type=Path, help="Path to name-registry.yaml")
    parser.add_argument("--log-level", default="WARNING", help="Python logging level")
    parser.add_argument("--separator", default=None, help="Override registry.separator")
    parser.add_argument(
        "--empty-marker", default=None, help="Override registry.empty_marker"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    uniquify_parser = subparsers.add_parser(
        "uniquify",
        help="Read candidate names (one per line, optional TAB prefix) and print unique names",
    )
    uniquify_parser.add_argument(
        "input", nargs="?", type=Path, default=None, help="Input file (default: stdin)"
    )
    uniquify_parser.add_argument(
        "--reserve",
        action="append",
        default=[],
        metavar="NAME",
        help="Treat NAME as already taken (repeatable)",
    )
    uniquify_parser.add_argument(
        "--json",
        action="store_true",
        help="Emit candidate/prefix/name records as JSON",
    )
    subparsers.add_parser("doctor", help="Check configuration and show sample names")
    return parser


def _configure_logging(level_name: str) -> WarningBufferHandler:
    log_level = getattr(logging, level_name.upper(), logging.WARNING)
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(log_level)

    color_handler = logging.StreamHandler(sys.stderr)
    color_handler.setFormatter(ColorFormatter(LOG_FORMAT))
    root_logger.addHandler(color_handler)

    warn_buffer = WarningBufferHandler()
    warn_buffer.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(warn_buffer)
    return warn_buffer


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    warn_buffer = _configure_logging(args.log_level)

    try:
        settings, config_path = load_settings(args.config)
    except (OSError, yaml.YAMLError, ValidationError) as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2

    overrides = {}
    if args.separator is not None:
        overrides["separator"] = args.separator
    if args.empty_marker is not None:
        overrides["empty_marker"] = args.empty_marker
    if overrides:
        settings.registry = settings.registry.model_copy(update=overrides)

    try:
        match args.command:
            case "uniquify":
                registry = NameRegistry.from_settings(settings.registry)
                if args.input is None:
                    cmd_uniquify.run(
                        registry,
                        sys.stdin,
                        sys.stdout,
                        reserved=args.reserve,
                        json_output=args.json,
                    )
                else:
                    with args.input.open("r", encoding="utf-8") as fh:
                        cmd_uniquify.run(
                            registry,
                            fh,
                            sys.stdout,
                            reserved=args.reserve,
                            json_output=args.json,
                        )
            case "doctor":
                report = cmd_doctor.run(settings, config_path)
                for line in report.lines():
                    print(line)
                if not report.ok:
                    return 1
            case _:
                parser.error("Unknown command")
    except NameRegistryError as exc:
        logger.error("%s", exc)
        return 1
    except (OSError, ValueError) as exc:
        logger.error("%s failed: %s", args.command, exc)
        return 1
    finally:
        if warn_buffer.records:
            print("\n\033[33mWarnings/Errors summary:\033[0m", file=sys.stderr)
            for line in warn_buffer.records:
                print(f" - {line}", file=sys.stderr)
    return 0


def run() -> None:
    raise SystemExit(main())
