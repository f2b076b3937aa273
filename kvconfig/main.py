"""Command line entry point for kvconfig."""

import argparse
import logging
import sys

from pathlib import Path
from typing import List, Optional, Tuple

import structlog

from kvconfig import __version__
from kvconfig.config.loader import load_config, load_settings
from kvconfig.config.parser import can_round_trip
from kvconfig.exceptions import ConfigurationError, ConversionError, MissingConfigError
from kvconfig.utils.constants import APP_DESCRIPTION, APP_NAME, KEY_FIRST_CHARS


TYPE_CHOICES = {"str": str, "int": int, "float": float, "bool": bool}


def setup_logging(debug: bool = False, level: int = logging.INFO) -> None:
    """Configure structured logging on stderr."""
    level = logging.DEBUG if debug else level

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Clear existing handlers
    root_logger.handlers = []

    # stdout carries command output
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            (
                structlog.processors.JSONRenderer()
                if not debug
                else structlog.dev.ConsoleRenderer()
            ),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def parse_assignment(text: str) -> Tuple[str, str]:
    """Split a ``KEY=VALUE`` command line assignment."""
    key, sep, value = text.partition("=")
    key = key.strip().upper()
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got '{text}'")
    if key[0] not in KEY_FIRST_CHARS:
        raise argparse.ArgumentTypeError(
            f"key must begin with a letter A-Z, got '{key}'"
        )
    return key, value.strip()


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description=APP_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version", action="version", version=f"{APP_NAME} {__version__}"
    )

    parser.add_argument("file", type=Path, help="Configuration file to read")

    parser.add_argument("--get", metavar="KEY", help="Print the value of KEY")
    parser.add_argument(
        "--type",
        choices=sorted(TYPE_CHOICES),
        default="str",
        help="Convert the --get value to this type",
    )
    parser.add_argument(
        "--set",
        metavar="KEY=VALUE",
        type=parse_assignment,
        action="append",
        default=[],
        help="Assign a value (repeatable); the file is written back",
    )
    parser.add_argument("--output", type=Path, help="Write the result to this file")
    parser.add_argument(
        "--legacy-comments",
        action="store_true",
        help="Also drop the character before '#' when stripping comments",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Run the command line tool and return its exit code."""
    args = parse_args(argv)

    try:
        settings = load_settings()
    except ConfigurationError as e:
        setup_logging(debug=args.debug)
        structlog.get_logger().error("Configuration error", error=str(e))
        return 1

    if args.legacy_comments:
        settings.legacy_comment_boundary = True

    # Loggers are cached on first use, so configure once the settings are known
    setup_logging(debug=args.debug or settings.debug, level=settings.get_log_level())
    logger = structlog.get_logger()

    config, result = load_config(args.file, settings=settings)
    if not result:
        return 1

    for key, value in args.set:
        if not can_round_trip(value):
            logger.warning(
                "Value will not read back unchanged", key=key, value=value
            )
        config.set(key, value)
        logger.debug("Assigned value", key=key, value=value)

    if args.get:
        try:
            value = config.require(args.get.upper(), TYPE_CHOICES[args.type])
        except (MissingConfigError, ConversionError) as e:
            logger.error("Lookup failed", key=args.get, error=str(e))
            return 1
        print(value)
    elif not args.output and not args.set:
        sys.stdout.write(config.dumps())

    target = args.output or (args.file if args.set else None)
    if target is not None and not config.write(target):
        return 1

    return 0


def run() -> None:
    """Synchronous entry point for setuptools."""
    sys.exit(main())


if __name__ == "__main__":
    run()
