"""
Command line entry point.

    ewfund --budget 2000000
    ewfund --file constituents.csv --budget 50000 --show-budget
"""

import argparse
import sys
from pathlib import Path
from typing import Any, Optional

import structlog

from . import __version__
from .config.loader import ConfigLoader
from .errors import ConfigurationError, DataQualityError, SystemFailureError
from .logging.config import configure_logging
from .pipeline import IndexFundPipeline

logger = structlog.get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ewfund",
        description="Allocate an equal-market-weight index fund across published equity constituents."
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-b", "--budget", type=float, help="Target portfolio budget (positive amount)")

    source = parser.add_mutually_exclusive_group()
    source.add_argument("--url", help="Constituents CSV URL")
    source.add_argument("--file", help="Read constituents CSV from a file ('-' for stdin)")

    parser.add_argument("--config-dir", type=Path, help="Directory holding settings.yaml (default: ./config)")
    parser.add_argument("--timeout", type=float, help="HTTP timeout in seconds")
    parser.add_argument("--retries", type=int, help="Extra fetch attempts on transient errors")
    parser.add_argument("--on-malformed", choices=["abort", "skip"],
                        help="Policy for rows with unparseable Price or Market Cap")
    parser.add_argument("--format", choices=["plain", "json"], help="Report format")
    parser.add_argument("--show-weights", action="store_true", default=None,
                        help="Print relative weights before the allocation")
    parser.add_argument("--show-budget", action="store_true", default=None,
                        help="Print the minimum budget before the allocation")
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING, ERROR or CRITICAL")
    parser.add_argument("--log-json", action="store_true", default=None, help="Emit JSON log lines")
    return parser


def overrides_from_args(args: argparse.Namespace) -> dict[str, Any]:
    """Translate parsed arguments into a configuration override mapping."""
    mapping = {
        "budget": ("allocation", "target_budget"),
        "url": ("source", "url"),
        "file": ("source", "file_path"),
        "timeout": ("source", "timeout_seconds"),
        "retries": ("source", "retry_attempts"),
        "on_malformed": ("decoder", "malformed_row_policy"),
        "format": ("report", "format"),
        "show_weights": ("report", "show_weights"),
        "show_budget": ("report", "show_budget"),
        "log_level": ("logging", "level"),
        "log_json": ("logging", "format_json"),
    }

    overrides: dict[str, Any] = {}
    for arg_name, (section, key) in mapping.items():
        value = getattr(args, arg_name)
        if value is not None:
            overrides.setdefault(section, {})[key] = value

    # An explicit URL replaces a file configured in settings or the environment
    if args.url is not None:
        overrides["source"]["file_path"] = ""

    return overrides


def main(argv: Optional[list[str]] = None) -> int:
    """Run one allocation and return the process exit code."""
    args = build_parser().parse_args(argv)

    try:
        config = ConfigLoader.create(args.config_dir).build_config(overrides_from_args(args))
    except ConfigurationError as e:
        configure_logging(level="ERROR")
        logger.error("Invalid configuration", error=str(e))
        return EXIT_CONFIG_ERROR

    configure_logging(level=config.logging.level, format_json=config.logging.format_json)

    try:
        IndexFundPipeline(config).run()
    except (DataQualityError, SystemFailureError) as e:
        logger.error(
            "Allocation run failed",
            error=str(e),
            error_type=type(e).__name__,
            context=e.context
        )
        return EXIT_FAILURE

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
