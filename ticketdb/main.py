# ==============================================================================
# MAIN - Command-line entry point
# ==============================================================================
# options -> override -> select backend -> four ticket operations
# ==============================================================================

from __future__ import annotations

import asyncio
import json
import logging
import sys
from typing import Any, Dict, Optional, Sequence

from ticketdb.cli import parse_options
from ticketdb.core.constants import DUMP_SEPARATOR, OPTIONS_DUMP_VERBOSITY
from ticketdb.core.exceptions import AppException
from ticketdb.core.settings import Settings, get_settings
from ticketdb.database.repositories.ticket_repository import TicketRepository
from ticketdb.database.selector import open_database
from ticketdb.schemas.options import (
    Options,
    apply_override,
    options_to_json,
    options_to_yaml,
)

logger = logging.getLogger(__name__)

TEXT_LOG_FORMAT = "%(asctime)s - %(app_name)s - %(name)s - %(levelname)s - %(message)s"


# ==============================================================================
# LOGGING CONFIGURATION
# ==============================================================================

class AppFormatter(logging.Formatter):
    """Text formatter that stamps every record with the application name."""

    def __init__(self, app_name: str, fmt: Optional[str] = TEXT_LOG_FORMAT) -> None:
        super().__init__(fmt)
        self.app_name = app_name

    def format(self, record: logging.LogRecord) -> str:
        record.app_name = self.app_name
        return super().format(record)


class JsonFormatter(AppFormatter):
    """One JSON object per line; message and traceback are escaped by json."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "time": self.formatTime(record),
            "app": self.app_name,
            "logger": record.name,
            "level": record.levelname,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def build_formatter(settings: Settings) -> logging.Formatter:
    if settings.LOG_FORMAT == "json":
        return JsonFormatter(settings.APP_NAME, fmt=None)
    return AppFormatter(settings.APP_NAME)


def log_level_for(settings: Settings, verbose: int) -> int:
    """-v lowers the threshold to INFO, -vv (or more) to DEBUG."""
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return getattr(logging, settings.LOG_LEVEL, logging.WARNING)


def setup_logging(settings: Settings, verbose: int = 0) -> None:
    """
    Attach a stderr handler to the root logger and set its level.

    The handler is only added when the root logger has none, so calling
    this again just moves the level.
    """
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(build_formatter(settings))
        root.addHandler(handler)
    root.setLevel(log_level_for(settings, verbose))


# ==============================================================================
# RUN
# ==============================================================================

def dump_options(options: Options) -> None:
    """Print the effective options as pretty JSON, then as YAML."""
    print(options_to_json(options))
    print(DUMP_SEPARATOR)
    print(options_to_yaml(options))


async def async_main(options: Options, settings: Settings) -> int:
    """
    The program body: one async flow, four sequential operations.

    Any failure raises and aborts the run. The pool is disposed on the
    way out either way.
    """
    print("Hello, world!")
    handle = await open_database(options.db, settings)
    try:
        print("Connected to a db")
        logger.debug(f"Pool status: {handle.pool_status()}")

        tickets_repo = TicketRepository(handle)
        await tickets_repo.ensure_schema()

        new_id = await tickets_repo.insert()
        print(f"Row: ({new_id},)")

        print(f"\n== select tickets:\n{await tickets_repo.describe_all()}")

        tickets = await tickets_repo.fetch_all()
        print(f"tickets: {tickets!r}")
    finally:
        await handle.disconnect()

    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Command-line entry point.

    Returns:
        Process exit status: 0 on success, 1 on any application error,
        130 when interrupted
    """
    settings = get_settings()
    options = parse_options(argv)
    setup_logging(settings, options.verbose)

    try:
        options = apply_override(options)
        # the override file may carry its own verbosity
        setup_logging(settings, options.verbose)

        if options.verbose >= OPTIONS_DUMP_VERBOSITY:
            dump_options(options)

        print(f"Hello, here is your options: {options!r}")

        return asyncio.run(async_main(options, settings))

    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        return 130
    except AppException as e:
        logger.error(f"{e.error_code}: {e.message}")
        print(f"✗ Error: {e.message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
