"""Command line entry point for sessionkeeper."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import structlog

from sessionkeeper import __version__
from sessionkeeper.config import Settings, load_config
from sessionkeeper.exceptions import ConfigurationError, SessionKeeperError
from sessionkeeper.sessions import (
    Current,
    CwdSession,
    EnvironmentActiveSession,
    Explicit,
    LastForDirectory,
    LastGlobal,
    LiteralOrDirectory,
    RECORD_FIELDS,
    Selector,
    SessionService,
    SessionStore,
)
from sessionkeeper.sessions.paths import absolute_dir
from sessionkeeper.utils.time_format import relative_time


def setup_logging(debug: bool = False) -> None:
    """Configure structured logging.

    Routes structlog and stdlib logging through the same processor chain:
    JSON normally, coloured console in debug. Logs go to stderr so command
    output on stdout stays machine readable.
    """
    level = logging.DEBUG if debug else logging.WARNING

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    renderer: Any = (
        structlog.dev.ConsoleRenderer()
        if debug
        else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
            foreign_pre_chain=shared_processors,
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="sessionkeeper",
        description="Discover, query and resolve saved workspace sessions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version", action="version", version=f"sessionkeeper {__version__}"
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--config-file", type=Path, help="Path to configuration file")

    commands = parser.add_subparsers(dest="command", required=True)

    resolve = commands.add_parser("resolve", help="Resolve a session selector")
    resolve_kinds = resolve.add_subparsers(dest="selector", required=True)
    by_name = resolve_kinds.add_parser("name", help="Explicit session name")
    by_name.add_argument("name")
    resolve_kinds.add_parser("current", help="Currently open session")
    resolve_kinds.add_parser("last", help="Most recently saved session")
    last_cwd = resolve_kinds.add_parser(
        "last-cwd", help="Most recent session for a directory"
    )
    last_cwd.add_argument("directory", nargs="?", default=".")
    cwd = resolve_kinds.add_parser("cwd", help="Session named after a directory")
    cwd.add_argument("directory", nargs="?")
    auto = resolve_kinds.add_parser(
        "auto", help="Directory if one exists, otherwise a literal session name"
    )
    auto.add_argument("value")

    listing = commands.add_parser("list", help="List sessions")
    listing.add_argument(
        "--cwd",
        nargs="?",
        const=".",
        metavar="DIR",
        help="Only sessions saved in DIR (default: working directory)",
    )
    listing.add_argument(
        "--sort", choices=RECORD_FIELDS, default="mtime", help="Sort field"
    )
    listing.add_argument(
        "--asc", action="store_true", help="Ascending order (default: descending)"
    )

    complete = commands.add_parser("complete", help="Complete session names")
    complete.add_argument("prefix", nargs="?", default="")

    commands.add_parser("autoload", help="Resolve the configured autoload session")

    return parser.parse_args(argv)


def build_selector(args: argparse.Namespace) -> Selector:
    """Selector for the ``resolve`` sub-command."""
    builders: Dict[str, Callable[[], Selector]] = {
        "name": lambda: Explicit(args.name),
        "current": Current,
        "last": LastGlobal,
        "last-cwd": lambda: LastForDirectory(args.directory),
        "cwd": lambda: CwdSession(args.directory),
        "auto": lambda: LiteralOrDirectory(args.value),
    }
    return builders[args.selector]()


def create_service(config: Settings) -> SessionService:
    """Wire store, cache and resolver from settings."""
    store = SessionStore(config.session_dir, extension=config.extension)
    return SessionService(
        store, active_session=EnvironmentActiveSession(config.active_session_env)
    )


def run_command(
    args: argparse.Namespace, service: SessionService, config: Settings
) -> int:
    """Execute one sub-command, printing results to stdout."""
    with service.interaction():
        if args.command == "resolve":
            print(service.resolve(build_selector(args)))
            return 0

        if args.command == "list":
            filters: Dict[str, Any] = {}
            if args.cwd is not None:
                filters["cwd"] = absolute_dir(args.cwd)
            records = service.query(filters, args.sort, descending=not args.asc)
            for record in records:
                print(f"{record.name}\t{record.cwd}\t{relative_time(record.mtime)}")
            return 0

        if args.command == "complete":
            for name in service.complete(args.prefix):
                print(name)
            return 0

        if args.command == "autoload":
            name = service.autoload(config.autoload)
            if name is None:
                reason = (
                    "Autoload is disabled"
                    if config.autoload is False
                    else "No session found to autoload"
                )
                print(f"sessionkeeper: {reason}", file=sys.stderr)
                return 1
            print(name)
            return 0

    raise ValueError(f"Unknown command {args.command!r}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main application entry point."""
    args = parse_args(argv)
    setup_logging(debug=args.debug)

    logger = structlog.get_logger()

    try:
        config = load_config(config_file=args.config_file)
        if config.debug and not args.debug:
            setup_logging(debug=True)

        logger.debug(
            "Configuration loaded",
            session_dir=str(config.session_dir),
            autoload=config.autoload,
        )

        service = create_service(config)
        return run_command(args, service, config)

    except ConfigurationError as e:
        logger.error("Configuration error", error=str(e))
        print(f"sessionkeeper: {e}", file=sys.stderr)
        return 1
    except SessionKeeperError as e:
        logger.info("Command failed", error=str(e), error_type=type(e).__name__)
        print(f"sessionkeeper: {e}", file=sys.stderr)
        return 1


def run() -> None:
    """Synchronous entry point for the console script."""
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        sys.exit(130)


if __name__ == "__main__":
    run()
