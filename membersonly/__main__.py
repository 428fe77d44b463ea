"""
Members Only Entry Point

Usage:
    python -m membersonly                   # Run the web server
    python -m membersonly config --show     # Show effective configuration
    python -m membersonly config --validate # Validate configuration
    python -m membersonly config --init     # Write a default config file
    python -m membersonly --help            # Show help
"""

import argparse
import sys
import logging
from pathlib import Path

import toml

from . import __version__


def setup_logging(level: str, log_file: str | None = None):
    """Configure logging for the application."""
    log_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    handlers = [logging.StreamHandler()]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=log_format,
        handlers=handlers
    )


def run_config(args, logger: logging.Logger) -> int:
    """Handle the config subcommand. Returns a process exit code."""
    from .config import load_config, create_default_config

    if args.init:
        if args.config.exists():
            logger.error(f"Refusing to overwrite existing {args.config}")
            return 1
        create_default_config(args.config)
        print(f"Wrote default configuration to {args.config}")
        return 0

    config = load_config(args.config)

    if args.show:
        data = config._to_dict()
        # Never echo secrets
        data["board"]["member_secret"] = "********"
        data["web"]["secret_key"] = "********" if data["web"]["secret_key"] else ""
        print(toml.dumps(data))
        return 0

    errors = config.validate()
    if errors:
        for error in errors:
            print(f"  - {error}")
        return 1

    print("Configuration OK")
    return 0


def serve(args, logger: logging.Logger) -> int:
    """Load config, set up the board and run the web server."""
    from .config import load_config
    from .core.board import MembersOnly
    from .core.errors import ConfigError
    from .web import create_app

    config = load_config(args.config)
    setup_logging(args.log_level or config.logging.level, config.logging.file)

    board = MembersOnly(config)
    try:
        board.setup(strict=True)
    except ConfigError as e:
        for error in e.errors:
            logger.error(f"Config: {error}")
        return 1

    app = create_app(board)
    logger.info(f"Starting Members Only v{__version__} on {config.web.host}:{config.web.port}")

    try:
        app.run(host=config.web.host, port=config.web.port, debug=config.web.debug)
    finally:
        board.shutdown()

    return 0


def main():
    """Main entry point for Members Only."""
    parser = argparse.ArgumentParser(
        prog="membersonly",
        description="Members Only - a membership-gated message board"
    )
    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"Members Only {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=Path("config.toml"),
        help="Path to configuration file (default: config.toml)"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: from config, else INFO)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    config_parser = subparsers.add_parser("config", help="Configuration tools")
    group = config_parser.add_mutually_exclusive_group()
    group.add_argument("--show", action="store_true", help="Show current config")
    group.add_argument("--validate", action="store_true", help="Validate config (default)")
    group.add_argument("--init", action="store_true", help="Write a default config file")

    args = parser.parse_args()

    logger = logging.getLogger("membersonly")

    if args.command == "config":
        setup_logging(args.log_level or "INFO")
        sys.exit(run_config(args, logger))

    try:
        sys.exit(serve(args, logger))
    except KeyboardInterrupt:
        logger.info("Shutdown requested")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
