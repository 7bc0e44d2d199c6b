"""Command-line interface for playlist sync."""

import argparse
import sys

from .auth import YouTubeSession
from .config import load_settings
from .logging_config import configure_logging, get_logger
from .sync import run_sync

logger = get_logger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser."""
    parser = argparse.ArgumentParser(
        description="Copy every public video of a YouTube channel into one of your playlists"
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    subparsers.add_parser("sync", help="Run the full sync (default)")
    subparsers.add_parser("auth-url", help="Print the OAuth authorization URL")

    authorize_parser = subparsers.add_parser(
        "authorize", help="Complete authorization with the code from the callback"
    )
    authorize_parser.add_argument("code", help="Authorization code")

    subparsers.add_parser("status", help="Show whether a valid token is stored")

    return parser


def main() -> int:
    """Main entry point.

    Returns:
        int: Exit code
    """
    parser = create_parser()
    try:
        args = parser.parse_args()
    except SystemExit as e:
        return 1 if e.code == 2 else e.code

    configure_logging(debug=args.debug)
    command = args.command or "sync"

    if command == "sync":
        summary = run_sync()
        return 0 if summary.succeeded else 1

    settings = load_settings()
    if not settings.client_id or not settings.client_secret:
        logger.error("YOUTUBE_CLIENT_ID and YOUTUBE_CLIENT_SECRET must be set")
        return 1
    session = YouTubeSession.from_settings(settings)

    if command == "auth-url":
        print(session.authorization_url())
        return 0
    if command == "authorize":
        return 0 if session.handle_callback(args.code) else 1
    if command == "status":
        if session.has_valid_token():
            logger.info("A valid token is stored in %s", settings.token_file)
            return 0
        logger.info("No valid token. Run 'playlistsync auth-url' to authorize.")
        return 1

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
