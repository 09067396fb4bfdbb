"""
=============================================================================
HTTP SERVER CLI ENTRY POINT
=============================================================================

    # Serve the current directory on localhost:8080
    python -m minihttpd

    # Custom port and document root
    python -m minihttpd --port 3000 --root ./public

    # Listen on all interfaces, no per-connection notices
    python -m minihttpd --host 0.0.0.0 --quiet

The arguments only build the ServerConfig. Nothing can be changed once
the server is running.

=============================================================================
"""

import argparse
import sys

from . import __version__
from .config import ServerConfig
from .server import HTTPServer


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="minihttpd",
        description="Minimal HTTP/1.1 static file server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m minihttpd                          # Serve . on 127.0.0.1:8080
  python -m minihttpd --port 3000              # Custom port
  python -m minihttpd --root ./public          # Custom document root
  python -m minihttpd --host 0.0.0.0 --quiet   # All interfaces, less noise
        """,
    )

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--host", "-H",
        default="127.0.0.1",
        help="Host to bind to (default: 127.0.0.1)",
    )

    parser.add_argument(
        "--port", "-p",
        type=int,
        default=8080,
        help="Port to listen on (default: 8080)",
    )

    # ─────────────────────────────────────────────────────────────────────
    # DOCUMENT ROOT ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--root", "-r",
        default=".",
        help="Document root directory (default: current directory)",
    )

    parser.add_argument(
        "--home",
        default="index.html",
        help="File served for paths ending in / (default: index.html)",
    )

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Do not log per-connection notices",
    )

    parser.add_argument(
        "--log-level", "-l",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Logging level (default: INFO)",
    )

    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"minihttpd {__version__}",
    )

    return parser


def main(argv=None):
    """Parse arguments, build the config and run the server."""
    args = build_parser().parse_args(argv)

    config = ServerConfig(
        host=args.host,
        port=args.port,
        document_root=args.root,
        home_file=args.home,
        verbose=not args.quiet,
        log_level=args.log_level,
    )

    try:
        server = HTTPServer(config)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    try:
        server.run()
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
