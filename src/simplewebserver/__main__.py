"""
=============================================================================
WEB SERVER CLI ENTRY POINT
=============================================================================

    # Serve the current directory on localhost:8080
    python -m simplewebserver

    # Custom port
    python -m simplewebserver --port 3000

    # Listen on all interfaces
    python -m simplewebserver --host 0.0.0.0

Defaults come from the environment (see ServerConfig.from_env), command
line flags override them.

=============================================================================
"""

import argparse
import sys

from . import __version__
from .config import ServerConfig
from .server import WebServer


def build_parser(defaults: ServerConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="simplewebserver",
        description="Serve files from the current directory, one request per connection",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m simplewebserver                   # Run with defaults
  python -m simplewebserver --port 3000       # Custom port
  python -m simplewebserver --host 0.0.0.0    # Listen on all interfaces
        """
    )

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--host", "-H",
        default=defaults.host,
        help=f"Host to bind to (default: {defaults.host})"
    )

    parser.add_argument(
        "--port", "-p",
        type=int,
        default=defaults.port,
        help=f"Port to listen on (default: {defaults.port})"
    )

    parser.add_argument(
        "--read-timeout",
        type=float,
        default=defaults.read_timeout,
        help="Seconds to wait for a request before dropping the connection (default: wait forever)"
    )

    # ─────────────────────────────────────────────────────────────────────
    # RESPONSE ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--server-name",
        default=defaults.server_name,
        help=f"Server header value (default: {defaults.server_name!r})"
    )

    parser.add_argument(
        "--tag-server-name",
        default=defaults.tag_server_name,
        help="<cs371server> value (default: same as --server-name)"
    )

    # ─────────────────────────────────────────────────────────────────────
    # META ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--log-level", "-l",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        default=defaults.log_level.upper(),
        help=f"Logging level (default: {defaults.log_level.upper()})"
    )

    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"simplewebserver {__version__}"
    )

    return parser


def main(argv=None):
    """Main CLI entry point."""
    try:
        defaults = ServerConfig.from_env()
    except ValueError as e:
        print(f"Error: invalid environment configuration: {e}", file=sys.stderr)
        sys.exit(2)

    args = build_parser(defaults).parse_args(argv)

    config = ServerConfig(
        host=args.host,
        port=args.port,
        read_timeout=args.read_timeout,
        server_name=args.server_name,
        tag_server_name=args.tag_server_name,
        log_level=args.log_level,
    )

    try:
        server = WebServer(config)
        server.run()
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
