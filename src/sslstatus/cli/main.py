"""sslstatus command-line entry point.

Usage::

    sslstatus -c /etc/sslstatus/config.yaml
    sslstatus -c config.yaml --validate-only
    sslstatus -c config.yaml status --format json
    sslstatus -c config.yaml check
    sslstatus -c config.yaml serve --dev
    python -m sslstatus -c config.yaml
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

log = logging.getLogger(__name__)


def _get_version() -> str:
    from sslstatus import __version__

    return __version__


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sslstatus",
        description="sslstatus: SSL/TLS configuration status and certificate file checks",
    )
    parser.add_argument(
        "-c",
        "--config",
        required=True,
        metavar="PATH",
        help="Path to the configuration file (YAML or JSON).",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Enable debug output (full tracebacks, verbose logging).",
    )
    parser.add_argument(
        "--validate-only",
        action="store_true",
        default=False,
        help="Validate the configuration file and exit.",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )

    subparsers = parser.add_subparsers(dest="command")

    # status
    status_parser = subparsers.add_parser("status", help="Print the SSL/TLS status")
    status_parser.add_argument(
        "--format",
        choices=("text", "json"),
        default="text",
        help="Output format (default: text).",
    )

    # check
    subparsers.add_parser(
        "check",
        help="Exit non-zero when the TLS configuration cannot be served",
    )

    # serve
    serve_parser = subparsers.add_parser("serve", help="Start the diagnostics endpoint")
    serve_parser.add_argument("--dev", action="store_true", default=False, dest="dev")

    return parser


def _print_error(message: str) -> None:
    """Print a user-facing error to stderr."""
    sys.stderr.write(f"sslstatus: error: {message}\n")


def main(argv: list[str] | None = None) -> None:
    """CLI entry point.  Parses arguments, loads config, dispatches."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    # -- resolve config path ---
    config_path = Path(args.config)
    if not config_path.is_file():
        _print_error(f"configuration file not found: {config_path}")
        sys.exit(1)

    # -- bootstrap logging early (basic stderr until config is loaded) ---
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    # -- load & validate config ---
    try:
        from sslstatus.config import ConfigValidationError, SslStatusConfig

        config = SslStatusConfig(
            config_file=str(config_path),
            schema_file="bundled",
        )
    except ConfigValidationError as exc:
        _print_error(str(exc))
        sys.exit(1)
    except Exception as exc:
        if args.debug:
            raise
        _print_error(f"failed to load configuration: {exc}")
        sys.exit(1)

    # -- replace bootstrap logging with structured logging ---
    from sslstatus.logging import configure_logging

    configure_logging(config.settings.logging)

    if args.validate_only:
        _print_settings_summary(config)
        sys.exit(0)

    command = args.command

    if command == "check":
        from sslstatus.cli.commands.check import run_check

        run_check(config, args)
    elif command == "serve":
        from sslstatus.cli.commands.serve import run_serve

        try:
            run_serve(config, args)
        except RuntimeError as exc:
            _print_error(str(exc))
            sys.exit(1)
    else:
        # Default: status
        from sslstatus.cli.commands.status import run_status

        run_status(config, args)


def _print_settings_summary(config) -> None:
    """Print a short summary of the loaded configuration."""
    s = config.settings
    lines = [
        f"Configuration OK: {getattr(config, '_config_path', '?')}",
        f"  protocol:  {s.server.protocol}",
        f"  acme:      {'enabled' if s.acme.enabled else 'disabled'}",
        f"  cert_file: {s.server.cert_file or '-'}",
        f"  key_file:  {s.server.key_file or '-'}",
        f"  admin:     {s.admin.base_path if s.admin.enabled else 'disabled'}",
    ]
    sys.stdout.write("\n".join(lines) + "\n")
