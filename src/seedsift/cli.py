"""CLI entry point for the SeedSift server."""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

CONFIG_ENV_VAR = "SEEDSIFT_CONFIG"


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the ``seedsift`` command."""
    parser = argparse.ArgumentParser(
        prog="seedsift",
        description="SeedSift — magnet search aggregator with adapter fallback",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to YAML configuration file",
    )
    parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="Server bind address (overrides config)",
    )
    parser.add_argument(
        "--port",
        "-p",
        type=int,
        default=None,
        help="Server port (overrides config)",
    )
    parser.add_argument(
        "--workers",
        "-w",
        type=int,
        default=None,
        help="Number of worker processes",
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development",
    )
    parser.add_argument(
        "--adapter",
        type=str,
        default=None,
        help="Default adapter id (overrides config)",
    )
    parser.add_argument(
        "--fallback",
        type=str,
        default=None,
        help="Fallback adapter id; pass an empty string to disable (overrides config)",
    )
    parser.add_argument(
        "--history-file",
        type=str,
        default=None,
        help="Path of the search history JSON file (overrides config)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["debug", "info", "warning", "error"],
        default=None,
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"SeedSift {_get_version()}",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point for the SeedSift server."""
    args = build_parser().parse_args(argv)

    from seedsift.config.settings import Settings
    from seedsift.observability.logging import setup_logging

    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Error: Config file not found: {config_path}", file=sys.stderr)
            sys.exit(1)
        settings = Settings.from_yaml(config_path)
    else:
        settings = Settings()

    # Apply CLI overrides
    if args.host:
        settings.server.host = args.host
    if args.port:
        settings.server.port = args.port
    if args.workers:
        settings.server.workers = args.workers
    if args.adapter:
        settings.search.default_adapter = args.adapter
    if args.fallback is not None:
        settings.search.fallback_adapter = args.fallback
    if args.history_file:
        settings.history.file = args.history_file
    if args.log_level:
        settings.observability.log_level = args.log_level

    setup_logging(settings.observability)

    # Check port availability before starting
    _check_port(settings.server.host, settings.server.port)

    import uvicorn

    log_level = settings.observability.log_level.lower()
    if args.reload or settings.server.workers > 1:
        # Reloaded and forked workers rebuild the app from the config file
        if args.config:
            os.environ[CONFIG_ENV_VAR] = str(Path(args.config).resolve())
        uvicorn.run(
            "seedsift.api.app:create_app",
            factory=True,
            host=settings.server.host,
            port=settings.server.port,
            workers=settings.server.workers if not args.reload else 1,
            reload=args.reload,
            log_level=log_level,
            log_config=None,
        )
        return

    from seedsift.api.app import create_app

    uvicorn.run(
        create_app(settings),
        host=settings.server.host,
        port=settings.server.port,
        log_level=log_level,
        log_config=None,
    )


def _check_port(host: str, port: int) -> None:
    """Check if the port is available. If not, print the blocking process and exit."""
    import socket
    import subprocess

    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        sock.bind((host if host != "0.0.0.0" else "127.0.0.1", port))
    except OSError:
        print(f"\n{'=' * 60}", file=sys.stderr)
        print(f"  ERROR: Port {port} is already in use!", file=sys.stderr)
        print(f"{'=' * 60}", file=sys.stderr)

        try:
            result = subprocess.run(
                ["lsof", "-i", f":{port}", "-P", "-n"],
                capture_output=True,
                text=True,
                timeout=5,
            )
            lines = result.stdout.strip().splitlines()
            if lines:
                print(f"\n  Processes using port {port}:\n", file=sys.stderr)
                for line in lines:
                    print(f"    {line}", file=sys.stderr)
                pids = sorted({parts[1] for parts in (line.split() for line in lines[1:]) if len(parts) >= 2})
                if pids:
                    print(f"\n  To free the port, run:\n    kill {' '.join(pids)}", file=sys.stderr)
            else:
                print(f"\n  Could not identify the process using port {port}.", file=sys.stderr)
        except (subprocess.TimeoutExpired, FileNotFoundError):
            print(f"\n  Run 'lsof -i :{port}' to find the process.", file=sys.stderr)

        print(f"\n{'=' * 60}\n", file=sys.stderr)
        sys.exit(1)
    finally:
        sock.close()


def _get_version() -> str:
    """Get the package version."""
    from seedsift import __version__

    return __version__


if __name__ == "__main__":
    main()
