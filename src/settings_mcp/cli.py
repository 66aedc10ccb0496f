"""Command line entry point.

Loads the configuration, wires providers and tools together, and runs the
stdio message loop until EOF or a termination signal.
"""

from __future__ import annotations

import argparse
import logging
import signal
import sys
import threading
from dataclasses import replace
from pathlib import Path
from typing import TextIO

from settings_mcp import __version__
from settings_mcp.audit import AuditLogger
from settings_mcp.config import BACKENDS, LOG_LEVELS, ConfigLoadError, ServerConfig, load_config
from settings_mcp.protocol.transport import StdioTransport
from settings_mcp.providers import create_providers
from settings_mcp.server import MCPServer
from settings_mcp.tools import RegistryError, build_registry

logger = logging.getLogger("settings_mcp")

LOG_FORMAT = "[MCP] %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str, stream: TextIO | None = None) -> None:
    """Send all diagnostics to stderr so stdout only carries protocol lines."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        stream=stream or sys.stderr,
        force=True,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="settings-mcp",
        description="MCP server exposing display brightness, volume and system information",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="Path to the YAML configuration file (defaults are used when omitted)",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        type=str.upper,
        default=None,
        help="Override the configured log level",
    )
    parser.add_argument(
        "--backend",
        choices=BACKENDS,
        default=None,
        help="Override the configured capability provider backend",
    )
    parser.add_argument(
        "--version",
        "-v",
        action="version",
        version=f"system-settings-mcp {__version__}",
    )
    return parser


def _apply_overrides(config: ServerConfig, args: argparse.Namespace) -> ServerConfig:
    changes = {}
    if args.log_level:
        changes["log_level"] = args.log_level
    if args.backend:
        changes["backend"] = args.backend
    if not changes:
        return config
    return replace(config, **changes)


def main(
    argv: list[str] | None = None,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> int:
    """Run the MCP server.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config) if args.config else ServerConfig()
    except ConfigLoadError as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1
    config = _apply_overrides(config, args)
    configure_logging(config.log_level)

    try:
        registry = build_registry(create_providers(config))
    except RegistryError as e:
        logger.error("Error registering tools: %s", e)
        return 1

    audit = None
    if config.audit_log_file:
        try:
            audit = AuditLogger(Path(config.audit_log_file))
        except OSError as e:
            logger.error("Error opening audit log %s: %s", config.audit_log_file, e)
            return 1

    transport = StdioTransport(stdin=stdin, stdout=stdout)
    stop_event = threading.Event()

    def request_stop(signum: int, frame: object) -> None:
        # A second Ctrl-C abandons the in-flight request
        if signum == signal.SIGINT and stop_event.is_set():
            raise KeyboardInterrupt
        logger.info("Received signal %d, stopping after the current request", signum)
        stop_event.set()

    previous = {sig: signal.signal(sig, request_stop) for sig in (signal.SIGTERM, signal.SIGINT)}
    logger.info("%s %s started", config.server_name, config.server_version)

    try:
        with MCPServer(registry, config=config, audit=audit) as server:
            transport.serve(server.handle_message, stop_event)
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
        return 130  # Standard exit code for SIGINT
    except Exception:
        logger.exception("Fatal error in MCP server")
        return 1
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)

    return 0


if __name__ == "__main__":
    sys.exit(main())
