"""STDIO transport layer for MCP communication.

Reads newline-delimited JSON-RPC messages from stdin and writes one
response line per request to stdout. Diagnostics go through ``logging``,
which the CLI points at stderr so the protocol stream stays clean.
"""

from __future__ import annotations

import logging
import sys
import threading
from collections.abc import Callable
from typing import TextIO

logger = logging.getLogger(__name__)

MessageHandler = Callable[[str], "str | None"]


class StdioTransport:
    """STDIO transport for MCP communication.

    Reads JSON-RPC messages from stdin and writes responses to stdout.
    """

    def __init__(
        self,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            stdin: Input stream (defaults to sys.stdin).
            stdout: Output stream (defaults to sys.stdout).
        """
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stdout

    def read_message(self) -> str | None:
        """Read a message from stdin.

        Reads lines until a non-blank line is found.

        Returns:
            Message string (stripped), or None on EOF.
        """
        while True:
            try:
                line = self._stdin.readline()
            except (OSError, ValueError) as e:
                logger.error("Failed to read from input stream: %s", e)
                return None

            if not line:  # EOF
                return None

            line = line.strip()
            if line:  # Skip blank lines
                return line

    def write_message(self, message: str) -> None:
        """Write a message to stdout and flush it.

        Args:
            message: JSON string to write.
        """
        self._stdout.write(message + "\n")
        self._stdout.flush()

    def serve(
        self,
        handler: MessageHandler,
        stop_event: threading.Event | None = None,
    ) -> None:
        """Run the read -> handle -> write loop.

        The stop event is only looked at between messages, so a request
        that is already being handled always gets its response.

        Args:
            handler: Turns one raw message into a response line, or None
                when nothing should be written.
            stop_event: Optional event that ends the loop once set.
        """
        while stop_event is None or not stop_event.is_set():
            message = self.read_message()
            if message is None:
                logger.info("EOF received, shutting down")
                return

            response = handler(message)
            if response is not None:
                self.write_message(response)

        logger.info("Shutdown requested, leaving message loop")
