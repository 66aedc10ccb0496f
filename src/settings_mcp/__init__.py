"""System settings MCP server.

Exposes display brightness, audio volume and system inventory as MCP
tools over newline-delimited JSON-RPC on stdin/stdout.
"""

__version__ = "1.0.0"
