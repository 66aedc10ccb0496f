#!/usr/bin/env python3
"""System Settings MCP Server - Main entry point.

Exposes display brightness, audio volume and system inventory to an MCP
client over newline-delimited JSON-RPC on stdin/stdout.

================================================================================
DEVELOPER GUIDE: Adding a New Tool
================================================================================

1. WRAP THE PLATFORM CAPABILITY
   Add an abstract provider to src/settings_mcp/providers/base.py. Provider
   methods return ProviderResult values and never raise; put the real
   implementation in providers/linux.py and a simulated one in
   providers/memory.py.

2. WRITE THE TOOL
   Subclass ToolBase (src/settings_mcp/tools/base.py). Declare the accepted
   arguments in input_schema; execute() validates them against it before
   run() is called, so run() only sees well-formed arguments.

3. REGISTER IT
   Add the tool to build_registry() in src/settings_mcp/tools/__init__.py.
   The registry is fixed once the server starts, and tools/list reports
   tools in registration order.

EXAMPLE: A Keyboard Backlight Tool
----------------------------------

    class KeyboardBacklightTool(ToolBase):
        value_label = "Keyboard backlight"

        def __init__(self, provider: BrightnessProvider) -> None:
            self._provider = provider

        @property
        def name(self) -> str:
            return "adjust_keyboard_backlight"

        ...

    def build_registry(providers: Providers) -> ToolRegistry:
        return ToolRegistry([..., KeyboardBacklightTool(providers.keyboard)])

TESTING
-------
Use the memory providers from settings_mcp.providers.memory to drive a tool
without touching hardware. See tests/test_brightness.py.

================================================================================
"""

from __future__ import annotations

import sys

from settings_mcp.cli import main

if __name__ == "__main__":
    sys.exit(main())
