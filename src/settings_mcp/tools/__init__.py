"""Tools exposed over MCP and the registry that holds them."""

from settings_mcp.providers import Providers
from settings_mcp.tools.base import ToolBase, ToolDefinition, ToolResult
from settings_mcp.tools.brightness import BrightnessTool
from settings_mcp.tools.registry import RegistryError, ToolNotFoundError, ToolRegistry
from settings_mcp.tools.system_info import SystemInfoTool
from settings_mcp.tools.validation import ArgumentError, validate_arguments
from settings_mcp.tools.volume import VolumeTool


def build_registry(providers: Providers) -> ToolRegistry:
    """Register the built-in tools in their advertised order."""
    return ToolRegistry(
        [
            BrightnessTool(providers.brightness),
            VolumeTool(providers.volume),
            SystemInfoTool(providers.system_info),
        ]
    )


__all__ = [
    "ArgumentError",
    "BrightnessTool",
    "RegistryError",
    "SystemInfoTool",
    "ToolBase",
    "ToolDefinition",
    "ToolNotFoundError",
    "ToolRegistry",
    "ToolResult",
    "VolumeTool",
    "build_registry",
    "validate_arguments",
]
