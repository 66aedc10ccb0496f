"""System information tool."""

from __future__ import annotations

import re
from typing import Any

from settings_mcp.providers.base import SYSTEM_INFO_CATEGORIES, SystemInfoProvider
from settings_mcp.tools.base import ToolBase, ToolResult

SYSTEM_INFO_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "category": {
            "type": "string",
            "enum": list(SYSTEM_INFO_CATEGORIES),
            "description": "Category of system information to retrieve",
        },
    },
    "required": ["category"],
}


_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def _title(key: str) -> str:
    """Turn ``display_currentMode`` into ``Display Current Mode``."""
    words = _CAMEL_BOUNDARY.sub(" ", key).replace("_", " ").split()
    return " ".join(word[:1].upper() + word[1:] for word in words)


def _format_value(value: Any) -> str:
    if value is None:
        return "N/A"
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, dict):
        return ", ".join(f"{k}={_format_value(v)}" for k, v in value.items())
    return str(value)


def format_report(info: dict[str, Any], category: str) -> str:
    """Render inventory as the plain-text report returned to the client.

    Args:
        info: Inventory mapping.
        category: Category the inventory belongs to.

    Returns:
        Multi-line report, keys sorted.
    """
    lines = [f"=== System Information ({category.upper()}) ===", ""]
    for key in sorted(info):
        value = info[key]
        if isinstance(value, list):
            lines.append(f"{_title(key)}:")
            lines.extend(f"  - {_format_value(item)}" for item in value)
        else:
            lines.append(f"{_title(key)}: {_format_value(value)}")
    return "\n".join(lines)


class SystemInfoTool(ToolBase):
    """Reports hardware, display, audio and power inventory."""

    selector = "category"

    def __init__(self, provider: SystemInfoProvider) -> None:
        self._provider = provider

    @property
    def name(self) -> str:
        return "get_system_info"

    @property
    def description(self) -> str:
        return (
            "Retrieve system information including hardware, display, audio, and power "
            "settings. Categories: 'all', 'hardware', 'display', 'audio', 'power'."
        )

    @property
    def input_schema(self) -> dict[str, Any]:
        return SYSTEM_INFO_SCHEMA

    def run(self, arguments: dict[str, Any]) -> ToolResult:
        category = arguments["category"]
        result = self._provider.query(category)
        if not result.ok:
            return ToolResult.error(f"Error retrieving {category} information: {result.error}")
        return ToolResult.text(format_report(result.value or {}, category))
