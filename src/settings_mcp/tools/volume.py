"""System volume tool."""

from __future__ import annotations

from typing import Any

from settings_mcp.providers.base import VolumeProvider
from settings_mcp.tools.base import ToolBase, ToolResult

VOLUME_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "action": {
            "type": "string",
            "enum": ["get", "set", "mute", "unmute"],
            "description": "Volume action to perform",
        },
        "value": {
            "type": "integer",
            "minimum": 0,
            "maximum": 100,
            "description": "Volume level (0-100%). Required when action is 'set'",
        },
    },
    "required": ["action"],
    "if": {"properties": {"action": {"const": "set"}}},
    "then": {"required": ["value"]},
}


class VolumeTool(ToolBase):
    """Reads and changes the default output volume and mute state."""

    value_label = "Volume"

    def __init__(self, provider: VolumeProvider) -> None:
        self._provider = provider

    @property
    def name(self) -> str:
        return "adjust_volume"

    @property
    def description(self) -> str:
        return (
            "Get or set the system volume level, or mute/unmute audio. Use 'get' to "
            "retrieve current volume, 'set' to change volume (0-100%), 'mute' to mute "
            "audio, or 'unmute' to unmute audio."
        )

    @property
    def input_schema(self) -> dict[str, Any]:
        return VOLUME_SCHEMA

    def run(self, arguments: dict[str, Any]) -> ToolResult:
        action = arguments["action"]
        if action == "get":
            return self._get()
        if action == "set":
            return self._set(int(arguments["value"]))
        return self._set_mute(action == "mute")

    def _get(self) -> ToolResult:
        volume = self._provider.get_volume()
        if not volume.ok:
            return ToolResult.error(f"Failed to retrieve volume level. {volume.error}")
        muted = self._provider.get_mute()
        if not muted.ok:
            return ToolResult.error(f"Failed to retrieve mute status. {muted.error}")

        status = " (muted)" if muted.value else ""
        return ToolResult.text(f"Current system volume: {volume.value}%{status}")

    def _set(self, value: int) -> ToolResult:
        result = self._provider.set_volume(value)
        if not result.ok:
            return ToolResult.error(f"Failed to set volume to {value}%. {result.error}")
        return ToolResult.text(f"Successfully set system volume to {value}%")

    def _set_mute(self, mute: bool) -> ToolResult:
        verb = "mute" if mute else "unmute"
        result = self._provider.set_mute(mute)
        if not result.ok:
            return ToolResult.error(f"Failed to {verb} system audio. {result.error}")
        return ToolResult.text(f"Successfully {verb}d system audio")
