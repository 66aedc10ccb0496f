"""Tests for the adjust_brightness tool."""

from unittest.mock import MagicMock

import pytest

from settings_mcp.providers.base import BrightnessProvider, ProviderResult
from settings_mcp.providers.memory import MemoryBrightnessProvider
from settings_mcp.tools import BrightnessTool


def text_of(result) -> str:
    return result.content[0]["text"]


class TestBrightnessTool:
    """Tests for BrightnessTool."""

    def test_definition(self):
        """Should advertise name, description and schema."""
        definition = BrightnessTool(MemoryBrightnessProvider()).definition.to_dict()

        assert definition["name"] == "adjust_brightness"
        assert definition["inputSchema"]["properties"]["action"]["enum"] == ["get", "set"]

    def test_get(self):
        """Should report the current level."""
        result = BrightnessTool(MemoryBrightnessProvider(level=65)).execute({"action": "get"})

        assert result.is_error is False
        assert text_of(result) == "Current display brightness: 65%"

    def test_set(self):
        """Should change the level through the provider."""
        provider = MemoryBrightnessProvider(level=10)

        result = BrightnessTool(provider).execute({"action": "set", "value": 80})

        assert text_of(result) == "Successfully set display brightness to 80%"
        assert provider.level == 80

    def test_action_is_case_insensitive(self):
        """Should accept upper-case actions."""
        result = BrightnessTool(MemoryBrightnessProvider()).execute({"action": "GET"})

        assert result.is_error is False

    @pytest.mark.parametrize("value", [-5, 101, 150])
    def test_out_of_range_never_calls_provider(self, value: int):
        """Should reject out-of-range values before the provider is used."""
        provider = MagicMock(spec=BrightnessProvider)

        result = BrightnessTool(provider).execute({"action": "set", "value": value})

        assert result.is_error is True
        assert text_of(result) == "Brightness value must be between 0 and 100"
        provider.set.assert_not_called()

    def test_unknown_action(self):
        """Should name the supported actions."""
        result = BrightnessTool(MemoryBrightnessProvider()).execute({"action": "dim"})

        assert result.is_error is True
        assert "Supported actions: get, set" in text_of(result)

    def test_set_without_value(self):
        """Should require a value for set."""
        provider = MagicMock(spec=BrightnessProvider)

        result = BrightnessTool(provider).execute({"action": "set"})

        assert text_of(result) == "Value is required when action is 'set'"
        provider.set.assert_not_called()

    def test_provider_failure_on_get(self):
        """Should surface provider failures as tool errors."""
        provider = MemoryBrightnessProvider(error="No backlight device found")

        result = BrightnessTool(provider).execute({"action": "get"})

        assert result.is_error is True
        assert text_of(result) == "Failed to retrieve brightness level. No backlight device found"

    def test_provider_failure_on_set(self):
        """Should describe the failed set."""
        provider = MagicMock(spec=BrightnessProvider)
        provider.set.return_value = ProviderResult.failure("Permission denied")

        result = BrightnessTool(provider).execute({"action": "set", "value": 20})

        assert result.is_error is True
        assert text_of(result) == "Failed to set brightness to 20%. Permission denied"

    def test_raising_provider_becomes_tool_error(self):
        """Should never let a provider exception escape execute."""
        provider = MagicMock(spec=BrightnessProvider)
        provider.get.side_effect = RuntimeError("driver crashed")

        result = BrightnessTool(provider).execute({"action": "get"})

        assert result.is_error is True
        assert "driver crashed" in text_of(result)
