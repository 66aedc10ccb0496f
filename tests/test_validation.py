"""Tests for schema-based argument validation."""

import pytest

from settings_mcp.tools.brightness import BRIGHTNESS_SCHEMA
from settings_mcp.tools.system_info import SYSTEM_INFO_SCHEMA
from settings_mcp.tools.validation import ArgumentError, validate_arguments
from settings_mcp.tools.volume import VOLUME_SCHEMA


def message_for(schema: dict, arguments, label: str = "Value") -> str:
    with pytest.raises(ArgumentError) as exc_info:
        validate_arguments(schema, arguments, label)
    return str(exc_info.value)


class TestValidArguments:
    """Tests for arguments that pass."""

    @pytest.mark.parametrize(
        "arguments",
        [
            {"action": "get"},
            {"action": "set", "value": 0},
            {"action": "set", "value": 100},
            {"action": "set", "value": 55.0},
        ],
    )
    def test_accepts_valid_brightness_arguments(self, arguments: dict):
        """Should accept well-formed arguments."""
        validate_arguments(BRIGHTNESS_SCHEMA, arguments)


class TestViolations:
    """Tests for the messages produced by each kind of violation."""

    def test_missing_action(self):
        """Should name the missing field."""
        assert message_for(BRIGHTNESS_SCHEMA, {}) == "Invalid arguments: action is required"

    def test_missing_value_for_set(self):
        """Should explain the conditional requirement."""
        assert message_for(VOLUME_SCHEMA, {"action": "set"}) == (
            "Value is required when action is 'set'"
        )

    def test_unknown_action_lists_supported_set(self):
        """Should list the supported actions."""
        assert message_for(VOLUME_SCHEMA, {"action": "louder"}) == (
            "Unknown action: louder. Supported actions: get, set, mute, unmute"
        )

    def test_unknown_category_uses_plural(self):
        """Should pluralise the field name."""
        message = message_for(SYSTEM_INFO_SCHEMA, {"category": "network"})

        assert message.startswith("Unknown category: network. Supported categories: all")

    @pytest.mark.parametrize("value", [-1, 101, 150])
    def test_out_of_range_names_bounds(self, value: int):
        """Should name the inclusive range."""
        assert message_for(BRIGHTNESS_SCHEMA, {"action": "set", "value": value}, "Brightness") == (
            "Brightness value must be between 0 and 100"
        )

    @pytest.mark.parametrize("value", ["50", True, 50.5, None])
    def test_wrong_type(self, value):
        """Should reject non-integer values."""
        message = message_for(BRIGHTNESS_SCHEMA, {"action": "set", "value": value})

        assert message == "Invalid arguments: value must be of type integer"

    def test_non_object_arguments(self):
        """Should reject arguments that are not an object."""
        assert message_for(BRIGHTNESS_SCHEMA, ["get"]) == "Invalid arguments: expected an object"

    def test_missing_field_beats_range(self):
        """Should report the most useful violation first."""
        message = message_for(BRIGHTNESS_SCHEMA, {"value": 500})

        assert message == "Invalid arguments: action is required"
