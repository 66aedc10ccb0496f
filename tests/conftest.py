"""Shared fixtures: in-memory providers, the tool registry and a server."""

import pytest

from settings_mcp.config import ServerConfig
from settings_mcp.providers import Providers
from settings_mcp.providers.memory import (
    MemoryBrightnessProvider,
    MemorySystemInfoProvider,
    MemoryVolumeProvider,
)
from settings_mcp.server import MCPServer
from settings_mcp.tools import ToolRegistry, build_registry


@pytest.fixture
def brightness() -> MemoryBrightnessProvider:
    return MemoryBrightnessProvider(level=40)


@pytest.fixture
def volume() -> MemoryVolumeProvider:
    return MemoryVolumeProvider(volume=30)


@pytest.fixture
def providers(brightness: MemoryBrightnessProvider, volume: MemoryVolumeProvider) -> Providers:
    return Providers(
        brightness=brightness,
        volume=volume,
        system_info=MemorySystemInfoProvider(brightness, volume),
    )


@pytest.fixture
def registry(providers: Providers) -> ToolRegistry:
    return build_registry(providers)


@pytest.fixture
def server(registry: ToolRegistry) -> MCPServer:
    """Server without a tool deadline so calls run on the test thread."""
    return MCPServer(registry, config=ServerConfig(tool_timeout=0))
