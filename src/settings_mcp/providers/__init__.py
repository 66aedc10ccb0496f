"""Capability providers for brightness, volume and system inventory."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass

from settings_mcp.config import ServerConfig
from settings_mcp.providers.base import (
    SYSTEM_INFO_CATEGORIES,
    BrightnessProvider,
    ProviderResult,
    SystemInfoProvider,
    VolumeProvider,
    collect_all,
)
from settings_mcp.providers.linux import (
    PsutilSystemInfoProvider,
    PulseAudioVolumeProvider,
    SysfsBrightnessProvider,
)
from settings_mcp.providers.memory import (
    MemoryBrightnessProvider,
    MemorySystemInfoProvider,
    MemoryVolumeProvider,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Providers:
    """The provider set shared by all tools."""

    brightness: BrightnessProvider
    volume: VolumeProvider
    system_info: SystemInfoProvider


def resolve_backend(backend: str, platform: str = sys.platform) -> str:
    """Turn ``auto`` into a concrete backend name for this host."""
    if backend != "auto":
        return backend
    return "linux" if platform.startswith("linux") else "memory"


def create_providers(config: ServerConfig) -> Providers:
    """Build the providers selected by the configuration."""
    backend = resolve_backend(config.backend)
    logger.info("Using %s capability providers", backend)

    if backend == "linux":
        brightness: BrightnessProvider = SysfsBrightnessProvider(device=config.backlight_device)
        volume: VolumeProvider = PulseAudioVolumeProvider(pactl=config.pactl)
        return Providers(brightness, volume, PsutilSystemInfoProvider(brightness, volume))

    brightness = MemoryBrightnessProvider()
    volume = MemoryVolumeProvider()
    return Providers(brightness, volume, MemorySystemInfoProvider(brightness, volume))


__all__ = [
    "SYSTEM_INFO_CATEGORIES",
    "BrightnessProvider",
    "MemoryBrightnessProvider",
    "MemorySystemInfoProvider",
    "MemoryVolumeProvider",
    "ProviderResult",
    "Providers",
    "PsutilSystemInfoProvider",
    "PulseAudioVolumeProvider",
    "SysfsBrightnessProvider",
    "SystemInfoProvider",
    "VolumeProvider",
    "collect_all",
    "create_providers",
    "resolve_backend",
]
