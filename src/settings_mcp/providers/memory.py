"""Simulated providers that keep their state in memory.

Used on hosts without controllable hardware and by the test-suite. Setting
``error`` on a provider makes every call fail with that message.
"""

from __future__ import annotations

from typing import Any

from settings_mcp.providers.base import (
    BrightnessProvider,
    ProviderResult,
    SystemInfoProvider,
    VolumeProvider,
    collect_all,
)


class MemoryBrightnessProvider(BrightnessProvider):
    """Brightness held in a plain attribute."""

    def __init__(self, level: int = 50, error: str | None = None) -> None:
        self.level = level
        self.error = error

    def get(self) -> ProviderResult[int]:
        if self.error:
            return ProviderResult.failure(self.error)
        return ProviderResult.success(self.level)

    def set(self, value: int) -> ProviderResult[None]:
        if self.error:
            return ProviderResult.failure(self.error)
        self.level = value
        return ProviderResult.success()


class MemoryVolumeProvider(VolumeProvider):
    """A single simulated output device."""

    def __init__(
        self,
        volume: int = 50,
        muted: bool = False,
        device_name: str = "Simulated Speakers",
        error: str | None = None,
    ) -> None:
        self.volume = volume
        self.muted = muted
        self.device_name = device_name
        self.error = error

    def get_volume(self) -> ProviderResult[int]:
        if self.error:
            return ProviderResult.failure(self.error)
        return ProviderResult.success(self.volume)

    def set_volume(self, value: int) -> ProviderResult[None]:
        if self.error:
            return ProviderResult.failure(self.error)
        self.volume = value
        return ProviderResult.success()

    def get_mute(self) -> ProviderResult[bool]:
        if self.error:
            return ProviderResult.failure(self.error)
        return ProviderResult.success(self.muted)

    def set_mute(self, muted: bool) -> ProviderResult[None]:
        if self.error:
            return ProviderResult.failure(self.error)
        self.muted = muted
        return ProviderResult.success()

    def describe_devices(self) -> ProviderResult[dict[str, Any]]:
        if self.error:
            return ProviderResult.failure(self.error)
        device_id = "memory-0"
        return ProviderResult.success(
            {
                "deviceName": self.device_name,
                "deviceId": device_id,
                "state": "Active",
                "volume": self.volume,
                "isMuted": self.muted,
                "availableDevices": [
                    {
                        "name": self.device_name,
                        "id": device_id,
                        "state": "Active",
                        "isDefault": True,
                    }
                ],
            }
        )


DEFAULT_INVENTORY: dict[str, dict[str, Any]] = {
    "hardware": {
        "computerName": "simulated-host",
        "manufacturer": "Simulated",
        "model": "Virtual Machine",
        "totalPhysicalMemory": "17179869184",
    },
    "display": {
        "displays": [
            {
                "name": "Simulated Display",
                "currentHorizontalResolution": "1920",
                "currentVerticalResolution": "1080",
            }
        ],
    },
    "power": {
        "powerPlans": [{"elementName": "Balanced", "isActive": True}],
    },
}


class MemorySystemInfoProvider(SystemInfoProvider):
    """Static inventory plus live values from the sibling providers."""

    def __init__(
        self,
        brightness: BrightnessProvider,
        volume: VolumeProvider,
        inventory: dict[str, dict[str, Any]] | None = None,
    ) -> None:
        self._brightness = brightness
        self._volume = volume
        self._inventory = DEFAULT_INVENTORY if inventory is None else inventory

    def query(self, category: str) -> ProviderResult[dict[str, Any]]:
        if category == "all":
            return ProviderResult.success(collect_all(self))
        if category == "audio":
            return self._volume.describe_devices()
        if category not in self._inventory:
            return ProviderResult.failure(f"No {category} information available")

        info = dict(self._inventory[category])
        if category == "display":
            level = self._brightness.get()
            if level.ok:
                info["brightness"] = level.value
        return ProviderResult.success(info)
