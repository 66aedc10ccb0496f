"""Linux providers backed by sysfs, PulseAudio/PipeWire and psutil.

Every failure is returned as a ``ProviderResult.failure`` whose message
names the most likely cause (missing hardware, missing utility, or
insufficient permissions).
"""

from __future__ import annotations

import logging
import platform
import re
import subprocess
from collections.abc import Callable
from pathlib import Path
from typing import Any

import psutil

from settings_mcp.providers.base import (
    BrightnessProvider,
    ProviderResult,
    SystemInfoProvider,
    VolumeProvider,
    collect_all,
)

logger = logging.getLogger(__name__)

SYSFS_ROOT = Path("/sys")
DEFAULT_SINK = "@DEFAULT_SINK@"
PACTL_TIMEOUT = 5.0

_PERCENT = re.compile(r"(\d+)%")


def _read_text(path: Path) -> str | None:
    try:
        return path.read_text(encoding="utf-8").strip()
    except OSError:
        return None


class SysfsBrightnessProvider(BrightnessProvider):
    """Backlight control through ``/sys/class/backlight``."""

    def __init__(self, sysfs_root: Path = SYSFS_ROOT, device: str | None = None) -> None:
        """Initialize the provider.

        Args:
            sysfs_root: Mount point of sysfs.
            device: Backlight device name; the first one found when None.
        """
        self._backlight_dir = sysfs_root / "class" / "backlight"
        self._device = device

    def _device_dir(self) -> Path | None:
        if self._device:
            path = self._backlight_dir / self._device
            return path if path.is_dir() else None
        try:
            devices = sorted(p for p in self._backlight_dir.iterdir() if p.is_dir())
        except OSError:
            return None
        return devices[0] if devices else None

    def _no_device(self) -> str:
        return (
            f"No backlight device found under {self._backlight_dir}. "
            "This display may not support software brightness control."
        )

    def _max_brightness(self, device: Path) -> int | None:
        raw = _read_text(device / "max_brightness")
        if raw is None or not raw.isdigit() or int(raw) == 0:
            return None
        return int(raw)

    def get(self) -> ProviderResult[int]:
        device = self._device_dir()
        if device is None:
            return ProviderResult.failure(self._no_device())

        maximum = self._max_brightness(device)
        current = _read_text(device / "actual_brightness") or _read_text(device / "brightness")
        if maximum is None or current is None or not current.isdigit():
            return ProviderResult.failure(f"Could not read brightness from {device}")

        return ProviderResult.success(round(int(current) * 100 / maximum))

    def set(self, value: int) -> ProviderResult[None]:
        device = self._device_dir()
        if device is None:
            return ProviderResult.failure(self._no_device())

        maximum = self._max_brightness(device)
        if maximum is None:
            return ProviderResult.failure(f"Could not read max_brightness from {device}")

        target = device / "brightness"
        try:
            target.write_text(str(round(value * maximum / 100)), encoding="utf-8")
        except PermissionError:
            return ProviderResult.failure(
                f"Permission denied writing {target}. "
                "Grant write access to the backlight device (for example via a udev rule)."
            )
        except OSError as e:
            return ProviderResult.failure(f"Failed to write {target}: {e}")

        logger.info("Set brightness of %s to %d%%", device.name, value)
        return ProviderResult.success()


Runner = Callable[..., "subprocess.CompletedProcess[str]"]


class PulseAudioVolumeProvider(VolumeProvider):
    """Default sink control through the ``pactl`` utility."""

    def __init__(self, pactl: str = "pactl", runner: Runner = subprocess.run) -> None:
        """Initialize the provider.

        Args:
            pactl: Path or name of the pactl binary.
            runner: Callable with the ``subprocess.run`` signature.
        """
        self._pactl = pactl
        self._runner = runner

    def _run(self, *args: str) -> ProviderResult[str]:
        command = [self._pactl, *args]
        try:
            completed = self._runner(
                command,
                capture_output=True,
                text=True,
                timeout=PACTL_TIMEOUT,
                check=False,
            )
        except FileNotFoundError:
            return ProviderResult.failure(
                f"{self._pactl} not found. PulseAudio or PipeWire utilities are "
                "required for volume control."
            )
        except subprocess.TimeoutExpired:
            return ProviderResult.failure(
                f"{self._pactl} {args[0]} timed out. The audio server may not be running."
            )

        if completed.returncode != 0:
            detail = (completed.stderr or "").strip() or f"exit code {completed.returncode}"
            return ProviderResult.failure(f"{self._pactl} {args[0]} failed: {detail}")
        return ProviderResult.success(completed.stdout)

    def get_volume(self) -> ProviderResult[int]:
        output = self._run("get-sink-volume", DEFAULT_SINK)
        if not output.ok:
            return ProviderResult.failure(output.error or "")
        match = _PERCENT.search(output.value or "")
        if match is None:
            return ProviderResult.failure("Could not parse volume from pactl output")
        return ProviderResult.success(int(match.group(1)))

    def set_volume(self, value: int) -> ProviderResult[None]:
        output = self._run("set-sink-volume", DEFAULT_SINK, f"{value}%")
        if not output.ok:
            return ProviderResult.failure(output.error or "")
        return ProviderResult.success()

    def get_mute(self) -> ProviderResult[bool]:
        output = self._run("get-sink-mute", DEFAULT_SINK)
        if not output.ok:
            return ProviderResult.failure(output.error or "")
        return ProviderResult.success("yes" in (output.value or "").lower())

    def set_mute(self, muted: bool) -> ProviderResult[None]:
        output = self._run("set-sink-mute", DEFAULT_SINK, "1" if muted else "0")
        if not output.ok:
            return ProviderResult.failure(output.error or "")
        return ProviderResult.success()

    def describe_devices(self) -> ProviderResult[dict[str, Any]]:
        default = self._run("get-default-sink")
        if not default.ok:
            return ProviderResult.failure(default.error or "")
        default_name = (default.value or "").strip()

        sinks = self._run("list", "short", "sinks")
        if not sinks.ok:
            return ProviderResult.failure(sinks.error or "")

        devices = []
        for line in (sinks.value or "").splitlines():
            fields = line.split("\t")
            if len(fields) < 2:
                continue
            devices.append(
                {
                    "name": fields[1],
                    "id": fields[0],
                    "state": fields[4] if len(fields) > 4 else "UNKNOWN",
                    "isDefault": fields[1] == default_name,
                }
            )

        info: dict[str, Any] = {"deviceName": default_name}
        for device in devices:
            if device["isDefault"]:
                info["deviceId"] = device["id"]
                info["state"] = device["state"]

        volume = self.get_volume()
        if volume.ok:
            info["volume"] = volume.value
        muted = self.get_mute()
        if muted.ok:
            info["isMuted"] = muted.value

        info["availableDevices"] = devices
        return ProviderResult.success(info)


class PsutilSystemInfoProvider(SystemInfoProvider):
    """Inventory from ``platform``, ``psutil`` and sysfs."""

    def __init__(
        self,
        brightness: BrightnessProvider,
        volume: VolumeProvider,
        sysfs_root: Path = SYSFS_ROOT,
    ) -> None:
        self._brightness = brightness
        self._volume = volume
        self._sysfs_root = sysfs_root

    def query(self, category: str) -> ProviderResult[dict[str, Any]]:
        if category == "all":
            return ProviderResult.success(collect_all(self))
        if category == "audio":
            return self._volume.describe_devices()

        handlers = {
            "hardware": self._hardware,
            "display": self._display,
            "power": self._power,
        }
        handler = handlers.get(category)
        if handler is None:
            return ProviderResult.failure(f"Unknown category: {category}")

        try:
            return ProviderResult.success(handler())
        except (OSError, RuntimeError) as e:
            logger.error("Failed to get %s info: %s", category, e)
            return ProviderResult.failure(f"Failed to read {category} information: {e}")

    def _hardware(self) -> dict[str, Any]:
        dmi = self._sysfs_root / "class" / "dmi" / "id"
        return {
            "computerName": platform.node() or "Unknown",
            "manufacturer": _read_text(dmi / "sys_vendor") or "Unknown",
            "model": _read_text(dmi / "product_name") or "Unknown",
            "operatingSystem": f"{platform.system()} {platform.release()}".strip(),
            "processor": platform.processor() or platform.machine() or "Unknown",
            "logicalProcessors": psutil.cpu_count(logical=True),
            "totalPhysicalMemory": str(psutil.virtual_memory().total),
        }

    def _display(self) -> dict[str, Any]:
        info: dict[str, Any] = {}
        brightness = self._brightness.get()
        if brightness.ok:
            info["brightness"] = brightness.value

        displays = []
        drm = self._sysfs_root / "class" / "drm"
        if drm.is_dir():
            for connector in sorted(drm.iterdir()):
                status = _read_text(connector / "status")
                if status is None:
                    continue
                modes = (_read_text(connector / "modes") or "").splitlines()
                displays.append(
                    {
                        "name": connector.name,
                        "status": status,
                        "currentMode": modes[0] if modes else None,
                    }
                )
        info["displays"] = displays
        return info

    def _power(self) -> dict[str, Any]:
        info: dict[str, Any] = {}
        battery = psutil.sensors_battery() if hasattr(psutil, "sensors_battery") else None
        if battery is None:
            info["battery"] = "Not present"
        else:
            info["batteryPercent"] = round(battery.percent)
            info["pluggedIn"] = battery.power_plugged

        governor = _read_text(
            self._sysfs_root / "devices" / "system" / "cpu" / "cpu0" / "cpufreq" / "scaling_governor"
        )
        if governor:
            info["cpuGovernor"] = governor
        return info
