"""Capability provider interfaces.

Providers wrap one platform capability each. They report failure through
``ProviderResult`` values instead of raising, so every tool has to handle
the failure case explicitly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")

SYSTEM_INFO_CATEGORIES = ("all", "hardware", "display", "audio", "power")


@dataclass(frozen=True)
class ProviderResult(Generic[T]):
    """Outcome of a provider call: a value or an error message."""

    value: T | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        """True when the call succeeded."""
        return self.error is None

    @classmethod
    def success(cls, value: T | None = None) -> ProviderResult[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: str) -> ProviderResult[T]:
        return cls(error=error)


class BrightnessProvider(ABC):
    """Display brightness access."""

    @abstractmethod
    def get(self) -> ProviderResult[int]:
        """Return the current brightness as a percentage (0-100)."""

    @abstractmethod
    def set(self, value: int) -> ProviderResult[None]:
        """Set the brightness to a percentage (0-100)."""


class VolumeProvider(ABC):
    """Default audio endpoint volume and mute access."""

    @abstractmethod
    def get_volume(self) -> ProviderResult[int]:
        """Return the master volume as a percentage (0-100)."""

    @abstractmethod
    def set_volume(self, value: int) -> ProviderResult[None]:
        """Set the master volume to a percentage (0-100)."""

    @abstractmethod
    def get_mute(self) -> ProviderResult[bool]:
        """Return True when the endpoint is muted."""

    @abstractmethod
    def set_mute(self, muted: bool) -> ProviderResult[None]:
        """Mute or unmute the endpoint."""

    @abstractmethod
    def describe_devices(self) -> ProviderResult[dict[str, Any]]:
        """Return metadata about the default and available audio devices."""


class SystemInfoProvider(ABC):
    """System inventory queries."""

    @abstractmethod
    def query(self, category: str) -> ProviderResult[dict[str, Any]]:
        """Return inventory for one of ``SYSTEM_INFO_CATEGORIES``."""


def collect_all(provider: SystemInfoProvider) -> dict[str, Any]:
    """Merge every individual category into one prefixed mapping.

    A category that fails is reported as ``<category>_error`` so one
    missing subsystem does not hide the others.
    """
    merged: dict[str, Any] = {}
    for category in SYSTEM_INFO_CATEGORIES:
        if category == "all":
            continue
        result = provider.query(category)
        if not result.ok:
            merged[f"{category}_error"] = result.error
            continue
        for key, value in (result.value or {}).items():
            merged[f"{category}_{key}"] = value
    return merged
