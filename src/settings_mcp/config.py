"""Server configuration loader.

Loads the YAML configuration file into an immutable ``ServerConfig``.
Every key is optional; missing keys fall back to the defaults below.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

BACKENDS = ("auto", "linux", "memory")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigLoadError(Exception):
    """The configuration file is unreadable or holds an invalid value."""


_ENV_REFERENCE = re.compile(r"\$\{([^}]+)\}")


def expand_env_vars(value: str) -> str:
    """Expand ``${VAR}`` references and a leading ``~`` in a configured path.

    Unset variables stay as written, so a later file error names them.
    """
    expanded = _ENV_REFERENCE.sub(lambda m: os.environ.get(m.group(1), m.group(0)), value)
    return os.path.expanduser(expanded)


@dataclass(frozen=True)
class ServerConfig:
    """Server configuration."""

    server_name: str = "system-settings-mcp"
    server_version: str = "1.0.0"

    log_level: str = "INFO"
    audit_log_file: str = ""

    # Seconds before a tool call is abandoned; 0 disables the deadline
    tool_timeout: float = 30.0

    backend: str = "auto"
    backlight_device: str | None = None
    pactl: str = "pactl"

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> ServerConfig:
        """Create a ServerConfig from a configuration dictionary.

        Args:
            config: Dictionary parsed from YAML configuration.

        Returns:
            ServerConfig instance.

        Raises:
            ConfigLoadError: If a value is out of its allowed set.
        """
        server = config.get("server") or {}
        logging_cfg = config.get("logging") or {}
        audit = config.get("audit") or {}
        tools = config.get("tools") or {}
        providers = config.get("providers") or {}

        log_level = str(logging_cfg.get("level", cls.log_level)).upper()
        if log_level not in LOG_LEVELS:
            raise ConfigLoadError(f"Invalid logging.level: {log_level}")

        backend = str(providers.get("backend", cls.backend)).lower()
        if backend not in BACKENDS:
            raise ConfigLoadError(
                f"Invalid providers.backend: {backend} (expected one of {', '.join(BACKENDS)})"
            )

        try:
            timeout = float(tools.get("timeout", cls.tool_timeout))
        except (TypeError, ValueError) as e:
            raise ConfigLoadError(f"Invalid tools.timeout: {tools.get('timeout')!r}") from e
        if timeout < 0:
            raise ConfigLoadError("tools.timeout must not be negative")

        return cls(
            server_name=str(server.get("name", cls.server_name)),
            server_version=str(server.get("version", cls.server_version)),
            log_level=log_level,
            audit_log_file=expand_env_vars(str(audit.get("log_file") or "")),
            tool_timeout=timeout,
            backend=backend,
            backlight_device=providers.get("backlight"),
            pactl=expand_env_vars(str(providers.get("pactl", cls.pactl))),
        )

    @property
    def server_info(self) -> dict[str, str]:
        """Identity reported by initialize."""
        return {"name": self.server_name, "version": self.server_version}


def load_config(path: Path) -> ServerConfig:
    """Load configuration from a YAML file.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        Parsed ServerConfig.

    Raises:
        ConfigLoadError: If the file cannot be read or parsed.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigLoadError(f"Cannot read config file {path}: {e}") from e

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigLoadError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigLoadError(f"Config file {path} must contain a mapping")

    return ServerConfig.from_dict(data)
