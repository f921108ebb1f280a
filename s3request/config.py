"""Configuration loading for upload settings.

Supports two configuration sources:
1. Environment variables - take priority
2. A JSON file (for local development)

Environment Variable Format:
    S3REQUEST_PART_SIZE=16MiB      (plain bytes or KiB/MiB/GiB/TiB suffix)
    S3REQUEST_JSON=true

Example config.json:
    {"part_size": "16MiB", "json_output": true}
"""

import json
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

ENV_PART_SIZE = "S3REQUEST_PART_SIZE"
ENV_JSON = "S3REQUEST_JSON"

SIZE_UNITS = {
    "": 1,
    "b": 1,
    "kib": 1024,
    "mib": 1024 ** 2,
    "gib": 1024 ** 3,
    "tib": 1024 ** 4,
}

SIZE_REGEX = re.compile(r"^\s*(-?\d+)\s*([A-Za-z]*)\s*$")


class ConfigError(Exception):
    """Raised when configuration loading fails."""

    pass


@dataclass
class UploadSettings:
    """Defaults for planning uploads and printing results."""

    part_size: int = 0
    json_output: bool = False


def parse_size(text: Union[str, int]) -> int:
    """Parse a byte size such as "5242880", "5MiB" or "-1".

    Args:
        text: Size string or integer.

    Returns:
        Size in bytes.

    Raises:
        ConfigError: If the size or its unit is not recognized.
    """
    if isinstance(text, bool):
        raise ConfigError(f"Invalid size: {text!r}")
    if isinstance(text, int):
        return text

    match = SIZE_REGEX.match(text)
    if not match:
        raise ConfigError(f"Invalid size: {text!r}")

    number, unit = match.groups()
    multiplier = SIZE_UNITS.get(unit.lower())
    if multiplier is None:
        raise ConfigError(f"Unknown size unit '{unit}' in {text!r}")

    return int(number) * multiplier


def string_to_bool(text: Union[str, bool]) -> bool:
    """Parse "true" or "false" in any case.

    Raises:
        ConfigError: For any other value.
    """
    if isinstance(text, bool):
        return text

    value = text.strip().lower()
    if value == "true":
        return True
    if value == "false":
        return False

    raise ConfigError(f"Invalid boolean: {text!r}. Expected 'true' or 'false'")


def _settings_from_dict(data: dict[str, Any], source: str) -> UploadSettings:
    settings = UploadSettings()

    if "part_size" in data:
        settings.part_size = parse_size(data["part_size"])
        if settings.part_size < 0:
            raise ConfigError(f"part_size in {source} must not be negative")

    if "json_output" in data:
        settings.json_output = string_to_bool(data["json_output"])

    return settings


def load_from_json(config_path: str) -> UploadSettings:
    """Load upload settings from a JSON file.

    Args:
        config_path: Path to the JSON file.

    Returns:
        The settings; missing fields keep their defaults.

    Raises:
        ConfigError: If the file doesn't exist, contains invalid JSON,
                    or holds invalid values.
    """
    path = Path(config_path)

    if not path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in config file: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file must contain a JSON object: {config_path}")

    return _settings_from_dict(data, config_path)


def has_env_settings() -> bool:
    """Check if any S3REQUEST_* environment variables exist."""
    return ENV_PART_SIZE in os.environ or ENV_JSON in os.environ


def load_from_env() -> UploadSettings:
    """Load upload settings from environment variables.

    Raises:
        ConfigError: If a variable holds an invalid value.
    """
    data: dict[str, Any] = {}

    if ENV_PART_SIZE in os.environ:
        data["part_size"] = os.environ[ENV_PART_SIZE]
    if ENV_JSON in os.environ:
        data["json_output"] = os.environ[ENV_JSON]

    return _settings_from_dict(data, "environment")


def load_settings(config_path: Optional[str] = None) -> UploadSettings:
    """Load upload settings with environment priority.

    Priority order:
    1. Environment variables (if any S3REQUEST_* vars exist)
    2. The config file, if given and present
    3. Defaults

    Args:
        config_path: Optional path to a JSON config file.

    Raises:
        ConfigError: If the chosen source is invalid.
    """
    if has_env_settings():
        return load_from_env()
    if config_path and Path(config_path).exists():
        return load_from_json(config_path)
    return UploadSettings()
