"""
Configuration loader utilities.

Supports loading from YAML files and environment variables.
"""

import os
from dataclasses import asdict, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from ppmi_matrix.config.base import PmiConfig
from ppmi_matrix.errors import ConfigurationError


ENV_PREFIX = "PPMI_"


def load_config(
    config_path: Optional[Union[str, Path]] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> PmiConfig:
    """
    Load configuration from YAML file.

    Precedence (lowest to highest): dataclass defaults, YAML file,
    ``PPMI_*`` environment variables, explicit overrides.

    Args:
        config_path: Path to YAML config file. If None, uses defaults.
        overrides: Dictionary of values to override

    Returns:
        Validated PmiConfig

    Raises:
        FileNotFoundError: If config_path doesn't exist
        yaml.YAMLError: If YAML parsing fails
        ConfigurationError: If a key is unknown or a value is invalid
    """
    config_dict: Dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(path, "r", encoding="utf-8") as f:
            config_dict = yaml.safe_load(f) or {}

        if not isinstance(config_dict, dict):
            raise ConfigurationError(f"Config file must contain a mapping: {config_path}")

    config_dict = _apply_env_overrides(config_dict)

    if overrides:
        config_dict.update({k: v for k, v in overrides.items() if v is not None})

    known = {f.name for f in fields(PmiConfig)}
    unknown = sorted(set(config_dict) - known)
    if unknown:
        raise ConfigurationError(f"Unknown config keys: {', '.join(unknown)}")

    config = PmiConfig(**config_dict)
    config.validate()

    return config


def save_config(config: PmiConfig, path: Union[str, Path]) -> None:
    """
    Save configuration to YAML file.

    Args:
        config: Configuration instance to save
        path: Output file path
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(asdict(config), f, default_flow_style=False, allow_unicode=True)


def _apply_env_overrides(config_dict: Dict[str, Any]) -> Dict[str, Any]:
    """
    Apply environment variable overrides to config.

    Environment variables are prefixed with PPMI_. Example: PPMI_WINDOW=5
    """
    result = dict(config_dict)

    for key, value in os.environ.items():
        if not key.startswith(ENV_PREFIX):
            continue
        result[key[len(ENV_PREFIX):].lower()] = _parse_env_value(value)

    return result


def _parse_env_value(value: str) -> Any:
    """Parse environment variable value to appropriate type."""
    # Try boolean
    if value.lower() in ("true", "false"):
        return value.lower() == "true"

    # Try integer
    try:
        return int(value)
    except ValueError:
        pass

    # Try float
    try:
        return float(value)
    except ValueError:
        pass

    # Return as string
    return value
