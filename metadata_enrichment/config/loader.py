# metadata_enrichment/config/loader.py
"""
Layered configuration loading.

Merge order:
    1. Package defaults (metadata_enrichment/config/defaults/default.yaml)
    2. User config (<project>/.metadata-enrichment/config.yaml, or an explicit path)
    3. Environment (SF_INSTANCE_URL, SF_ACCESS_TOKEN)

The result is validated into an AppConfig, so callers never need fallback
logic.

Usage:
    from metadata_enrichment.config import load_config

    config = load_config(project_dir=Path("./my-project"))
    config.enrichment.max_tokens  # always exists
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml
from pydantic import ValidationError

from metadata_enrichment.config.schema import AppConfig
from metadata_enrichment.core.exceptions import ConfigError
from metadata_enrichment.logging import get_logger

logger = get_logger(__name__)

USER_CONFIG_DIR = ".metadata-enrichment"
USER_CONFIG_FILE = "config.yaml"

ENV_INSTANCE_URL = "SF_INSTANCE_URL"
ENV_ACCESS_TOKEN = "SF_ACCESS_TOKEN"


def _get_defaults_path() -> Path:
    return Path(__file__).parent / "defaults" / "default.yaml"


def user_config_path(project_dir: Path) -> Path:
    """Location of the user config for a project."""
    return Path(project_dir) / USER_CONFIG_DIR / USER_CONFIG_FILE


# =============================================================================
# Deep Merge
# =============================================================================


def deep_merge(base: dict, override: dict) -> dict:
    """
    Deep merge two dictionaries.

    Values from `override` take precedence over `base`.
    Nested dicts are merged recursively; lists are replaced entirely.

    Examples:
        >>> deep_merge({"a": 1, "b": {"c": 2, "d": 3}}, {"b": {"c": 10}})
        {'a': 1, 'b': {'c': 10, 'd': 3}}
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


# =============================================================================
# Loading Functions
# =============================================================================


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping at the top level")
    return data


def load_defaults() -> dict[str, Any]:
    """Load the package defaults."""
    defaults_path = _get_defaults_path()
    data = _read_yaml(defaults_path)
    logger.debug(f"Loaded defaults from {defaults_path}")
    return data


def load_user_config(path: Path) -> Optional[dict[str, Any]]:
    """
    Load a user config file.

    Returns:
        The parsed mapping, or None if the file does not exist
    """
    if not path.exists():
        logger.debug(f"No user config at {path}")
        return None

    data = _read_yaml(path)
    logger.debug(f"Loaded user config from {path}")
    return data


def _env_overrides(environ: Mapping[str, str]) -> dict[str, Any]:
    connection: dict[str, Any] = {}
    if environ.get(ENV_INSTANCE_URL):
        connection["instance_url"] = environ[ENV_INSTANCE_URL]
    if environ.get(ENV_ACCESS_TOKEN):
        connection["access_token"] = environ[ENV_ACCESS_TOKEN]
    return {"connection": connection} if connection else {}


def load_config(
    config_path: Optional[Path] = None,
    project_dir: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> AppConfig:
    """
    Load the complete configuration.

    Args:
        config_path: Explicit user config file (must exist if given)
        project_dir: Project root used to locate the default user config
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Validated AppConfig

    Raises:
        ConfigError: If a file is unreadable or the merged config is invalid
    """
    merged = load_defaults()

    if config_path is not None:
        config_path = Path(config_path)
        if not config_path.exists():
            raise ConfigError(f"Config file not found: {config_path}")
        user_config = load_user_config(config_path)
    elif project_dir is not None:
        user_config = load_user_config(user_config_path(project_dir))
    else:
        user_config = None

    if user_config:
        merged = deep_merge(merged, user_config)

    merged = deep_merge(merged, _env_overrides(os.environ if environ is None else environ))

    try:
        return AppConfig.model_validate(merged)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


__all__ = [
    "deep_merge",
    "load_config",
    "load_defaults",
    "load_user_config",
    "user_config_path",
]
