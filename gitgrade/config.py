"""
Configuration management for GitGrade.

Loads settings from:
1. .gitgrade.toml (local config)
2. pyproject.toml (project-level config)

Both use the ``[tool.gitgrade]`` table.
"""

import os
import tomllib
from pathlib import Path
from typing import Any

# Directory searched for configuration files (the working directory by default)
PROJECT_ROOT = Path.cwd()

DEFAULT_API_URL = "https://api.github.com"
# Default request timeout in seconds
DEFAULT_TIMEOUT = 10.0

# Global configuration for SSL verification
# Default: True (verify SSL certificates)
# Can be set to False by CLI --insecure flag
VERIFY_SSL = True


def load_config_file(config_path: Path) -> dict:
    """Load a TOML configuration file."""
    if not config_path.exists():
        return {}
    try:
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    except Exception as e:
        raise ValueError(f"Failed to load config from {config_path}: {e}") from e


def get_tool_config() -> dict[str, Any]:
    """
    Load the ``[tool.gitgrade]`` table.

    Priority:
    1. .gitgrade.toml (local config, highest priority)
    2. pyproject.toml (project-level config, fallback)

    Returns:
        The table contents, or an empty dict if neither file defines it.
    """
    for filename in (".gitgrade.toml", "pyproject.toml"):
        config_path = PROJECT_ROOT / filename
        if not config_path.exists():
            continue
        section = load_config_file(config_path).get("tool", {}).get("gitgrade")
        if section:
            return section
    return {}


def get_api_url() -> str:
    """
    Get the GitHub REST API base URL.

    Priority:
    1. GITGRADE_API_URL environment variable
    2. ``api_url`` in config files
    3. Default: https://api.github.com
    """
    env_api_url = os.getenv("GITGRADE_API_URL")
    if env_api_url:
        return env_api_url.rstrip("/")
    return str(get_tool_config().get("api_url", DEFAULT_API_URL)).rstrip("/")


def get_timeout() -> float:
    """
    Get the HTTP request timeout in seconds.

    Priority:
    1. GITGRADE_TIMEOUT environment variable
    2. ``timeout`` in config files
    3. Default: 10 seconds
    """
    env_timeout = os.getenv("GITGRADE_TIMEOUT")
    if env_timeout:
        try:
            return float(env_timeout)
        except ValueError:
            pass

    timeout = get_tool_config().get("timeout")
    if timeout is not None:
        try:
            return float(timeout)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid timeout in configuration: {timeout!r}") from e
    return DEFAULT_TIMEOUT


def is_fallback_enabled() -> bool:
    """
    Check whether a failed fetch falls back to the default repository record.

    Priority:
    1. ``fallback`` in config files
    2. Default: True

    Raises:
        ValueError: If the configured value is not a boolean.
    """
    config = get_tool_config()
    fallback = config.get("fallback")
    if fallback is None:
        return True
    if not isinstance(fallback, bool):
        raise ValueError(f"Invalid fallback in configuration: {fallback!r}")
    return fallback


def set_verify_ssl(verify: bool) -> None:
    """
    Set the SSL verification setting globally.

    Args:
        verify: Whether to verify SSL certificates.
    """
    global VERIFY_SSL
    VERIFY_SSL = verify


def get_verify_ssl() -> bool:
    """
    Get the current SSL verification setting.

    Returns:
        Whether SSL verification is enabled.
    """
    return VERIFY_SSL
