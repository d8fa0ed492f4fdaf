"""Provides functions for loading and accessing configuration settings.

Supports loading from .env files, environment variables, and a YAML
configuration file (~/.triviacli/config.yaml).
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# --- Configuration Constants ---
DEFAULT_CONFIG_DIR = Path.home() / ".triviacli"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.yaml"
ENV_FILE_NAME = ".env"
ENV_PREFIX = "TRIVIACLI_"

DEFAULTS: Dict[str, Any] = {
    "api.base_url": "https://opentdb.com",
    "api.rate_limit_seconds": 5.0,
    "http.timeout_seconds": 10.0,
    "http.user_agent": "triviacli/0.1",
    "logging.level": "WARNING",
    "logging.format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    "logging.file": None,
}

# --- Global Configuration Store ---
_config: Dict[str, Any] = {}
_test_config: Dict[str, Any] = {}
_loaded = False

def load_configuration(
    config_file: Path = DEFAULT_CONFIG_FILE,
    env_file: Optional[Path] = None,
    *,
    force: bool = False,
) -> None:
    """Loads configuration from environment, .env file, and YAML file.

    Priority order (highest to lowest):
    1. Environment Variables
    2. .env file
    3. YAML configuration file
    4. DEFAULTS

    Args:
        config_file: Path to the YAML configuration file.
        env_file: Path to the .env file (searches upwards from cwd if None).
        force: Reload even if configuration was already loaded.
    """
    global _config, _loaded
    if _loaded and not force:
        logger.debug("Configuration already loaded.")
        return

    _config = {}

    # 1. YAML file (lowest priority)
    if config_file.exists():
        try:
            with open(config_file, "r", encoding="utf-8") as f:
                yaml_config = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Failed to load or parse YAML config {config_file}: {e}")
        else:
            if isinstance(yaml_config, dict):
                _config.update(_flatten(yaml_config))
                logger.info(f"Loaded configuration from YAML: {config_file}")
            elif yaml_config is not None:
                logger.warning(f"YAML config file {config_file} did not contain a mapping.")
    else:
        logger.debug(f"YAML config file not found: {config_file}")

    # 2. .env file; override=False so real environment variables win
    dotenv_path = env_file or find_dotenv_path()
    if dotenv_path:
        if load_dotenv(dotenv_path=dotenv_path, override=False):
            logger.info(f"Loaded environment variables from: {dotenv_path}")
    else:
        logger.debug("No .env file found at or above the current directory.")

    # 3. Environment variables are read lazily in get_config

    _loaded = True
    logger.debug("Configuration loading process completed.")

def _flatten(data: Dict[str, Any], prefix: str = "") -> Dict[str, Any]:
    """Turns nested YAML mappings into dotted keys ({'api': {'base_url': x}} -> 'api.base_url')."""
    flat: Dict[str, Any] = {}
    for key, value in data.items():
        dotted = f"{prefix}{key}"
        if isinstance(value, dict):
            flat.update(_flatten(value, f"{dotted}."))
        else:
            flat[dotted] = value
    return flat

def _coerce(value: str) -> Any:
    """Converts env var strings to bool/int/float where they look like one."""
    lowered = value.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    try:
        return float(value) if "." in value else int(value)
    except ValueError:
        return value

def env_var_names(key: str) -> list:
    """Env var names consulted for a dotted key, most specific first."""
    bare = key.upper().replace(".", "_")
    return [f"{ENV_PREFIX}{bare}", bare]

def get_config(key: str, default: Any = None) -> Any:
    """
    Get a configuration value by dotted key.

    Priority:
    1. Test configuration
    2. Environment variable (TRIVIACLI_API_BASE_URL, then API_BASE_URL)
    3. YAML config
    4. DEFAULTS, then the default argument

    Args:
        key: The configuration key (e.g. 'api.base_url')
        default: Value returned when the key is found nowhere

    Returns:
        The configuration value
    """
    if key in _test_config:
        return _test_config[key]

    for env_key in env_var_names(key):
        if env_key in os.environ:
            return _coerce(os.environ[env_key])

    if key in _config:
        return _config[key]

    if key in DEFAULTS:
        return DEFAULTS[key]

    logger.debug(f"Config key '{key}' not found. Returning default: {default}")
    return default

def find_dotenv_path() -> Optional[Path]:
    """Searches for the .env file upwards from the current directory."""
    cwd = Path.cwd()
    for path in [cwd] + list(cwd.parents):
        env_path = path / ENV_FILE_NAME
        if env_path.is_file():
            return env_path
    return None

# --- Convenience Functions ---

def get_base_url() -> str:
    return str(get_config("api.base_url")).rstrip("/")

def get_rate_limit_interval() -> float:
    """Minimum seconds between question requests."""
    value = float(get_config("api.rate_limit_seconds"))
    if value < 0:
        logger.warning(f"Negative rate limit interval {value} ignored; using default.")
        return float(DEFAULTS["api.rate_limit_seconds"])
    return value

def get_http_timeout() -> float:
    value = float(get_config("http.timeout_seconds"))
    if value <= 0:
        logger.warning(f"Non-positive HTTP timeout {value} ignored; using default.")
        return float(DEFAULTS["http.timeout_seconds"])
    return value

def get_user_agent() -> str:
    return str(get_config("http.user_agent"))

def get_log_settings() -> Dict[str, Any]:
    """Returns level name, format and optional file path for logger setup."""
    return {
        "level": str(get_config("logging.level")).upper(),
        "format": str(get_config("logging.format")),
        "file": get_config("logging.file"),
    }

def set_config_for_testing(config_dict: Dict[str, Any]) -> None:
    """
    Set configuration values for testing purposes.
    These values override every other source.
    """
    _test_config.update(config_dict)
    logger.debug(f"Set testing configuration: {config_dict}")

def clear_test_config() -> None:
    """Clear all testing configuration values."""
    _test_config.clear()
    logger.debug("Cleared testing configuration")
