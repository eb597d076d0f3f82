#!/usr/bin/env python3

import os
import sys
from dataclasses import dataclass
from typing import Dict, Optional, Union

import yaml

from ..core.errors import ConfigError
from .system import expand_home, get_real_home, host_platform

# Type definitions
ConfigDict = Dict[str, Dict[str, Union[str, int]]]

# Default paths
DEFAULT_CONFIG_PATH = "tfget.yaml"
DEFAULT_RELEASES_URL = "https://releases.hashicorp.com/terraform/"
DEFAULT_CACHE_DIR = "$HOME/.tfget/versions"
DEFAULT_SYSTEM_INSTALL_PATH = "/usr/local/bin/terraform"
DEFAULT_PRODUCT = "terraform"
DEFAULT_TIMEOUT = 10  # seconds, per network call
DEFAULT_MAX_EXTRACT_BYTES = 512 * 1024 * 1024


@dataclass(frozen=True)
class Settings:
    """Everything the core components need, resolved once per run"""

    releases_url: str = DEFAULT_RELEASES_URL
    cache_dir: str = DEFAULT_CACHE_DIR
    system_install_path: str = DEFAULT_SYSTEM_INSTALL_PATH
    product: str = DEFAULT_PRODUCT
    timeout: float = DEFAULT_TIMEOUT
    max_extract_bytes: int = DEFAULT_MAX_EXTRACT_BYTES
    platform: str = ""

    @property
    def link_path(self) -> str:
        return os.path.join(self.cache_dir, self.product)

    def entry_path(self, version: str) -> str:
        return os.path.join(self.cache_dir, f"{self.product}_{version}")


def user_config_dir() -> str:
    return os.path.join(get_real_home(), ".config/tfget")


def ensure_user_config_dir() -> str:
    """Ensure the user's config directory exists"""
    config_dir = user_config_dir()
    os.makedirs(config_dir, exist_ok=True)
    return config_dir


def find_config_file(config_path: Optional[str] = None) -> Optional[str]:
    """
    Find the configuration file by checking multiple locations:
    1. Specified path from command line
    2. Current directory
    3. Same directory as the executable
    4. User config directory (~/.config/tfget/)
    5. System-wide location (/etc/tfget)

    Returns None when no file exists anywhere; defaults apply in that case.
    """
    if config_path:
        if os.path.isfile(config_path):
            return config_path
        raise ConfigError(f"Config file not found at: {config_path}")

    candidates = [
        os.path.join(os.getcwd(), DEFAULT_CONFIG_PATH),
        os.path.join(os.path.dirname(os.path.abspath(sys.argv[0])), DEFAULT_CONFIG_PATH),
        os.path.join(user_config_dir(), DEFAULT_CONFIG_PATH),
        os.path.join("/etc/tfget", DEFAULT_CONFIG_PATH),
    ]
    for candidate in candidates:
        if os.path.isfile(candidate):
            return candidate
    return None


def default_config() -> ConfigDict:
    return {
        "options": {
            "releases_url": DEFAULT_RELEASES_URL,
            "cache_dir": DEFAULT_CACHE_DIR,
            "system_install_path": DEFAULT_SYSTEM_INSTALL_PATH,
            "product": DEFAULT_PRODUCT,
            "timeout": DEFAULT_TIMEOUT,
            "max_extract_bytes": DEFAULT_MAX_EXTRACT_BYTES,
        }
    }


def create_default_config(config_path: str) -> ConfigDict:
    """Create a default configuration file"""
    config = default_config()

    os.makedirs(os.path.dirname(os.path.abspath(config_path)), exist_ok=True)

    try:
        with open(config_path, "w") as f:
            yaml.dump(config, f, default_flow_style=False)
        return config
    except OSError as e:
        raise ConfigError(f"Failed to create config file: {e}") from e


def load_config(config_path: Optional[str]) -> ConfigDict:
    """Load the configuration, filling in defaults for anything missing"""
    config = default_config()
    if config_path is None:
        return config

    try:
        with open(config_path, "r") as file:
            loaded = yaml.safe_load(file) or {}
    except OSError as e:
        raise ConfigError(f"Failed to read config file {config_path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Error parsing YAML: {e}") from e

    if not isinstance(loaded, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping")

    options = loaded.get("options") or {}
    if not isinstance(options, dict):
        raise ConfigError("'options' must be a mapping")
    config["options"].update(options)
    return config


def load_settings(config_path: Optional[str] = None) -> Settings:
    """Locate and load the configuration file and build Settings from it"""
    options = load_config(find_config_file(config_path))["options"]

    releases_url = str(options["releases_url"])
    if not releases_url.endswith("/"):
        releases_url += "/"

    try:
        timeout = float(options["timeout"])
        max_extract_bytes = int(options["max_extract_bytes"])
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid numeric option: {e}") from e

    return Settings(
        releases_url=releases_url,
        cache_dir=os.path.abspath(expand_home(str(options["cache_dir"]))),
        system_install_path=str(options["system_install_path"]),
        product=str(options["product"]),
        timeout=timeout,
        max_extract_bytes=max_extract_bytes,
        platform=str(options.get("platform") or host_platform()),
    )
