"""
Configuration loader for JSON files and environment variables
"""
import os
import json
from pathlib import Path
from typing import Dict, Any
from colorama import Fore, Style

from .logger import get_logger
from .persistence.file_utils import load_json, save_json

log = get_logger(__name__)


# Default configuration with placeholder values.
# Used to bootstrap the config file when it does not exist yet.
DEFAULT_CONFIG: Dict[str, Any] = {
    "host": "",
    "username": "",
    "password": "",
    "client_id": "",
    "client_secret": "",
    "api_version": "",
    "module": "",
    "dir": "",
    "retrieve_workers": 1,
}

# Environment variable -> config key
ENV_OVERRIDES = {
    "SKUID_UN": "username",
    "SKUID_PW": "password",
    "SKUID_CLIENT_ID": "client_id",
    "SKUID_CLIENT_SECRET": "client_secret",
    "SKUID_HOST": "host",
    "SKUID_DIR": "dir",
    "SKUID_MODULE": "module",
}

CONFIG_PATH_ENV = "SKUID_CONFIG"

_SENSITIVE = ('token', 'key', 'password', 'secret')


def mask_value(key, value):
    """Mask sensitive config values for display.

    Example:
        >>> mask_value("password", "hunter22")
        'hunt...********'
        >>> mask_value("host", "example.skuidsite.com")
        'example.skuidsite.com'
    """
    if any(sensitive in key.lower() for sensitive in _SENSITIVE):
        if value and len(str(value)) > 4:
            return f"{str(value)[:4]}...{'*' * 8}"
    return value


class ConfigLoader:
    """Handles loading and saving the skuidsync configuration file."""

    @staticmethod
    def get_config_path():
        """
        Get full path to the configuration file.

        ``$SKUID_CONFIG`` wins; otherwise ``~/.skuid.json``.

        Returns:
            Path to config file
        """
        override = os.environ.get(CONFIG_PATH_ENV, "").strip()
        if override:
            return Path(override).expanduser()
        return Path.home() / ".skuid.json"

    @staticmethod
    def ensure_config_exists():
        """
        Ensure the config file exists, creating it with defaults if missing.

        Returns:
            Path to the config file
        """
        config_path = ConfigLoader.get_config_path()

        if not config_path.exists():
            if not save_json(str(config_path), DEFAULT_CONFIG, compact=False):
                raise OSError(f"Could not write {config_path}")
            os.chmod(config_path, 0o600)
            log.info("Created default config at %s", config_path)

        return config_path

    @staticmethod
    def load_config_file():
        """
        Load the config file merged over the defaults.

        A missing or unreadable file yields the defaults.

        Returns:
            Configuration dictionary
        """
        config = dict(DEFAULT_CONFIG)
        config_path = ConfigLoader.get_config_path()

        data = load_json(str(config_path))
        if data is None:
            return config

        if isinstance(data, dict):
            config.update(data)
            log.debug("Using config file: %s", config_path)
        else:
            log.error("Ignoring %s: expected a JSON object", config_path)
        return config

    @staticmethod
    def load_config(environ=None):
        """
        Load configuration: defaults, then the config file, then environment.

        Args:
            environ: Environment mapping (defaults to ``os.environ``)

        Returns:
            Configuration dictionary
        """
        environ = os.environ if environ is None else environ
        config = ConfigLoader.load_config_file()

        for env_name, key in ENV_OVERRIDES.items():
            value = environ.get(env_name)
            if value:
                config[key] = value

        return config


def handle_config_update(config_json_string):
    """Handle config update command.

    Args:
        config_json_string: JSON string with config updates

    Returns:
        Exit code (0 for success, 1 for error)
    """
    try:
        config_updates = json.loads(config_json_string)
    except json.JSONDecodeError as e:
        print(f"{Fore.RED}[ERROR] Invalid JSON in --config argument: {e}{Style.RESET_ALL}")
        return 1

    if not isinstance(config_updates, dict):
        print(f"{Fore.RED}[ERROR] --config must be a JSON object (dictionary){Style.RESET_ALL}")
        return 1

    invalid_keys = [key for key in config_updates if key not in DEFAULT_CONFIG]
    if invalid_keys:
        print(f"{Fore.RED}[ERROR] Invalid configuration key(s): {', '.join(invalid_keys)}{Style.RESET_ALL}")
        print(f"\n{Fore.YELLOW}Valid configuration keys:{Style.RESET_ALL}")
        for key in sorted(DEFAULT_CONFIG):
            print(f"  • {key}")
        return 1

    wrong_types = [
        key for key, value in config_updates.items()
        if isinstance(value, bool) or not isinstance(value, type(DEFAULT_CONFIG[key]))
    ]
    if wrong_types:
        for key in wrong_types:
            expected = type(DEFAULT_CONFIG[key]).__name__
            print(f"{Fore.RED}[ERROR] '{key}' must be of type {expected}{Style.RESET_ALL}")
        return 1

    try:
        config_path = ConfigLoader.ensure_config_exists()
    except OSError as e:
        print(f"{Fore.RED}[ERROR] Failed to create configuration: {e}{Style.RESET_ALL}")
        return 1

    current_config = ConfigLoader.load_config_file()
    current_config.update(config_updates)
    if not save_json(str(config_path), current_config, compact=False):
        print(f"{Fore.RED}[ERROR] Failed to update configuration{Style.RESET_ALL}")
        return 1

    print(f"\n{Fore.GREEN}[SUCCESS] Configuration updated successfully{Style.RESET_ALL}")
    print(f"\n{Fore.CYAN}Updated values:{Style.RESET_ALL}")
    for key, value in config_updates.items():
        print(f"  {key}: {mask_value(key, value)}")

    print(f"\n{Fore.CYAN}Config file: {config_path}{Style.RESET_ALL}\n")
    return 0
