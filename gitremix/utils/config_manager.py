"""
Configuration file support.

Operators may keep non-secret defaults in a TOML file::

    [remix]
    api_url = "https://ghe.example.com/api/v3"
    max_workers = 8
    timeout = 30
    force = true
    verify_tip = true

Command-line flags and request bodies override these values. Access tokens
are never read from configuration files.
"""

import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Type, Union

from .constants import CONFIG_SECTION, DEFAULT_CONFIG_PATH

# Setting name -> accepted TOML value types
REMIX_SETTINGS: Dict[str, Union[Type, Tuple[Type, ...]]] = {
    "api_url": str,
    "max_workers": int,
    "timeout": (int, float),
    "force": bool,
    "verify_tip": bool,
}


class ConfigManager:
    """
    Reads the ``[remix]`` table of a TOML configuration file.

    The file is parsed lazily and cached; ``remix_settings`` validates the
    table before anything from it reaches a run.
    """

    def __init__(self, config_path: Optional[str] = None) -> None:
        self.config_path = Path(config_path or DEFAULT_CONFIG_PATH).expanduser()
        self._document: Optional[Dict[str, Any]] = None

    def load(self) -> Dict[str, Any]:
        """
        Parse the configuration file.

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file cannot be read or is not valid TOML
        """
        if self._document is not None:
            return self._document

        if not self.config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

        try:
            with open(self.config_path, "rb") as f:
                self._document = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Invalid TOML in configuration file {self.config_path}: {e}") from e
        except OSError as e:
            raise ValueError(f"Failed to read configuration file {self.config_path}: {e}") from e

        logging.debug("Loaded configuration from %s", self.config_path)
        return self._document

    def get_section(self, section: str = CONFIG_SECTION) -> Dict[str, Any]:
        """Return one table of the file, or an empty dict when it is absent."""
        table = self.load().get(section, {})
        if not isinstance(table, dict):
            raise ValueError(f"[{section}] in {self.config_path} must be a table")
        return table

    def remix_settings(self) -> Dict[str, Any]:
        """
        Get the validated ``[remix]`` table.

        Unknown keys are dropped with a warning.

        Raises:
            ValueError: If the table holds credentials or a value of the wrong type
        """
        section = self.get_section(CONFIG_SECTION)

        token_keys = sorted(key for key in section if "token" in key.lower())
        if token_keys:
            raise ValueError(
                f"Access tokens are not read from configuration files ({', '.join(token_keys)}); "
                "pass them on the command line or through the environment"
            )

        unknown = sorted(set(section) - set(REMIX_SETTINGS))
        if unknown:
            logging.warning("Ignoring unknown settings in %s: %s", self.config_path, ", ".join(unknown))

        settings: Dict[str, Any] = {}
        for key, expected in REMIX_SETTINGS.items():
            if key not in section:
                continue
            value = section[key]
            # bool is an int subclass; "max_workers = true" is still a mistake
            if not isinstance(value, expected) or (isinstance(value, bool) and expected is not bool):
                raise ValueError(f"Setting '{key}' in {self.config_path} has the wrong type: {value!r}")
            settings[key] = value
        return settings


def load_remix_settings(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load remix settings for the CLI.

    An explicitly given path must exist; the default path is optional.

    Returns:
        Dictionary of remix settings (empty when no file is present)
    """
    manager = ConfigManager(config_path)
    if config_path is None and not manager.config_path.exists():
        logging.debug("No configuration file at %s, using defaults", manager.config_path)
        return {}
    return manager.remix_settings()


__all__ = ["ConfigManager", "load_remix_settings", "REMIX_SETTINGS"]
