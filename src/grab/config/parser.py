"""
JSON configuration parser for grab.

This module locates the per-user configuration file, writes a default one on
first run, and parses and validates an existing one. Every failure is reported
as a ConfigurationError so the command line can treat it as fatal.
"""

import json
from pathlib import Path
from typing import Dict, Any, Optional, List, Union
import logging
from dataclasses import dataclass

from pydantic import ValidationError

from ..models.config import GrabConfig


logger = logging.getLogger(__name__)


CONFIG_DIR_NAME = 'grab'
CONFIG_FILE_NAME = 'grab.json'


@dataclass
class ConfigParseResult:
    """
    Result of configuration loading.

    Attributes:
        config: The parsed and validated configuration
        config_path: Path to the configuration file
        created: Whether the file was just created with defaults
        warnings: List of non-fatal warnings
    """
    config: GrabConfig
    config_path: Path
    created: bool
    warnings: List[str]


class ConfigurationError(Exception):
    """Raised when the configuration cannot be located, written, read or parsed."""
    pass


class ConfigParser:
    """
    Loader for the grab JSON configuration file.

    The file lives at ~/.config/grab/grab.json. When it is missing a default
    configuration pointing at ~/Downloads is written there and returned.
    """

    def __init__(self, home: Optional[Union[str, Path]] = None):
        """
        Initialize the configuration parser.

        Args:
            home: Home directory to use instead of the current user's
        """
        self._home = Path(home) if home is not None else None
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def get_home(self) -> Path:
        """
        Resolve the home directory.

        Raises:
            ConfigurationError: If the home directory cannot be determined
        """
        if self._home is not None:
            return self._home
        try:
            return Path.home()
        except (RuntimeError, KeyError) as e:
            raise ConfigurationError(f"Could not find home directory: {e}") from e

    def default_config_path(self) -> Path:
        """Get the fixed per-user configuration path."""
        return self.get_home() / '.config' / CONFIG_DIR_NAME / CONFIG_FILE_NAME

    def load_config(self, config_path: Optional[Union[str, Path]] = None) -> ConfigParseResult:
        """
        Load the configuration, creating a default file if none exists.

        Args:
            config_path: Path to the configuration file. Defaults to the per-user path.

        Returns:
            ConfigParseResult containing the configuration and metadata

        Raises:
            ConfigurationError: If the file cannot be created, read or validated
        """
        config_path = Path(config_path) if config_path else self.default_config_path()

        if not config_path.exists():
            config = GrabConfig.default(self.get_home())
            self.save_config(config, config_path)
            created = True
        else:
            config_data = self._load_json_file(config_path)
            config = self._validate_config_data(config_data, config_path)
            created = False

        warnings = config.validate_configuration()
        for warning in warnings:
            self.logger.warning(warning)

        self.logger.info(f"Configuration loaded from {config_path}: {config}")

        return ConfigParseResult(
            config=config,
            config_path=config_path,
            created=created,
            warnings=warnings
        )

    def _load_json_file(self, file_path: Path) -> Dict[str, Any]:
        """
        Load and parse a JSON file.

        Args:
            file_path: Path to the JSON file

        Returns:
            Parsed JSON object as dictionary

        Raises:
            ConfigurationError: If the file cannot be read or parsed
        """
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON syntax in {file_path}: {e}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigurationError(f"Cannot read configuration file {file_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration file must contain a JSON object, got {type(data).__name__}"
            )

        return data

    def _validate_config_data(self, config_data: Dict[str, Any], config_path: Path) -> GrabConfig:
        """
        Validate raw configuration data.

        Raises:
            ConfigurationError: If a field is missing or has the wrong type
        """
        try:
            return GrabConfig.from_dict(config_data)
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed for {config_path}: {e}") from e

    def save_config(self, config: GrabConfig, output_path: Union[str, Path]) -> None:
        """
        Save configuration as pretty-printed JSON.

        Args:
            config: Configuration to save
            output_path: Path where to save the configuration

        Raises:
            ConfigurationError: If the file cannot be written
        """
        output_path = Path(output_path)
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, 'w', encoding='utf-8') as f:
                f.write(json.dumps(config.to_dict(), indent=2))
        except OSError as e:
            raise ConfigurationError(f"Cannot write configuration file {output_path}: {e}") from e

        self.logger.info(f"Configuration saved to {output_path}")


def load_config(config_path: Optional[Union[str, Path]] = None,
                home: Optional[Union[str, Path]] = None) -> ConfigParseResult:
    """
    Convenience function to load configuration.

    Args:
        config_path: Path to configuration file (optional)
        home: Home directory override (optional)

    Returns:
        ConfigParseResult containing the parsed configuration

    Raises:
        ConfigurationError: If configuration cannot be loaded
    """
    parser = ConfigParser(home=home)
    return parser.load_config(config_path)
