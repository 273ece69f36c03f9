"""YAML configuration loading and validation.

This module handles loading and saving the mirror configuration from
.markdown-mirror/config.yaml. The GitHub token is never part of the file; it
is read from the environment by the Authenticator.
"""

import os
from dataclasses import fields
from typing import Any, Dict

import yaml

from src.models.mirror_config import MirrorConfig

from .errors import ConfigError, ConfigFilesystemError, ConfigNotFoundError

DEFAULT_CONFIG_PATH = ".markdown-mirror/config.yaml"


class ConfigLoader:
    """Handles configuration file loading, validation, and saving.

    Configuration file structure:
        owner: "octo"
        repo: "blog"
        branch: "main"
        content_dir: "data"
        sync_interval: 300
        excerpt_length: 140
        mirror_dir: ".markdown-mirror/mirror"
        api_base_url: "https://api.github.com"
        request_timeout: 30
        host: "127.0.0.1"
        port: 8080
    """

    # Required top-level config fields
    REQUIRED_FIELDS = {'owner', 'repo'}

    # Default values for optional fields
    DEFAULTS: Dict[str, Any] = {
        'branch': 'main',
        'content_dir': 'data',
        'sync_interval': 300,
        'excerpt_length': 140,
        'mirror_dir': '.markdown-mirror/mirror',
        'api_base_url': 'https://api.github.com',
        'request_timeout': 30,
        'host': '127.0.0.1',
        'port': 8080,
    }

    STRING_FIELDS = {'owner', 'repo', 'branch', 'content_dir', 'mirror_dir', 'api_base_url', 'host'}
    POSITIVE_INT_FIELDS = {'sync_interval', 'excerpt_length', 'request_timeout', 'port'}

    # Fields that may legitimately be empty (content_dir "" mirrors the whole repo)
    ALLOW_EMPTY_FIELDS = {'content_dir'}

    @classmethod
    def load(cls, config_path: str = DEFAULT_CONFIG_PATH) -> MirrorConfig:
        """Load and parse configuration from a YAML file.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            MirrorConfig with defaults applied

        Raises:
            ConfigNotFoundError: If the file does not exist
            ConfigFilesystemError: If the file cannot be read
            ConfigError: If configuration is invalid or malformed
        """
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            raise ConfigNotFoundError(config_path)
        except PermissionError:
            raise ConfigFilesystemError(config_path, 'read', 'Permission denied')
        except OSError as e:
            raise ConfigFilesystemError(config_path, 'read', str(e))

        try:
            config_dict = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML syntax: {str(e)}")

        if config_dict is None:
            raise ConfigError("Configuration file is empty")

        if not isinstance(config_dict, dict):
            raise ConfigError(
                f"Configuration must be a YAML dictionary, got {type(config_dict).__name__}"
            )

        return cls._parse_config(config_dict)

    @classmethod
    def save(cls, config_path: str, config: MirrorConfig) -> None:
        """Save configuration to a YAML file.

        Args:
            config_path: Path to the YAML configuration file
            config: MirrorConfig to save

        Raises:
            ConfigFilesystemError: If file cannot be written
        """
        config_dict = {f.name: getattr(config, f.name) for f in fields(MirrorConfig)}

        yaml_str = yaml.safe_dump(
            config_dict,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False
        )

        config_dir = os.path.dirname(config_path)
        if config_dir:
            try:
                os.makedirs(config_dir, exist_ok=True)
            except OSError as e:
                raise ConfigFilesystemError(config_dir, 'create_directory', str(e))

        try:
            with open(config_path, 'w', encoding='utf-8') as f:
                f.write(yaml_str)
        except PermissionError:
            raise ConfigFilesystemError(config_path, 'write', 'Permission denied')
        except OSError as e:
            raise ConfigFilesystemError(config_path, 'write', str(e))

    @classmethod
    def _parse_config(cls, config_dict: Dict[str, Any]) -> MirrorConfig:
        """Parse and validate configuration dictionary.

        Args:
            config_dict: Raw configuration dictionary from YAML

        Returns:
            Validated MirrorConfig object

        Raises:
            ConfigError: If configuration is invalid
        """
        missing_fields = cls.REQUIRED_FIELDS - set(config_dict.keys())
        if missing_fields:
            raise ConfigError(
                f"Missing required fields: {', '.join(sorted(missing_fields))}"
            )

        known = cls.REQUIRED_FIELDS | set(cls.DEFAULTS)
        unknown = set(config_dict.keys()) - known
        if unknown:
            raise ConfigError(f"Unknown fields: {', '.join(sorted(unknown))}")

        values = dict(cls.DEFAULTS)
        values.update(config_dict)

        for name in sorted(cls.STRING_FIELDS):
            value = values[name]
            if not isinstance(value, str):
                raise ConfigError(
                    f"Must be a string, got {type(value).__name__}", name
                )
            if not value.strip() and name not in cls.ALLOW_EMPTY_FIELDS:
                raise ConfigError("Must not be empty", name)

        for name in sorted(cls.POSITIVE_INT_FIELDS):
            value = values[name]
            # bool is an int subclass; reject it explicitly
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(
                    f"Must be an integer, got {type(value).__name__}", name
                )
            if value < 1:
                raise ConfigError(f"Must be positive, got {value}", name)

        if values['port'] > 65535:
            raise ConfigError(f"Must be at most 65535, got {values['port']}", 'port')

        values['content_dir'] = values['content_dir'].strip('/')

        return MirrorConfig(**values)
