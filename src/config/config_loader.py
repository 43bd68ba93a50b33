"""YAML configuration loading and validation.

This module handles loading and saving the service configuration from YAML
files, and applying overrides from the environment (and a ``.env`` file,
loaded with python-dotenv).
"""

import logging
import os
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from src.models.conversion_options import ConversionOptions
from .errors import ConfigError, ConfigFileError
from .models import ServiceConfig

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Handles configuration file loading, validation, and saving.

    Configuration file structure (every field optional):
        host: "127.0.0.1"
        port: 3000
        max_html_length: 1000000
        cors_origins: ["*"]
        log_level: "INFO"
        rate_limit_enabled: true
        rate_limit_requests: 100
        rate_limit_window: 900
        gzip_minimum_size: 1000
        security_headers: true
        default_options:
          preserve_line_breaks: true
          remove_extra_spaces: true
          convert_entities: true

    Environment overrides (take precedence over the file):
        HTML_TEXT_HOST, PORT, HTML_TEXT_MAX_LENGTH, HTML_TEXT_LOG_LEVEL,
        HTML_TEXT_RATE_LIMIT_ENABLED, HTML_TEXT_RATE_LIMIT_REQUESTS,
        HTML_TEXT_RATE_LIMIT_WINDOW
    """

    DEFAULTS = {
        'host': '127.0.0.1',
        'port': 3000,
        'max_html_length': 1_000_000,
        'cors_origins': ['*'],
        'log_level': 'INFO',
        'rate_limit_enabled': True,
        'rate_limit_requests': 100,
        'rate_limit_window': 900,
        'gzip_minimum_size': 1000,
        'security_headers': True,
    }

    VALID_LOG_LEVELS = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}

    TRUE_VALUES = {'true', '1', 'yes', 'on'}
    FALSE_VALUES = {'false', '0', 'no', 'off'}

    OPTION_FIELDS = ('preserve_line_breaks', 'remove_extra_spaces', 'convert_entities')

    # Environment variable -> config field
    ENV_OVERRIDES = {
        'HTML_TEXT_HOST': 'host',
        'PORT': 'port',
        'HTML_TEXT_MAX_LENGTH': 'max_html_length',
        'HTML_TEXT_LOG_LEVEL': 'log_level',
        'HTML_TEXT_RATE_LIMIT_ENABLED': 'rate_limit_enabled',
        'HTML_TEXT_RATE_LIMIT_REQUESTS': 'rate_limit_requests',
        'HTML_TEXT_RATE_LIMIT_WINDOW': 'rate_limit_window',
    }

    @classmethod
    def load(cls, config_path: str) -> ServiceConfig:
        """Load and parse configuration from a YAML file.

        An empty file yields the default configuration.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            ServiceConfig object with parsed configuration

        Raises:
            ConfigFileError: If file cannot be read
            ConfigError: If configuration is invalid or malformed
        """
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            raise ConfigFileError(
                config_path,
                'read',
                'Configuration file not found'
            )
        except PermissionError:
            raise ConfigFileError(
                config_path,
                'read',
                'Permission denied'
            )
        except OSError as e:
            raise ConfigFileError(
                config_path,
                'read',
                str(e)
            )

        try:
            config_dict = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(
                f"Invalid YAML syntax: {str(e)}"
            )

        if config_dict is None:
            return ServiceConfig()

        if not isinstance(config_dict, dict):
            raise ConfigError(
                f"Configuration must be a YAML dictionary, got {type(config_dict).__name__}"
            )

        return cls._parse_config(config_dict)

    @classmethod
    def save(cls, config_path: str, config: ServiceConfig) -> None:
        """Save configuration to a YAML file.

        Raises:
            ConfigFileError: If file cannot be written
        """
        config_dict = cls._to_dict(config)
        config_dict['default_options'] = {
            name: getattr(config.default_options, name)
            for name in cls.OPTION_FIELDS
        }

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
                raise ConfigFileError(
                    config_dir,
                    'create_directory',
                    str(e)
                )

        try:
            with open(config_path, 'w', encoding='utf-8') as f:
                f.write(yaml_str)
        except PermissionError:
            raise ConfigFileError(
                config_path,
                'write',
                'Permission denied'
            )
        except OSError as e:
            raise ConfigFileError(
                config_path,
                'write',
                str(e)
            )

    @classmethod
    def from_environment(cls, config_path: Optional[str] = None) -> ServiceConfig:
        """Build configuration from an optional file plus environment overrides.

        Variables in a ``.env`` file are loaded first; variables already set
        in the process environment are not overwritten by it.

        Args:
            config_path: Optional YAML configuration file

        Returns:
            ServiceConfig with environment overrides applied

        Raises:
            ConfigFileError: If config_path is given but cannot be read
            ConfigError: If the file or an override is invalid
        """
        load_dotenv()

        config_dict: Dict[str, Any] = {}
        if config_path:
            config = cls.load(config_path)
            config_dict = cls._to_dict(config)
            default_options = config.default_options
        else:
            default_options = ConversionOptions()

        for env_var, config_field in cls.ENV_OVERRIDES.items():
            value = os.getenv(env_var)
            if value is not None and value.strip():
                logger.debug(f"Config field '{config_field}' overridden by {env_var}")
                config_dict[config_field] = value.strip()

        config = cls._parse_config(config_dict)
        config.default_options = default_options
        return config

    @classmethod
    def _parse_config(cls, config_dict: Dict[str, Any]) -> ServiceConfig:
        """Parse and validate configuration dictionary.

        Raises:
            ConfigError: If configuration is invalid
        """
        host = config_dict.get('host', cls.DEFAULTS['host'])
        if not isinstance(host, str) or not host.strip():
            raise ConfigError("Field 'host' must be a non-empty string", 'host')

        port = cls._parse_int(config_dict, 'port')
        if not 0 < port < 65536:
            raise ConfigError(f"Field 'port' must be between 1 and 65535, got {port}", 'port')

        max_html_length = cls._parse_int(config_dict, 'max_html_length')
        if max_html_length < 1:
            raise ConfigError(
                f"Field 'max_html_length' must be at least 1, got {max_html_length}",
                'max_html_length'
            )

        cors_origins = config_dict.get('cors_origins', cls.DEFAULTS['cors_origins'])
        if isinstance(cors_origins, str):
            cors_origins = [cors_origins]
        if not isinstance(cors_origins, list):
            raise ConfigError("Field 'cors_origins' must be a list", 'cors_origins')
        cors_origins = [str(origin) for origin in cors_origins]

        log_level = str(config_dict.get('log_level', cls.DEFAULTS['log_level'])).upper()
        if log_level not in cls.VALID_LOG_LEVELS:
            raise ConfigError(
                f"Field 'log_level' must be one of: {', '.join(sorted(cls.VALID_LOG_LEVELS))}",
                'log_level'
            )

        rate_limit_requests = cls._parse_int(config_dict, 'rate_limit_requests')
        if rate_limit_requests < 1:
            raise ConfigError(
                f"Field 'rate_limit_requests' must be at least 1, got {rate_limit_requests}",
                'rate_limit_requests'
            )

        rate_limit_window = cls._parse_int(config_dict, 'rate_limit_window')
        if rate_limit_window < 1:
            raise ConfigError(
                f"Field 'rate_limit_window' must be at least 1 second, got {rate_limit_window}",
                'rate_limit_window'
            )

        gzip_minimum_size = cls._parse_int(config_dict, 'gzip_minimum_size')
        if gzip_minimum_size < 0:
            raise ConfigError(
                f"Field 'gzip_minimum_size' must not be negative, got {gzip_minimum_size}",
                'gzip_minimum_size'
            )

        return ServiceConfig(
            host=host.strip(),
            port=port,
            max_html_length=max_html_length,
            cors_origins=cors_origins,
            default_options=cls._parse_options(config_dict.get('default_options')),
            log_level=log_level,
            rate_limit_enabled=cls._parse_bool(config_dict, 'rate_limit_enabled'),
            rate_limit_requests=rate_limit_requests,
            rate_limit_window=rate_limit_window,
            gzip_minimum_size=gzip_minimum_size,
            security_headers=cls._parse_bool(config_dict, 'security_headers'),
        )

    @classmethod
    def _to_dict(cls, config: ServiceConfig) -> Dict[str, Any]:
        """Return the scalar fields of a config in file form."""
        return {
            'host': config.host,
            'port': config.port,
            'max_html_length': config.max_html_length,
            'cors_origins': list(config.cors_origins),
            'log_level': config.log_level,
            'rate_limit_enabled': config.rate_limit_enabled,
            'rate_limit_requests': config.rate_limit_requests,
            'rate_limit_window': config.rate_limit_window,
            'gzip_minimum_size': config.gzip_minimum_size,
            'security_headers': config.security_headers,
        }

    @classmethod
    def _parse_bool(cls, config_dict: Dict[str, Any], config_field: str) -> bool:
        """Read a boolean field, accepting true/false words from the environment."""
        value = config_dict.get(config_field, cls.DEFAULTS[config_field])
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            word = value.strip().lower()
            if word in cls.TRUE_VALUES:
                return True
            if word in cls.FALSE_VALUES:
                return False
        raise ConfigError(
            f"Field '{config_field}' must be true or false, got {value!r}",
            config_field
        )

    @classmethod
    def _parse_int(cls, config_dict: Dict[str, Any], config_field: str) -> int:
        """Read an integer field, accepting numeric strings from the environment."""
        value = config_dict.get(config_field, cls.DEFAULTS[config_field])
        if isinstance(value, bool):
            raise ConfigError(f"Field '{config_field}' must be an integer", config_field)
        try:
            return int(value)
        except (ValueError, TypeError):
            raise ConfigError(
                f"Field '{config_field}' must be an integer, got {value!r}",
                config_field
            )

    @classmethod
    def _parse_options(cls, options_raw: Any) -> ConversionOptions:
        """Parse the default_options section."""
        if options_raw is None:
            return ConversionOptions()
        if not isinstance(options_raw, dict):
            raise ConfigError("Field 'default_options' must be a dictionary", 'default_options')

        values = {}
        for name in cls.OPTION_FIELDS:
            if name in options_raw:
                if not isinstance(options_raw[name], bool):
                    raise ConfigError(
                        f"Option '{name}' must be true or false",
                        f'default_options.{name}'
                    )
                values[name] = options_raw[name]
        return ConversionOptions(**values)
