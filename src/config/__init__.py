"""Service configuration loading.

This package loads the ServiceConfig used by the HTTP service and the CLI
from a YAML file, with overrides taken from the environment.
"""

from .config_loader import ConfigLoader
from .errors import ConfigError, ConfigFileError
from .models import ServiceConfig

__all__ = [
    'ConfigLoader',
    'ConfigError',
    'ConfigFileError',
    'ServiceConfig',
]
