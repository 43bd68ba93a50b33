"""Data models for service configuration."""

from dataclasses import dataclass, field
from typing import List

from src.models.conversion_options import ConversionOptions


@dataclass
class ServiceConfig:
    """Configuration for the conversion service and CLI.

    Attributes:
        host: Interface the HTTP service binds to
        port: Port the HTTP service listens on
        max_html_length: Largest accepted HTML input, in characters
        cors_origins: Origins allowed to call the HTTP API
        default_options: Conversion flags used when a request omits them
        log_level: Logging level name for the service (e.g. "INFO")
        rate_limit_enabled: Apply the per-client limit to /api/ routes
        rate_limit_requests: Requests allowed per client in each window
        rate_limit_window: Length of the rate limit window, in seconds
        gzip_minimum_size: Smallest response body compressed, in bytes
        security_headers: Add hardening headers to every response

    Example:
        >>> config = ServiceConfig(port=8080)
        >>> config.default_options.convert_entities
        True
    """
    host: str = '127.0.0.1'
    port: int = 3000
    max_html_length: int = 1_000_000
    cors_origins: List[str] = field(default_factory=lambda: ['*'])
    default_options: ConversionOptions = field(default_factory=ConversionOptions)
    log_level: str = 'INFO'
    rate_limit_enabled: bool = True
    rate_limit_requests: int = 100
    rate_limit_window: int = 900
    gzip_minimum_size: int = 1000
    security_headers: bool = True
