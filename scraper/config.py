"""
Scraper settings: fetcher headers and timeout, retry backoff, the delay
between pages, the endpoint and logging.

Defaults live in config.yaml next to this module. Environment variables such
as GOOGLE_MAPS_COOKIES or RETRY_MAX_RETRIES override single keys.
"""

import os
import yaml
from pathlib import Path
from typing import Dict, Any

from .models import RetryPolicy


class Config:
    """Scraper settings from config.yaml, with environment overrides applied."""

    def __init__(self, config_path: str = None, environ: Dict[str, str] = None):
        """Initialize configuration loader.

        Args:
            config_path: Path to config.yaml file. If None, uses the config.yaml
                        shipped next to this module.
            environ: Mapping to read overrides from. Defaults to os.environ.
        """
        if config_path is None:
            config_path = Path(__file__).parent / "config.yaml"

        self.config_path = Path(config_path)
        self.environ = os.environ if environ is None else environ
        self._config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file and override with environment variables."""
        try:
            with open(self.config_path, 'r') as f:
                config = yaml.safe_load(f) or {}
        except FileNotFoundError:
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in configuration file: {e}")

        return self._apply_env_overrides(config)

    def _apply_env_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Apply environment variable overrides to configuration."""
        env_mappings = {
            'FETCHER_USER_AGENT': ('fetcher', 'user_agent'),
            'FETCHER_TIMEOUT': ('fetcher', 'timeout'),
            'RETRY_MAX_RETRIES': ('retry', 'max_retries'),
            'RETRY_BASE_DELAY_MS': ('retry', 'base_delay_ms'),
            'PAGINATION_PAGE_DELAY_MS': ('pagination', 'page_delay_ms'),
            'ENDPOINT_BASE_URL': ('endpoint', 'base_url'),
            'ENDPOINT_HL': ('endpoint', 'hl'),
            'LOG_LEVEL': ('logging', 'level'),
            'LOG_JSON': ('logging', 'json'),
        }

        for env_var, config_path in env_mappings.items():
            env_value = self.environ.get(env_var)
            if env_value is not None:
                self._set(config, config_path, self._convert_env_value(env_value))

        # Cookie strings are opaque, never type-converted.
        cookies = self.environ.get('GOOGLE_MAPS_COOKIES')
        if cookies:
            self._set(config, ('fetcher', 'cookies'), cookies)

        return config

    def _set(self, config: Dict[str, Any], config_path: tuple, value: Any):
        current = config
        for key in config_path[:-1]:
            if not isinstance(current.get(key), dict):
                current[key] = {}
            current = current[key]
        current[config_path[-1]] = value

    def _convert_env_value(self, value: str):
        """Convert environment variable string to appropriate Python type."""
        if value.lower() in ('true', 'false'):
            return value.lower() == 'true'

        try:
            return int(value)
        except ValueError:
            pass

        try:
            return float(value)
        except ValueError:
            pass

        return value

    def get(self, *keys, default=None):
        """Get configuration value by nested keys.

        Args:
            *keys: Configuration keys (e.g., 'retry', 'max_retries')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        current = self._config
        for key in keys:
            if isinstance(current, dict) and key in current:
                current = current[key]
            else:
                return default
        return current

    @property
    def fetcher(self) -> Dict[str, Any]:
        """Get HTTP fetcher configuration."""
        return self.get('fetcher', default={})

    @property
    def retry(self) -> Dict[str, Any]:
        """Get retry/backoff configuration."""
        return self.get('retry', default={})

    @property
    def pagination(self) -> Dict[str, Any]:
        return self.get('pagination', default={})

    @property
    def endpoint(self) -> Dict[str, Any]:
        """Get listing endpoint configuration."""
        return self.get('endpoint', default={})

    @property
    def logging(self) -> Dict[str, Any]:
        """Get logging configuration."""
        return self.get('logging', default={})

    @property
    def retry_policy(self) -> RetryPolicy:
        retry = self.retry
        return RetryPolicy(
            max_retries=int(retry.get('max_retries', 3)),
            base_delay_ms=int(retry.get('base_delay_ms', 2000)),
        )
