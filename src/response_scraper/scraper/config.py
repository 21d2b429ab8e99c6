"""
Centralized configuration handler for the response sheet scraper.

Settings come from three layers, later layers winning: the built-in defaults
in ``constants.DEFAULT_SETTINGS``, the JSON settings file, and a small set of
environment variables.
"""

import copy
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from ..constants import DEFAULT_PATHS, DEFAULT_SETTINGS

# Environment variable -> (section, key, converter)
ENV_OVERRIDES = {
    'PORT': ('server', 'port', int),
    'HOST': ('server', 'host', str),
    'LOG_LEVEL': ('logging', 'level', str.upper),
    'HEADLESS': ('scraper', 'headless', lambda value: value.strip().lower() not in ('0', 'false', 'no')),
}


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


class ScraperConfig:
    """
    Loads, merges and validates scraper settings.

    Behaves like a read-only mapping over the merged settings dictionary, so
    components can use ``config['scraper']['timeouts']['page_load']``.
    """

    def __init__(self, settings_file: Optional[str] = None, environ: Optional[Dict[str, str]] = None):
        """
        Initialize the configuration handler.

        Args:
            settings_file: Path to the JSON settings file. When omitted the
                default path is tried and silently skipped if absent.
            environ: Environment to read overrides from (defaults to os.environ)
        """
        self.logger = logging.getLogger(__name__)
        self.settings_file = settings_file or DEFAULT_PATHS['config_file']
        self._explicit_file = settings_file is not None
        self.environ = os.environ if environ is None else environ
        self.settings = self._load_settings()

    def _load_settings(self) -> Dict[str, Any]:
        """
        Build the effective settings.

        Raises:
            FileNotFoundError: If an explicitly named settings file doesn't exist
            json.JSONDecodeError: If the settings file is invalid JSON
        """
        settings = copy.deepcopy(DEFAULT_SETTINGS)
        settings_path = Path(self.settings_file)

        if settings_path.exists():
            with open(settings_path, 'r', encoding='utf-8') as f:
                file_settings = json.load(f)
            settings = _deep_merge(settings, file_settings)
            self.logger.debug(f"Loaded settings from {self.settings_file}")
        elif self._explicit_file:
            raise FileNotFoundError(f"Settings file not found: {self.settings_file}")
        else:
            self.logger.warning(f"Settings file {self.settings_file} not found, using built-in defaults")

        for variable, (section, key, convert) in ENV_OVERRIDES.items():
            raw_value = self.environ.get(variable)
            if raw_value:
                settings[section][key] = convert(raw_value)
                self.logger.debug(f"Setting {section}.{key} overridden by ${variable}")

        return settings

    def __getitem__(self, section: str) -> Any:
        return self.settings[section]

    def __contains__(self, section: str) -> bool:
        return section in self.settings

    def get(self, section: str, default: Any = None) -> Any:
        return self.settings.get(section, default)

    def override(self, section: str, key: str, value: Any) -> None:
        """Apply a command line override; ``None`` leaves the setting untouched."""
        if value is not None:
            self.settings[section][key] = value

    def validate_settings(self) -> Dict[str, bool]:
        """
        Validate the loaded settings for common issues.

        Returns:
            Dictionary indicating validation status for each section
        """
        results = {section: True for section in ('scraper', 'extraction', 'diagnostics', 'server')}

        scraper = self.settings['scraper']
        if not scraper.get('user_agents'):
            self.logger.error("scraper.user_agents must not be empty")
            results['scraper'] = False
        if not scraper.get('wait_states'):
            self.logger.error("scraper.wait_states must name at least one load state")
            results['scraper'] = False
        if scraper.get('concurrency', 0) < 1:
            self.logger.error("scraper.concurrency must be at least 1")
            results['scraper'] = False

        extraction = self.settings['extraction']
        if not extraction.get('block_selectors'):
            self.logger.error("extraction.block_selectors must not be empty")
            results['extraction'] = False
        for key in ('max_blocks', 'short_block_length'):
            if extraction.get(key, 0) < 1:
                self.logger.error(f"extraction.{key} must be positive")
                results['extraction'] = False

        for key in ('max_blocks', 'snippet_length'):
            if self.settings['diagnostics'].get(key, 0) < 1:
                self.logger.error(f"diagnostics.{key} must be positive")
                results['diagnostics'] = False

        port = self.settings['server'].get('port')
        if not isinstance(port, int) or not 0 < port < 65536:
            self.logger.error(f"server.port is not a valid port: {port!r}")
            results['server'] = False

        return results
