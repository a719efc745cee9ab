"""Configuration management module"""

import copy
import os
import yaml
from pathlib import Path
from typing import Dict, Any, Optional
from loguru import logger

DEFAULT_CONFIG: Dict[str, Any] = {
    'clipboard': {
        'check_interval': 500,
        'monitor_enabled': True
    },
    'history': {
        'max_size': 200
    },
    'ui': {
        'window_width': 600,
        'window_height': 500,
        'min_width': 500,
        'min_height': 300,
        'theme': 'auto',
        'show_notifications': True
    },
    'logging': {
        'level': 'INFO',
        'file_logging': True,
        'retention': '7 days'
    }
}

VALID_THEMES = ('light', 'dark', 'auto')


def get_data_dir() -> Path:
    """Per-user data directory for settings and logs"""
    if os.environ.get('CLIPDECK_HOME'):
        return Path(os.environ['CLIPDECK_HOME'])
    if os.environ.get('APPDATA'):
        return Path(os.environ['APPDATA']) / 'ClipDeck'
    return Path.home() / '.clipdeck'


class ConfigManager:
    """Manages application configuration"""

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize configuration manager

        Args:
            config_path: Path to configuration file
        """
        if config_path is None:
            config_path = str(get_data_dir() / 'settings.yaml')

        self.config_path = config_path
        self.config: Dict[str, Any] = {}
        self._load_defaults()
        self._load_config()

    def _load_defaults(self):
        """Load built-in defaults, overlaid by the bundled default_settings.yaml"""
        self.config = copy.deepcopy(DEFAULT_CONFIG)
        default_path = Path(__file__).parent.parent.parent / 'config' / 'default_settings.yaml'

        if not default_path.exists():
            return

        try:
            with open(default_path, 'r', encoding='utf-8') as f:
                self._merge_config(self.config, yaml.safe_load(f) or {})
            logger.info("Loaded default configuration")

        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Failed to load defaults: {e}")

    def _load_config(self):
        """Load user configuration"""
        if not os.path.exists(self.config_path):
            return

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                user_config = yaml.safe_load(f) or {}

            if not isinstance(user_config, dict):
                logger.error(f"Ignoring malformed config file {self.config_path}")
                return

            self._merge_config(self.config, user_config)
            logger.info(f"Loaded user configuration from {self.config_path}")

        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Failed to load user config: {e}")

    def _merge_config(self, base: Dict, updates: Dict):
        """
        Recursively merge configuration dictionaries

        Args:
            base: Base configuration
            updates: Updates to apply
        """
        for key, value in updates.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._merge_config(base[key], value)
            else:
                base[key] = value

    def save(self) -> bool:
        """Save current configuration to file"""
        try:
            os.makedirs(os.path.dirname(self.config_path) or '.', exist_ok=True)

            with open(self.config_path, 'w', encoding='utf-8') as f:
                yaml.dump(self.config, f, default_flow_style=False)

            logger.info(f"Configuration saved to {self.config_path}")
            return True

        except OSError as e:
            logger.error(f"Failed to save configuration: {e}")
            return False

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value

        Args:
            key: Configuration key (dot notation supported)
            default: Default value if not found

        Returns:
            Configuration value
        """
        value = self.config

        for k in key.split('.'):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def set(self, key: str, value: Any):
        """
        Set configuration value

        Args:
            key: Configuration key (dot notation supported)
            value: Value to set
        """
        keys = key.split('.')
        config = self.config

        for k in keys[:-1]:
            if not isinstance(config.get(k), dict):
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value
        logger.debug(f"Set config: {key} = {value}")

    def get_all(self) -> Dict[str, Any]:
        """Get entire configuration"""
        return copy.deepcopy(self.config)

    def reset(self):
        """Reset to default configuration"""
        self._load_defaults()
        logger.info("Configuration reset to defaults")

    def validate(self) -> bool:
        """
        Validate configuration

        Returns:
            True if valid
        """
        required = [
            'clipboard.check_interval',
            'history.max_size',
            'ui.theme',
            'logging.level'
        ]

        for key in required:
            if self.get(key) is None:
                logger.error(f"Missing required config: {key}")
                return False

        check_interval = self.get('clipboard.check_interval')
        if not isinstance(check_interval, int) or check_interval < 100:
            logger.error("Check interval too small (min 100ms)")
            return False

        max_size = self.get('history.max_size')
        if not isinstance(max_size, int) or max_size < 10:
            logger.error("History size too small (min 10)")
            return False

        if str(self.get('ui.theme')).lower() not in VALID_THEMES:
            logger.error(f"Unknown theme: {self.get('ui.theme')}")
            return False

        return True
