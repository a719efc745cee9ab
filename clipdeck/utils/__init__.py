"""Utilities"""

from .config_manager import ConfigManager, get_data_dir

__all__ = ['ConfigManager', 'get_data_dir']
