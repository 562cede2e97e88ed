"""
Configuration management for the system stats sampler.
"""
from .config_manager import ConfigManager, DEFAULT_CONFIG

__all__ = [
    'ConfigManager',
    'DEFAULT_CONFIG'
]
