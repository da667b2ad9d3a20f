"""Configuration management for folder backup."""

from .config_manager import ConfigManager
from .config_validator import ConfigValidator, ConfigurationError

__all__ = ["ConfigManager", "ConfigValidator", "ConfigurationError"]
