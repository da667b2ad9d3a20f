"""Configuration management for the folder backup system."""

import os
import yaml
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Any, Optional

from .config_validator import ConfigValidator, ConfigurationError
from ..core.models import BackupLimits, BackupSettings, FolderSpec, RunContext, POLICY_PER_FOLDER

DATE_STAMP_FORMAT = '%Y%m%d'


def expand_path(path: str) -> str:
    """Resolve per-user directories such as ~ or $HOME in a configured path."""
    return os.path.expanduser(os.path.expandvars(str(path)))


class ConfigManager:
    """Loads backup configuration and builds the settings for a run."""

    DEFAULT_CONFIG_LOCATIONS = [
        "config.yaml",
        "config.yml",
        os.path.expanduser("~/.folder-backup/config.yaml"),
        os.path.expanduser("~/.folder-backup/config.yml"),
        "/etc/folder-backup/config.yaml",
        "/etc/folder-backup/config.yml"
    ]

    def __init__(self, config_path: Optional[str] = None):
        """Initialize configuration manager.

        Args:
            config_path: Optional path to config file. If not provided,
                        will search in default locations.
        """
        self.config_path = config_path
        self.config_data: Dict[str, Any] = {}
        self.validator = ConfigValidator()

    def load_config(self) -> Dict[str, Any]:
        """Load configuration from file.

        Returns:
            Dictionary containing configuration data.

        Raises:
            ConfigurationError: If the config file is missing or invalid.
        """
        config_file = self._find_config_file()

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                self.config_data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in config file {config_file}: {e}")
        except OSError as e:
            raise ConfigurationError(f"Error reading config file {config_file}: {e}")

        self.validator.validate(self.config_data)
        self._set_defaults()

        return self.config_data

    def _find_config_file(self) -> str:
        """Find configuration file in default locations.

        Raises:
            ConfigurationError: If no config file is found.
        """
        if self.config_path:
            if os.path.exists(self.config_path):
                return self.config_path
            raise ConfigurationError(f"Config file not found: {self.config_path}")

        for location in self.DEFAULT_CONFIG_LOCATIONS:
            if os.path.exists(location):
                return location

        raise ConfigurationError(
            f"Configuration file not found in any of these locations:\n" +
            "\n".join(f"  - {loc}" for loc in self.DEFAULT_CONFIG_LOCATIONS) +
            "\n\nPlease copy config.example.yaml to config.yaml and customize it."
        )

    def _set_defaults(self):
        """Set default values for optional configuration parameters."""
        if self.config_data.get('folders') is None:
            self.config_data['folders'] = []
        self.config_data.setdefault('archive_format', 'zip')

        defaults = {
            'limits': {
                'max_folder_size_gb': None,
                'max_total_size_gb': None,
                'policy': POLICY_PER_FOLDER
            },
            'logging': {
                'level': 'INFO',
                'file': None
            },
            'reports': {
                'recent_count': 8
            }
        }

        # Merge defaults with existing config
        for section, section_defaults in defaults.items():
            if not self.config_data.get(section):
                self.config_data[section] = {}
            for key, value in section_defaults.items():
                if key not in self.config_data[section]:
                    self.config_data[section][key] = value

    def get_folders(self) -> List[Dict[str, Any]]:
        """Get the configured folders in order."""
        return self.config_data.get('folders', [])

    def get_limits_config(self) -> Dict[str, Any]:
        """Get size limit configuration."""
        return self.config_data.get('limits', {})

    def get_logging_config(self) -> Dict[str, Any]:
        """Get logging configuration."""
        return self.config_data.get('logging', {})

    def get_reports_config(self) -> Dict[str, Any]:
        """Get reports configuration."""
        return self.config_data.get('reports', {})

    def build_settings(self, date_stamp: Optional[str] = None, now: Optional[datetime] = None) -> BackupSettings:
        """Build the immutable settings for one backup run.

        Args:
            date_stamp: Overrides the configured date stamp.
            now: Clock used for the default date stamp.

        Returns:
            BackupSettings for the run.
        """
        if not self.config_data:
            self.load_config()

        if date_stamp is None and self.config_data.get('date_stamp') is not None:
            date_stamp = str(self.config_data['date_stamp'])
        if date_stamp is not None:
            self.validator.validate_date_stamp(date_stamp)
        else:
            date_stamp = (now or datetime.now()).strftime(DATE_STAMP_FORMAT)

        folders = tuple(
            FolderSpec(name=str(folder['name']), path=expand_path(folder['path']))
            for folder in self.get_folders()
        )

        limits_config = self.get_limits_config()
        limits = BackupLimits(
            max_folder_size_gb=limits_config.get('max_folder_size_gb'),
            max_total_size_gb=limits_config.get('max_total_size_gb'),
            policy=limits_config.get('policy', POLICY_PER_FOLDER)
        )

        context = RunContext(
            staging_dir=Path(expand_path(self.config_data['staging_dir'])),
            destination_dir=Path(expand_path(self.config_data['destination_dir'])),
            date_stamp=date_stamp
        )

        return BackupSettings(
            folders=folders,
            limits=limits,
            context=context,
            archive_format=self.config_data.get('archive_format', 'zip'),
            recent_count=self.get_reports_config().get('recent_count', 8)
        )
