"""Configuration validation for folder backup."""

from typing import Dict, List, Any

from ..core.archiver import ARCHIVE_FORMATS
from ..core.models import POLICY_PER_FOLDER, POLICY_TOTAL


class ConfigurationError(ValueError):
    """Raised when the backup configuration is missing or invalid."""
    pass


class ConfigValidator:
    """Validates folder backup configuration."""

    REQUIRED_FIELDS = ['destination_dir', 'staging_dir', 'folders']
    SIZE_POLICIES = [POLICY_PER_FOLDER, POLICY_TOTAL]

    def validate(self, config: Dict[str, Any]) -> None:
        """Validate configuration data.

        Args:
            config: Configuration dictionary to validate.

        Raises:
            ConfigurationError: If configuration is invalid.
        """
        if not isinstance(config, dict):
            raise ConfigurationError("Configuration must be a mapping")

        self._validate_structure(config)
        self._validate_folders(config.get('folders') or [])
        self._validate_limits(config.get('limits') or {})
        self._validate_reports(config.get('reports') or {})

        archive_format = config.get('archive_format', 'zip')
        if archive_format not in ARCHIVE_FORMATS:
            raise ConfigurationError(
                f"Invalid archive_format: {archive_format}. Valid options: {ARCHIVE_FORMATS}"
            )

        if config.get('date_stamp') is not None:
            self.validate_date_stamp(config['date_stamp'])

    def _validate_structure(self, config: Dict[str, Any]) -> None:
        """Validate required top-level fields.

        Raises:
            ConfigurationError: If required fields are missing or empty.
        """
        missing_fields = [field for field in self.REQUIRED_FIELDS if field not in config]
        if missing_fields:
            raise ConfigurationError(f"Missing required configuration fields: {missing_fields}")

        for field in ['destination_dir', 'staging_dir']:
            if not config[field] or not isinstance(config[field], str):
                raise ConfigurationError(f"{field} must be a non-empty path")

    def _validate_folders(self, folders: List[Dict[str, Any]]) -> None:
        """Validate the folder list. An empty list is allowed.

        Raises:
            ConfigurationError: If a folder entry is invalid.
        """
        if not isinstance(folders, list):
            raise ConfigurationError("folders must be a list")

        seen_names = set()
        for i, folder in enumerate(folders):
            if not isinstance(folder, dict):
                raise ConfigurationError(f"Folder {i} must be a dictionary")

            required_fields = ['name', 'path']
            missing_fields = [field for field in required_fields if field not in folder]
            if missing_fields:
                raise ConfigurationError(f"Folder {i} missing required fields: {missing_fields}")

            if not folder['name'] or not folder['path']:
                raise ConfigurationError(f"Folder {i} name and path cannot be empty")

            name = str(folder['name'])
            if any(sep in name for sep in ('/', '\\')):
                raise ConfigurationError(f"Folder {i} name cannot contain path separators: {name}")

            # Names become archive file names, so they must be unique
            if name in seen_names:
                raise ConfigurationError(f"Duplicate folder name: {name}")
            seen_names.add(name)

    def _validate_limits(self, limits: Dict[str, Any]) -> None:
        """Validate size ceilings and policy.

        Raises:
            ConfigurationError: If a ceiling is not a positive number or the policy is unknown.
        """
        if not isinstance(limits, dict):
            raise ConfigurationError("limits must be a dictionary")

        for key in ['max_folder_size_gb', 'max_total_size_gb']:
            if limits.get(key) is None:
                continue
            value = limits[key]
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
                raise ConfigurationError(f"{key} must be a positive number, got: {value}")

        policy = limits.get('policy', POLICY_PER_FOLDER)
        if policy not in self.SIZE_POLICIES:
            raise ConfigurationError(f"Invalid size policy: {policy}. Valid options: {self.SIZE_POLICIES}")

    def _validate_reports(self, reports: Dict[str, Any]) -> None:
        """Validate report settings.

        Raises:
            ConfigurationError: If recent_count is not a positive integer.
        """
        if not isinstance(reports, dict):
            raise ConfigurationError("reports must be a dictionary")

        if 'recent_count' in reports:
            value = reports['recent_count']
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ConfigurationError(f"recent_count must be a positive integer, got: {value}")

    def validate_date_stamp(self, date_stamp: Any) -> None:
        """Reject date stamps that cannot be part of a file name."""
        text = str(date_stamp)
        if not text or any(sep in text for sep in ('/', '\\')):
            raise ConfigurationError(f"Invalid date_stamp: {date_stamp}")
