"""Staging and destination directory setup."""

import logging
from pathlib import Path

from .models import RunContext


class StagingError(OSError):
    """Raised when a staging or destination directory cannot be prepared."""
    pass


class StagingArea:
    """Makes sure the directories a run writes to exist."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def ensure(self, path: Path) -> Path:
        """Create a directory and any missing parents. No-op if it exists.

        Raises:
            StagingError: If the directory cannot be created.
        """
        path = Path(path)
        if path.exists() and not path.is_dir():
            raise StagingError(f"Not a directory: {path}")

        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StagingError(f"Could not create directory {path}: {e}")

        self.logger.debug(f"Directory ready: {path}")
        return path

    def ensure_all(self, context: RunContext) -> None:
        """Prepare the staging directory, then the destination directory."""
        self.ensure(context.staging_dir)
        self.ensure(context.destination_dir)
