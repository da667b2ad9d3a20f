"""Listing of the most recent archives in the destination directory."""

import logging
from datetime import datetime
from pathlib import Path
from typing import List

from .models import RecentBackup

DEFAULT_PATTERN = '* backup.*'


class RecentBackupsReporter:
    """Lists the newest archives at a destination, newest first."""

    def __init__(self, limit: int = 8, pattern: str = DEFAULT_PATTERN):
        """Initialize reporter.

        Args:
            limit: Maximum number of archives to return, at least 1.
            pattern: Glob pattern archive names must match.

        Raises:
            ValueError: If limit is less than 1.
        """
        if limit < 1:
            raise ValueError(f"limit must be at least 1, got: {limit}")
        self.limit = limit
        self.pattern = pattern
        self.logger = logging.getLogger(__name__)

    def list(self, destination_dir: Path) -> List[RecentBackup]:
        """Return up to ``limit`` archives sorted by modification time, newest first.

        An unreadable destination gives an empty list and a warning. An
        archive that vanishes or cannot be read while listing is left out.
        """
        try:
            candidates = list(Path(destination_dir).glob(self.pattern))
        except OSError as e:
            self.logger.warning(f"Could not list recent backups in {destination_dir}: {e}")
            return []

        backups = []
        for archive in candidates:
            try:
                if not archive.is_file():
                    continue
                archive_stat = archive.stat()
            except OSError as e:
                self.logger.debug(f"Skipping {archive}: {e}")
                continue

            backups.append(RecentBackup(
                name=archive.name,
                size_bytes=archive_stat.st_size,
                modified_time=datetime.fromtimestamp(archive_stat.st_mtime)
            ))

        backups.sort(key=lambda backup: backup.modified_time, reverse=True)
        return backups[:self.limit]
