"""Archive a single folder: compress into staging, then move to the destination."""

import logging
import os
from pathlib import Path
from typing import Callable

from .archiver import Archiver, move_file
from .models import ArchiveOutcome, MeasuredFolder, RunContext

SOURCE_NOT_FOUND = 'source not found'


def archive_file_name(date_stamp: str, folder_name: str, extension: str) -> str:
    """Build the archive file name for a folder.

    Format: "{date_stamp} {folder_name} backup.{extension}". The same
    date and folder always give the same name, so re-runs overwrite.
    """
    return f"{date_stamp} {folder_name} backup.{extension}"


class ArchiveJob:
    """Compresses one folder locally and relocates the finished archive.

    The archive is built in the staging directory and only a complete file
    is moved to the destination.
    """

    def __init__(self, archiver: Archiver, mover: Callable[[Path, Path], Path] = move_file):
        """Initialize archive job.

        Args:
            archiver: Compression capability used to build archives.
            mover: Callable relocating a file, overwriting its destination.
        """
        self.archiver = archiver
        self.mover = mover
        self.logger = logging.getLogger(__name__)

    def run(self, folder: MeasuredFolder, context: RunContext) -> ArchiveOutcome:
        """Archive a folder and report what happened.

        Failures are returned as outcomes rather than raised, so the caller
        can continue with the next folder.

        Args:
            folder: Folder that passed the size gate.
            context: Staging/destination directories and date stamp.

        Returns:
            ArchiveOutcome for this folder.
        """
        file_name = archive_file_name(context.date_stamp, folder.name, self.archiver.extension)
        staged_path = Path(context.staging_dir) / file_name
        final_path = Path(context.destination_dir) / file_name

        # The folder may have disappeared since it was measured
        if not os.path.isdir(folder.path):
            self.logger.warning(f"{folder.name}: source not found at {folder.path}, skipping")
            return ArchiveOutcome.skipped(folder.name, SOURCE_NOT_FOUND)

        self.logger.info(f"{folder.name}: compressing {folder.path}")
        self.logger.info(f"{folder.name}: staging archive at {staged_path}")

        try:
            self.archiver.compress(Path(folder.path), staged_path)
            size_bytes = staged_path.stat().st_size

            self.logger.info(f"{folder.name}: moving archive to {final_path}")
            self.mover(staged_path, final_path)
        except Exception as e:
            self.logger.error(f"{folder.name}: backup failed: {e}")
            self._discard_staged(staged_path)
            return ArchiveOutcome.failed(folder.name, e)

        self.logger.info(f"{folder.name}: backup completed ({final_path})")
        return ArchiveOutcome.succeeded(folder.name, final_path, size_bytes)

    def _discard_staged(self, staged_path: Path) -> None:
        """Remove a partial or unmoved archive from the staging directory."""
        if not staged_path.exists():
            return

        try:
            staged_path.unlink()
            self.logger.debug(f"Removed staged archive {staged_path}")
        except OSError as e:
            self.logger.warning(f"Could not remove staged archive {staged_path}: {e}")
