"""Folder size measurement for backup runs."""

import os
import logging
from typing import Iterable, List, Tuple

from .models import FolderSpec, MeasuredFolder


class FolderSizer:
    """Measures the recursive size of folders."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def measure(self, path: str) -> int:
        """Measure the total size of all regular files under a folder.

        Entries that cannot be read are skipped, so the result may be a
        best-effort lower bound.

        Args:
            path: Folder to measure.

        Returns:
            Size in bytes.

        Raises:
            FileNotFoundError: If the folder does not exist.
        """
        if not os.path.isdir(path):
            raise FileNotFoundError(f"Folder does not exist: {path}")

        total_size = 0
        pending = [path]

        while pending:
            directory = pending.pop()
            try:
                with os.scandir(directory) as it:
                    entries = list(it)
            except OSError as e:
                self.logger.debug(f"Skipping unreadable directory {directory}: {e}")
                continue

            for entry in entries:
                try:
                    # Symlinks are never followed, which rules out cycles
                    if entry.is_dir(follow_symlinks=False):
                        pending.append(entry.path)
                    elif entry.is_file(follow_symlinks=False):
                        total_size += entry.stat(follow_symlinks=False).st_size
                except OSError as e:
                    self.logger.debug(f"Skipping {entry.path}: {e}")
                    continue

        return total_size

    def measure_all(self, folders: Iterable[FolderSpec]) -> Tuple[List[MeasuredFolder], List[FolderSpec]]:
        """Measure every configured folder.

        Args:
            folders: Folders in configuration order.

        Returns:
            Tuple of (measured folders, unavailable folders).
        """
        measured = []
        unavailable = []

        for spec in folders:
            try:
                size_bytes = self.measure(spec.path)
            except FileNotFoundError:
                self.logger.warning(f"{spec.name}: folder not available at {spec.path}, excluding it")
                unavailable.append(spec)
                continue

            folder = MeasuredFolder(spec=spec, size_bytes=size_bytes)
            self.logger.info(f"{spec.name}: {folder.size_gb:.2f} GB ({spec.path})")
            measured.append(folder)

        return measured, unavailable
