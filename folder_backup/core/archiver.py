"""Archive creation and relocation.

Supported formats:
- zip: Standard zip compression (default)
- tar: Uncompressed tar
- tar.gz, tar.bz2, tar.xz: Compressed tar
"""

import os
import shutil
import tarfile
import zipfile
from abc import ABC, abstractmethod
from pathlib import Path


class CompressionError(Exception):
    """Raised when archive creation fails."""
    pass


class MoveError(Exception):
    """Raised when a staged archive cannot be moved to its destination."""
    pass


class Archiver(ABC):
    """Compresses the contents of a directory into a single file."""

    extension = ''

    @abstractmethod
    def compress(self, source_dir: Path, dest_file: Path) -> Path:
        """Write an archive of everything under source_dir to dest_file.

        An existing file at dest_file is overwritten.

        Raises:
            CompressionError: If the archive cannot be written.
        """

    def _source_items(self, source_dir: Path, dest_file: Path):
        """Yield everything under source_dir except the archive being written."""
        target = dest_file.resolve()
        for item in sorted(source_dir.rglob('*')):
            # Staging may live inside a source folder
            if item.resolve() == target:
                continue
            if item.is_file() or item.is_dir():
                yield item


class ZipArchiver(Archiver):
    """Deflate-compressed zip archives."""

    extension = 'zip'

    def compress(self, source_dir: Path, dest_file: Path) -> Path:
        source_dir = Path(source_dir)
        dest_file = Path(dest_file)

        try:
            with zipfile.ZipFile(dest_file, 'w', zipfile.ZIP_DEFLATED) as zipf:
                for item in self._source_items(source_dir, dest_file):
                    # Entries are stored relative to the folder so the archive holds its contents
                    zipf.write(item, item.relative_to(source_dir))
        except (OSError, zipfile.BadZipFile, ValueError) as e:
            raise CompressionError(f"Failed to create archive {dest_file.name}: {e}")

        return dest_file


class TarArchiver(Archiver):
    """Tar archives with optional compression."""

    MODES = {
        'tar': ('tar', 'w'),
        'tar.gz': ('tar.gz', 'w:gz'),
        'tar.bz2': ('tar.bz2', 'w:bz2'),
        'tar.xz': ('tar.xz', 'w:xz'),
    }

    def __init__(self, compression_format: str = 'tar.gz'):
        if compression_format not in self.MODES:
            raise ValueError(f"Invalid tar format: {compression_format}")
        self.extension, self.mode = self.MODES[compression_format]

    def compress(self, source_dir: Path, dest_file: Path) -> Path:
        source_dir = Path(source_dir)
        dest_file = Path(dest_file)

        try:
            with tarfile.open(dest_file, self.mode) as tar:
                for item in self._source_items(source_dir, dest_file):
                    tar.add(item, arcname=item.relative_to(source_dir).as_posix(), recursive=False)
        except (OSError, tarfile.TarError) as e:
            raise CompressionError(f"Failed to create archive {dest_file.name}: {e}")

        return dest_file


ARCHIVE_FORMATS = ['zip', 'tar', 'tar.gz', 'tar.bz2', 'tar.xz']


def create_archiver(archive_format: str = 'zip') -> Archiver:
    """Build the archiver for a configured format.

    Raises:
        ValueError: If archive_format is not supported.
    """
    if archive_format == 'zip':
        return ZipArchiver()
    if archive_format in TarArchiver.MODES:
        return TarArchiver(archive_format)

    raise ValueError(
        f"Invalid archive format: {archive_format}. "
        f"Valid options: {ARCHIVE_FORMATS}"
    )


def move_file(source: Path, destination: Path) -> Path:
    """Move a file, across devices if needed, replacing any existing destination.

    Raises:
        MoveError: If the file cannot be moved.
    """
    try:
        if os.path.isdir(destination):
            raise MoveError(f"Destination is a directory: {destination}")
        shutil.move(str(source), str(destination))
    except OSError as e:
        raise MoveError(f"Failed to move {source} to {destination}: {e}")

    return Path(destination)
