"""
Shared pytest fixtures for folder backup tests.

This module provides fixtures for:
- Source folders with real files
- Run contexts pointing at temporary staging/destination directories
- Fake sizer and failing archivers for injecting sizes and errors
- YAML configuration files for CLI tests
"""

import logging
import os
from pathlib import Path

import pytest
import yaml

from folder_backup.core.archiver import CompressionError, MoveError, ZipArchiver
from folder_backup.core.models import BYTES_PER_GB, FolderSpec, RunContext
from folder_backup.core.scanner import FolderSizer

DATE_STAMP = '20240115'


class FakeSizer(FolderSizer):
    """Reports configured sizes instead of walking the folder."""

    def __init__(self, sizes_gb):
        super().__init__()
        self.sizes_gb = sizes_gb

    def measure(self, path):
        if not os.path.isdir(path):
            raise FileNotFoundError(path)
        return int(self.sizes_gb[os.path.basename(path)] * BYTES_PER_GB)


class FailingZipArchiver(ZipArchiver):
    """Writes a partial archive for selected folders, then fails."""

    def __init__(self, failing_names):
        self.failing_names = set(failing_names)

    def compress(self, source_dir, dest_file):
        if Path(source_dir).name in self.failing_names:
            Path(dest_file).write_bytes(b'partial archive')
            raise CompressionError("No space left on device")
        return super().compress(source_dir, dest_file)


def failing_mover(source, destination):
    raise MoveError(f"Device not ready: {destination}")


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo handlers installed by the CLI's logging setup."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    for handler in root_logger.handlers[:]:
        if handler not in handlers:
            root_logger.removeHandler(handler)
    root_logger.setLevel(level)


@pytest.fixture
def source_root(tmp_path):
    """Create Docs and Pics source folders with a few files."""
    root = tmp_path / 'sources'

    docs = root / 'Docs'
    (docs / 'letters').mkdir(parents=True)
    (docs / 'notes.txt').write_text('meeting notes\n' * 10)
    (docs / 'letters' / 'letter1.txt').write_text('Dear reader\n' * 20)

    pics = root / 'Pics'
    (pics / '2023').mkdir(parents=True)
    (pics / '2023' / 'beach.jpg').write_bytes(os.urandom(2048))

    return root


@pytest.fixture
def folders(source_root):
    """Folder specs for the Docs and Pics source folders."""
    return (
        FolderSpec(name='Docs', path=str(source_root / 'Docs')),
        FolderSpec(name='Pics', path=str(source_root / 'Pics')),
    )


@pytest.fixture
def run_context(tmp_path):
    """Run context with staging and destination directories not yet created."""
    return RunContext(
        staging_dir=tmp_path / 'staging',
        destination_dir=tmp_path / 'destination',
        date_stamp=DATE_STAMP
    )


@pytest.fixture
def write_config(tmp_path):
    """Write a YAML config file and return its path."""
    def _write(data):
        config_file = tmp_path / 'config.yaml'
        config_file.write_text(yaml.safe_dump(data), encoding='utf-8')
        return str(config_file)
    return _write


@pytest.fixture
def config_data(tmp_path, source_root):
    """A complete, valid configuration dictionary."""
    return {
        'destination_dir': str(tmp_path / 'destination'),
        'staging_dir': str(tmp_path / 'staging'),
        'folders': [
            {'name': 'Docs', 'path': str(source_root / 'Docs')},
            {'name': 'Pics', 'path': str(source_root / 'Pics')},
        ],
        'limits': {'max_folder_size_gb': 10},
    }
