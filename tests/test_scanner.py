"""Unit tests for folder size measurement (folder_backup/core/scanner.py)."""

import os

import pytest

from folder_backup.core import scanner as scanner_module
from folder_backup.core.models import FolderSpec
from folder_backup.core.scanner import FolderSizer


class TestMeasure:
    """Test FolderSizer.measure."""

    def test_sums_files_recursively(self, tmp_path):
        """Test that nested file sizes are all counted."""
        (tmp_path / 'a' / 'b').mkdir(parents=True)
        (tmp_path / 'one.bin').write_bytes(b'x' * 100)
        (tmp_path / 'a' / 'two.bin').write_bytes(b'x' * 250)
        (tmp_path / 'a' / 'b' / 'three.bin').write_bytes(b'x' * 50)

        assert FolderSizer().measure(str(tmp_path)) == 400

    def test_empty_folder(self, tmp_path):
        """Test that an empty folder measures zero bytes."""
        assert FolderSizer().measure(str(tmp_path)) == 0

    def test_missing_folder_raises(self, tmp_path):
        """Test that a missing folder raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            FolderSizer().measure(str(tmp_path / 'missing'))

    def test_file_path_raises(self, tmp_path):
        """Test that a regular file is not treated as a folder."""
        target = tmp_path / 'file.txt'
        target.write_text('data')

        with pytest.raises(FileNotFoundError):
            FolderSizer().measure(str(target))

    @pytest.mark.skipif(not hasattr(os, 'symlink'), reason="symlinks not supported")
    def test_symlink_cycle_does_not_loop(self, tmp_path):
        """Test that a symlink pointing back at its parent is not followed."""
        (tmp_path / 'data.bin').write_bytes(b'x' * 10)
        try:
            os.symlink(tmp_path, tmp_path / 'loop')
        except OSError:
            pytest.skip("cannot create symlinks here")

        assert FolderSizer().measure(str(tmp_path)) == 10

    def test_unreadable_directory_is_skipped(self, tmp_path, monkeypatch):
        """Test that a directory that cannot be listed is left out of the total."""
        (tmp_path / 'locked').mkdir()
        (tmp_path / 'locked' / 'secret.bin').write_bytes(b'x' * 500)
        (tmp_path / 'open.bin').write_bytes(b'x' * 20)

        real_scandir = os.scandir

        def fake_scandir(path):
            if os.path.basename(path) == 'locked':
                raise PermissionError(13, 'Permission denied', path)
            return real_scandir(path)

        monkeypatch.setattr(scanner_module.os, 'scandir', fake_scandir)

        assert FolderSizer().measure(str(tmp_path)) == 20


class TestMeasureAll:
    """Test FolderSizer.measure_all."""

    def test_keeps_configuration_order(self, folders):
        """Test that measured folders come back in the order given."""
        measured, unavailable = FolderSizer().measure_all(folders)

        assert [m.name for m in measured] == ['Docs', 'Pics']
        assert unavailable == []
        assert measured[1].size_bytes == 2048

    def test_missing_folder_is_excluded(self, folders, tmp_path):
        """Test that a missing folder is reported as unavailable, not measured."""
        missing = FolderSpec(name='Music', path=str(tmp_path / 'Music'))

        measured, unavailable = FolderSizer().measure_all(folders + (missing,))

        assert [m.name for m in measured] == ['Docs', 'Pics']
        assert unavailable == [missing]
