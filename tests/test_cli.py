"""Tests for the command-line interface (folder_backup/cli.py)."""

import os
import shutil

from click.testing import CliRunner

from folder_backup.cli import cli

DATE_STAMP = '20240115'


def invoke(config_path, *args):
    return CliRunner().invoke(cli, ['--config', config_path, '--log-level', 'WARNING'] + list(args))


class TestRunCommand:
    """Test the run command."""

    def test_run_creates_archives(self, write_config, config_data, tmp_path):
        """Test a full run exits 0 and produces dated archives."""
        result = invoke(write_config(config_data), 'run', '--date-stamp', DATE_STAMP)

        assert result.exit_code == 0, result.output
        assert sorted(os.listdir(tmp_path / 'destination')) == [
            f'{DATE_STAMP} Docs backup.zip',
            f'{DATE_STAMP} Pics backup.zip',
        ]
        assert os.listdir(tmp_path / 'staging') == []
        assert 'Docs' in result.output
        assert '2 succeeded, 0 skipped, 0 failed' in result.output

    def test_size_limit_exceeded_exits_1(self, write_config, config_data, tmp_path):
        """Test that a gate abort exits 1 and creates nothing."""
        # Pics holds 2KB, roughly 0.0000019 GB
        config_data['limits'] = {'max_folder_size_gb': 0.000001}

        result = invoke(write_config(config_data), 'run', '--date-stamp', DATE_STAMP)

        assert result.exit_code == 1
        assert not (tmp_path / 'destination').exists()

    def test_missing_source_is_reported_not_fatal(self, write_config, config_data, tmp_path, source_root):
        """Test that an unavailable folder does not change the exit code."""
        shutil.rmtree(source_root / 'Docs')

        result = invoke(write_config(config_data), 'run', '--date-stamp', DATE_STAMP)

        assert result.exit_code == 0, result.output
        assert os.listdir(tmp_path / 'destination') == [f'{DATE_STAMP} Pics backup.zip']

    def test_missing_config_exits_1(self, tmp_path):
        result = invoke(str(tmp_path / 'nope.yaml'), 'run')

        assert result.exit_code == 1

    def test_missing_required_field_exits_1(self, write_config, config_data, tmp_path):
        """Test that invalid configuration aborts before touching the filesystem."""
        del config_data['destination_dir']

        result = invoke(write_config(config_data), 'run')

        assert result.exit_code == 1
        assert not (tmp_path / 'staging').exists()

    def test_log_file_from_config(self, write_config, config_data, tmp_path):
        """Test that the configured log file receives run logs."""
        log_file = tmp_path / 'backup.log'
        config_data['logging'] = {'file': str(log_file)}

        result = invoke(write_config(config_data), 'run', '--date-stamp', DATE_STAMP)

        assert result.exit_code == 0, result.output
        assert log_file.exists()


class TestOtherCommands:
    """Test measure, recent and validate-config."""

    def test_measure_within_limits(self, write_config, config_data, tmp_path):
        result = invoke(write_config(config_data), 'measure')

        assert result.exit_code == 0, result.output
        assert 'Size limits satisfied' in result.output
        assert not (tmp_path / 'staging').exists()

    def test_measure_over_limit(self, write_config, config_data):
        config_data['limits'] = {'max_folder_size_gb': 0.000001}

        result = invoke(write_config(config_data), 'measure')

        assert result.exit_code == 1

    def test_recent_lists_archives(self, write_config, config_data):
        config_path = write_config(config_data)
        invoke(config_path, 'run', '--date-stamp', DATE_STAMP)

        result = invoke(config_path, 'recent', '--limit', '1')

        assert result.exit_code == 0, result.output
        assert result.output.count(' backup.zip') == 1

    def test_recent_without_destination(self, write_config, config_data):
        result = invoke(write_config(config_data), 'recent')

        assert result.exit_code == 0
        assert 'No backups found' in result.output

    def test_validate_config(self, write_config, config_data):
        result = invoke(write_config(config_data), 'validate-config')

        assert result.exit_code == 0, result.output
        assert 'Folders: 2' in result.output
        assert 'Max folder size: 10 GB' in result.output


class TestInvalidOptions:
    """Test rejected configuration values and options."""

    def test_non_numeric_recent_count_exits_1(self, write_config, config_data):
        """Test that a bad recent_count is a configuration error, not a traceback."""
        config_data['reports'] = {'recent_count': 'eight'}

        result = invoke(write_config(config_data), 'recent')

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert 'Configuration error' in result.output

    def test_zero_limit_rejected(self, write_config, config_data):
        """Test that --limit must be at least one."""
        result = invoke(write_config(config_data), 'recent', '--limit', '0')

        assert result.exit_code == 2
