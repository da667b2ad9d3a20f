"""Command-line interface for folder backup."""

import logging
import sys
import click
from typing import Optional

from .core.runner import BackupRunner, RunReport
from .core.models import BackupSettings, OutcomeStatus
from .core.recent import RecentBackupsReporter
from .core.scanner import FolderSizer
from .core.size_gate import SizeGate
from .config.config_manager import ConfigManager
from .config.config_validator import ConfigurationError
from .utils.formatters import format_date, format_file_size, format_size_mb


def setup_logging(level: str, log_file: Optional[str] = None):
    """Set up logging configuration."""
    # Convert string level to logging constant
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f'Invalid log level: {level}')

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Clear existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
        except OSError as e:
            click.echo(f"Warning: Could not set up file logging: {e}", err=True)


def _load_settings(ctx, date_stamp: Optional[str] = None) -> BackupSettings:
    """Load configuration and build run settings, or exit with status 1."""
    config_manager = ConfigManager(ctx.obj.get('config_path'))
    try:
        config_manager.load_config()
        settings = config_manager.build_settings(date_stamp=date_stamp)
    except ConfigurationError as e:
        click.echo(f"❌ Configuration error: {e}", err=True)
        sys.exit(1)

    # Log file from the config applies unless one was given on the command line
    logging_config = config_manager.get_logging_config()
    if logging_config.get('file') and not ctx.obj.get('log_file'):
        setup_logging(ctx.obj.get('log_level', 'INFO'), logging_config['file'])

    return settings


@click.group()
@click.option('--config', '-c', 'config_path',
              help='Path to configuration file')
@click.option('--log-level', default='INFO',
              type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
              help='Logging level')
@click.option('--log-file',
              help='Log file path')
@click.pass_context
def cli(ctx, config_path: Optional[str], log_level: str, log_file: Optional[str]):
    """Folder Backup - archive named folders to a backup destination."""

    ctx.ensure_object(dict)

    setup_logging(log_level, log_file)

    ctx.obj['config_path'] = config_path
    ctx.obj['log_level'] = log_level
    ctx.obj['log_file'] = log_file


@cli.command()
@click.option('--date-stamp', help='Date stamp used in archive names (default: today, YYYYMMDD)')
@click.pass_context
def run(ctx, date_stamp: Optional[str]):
    """Measure, gate, archive and move all configured folders."""
    settings = _load_settings(ctx, date_stamp)

    click.echo(f"Starting backup {settings.context.date_stamp} of {len(settings.folders)} folders...")

    report = BackupRunner(settings).run()
    _print_report(report)

    sys.exit(report.exit_code)


@cli.command()
@click.pass_context
def measure(ctx):
    """Show folder sizes and whether the size limits allow a backup."""
    settings = _load_settings(ctx)

    measured, unavailable = FolderSizer().measure_all(settings.folders)

    click.echo("\n📏 Folder sizes")
    click.echo("=" * 50)
    for folder in measured:
        click.echo(f"   {folder.name}: {format_file_size(folder.size_bytes)} ({folder.path})")
    for spec in unavailable:
        click.echo(f"   ⚠️  {spec.name}: not available ({spec.path})")

    decision = SizeGate().evaluate(measured, settings.limits)
    click.echo(f"\n   Total: {format_file_size(decision.total_bytes)}")

    if not decision.proceed:
        _print_violations(decision.violations)
        sys.exit(1)

    click.echo("✅ Size limits satisfied")


@cli.command()
@click.option('--limit', '-n', type=click.IntRange(min=1), default=None,
              help='Number of archives to show')
@click.pass_context
def recent(ctx, limit: Optional[int]):
    """List the most recent archives in the destination directory."""
    settings = _load_settings(ctx)

    reporter = RecentBackupsReporter(limit=limit if limit is not None else settings.recent_count)
    _print_recent(reporter.list(settings.context.destination_dir))


@cli.command()
@click.pass_context
def validate_config(ctx):
    """Validate configuration file."""
    settings = _load_settings(ctx)

    click.echo("✅ Configuration loaded successfully")

    click.echo(f"\n📊 Configuration Summary:")
    click.echo(f"   Staging directory: {settings.context.staging_dir}")
    click.echo(f"   Destination directory: {settings.context.destination_dir}")
    click.echo(f"   Archive format: {settings.archive_format}")
    click.echo(f"   Folders: {len(settings.folders)}")

    for i, folder in enumerate(settings.folders, 1):
        click.echo(f"     {i}. {folder.name}: {folder.path}")

    limits = settings.limits
    click.echo(f"   Size policy: {limits.policy}")
    if limits.max_folder_size_gb is not None:
        click.echo(f"   Max folder size: {limits.max_folder_size_gb:g} GB")
    if limits.max_total_size_gb is not None:
        click.echo(f"   Max total size: {limits.max_total_size_gb:g} GB")


def _print_violations(violations):
    click.echo("\n❌ Backup aborted - size limit exceeded:", err=True)
    for violation in violations:
        click.echo(f"   • {violation.describe()}", err=True)


def _print_recent(backups):
    click.echo(f"\n🗂️  Most recent backups")
    click.echo("=" * 50)

    if not backups:
        click.echo("   No backups found")
        return

    for backup in backups:
        click.echo(f"   {backup.name}  {format_size_mb(backup.size_bytes)}  ({format_date(backup.modified_time, short=True)})")


def _print_report(report: RunReport):
    """Print the per-folder summary of a run."""
    for spec in report.unavailable:
        click.echo(f"⚠️  {spec.name}: not available ({spec.path})")

    if report.aborted:
        _print_violations(report.decision.violations)
        return

    if report.fatal_error:
        click.echo(f"\n❌ Backup aborted: {report.fatal_error}", err=True)
        return

    click.echo("\n📊 Summary:")
    for outcome in report.outcomes:
        if outcome.status is OutcomeStatus.SUCCEEDED:
            click.echo(f"   ✅ {outcome.folder_name}: {outcome.final_path} ({format_size_mb(outcome.size_bytes)})")
        elif outcome.status is OutcomeStatus.SKIPPED:
            click.echo(f"   ⏭️  {outcome.folder_name}: skipped ({outcome.reason})")
        else:
            click.echo(f"   ❌ {outcome.folder_name}: failed ({outcome.reason})")

    click.echo(f"\n   {len(report.succeeded)} succeeded, {len(report.skipped)} skipped, {len(report.failed)} failed")

    _print_recent(report.recent)


def main():
    """Main CLI entry point."""
    cli()


if __name__ == '__main__':
    main()
