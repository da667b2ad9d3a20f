"""Main backup run coordinator."""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .archive_job import ArchiveJob
from .archiver import Archiver, create_archiver
from .models import ArchiveOutcome, BackupSettings, FolderSpec, MeasuredFolder, OutcomeStatus, RecentBackup
from .recent import RecentBackupsReporter
from .scanner import FolderSizer
from .size_gate import GateDecision, SizeGate
from .staging import StagingArea, StagingError

EXIT_OK = 0
EXIT_FATAL = 1


@dataclass
class RunReport:
    """Everything a backup run produced, for summarising."""
    measured: List[MeasuredFolder] = field(default_factory=list)
    unavailable: List[FolderSpec] = field(default_factory=list)
    decision: Optional[GateDecision] = None
    outcomes: List[ArchiveOutcome] = field(default_factory=list)
    recent: List[RecentBackup] = field(default_factory=list)
    exit_code: int = EXIT_OK
    fatal_error: Optional[str] = None

    @property
    def aborted(self) -> bool:
        return self.decision is not None and not self.decision.proceed

    @property
    def succeeded(self) -> List[ArchiveOutcome]:
        return [o for o in self.outcomes if o.status is OutcomeStatus.SUCCEEDED]

    @property
    def skipped(self) -> List[ArchiveOutcome]:
        return [o for o in self.outcomes if o.status is OutcomeStatus.SKIPPED]

    @property
    def failed(self) -> List[ArchiveOutcome]:
        return [o for o in self.outcomes if o.status is OutcomeStatus.FAILED]


class BackupRunner:
    """Runs measurement, gating, archiving and reporting in order.

    Exit code policy: folders that are skipped or fail do not change the
    exit code. Only a gate abort or a staging failure returns EXIT_FATAL.
    """

    def __init__(self, settings: BackupSettings, archiver: Optional[Archiver] = None,
                 sizer: Optional[FolderSizer] = None, reporter: Optional[RecentBackupsReporter] = None):
        """Initialize backup runner.

        Args:
            settings: Validated configuration for this run.
            archiver: Compression capability, defaults to the configured format.
            sizer: Folder size probe.
            reporter: Recent backups reporter.
        """
        self.settings = settings
        self.archiver = archiver or create_archiver(settings.archive_format)
        self.sizer = sizer or FolderSizer()
        self.reporter = reporter or RecentBackupsReporter(limit=settings.recent_count)
        self.gate = SizeGate()
        self.staging = StagingArea()
        self.logger = logging.getLogger(__name__)

    def run(self) -> RunReport:
        """Run the backup to completion.

        Returns:
            RunReport with per-folder outcomes and the exit code.
        """
        context = self.settings.context
        report = RunReport()

        self.logger.info(f"Starting backup run {context.date_stamp} for {len(self.settings.folders)} folders")

        report.measured, report.unavailable = self.sizer.measure_all(self.settings.folders)

        report.decision = self.gate.evaluate(report.measured, self.settings.limits)
        if not report.decision.proceed:
            report.exit_code = EXIT_FATAL
            report.fatal_error = "Backup aborted: size limit exceeded"
            self.logger.error(report.fatal_error)
            return report

        try:
            self.staging.ensure_all(context)
        except StagingError as e:
            report.exit_code = EXIT_FATAL
            report.fatal_error = str(e)
            self.logger.error(f"Backup aborted: {e}")
            return report

        job = ArchiveJob(self.archiver)
        report.outcomes = [job.run(folder, context) for folder in report.decision.folders]

        self._log_summary(report)

        report.recent = self.reporter.list(context.destination_dir)
        return report

    def _log_summary(self, report: RunReport) -> None:
        for outcome in report.outcomes:
            if outcome.status is OutcomeStatus.SUCCEEDED:
                self.logger.info(f"{outcome.folder_name}: succeeded -> {outcome.final_path}")
            elif outcome.status is OutcomeStatus.SKIPPED:
                self.logger.warning(f"{outcome.folder_name}: skipped ({outcome.reason})")
            else:
                self.logger.error(f"{outcome.folder_name}: failed ({outcome.reason})")

        self.logger.info(
            f"Backup run finished: {len(report.succeeded)} succeeded, "
            f"{len(report.skipped)} skipped, {len(report.failed)} failed"
        )
