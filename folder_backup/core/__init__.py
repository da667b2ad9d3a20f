"""Core backup functionality."""

from .runner import BackupRunner, RunReport
from .scanner import FolderSizer
from .size_gate import SizeGate, GateDecision, GateViolation
from .staging import StagingArea, StagingError
from .archive_job import ArchiveJob
from .archiver import Archiver, ZipArchiver, TarArchiver, CompressionError, MoveError
from .recent import RecentBackupsReporter
from .models import FolderSpec, MeasuredFolder, BackupLimits, RunContext, BackupSettings, ArchiveOutcome

__all__ = [
    "BackupRunner", "RunReport", "FolderSizer", "SizeGate", "GateDecision", "GateViolation",
    "StagingArea", "StagingError", "ArchiveJob", "Archiver", "ZipArchiver", "TarArchiver",
    "CompressionError", "MoveError", "RecentBackupsReporter", "FolderSpec", "MeasuredFolder",
    "BackupLimits", "RunContext", "BackupSettings", "ArchiveOutcome",
]
