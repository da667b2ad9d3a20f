"""Data models for backup runs."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple

BYTES_PER_GB = 1024 ** 3
BYTES_PER_MB = 1024 ** 2

POLICY_PER_FOLDER = 'per_folder'
POLICY_TOTAL = 'total'


@dataclass(frozen=True)
class FolderSpec:
    """A named folder to back up."""
    name: str
    path: str


@dataclass
class MeasuredFolder:
    """A folder together with its measured size."""
    spec: FolderSpec
    size_bytes: int

    @property
    def name(self) -> str:
        return self.spec.name

    @property
    def path(self) -> str:
        return self.spec.path

    @property
    def size_gb(self) -> float:
        return self.size_bytes / BYTES_PER_GB


@dataclass(frozen=True)
class BackupLimits:
    """Size ceilings. A ceiling of None is not enforced."""
    max_folder_size_gb: Optional[float] = None
    max_total_size_gb: Optional[float] = None
    policy: str = POLICY_PER_FOLDER


@dataclass(frozen=True)
class RunContext:
    """Where archives are built and where they end up."""
    staging_dir: Path
    destination_dir: Path
    date_stamp: str


@dataclass(frozen=True)
class BackupSettings:
    """Validated configuration handed to the backup runner."""
    folders: Tuple[FolderSpec, ...]
    limits: BackupLimits
    context: RunContext
    archive_format: str = 'zip'
    recent_count: int = 8


class OutcomeStatus(Enum):
    SUCCEEDED = 'succeeded'
    SKIPPED = 'skipped'
    FAILED = 'failed'


@dataclass
class ArchiveOutcome:
    """Result of archiving a single folder."""
    folder_name: str
    status: OutcomeStatus
    final_path: Optional[Path] = None
    size_bytes: Optional[int] = None
    reason: Optional[str] = None
    error: Optional[Exception] = None

    @classmethod
    def succeeded(cls, folder_name: str, final_path: Path, size_bytes: int) -> 'ArchiveOutcome':
        return cls(folder_name, OutcomeStatus.SUCCEEDED, final_path=final_path, size_bytes=size_bytes)

    @classmethod
    def skipped(cls, folder_name: str, reason: str) -> 'ArchiveOutcome':
        return cls(folder_name, OutcomeStatus.SKIPPED, reason=reason)

    @classmethod
    def failed(cls, folder_name: str, error: Exception) -> 'ArchiveOutcome':
        return cls(folder_name, OutcomeStatus.FAILED, reason=str(error), error=error)


@dataclass
class RecentBackup:
    """An archive found in the destination directory."""
    name: str
    size_bytes: int
    modified_time: datetime

    @property
    def size_mb(self) -> float:
        return self.size_bytes / BYTES_PER_MB
