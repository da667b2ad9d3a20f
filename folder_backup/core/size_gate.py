"""Size ceiling enforcement before any archive is built."""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .models import BackupLimits, MeasuredFolder, BYTES_PER_GB, POLICY_PER_FOLDER, POLICY_TOTAL

TOTAL_LABEL = 'All folders'


@dataclass
class GateViolation:
    """A folder (or the whole set) that exceeds its ceiling."""
    name: str
    size_bytes: int
    limit_gb: float

    @property
    def size_gb(self) -> float:
        return self.size_bytes / BYTES_PER_GB

    def describe(self) -> str:
        return f"{self.name}: {self.size_gb:.2f} GB exceeds the {self.limit_gb:g} GB limit"


@dataclass
class GateDecision:
    """Outcome of the size gate."""
    proceed: bool
    folders: List[MeasuredFolder] = field(default_factory=list)
    violations: List[GateViolation] = field(default_factory=list)
    total_bytes: int = 0


class SizeGate:
    """Decides whether a run may proceed given the configured ceilings."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def evaluate(self, folders: List[MeasuredFolder], limits: BackupLimits) -> GateDecision:
        """Apply the configured size policy to measured folders.

        Args:
            folders: Measured folders in configuration order.
            limits: Size ceilings and the policy selecting which one applies.

        Returns:
            GateDecision. When ``proceed`` is False the run must not archive anything.
        """
        total_bytes = sum(folder.size_bytes for folder in folders)

        if limits.policy == POLICY_TOTAL:
            violations = self._check_total(total_bytes, limits.max_total_size_gb)
        elif limits.policy == POLICY_PER_FOLDER:
            violations = self._check_per_folder(folders, limits.max_folder_size_gb)
        else:
            raise ValueError(f"Unknown size policy: {limits.policy}")

        self.logger.info(f"Total size of {len(folders)} folders: {total_bytes / BYTES_PER_GB:.2f} GB")

        if violations:
            for violation in violations:
                self.logger.error(f"Size limit exceeded - {violation.describe()}")
            return GateDecision(proceed=False, violations=violations, total_bytes=total_bytes)

        return GateDecision(proceed=True, folders=list(folders), total_bytes=total_bytes)

    def _check_per_folder(self, folders: List[MeasuredFolder], limit_gb: Optional[float]) -> List[GateViolation]:
        if limit_gb is None:
            return []

        return [
            GateViolation(name=folder.name, size_bytes=folder.size_bytes, limit_gb=limit_gb)
            for folder in folders
            if folder.size_bytes / BYTES_PER_GB > limit_gb
        ]

    def _check_total(self, total_bytes: int, limit_gb: Optional[float]) -> List[GateViolation]:
        if limit_gb is None or total_bytes / BYTES_PER_GB <= limit_gb:
            return []

        return [GateViolation(name=TOTAL_LABEL, size_bytes=total_bytes, limit_gb=limit_gb)]
